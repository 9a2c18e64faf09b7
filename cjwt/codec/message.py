"""Signing input construction and compact token splitting."""

from cjwt.core.errors import MalformedTokenError
from cjwt.core.types import TokenSegments

SEGMENT_SEPARATOR = "."
TOKEN_SEGMENT_COUNT = 3


def build_signing_input(header_text: str, payload_text: str) -> str:
    return header_text + SEGMENT_SEPARATOR + payload_text


def assemble_token(signing_input: str, signature_text: str) -> str:
    return signing_input + SEGMENT_SEPARATOR + signature_text


def split_token(token: str) -> TokenSegments:
    """Split a compact token into exactly three non-empty segments."""
    if not isinstance(token, str):
        raise MalformedTokenError("Invalid token: expected a string")
    parts = token.split(SEGMENT_SEPARATOR)
    if len(parts) != TOKEN_SEGMENT_COUNT:
        raise MalformedTokenError(
            f"Invalid token: expected {TOKEN_SEGMENT_COUNT} segments, got {len(parts)}"
        )
    if not all(parts):
        raise MalformedTokenError("Invalid token: empty segment")
    header, payload, signature = parts
    return TokenSegments(header=header, payload=payload, signature=signature)
