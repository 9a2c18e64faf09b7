"""Unpadded base64url encoding of raw bytes and JSON values."""

import base64
import json
import math
import re
from typing import Any

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")
_SURROGATE = re.compile("[\ud800-\udfff]")


def b64url_encode(raw: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Strictly decode unpadded base64url text.

    Padding, characters outside the url-safe alphabet, impossible lengths and
    non-zero trailing bits all raise ValueError, so every byte string has
    exactly one accepted encoding.
    """
    if not _ALPHABET.fullmatch(text) or len(text) % 4 == 1:
        raise ValueError("Invalid base64url text")
    raw = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    if b64url_encode(raw) != text:
        raise ValueError("Non-canonical base64url text")
    return raw


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite JSON number: {text}")
    return value


def _escape_surrogate(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group()):04x}"


def encode(value: Any) -> str:
    """Serialize a JSON value compactly and base64url-encode it.

    Unpaired surrogates only occur inside JSON strings and are written as
    ``\\uXXXX`` escapes so the output stays valid UTF-8.
    """
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    text = _SURROGATE.sub(_escape_surrogate, text)
    return b64url_encode(text.encode("utf-8"))


def decode(text: str) -> Any | None:
    """Decode base64url JSON text. Returns None if anything is malformed."""
    try:
        raw = b64url_decode(text)
        return json.loads(
            raw.decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_parse_float,
        )
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the interpreter stack
        return None
