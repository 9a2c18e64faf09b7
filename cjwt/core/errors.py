"""Exception hierarchy raised by token signing and verification."""


class TokenError(Exception):
    """Base class for every token failure."""

    default_message = "Invalid token"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MalformedTokenError(TokenError):
    """Token is not three segments, or its header cannot be decoded."""

    default_message = "Invalid token: Token malformed"


class UnknownAlgorithmError(TokenError):
    """Algorithm name is absent or not supported."""

    default_message = "Invalid token: Unknown algorithm"


class AlgorithmMismatchError(TokenError):
    """Header algorithm differs from what the caller accepts."""

    default_message = "Invalid token: Algorithm not allowed"


class KeyMismatchError(TokenError):
    """Key variant cannot be used with the requested algorithm."""

    default_message = "Invalid key for algorithm"


class InvalidSignatureError(TokenError):
    """Recomputed signature does not match the token."""

    default_message = "Invalid token: Invalid signature"


class PayloadDecodeError(TokenError):
    """Payload segment could not be decoded after a valid signature."""

    default_message = "Invalid token: Failed to decode payload"
