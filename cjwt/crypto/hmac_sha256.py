"""HS256: HMAC-SHA256 over the signing input."""

import hashlib
import hmac

from cjwt.codec.base64url import b64url_encode


def sign(message: bytes, secret: bytes) -> str:
    """Return the base64url HMAC-SHA256 of message."""
    return b64url_encode(hmac.new(secret, message, hashlib.sha256).digest())


def verify(message: bytes, secret: bytes, signature_text: str) -> bool:
    """Recompute the MAC and compare in constant time."""
    expected = sign(message, secret).encode("ascii")
    actual = signature_text.encode("utf-8", "surrogatepass")
    return hmac.compare_digest(expected, actual)
