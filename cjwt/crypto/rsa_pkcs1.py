"""RS256: RSASSA-PKCS1-v1_5 with SHA-256, built from raw RSA transforms.

The signature block is assembled by hand (EMSA-PKCS1-v1_5): a SHA-256
DigestInfo, left-padded with ``00 01 FF .. FF 00`` to the modulus length,
then raised to the private exponent. Verification runs the public
exponent over the signature, strips the padding and compares the
recovered DigestInfo byte for byte.
"""

import hashlib
import hmac

from cryptography.hazmat.primitives.asymmetric import rsa

from cjwt.codec.base64url import b64url_decode, b64url_encode

# DER: SEQUENCE { SEQUENCE { OID sha256, NULL }, OCTET STRING (32 bytes) }
SHA256_DIGEST_INFO_PREFIX = bytes.fromhex("3031300d060960864801650304020105000420")
SHA256_DIGEST_LENGTH = 32
MIN_PADDING_LENGTH = 8
_BLOCK_OVERHEAD = 3


def digest_info(message: bytes) -> bytes:
    """DER DigestInfo carrying SHA-256(message)."""
    return SHA256_DIGEST_INFO_PREFIX + hashlib.sha256(message).digest()


def modulus_length(key: rsa.RSAPrivateKey | rsa.RSAPublicKey) -> int:
    """Modulus size in bytes."""
    return (key.key_size + 7) // 8


def pad_digest_info(info: bytes, length: int) -> bytes:
    """Build the ``00 01 FF.. 00 || info`` block of the given length."""
    padding_length = length - len(info) - _BLOCK_OVERHEAD
    if padding_length < MIN_PADDING_LENGTH:
        raise ValueError("RSA modulus too short for a SHA-256 DigestInfo")
    return b"\x00\x01" + b"\xff" * padding_length + b"\x00" + info


def unpad_digest_info(block: bytes) -> bytes | None:
    """Strip type-1 padding. Returns None if the block is not well formed."""
    if block[:2] != b"\x00\x01":
        return None
    separator = block.find(b"\x00", 2)
    if separator < 2 + MIN_PADDING_LENGTH:
        return None
    if any(byte != 0xFF for byte in block[2:separator]):
        return None
    return block[separator + 1 :]


def private_transform(key: rsa.RSAPrivateKey, block: bytes) -> bytes:
    """Raw RSA private-key operation, computed with the CRT parameters."""
    numbers = key.private_numbers()
    length = modulus_length(key)
    m = int.from_bytes(block, "big")
    if len(block) != length or m >= numbers.public_numbers.n:
        raise ValueError("Block out of range for RSA modulus")
    m1 = pow(m, numbers.dmp1, numbers.p)
    m2 = pow(m, numbers.dmq1, numbers.q)
    h = numbers.iqmp * (m1 - m2) % numbers.p
    return (m2 + h * numbers.q).to_bytes(length, "big")


def public_transform(key: rsa.RSAPublicKey, signature: bytes) -> bytes | None:
    """Raw RSA public-key operation. None if the signature is out of range."""
    numbers = key.public_numbers()
    length = modulus_length(key)
    if len(signature) != length:
        return None
    s = int.from_bytes(signature, "big")
    if s >= numbers.n:
        return None
    return pow(s, numbers.e, numbers.n).to_bytes(length, "big")


def sign(message: bytes, private_key: rsa.RSAPrivateKey) -> str:
    """Return the base64url RS256 signature of message."""
    block = pad_digest_info(digest_info(message), modulus_length(private_key))
    return b64url_encode(private_transform(private_key, block))


def verify(message: bytes, public_key: rsa.RSAPublicKey, signature_text: str) -> bool:
    """Check an RS256 signature against message."""
    try:
        signature = b64url_decode(signature_text)
    except ValueError:
        return False
    block = public_transform(public_key, signature)
    if block is None:
        return False
    recovered = unpad_digest_info(block)
    if recovered is None:
        return False
    return hmac.compare_digest(recovered, digest_info(message))
