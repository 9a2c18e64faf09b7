"""Shared test fixtures for cjwt."""

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from cjwt.codec.base64url import b64url_decode, b64url_encode
from cjwt.crypto.keys import RsaPrivateKey, RsaPublicKey

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host CJWT_* variables out of settings under test."""
    monkeypatch.delenv("CJWT_DEFAULT_ALGORITHM", raising=False)
    monkeypatch.delenv("CJWT_ALLOWED_ALGORITHMS", raising=False)


def _generate_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )


@pytest.fixture(scope="session")
def raw_private_key() -> rsa.RSAPrivateKey:
    """A cryptography RSA-2048 key shared across the session."""
    return _generate_key()


@pytest.fixture(scope="session")
def private_key(raw_private_key: rsa.RSAPrivateKey) -> RsaPrivateKey:
    return RsaPrivateKey.from_key(raw_private_key)


@pytest.fixture(scope="session")
def public_key(private_key: RsaPrivateKey) -> RsaPublicKey:
    return private_key.public_key()


@pytest.fixture(scope="session")
def other_private_key() -> RsaPrivateKey:
    """An unrelated RSA keypair for cross-key checks."""
    return RsaPrivateKey.from_key(_generate_key())


def _flip_signature_bit(token: str, bit: int) -> str:
    header, payload, signature = token.split(".")
    raw = bytearray(b64url_decode(signature))
    raw[bit // 8] ^= 1 << (bit % 8)
    return f"{header}.{payload}.{b64url_encode(bytes(raw))}"


@pytest.fixture
def flip_signature_bit():
    """Flip one bit of a token's decoded signature and re-encode it."""
    return _flip_signature_bit
