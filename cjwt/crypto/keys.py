"""Key material variants for HMAC and RSA token signing."""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, ConfigDict, SecretBytes, SecretStr, model_validator


def _load_private_pem(pem: str, password: bytes | None) -> rsa.RSAPrivateKey:
    try:
        loaded = serialization.load_pem_private_key(pem.encode(), password=password)
    except TypeError as exc:
        # raised when the password does not fit the PEM's encryption state
        raise ValueError(str(exc)) from exc
    if not isinstance(loaded, rsa.RSAPrivateKey):
        raise ValueError("PEM does not contain an RSA private key")
    return loaded


def _load_public_pem(pem: str) -> rsa.RSAPublicKey:
    loaded = serialization.load_pem_public_key(pem.encode())
    if not isinstance(loaded, rsa.RSAPublicKey):
        raise ValueError("PEM does not contain an RSA public key")
    return loaded


class SymmetricKey(BaseModel):
    """Opaque shared secret for HS256."""

    model_config = ConfigDict(frozen=True)

    secret: SecretBytes

    @classmethod
    def from_secret(cls, secret: str | bytes) -> "SymmetricKey":
        """Wrap a raw secret, UTF-8 encoding text."""
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        return cls(secret=secret)


class RsaPublicKey(BaseModel):
    """PEM-encoded RSA public key for RS256 verification."""

    model_config = ConfigDict(frozen=True)

    pem: str

    @model_validator(mode="after")
    def _check_pem(self) -> "RsaPublicKey":
        _load_public_pem(self.pem)
        return self

    def load(self) -> rsa.RSAPublicKey:
        """Parse the PEM into a cryptography key object."""
        return _load_public_pem(self.pem)


class RsaPrivateKey(BaseModel):
    """PEM-encoded RSA private key (PKCS#1 or PKCS#8) for RS256 signing."""

    model_config = ConfigDict(frozen=True)

    pem: SecretStr
    password: SecretBytes | None = None

    @model_validator(mode="after")
    def _check_pem(self) -> "RsaPrivateKey":
        self.load()
        return self

    @classmethod
    def from_key(cls, key: rsa.RSAPrivateKey) -> "RsaPrivateKey":
        """Serialize an in-memory key as unencrypted PKCS#8 PEM."""
        pem = key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode()
        return cls(pem=pem)

    def load(self) -> rsa.RSAPrivateKey:
        """Parse the PEM into a cryptography key object."""
        password = self.password.get_secret_value() if self.password else None
        return _load_private_pem(self.pem.get_secret_value(), password)

    def public_key(self) -> RsaPublicKey:
        """Derive the matching public key."""
        pem = (
            self.load()
            .public_key()
            .public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            .decode()
        )
        return RsaPublicKey(pem=pem)
