"""Compact JWT signing and verification for HS256 and RS256."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from cjwt.codec import base64url
from cjwt.codec.message import assemble_token, build_signing_input, split_token
from cjwt.core.errors import (
    AlgorithmMismatchError,
    InvalidSignatureError,
    KeyMismatchError,
    MalformedTokenError,
    PayloadDecodeError,
    UnknownAlgorithmError,
)
from cjwt.core.settings import EngineSettings
from cjwt.core.types import Algorithm, TokenHeader, UnverifiedToken
from cjwt.crypto import hmac_sha256, rsa_pkcs1
from cjwt.crypto.keys import RsaPrivateKey, RsaPublicKey, SymmetricKey

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

SigningKey = SymmetricKey | RsaPrivateKey | str | bytes
VerifyingKey = SymmetricKey | RsaPublicKey | str | bytes
Payload = Mapping[str, Any] | BaseModel


def _resolve_algorithm(value: str) -> Algorithm:
    alg = Algorithm.parse(value)
    if alg is None:
        raise UnknownAlgorithmError(f"Unsupported algorithm: {value!r}")
    return alg


def _symmetric_key(key: object) -> SymmetricKey:
    if isinstance(key, SymmetricKey):
        return key
    if isinstance(key, (str, bytes)):
        return SymmetricKey.from_secret(key)
    raise KeyMismatchError(
        f"{Algorithm.HS256} requires a symmetric secret, got {type(key).__name__}"
    )


def _rsa_mismatch(key: object, expected: type) -> KeyMismatchError:
    return KeyMismatchError(
        f"{Algorithm.RS256} requires {expected.__name__}, got {type(key).__name__}"
    )


def _message_bytes(signing_input: str) -> bytes:
    return signing_input.encode("utf-8", "surrogatepass")


def _payload_value(payload: Payload) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    if isinstance(payload, Mapping):
        return dict(payload)
    raise TypeError(f"Payload must be a mapping, got {type(payload).__name__}")


def _decode_header(header_text: str) -> dict[str, Any]:
    header = base64url.decode(header_text)
    if not isinstance(header, dict):
        raise MalformedTokenError("Invalid token: Header malformed")
    return header


def sign(key: SigningKey, payload: Payload, algorithm: str = Algorithm.HS256) -> str:
    """Create a compact token over payload.

    HS256 takes a SymmetricKey or a raw str/bytes secret; RS256 takes an
    RsaPrivateKey. Any other pairing raises KeyMismatchError.
    """
    alg = _resolve_algorithm(algorithm)
    header = TokenHeader(alg=alg)
    signing_input = build_signing_input(
        base64url.encode(header.model_dump(mode="json")),
        base64url.encode(_payload_value(payload)),
    )
    message = _message_bytes(signing_input)
    if alg is Algorithm.HS256:
        secret = _symmetric_key(key).secret.get_secret_value()
        signature = hmac_sha256.sign(message, secret)
    elif isinstance(key, RsaPrivateKey):
        signature = rsa_pkcs1.sign(message, key.load())
    else:
        raise _rsa_mismatch(key, RsaPrivateKey)
    return assemble_token(signing_input, signature)


def _verify(
    key: VerifyingKey, token: str, allowed: Sequence[Algorithm] | None
) -> dict[str, Any]:
    segments = split_token(token)
    header = _decode_header(segments.header)
    alg = Algorithm.parse(header.get("alg"))
    if alg is None:
        logger.debug("Rejected token: unsupported alg header")
        raise UnknownAlgorithmError(
            f"Invalid token: Unknown algorithm {header.get('alg')!r}"
        )
    if allowed is not None and alg not in allowed:
        logger.debug("Rejected token: %s not in allowed algorithms", alg)
        raise AlgorithmMismatchError(f"Invalid token: Algorithm {alg} not allowed")

    message = _message_bytes(segments.signing_input)
    if alg is Algorithm.HS256:
        secret = _symmetric_key(key).secret.get_secret_value()
        valid = hmac_sha256.verify(message, secret, segments.signature)
    elif isinstance(key, RsaPublicKey):
        valid = rsa_pkcs1.verify(message, key.load(), segments.signature)
    else:
        raise _rsa_mismatch(key, RsaPublicKey)
    if not valid:
        logger.debug("Rejected token: %s signature mismatch", alg)
        raise InvalidSignatureError()

    payload = base64url.decode(segments.payload)
    if not isinstance(payload, dict):
        logger.debug("Rejected token: payload is not a JSON object")
        raise PayloadDecodeError()
    return payload


def verify(
    key: VerifyingKey, token: str, algorithm: str | None = None
) -> dict[str, Any]:
    """Verify a compact token and return its payload.

    The header's ``alg`` selects the verifier. Pass ``algorithm`` to pin the
    expected algorithm; a header naming any other raises
    AlgorithmMismatchError before the key is touched.
    """
    allowed = None if algorithm is None else [_resolve_algorithm(algorithm)]
    return _verify(key, token, allowed)


def get_unverified_header(token: str) -> dict[str, Any]:
    """Decode the header segment without checking the signature."""
    return _decode_header(split_token(token).header)


def decode_unverified(token: str) -> UnverifiedToken:
    """Decode header and payload without checking the signature.

    Never use the result for access decisions.
    """
    segments = split_token(token)
    return UnverifiedToken(
        header=_decode_header(segments.header),
        payload=base64url.decode(segments.payload),
    )


class JWTEngine:
    """Signs and verifies tokens under a fixed algorithm policy."""

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings or EngineSettings()
        self._default_algorithm = self._settings.get_default_algorithm()
        self._allowed = self._settings.get_allowed_algorithm_list()

    @property
    def allowed_algorithms(self) -> list[Algorithm]:
        return list(self._allowed)

    def _check_allowed(self, algorithm: str) -> Algorithm:
        alg = _resolve_algorithm(algorithm)
        if alg not in self._allowed:
            raise AlgorithmMismatchError(f"Algorithm {alg} not allowed")
        return alg

    def sign(
        self, key: SigningKey, payload: Payload, algorithm: str | None = None
    ) -> str:
        """Sign with the given or the configured default algorithm."""
        alg = self._check_allowed(algorithm or self._default_algorithm)
        return sign(key, payload, alg)

    def verify(
        self, key: VerifyingKey, token: str, algorithm: str | None = None
    ) -> dict[str, Any]:
        """Verify, accepting only the allowed (or the one given) algorithm."""
        if algorithm is None:
            return _verify(key, token, self._allowed)
        return _verify(key, token, [self._check_allowed(algorithm)])
