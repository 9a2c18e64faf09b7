"""Type definitions for token headers, algorithms, and decoded tokens."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

TOKEN_TYPE = "JWT"


class Algorithm(StrEnum):
    """Supported signature algorithms."""

    HS256 = "HS256"
    RS256 = "RS256"

    @classmethod
    def parse(cls, value: object) -> "Algorithm | None":
        """Case-insensitive lookup. Returns None for anything unsupported."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


class TokenHeader(BaseModel):
    """JOSE header written into every token."""

    model_config = ConfigDict(frozen=True)

    typ: str = TOKEN_TYPE
    alg: Algorithm


class TokenSegments(BaseModel):
    """The three encoded segments of a compact token."""

    model_config = ConfigDict(frozen=True)

    header: str
    payload: str
    signature: str

    @property
    def signing_input(self) -> str:
        """Verbatim header and payload segments joined by a dot."""
        return f"{self.header}.{self.payload}"


class UnverifiedToken(BaseModel):
    """Header and payload decoded without checking the signature."""

    header: dict[str, Any]
    payload: Any = None
