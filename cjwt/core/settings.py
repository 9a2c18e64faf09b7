"""Engine settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from cjwt.core.errors import UnknownAlgorithmError
from cjwt.core.types import Algorithm

DEFAULT_ALGORITHM = Algorithm.HS256.value
ALLOWED_ALGORITHMS_DEFAULT = "HS256,RS256"


class EngineSettings(BaseSettings):
    """Algorithm policy for a configured token engine."""

    model_config = SettingsConfigDict(env_prefix="CJWT_", frozen=True)

    default_algorithm: str = DEFAULT_ALGORITHM
    allowed_algorithms: str = ALLOWED_ALGORITHMS_DEFAULT

    def get_default_algorithm(self) -> Algorithm:
        """Resolve the configured default algorithm."""
        alg = Algorithm.parse(self.default_algorithm)
        if alg is None:
            raise UnknownAlgorithmError(
                f"Unsupported default algorithm: {self.default_algorithm!r}"
            )
        return alg

    def get_allowed_algorithm_list(self) -> list[Algorithm]:
        """Parse comma-separated allowed algorithms."""
        allowed: list[Algorithm] = []
        for name in self.allowed_algorithms.split(","):
            if not name.strip():
                continue
            alg = Algorithm.parse(name.strip())
            if alg is None:
                raise UnknownAlgorithmError(f"Unsupported algorithm: {name.strip()!r}")
            if alg not in allowed:
                allowed.append(alg)
        return allowed
