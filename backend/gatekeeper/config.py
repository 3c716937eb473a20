"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Claim names configurable: token issuers disagree on where the level lives
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Token verification
    token_secret: str = Field(..., min_length=32, description="HMAC key tokens are signed with")
    token_algorithms: list[str] = ["HS256"]
    token_issuer: str | None = None
    token_audience: str | None = None
    token_leeway_seconds: int = 0
    token_issued_at_claim: str = "iat"
    token_level_claim: str = "lvl"

    @field_validator("token_algorithms")
    @classmethod
    def normalize_algorithms(cls, v: list[str]) -> list[str]:
        """JWT algorithm names are upper-case; an empty list would accept nothing."""
        algorithms = [alg.strip().upper() for alg in v if alg.strip()]
        if not algorithms:
            raise ValueError("token_algorithms cannot be empty")
        return algorithms

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
