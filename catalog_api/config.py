"""Settings — everything the catalog reads from the environment.

Invariants:
    - One Settings instance per process (get_settings is lru_cached)
    - database_url always names an async driver (postgresql:// is rewritten to asyncpg)
    - jwt_algorithms never contains "none"; HS* algorithms need a secret of 32+ chars
    - role_permissions defaults to core/permissions.py and is overridable as JSON

Design Decisions:
    - pydantic-settings: env vars and .env share one typed, validated model
    - Authorization data lives here, not in code: granting a role is an env change
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_api.core.permissions import DEFAULT_ROLE_PERMISSIONS

MIN_HMAC_SECRET_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    database_url: str = "postgresql+asyncpg://catalog:catalog@db:5432/catalog"
    database_pool_size: int = Field(20, ge=1)
    database_max_overflow: int = Field(10, ge=0)

    # Bearer credentials
    jwt_secret: str = "change-me-in-production-change-me-now"
    jwt_algorithms: list[str] = ["HS256"]
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    jwt_leeway_seconds: int = Field(30, ge=0, le=300)
    jwt_role_claim: str = "role"

    # Role -> permission strings
    role_permissions: dict[str, list[str]] = Field(
        default_factory=lambda: {r: list(p) for r, p in DEFAULT_ROLE_PERMISSIONS.items()},
    )

    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v.removeprefix("postgresql://")
        return v

    @field_validator("jwt_algorithms")
    @classmethod
    def reject_none_algorithm(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one JWT algorithm is required")
        if any(alg.lower() == "none" for alg in v):
            raise ValueError("the 'none' JWT algorithm is not accepted")
        return v

    @model_validator(mode="after")
    def hmac_secret_long_enough(self) -> "Settings":
        uses_hmac = any(alg.upper().startswith("HS") for alg in self.jwt_algorithms)
        if uses_hmac and len(self.jwt_secret) < MIN_HMAC_SECRET_LENGTH:
            raise ValueError(
                f"jwt_secret must be at least {MIN_HMAC_SECRET_LENGTH} characters for HS* algorithms",
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
