"""
Application settings loaded from environment variables.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from core.errors import ConfigError


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(..., min_length=1)   # e.g. postgresql+asyncpg://user:pw@host/db
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: float = 30.0

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = Field(..., min_length=1)     # HMAC secret for bearer tokens
    jwt_expiry_seconds: int = 86400                 # 24 hours
    bcrypt_rounds: int = Field(12, ge=4, le=31)

    # "credentials": username + password + email, token-bound task access.
    # "anonymous":   name-only users, task routes addressed by path alone.
    auth_profile: Literal["credentials", "anonymous"] = "credentials"

    # ── Server ───────────────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def requires_credentials(self) -> bool:
        return self.auth_profile == "credentials"


def load_settings(**overrides) -> Settings:
    """
    Build the process-wide ``Settings`` once at startup.

    A missing ``DATABASE_URL`` or ``JWT_SECRET`` raises ``ConfigError``.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = ", ".join(
            ".".join(str(part) for part in err["loc"]) for err in exc.errors()
        )
        raise ConfigError(f"Invalid or missing configuration: {missing}") from exc
