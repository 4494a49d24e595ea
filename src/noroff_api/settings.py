"""
noroff_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NOROFF_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "noroff-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "noroff-api"
    jwt_audience: str = "noroff-api-clients"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = 24 * 60
    bcrypt_rounds: int = 12
    api_key_header: str = "X-Noroff-API-Key"
    allowed_email_domains: list[str] = Field(default_factory=lambda: ["stud.noroff.no"])

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./noroff.db"

    # Media validation (outbound probe of user-supplied image URLs)
    media_timeout_seconds: float = 5.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `allowed_email_domains` is parsed from JSON when set via env, e.g.
# NOROFF_ALLOWED_EMAIL_DOMAINS='["stud.noroff.no", "noroff.no"]'.
