"""
Name: DocShare Settings

Responsibilities:
  - Typed configuration read from environment / .env (pydantic-settings)
  - Guardrails: positive limits, pool bounds, strong JWT secret in production
  - Environment predicates (is_test / is_production) used by the container
    and the app lifespan

Collaborators:
  - container.py: in-memory vs Postgres wiring
  - api/main.py: pool sizing, CORS
  - identity/auth_users.py: JWT secret and cookie name
  - application use cases (via container): name/description limits, lookup workers
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TEST_ENVS = frozenset({"test", "testing", "ci"})
_WEAK_SECRETS = frozenset({"dev-secret", "changeme", "change-me", "password", "secret"})
_MIN_PROD_SECRET_LEN = 32
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- runtime ---
    app_env: str = "development"
    database_url: str
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # --- logging ---
    log_level: str = "INFO"
    log_json: bool = True

    # --- auth (solo verificación; los tokens los emite otro servicio) ---
    jwt_secret: str = "dev-secret"
    jwt_cookie_name: str = "access_token"

    # --- postgres ---
    db_pool_min_size: int = Field(default=2, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)
    db_statement_timeout_ms: int = Field(default=30_000, ge=0)

    # --- documents / roles ---
    role_lookup_max_workers: int = Field(default=8, gt=0)
    max_name_chars: int = Field(default=200, gt=0, le=255)
    max_description_chars: int = Field(default=2_000, gt=0)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = (value or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def _check_production_secret(self) -> "Settings":
        if self.is_production():
            secret = (self.jwt_secret or "").strip()
            if secret in _WEAK_SECRETS or len(secret) < _MIN_PROD_SECRET_LEN:
                raise ValueError(
                    f"JWT_SECRET must be a non-default value of at least "
                    f"{_MIN_PROD_SECRET_LEN} characters in production"
                )
        return self

    def validate_pool_params(self) -> None:
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )

    def get_allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def _env(self) -> str:
        return self.app_env.strip().lower()

    def is_production(self) -> bool:
        return self._env() == "production"

    def is_test(self) -> bool:
        return self._env() in TEST_ENVS


@lru_cache
def get_settings() -> Settings:
    """Settings del proceso (cacheadas). Falla si faltan variables requeridas."""
    settings = Settings()
    settings.validate_pool_params()
    return settings
