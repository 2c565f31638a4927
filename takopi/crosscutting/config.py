"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Expose the storage mode flag consumed by the composition root

Collaborators:
  - container.py: reads storage_mode / storage_path / database_url
  - api/main.py: reads settings for CORS, pool sizing and startup validation
  - identity/auth.py: reads jwt_secret

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic — pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
  - STORAGE_MODE=local selects the file store; anything else is PostgreSQL
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_STORAGE_MODE = "local"

_TEST_ENVS = {"test", "testing", "ci"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        storage_mode: "local" (file store) or anything else (PostgreSQL)
        storage_path: Root directory of the file store (default: ./storage)
        database_url: PostgreSQL connection string (required in remote mode)
        db_pool_min_size: Minimum pooled connections (default: 2)
        db_pool_max_size: Maximum pooled connections (default: 10)
        db_statement_timeout_ms: statement_timeout per connection (default: 30s)
        db_slow_query_seconds: Threshold for slow query warnings (default: 0.25)
        jwt_secret: Secret used to verify JWT access tokens
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level (default: INFO)
        log_json: Emit JSON logs (default: True)
        collection_title_max_chars: Max collection title length (default: 50)
        collection_description_max_chars: Max description length (default: 200)
    """

    # Environment
    app_env: str = "development"

    # Storage backend selection
    storage_mode: str = "remote"
    storage_path: str = "storage"

    # Database - Connection Pool
    database_url: str = ""
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds
    db_slow_query_seconds: float = 0.25

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Collections limits
    collection_title_max_chars: int = 50
    collection_description_max_chars: int = 200

    @field_validator("storage_mode")
    @classmethod
    def normalize_storage_mode(cls, v: str) -> str:
        return (v or "").strip().lower()

    @field_validator("db_pool_min_size", "db_pool_max_size")
    @classmethod
    def pool_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("db pool sizes must be greater than 0")
        return v

    @field_validator("collection_title_max_chars", "collection_description_max_chars")
    @classmethod
    def limits_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("collection limits must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_database_requirements(self):
        if self.is_local_storage():
            return self
        if not self.database_url.strip():
            raise ValueError(
                "DATABASE_URL is required unless STORAGE_MODE=local"
            )
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in _TEST_ENVS

    def is_local_storage(self) -> bool:
        return self.storage_mode == LOCAL_STORAGE_MODE

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
