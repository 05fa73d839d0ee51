"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.batch_max_operations)
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Firestore rejects write batches above 500 operations.
FIRESTORE_BATCH_HARD_LIMIT = 500


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Firestore
    # -------------------------------------------------------------------------
    firestore_project_id: Optional[str] = Field(
        default=None,
        description="GCP project hosting the Firestore database",
    )
    firestore_database: str = Field(
        default="(default)",
        description="Firestore database id",
    )
    firestore_emulator_host: Optional[str] = Field(
        default=None,
        description="host:port of a Firestore emulator (local development)",
    )

    # -------------------------------------------------------------------------
    # Engine tuning
    # -------------------------------------------------------------------------
    batch_max_operations: int = Field(
        default=450,
        description="Operations per write batch; headroom under the 500 limit",
    )
    read_max_workers: int = Field(
        default=8,
        ge=1,
        description="Concurrent sibling collection reads during traversal",
    )
    commit_max_workers: int = Field(
        default=4,
        ge=1,
        description="Batch commits allowed in flight at once",
    )

    # -------------------------------------------------------------------------
    # Duplication behaviour
    # -------------------------------------------------------------------------
    strength_weight_policy: Literal["reset", "keep"] = Field(
        default="reset",
        description="Whether duplicated strength sets keep their weight",
    )
    copy_naming: Literal["suffix", "numbered"] = Field(
        default="suffix",
        description='Root copy name: "X (Copy)" or "X Copy N"',
    )
    root_ordering: Literal["append", "preserve"] = Field(
        default="append",
        description="Place the copied root after its siblings or keep the source position",
    )
    duplication_audit_enabled: bool = Field(
        default=True,
        description="Write a duplicationLogs entry after each successful duplication",
    )

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    jwt_secret: str = Field(
        default="fittrack-hierarchy-jwt-secret-change-in-production",
        description="Secret key for HS256 bearer tokens",
    )
    jwt_audience: Optional[str] = Field(
        default=None,
        description="Expected aud claim; not checked when unset",
    )
    api_keys: str = Field(
        default="",
        description="Comma-separated list of valid API keys",
    )

    @property
    def api_keys_list(self) -> list[str]:
        """Parse API keys into a list."""
        return [k.strip() for k in self.api_keys.split(",") if k.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("batch_max_operations")
    @classmethod
    def validate_batch_max_operations(cls, v: int) -> int:
        """Batches must hold at least one operation and fit Firestore's limit."""
        if not 1 <= v <= FIRESTORE_BATCH_HARD_LIMIT:
            raise ValueError(
                f"batch_max_operations must be between 1 and {FIRESTORE_BATCH_HARD_LIMIT}, got {v}"
            )
        return v

    @field_validator("strength_weight_policy", "copy_naming", "root_ordering", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"

    @property
    def firestore_configured(self) -> bool:
        """A project id or an emulator is enough to build a client."""
        return bool(self.firestore_project_id or self.firestore_emulator_host)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
