"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============ Application Settings ============
    APP_NAME: str = "ShiftManager"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # ============ Server Settings ============
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # ============ CORS Settings ============
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # ============ Database Settings ============
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "shiftmanager"
    POSTGRES_PASSWORD: str = "shiftmanager_password"
    POSTGRES_DB: str = "shiftmanager_db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    @computed_field  # type: ignore[misc]
    @property
    def DATABASE_URL(self) -> PostgresDsn:
        """Construct PostgreSQL async connection URL."""
        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    @property
    def database_url(self) -> str:
        """Get database URL as string for Alembic."""
        return str(self.DATABASE_URL)

    # ============ Listing Settings ============
    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=0,
        description="Page length used when a listing request omits `size`",
    )

    # ============ Query Engine Settings ============
    QUERY_STRICT_FIELDS: bool = Field(
        default=False,
        description="Reject filter/sort criteria naming unknown fields instead of skipping them",
    )
    QUERY_MULTI_KEY_SORT: bool = Field(
        default=False,
        description=(
            "Combine sort criteria into a composite ordering. When disabled only "
            "the last resolvable criterion determines the order"
        ),
    )

    # ============ Logging Settings ============
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
