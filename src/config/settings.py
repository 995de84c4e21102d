"""Application configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "eazyfind-search"
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # PostgreSQL / PostGIS
    database_url: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_db: str = "eazyfind"

    # Connection pool (small and fixed, idle connections dropped quickly)
    postgres_pool_min_size: int = 0
    postgres_pool_max_size: int = 10
    postgres_pool_max_inactive_lifetime: float = 1.0

    # Pool metrics sampling
    db_metrics_interval_seconds: float = 30.0

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3003
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5174",
    ]

    @property
    def postgres_dsn(self) -> str:
        """PostgreSQL connection string."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
