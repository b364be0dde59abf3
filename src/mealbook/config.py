"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (in-memory by default, all data is lost on restart)
    database_url: str = "sqlite+aiosqlite://"
    sql_echo: bool = False
    seed_sample_data: bool = True

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = ""  # "json" forces structured logs

    @property
    def origins(self) -> list[str]:
        """Split the comma-separated CORS origins."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
