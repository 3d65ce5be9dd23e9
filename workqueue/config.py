"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./work_queue.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Board display
    urgent_window_days: int = 3
    currency_symbol: str = "฿"
    display_locale: str = "en"  # en or th

    # Observability
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"
    otel_service_name: str = "work-queue-tracker"
    tracing_enabled: bool = False
    log_level: str = "INFO"
    log_format: str = "json"  # json or console

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
