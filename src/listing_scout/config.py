"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "listing-scout"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Frontend
    frontend_url: str = "http://localhost:5173"

    # API
    api_prefix: str = "/api"

    # Marketplace
    marketplace_base_url: str = "https://www.amazon.in"

    # Bestseller fetching
    fetch_timeout_seconds: float = 30.0
    fetch_max_concurrency: int = 2
    fetch_request_delay_seconds: float = 1.5
    max_listings_per_page: int = 50
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
