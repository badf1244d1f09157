"""Runtime settings, loaded from ``STOREFRONT_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Primary store. Multi-document transactions need a replica set.
    MONGO_URI: str = "mongodb://localhost:27017/?replicaSet=rs0"
    MONGO_DATABASE: str = "storefront"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(5000, gt=0)

    # Catalog cache
    REDIS_URI: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = Field(2.0, gt=0)
    CATALOG_CACHE_TTL: int = Field(600, gt=0)  # seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    STRUCTURED_LOGGING: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
