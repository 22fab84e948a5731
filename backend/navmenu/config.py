"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - rest_url() is the only place absolute resource URLs are built

Design Decisions:
    - Defaults provided for every setting: the service starts without a .env file
    - menu_item_meta_keys empty by default: the `meta` schema property is only
      declared when at least one key is registered
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://navmenu:navmenu@db:5432/navmenu"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Site
    site_url: str = "http://localhost:8000"

    # REST resource
    api_namespace: str = "api/v1"
    rest_base: str = "menu-items"
    default_per_page: int = 10
    max_per_page: int = 100
    menu_item_meta_keys: list[str] = []

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def rest_url(self, path: str) -> str:
        """Absolute URL for a REST route path like 'api/v1/menu-items/3'."""
        return f"{self.site_url.rstrip('/')}/{path.lstrip('/')}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
