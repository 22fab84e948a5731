"""Settings - verifies URL normalization and REST URL building."""

from navmenu.config import Settings


def test_postgres_url_uses_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_rest_url_joins_without_double_slash():
    settings = Settings(site_url="https://example.org/")
    assert settings.rest_url("/api/v1/menu-items/3") == (
        "https://example.org/api/v1/menu-items/3"
    )


def test_meta_keys_default_to_none_registered():
    assert Settings().menu_item_meta_keys == []
