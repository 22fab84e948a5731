"""Root conftest - shared test configuration."""

import os

# Settings are cached per process: pin them before navmenu is imported
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SITE_URL", "http://localhost:8000")
os.environ.setdefault("LOG_FORMAT", "text")
