"""Service test fixtures - async DB, seeded content, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for storage
      and route tests (PostgreSQL-specific features are not used)
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

import navmenu.infrastructure.database as db_module
from navmenu.config import Settings, get_settings
from navmenu.db.session import create_schema, create_session_factory, drop_schema
from navmenu.infrastructure.database import DatabaseSessionManager, get_db
from navmenu.main import app
from navmenu.models.post import Post
from navmenu.models.term import Term


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await create_schema(engine)
    yield engine
    await drop_schema(engine)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        site_url="http://localhost:8000",
        menu_item_meta_keys=["_highlight"],
    )


@pytest.fixture
async def client(test_engine, test_session_factory, test_settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_menu(test_db):
    """A menu container (nav_menu term)."""
    menu = Term(taxonomy="nav_menu", name="Main", slug="main")
    test_db.add(menu)
    await test_db.commit()
    await test_db.refresh(menu)
    return menu


@pytest.fixture
async def seed_page(test_db):
    """A published page a menu item can point to."""
    page = Post(post_type="page", post_title="About &amp; Contact", post_name="about")
    test_db.add(page)
    await test_db.commit()
    await test_db.refresh(page)
    return page


@pytest.fixture
async def seed_category(test_db):
    category = Term(taxonomy="category", name="News", slug="news")
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category)
    return category
