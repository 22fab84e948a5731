"""API Dependencies - per-request wiring of the menu items controller.

Invariants:
    - One controller per request, bound to that request's AsyncSession
    - Every collaborator shares the same session: writes and re-fetches see
      each other without an extra round trip
    - The content-type registry and event sink are process-wide
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.config import Settings, get_settings
from navmenu.infrastructure.database import get_db
from navmenu.services.content_types import StaticContentTypeRegistry
from navmenu.services.lifecycle_events import LoggingEventSink
from navmenu.services.menu_item_setup import MenuItemSetup
from navmenu.services.menu_items_controller import MenuItemsController
from navmenu.services.meta_store import SqlMetaStore
from navmenu.services.nav_menu_writer import SqlNavMenuWriter
from navmenu.services.post_store import SqlPostStore
from navmenu.services.term_store import SqlTermStore

content_types = StaticContentTypeRegistry()
event_sink = LoggingEventSink()


def get_controller(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MenuItemsController:
    """FastAPI dependency building the controller for one request."""
    posts = SqlPostStore(db)
    terms = SqlTermStore(db)
    return MenuItemsController(
        posts=posts,
        writer=SqlNavMenuWriter(db),
        setup=MenuItemSetup(db, posts, terms, content_types, settings.site_url),
        meta=SqlMetaStore(db, settings.menu_item_meta_keys),
        terms=terms,
        content_types=content_types,
        events=event_sink,
        settings=settings,
    )
