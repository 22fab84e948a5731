"""ORM Models - SQLAlchemy declarative models for the storage engine.

Invariants:
    - All models inherit from Base (db/base.py)
    - Post is the generic content item; menu items are posts of type nav_menu_item

Design Decisions:
    - One file per table
    - All models imported here so Base.metadata is complete for create_all
      and Alembic autogenerate
"""

from navmenu.models.post import Post  # noqa: F401
from navmenu.models.post_meta import PostMeta  # noqa: F401
from navmenu.models.term import Term  # noqa: F401
from navmenu.models.term_relationship import TermRelationship  # noqa: F401
