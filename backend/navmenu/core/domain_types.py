"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - ItemId, MenuId, TermId wrap int storage ids; 0 means "none"
    - All valid states encoded as Enums: no raw string matching in core logic
    - NON_INTERNAL_STATUSES is the single source for the `status` enum

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", int)
MenuId = NewType("MenuId", int)
TermId = NewType("TermId", int)


# ─── Constants ───────────────────────────────────────────────────

NAV_MENU_ITEM = "nav_menu_item"
NAV_MENU_TAXONOMY = "nav_menu"


# ─── Enums ───────────────────────────────────────────────────────

class Context(str, Enum):
    """Visibility profile controlling which fields a response includes."""
    VIEW = "view"
    EDIT = "edit"
    EMBED = "embed"


class MenuItemType(str, Enum):
    """What `object` / `object_id` of a menu item reference."""
    CUSTOM = "custom"
    POST_TYPE = "post_type"
    TAXONOMY = "taxonomy"
    POST_TYPE_ARCHIVE = "post_type_archive"


class PostStatus(str, Enum):
    """Lifecycle statuses of the storage engine."""
    PUBLISH = "publish"
    FUTURE = "future"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"
    AUTO_DRAFT = "auto-draft"
    INHERIT = "inherit"


INTERNAL_STATUSES = frozenset({
    PostStatus.TRASH, PostStatus.AUTO_DRAFT, PostStatus.INHERIT,
})

NON_INTERNAL_STATUSES: tuple[str, ...] = tuple(
    s.value for s in PostStatus if s not in INTERNAL_STATUSES
)


class Order(str, Enum):
    """Sort direction for collection queries."""
    ASC = "asc"
    DESC = "desc"
