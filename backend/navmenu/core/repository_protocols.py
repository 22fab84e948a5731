"""Boundary Protocols - contracts between the controller and its collaborators.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/) via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - Async for storage collaborators (they do IO); EventSink.notify and the
      content type registry are plain calls
    - Failures: NavMenuWriter raises StorageFailure, MetadataStore raises
      MetadataUpdateError, lookups return None
"""

from typing import Any, Protocol

from navmenu.core.menu_item import ResolvedMenuItem


class PostLike(Protocol):
    """Structural contract for stored content items (menu items included)."""
    id: int
    post_type: str
    post_title: str
    post_name: str
    post_content: str
    post_excerpt: str
    post_status: str
    post_parent: int
    menu_order: int
    post_password: str


class ContentTypeLike(Protocol):
    """Descriptor of a registered content type."""
    name: str
    singular_label: str
    archive_label: str
    has_archive: bool


class PostStore(Protocol):
    """Generic content-item storage: read by id and query by filter."""
    async def get_by_id(self, item_id: int) -> PostLike | None: ...
    async def query_by_filter(
        self, query_args: dict[str, Any],
    ) -> tuple[list[PostLike], int]: ...


class NavMenuWriter(Protocol):
    """Create-or-update a menu item under a menu container.

    Returns the new or existing id; raises StorageFailure on failure.
    """
    async def create_or_update_under_menu(
        self, menu_id: int, record: dict[str, Any], item_id: int = 0,
    ) -> int: ...


class SetupResolver(Protocol):
    """Expands a stored menu item into its fully resolved form."""
    async def materialize(self, post: PostLike) -> ResolvedMenuItem: ...


class MetadataStore(Protocol):
    """Registered meta values of a menu item."""
    async def update_values(self, meta: dict[str, Any], item_id: int) -> None: ...
    async def get_values(self, item_id: int) -> dict[str, Any]: ...


class TermStore(Protocol):
    """Hierarchical taxonomy term lookups."""
    async def get_raw_field(
        self, field: str, term_id: int, taxonomy: str,
    ) -> Any | None: ...


class ContentTypeRegistry(Protocol):
    """Registered content types, by name."""
    def get_post_type(self, name: str) -> ContentTypeLike | None: ...


class EventSink(Protocol):
    """Fire-and-forget lifecycle notifications."""
    def notify(
        self, event_name: str, item: PostLike, request: Any, creating: bool,
    ) -> None: ...
