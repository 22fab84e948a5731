"""Content Type Registry - content types and taxonomies with their labels.

Invariants:
    - Names are unique per registry
    - Lookups return None for unknown names (never raise)
"""

from dataclasses import dataclass

from navmenu.core.domain_types import NAV_MENU_ITEM, NAV_MENU_TAXONOMY


@dataclass(frozen=True)
class ContentType:
    name: str
    singular_label: str
    archive_label: str
    has_archive: bool = False


@dataclass(frozen=True)
class Taxonomy:
    name: str
    singular_label: str


DEFAULT_CONTENT_TYPES = (
    ContentType("post", "Post", "Post Archives", has_archive=True),
    ContentType("page", "Page", "Pages"),
    ContentType(NAV_MENU_ITEM, "Navigation Menu Item", "Navigation Menu Items"),
)

DEFAULT_TAXONOMIES = (
    Taxonomy("category", "Category"),
    Taxonomy("post_tag", "Tag"),
    Taxonomy(NAV_MENU_TAXONOMY, "Navigation Menu"),
)


class StaticContentTypeRegistry:
    """In-process registry seeded with the built-in types."""

    def __init__(
        self,
        content_types: tuple[ContentType, ...] = DEFAULT_CONTENT_TYPES,
        taxonomies: tuple[Taxonomy, ...] = DEFAULT_TAXONOMIES,
    ):
        self._types = {ct.name: ct for ct in content_types}
        self._taxonomies = {tax.name: tax for tax in taxonomies}

    def get_post_type(self, name: str) -> ContentType | None:
        return self._types.get(name)

    def get_taxonomy(self, name: str) -> Taxonomy | None:
        return self._taxonomies.get(name)
