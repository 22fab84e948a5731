"""Original Title - the referenced object's own title, composed per menu item type.

Invariants:
    - compose_original_title is PURE and total: the shell performs the lookups
      and hands in whatever it found (None when nothing was found)
    - object_id == 0 yields "" for every type
    - post_type with an empty rendered title yields "#<id> (no title)"
    - Result is always HTML-entity decoded

Design Decisions:
    - Lookups split from composition: the controller awaits the storage
      collaborators, this module only decides what the title is
"""

import html
from dataclasses import dataclass

from navmenu.core.domain_types import MenuItemType
from navmenu.core.render_title import NO_TITLE_FORMAT, the_title


@dataclass(frozen=True)
class ReferencedPost:
    """The bits of a referenced content item the original title needs."""
    id: int
    title: str


def needs_lookup(item_type: str, object_id: int) -> bool:
    """Whether resolving the original title requires a collaborator lookup."""
    if item_type in (MenuItemType.POST_TYPE.value, MenuItemType.TAXONOMY.value):
        return object_id != 0
    return item_type == MenuItemType.POST_TYPE_ARCHIVE.value


def compose_original_title(
    item_type: str,
    object_id: int,
    *,
    post: ReferencedPost | None = None,
    term_name: str | None = None,
    archive_label: str | None = None,
) -> str:
    """Decide the original title from the looked-up referenced object."""
    title = ""
    if item_type == MenuItemType.POST_TYPE.value and object_id:
        if post is not None:
            title = the_title(post.title)
            if title == "":
                title = NO_TITLE_FORMAT % post.id
    elif item_type == MenuItemType.TAXONOMY.value and object_id:
        if term_name is not None:
            title = term_name
    elif item_type == MenuItemType.POST_TYPE_ARCHIVE.value:
        if archive_label is not None:
            title = archive_label
    return html.unescape(title)
