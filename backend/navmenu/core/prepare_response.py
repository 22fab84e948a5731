"""Storage-to-Response Mapping - resolved menu item onto the wire field set.

Invariants:
    - Only fields in the requested field set are emitted
    - object_id, parent, menu_item_parent, menu_order are non-negative ints
    - classes and xfn are always list[str], whatever storage held
    - title.raw is the unrendered stored title; title.rendered is computed by
      the caller through get_the_title()
    - Action links reuse the self href; they exist only in edit context
"""

from collections.abc import Iterable
from typing import Any

from navmenu.core.domain_types import Context, PostStatus
from navmenu.core.item_schema import parse_list
from navmenu.core.menu_item import ResolvedMenuItem

ACTION_PUBLISH = "https://api.w.org/action-publish"


def absint(value: Any) -> int:
    """Absolute integer value; anything unparseable is 0."""
    try:
        return abs(int(value))
    except (TypeError, ValueError):
        try:
            return abs(int(float(value)))
        except (TypeError, ValueError):
            return 0


def as_string_list(value: Any) -> list[str]:
    """Coerce a stored scalar/delimited string/list into list[str]."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(part) for part in value if part is not None and str(part) != ""]
    if isinstance(value, str):
        return parse_list(value)
    return [str(value)]


def build_menu_item_data(
    item: ResolvedMenuItem,
    fields: Iterable[str],
    *,
    rendered_title: str,
    original_title: str,
) -> dict[str, Any]:
    """Copy the requested fields off a resolved menu item, coercing types."""
    wanted = set(fields)
    values = {
        "id": lambda: item.id,
        "title": lambda: {"raw": item.post_title, "rendered": rendered_title},
        "original_title": lambda: original_title,
        "status": lambda: item.post_status,
        "url": lambda: item.url,
        "attr_title": lambda: item.attr_title,
        "classes": lambda: as_string_list(item.classes),
        "db_id": lambda: absint(item.db_id),
        "description": lambda: item.description,
        "type": lambda: item.type,
        "type_label": lambda: item.type_label,
        "object": lambda: item.object,
        "object_id": lambda: absint(item.object_id),
        "parent": lambda: absint(item.post_parent),
        "menu_item_parent": lambda: absint(item.menu_item_parent),
        "menu_order": lambda: absint(item.menu_order),
        "target": lambda: item.target,
        "xfn": lambda: as_string_list(item.xfn),
        "_invalid": lambda: bool(item.invalid),
    }
    return {name: compute() for name, compute in values.items() if name in wanted}


def build_links(
    self_href: str,
    collection_href: str,
    about_href: str,
    parent_href: str | None = None,
) -> dict[str, list[dict]]:
    """Hypermedia links for a single menu item."""
    links: dict[str, list[dict]] = {
        "self": [{"href": self_href}],
        "collection": [{"href": collection_href}],
        "about": [{"href": about_href}],
    }
    if parent_href:
        links["up"] = [{"href": parent_href, "embeddable": True}]
    return links


def available_actions(status: str, context: Context) -> list[str]:
    """Link relations for the actions a client may take on the item."""
    if context != Context.EDIT:
        return []
    actions = ["edit"]
    if status != PostStatus.PUBLISH.value:
        actions.append(ACTION_PUBLISH)
    return actions
