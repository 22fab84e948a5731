"""Resolved Menu Item - the fully materialized view of a stored menu item.

Invariants:
    - Produced only by a SetupResolver; core code never builds one from raw rows
    - Fields keep the loose shapes storage hands back (object_id may be a
      string, classes may be a string): coercion happens in prepare_response
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResolvedMenuItem:
    """A stored menu item with its derived presentation fields filled in."""
    id: int
    db_id: int
    post_title: str = ""
    post_status: str = "publish"
    post_password: str = ""
    post_parent: Any = 0
    menu_order: Any = 0
    menu_item_parent: Any = 0
    object_id: Any = 0
    object: str = ""
    type: str = "custom"
    type_label: str = ""
    url: str = ""
    title: str = ""
    target: str = ""
    attr_title: str = ""
    description: str = ""
    classes: Any = field(default_factory=list)
    xfn: Any = ""
    invalid: bool = False
