"""Request-to-Storage Mapping - flat wire fields onto the generic storage record.

Invariants:
    - DEFAULT_STORAGE_RECORD is immutable; every call starts from a fresh copy
    - A storage field is overwritten only when the schema declares its wire
      field AND the request carries it; otherwise the default stays
    - menu_item_parent wins over parent; parent only fills the slot when
      menu_item_parent is absent
    - Pure: no IO, never mutates the payload
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from navmenu.core.domain_types import MenuItemType, PostStatus
from navmenu.core.item_schema import ItemSchema, validate_request

DEFAULT_STORAGE_RECORD: Mapping[str, Any] = MappingProxyType({
    "menu-item-db-id": 0,
    "menu-item-object-id": 0,
    "menu-item-object": "",
    "menu-item-parent-id": 0,
    "menu-item-position": 0,
    "menu-item-type": MenuItemType.CUSTOM.value,
    "menu-item-title": "",
    "menu-item-url": "",
    "menu-item-description": "",
    "menu-item-attr-title": "",
    "menu-item-target": "",
    "menu-item-classes": "",
    "menu-item-xfn": "",
    "menu-item-status": PostStatus.PUBLISH.value,
})

# storage name -> wire name
WIRE_TO_STORAGE: Mapping[str, str] = MappingProxyType({
    "menu-item-db-id": "db_id",
    "menu-item-object-id": "object_id",
    "menu-item-object": "object",
    "menu-item-parent-id": "menu_item_parent",
    "menu-item-position": "menu_order",
    "menu-item-type": "type",
    "menu-item-title": "title",
    "menu-item-url": "url",
    "menu-item-description": "description",
    "menu-item-attr-title": "attr_title",
    "menu-item-target": "target",
    "menu-item-classes": "classes",
    "menu-item-xfn": "xfn",
    "menu-item-status": "status",
})


def prepare_item_for_database(
    payload: Mapping[str, Any], schema: ItemSchema,
) -> dict[str, Any]:
    """Build the storage-shaped record for a create/update request.

    Raises FieldValidationError when a declared field has the wrong shape.
    """
    fields = validate_request(payload, schema)
    if "menu_item_parent" not in fields and "parent" in fields:
        fields["menu_item_parent"] = fields["parent"]

    record = dict(DEFAULT_STORAGE_RECORD)
    for storage_name, wire_name in WIRE_TO_STORAGE.items():
        if wire_name in schema and wire_name in fields:
            record[storage_name] = fields[wire_name]
    return record


def extract_menu_id(payload: Mapping[str, Any], schema: ItemSchema) -> int:
    """The menu container id carried by a write request (0 when absent)."""
    value = payload.get("menu_id")
    if value is None or value == "" or "menu_id" not in schema:
        return 0
    return validate_request({"menu_id": value}, schema)["menu_id"]
