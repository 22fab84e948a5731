"""Prepare Storage - verifies the wire-to-storage record mapping.

Tests:
    - Absent fields keep their defaults; the defaults table is never mutated
    - menu_item_parent wins over parent, parent fills in when it is absent
    - Invalid fields raise before any record is built
    - extract_menu_id reads the container id
"""

import pytest

from navmenu.core.errors import FieldValidationError
from navmenu.core.item_schema import build_item_schema
from navmenu.core.prepare_storage import (
    DEFAULT_STORAGE_RECORD, WIRE_TO_STORAGE, extract_menu_id,
    prepare_item_for_database,
)


@pytest.fixture
def schema():
    return build_item_schema()


def test_empty_payload_yields_defaults(schema):
    record = prepare_item_for_database({}, schema)
    assert record == dict(DEFAULT_STORAGE_RECORD)
    assert record["menu-item-type"] == "custom"
    assert record["menu-item-status"] == "publish"
    assert record["menu-item-position"] == 0


def test_defaults_table_is_immutable():
    with pytest.raises(TypeError):
        DEFAULT_STORAGE_RECORD["menu-item-title"] = "x"


def test_returned_record_is_a_fresh_copy(schema):
    record = prepare_item_for_database({"title": "Home"}, schema)
    record["menu-item-url"] = "changed"
    assert DEFAULT_STORAGE_RECORD["menu-item-url"] == ""


def test_every_storage_key_has_a_wire_field():
    assert set(WIRE_TO_STORAGE) == set(DEFAULT_STORAGE_RECORD)


def test_custom_link_maps_flat_fields(schema):
    record = prepare_item_for_database(
        {
            "title": "Home", "type": "custom", "url": "https://example.com",
            "menu_order": 2, "classes": ["a", "b"], "xfn": "friend",
            "attr_title": "Go home", "description": "Landing", "target": "_blank",
        },
        schema,
    )
    assert record["menu-item-title"] == "Home"
    assert record["menu-item-url"] == "https://example.com"
    assert record["menu-item-position"] == 2
    assert record["menu-item-classes"] == ["a", "b"]
    assert record["menu-item-xfn"] == ["friend"]
    assert record["menu-item-attr-title"] == "Go home"
    assert record["menu-item-description"] == "Landing"
    assert record["menu-item-target"] == "_blank"


def test_title_object_form_uses_raw(schema):
    record = prepare_item_for_database({"title": {"raw": "About"}}, schema)
    assert record["menu-item-title"] == "About"


def test_parent_fills_menu_item_parent(schema):
    record = prepare_item_for_database({"parent": 5}, schema)
    assert record["menu-item-parent-id"] == 5


def test_menu_item_parent_wins_over_parent(schema):
    record = prepare_item_for_database({"parent": 5, "menu_item_parent": 8}, schema)
    assert record["menu-item-parent-id"] == 8


def test_payload_is_not_mutated(schema):
    payload = {"parent": 5}
    prepare_item_for_database(payload, schema)
    assert payload == {"parent": 5}


def test_readonly_fields_are_ignored(schema):
    record = prepare_item_for_database({"id": 4, "type_label": "Page"}, schema)
    assert record == dict(DEFAULT_STORAGE_RECORD)


def test_invalid_field_raises(schema):
    with pytest.raises(FieldValidationError):
        prepare_item_for_database({"object_id": "abc"}, schema)


def test_extract_menu_id(schema):
    assert extract_menu_id({"menu_id": "7"}, schema) == 7
    assert extract_menu_id({}, schema) == 0
    with pytest.raises(FieldValidationError):
        extract_menu_id({"menu_id": "main"}, schema)
