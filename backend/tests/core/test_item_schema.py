"""Item Schema - verifies field declarations, context projection and request validation.

Tests:
    - Schema declares every wire field; meta only when keys are registered
    - filter_by_context drops out-of-context fields, recursing into title
    - _fields selection narrows top-level and nested fields
    - validate_request coerces loose forms and rejects wrong types
"""

import pytest

from navmenu.core.domain_types import Context
from navmenu.core.errors import FieldValidationError
from navmenu.core.item_schema import (
    FieldSpec, VIEW_EDIT, build_item_schema, fields_for_response,
    filter_by_context, filter_requested_fields, parse_list, resolve_context,
    validate_request,
)


@pytest.fixture
def schema():
    return build_item_schema()


def test_schema_declares_menu_item_fields(schema):
    for name in (
        "title", "original_title", "id", "menu_id", "type_label", "type",
        "status", "parent", "attr_title", "classes", "db_id", "description",
        "menu_item_parent", "menu_order", "object", "object_id", "target",
        "url", "xfn", "_invalid",
    ):
        assert name in schema


def test_meta_declared_only_with_registered_keys(schema):
    assert "meta" not in schema
    with_meta = build_item_schema(meta_keys=["_highlight"])
    assert "meta" in with_meta
    assert "_highlight" in with_meta.get("meta").properties


def test_additional_fields_are_merged():
    extra = FieldSpec("string", VIEW_EDIT, "Icon name.")
    schema = build_item_schema(additional={"icon": extra})
    assert schema.get("icon") is extra


def test_json_schema_document(schema):
    doc = schema.to_json_schema()
    assert doc["$schema"] == "http://json-schema.org/draft-04/schema#"
    assert doc["title"] == "nav_menu_item"
    assert doc["properties"]["url"]["format"] == "uri"
    assert doc["properties"]["id"]["readonly"] is True
    assert doc["properties"]["title"]["properties"]["raw"]["context"] == ["edit"]
    assert doc["properties"]["type"]["enum"] == [
        "custom", "post_type", "taxonomy", "post_type_archive",
    ]


def test_status_enum_excludes_internal_statuses(schema):
    statuses = schema.get("status").enum
    assert "publish" in statuses
    assert "trash" not in statuses
    assert "auto-draft" not in statuses


def test_resolve_context_defaults_to_view():
    assert resolve_context(None) is Context.VIEW
    assert resolve_context("") is Context.VIEW
    assert resolve_context("edit") is Context.EDIT


def test_resolve_context_rejects_unknown_value():
    with pytest.raises(FieldValidationError) as exc:
        resolve_context("admin")
    assert exc.value.field == "context"


def test_parse_list_splits_on_commas_and_spaces():
    assert parse_list("a, b  c,,d") == ["a", "b", "c", "d"]
    assert parse_list(["x", "", 3]) == ["x", "3"]
    assert parse_list(None) == []


def test_view_context_hides_edit_only_fields(schema):
    data = {
        "title": {"raw": "Home", "rendered": "Home"},
        "menu_id": 3,
        "original_title": "Home page",
        "undeclared": True,
    }
    projected = filter_by_context(data, "view", schema)
    assert projected == {
        "title": {"rendered": "Home"},
        "original_title": "Home page",
    }


def test_edit_context_keeps_raw_title_and_drops_original_title(schema):
    data = {"title": {"raw": "Home", "rendered": "Home"}, "original_title": "x"}
    projected = filter_by_context(data, Context.EDIT, schema)
    assert projected == {"title": {"raw": "Home", "rendered": "Home"}}


def test_embed_context_is_minimal(schema):
    fields = fields_for_response(schema, "embed")
    assert set(fields) == {"title", "original_title", "id", "type"}


def test_fields_for_response_narrows_to_selection(schema):
    assert fields_for_response(schema, "view", "id,title.rendered") == ["title", "id"]


def test_filter_requested_fields_supports_nested_paths():
    data = {"id": 4, "title": {"raw": "A", "rendered": "A"}, "url": "u"}
    assert filter_requested_fields(data, "id,title.raw") == {
        "id": 4, "title": {"raw": "A"},
    }
    assert filter_requested_fields(data, None) == data


def test_validate_ignores_readonly_and_unknown_fields(schema):
    validated = validate_request(
        {"id": 9, "type_label": "x", "bogus": 1, "target": "_blank"}, schema,
    )
    assert validated == {"target": "_blank"}


def test_validate_coerces_loose_forms(schema):
    validated = validate_request(
        {
            "title": {"raw": "Home"},
            "menu_order": "3",
            "object_id": 7.0,
            "classes": "nav primary",
        },
        schema,
    )
    assert validated == {
        "title": "Home", "menu_order": 3, "object_id": 7,
        "classes": ["nav", "primary"],
    }


@pytest.mark.parametrize("payload,field", [
    ({"menu_order": "three"}, "menu_order"),
    ({"parent": "1.5"}, "parent"),
    ({"url": 5}, "url"),
    ({"type": "widget"}, "type"),
    ({"status": "trash"}, "status"),
    ({"classes": [1, 2]}, "classes"),
    ({"title": 12}, "title"),
])
def test_validate_rejects_wrong_types(schema, payload, field):
    with pytest.raises(FieldValidationError) as exc:
        validate_request(payload, schema)
    assert exc.value.field == field
    assert exc.value.code == "rest_invalid_param"
    assert exc.value.http_status == 400


def test_validation_messages_name_the_problem(schema):
    with pytest.raises(FieldValidationError) as exc:
        validate_request({"type": "widget"}, schema)
    assert exc.value.message.startswith("type is not one of custom, post_type")

    with pytest.raises(FieldValidationError) as exc:
        validate_request({"classes": ["ok", 3]}, schema)
    assert exc.value.message == "classes[1] is not of type string."

    with pytest.raises(FieldValidationError) as exc:
        validate_request({"menu_order": "x"}, schema)
    assert exc.value.message == "menu_order is not of type integer."


def test_additional_fields_validate_by_declared_type():
    schema = build_item_schema(additional={
        "featured": FieldSpec("boolean", VIEW_EDIT),
        "weight": FieldSpec("integer", VIEW_EDIT),
        "tags": FieldSpec("array", VIEW_EDIT, items="string"),
    })
    validated = validate_request(
        {"featured": "true", "weight": "12", "tags": "a,b"}, schema,
    )
    assert validated == {"featured": True, "weight": 12, "tags": ["a", "b"]}

    with pytest.raises(FieldValidationError) as exc:
        validate_request({"featured": "maybe"}, schema)
    assert exc.value.field == "featured"


def test_meta_object_requires_a_mapping():
    schema = build_item_schema(meta_keys=["_highlight"])
    assert validate_request({"meta": {"_highlight": "y"}}, schema) == {
        "meta": {"_highlight": "y"},
    }
    with pytest.raises(FieldValidationError) as exc:
        validate_request({"meta": "y"}, schema)
    assert exc.value.field == "meta"
