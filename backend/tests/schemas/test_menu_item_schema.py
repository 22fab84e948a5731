"""Menu Item Schemas - verifies the request body model at the API boundary.

Tests:
    - Numeric strings become ints; delimited classes become lists
    - Title accepts both the string and the {"raw": ...} form
    - Unknown keys survive (extension fields); explicit nulls are dropped
    - Wrong types and unknown enum values are rejected
"""

import pytest
from pydantic import ValidationError

from navmenu.schemas.menu_item import MenuItemWrite, TitleInput


def test_title_object_form():
    body = MenuItemWrite.model_validate({"title": {"raw": "Home", "rendered": "x"}})
    assert isinstance(body.title, TitleInput)
    assert body.to_params() == {"title": {"raw": "Home"}}


def test_loose_forms_are_coerced():
    body = MenuItemWrite.model_validate(
        {"menu_order": "3", "classes": "a b", "xfn": "friend,met"},
    )
    assert body.to_params() == {
        "menu_order": 3, "classes": ["a", "b"], "xfn": ["friend", "met"],
    }


def test_enums_dump_as_values():
    body = MenuItemWrite.model_validate({"type": "custom", "status": "draft"})
    assert body.to_params() == {"type": "custom", "status": "draft"}


def test_only_sent_fields_are_kept():
    body = MenuItemWrite.model_validate({"url": "https://example.com", "target": None})
    assert body.to_params() == {"url": "https://example.com"}


def test_extra_keys_are_kept():
    body = MenuItemWrite.model_validate({"icon": "star"})
    assert body.to_params() == {"icon": "star"}


@pytest.mark.parametrize("payload,field", [
    ({"menu_order": "three"}, "menu_order"),
    ({"type": "widget"}, "type"),
    ({"status": "archived"}, "status"),
    ({"classes": [1, 2]}, "classes"),
    ({"url": 5}, "url"),
])
def test_wrong_types_are_rejected(payload, field):
    with pytest.raises(ValidationError) as exc:
        MenuItemWrite.model_validate(payload)
    assert exc.value.errors()[0]["loc"][0] == field
