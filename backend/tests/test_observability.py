"""Structured Logging - verifies JSON log lines carry the menu-item extra fields."""

import json
import logging

from navmenu.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "navmenu.services", logging.INFO, __file__, 1, "Menu item 4 created", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_has_base_fields():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "INFO"
    assert line["logger"] == "navmenu.services"
    assert line["message"] == "Menu item 4 created"
    assert "timestamp" in line


def test_extra_fields_are_surfaced():
    line = json.loads(JSONFormatter().format(
        _record(item_id=4, menu_id=7, event="rest_insert_nav_menu_item", creating=True),
    ))
    assert line["item_id"] == 4
    assert line["menu_id"] == 7
    assert line["event"] == "rest_insert_nav_menu_item"
    assert line["creating"] is True


def test_absent_extra_fields_are_omitted():
    line = json.loads(JSONFormatter().format(_record()))
    assert "item_id" not in line
    assert "error_code" not in line
