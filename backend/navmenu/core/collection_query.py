"""Collection Query - listing parameters and their translation to storage query args.

Invariants:
    - orderby defaults to menu_order, order defaults to asc
    - build_query_args only emits keys of the storage engine's query vocabulary
    - prepare_items_query remaps orderby through ORDERBY_MAPPINGS; values not
      in the table pass through unchanged
    - Pure: no IO

Design Decisions:
    - Two steps kept apart: build_query_args is the generic listing contract,
      prepare_items_query is the menu-item override applied on top of it
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from navmenu.core.domain_types import (
    Context, NAV_MENU_ITEM, NON_INTERNAL_STATUSES, Order, PostStatus,
)
from navmenu.core.errors import FieldValidationError
from navmenu.core.item_schema import parse_list

ORDERBY_VALUES: tuple[str, ...] = (
    "author", "date", "id", "include", "modified", "parent",
    "relevance", "slug", "include_slugs", "title", "menu_order",
)
DEFAULT_ORDERBY = "menu_order"
DEFAULT_ORDER = Order.ASC.value

ORDERBY_MAPPINGS: Mapping[str, str] = MappingProxyType({
    "id": "ID",
    "include": "post__in",
    "slug": "post_name",
    "include_slugs": "post_name__in",
    "menu_order": "menu_order",
})

# wire param -> storage query var
_PARAM_TO_QUERY_VAR: Mapping[str, str] = MappingProxyType({
    "exclude": "post__not_in",
    "include": "post__in",
    "menu_order": "menu_order",
    "offset": "offset",
    "order": "order",
    "orderby": "orderby",
    "page": "paged",
    "parent": "post_parent__in",
    "parent_exclude": "post_parent__not_in",
    "search": "s",
    "slug": "post_name__in",
    "status": "post_status",
})

_ID_LIST_PARAMS = frozenset({"include", "exclude", "parent", "parent_exclude"})
_STRING_LIST_PARAMS = frozenset({"slug", "status"})


def get_collection_params(default_per_page: int = 10, max_per_page: int = 100) -> dict:
    """Describe the accepted listing parameters (JSON-schema style)."""
    return {
        "context": {
            "description": "Scope under which the request is made; determines fields present in response.",
            "type": "string",
            "default": Context.VIEW.value,
            "enum": [c.value for c in Context],
        },
        "page": {
            "description": "Current page of the collection.",
            "type": "integer", "default": 1, "minimum": 1,
        },
        "per_page": {
            "description": "Maximum number of items to be returned in result set.",
            "type": "integer", "default": default_per_page,
            "minimum": 1, "maximum": max_per_page,
        },
        "search": {
            "description": "Limit results to those matching a string.",
            "type": "string",
        },
        "exclude": {
            "description": "Ensure result set excludes specific IDs.",
            "type": "array", "items": {"type": "integer"}, "default": [],
        },
        "include": {
            "description": "Limit result set to specific IDs.",
            "type": "array", "items": {"type": "integer"}, "default": [],
        },
        "offset": {
            "description": "Offset the result set by a specific number of items.",
            "type": "integer",
        },
        "parent": {
            "description": "Limit result set to items with particular parent IDs.",
            "type": "array", "items": {"type": "integer"}, "default": [],
        },
        "parent_exclude": {
            "description": "Limit result set to all items except those of a particular parent ID.",
            "type": "array", "items": {"type": "integer"}, "default": [],
        },
        "slug": {
            "description": "Limit result set to posts with one or more specific slugs.",
            "type": "array", "items": {"type": "string"},
        },
        "status": {
            "description": "Limit result set to posts assigned one or more statuses.",
            "type": "array",
            "items": {"type": "string", "enum": [*NON_INTERNAL_STATUSES, "any"]},
            "default": [PostStatus.PUBLISH.value],
        },
        "menu_order": {
            "description": "Limit result set to posts with a specific menu_order value.",
            "type": "integer",
        },
        "order": {
            "description": "Order sort attribute ascending or descending.",
            "type": "string",
            "default": DEFAULT_ORDER,
            "enum": [o.value for o in Order],
        },
        "orderby": {
            "description": "Sort collection by object attribute.",
            "type": "string",
            "default": DEFAULT_ORDERBY,
            "enum": list(ORDERBY_VALUES),
        },
    }


def build_query_args(params: Mapping[str, Any], per_page: int) -> dict[str, Any]:
    """Translate listing params into storage query args.

    Raises FieldValidationError for enum violations and for orderby values
    that need a companion param (include, include_slugs, relevance).
    """
    orderby = params.get("orderby") or DEFAULT_ORDERBY
    order = params.get("order") or DEFAULT_ORDER
    if orderby not in ORDERBY_VALUES:
        raise FieldValidationError(
            f"orderby is not one of {', '.join(ORDERBY_VALUES)}.", "orderby",
        )
    if order not in (Order.ASC.value, Order.DESC.value):
        raise FieldValidationError("order is not one of asc, desc.", "order")
    if orderby == "include" and not parse_list(params.get("include")):
        raise FieldValidationError(
            "You need to define an include parameter to order by include.", "orderby",
        )
    if orderby == "include_slugs" and not parse_list(params.get("slug")):
        raise FieldValidationError(
            "You need to define a slug parameter to order by include_slugs.", "orderby",
        )
    if orderby == "relevance" and not params.get("search"):
        raise FieldValidationError(
            "You need to define a search term to order by relevance.", "orderby",
        )

    args: dict[str, Any] = {
        "post_type": NAV_MENU_ITEM,
        "posts_per_page": per_page,
        "orderby": orderby,
        "order": order,
    }
    for param, query_var in _PARAM_TO_QUERY_VAR.items():
        value = params.get(param)
        if value is None or value == "" or value == []:
            continue
        if param in _ID_LIST_PARAMS:
            value = _parse_ids(param, value)
        elif param in _STRING_LIST_PARAMS:
            value = parse_list(value)
        args[query_var] = value

    statuses = args.get("post_status", [PostStatus.PUBLISH.value])
    for status in statuses:
        if status != "any" and status not in NON_INTERNAL_STATUSES:
            raise FieldValidationError(
                f"status is not one of {', '.join(NON_INTERNAL_STATUSES)}, any.", "status",
            )
    args["post_status"] = (
        list(NON_INTERNAL_STATUSES) if "any" in statuses else statuses
    )
    return args


def _parse_ids(param: str, value: Any) -> list[int]:
    try:
        return [int(v) for v in parse_list(value)]
    except ValueError:
        raise FieldValidationError(f"{param} items are not of type integer.", param)


def prepare_items_query(
    prepared_args: Mapping[str, Any], params: Mapping[str, Any],
) -> dict[str, Any]:
    """Remap wire orderby values onto the storage engine's native sort keys."""
    query_args = dict(prepared_args)
    requested = params.get("orderby")
    if "orderby" in query_args and requested:
        mapped = ORDERBY_MAPPINGS.get(requested)
        if mapped is not None:
            query_args["orderby"] = mapped
    return query_args
