"""Menu Item Schema - wire field declarations, context projection, request validation.

Invariants:
    - Every wire field is declared once with its type, contexts and readonly flag
    - Context defaults to `view` when the caller does not supply one
    - filter_by_context drops undeclared fields and fields outside the context,
      recursing into object properties (title.raw is edit-only)
    - validate_request only returns declared, writable fields; everything else
      in the payload is ignored
    - All functions are pure: no IO, no mutation of their inputs

Design Decisions:
    - FieldSpec is a frozen dataclass: schema instances are shared across requests
    - Each FieldSpec builds a pydantic TypeAdapter; lax mode accepts the
      numeric strings the REST contract allows, delimited strings are split
      before array validation
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, TypeAdapter, ValidationError

from navmenu.core.domain_types import (
    Context, MenuItemType, NAV_MENU_ITEM, NON_INTERNAL_STATUSES,
)
from navmenu.core.errors import FieldValidationError

ALL_CONTEXTS = (Context.VIEW.value, Context.EDIT.value, Context.EMBED.value)
VIEW_EDIT = (Context.VIEW.value, Context.EDIT.value)
EDIT_ONLY = (Context.EDIT.value,)

_LIST_SEPARATOR = re.compile(r"[\s,]+")


def _split_delimited(value: Any) -> Any:
    return parse_list(value) if isinstance(value, str) else value


def _raw_title(value: Any) -> Any:
    return value.get("raw", "") if isinstance(value, Mapping) else value


_JSON_TYPES: Mapping[str, Any] = MappingProxyType({
    "integer": int,
    "number": float,
    "string": str,
    "boolean": bool,
    "object": dict[str, Any],
})

StringList = Annotated[list[str], BeforeValidator(_split_delimited)]

# title is writable as a plain string or as {"raw": ...}
TITLE_ADAPTER = TypeAdapter(Annotated[str, BeforeValidator(_raw_title)])


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of a single wire field."""
    type: str | None
    context: tuple[str, ...]
    description: str = ""
    readonly: bool = False
    default: Any = None
    enum: tuple[str, ...] | None = None
    items: str | None = None
    format: str | None = None
    properties: Mapping[str, "FieldSpec"] | None = None

    def in_context(self, context: str) -> bool:
        return context in self.context

    @cached_property
    def adapter(self) -> TypeAdapter:
        """Pydantic validator for values written to this field."""
        if self.enum is not None:
            return TypeAdapter(Literal[self.enum])
        if self.type == "array":
            item_type = _JSON_TYPES.get(self.items, Any)
            return TypeAdapter(
                Annotated[list[item_type], BeforeValidator(_split_delimited)],
            )
        return TypeAdapter(_JSON_TYPES.get(self.type, Any))

    def to_json_schema(self) -> dict:
        schema: dict[str, Any] = {
            "description": self.description,
            "context": list(self.context),
        }
        if self.type:
            schema["type"] = self.type
        if self.readonly:
            schema["readonly"] = True
        if self.default is not None:
            schema["default"] = self.default
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.items:
            schema["items"] = {"type": self.items}
        if self.format:
            schema["format"] = self.format
        if self.properties:
            schema["properties"] = {
                name: spec.to_json_schema()
                for name, spec in self.properties.items()
            }
        return schema


@dataclass(frozen=True)
class ItemSchema:
    """The full set of wire fields for one content kind."""
    title: str
    properties: Mapping[str, FieldSpec] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.properties

    def get(self, name: str) -> FieldSpec | None:
        return self.properties.get(name)

    def to_json_schema(self) -> dict:
        return {
            "$schema": "http://json-schema.org/draft-04/schema#",
            "title": self.title,
            "type": "object",
            "properties": {
                name: spec.to_json_schema()
                for name, spec in self.properties.items()
            },
        }


def build_item_schema(
    statuses: Iterable[str] = NON_INTERNAL_STATUSES,
    meta_keys: Iterable[str] = (),
    additional: Mapping[str, FieldSpec] | None = None,
) -> ItemSchema:
    """Declare every menu item wire field.

    `meta` is declared only when meta keys are registered; `additional`
    fields registered by extensions are merged last.
    """
    props: dict[str, FieldSpec] = {
        "title": FieldSpec(
            "object", ALL_CONTEXTS, "The title for the object.",
            properties=MappingProxyType({
                "raw": FieldSpec(
                    "string", EDIT_ONLY,
                    "Title for the object, as it exists in the database.",
                ),
                "rendered": FieldSpec(
                    "string", ALL_CONTEXTS,
                    "HTML title for the object, transformed for display.",
                    readonly=True,
                ),
            }),
        ),
        "original_title": FieldSpec(
            "string", (Context.VIEW.value, Context.EMBED.value),
            "Title of the object this menu item points to.", readonly=True,
        ),
        "id": FieldSpec(
            "integer", ALL_CONTEXTS, "Unique identifier for the object.",
            readonly=True,
        ),
        "menu_id": FieldSpec(
            "integer", EDIT_ONLY, "Identifier of the menu the item belongs to.",
            default=0,
        ),
        "type_label": FieldSpec(
            "string", VIEW_EDIT,
            "The singular label used to describe this type of menu item.",
            readonly=True,
        ),
        "type": FieldSpec(
            "string", ALL_CONTEXTS,
            'The family of objects originally represented, such as "post_type" or "taxonomy".',
            enum=tuple(t.value for t in MenuItemType),
        ),
        "status": FieldSpec(
            "string", VIEW_EDIT, "A named status for the object.",
            enum=tuple(statuses),
        ),
        "parent": FieldSpec(
            "integer", VIEW_EDIT, "The ID for the parent of the object.",
        ),
        "attr_title": FieldSpec(
            "string", VIEW_EDIT,
            "The title attribute of the link element for this menu item.",
        ),
        "classes": FieldSpec(
            "array", VIEW_EDIT,
            "The array of class attribute values for the link element of this menu item.",
            items="string",
        ),
        "db_id": FieldSpec(
            "integer", VIEW_EDIT,
            "The DB ID of this item as a nav_menu_item object, if it exists (0 if it doesn't exist).",
        ),
        "description": FieldSpec(
            "string", VIEW_EDIT, "The description of this menu item.",
        ),
        "menu_item_parent": FieldSpec(
            "integer", VIEW_EDIT,
            "The DB ID of the nav_menu_item that is this item's menu parent, if any. 0 otherwise.",
        ),
        "menu_order": FieldSpec(
            "integer", VIEW_EDIT,
            "The position of this item among its siblings.",
        ),
        "object": FieldSpec(
            "string", VIEW_EDIT,
            'The type of object originally represented, such as "category", "post", or "attachment".',
        ),
        "object_id": FieldSpec(
            "integer", VIEW_EDIT,
            "The DB ID of the original object this menu item represents, e.g. ID for posts and term_id for categories.",
        ),
        "target": FieldSpec(
            "string", VIEW_EDIT,
            "The target attribute of the link element for this menu item.",
        ),
        "url": FieldSpec(
            "string", VIEW_EDIT, "The URL to which this menu item points.",
            format="uri",
        ),
        "xfn": FieldSpec(
            "array", VIEW_EDIT,
            "The XFN relationship expressed in the link of this menu item.",
            items="string",
        ),
        "_invalid": FieldSpec(
            "boolean", VIEW_EDIT,
            "Whether the menu item represents an object that no longer exists.",
            readonly=True,
        ),
    }
    meta_keys = tuple(meta_keys)
    if meta_keys:
        props["meta"] = FieldSpec(
            "object", VIEW_EDIT, "Meta fields.",
            properties=MappingProxyType({
                key: FieldSpec(None, VIEW_EDIT) for key in meta_keys
            }),
        )
    if additional:
        props.update(additional)
    return ItemSchema(title=NAV_MENU_ITEM, properties=MappingProxyType(props))


# ─── Context & field selection ──────────────────────────────────

def resolve_context(value: str | Context | None) -> Context:
    """Normalize a requested context; empty means `view`."""
    if value is None or value == "":
        return Context.VIEW
    try:
        return Context(value)
    except ValueError:
        raise FieldValidationError(
            f"context is not one of {', '.join(ALL_CONTEXTS)}.", "context",
        )


def parse_list(value: Any) -> list[str]:
    """Split a list-or-delimited-string parameter into a clean list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in _LIST_SEPARATOR.split(value) if part]
    if isinstance(value, (list, tuple)):
        return [str(part) for part in value if str(part) != ""]
    return [str(value)]


def fields_for_response(
    schema: ItemSchema,
    context: str | Context | None,
    requested: Any = None,
) -> list[str]:
    """Top-level fields to compute for a response.

    Declared fields visible in `context`, narrowed by the `_fields`
    selection (nested selections like `title.raw` select `title`).
    """
    ctx = resolve_context(context).value
    fields = [
        name for name, spec in schema.properties.items() if spec.in_context(ctx)
    ]
    selection = parse_list(requested)
    if not selection:
        return fields
    top_level = {name.split(".", 1)[0] for name in selection}
    return [name for name in fields if name in top_level]


def filter_by_context(
    data: Mapping[str, Any], context: str | Context | None, schema: ItemSchema,
) -> dict:
    """Project a response mapping onto the fields visible in `context`."""
    return _filter_properties(data, resolve_context(context).value, schema.properties)


def _filter_properties(
    data: Mapping[str, Any], context: str, properties: Mapping[str, FieldSpec],
) -> dict:
    projected: dict[str, Any] = {}
    for name, value in data.items():
        spec = properties.get(name)
        if spec is None or not spec.in_context(context):
            continue
        if spec.properties and isinstance(value, Mapping):
            value = _filter_properties(value, context, spec.properties)
        projected[name] = value
    return projected


def filter_requested_fields(data: Mapping[str, Any], requested: Any) -> dict:
    """Apply a nested `_fields` selection (e.g. `title.raw`) to response data."""
    selection = parse_list(requested)
    if not selection:
        return dict(data)
    filtered: dict[str, Any] = {}
    for path in selection:
        head, _, rest = path.partition(".")
        if head not in data:
            continue
        if not rest or not isinstance(data[head], Mapping):
            filtered[head] = data[head]
            continue
        current = filtered.get(head)
        if current is data[head]:
            continue
        nested = filter_requested_fields(data[head], [rest])
        filtered[head] = {**(current or {}), **nested}
    return filtered


# ─── Request validation ─────────────────────────────────────────

def validate_request(payload: Mapping[str, Any], schema: ItemSchema) -> dict:
    """Validate and coerce the writable wire fields present in `payload`.

    Raises FieldValidationError naming the first offending field.
    """
    validated: dict[str, Any] = {}
    for name, value in payload.items():
        spec = schema.get(name)
        if spec is None or spec.readonly:
            continue
        validated[name] = _validate_field(name, value, spec)
    return validated


def _validate_field(name: str, value: Any, spec: FieldSpec) -> Any:
    adapter = TITLE_ADAPTER if name == "title" else spec.adapter
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise FieldValidationError(
            _describe_error(name, spec, exc.errors()[0]), name,
        ) from exc


def _describe_error(name: str, spec: FieldSpec, error: Mapping[str, Any]) -> str:
    if error["type"] == "literal_error" and spec.enum is not None:
        return f"{name} is not one of {', '.join(spec.enum)}."
    loc = error["loc"]
    if loc and isinstance(loc[0], int):
        return f"{name}[{loc[0]}] is not of type {spec.items}."
    expected = "string" if name == "title" else spec.type
    return f"{name} is not of type {expected}."
