"""REST Resource Types - request, response and the controller hook contract.

Invariants:
    - ItemRequest is immutable: forcing a param returns a new request
    - ResourceResponse.links maps rel -> list of link objects
    - ResourceController names every hook a resource may override

Design Decisions:
    - Controllers compose collaborators and implement the hooks; there is no
      base controller holding mutable state
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Protocol

from navmenu.core.domain_types import Context
from navmenu.core.item_schema import ItemSchema, resolve_context


@dataclass(frozen=True)
class ItemRequest:
    """Merged URL, query and body params of one API call."""
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.params

    def __getitem__(self, key: str) -> Any:
        return self.params[key]

    @property
    def context(self) -> Context:
        return resolve_context(self.params.get("context"))

    @property
    def fields(self) -> Any:
        return self.params.get("_fields")

    def with_param(self, key: str, value: Any) -> "ItemRequest":
        return replace(self, params={**self.params, key: value})


@dataclass
class ResourceResponse:
    """Body, status, headers and hypermedia links of a controller result."""
    data: Any
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    links: dict[str, list[dict]] = field(default_factory=dict)

    def add_link(self, rel: str, href: str, **attributes: Any) -> None:
        self.links.setdefault(rel, []).append({"href": href, **attributes})

    def add_links(self, links: Mapping[str, list[dict]]) -> None:
        for rel, entries in links.items():
            for entry in entries:
                self.add_link(rel, **entry)

    def to_body(self) -> Any:
        """JSON body with links embedded under `_links`."""
        if isinstance(self.data, dict) and self.links:
            return {**self.data, "_links": self.links}
        return self.data


class ResourceController(Protocol):
    """Hook points of a REST resource controller."""
    def get_item_schema(self) -> ItemSchema: ...
    def get_collection_params(self) -> dict: ...
    def prepare_item_for_database(self, request: ItemRequest) -> dict[str, Any]: ...
    def prepare_items_query(
        self, prepared_args: dict[str, Any], request: ItemRequest,
    ) -> dict[str, Any]: ...
    async def get_item(self, item_id: int) -> Any: ...
    async def prepare_item_for_response(
        self, post: Any, request: ItemRequest,
    ) -> ResourceResponse: ...
