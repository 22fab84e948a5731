"""Menu Items Routes - REST surface of the nav_menu_item resource.

Invariants:
    - GET    ""         -> list, with X-WP-Total / X-WP-TotalPages headers
    - POST   ""         -> create, 201 + Location header
    - GET /schema, OPTIONS "" -> JSON schema of the item (declared before /{item_id})
    - GET    /{item_id} -> single item
    - POST|PUT|PATCH /{item_id} -> update
    - Handlers only translate HTTP to ItemRequest and back; all behavior lives
      in MenuItemsController

Design Decisions:
    - Query list params accept repeated keys and comma lists; repeated values
      are joined so the controller sees one delimited string
    - Prefix read from settings at import time: namespace/rest_base are
      deployment constants, not per-request values
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from navmenu.api.dependencies import get_controller
from navmenu.config import get_settings
from navmenu.core.rest_resource import ItemRequest, ResourceResponse
from navmenu.schemas.menu_item import MenuItemWrite
from navmenu.services.menu_items_controller import MenuItemsController

logger = logging.getLogger(__name__)

_settings = get_settings()
router = APIRouter(
    prefix=f"/{_settings.api_namespace.strip('/')}/{_settings.rest_base.strip('/')}",
    tags=["menu-items"],
)


def _render(response: ResourceResponse) -> JSONResponse:
    return JSONResponse(
        status_code=response.status,
        content=response.to_body(),
        headers=response.headers,
    )


def _joined(values: list[str] | None) -> str | None:
    return ",".join(values) if values else None


def collection_params(
    context: str | None = None,
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    search: str | None = None,
    offset: int | None = Query(None),
    order: str | None = None,
    orderby: str | None = None,
    menu_order: int | None = Query(None),
    include: list[str] | None = Query(None),
    exclude: list[str] | None = Query(None),
    parent: list[str] | None = Query(None),
    parent_exclude: list[str] | None = Query(None),
    slug: list[str] | None = Query(None),
    status: list[str] | None = Query(None),
    fields: str | None = Query(None, alias="_fields"),
) -> dict:
    """Listing query params, with absent values dropped."""
    params = {
        "context": context,
        "page": page,
        "per_page": per_page,
        "search": search,
        "offset": offset,
        "order": order,
        "orderby": orderby,
        "menu_order": menu_order,
        "include": _joined(include),
        "exclude": _joined(exclude),
        "parent": _joined(parent),
        "parent_exclude": _joined(parent_exclude),
        "slug": _joined(slug),
        "status": _joined(status),
        "_fields": fields,
    }
    return {key: value for key, value in params.items() if value is not None}


def view_params(
    context: str | None = None,
    fields: str | None = Query(None, alias="_fields"),
) -> dict:
    params = {"context": context, "_fields": fields}
    return {key: value for key, value in params.items() if value is not None}


@router.get("")
async def list_menu_items(
    params: dict = Depends(collection_params),
    controller: MenuItemsController = Depends(get_controller),
):
    """List menu items."""
    return _render(await controller.list_items(ItemRequest(params)))


@router.post("")
async def create_menu_item(
    body: MenuItemWrite,
    params: dict = Depends(view_params),
    controller: MenuItemsController = Depends(get_controller),
):
    """Create a menu item."""
    request = ItemRequest({**body.to_params(), **params})
    return _render(await controller.create_item(request))


@router.get("/schema")
@router.options("")
async def get_menu_item_schema(
    controller: MenuItemsController = Depends(get_controller),
):
    """JSON schema of a menu item, plus the listing params."""
    schema = controller.get_item_schema().to_json_schema()
    schema["collection_params"] = controller.get_collection_params()
    return schema


@router.get("/{item_id}")
async def get_menu_item(
    item_id: int,
    params: dict = Depends(view_params),
    controller: MenuItemsController = Depends(get_controller),
):
    """Get a single menu item."""
    return _render(
        await controller.get_item_response(item_id, ItemRequest(params)),
    )


@router.api_route("/{item_id}", methods=["POST", "PUT", "PATCH"])
async def update_menu_item(
    item_id: int,
    body: MenuItemWrite | None = None,
    params: dict = Depends(view_params),
    controller: MenuItemsController = Depends(get_controller),
):
    """Update a menu item. Fields left out are reset to their defaults."""
    payload = body.to_params() if body else {}
    request = ItemRequest({**payload, **params})
    return _render(await controller.update_item(item_id, request))
