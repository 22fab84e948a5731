"""Menu Items Controller - create/read/update/list orchestration for menu items.

Invariants:
    - create rejects a client-supplied id before any write (PostExistsError)
    - update resolves the target first; a missing item is a 404 with no write
    - Storage failures are classified: the operation's db_*_error is a 500,
      every other storage rejection a 400, original code and data attached
    - The canonical record is re-fetched after the write AND after meta updates
    - Writes force the response context to `edit`
    - Errors propagate immediately; earlier side effects are not rolled back

Design Decisions:
    - Implements the ResourceController hooks by composing injected
      collaborators (core.repository_protocols); no shared mutable state
    - Mapping and projection are delegated to pure core functions; this class
      only awaits collaborators and sequences the pipeline
    - The re-fetch pair is not race-free against a concurrent writer
"""

import logging
import math
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from navmenu.config import Settings, get_settings
from navmenu.core.collection_query import (
    build_query_args, get_collection_params, prepare_items_query,
)
from navmenu.core.domain_types import MenuItemType, NAV_MENU_ITEM, NON_INTERNAL_STATUSES
from navmenu.core.errors import (
    ErrorContext, FieldValidationError, PostExistsError, ResourceNotFoundError,
    StorageFailure, classify_storage_failure,
)
from navmenu.core.item_schema import (
    FieldSpec, ItemSchema, build_item_schema, fields_for_response,
    filter_by_context, filter_requested_fields, validate_request,
)
from navmenu.core.menu_item import ResolvedMenuItem
from navmenu.core.original_title import (
    ReferencedPost, compose_original_title, needs_lookup,
)
from navmenu.core.prepare_response import (
    absint, available_actions, build_links, build_menu_item_data,
)
from navmenu.core.prepare_storage import extract_menu_id, prepare_item_for_database
from navmenu.core.render_title import get_the_title
from navmenu.core.repository_protocols import (
    ContentTypeRegistry, EventSink, MetadataStore, NavMenuWriter, PostLike,
    PostStore, SetupResolver, TermStore,
)
from navmenu.core.rest_resource import ItemRequest, ResourceController, ResourceResponse
from navmenu.services.lifecycle_events import NullEventSink

logger = logging.getLogger(__name__)

ResponseFilter = Callable[[ResourceResponse, PostLike, ItemRequest], ResourceResponse]


@dataclass(frozen=True)
class AdditionalField:
    """An extension field registered on the resource."""
    name: str
    schema: FieldSpec
    get_value: Callable[[PostLike, ItemRequest], Awaitable[Any]] | None = None
    update_value: Callable[[Any, PostLike, ItemRequest], Awaitable[None]] | None = None


class MenuItemsController(ResourceController):
    """REST controller for nav_menu_item resources."""

    post_type = NAV_MENU_ITEM

    def __init__(
        self,
        *,
        posts: PostStore,
        writer: NavMenuWriter,
        setup: SetupResolver,
        meta: MetadataStore,
        terms: TermStore,
        content_types: ContentTypeRegistry,
        events: EventSink | None = None,
        settings: Settings | None = None,
        additional_fields: Iterable[AdditionalField] = (),
        response_filters: Iterable[ResponseFilter] = (),
    ):
        self._posts = posts
        self._writer = writer
        self._setup = setup
        self._meta = meta
        self._terms = terms
        self._content_types = content_types
        self._events = events or NullEventSink()
        self._settings = settings or get_settings()
        self._additional = {f.name: f for f in additional_fields}
        self._response_filters = tuple(response_filters)
        self._schema = build_item_schema(
            NON_INTERNAL_STATUSES,
            self._settings.menu_item_meta_keys,
            {name: f.schema for name, f in self._additional.items()},
        )
        self.namespace = self._settings.api_namespace.strip("/")
        self.rest_base = self._settings.rest_base.strip("/")

    # ─── Hook points ────────────────────────────────────────────

    def get_item_schema(self) -> ItemSchema:
        return self._schema

    def get_collection_params(self) -> dict:
        return get_collection_params(
            self._settings.default_per_page, self._settings.max_per_page,
        )

    def prepare_item_for_database(self, request: ItemRequest) -> dict[str, Any]:
        return prepare_item_for_database(request.params, self._schema)

    def prepare_items_query(
        self, prepared_args: dict[str, Any], request: ItemRequest,
    ) -> dict[str, Any]:
        return prepare_items_query(prepared_args, request.params)

    async def get_item(self, item_id: int) -> ResolvedMenuItem:
        """Resolve an id to its materialized menu item, or raise 404."""
        return await self._setup.materialize(await self._get_post(item_id))

    # ─── Operations ─────────────────────────────────────────────

    async def get_item_response(
        self, item_id: int, request: ItemRequest,
    ) -> ResourceResponse:
        post = await self._get_post(item_id)
        return await self.prepare_item_for_response(post, request)

    async def list_items(self, request: ItemRequest) -> ResourceResponse:
        params = request.params
        per_page = self._per_page(params.get("per_page"))
        page = absint(params.get("page") or 1) or 1
        query_args = self.prepare_items_query(
            build_query_args(params, per_page), request,
        )
        posts, total = await self._posts.query_by_filter(query_args)

        total_pages = math.ceil(total / per_page) if total else 0
        if total and page > total_pages:
            raise FieldValidationError(
                "The page number requested is larger than the number of pages available.",
                "page",
            )

        items = []
        for post in posts:
            response = await self.prepare_item_for_response(post, request)
            items.append(response.to_body())

        response = ResourceResponse(items)
        response.headers["X-WP-Total"] = str(total)
        response.headers["X-WP-TotalPages"] = str(total_pages)
        link_header = self._pagination_links(request, page, total_pages)
        if link_header:
            response.headers["Link"] = link_header
        return response

    async def create_item(self, request: ItemRequest) -> ResourceResponse:
        if absint(request.get("id")):
            raise PostExistsError(ErrorContext(item_id=absint(request.get("id"))))

        prepared = self.prepare_item_for_database(request)
        menu_id = extract_menu_id(request.params, self._schema)

        try:
            item_id = await self._writer.create_or_update_under_menu(
                menu_id, prepared, 0,
            )
        except StorageFailure as failure:
            logger.warning(
                f"Menu item insert failed: {failure.message}",
                extra={"menu_id": menu_id, "error_code": failure.code},
            )
            raise classify_storage_failure(
                failure, "db_insert_error", ErrorContext(menu_id=menu_id),
            )

        post = await self._get_post(item_id)
        self._events.notify(f"rest_insert_{self.post_type}", post, request, True)

        await self._update_meta(request, item_id)

        post = await self._get_post(item_id)
        await self._update_additional_fields(post, request)

        request = request.with_param("context", "edit")
        self._events.notify(
            f"rest_after_insert_{self.post_type}", post, request, True,
        )

        logger.info(
            f"Menu item {item_id} created",
            extra={"item_id": item_id, "menu_id": menu_id},
        )
        response = await self.prepare_item_for_response(post, request)
        response.status = 201
        response.headers["Location"] = self._settings.rest_url(
            f"{self.namespace}/{self.rest_base}/{item_id}",
        )
        return response

    async def update_item(
        self, item_id: int, request: ItemRequest,
    ) -> ResourceResponse:
        await self.get_item(item_id)
        request = request.with_param("id", item_id)

        prepared = self.prepare_item_for_database(request)
        menu_id = extract_menu_id(request.params, self._schema)

        try:
            post_id = await self._writer.create_or_update_under_menu(
                menu_id, prepared, item_id,
            )
        except StorageFailure as failure:
            logger.warning(
                f"Menu item update failed: {failure.message}",
                extra={"item_id": item_id, "menu_id": menu_id, "error_code": failure.code},
            )
            raise classify_storage_failure(
                failure, "db_update_error",
                ErrorContext(item_id=item_id, menu_id=menu_id),
            )

        post = await self._get_post(post_id)
        self._events.notify(f"rest_insert_{self.post_type}", post, request, False)

        await self._update_meta(request, post.id)

        post = await self._get_post(post_id)
        await self._update_additional_fields(post, request)

        request = request.with_param("context", "edit")
        self._events.notify(
            f"rest_after_insert_{self.post_type}", post, request, False,
        )

        logger.info(
            f"Menu item {post_id} updated",
            extra={"item_id": post_id, "menu_id": menu_id},
        )
        return await self.prepare_item_for_response(post, request)

    # ─── Response mapping ───────────────────────────────────────

    async def prepare_item_for_response(
        self, post: PostLike, request: ItemRequest,
    ) -> ResourceResponse:
        context = request.context
        fields = fields_for_response(self._schema, context, request.fields)
        menu_item = await self._setup.materialize(post)

        rendered_title = ""
        if "title" in fields:
            rendered_title = get_the_title(
                post.post_title, post.post_status, post.post_password,
                protected_format="%s",
            )
        original_title = ""
        if "original_title" in fields:
            original_title = await self.resolve_original_title(menu_item)

        data = build_menu_item_data(
            menu_item, fields,
            rendered_title=rendered_title, original_title=original_title,
        )
        if "meta" in fields:
            data["meta"] = await self._meta.get_values(post.id)
        for name, extra in self._additional.items():
            if name in fields and extra.get_value is not None:
                data[name] = await extra.get_value(post, request)

        data = filter_by_context(data, context, self._schema)
        data = filter_requested_fields(data, request.fields)

        response = ResourceResponse(data)
        links = self._prepare_links(post, menu_item)
        response.add_links(links)
        self_href = links["self"][0]["href"]
        for rel in available_actions(post.post_status, context):
            response.add_link(rel, self_href)

        for response_filter in self._response_filters:
            response = response_filter(response, post, request)
        return response

    async def resolve_original_title(self, menu_item: ResolvedMenuItem) -> str:
        """Title of the object a menu item points to ("" when unresolvable)."""
        object_id = absint(menu_item.object_id)
        if not needs_lookup(menu_item.type, object_id):
            return compose_original_title(menu_item.type, object_id)

        if menu_item.type == MenuItemType.POST_TYPE.value:
            referenced = await self._posts.get_by_id(object_id)
            return compose_original_title(
                menu_item.type, object_id,
                post=ReferencedPost(referenced.id, referenced.post_title) if referenced else None,
            )
        if menu_item.type == MenuItemType.TAXONOMY.value:
            name = await self._terms.get_raw_field("name", object_id, menu_item.object)
            return compose_original_title(
                menu_item.type, object_id,
                term_name=None if name is None else str(name),
            )
        content_type = self._content_types.get_post_type(menu_item.object)
        return compose_original_title(
            menu_item.type, object_id,
            archive_label=content_type.archive_label if content_type else None,
        )

    # ─── Helpers ────────────────────────────────────────────────

    async def _get_post(self, item_id: int) -> PostLike:
        post = await self._posts.get_by_id(item_id) if item_id > 0 else None
        if post is None or post.post_type != self.post_type:
            raise ResourceNotFoundError(item_id, ErrorContext(item_id=item_id))
        return post

    async def _update_meta(self, request: ItemRequest, item_id: int) -> None:
        if "meta" in self._schema and request.get("meta") is not None:
            meta = validate_request({"meta": request["meta"]}, self._schema)["meta"]
            await self._meta.update_values(meta, item_id)

    async def _update_additional_fields(
        self, post: PostLike, request: ItemRequest,
    ) -> None:
        for name, extra in self._additional.items():
            if extra.update_value is None or extra.schema.readonly or name not in request:
                continue
            value = validate_request({name: request[name]}, self._schema)[name]
            await extra.update_value(value, post, request)

    def _prepare_links(
        self, post: PostLike, menu_item: ResolvedMenuItem,
    ) -> dict[str, list[dict]]:
        base = f"{self.namespace}/{self.rest_base}"
        parent_id = absint(menu_item.menu_item_parent)
        return build_links(
            self_href=self._settings.rest_url(f"{base}/{post.id}"),
            collection_href=self._settings.rest_url(base),
            about_href=self._settings.rest_url(f"{self.namespace}/types/{self.post_type}"),
            parent_href=self._settings.rest_url(f"{base}/{parent_id}") if parent_id else None,
        )

    def _per_page(self, value: Any) -> int:
        per_page = absint(value) if value is not None else self._settings.default_per_page
        if not 1 <= per_page <= self._settings.max_per_page:
            raise FieldValidationError(
                f"per_page must be between 1 and {self._settings.max_per_page}.", "per_page",
            )
        return per_page

    def _pagination_links(
        self, request: ItemRequest, page: int, total_pages: int,
    ) -> str:
        """prev/next links that repeat every listing param except `page`."""
        base = self._settings.rest_url(f"{self.namespace}/{self.rest_base}")

        def page_url(number: int) -> str:
            query = {**request.params, "page": number}
            return f"{base}?{urlencode(query, doseq=True)}"

        links = []
        if page > 1 and total_pages:
            links.append(f'<{page_url(min(page - 1, total_pages))}>; rel="prev"')
        if page < total_pages:
            links.append(f'<{page_url(page + 1)}>; rel="next"')
        return ", ".join(links)
