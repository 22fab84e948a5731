"""Nav Menu Writer - create-or-update of a menu item under a menu container.

Invariants:
    - Every failure is a StorageFailure; database errors carry db_insert_error
      (create) or db_update_error (update), all others are rejections
    - The record is merged over DEFAULT_STORAGE_RECORD, never over the stored item
    - custom items store object "" and object_id 0
    - A zero position is replaced by (last position in the menu + 1)
    - post_parent and _menu_item_menu_item_parent always hold the same id
    - menu_id 0 on update keeps the current container
    - Commits its own writes: the controller performs no transactions
"""

import logging
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.core.domain_types import MenuItemType, NAV_MENU_ITEM, NAV_MENU_TAXONOMY
from navmenu.core.errors import StorageFailure
from navmenu.core.prepare_response import absint, as_string_list
from navmenu.core.prepare_storage import DEFAULT_STORAGE_RECORD
from navmenu.models.post import Post
from navmenu.models.term import Term
from navmenu.models.term_relationship import TermRelationship
from navmenu.services.meta_store import write_meta

logger = logging.getLogger(__name__)


class SqlNavMenuWriter:
    """NavMenuWriter backed by posts, postmeta and term_relationships."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_or_update_under_menu(
        self, menu_id: int, record: dict[str, Any], item_id: int = 0,
    ) -> int:
        updating = bool(item_id)
        if menu_id:
            await self._require_menu(menu_id)
        existing = await self._require_menu_item(item_id) if updating else None

        args = {**DEFAULT_STORAGE_RECORD, **record}
        item_type = args["menu-item-type"]
        object_id = absint(args["menu-item-object-id"])
        obj = str(args["menu-item-object"] or "")
        if item_type == MenuItemType.CUSTOM.value:
            object_id, obj = 0, ""
        parent_id = absint(args["menu-item-parent-id"])
        position = absint(args["menu-item-position"])
        if position == 0:
            position = await self._next_position(menu_id)

        try:
            post = existing or Post(post_type=NAV_MENU_ITEM, post_name="")
            post.post_title = args["menu-item-title"]
            post.post_content = args["menu-item-description"]
            post.post_excerpt = args["menu-item-attr-title"]
            post.post_status = args["menu-item-status"]
            post.post_parent = parent_id
            post.menu_order = position
            if existing is None:
                self.db.add(post)
            await self.db.flush()
            if not post.post_name:
                post.post_name = str(post.id)

            meta = {
                "_menu_item_type": item_type,
                "_menu_item_menu_item_parent": parent_id,
                "_menu_item_object_id": object_id,
                "_menu_item_object": obj,
                "_menu_item_target": args["menu-item-target"],
                "_menu_item_classes": as_string_list(args["menu-item-classes"]),
                "_menu_item_xfn": " ".join(as_string_list(args["menu-item-xfn"])),
                "_menu_item_url": args["menu-item-url"],
            }
            for key, value in meta.items():
                await write_meta(self.db, post.id, key, value)

            if menu_id:
                await self._assign_menu(post.id, menu_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Menu item write failed: {e}",
                extra={"item_id": item_id or None, "menu_id": menu_id},
            )
            if updating:
                raise StorageFailure(
                    "db_update_error", "Could not update post in the database.",
                    {"item_id": item_id},
                )
            raise StorageFailure(
                "db_insert_error", "Could not insert post into the database.",
                {"menu_id": menu_id},
            )
        return post.id

    async def _require_menu(self, menu_id: int) -> None:
        menu = await self.db.get(Term, menu_id)
        if menu is None or menu.taxonomy != NAV_MENU_TAXONOMY:
            raise StorageFailure(
                "invalid_menu_id", "Invalid menu ID.", {"menu_id": menu_id},
            )

    async def _require_menu_item(self, item_id: int) -> Post:
        post = await self.db.get(Post, item_id)
        if post is None or post.post_type != NAV_MENU_ITEM:
            raise StorageFailure(
                "update_nav_menu_item_failed",
                "The given object ID is not that of a menu item.",
                {"item_id": item_id},
            )
        return post

    async def _next_position(self, menu_id: int) -> int:
        if not menu_id:
            return 0
        result = await self.db.execute(
            select(func.max(Post.menu_order))
            .join(TermRelationship, TermRelationship.post_id == Post.id)
            .where(TermRelationship.term_id == menu_id, Post.post_type == NAV_MENU_ITEM),
        )
        last = result.scalar_one_or_none()
        return 0 if last is None else last + 1

    async def _assign_menu(self, post_id: int, menu_id: int) -> None:
        menu_ids = select(Term.id).where(Term.taxonomy == NAV_MENU_TAXONOMY)
        await self.db.execute(
            delete(TermRelationship).where(
                TermRelationship.post_id == post_id,
                TermRelationship.term_id.in_(menu_ids),
            ),
        )
        self.db.add(TermRelationship(post_id=post_id, term_id=menu_id))
