"""Meta Store - post meta reads/writes, and the registered menu-item meta API.

Invariants:
    - read_meta / write_meta are the only raw `postmeta` accessors
    - SqlMetaStore exposes only registered keys; unregistered keys in an
      update are ignored
    - None deletes a key; non-scalar values are rejected before any write
"""

import logging
from typing import Any

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.core.errors import ErrorContext, MetadataUpdateError
from navmenu.models.post_meta import PostMeta

logger = logging.getLogger(__name__)

_META_VALUES = TypeAdapter(
    dict[str, StrictStr | StrictInt | StrictFloat | StrictBool | None],
)


async def read_meta(db: AsyncSession, post_id: int) -> dict[str, Any]:
    """All meta of a post as {key: value}."""
    result = await db.execute(
        select(PostMeta.meta_key, PostMeta.meta_value)
        .where(PostMeta.post_id == post_id),
    )
    return {key: value for key, value in result.all()}


async def write_meta(db: AsyncSession, post_id: int, key: str, value: Any) -> None:
    """Insert or replace one meta value (no commit)."""
    result = await db.execute(
        select(PostMeta)
        .where(PostMeta.post_id == post_id, PostMeta.meta_key == key),
    )
    row = result.scalar_one_or_none()
    if row is None:
        db.add(PostMeta(post_id=post_id, meta_key=key, meta_value=value))
    else:
        row.meta_value = value


class SqlMetaStore:
    """MetadataStore for the keys registered on menu items."""

    def __init__(self, db: AsyncSession, registered_keys: list[str] | tuple[str, ...] = ()):
        self.db = db
        self.registered_keys = tuple(registered_keys)

    async def get_values(self, item_id: int) -> dict[str, Any]:
        stored = await read_meta(self.db, item_id)
        return {key: stored.get(key, "") for key in self.registered_keys}

    async def update_values(self, meta: dict[str, Any], item_id: int) -> None:
        updates = {k: v for k, v in meta.items() if k in self.registered_keys}
        try:
            updates = _META_VALUES.validate_python(updates)
        except ValidationError as exc:
            key = str(exc.errors()[0]["loc"][0])
            raise MetadataUpdateError(
                f"Invalid value for meta key '{key}'.", key,
                context=ErrorContext(item_id=item_id),
            ) from exc
        if not updates:
            return
        try:
            for key, value in updates.items():
                if value is None:
                    await self.db.execute(
                        delete(PostMeta)
                        .where(PostMeta.post_id == item_id, PostMeta.meta_key == key),
                    )
                else:
                    await write_meta(self.db, item_id, key, value)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Meta update failed: {e}", extra={"item_id": item_id},
            )
            raise MetadataUpdateError(
                "Could not update the meta value in the database.",
                next(iter(updates)), http_status=500,
                context=ErrorContext(item_id=item_id),
            )
