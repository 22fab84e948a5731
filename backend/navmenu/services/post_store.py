"""Post Store - generic content-item reads: by id and by query filter.

Invariants:
    - get_by_id always re-reads the row (populate_existing): callers use it to
      refetch the canonical record after writes
    - query_by_filter returns (page of posts, total matching rows)
    - Sort ties are broken by id ascending (insertion order)
    - post__in / post_name__in / relevance orderings ignore `order`
"""

from typing import Any

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.models.post import Post

_ORDER_COLUMNS = {
    "ID": Post.id,
    "menu_order": Post.menu_order,
    "post_name": Post.post_name,
    "date": Post.created_at,
    "modified": Post.modified_at,
    "title": Post.post_title,
    "parent": Post.post_parent,
    "author": Post.post_author,
}


class SqlPostStore:
    """PostStore backed by the `posts` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, item_id: int) -> Post | None:
        result = await self.db.execute(
            select(Post)
            .where(Post.id == item_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def query_by_filter(
        self, query_args: dict[str, Any],
    ) -> tuple[list[Post], int]:
        stmt = select(Post)
        if query_args.get("post_type"):
            stmt = stmt.where(Post.post_type == query_args["post_type"])
        if query_args.get("post__in"):
            stmt = stmt.where(Post.id.in_(query_args["post__in"]))
        if query_args.get("post__not_in"):
            stmt = stmt.where(Post.id.not_in(query_args["post__not_in"]))
        if query_args.get("post_parent__in"):
            stmt = stmt.where(Post.post_parent.in_(query_args["post_parent__in"]))
        if query_args.get("post_parent__not_in"):
            stmt = stmt.where(
                Post.post_parent.not_in(query_args["post_parent__not_in"]),
            )
        if query_args.get("post_name__in"):
            stmt = stmt.where(Post.post_name.in_(query_args["post_name__in"]))
        if query_args.get("post_status"):
            stmt = stmt.where(Post.post_status.in_(query_args["post_status"]))
        if query_args.get("menu_order") is not None:
            stmt = stmt.where(Post.menu_order == query_args["menu_order"])
        if query_args.get("s"):
            pattern = f"%{query_args['s']}%"
            stmt = stmt.where(or_(
                Post.post_title.ilike(pattern),
                Post.post_excerpt.ilike(pattern),
                Post.post_content.ilike(pattern),
            ))

        total = (await self.db.execute(
            select(func.count()).select_from(stmt.subquery()),
        )).scalar_one()

        stmt = stmt.order_by(*self._order_by(query_args), Post.id.asc())
        per_page = int(query_args.get("posts_per_page") or 10)
        if query_args.get("offset") is not None:
            offset = int(query_args["offset"])
        else:
            offset = (int(query_args.get("paged") or 1) - 1) * per_page
        stmt = stmt.offset(offset).limit(per_page)

        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    def _order_by(self, query_args: dict[str, Any]) -> list:
        orderby = query_args.get("orderby", "menu_order")
        descending = str(query_args.get("order", "asc")).lower() == "desc"

        if orderby == "post__in" and query_args.get("post__in"):
            positions = {pid: i for i, pid in enumerate(query_args["post__in"])}
            return [case(positions, value=Post.id)]
        if orderby == "post_name__in" and query_args.get("post_name__in"):
            positions = {slug: i for i, slug in enumerate(query_args["post_name__in"])}
            return [case(positions, value=Post.post_name)]
        if orderby == "relevance" and query_args.get("s"):
            pattern = f"%{query_args['s']}%"
            return [
                case((Post.post_title.ilike(pattern), 0), else_=1),
                Post.created_at.desc(),
            ]

        column = _ORDER_COLUMNS.get(orderby, Post.created_at)
        return [column.desc() if descending else column.asc()]
