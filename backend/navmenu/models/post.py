"""Post ORM - the generic content item every content kind is stored as.

Invariants:
    - id is an autoincrement integer: assigned once, never reused
    - post_content holds a menu item's description, post_excerpt its attr_title
    - post_parent mirrors _menu_item_menu_item_parent for menu items
    - meta rows are deleted with the post (FK ondelete CASCADE)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from navmenu.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """Generic content record (posts, pages, menu items...)."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="post", index=True,
    )
    post_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_name: Mapped[str] = mapped_column(
        String(200), nullable=False, default="", index=True,
    )
    post_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="publish",
    )
    post_parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    menu_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_password: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    post_author: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
