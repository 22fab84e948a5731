"""PostMeta ORM - key/value attributes attached to a post.

Invariants:
    - (post_id, meta_key) is unique: one value per key
    - meta_value is JSON so list-shaped values (e.g. _menu_item_classes) survive
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from navmenu.db.base import Base


class PostMeta(Base):
    """One meta entry of a post."""
    __tablename__ = "postmeta"
    __table_args__ = (UniqueConstraint("post_id", "meta_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_value: Mapped[Any] = mapped_column(JSON, nullable=True)
