"""TermRelationship ORM - assigns posts to terms (menu items to their menu)."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from navmenu.db.base import Base


class TermRelationship(Base):
    __tablename__ = "term_relationships"

    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True,
    )
    term_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True,
    )
