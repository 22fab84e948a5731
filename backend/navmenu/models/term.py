"""Term ORM - a node of a hierarchical taxonomy (categories, tags, menus).

Invariants:
    - (taxonomy, slug) is unique
    - Menu containers are terms in the nav_menu taxonomy
"""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from navmenu.db.base import Base


class Term(Base):
    """Taxonomy term."""
    __tablename__ = "terms"
    __table_args__ = (UniqueConstraint("taxonomy", "slug"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    taxonomy: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
