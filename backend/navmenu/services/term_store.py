"""Term Store - taxonomy term lookups.

Invariants:
    - A term is only found within its own taxonomy
    - get_raw_field returns None for missing terms or unknown fields
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from navmenu.models.term import Term

_TERM_FIELDS = frozenset({"name", "slug", "description", "parent", "taxonomy"})


class SqlTermStore:
    """TermStore backed by the `terms` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_term(self, term_id: int, taxonomy: str | None = None) -> Term | None:
        term = await self.db.get(Term, term_id)
        if term is None or (taxonomy is not None and term.taxonomy != taxonomy):
            return None
        return term

    async def get_raw_field(
        self, field: str, term_id: int, taxonomy: str,
    ) -> Any | None:
        if field not in _TERM_FIELDS:
            return None
        term = await self.get_term(term_id, taxonomy)
        if term is None:
            return None
        return getattr(term, field)
