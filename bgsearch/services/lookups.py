# bgsearch/services/lookups.py
"""Read-only reference lists used by the search form pickers."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bgsearch.models import Award
from bgsearch.services.filters import clean_text, contains_text


async def list_named(session: AsyncSession, model, search: Optional[str] = "", limit: Optional[int] = None) -> list:
    """``[{id, name}]`` for any model with ``id``/``name`` columns, name ascending.

    ``limit=None`` means no cap (small fixed vocabularies like genres).
    """
    stmt = select(model.id, model.name).order_by(model.name.asc(), model.id.asc())

    term = clean_text(search)
    if term is not None:
        stmt = stmt.where(contains_text(model.name, term))
    if limit is not None:
        stmt = stmt.limit(limit)

    res = await session.execute(stmt)
    return [{"id": row.id, "name": row.name} for row in res.all()]


async def list_award_names(session: AsyncSession, search: Optional[str] = "", limit: Optional[int] = None) -> list:
    stmt = select(Award.award_name).distinct().order_by(Award.award_name.asc())

    term = clean_text(search)
    if term is not None:
        stmt = stmt.where(contains_text(Award.award_name, term))
    if limit is not None:
        stmt = stmt.limit(limit)

    res = await session.execute(stmt)
    return [{"name": name} for name in res.scalars().all()]


async def list_award_types(session: AsyncSession) -> list:
    stmt = select(Award.award_type).distinct().order_by(Award.award_type.asc())
    res = await session.execute(stmt)
    return [{"type": award_type} for award_type in res.scalars().all()]
