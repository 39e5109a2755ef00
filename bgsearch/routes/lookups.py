# bgsearch/routes/lookups.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bgsearch.config import settings
from bgsearch.database import get_db
from bgsearch.models import Artist, Category, Designer, Genre, Mechanic, Publisher
from bgsearch.schemas.lookups import AwardNameItem, AwardTypeItem, NamedEntity
from bgsearch.services import lookups
from bgsearch.utils.errors import server_error

router = APIRouter(tags=["Lookups"])


# ----------------------------- PEOPLE / COMPANIES -----------------------------

@router.get("/artists", response_model=List[NamedEntity])
async def list_artists(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Artist, search, limit=settings.LOOKUP_LIMIT)
    except Exception as exc:
        return server_error("Failed to fetch artists", exc)

@router.get("/designers", response_model=List[NamedEntity])
async def list_designers(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Designer, search, limit=settings.LOOKUP_LIMIT)
    except Exception as exc:
        return server_error("Failed to fetch designers", exc)

@router.get("/publishers", response_model=List[NamedEntity])
async def list_publishers(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Publisher, search, limit=settings.LOOKUP_LIMIT)
    except Exception as exc:
        return server_error("Failed to fetch publishers", exc)


# ----------------------------- VOCABULARIES -----------------------------

@router.get("/categories", response_model=List[NamedEntity])
async def list_categories(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Category, search)
    except Exception as exc:
        return server_error("Failed to fetch categories", exc)

@router.get("/genres", response_model=List[NamedEntity])
async def list_genres(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Genre, search)
    except Exception as exc:
        return server_error("Failed to fetch genres", exc)

@router.get("/mechanics", response_model=List[NamedEntity])
async def list_mechanics(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_named(db, Mechanic, search)
    except Exception as exc:
        return server_error("Failed to fetch mechanics", exc)


# ----------------------------- AWARDS -----------------------------

@router.get("/awards/names", response_model=List[AwardNameItem])
async def list_award_names(search: str = "", db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_award_names(db, search, limit=settings.LOOKUP_LIMIT)
    except Exception as exc:
        return server_error("Failed to fetch award names", exc)

@router.get("/awards/types", response_model=List[AwardTypeItem])
async def list_award_types(db: AsyncSession = Depends(get_db)):
    try:
        return await lookups.list_award_types(db)
    except Exception as exc:
        return server_error("Failed to fetch award types", exc)
