# bgsearch/routes/games.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bgsearch.config import settings
from bgsearch.database import get_db
from bgsearch.schemas.games import GameNameSuggestion, GameResult, GameSearchResponse
from bgsearch.services import games
from bgsearch.services.filters import GameSearchFilters, Range
from bgsearch.utils.convert import split_csv
from bgsearch.utils.errors import not_found, server_error

router = APIRouter(prefix="/games", tags=["Games"])


def _range(low, high) -> Optional[Range]:
    if low is None and high is None:
        return None
    return Range(low, high)


def search_filters(
    name: Optional[str] = Query(None, description="Substring of the primary or Japanese name"),
    year_min: Optional[int] = Query(None, alias="yearMin"),
    year_max: Optional[int] = Query(None, alias="yearMax"),
    player_count: Optional[int] = Query(None, alias="playerCount", description="Playable with exactly this many players"),
    best_player_count: Optional[int] = Query(None, alias="bestPlayerCount"),
    min_playtime: Optional[int] = Query(None, alias="minPlaytime"),
    max_playtime: Optional[int] = Query(None, alias="maxPlaytime"),
    min_age: Optional[int] = Query(None, alias="minAge"),
    min_rating: Optional[float] = Query(None, alias="minRating"),
    max_rank: Optional[int] = Query(None, alias="maxRank"),
    weight_min: Optional[float] = Query(None, alias="weightMin"),
    weight_max: Optional[float] = Query(None, alias="weightMax"),
    ratings_count_min: Optional[int] = Query(None, alias="ratingsCountMin"),
    ratings_count_max: Optional[int] = Query(None, alias="ratingsCountMax"),
    comments_count_min: Optional[int] = Query(None, alias="commentsCountMin"),
    comments_count_max: Optional[int] = Query(None, alias="commentsCountMax"),
    designers: Optional[str] = Query(None, description="Comma separated designer names (any of)"),
    artists: Optional[str] = Query(None, description="Comma separated artist names (any of)"),
    publishers: Optional[str] = Query(None, description="Comma separated publisher names (any of)"),
    mechanics: Optional[str] = Query(None, description="Comma separated mechanic names (any of)"),
    categories: Optional[str] = Query(None, description="Comma separated category names (any of)"),
    awards: Optional[str] = Query(None, description="Comma separated award names (any of)"),
    genre: Optional[str] = Query(None),
    award_year: Optional[int] = Query(None, alias="awardYear"),
    award_name: Optional[str] = Query(None, alias="awardName"),
    award_type: Optional[str] = Query(None, alias="awardType"),
) -> GameSearchFilters:
    """Query string -> GameSearchFilters. Absent parameters stay unconstrained."""
    return GameSearchFilters(
        name=name,
        year_released=_range(year_min, year_max),
        player_count=player_count,
        best_player_count=best_player_count,
        min_playtime=min_playtime,
        max_playtime=max_playtime,
        min_age=min_age,
        min_rating=min_rating,
        max_rank=max_rank,
        weight=_range(weight_min, weight_max),
        ratings_count=_range(ratings_count_min, ratings_count_max),
        comments_count=_range(comments_count_min, comments_count_max),
        designer_names=split_csv(designers),
        artist_names=split_csv(artists),
        publisher_names=split_csv(publishers),
        mechanic_names=split_csv(mechanics),
        category_names=split_csv(categories),
        award_names=split_csv(awards),
        genre_name=genre,
        award_year=award_year,
        award_name=award_name,
        award_type=award_type,
    )


@router.get("/names", response_model=List[GameNameSuggestion])
async def game_names(search: str = Query(""), db: AsyncSession = Depends(get_db)):
    """Name suggestions for the game name autocomplete."""
    try:
        return await games.suggest_game_names(db, search, limit=settings.GAME_NAME_SUGGESTION_LIMIT)
    except Exception as exc:
        return server_error("Failed to fetch game name suggestions", exc)


@router.get("/search", response_model=GameSearchResponse)
async def search(
    filters: GameSearchFilters = Depends(search_filters),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await games.search_games(db, filters, page=page, limit=limit)
    except Exception as exc:
        return server_error("An error occurred while searching games", exc, details=True)


@router.get("/bgg/{bgg_id}", response_model=GameResult)
async def game_by_bgg_id(bgg_id: int, db: AsyncSession = Depends(get_db)):
    try:
        game = await games.get_game_by_bgg_id(db, bgg_id)
    except Exception as exc:
        return server_error("Failed to fetch game", exc)
    return game or not_found("Game not found")


@router.get("/{game_id}", response_model=GameResult)
async def game_detail(game_id: int, db: AsyncSession = Depends(get_db)):
    try:
        game = await games.get_game(db, game_id)
    except Exception as exc:
        return server_error("Failed to fetch game", exc)
    return game or not_found("Game not found")
