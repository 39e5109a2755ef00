# bgsearch/services/games.py
"""Game suggestions, filtered search and detail lookups."""

from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bgsearch.models import Game, GenreRank
from bgsearch.schemas.games import (
    AwardRef,
    EntityRef,
    GameNameSuggestion,
    GameResult,
    GameSearchResponse,
    GenreRanking,
)
from bgsearch.services.filters import GAME_ORDERING, GameSearchFilters, clean_text, compose_filters, contains_text, where_clause
from bgsearch.utils.convert import page_count, to_float
from bgsearch.utils.logging import log_debug

GAME_RELATIONS = (
    selectinload(Game.designers),
    selectinload(Game.artists),
    selectinload(Game.publishers),
    selectinload(Game.mechanics),
    selectinload(Game.categories),
    selectinload(Game.awards),
    selectinload(Game.genre_ranks).selectinload(GenreRank.genre),
    selectinload(Game.best_player_counts),
)


# -----------------------------
# Suggestions
# -----------------------------

async def suggest_game_names(session: AsyncSession, search: Optional[str], limit: int = 20) -> List[GameNameSuggestion]:
    """Popularity-ranked games whose primary or Japanese name contains ``search``.

    A blank search returns ``[]`` without querying the database.
    """
    term = clean_text(search)
    if term is None:
        return []

    stmt = (
        select(Game.id, Game.primary_name, Game.japanese_name, Game.year_released, Game.image_url)
        .where(or_(contains_text(Game.primary_name, term), contains_text(Game.japanese_name, term)))
        .order_by(
            Game.ratings_count.desc().nullslast(),
            Game.avg_rating.desc().nullslast(),
            Game.primary_name.asc(),
        )
        .limit(limit)
    )
    res = await session.execute(stmt)
    return [
        GameNameSuggestion(
            id=row.id,
            primary_name=row.primary_name,
            japanese_name=row.japanese_name,
            year_released=row.year_released,
            image_url=row.image_url,
        )
        for row in res.all()
    ]


# -----------------------------
# Shaping
# -----------------------------

def _entity(obj) -> EntityRef:
    return EntityRef(id=obj.id, name=obj.name, external_url=obj.bgg_url)


def shape_game(game: Game) -> GameResult:
    """Flatten a game and its loaded associations into the API result shape."""
    return GameResult(
        id=game.id,
        bgg_id=game.bgg_id,
        primary_name=game.primary_name,
        japanese_name=game.japanese_name,
        year_released=game.year_released,
        image_url=game.image_url,
        avg_rating=to_float(game.avg_rating),
        ratings_count=game.ratings_count,
        comments_count=game.comments_count,
        min_players=game.min_players,
        max_players=game.max_players,
        min_playtime=game.min_playtime,
        max_playtime=game.max_playtime,
        min_age=game.min_age,
        weight=to_float(game.weight),
        rank_overall=game.rank_overall,
        designers=[_entity(d) for d in game.designers],
        artists=[_entity(a) for a in game.artists],
        publishers=[_entity(p) for p in game.publishers],
        mechanics=[_entity(m) for m in game.mechanics],
        categories=[_entity(c) for c in game.categories],
        awards=[
            AwardRef(
                id=a.id,
                award_name=a.award_name,
                award_year=a.award_year,
                award_type=a.award_type,
                award_category=a.award_category,
                external_url=a.bgg_url,
            )
            for a in game.awards
        ],
        genre_rankings=[
            GenreRanking(genre=_entity(gr.genre), rank_in_genre=gr.rank_in_genre)
            for gr in sorted(game.genre_ranks, key=lambda gr: gr.genre.name)
        ],
        best_player_counts=sorted(bpc.player_count for bpc in game.best_player_counts),
        created_at=game.created_at,
        updated_at=game.updated_at,
    )


# -----------------------------
# Search
# -----------------------------

async def search_games(
    session: AsyncSession,
    filters: Optional[GameSearchFilters] = None,
    page: int = 1,
    limit: int = 20,
) -> GameSearchResponse:
    predicates = compose_filters(filters or GameSearchFilters())
    where = where_clause(predicates)
    log_debug(f"Game search: {len(predicates)} filter(s), page={page}, limit={limit}")

    total_count = (await session.execute(select(func.count()).select_from(Game).where(where))).scalar_one()

    skip = (page - 1) * limit
    stmt = (
        select(Game)
        .where(where)
        .options(*GAME_RELATIONS)
        .order_by(*GAME_ORDERING)
        .offset(skip)
        .limit(limit)
    )
    res = await session.execute(stmt)
    games = res.scalars().all()

    total_pages = page_count(total_count, limit)
    return GameSearchResponse(
        games=[shape_game(g) for g in games],
        total_count=total_count,
        current_page=page,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


# -----------------------------
# Detail
# -----------------------------

async def _get_one(session: AsyncSession, condition) -> Optional[GameResult]:
    res = await session.execute(select(Game).where(condition).options(*GAME_RELATIONS))
    game = res.scalars().first()
    return shape_game(game) if game else None


async def get_game(session: AsyncSession, game_id: int) -> Optional[GameResult]:
    return await _get_one(session, Game.id == game_id)


async def get_game_by_bgg_id(session: AsyncSession, bgg_id: int) -> Optional[GameResult]:
    return await _get_one(session, Game.bgg_id == bgg_id)
