# bgsearch/services/filters.py
"""Translate search parameters into SQLAlchemy WHERE clauses.

Every field of ``GameSearchFilters`` that is present contributes exactly one
predicate; the predicates are ANDed together by ``where_clause``. A field is
present when it is not ``None``. Zero is a real value (``min_age=0`` is a
filter), while blank strings and empty name lists count as absent.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from sqlalchemy import and_, or_, true
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from bgsearch.models import (
    Artist,
    Award,
    BestPlayerCount,
    Category,
    Designer,
    Game,
    Genre,
    GenreRank,
    Mechanic,
    Publisher,
)

Number = Union[int, float]


@dataclass(frozen=True)
class Range:
    min: Optional[Number] = None
    max: Optional[Number] = None

    @property
    def empty(self) -> bool:
        return self.min is None and self.max is None


@dataclass
class GameSearchFilters:
    name: Optional[str] = None
    year_released: Optional[Range] = None

    player_count: Optional[int] = None
    best_player_count: Optional[int] = None
    min_playtime: Optional[int] = None
    max_playtime: Optional[int] = None
    min_age: Optional[int] = None

    min_rating: Optional[float] = None
    max_rank: Optional[int] = None
    weight: Optional[Range] = None
    ratings_count: Optional[Range] = None
    comments_count: Optional[Range] = None

    designer_names: List[str] = field(default_factory=list)
    artist_names: List[str] = field(default_factory=list)
    publisher_names: List[str] = field(default_factory=list)
    mechanic_names: List[str] = field(default_factory=list)
    category_names: List[str] = field(default_factory=list)
    award_names: List[str] = field(default_factory=list)
    genre_name: Optional[str] = None

    award_year: Optional[int] = None
    award_name: Optional[str] = None
    award_type: Optional[str] = None


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------

def contains_text(column: InstrumentedAttribute, term: str) -> ColumnElement:
    """Case-insensitive substring match; `%` and `_` in ``term`` match literally."""
    return column.icontains(term, autoescape=True)


@dataclass(frozen=True)
class NameContains:
    term: str

    def clause(self) -> ColumnElement:
        return or_(contains_text(Game.primary_name, self.term), contains_text(Game.japanese_name, self.term))


@dataclass(frozen=True, eq=False)
class ColumnRange:
    column: InstrumentedAttribute
    low: Optional[Number] = None
    high: Optional[Number] = None

    def clause(self) -> ColumnElement:
        bounds = []
        if self.low is not None:
            bounds.append(self.column >= self.low)
        if self.high is not None:
            bounds.append(self.column <= self.high)
        return and_(*bounds)


@dataclass(frozen=True)
class PlayerCountFits:
    count: int

    def clause(self) -> ColumnElement:
        return and_(Game.min_players <= self.count, Game.max_players >= self.count)


@dataclass(frozen=True)
class BestPlayerCountIs:
    count: int

    def clause(self) -> ColumnElement:
        return Game.best_player_counts.any(BestPlayerCount.player_count == self.count)


@dataclass(frozen=True, eq=False)
class RelatedNameIn:
    """Game has at least one related row whose name is in ``names``."""

    relation: InstrumentedAttribute
    name_column: InstrumentedAttribute
    names: tuple

    def clause(self) -> ColumnElement:
        return self.relation.any(self.name_column.in_(self.names))


@dataclass(frozen=True)
class GenreIs:
    name: str

    def clause(self) -> ColumnElement:
        return Game.genre_ranks.any(GenreRank.genre.has(Genre.name == self.name))


@dataclass(frozen=True)
class AwardMatches:
    """One single award must satisfy every supplied part at once."""

    year: Optional[int] = None
    name: Optional[str] = None
    type: Optional[str] = None

    def clause(self) -> ColumnElement:
        parts = []
        if self.year is not None:
            parts.append(Award.award_year == self.year)
        if self.name is not None:
            parts.append(contains_text(Award.award_name, self.name))
        if self.type is not None:
            parts.append(Award.award_type == self.type)
        return Game.awards.any(and_(*parts))


Predicate = Union[
    NameContains,
    ColumnRange,
    PlayerCountFits,
    BestPlayerCountIs,
    RelatedNameIn,
    GenreIs,
    AwardMatches,
]


# -----------------------------------------------------------------------------
# Composition
# -----------------------------------------------------------------------------

def clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None


def clean_names(values: Optional[Sequence[str]]) -> tuple:
    if not values:
        return ()
    return tuple(v.strip() for v in values if v and v.strip())


RELATED_NAME_FILTERS = (
    ("designer_names", Game.designers, Designer.name),
    ("artist_names", Game.artists, Artist.name),
    ("publisher_names", Game.publishers, Publisher.name),
    ("mechanic_names", Game.mechanics, Mechanic.name),
    ("category_names", Game.categories, Category.name),
    ("award_names", Game.awards, Award.award_name),
)


def compose_filters(filters: GameSearchFilters) -> List[Predicate]:
    predicates: List[Predicate] = []

    name = clean_text(filters.name)
    if name is not None:
        predicates.append(NameContains(name))

    if filters.year_released is not None and not filters.year_released.empty:
        predicates.append(ColumnRange(Game.year_released, filters.year_released.min, filters.year_released.max))

    if filters.player_count is not None:
        predicates.append(PlayerCountFits(filters.player_count))
    if filters.best_player_count is not None:
        predicates.append(BestPlayerCountIs(filters.best_player_count))

    if filters.min_playtime is not None:
        predicates.append(ColumnRange(Game.min_playtime, low=filters.min_playtime))
    if filters.max_playtime is not None:
        predicates.append(ColumnRange(Game.max_playtime, high=filters.max_playtime))
    if filters.min_age is not None:
        predicates.append(ColumnRange(Game.min_age, low=filters.min_age))
    if filters.min_rating is not None:
        predicates.append(ColumnRange(Game.avg_rating, low=filters.min_rating))
    if filters.max_rank is not None:
        predicates.append(ColumnRange(Game.rank_overall, high=filters.max_rank))

    for attr, column in (
        ("weight", Game.weight),
        ("ratings_count", Game.ratings_count),
        ("comments_count", Game.comments_count),
    ):
        rng = getattr(filters, attr)
        if rng is not None and not rng.empty:
            predicates.append(ColumnRange(column, rng.min, rng.max))

    for attr, relation, name_column in RELATED_NAME_FILTERS:
        names = clean_names(getattr(filters, attr))
        if names:
            predicates.append(RelatedNameIn(relation, name_column, names))

    genre = clean_text(filters.genre_name)
    if genre is not None:
        predicates.append(GenreIs(genre))

    award_name = clean_text(filters.award_name)
    award_type = clean_text(filters.award_type)
    if filters.award_year is not None or award_name is not None or award_type is not None:
        predicates.append(AwardMatches(filters.award_year, award_name, award_type))

    return predicates


def where_clause(predicates: Sequence[Predicate]) -> ColumnElement:
    if not predicates:
        return true()
    return and_(*(p.clause() for p in predicates))


# Fixed result order: best overall rank first, then rating, then name.
GAME_ORDERING = (
    Game.rank_overall.asc().nullslast(),
    Game.avg_rating.desc().nullslast(),
    Game.primary_name.asc(),
    Game.id.asc(),
)
