# bgsearch/schemas/games.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------
# ASSOCIATIONS
# ------------------

class EntityRef(CamelModel):
    id: int
    name: str
    external_url: Optional[str] = None

class AwardRef(CamelModel):
    id: int
    award_name: str
    award_year: int
    award_type: str
    award_category: Optional[str] = None
    external_url: Optional[str] = None

class GenreRanking(CamelModel):
    genre: EntityRef
    rank_in_genre: Optional[int] = None


# ------------------
# GAMES
# ------------------

class GameNameSuggestion(CamelModel):
    id: int
    primary_name: str
    japanese_name: Optional[str] = None
    year_released: Optional[int] = None
    image_url: Optional[str] = None

class GameResult(CamelModel):
    id: int
    bgg_id: int
    primary_name: str
    japanese_name: Optional[str] = None
    year_released: Optional[int] = None
    image_url: Optional[str] = None

    avg_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    comments_count: Optional[int] = None

    min_players: Optional[int] = None
    max_players: Optional[int] = None
    min_playtime: Optional[int] = None
    max_playtime: Optional[int] = None
    min_age: Optional[int] = None
    weight: Optional[float] = None
    rank_overall: Optional[int] = None

    designers: List[EntityRef] = []
    artists: List[EntityRef] = []
    publishers: List[EntityRef] = []
    mechanics: List[EntityRef] = []
    categories: List[EntityRef] = []
    awards: List[AwardRef] = []
    genre_rankings: List[GenreRanking] = []
    best_player_counts: List[int] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class GameSearchResponse(CamelModel):
    games: List[GameResult]
    total_count: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
