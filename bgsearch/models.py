# bgsearch/models.py

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from bgsearch.database import Base


def _join_table(name: str, column: str, target: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column("game_id", Integer, ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
        Column(column, Integer, ForeignKey(f"{target}.id", ondelete="CASCADE"), primary_key=True),
    )


game_designers = _join_table("game_designers", "designer_id", "designers")
game_artists = _join_table("game_artists", "artist_id", "artists")
game_publishers = _join_table("game_publishers", "publisher_id", "publishers")
game_mechanics = _join_table("game_mechanics", "mechanic_id", "mechanics")
game_categories = _join_table("game_categories", "category_id", "categories")
game_awards = _join_table("game_awards", "award_id", "awards")


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint(
            "min_players IS NULL OR max_players IS NULL OR min_players <= max_players",
            name="ck_games_player_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    bgg_id = Column(Integer, unique=True, index=True, nullable=False)
    primary_name = Column(String, index=True, nullable=False)
    japanese_name = Column(String, index=True, nullable=True)
    year_released = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)

    avg_rating = Column(Numeric(6, 4), nullable=True)
    ratings_count = Column(Integer, nullable=True)
    comments_count = Column(Integer, nullable=True)

    min_players = Column(Integer, nullable=True)
    max_players = Column(Integer, nullable=True)
    min_playtime = Column(Integer, nullable=True)
    max_playtime = Column(Integer, nullable=True)
    min_age = Column(Integer, nullable=True)
    weight = Column(Numeric(5, 4), nullable=True)  # 0-5 complexity
    rank_overall = Column(Integer, index=True, nullable=True)

    created_at = Column(DateTime(timezone=False), server_default=func.now())
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now())

    designers = relationship("Designer", secondary=game_designers, order_by="Designer.name")
    artists = relationship("Artist", secondary=game_artists, order_by="Artist.name")
    publishers = relationship("Publisher", secondary=game_publishers, order_by="Publisher.name")
    mechanics = relationship("Mechanic", secondary=game_mechanics, order_by="Mechanic.name")
    categories = relationship("Category", secondary=game_categories, order_by="Category.name")
    awards = relationship("Award", secondary=game_awards, order_by=lambda: [Award.award_year, Award.award_name])
    genre_ranks = relationship("GenreRank", back_populates="game", cascade="all, delete-orphan")
    best_player_counts = relationship(
        "BestPlayerCount",
        cascade="all, delete-orphan",
        order_by="BestPlayerCount.player_count",
    )


class Designer(Base):
    __tablename__ = "designers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class Publisher(Base):
    __tablename__ = "publishers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class Mechanic(Base):
    __tablename__ = "mechanics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    bgg_url = Column(String, nullable=True)


class GenreRank(Base):
    """A game's position inside one genre ranking (e.g. Strategy, Family)."""

    __tablename__ = "game_genre_ranks"

    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), primary_key=True)
    genre_id = Column(Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True)
    rank_in_genre = Column(Integer, nullable=True)

    game = relationship("Game", back_populates="genre_ranks")
    genre = relationship("Genre")


class Award(Base):
    __tablename__ = "awards"

    id = Column(Integer, primary_key=True, index=True)
    award_name = Column(String, index=True, nullable=False)
    award_year = Column(Integer, nullable=False)
    award_type = Column(String, nullable=False)  # Winner / Nominee / ...
    award_category = Column(String, nullable=True)
    bgg_url = Column(String, nullable=True)


class BestPlayerCount(Base):
    __tablename__ = "game_best_player_counts"

    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), primary_key=True)
    player_count = Column(Integer, primary_key=True)
