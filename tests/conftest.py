# tests/conftest.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from bgsearch.database import Base, Database
from bgsearch.main import create_app
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

BGG = "https://boardgamegeek.com"


def seed(s: Session) -> None:
    """Eight games with overlapping designers, awards and genres.

    Fixed result order (rank asc, rating desc, name asc):
    Viticulture, Agricola, Codenames, Tigris, Ra, Catan, Elfenland, Zoo.
    """
    knizia = Designer(id=1, name="Reiner Knizia", bgg_url=f"{BGG}/boardgamedesigner/2")
    rosenberg = Designer(id=2, name="Uwe Rosenberg", bgg_url=f"{BGG}/boardgamedesigner/10")
    teuber = Designer(id=3, name="Klaus Teuber")
    chvatil = Designer(id=4, name="Vlaada Chvatil")
    stegmaier = Designer(id=5, name="Jamey Stegmaier")
    moon = Designer(id=6, name="Alan R. Moon")

    menzel = Artist(id=1, name="Michael Menzel")
    franz = Artist(id=2, name="Klemens Franz")
    vohwinkel = Artist(id=3, name="Franz Vohwinkel")

    kosmos = Publisher(id=1, name="Kosmos")
    lookout = Publisher(id=2, name="Lookout Games")
    stonemaier = Publisher(id=3, name="Stonemaier Games")
    cge = Publisher(id=4, name="Czech Games Edition")

    worker = Mechanic(id=1, name="Worker Placement")
    tiles = Mechanic(id=2, name="Tile Placement")
    dice = Mechanic(id=3, name="Dice Rolling")
    auction = Mechanic(id=4, name="Auction/Bidding")

    economic = Category(id=1, name="Economic")
    farming = Category(id=2, name="Farming")
    animals = Category(id=3, name="Animals")
    words = Category(id=4, name="Word Game")

    strategy = Genre(id=1, name="Strategy", bgg_url=f"{BGG}/strategygames")
    family = Genre(id=2, name="Family")
    party = Genre(id=3, name="Party")

    sdj_1995 = Award(id=1, award_name="Spiel des Jahres", award_year=1995, award_type="Winner")
    dsp_2008 = Award(id=2, award_name="Deutscher Spiele Preis", award_year=2008, award_type="Winner",
                     award_category="Best Family/Adult Game")
    dsp_1998 = Award(id=3, award_name="Deutscher Spiele Preis", award_year=1998, award_type="Winner")
    sdj_1998_nominee = Award(id=4, award_name="Spiel des Jahres", award_year=1998, award_type="Nominee")
    meeples_1998 = Award(id=5, award_name="Meeples Choice Award", award_year=1998, award_type="Winner")
    sdj_2016 = Award(id=6, award_name="Spiel des Jahres", award_year=2016, award_type="Winner")
    sdj_1998 = Award(id=7, award_name="Spiel des Jahres", award_year=1998, award_type="Winner",
                     bgg_url=f"{BGG}/boardgamehonor/1998-spiel-des-jahres")

    catan = Game(
        id=1, bgg_id=13, primary_name="Catan", japanese_name="カタン", year_released=1995,
        image_url="https://img.example/catan.jpg",
        avg_rating=Decimal("7.10"), ratings_count=120000, comments_count=20000,
        min_players=3, max_players=4, min_playtime=60, max_playtime=120, min_age=10,
        weight=Decimal("2.30"), rank_overall=250,
    )
    catan.designers = [teuber]
    catan.artists = [menzel]
    catan.publishers = [kosmos]
    catan.mechanics = [dice]
    catan.categories = [economic]
    catan.awards = [sdj_1995]
    catan.genre_ranks = [GenreRank(genre=family, rank_in_genre=100)]
    catan.best_player_counts = [BestPlayerCount(player_count=4)]

    agricola = Game(
        id=2, bgg_id=31260, primary_name="Agricola", japanese_name="アグリコラ", year_released=2007,
        avg_rating=Decimal("7.90"), ratings_count=80000, comments_count=15000,
        min_players=1, max_players=5, min_playtime=30, max_playtime=150, min_age=12,
        weight=Decimal("3.64"), rank_overall=40,
    )
    agricola.designers = [rosenberg]
    agricola.artists = [franz]
    agricola.publishers = [lookout]
    agricola.mechanics = [worker]
    agricola.categories = [farming, economic, animals]
    agricola.awards = [dsp_2008]
    agricola.genre_ranks = [GenreRank(genre=strategy, rank_in_genre=30)]
    agricola.best_player_counts = [BestPlayerCount(player_count=4), BestPlayerCount(player_count=3)]

    tigris = Game(
        id=3, bgg_id=42, primary_name="Tigris & Euphrates", year_released=1997,
        avg_rating=Decimal("7.60"), ratings_count=25000, comments_count=5000,
        min_players=2, max_players=4, min_playtime=90, max_playtime=90, min_age=12,
        weight=Decimal("3.50"), rank_overall=100,
    )
    tigris.designers = [knizia]
    tigris.artists = [vohwinkel]
    tigris.publishers = [kosmos]
    tigris.mechanics = [tiles]
    tigris.awards = [dsp_1998]
    tigris.genre_ranks = [GenreRank(genre=strategy, rank_in_genre=120)]
    tigris.best_player_counts = [BestPlayerCount(player_count=4)]

    ra = Game(
        id=4, bgg_id=12, primary_name="Ra", japanese_name="ラー", year_released=1999,
        avg_rating=Decimal("7.30"), ratings_count=30000, comments_count=6000,
        min_players=2, max_players=5, min_playtime=45, max_playtime=60, min_age=12,
        weight=Decimal("2.50"), rank_overall=250,
    )
    ra.designers = [knizia]
    ra.artists = [vohwinkel]
    ra.mechanics = [auction]
    ra.awards = [sdj_1998_nominee, meeples_1998]
    ra.genre_ranks = [GenreRank(genre=strategy, rank_in_genre=200)]
    ra.best_player_counts = [BestPlayerCount(player_count=3)]

    viticulture = Game(
        id=5, bgg_id=183394, primary_name="Viticulture Essential Edition", japanese_name="ワイナリーの四季",
        year_released=2015,
        avg_rating=Decimal("8.00"), ratings_count=60000, comments_count=9000,
        min_players=1, max_players=6, min_playtime=45, max_playtime=90, min_age=14,
        weight=Decimal("2.90"), rank_overall=30,
    )
    viticulture.designers = [stegmaier]
    viticulture.publishers = [stonemaier]
    viticulture.mechanics = [worker]
    viticulture.genre_ranks = [GenreRank(genre=strategy, rank_in_genre=25)]
    viticulture.best_player_counts = [BestPlayerCount(player_count=5), BestPlayerCount(player_count=4)]

    codenames = Game(
        id=6, bgg_id=178900, primary_name="Codenames", japanese_name="コードネーム", year_released=2015,
        avg_rating=Decimal("7.60"), ratings_count=100000, comments_count=12000,
        min_players=2, max_players=8, min_playtime=15, max_playtime=15, min_age=14,
        weight=Decimal("1.30"), rank_overall=100,
    )
    codenames.designers = [chvatil]
    codenames.publishers = [cge]
    codenames.categories = [words]
    codenames.awards = [sdj_2016]
    codenames.genre_ranks = [GenreRank(genre=party, rank_in_genre=2), GenreRank(genre=family, rank_in_genre=None)]
    codenames.best_player_counts = [BestPlayerCount(player_count=8), BestPlayerCount(player_count=6)]

    # Unrated, unranked, no associations at all.
    zoo = Game(id=7, bgg_id=999001, primary_name="Zoo Prototype")

    elfenland = Game(
        id=8, bgg_id=10, primary_name="Elfenland", japanese_name="エルフェンランド", year_released=1998,
        avg_rating=Decimal("6.70"), ratings_count=15000, comments_count=3000,
        min_players=2, max_players=6, min_playtime=60, max_playtime=60, min_age=10,
        weight=Decimal("2.15"), rank_overall=900,
    )
    elfenland.designers = [moon]
    elfenland.awards = [sdj_1998]
    elfenland.genre_ranks = [GenreRank(genre=family, rank_in_genre=300)]
    elfenland.best_player_counts = [BestPlayerCount(player_count=4)]

    s.add_all([catan, agricola, tigris, ra, viticulture, codenames, zoo, elfenland])


@pytest.fixture(scope="session")
def db_url(tmp_path_factory):
    """File-backed SQLite seeded once through a sync engine."""
    path = tmp_path_factory.mktemp("db") / "boardgames.db"
    engine = create_engine(f"sqlite:///{path.as_posix()}", future=True)
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        seed(s)
        s.commit()
    engine.dispose()
    return f"sqlite+aiosqlite:///{path.as_posix()}"


@pytest.fixture
async def database(db_url):
    db = Database(db_url)
    db.connect()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def client(db_url):
    app = create_app(Database(db_url))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_client(tmp_path):
    """App whose database file cannot be opened."""
    url = f"sqlite+aiosqlite:///{(tmp_path / 'missing' / 'nope.db').as_posix()}"
    app = create_app(Database(url))
    with TestClient(app) as c:
        yield c
