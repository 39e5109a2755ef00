# bgsearch/main.py

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bgsearch.config import settings
from bgsearch.database import Database, get_db
from bgsearch.models import Game
from bgsearch.routes.games import router as games_router
from bgsearch.routes.lookups import router as lookups_router
from bgsearch.utils.errors import not_found, server_error
from bgsearch.utils.logging import log_success


def create_app(database: Optional[Database] = None) -> FastAPI:
    db = database or Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    # Połączenie z bazą na starcie, zamknięcie przy wyłączeniu
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.connect()
        log_success("✅ Application started, database handle ready.")
        yield
        await db.dispose()

    app = FastAPI(title="Board Game Search API", lifespan=lifespan)
    app.state.db = db

    app.include_router(lookups_router)
    app.include_router(games_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/")
    async def read_root(session: AsyncSession = Depends(get_db)):
        try:
            games_count = (await session.execute(select(func.count()).select_from(Game))).scalar_one()
        except Exception as exc:
            return server_error("Failed to read database summary", exc)
        return {
            "message": "Board game search API is running!",
            "status": "ok",
            "games_count": games_count,
        }

    # Własne handlery błędów
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        return not_found()

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid query parameters", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        return server_error("Internal server error", exc)

    return app


app = create_app()
