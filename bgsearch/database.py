# bgsearch/database.py

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from bgsearch.utils.logging import log_info

Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one process.

    Nothing is opened at construction time. ``connect()`` is called on
    application startup and ``dispose()`` on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, future=True)
        self._sessionmaker = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        log_info(f"Database engine created ({self.engine.url.render_as_string(hide_password=True)})")

    async def dispose(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        log_info("Database engine disposed")

    async def init_models(self) -> None:
        """Create all tables (idempotent). Only used for fresh databases and tests."""
        import bgsearch.models  # noqa: F401  registers tables on Base.metadata

        if self.engine is None:
            raise RuntimeError("Database is not connected")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        async with self._sessionmaker() as session:
            yield session


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session from the app's Database."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
