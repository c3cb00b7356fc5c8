from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from knowledge_quiz.db.models import Question  # noqa: F401
from knowledge_quiz.db.models.base import Base

logger = structlog.get_logger(__name__)


class DatabaseUnavailableError(RuntimeError):
    pass


class Database:
    """Owns the connection pool for one application instance.

    Built explicitly at startup and handed to whatever needs persistence.
    ``open()`` creates the engine, ``close()`` disposes the pool.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 5,
        connect_timeout_sec: float = 5.0,
    ) -> None:
        self._database_url = database_url
        self._pool_size = pool_size
        self._connect_timeout_sec = connect_timeout_sec
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        if self._engine is not None:
            return
        connect_args: dict[str, object] = {}
        if make_url(self._database_url).get_backend_name() == "postgresql":
            connect_args["timeout"] = self._connect_timeout_sec
        self._engine = create_async_engine(
            self._database_url,
            pool_size=self._pool_size,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction that commits on success."""
        if self._session_factory is None:
            raise RuntimeError("database is not open")
        async with self._session_factory.begin() as session:
            yield session

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            logger.warning("database_ping_failed", error_type=type(exc).__name__)
            return False
        return True

    async def ensure_available(self) -> None:
        if not await self.ping():
            raise DatabaseUnavailableError("database is unreachable")

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
