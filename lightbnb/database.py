import asyncio
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from structlog import get_logger
from typing import AsyncIterator, Optional

from lightbnb.config import Settings, settings as default_settings
from lightbnb.models import Base

logger = get_logger()

class Database:
    """Process-wide connection pool handle.

    Create one at startup, ``await start()`` it, pass it to every query
    function and ``await dispose()`` on shutdown. ``async with`` does both.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10, echo: bool = False):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._start_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Database":
        settings = settings or default_settings
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            echo=settings.ECHO_SQL,
        )

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database has not been started; call start() first")
        return self._engine

    @property
    def started(self) -> bool:
        return self._engine is not None

    async def start(self) -> None:
        async with self._start_lock:
            if self._engine is not None:
                return
            engine = create_async_engine(
                self.url,
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=True,
                echo=self.echo,
                hide_parameters=True,
            )
            try:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except Exception:
                await engine.dispose()
                raise
            # only a pinged engine is ever visible to callers
            self._engine = engine
        logger.info("Database pool started", pool_size=self.pool_size, max_overflow=self.max_overflow)

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        logger.info("Database pool disposed")

    async def create_schema(self) -> None:
        """Create any missing tables. Local development only; deployments run the alembic migrations."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        async with self.engine.connect() as conn:
            yield conn

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[AsyncConnection]:
        async with self.engine.begin() as conn:
            yield conn

    async def __aenter__(self) -> "Database":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()
