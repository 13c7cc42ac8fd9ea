"""
Database engine and session configuration.

The Database object is built once by the application factory and handed to
request handlers through app.state, so tests can run against their own
isolated instance.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from task_manager.db.base import Base


class Database:
    """Owns the async engine and the session factory for one process."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keeps data accessible after commit
        )

    async def create_all(self) -> None:
        """Create missing tables. Production deployments run alembic instead."""
        # Register models on Base.metadata
        import task_manager.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scope: commit on success, roll back on error.

        Usage:
            async with database.session() as db:
                ...
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
