"""Database connection and session management for PostgreSQL using SQLAlchemy with async support."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Tuple

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from .config import Settings

logger = structlog.get_logger(__name__)


class DatabaseManager:
    """Database connection and session manager."""

    resource_name = "storage"

    def __init__(self, settings: Settings, database_url: Optional[str] = None):
        """Initialize database manager with async engine.

        :param settings: Service settings
        :param database_url: Overrides the URL derived from settings
        """
        self.database_url = database_url or settings.database_url

        # Create async engine with default connection pool settings
        self.engine = create_async_engine(
            self.database_url,
            echo=settings.debug,  # Enable SQL logging in debug mode
            future=True,
        )

        # Create async session factory
        self.async_session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with proper cleanup."""
        async with self.async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def health(self) -> Tuple[str, Optional[str]]:
        """Ping the database.

        :returns: Resource name and an error message when the ping fails
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database ping failed", error=str(e))
            return self.resource_name, f"unable to ping db: {e}"
        return self.resource_name, None

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()
