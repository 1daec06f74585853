"""Database initialization script using SQLAlchemy create_all().

This script creates the players table defined in the SQLAlchemy models.
"""

import asyncio
import sys
from typing import NoReturn

import structlog
from sqlalchemy.exc import SQLAlchemyError

from players_api.core import Base, DatabaseManager, get_settings, setup_logging
from players_api.features.players import orm_models  # noqa: F401

logger = structlog.get_logger(__name__)


async def init_db(db_manager: DatabaseManager) -> None:
    """Create every table registered on Base.metadata.

    :param db_manager: Database manager whose engine is used
    :raises SQLAlchemyError: If database connection or table creation fails
    """
    async with db_manager.engine.begin() as conn:
        logger.info("Creating database tables...")
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialization completed successfully")


async def _main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)
    db_manager = DatabaseManager(settings)
    try:
        await init_db(db_manager)
    finally:
        await db_manager.close()


def main() -> NoReturn:
    """Main entry point for database initialization script."""
    try:
        asyncio.run(_main())
        sys.exit(0)
    except SQLAlchemyError as e:
        logger.error("Database initialization failed", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
