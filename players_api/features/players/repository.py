"""Repository pattern implementation for players feature.

Provides collection-like interface for accessing player domain objects.
Isolates data access logic from business logic following Martin Fowler's Repository Pattern.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import StorageError
from .models import (
    Player,
    PlayerExistResult,
    PlayerFilter,
    PlayerID,
    SearchCriteria,
    SearchResult,
)
from .orm_models import PlayerORM
from .transformers import player_orm_to_item, player_orm_to_player, player_to_orm

logger = structlog.get_logger(__name__)


class PlayerRepositoryInterface(ABC):
    """Interface for player repository.

    Defines contract for data access operations.
    Enables mocking and potential swap of implementations (e.g., caching layer).
    Every operation raises StorageError when the underlying store fails.
    """

    @abstractmethod
    async def save(self, player: Player) -> None:
        """Persist a new player.

        :param player: Player with its generated id
        """
        pass

    @abstractmethod
    async def update(self, player: Player) -> None:
        """Overwrite the stored record of an existing player.

        :param player: Player with changes
        """
        pass

    @abstractmethod
    async def delete(self, player_id: PlayerID) -> None:
        """Remove a player.

        :param player_id: Player identifier
        """
        pass

    @abstractmethod
    async def get_by_id(self, player_id: PlayerID) -> Optional[Player]:
        """Get player by id.

        :param player_id: Player identifier
        :returns: Player if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_players_with_email_or_nickname(
        self, player_filter: PlayerFilter
    ) -> PlayerExistResult:
        """Check whether other players already use an email or nickname.

        Empty filter values never collide; ``ignore_id`` is excluded from the check.

        :param player_filter: Email, nickname and optional id to ignore
        :returns: Which of the two values are taken
        """
        pass

    @abstractmethod
    async def search(self, criteria: SearchCriteria) -> SearchResult:
        """Search players matching the criteria.

        :param criteria: Filters and pagination
        :returns: Page of items plus the total number of matches
        """
        pass


class SQLAlchemyPlayerRepository(PlayerRepositoryInterface):
    """SQLAlchemy implementation of player repository.

    Handles all database operations for players using SQLAlchemy async sessions.
    Translates repository interface to SQLAlchemy queries.
    """

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        :param db: Async database session
        """
        self.db = db

    async def save(self, player: Player) -> None:
        """Insert a new player row."""
        logger.debug("storing_player", player_id=str(player.id))
        try:
            self.db.add(player_to_orm(player))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("store_player_failed", player_id=str(player.id), error=str(e))
            raise StorageError(
                "player cannot be stored", operation="save", original_error=e
            ) from e

    async def update(self, player: Player) -> None:
        """Overwrite the mutable columns of a player row."""
        logger.debug("updating_player", player_id=str(player.id))
        stmt = (
            update(PlayerORM)
            .where(PlayerORM.id == player.id)
            .values(
                first_name=player.first_name,
                last_name=player.last_name,
                nickname=player.nickname,
                email=player.email,
                country=player.country,
                password=player.password,
                date_updated=player.date_updated,
            )
        )
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("update_player_failed", player_id=str(player.id), error=str(e))
            raise StorageError(
                "player cannot be updated", operation="update", original_error=e
            ) from e

    async def delete(self, player_id: PlayerID) -> None:
        """Delete a player row."""
        logger.debug("deleting_player", player_id=str(player_id))
        try:
            await self.db.execute(delete(PlayerORM).where(PlayerORM.id == player_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("delete_player_failed", player_id=str(player_id), error=str(e))
            raise StorageError(
                "player cannot be deleted", operation="delete", original_error=e
            ) from e

    async def get_by_id(self, player_id: PlayerID) -> Optional[Player]:
        """Get player by id."""
        stmt = select(PlayerORM).where(PlayerORM.id == player_id)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("get_player_failed", player_id=str(player_id), error=str(e))
            raise StorageError(
                "player cannot be read in the database",
                operation="get_by_id",
                original_error=e,
            ) from e

        player = result.scalar_one_or_none()
        if player is None:
            return None

        logger.debug("player_retrieved", player_id=str(player_id))
        return player_orm_to_player(player)

    async def get_players_with_email_or_nickname(
        self, player_filter: PlayerFilter
    ) -> PlayerExistResult:
        """Count players using the filter email and nickname."""
        try:
            email_count = await self._count_matching(
                PlayerORM.email, player_filter.email, player_filter
            )
            nickname_count = await self._count_matching(
                PlayerORM.nickname, player_filter.nickname, player_filter
            )
        except SQLAlchemyError as e:
            logger.error(
                "check_players_exist_failed",
                email=player_filter.email,
                nickname=player_filter.nickname,
                error=str(e),
            )
            raise StorageError(
                "players cannot be read in the database",
                operation="get_players_with_email_or_nickname",
                original_error=e,
            ) from e

        return PlayerExistResult(
            email_exists=email_count > 0,
            nickname_exists=nickname_count > 0,
        )

    async def _count_matching(
        self, column, value: str, player_filter: PlayerFilter
    ) -> int:
        if not value:
            return 0

        stmt = select(func.count()).select_from(PlayerORM).where(column == value)
        if player_filter.ignore_id is not None:
            stmt = stmt.where(PlayerORM.id != player_filter.ignore_id)

        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        """Search players by country with limit/offset pagination."""
        conditions = []
        if criteria.country:
            conditions.append(PlayerORM.country == criteria.country)

        count_stmt = select(func.count()).select_from(PlayerORM).where(*conditions)
        query_stmt = (
            select(PlayerORM)
            .where(*conditions)
            .order_by(PlayerORM.date_created, PlayerORM.id)
            .limit(criteria.limit)
            .offset(criteria.offset)
        )

        try:
            total = (await self.db.execute(count_stmt)).scalar_one()
            rows = (await self.db.execute(query_stmt)).scalars().all()
        except SQLAlchemyError as e:
            logger.error(
                "search_players_failed",
                country=criteria.country,
                limit=criteria.limit,
                offset=criteria.offset,
                error=str(e),
            )
            raise StorageError(
                "unable to search players", operation="search", original_error=e
            ) from e

        logger.debug(
            "players_searched",
            country=criteria.country,
            total=total,
            returned=len(rows),
        )

        return SearchResult(
            items=[player_orm_to_item(row) for row in rows],
            total=total,
            limit=criteria.limit,
            offset=criteria.offset,
        )
