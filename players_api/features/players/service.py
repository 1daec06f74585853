"""Player service for handling player lifecycle operations.

Thin orchestration over the repository, the password hasher and the event
notifier:
- Commands validate themselves and build the records to persist
- All database access is delegated to PlayerRepositoryInterface
- Events are handed to the notifier after every successful change

The email/nickname existence check is advisory: it runs as a separate query
before the write, so two concurrent requests can both pass it. The unique
constraints of the store are what finally reject the second write, which then
surfaces as a PersistError.

Password hashing is CPU bound and runs in the default executor so it does not
stall the event loop.
"""

import asyncio
from typing import Any, Optional

import structlog

from players_api.protocols import Notifier, PasswordHasher
from .exceptions import (
    AlreadyExistsError,
    ExistenceCheckError,
    HashingError,
    NotFoundError,
    PersistError,
    SearchError,
    StorageError,
    ValidationError,
)
from .models import (
    NewEvent,
    NewPlayer,
    Player,
    PlayerExistResult,
    PlayerFilter,
    PlayerID,
    SearchCriteria,
    SearchResult,
    UpdatePlayer,
)
from .repository import PlayerRepositoryInterface


class PlayerService:
    """Service for creating, updating, deleting and searching players.

    Holds no state besides its collaborators, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        repository: PlayerRepositoryInterface,
        hasher: PasswordHasher,
        notifier: Notifier,
        logger: Optional[Any] = None,
    ):
        """Initialize player service with its collaborators.

        :param repository: Player storage
        :param hasher: Password hasher
        :param notifier: Player event notifier
        :param logger: structlog logger, defaults to the module logger
        """
        self.repository = repository
        self.hasher = hasher
        self.notifier = notifier
        self.logger = logger or structlog.get_logger(__name__)

    async def create(self, new_player: NewPlayer) -> Player:
        """Create a new player.

        :param new_player: Player data with plaintext password
        :returns: Stored player including its generated id
        :raises ValidationError: If any field is empty
        :raises HashingError: If the password cannot be hashed
        :raises ExistenceCheckError: If the uniqueness check fails
        :raises AlreadyExistsError: If the email or nickname is taken
        :raises PersistError: If the player cannot be stored
        """
        self.logger.debug(
            "Starting to create a new player", new_player=new_player.obfuscated()
        )

        try:
            new_player.validate()
        except ValidationError as e:
            raise e.during("create")

        loop = asyncio.get_running_loop()
        try:
            hashed_password = await loop.run_in_executor(
                None, self.hasher.hash, new_player.password
            )
        except HashingError as e:
            self.logger.error("Hashing password failed", error=str(e))
            raise e.during("create")

        exist_result = await self._check_player_exists(
            new_player.to_player_filter(), "create"
        )
        if exist_result.exists:
            self.logger.debug(
                "Player with the given email or nickname already exists",
                email=new_player.email,
                nickname=new_player.nickname,
            )
            raise AlreadyExistsError(
                exist_result.email_exists, exist_result.nickname_exists, "create"
            )

        player = new_player.to_player(hashed_password)

        try:
            await self.repository.save(player)
        except StorageError as e:
            self.logger.error("Creating player failed", error=str(e))
            raise PersistError(operation="create", original_error=e) from e

        self.logger.debug("New player was created", player_id=str(player.id))
        self.notifier.notify(NewEvent.created(player.id))

        return player

    async def update(self, update_player: UpdatePlayer) -> Player:
        """Apply a partial update to an existing player.

        Returns the stored player untouched, without writing or notifying,
        when no field actually changes.

        :param update_player: Player id plus the fields to change
        :returns: Updated player
        :raises ValidationError: If a sent field is empty
        :raises ExistenceCheckError: If the uniqueness check fails
        :raises AlreadyExistsError: If the new email or nickname is taken
        :raises NotFoundError: If the player does not exist
        :raises HashingError: If the new password cannot be hashed
        :raises PersistError: If the player cannot be read or stored
        """
        self.logger.debug(
            "Starting to update player", update_player=update_player.obfuscated()
        )

        try:
            update_player.validate()
        except ValidationError as e:
            raise e.during("update")

        if update_player.updates_key_fields():
            exist_result = await self._check_player_exists(
                update_player.to_player_filter(), "update"
            )
            if exist_result.exists:
                raise AlreadyExistsError(
                    exist_result.email_exists, exist_result.nickname_exists, "update"
                )

        player = await self._get_existing_player(update_player.id, "update")

        loop = asyncio.get_running_loop()
        try:
            update_result = await loop.run_in_executor(
                None, update_player.to_player, player, self.hasher
            )
        except HashingError as e:
            self.logger.error(
                "Merging player update failed",
                player_id=str(update_player.id),
                error=str(e),
            )
            raise e.during("update")

        if not update_result.changes:
            self.logger.debug(
                "There is nothing to update in the player",
                player=player.obfuscated(),
            )
            return player

        try:
            await self.repository.update(update_result.player)
        except StorageError as e:
            self.logger.error("Updating player failed", error=str(e))
            raise PersistError(operation="update", original_error=e) from e

        self.logger.debug("Player was updated", player_id=str(player.id))
        self.notifier.notify(NewEvent.updated(player.id))

        return update_result.player

    async def delete(self, player_id: PlayerID) -> None:
        """Delete an existing player.

        :param player_id: Player identifier
        :raises NotFoundError: If the player does not exist
        :raises PersistError: If the player cannot be read or deleted
        """
        self.logger.debug("Starting to delete player", player_id=str(player_id))

        await self._get_existing_player(player_id, "delete")

        try:
            await self.repository.delete(player_id)
        except StorageError as e:
            self.logger.error("Deleting player failed", error=str(e))
            raise PersistError(operation="delete", original_error=e) from e

        self.logger.debug("Player was deleted", player_id=str(player_id))
        self.notifier.notify(NewEvent.deleted(player_id))

    async def list(self, criteria: SearchCriteria) -> SearchResult:
        """Search players.

        Criteria without a country return an empty result without querying
        storage; a zero limit defaults to 5.

        :param criteria: Search filters and pagination
        :returns: Matching page and total count
        :raises SearchError: If the search fails
        """
        self.logger.debug("Starting to search players", criteria=criteria)

        if criteria.is_empty():
            return SearchResult()

        criteria = criteria.with_default_pagination()

        try:
            return await self.repository.search(criteria)
        except StorageError as e:
            self.logger.error("Searching players failed", error=str(e))
            raise SearchError(operation="list", original_error=e) from e

    async def _check_player_exists(
        self, player_filter: PlayerFilter, operation: str
    ) -> PlayerExistResult:
        self.logger.debug(
            "Checking if a player with the given email or nickname already exists",
            email=player_filter.email,
            nickname=player_filter.nickname,
        )

        try:
            return await self.repository.get_players_with_email_or_nickname(
                player_filter
            )
        except StorageError as e:
            self.logger.error(
                "Checking if player already exists failed",
                email=player_filter.email,
                nickname=player_filter.nickname,
                error=str(e),
            )
            raise ExistenceCheckError(operation=operation, original_error=e) from e

    async def _get_existing_player(self, player_id: PlayerID, operation: str) -> Player:
        try:
            player = await self.repository.get_by_id(player_id)
        except StorageError as e:
            self.logger.error(
                "Getting player by id failed", player_id=str(player_id), error=str(e)
            )
            raise PersistError(
                "unable to load player", operation=operation, original_error=e
            ) from e

        if player is None:
            raise NotFoundError(operation=operation, context={"player_id": str(player_id)})

        return player
