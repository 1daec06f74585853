"""Transport agnostic endpoints over the player service.

Each endpoint takes an untyped request, checks that it is the command it
expects and calls the service. Business failures are folded into the result's
``err`` field so transports can always send a well formed reply; only a request
of the wrong type raises, as InvalidRequestTypeError.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from .exceptions import InvalidRequestTypeError, PlayerServiceError
from .models import (
    CreatePlayerResult,
    DeletePlayerResult,
    NewPlayer,
    SearchCriteria,
    SearchPlayersDataResult,
    UpdatePlayer,
    UpdatePlayerResult,
)
from .service import PlayerService


class _Endpoint:
    def __init__(self, service: PlayerService, logger: Optional[Any] = None):
        self.service = service
        self.logger = logger or structlog.get_logger(__name__)

    def _invalid_request(self, message: str, request: Any) -> InvalidRequestTypeError:
        self.logger.error(message, received=type(request).__name__)
        return InvalidRequestTypeError(message, context={"received": type(request).__name__})


class CreatePlayerEndpoint(_Endpoint):
    async def invoke(self, request: Any) -> CreatePlayerResult:
        """Create a player from a NewPlayer request."""
        if not isinstance(request, NewPlayer):
            raise self._invalid_request("invalid new player type", request)

        try:
            player = await self.service.create(request)
        except PlayerServiceError as e:
            self.logger.error(
                "Creating player failed", new_player=request.obfuscated(), error=str(e)
            )
            return CreatePlayerResult(err=str(e))

        return CreatePlayerResult(player_id=player.id)


class UpdatePlayerEndpoint(_Endpoint):
    async def invoke(self, request: Any) -> UpdatePlayerResult:
        """Update a player from an UpdatePlayer request."""
        if not isinstance(request, UpdatePlayer):
            raise self._invalid_request("invalid update player type", request)

        try:
            await self.service.update(request)
        except PlayerServiceError as e:
            self.logger.error(
                "Updating player failed", update_player=request.obfuscated(), error=str(e)
            )
            return UpdatePlayerResult(err=str(e))

        return UpdatePlayerResult()


class DeletePlayerEndpoint(_Endpoint):
    async def invoke(self, request: Any) -> DeletePlayerResult:
        """Delete the player whose PlayerID is the request."""
        if not isinstance(request, uuid.UUID):
            raise self._invalid_request("invalid player id type", request)

        try:
            await self.service.delete(request)
        except PlayerServiceError as e:
            self.logger.error(
                "Deleting player with the given id failed",
                player_id=str(request),
                error=str(e),
            )
            return DeletePlayerResult(err=str(e))

        return DeletePlayerResult()


class SearchPlayersEndpoint(_Endpoint):
    async def invoke(self, request: Any) -> SearchPlayersDataResult:
        """Search players from a SearchCriteria request."""
        if not isinstance(request, SearchCriteria):
            raise self._invalid_request("invalid search players type", request)

        try:
            search_result = await self.service.list(request)
        except PlayerServiceError as e:
            self.logger.error(
                "Querying players with the given filter failed",
                criteria=request,
                error=str(e),
            )
            return SearchPlayersDataResult(err=str(e))

        return SearchPlayersDataResult(search_result=search_result)


@dataclass
class Endpoints:
    create_player: CreatePlayerEndpoint
    update_player: UpdatePlayerEndpoint
    delete_player: DeletePlayerEndpoint
    search_players: SearchPlayersEndpoint


def make_endpoints(service: PlayerService, logger: Optional[Any] = None) -> Endpoints:
    """Build every player endpoint around one service."""
    return Endpoints(
        create_player=CreatePlayerEndpoint(service, logger),
        update_player=UpdatePlayerEndpoint(service, logger),
        delete_player=DeletePlayerEndpoint(service, logger),
        search_players=SearchPlayersEndpoint(service, logger),
    )
