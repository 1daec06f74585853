"""Transformers for converting between layers in players feature.

This module provides transformation functions for:
- ORM models ↔ domain records (storage adapter)
- API request schemas → domain commands (transport)
- Endpoint results → API reply schemas (transport)

Following the Data Mapper pattern to keep layers decoupled.
"""

from datetime import datetime, timezone

from .models import (
    UNSET,
    CreatePlayerResult,
    DeletePlayerResult,
    NewPlayer,
    Player,
    PlayerID,
    PlayerItem,
    SearchCriteria,
    SearchPlayersDataResult,
    UpdatePlayer,
    UpdatePlayerResult,
)
from .orm_models import PlayerORM
from .schemas import (
    CreatePlayerReply,
    CreatePlayerRequest,
    DeletePlayerReply,
    PlayerItemResponse,
    SearchPlayersReply,
    UpdatePlayerReply,
    UpdatePlayerRequest,
)


def _as_utc(value: datetime) -> datetime:
    # Some drivers (sqlite) hand back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def player_orm_to_player(player: PlayerORM) -> Player:
    """Transform a stored PlayerORM into a domain Player.

    :param player: Player ORM row
    :returns: Domain player with UTC timestamps
    """
    return Player(
        id=PlayerID(player.id),
        first_name=player.first_name,
        last_name=player.last_name,
        nickname=player.nickname,
        email=player.email,
        password=player.password,
        country=player.country,
        date_created=_as_utc(player.date_created),
        date_updated=_as_utc(player.date_updated),
    )


def player_to_orm(player: Player) -> PlayerORM:
    """Transform a domain Player into a new PlayerORM row."""
    return PlayerORM(
        id=player.id,
        first_name=player.first_name,
        last_name=player.last_name,
        nickname=player.nickname,
        email=player.email,
        password=player.password,
        country=player.country,
        date_created=player.date_created,
        date_updated=player.date_updated,
    )


def player_orm_to_item(player: PlayerORM) -> PlayerItem:
    return PlayerItem(
        id=PlayerID(player.id),
        first_name=player.first_name,
        last_name=player.last_name,
        nickname=player.nickname,
        country=player.country,
    )


def create_request_to_new_player(request: CreatePlayerRequest) -> NewPlayer:
    return NewPlayer(
        first_name=request.firstname,
        last_name=request.lastname,
        nickname=request.nickname,
        email=request.email,
        password=request.password,
        country=request.country,
    )


def update_request_to_update_player(
    request: UpdatePlayerRequest, player_id: PlayerID
) -> UpdatePlayer:
    """Build an UpdatePlayer keeping track of which fields were sent.

    Fields omitted from the body or sent as null stay UNSET; empty strings are
    kept so that validation can reject them.

    :param request: Parsed PATCH body
    :param player_id: Player to update
    :returns: Update command
    """

    def patch(name: str):
        value = getattr(request, name)
        if name not in request.model_fields_set or value is None:
            return UNSET
        return value

    return UpdatePlayer(
        id=player_id,
        first_name=patch("firstname"),
        last_name=patch("lastname"),
        nickname=patch("nickname"),
        email=patch("email"),
        password=patch("password"),
        country=patch("country"),
    )


def query_to_search_criteria(
    country: str | None, limit: int, offset: int
) -> SearchCriteria:
    return SearchCriteria(country=country, limit=limit, offset=offset)


def create_result_to_reply(result: CreatePlayerResult) -> CreatePlayerReply:
    return CreatePlayerReply(
        player_id=str(result.player_id) if result.player_id else None,
        error=result.err or None,
    )


def update_result_to_reply(result: UpdatePlayerResult) -> UpdatePlayerReply:
    return UpdatePlayerReply(ok=not result.err, error=result.err or None)


def delete_result_to_reply(result: DeletePlayerResult) -> DeletePlayerReply:
    return DeletePlayerReply(ok=not result.err, error=result.err or None)


def search_result_to_reply(result: SearchPlayersDataResult) -> SearchPlayersReply:
    """Transform a search endpoint result into the API reply."""
    if result.search_result is None:
        return SearchPlayersReply(error=result.err or None)

    search_result = result.search_result
    return SearchPlayersReply(
        items=[
            PlayerItemResponse(
                id=str(item.id),
                firstname=item.first_name,
                lastname=item.last_name,
                nickname=item.nickname,
                country=item.country,
            )
            for item in search_result.items
        ],
        total=search_result.total,
        limit=search_result.limit,
        offset=search_result.offset,
        error=result.err or None,
    )
