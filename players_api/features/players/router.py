"""Player API endpoints.

Business failures are reported in the ``error`` field of a 200 reply; only
malformed requests are rejected with an HTTP error status.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from .dependencies import PlayerEndpointsDep
from .exceptions import InvalidPlayerIDError
from .models import PlayerID, parse_player_id
from .schemas import (
    CreatePlayerReply,
    CreatePlayerRequest,
    DeletePlayerReply,
    SearchPlayersReply,
    UpdatePlayerReply,
    UpdatePlayerRequest,
)
from .transformers import (
    create_request_to_new_player,
    create_result_to_reply,
    delete_result_to_reply,
    query_to_search_criteria,
    search_result_to_reply,
    update_request_to_update_player,
    update_result_to_reply,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/players", tags=["players"])


def _player_id_or_400(player_id: str) -> PlayerID:
    try:
        return parse_player_id(player_id)
    except InvalidPlayerIDError:
        logger.debug("Invalid player id received", player_id=player_id)
        raise HTTPException(
            status_code=400,
            detail="request has invalid player id, it must be a uuid",
        )


@router.post("", response_model=CreatePlayerReply)
async def create_player(
    body: CreatePlayerRequest, endpoints: PlayerEndpointsDep
) -> CreatePlayerReply:
    """Create a player and return its id."""
    result = await endpoints.create_player.invoke(create_request_to_new_player(body))
    return create_result_to_reply(result)


@router.patch("/{player_id}", response_model=UpdatePlayerReply)
async def update_player(
    player_id: str, body: UpdatePlayerRequest, endpoints: PlayerEndpointsDep
) -> UpdatePlayerReply:
    """Update the fields sent in the body, leaving the others unchanged."""
    update = update_request_to_update_player(body, _player_id_or_400(player_id))
    result = await endpoints.update_player.invoke(update)
    return update_result_to_reply(result)


@router.delete("/{player_id}", response_model=DeletePlayerReply)
async def delete_player(
    player_id: str, endpoints: PlayerEndpointsDep
) -> DeletePlayerReply:
    """Delete a player."""
    result = await endpoints.delete_player.invoke(_player_id_or_400(player_id))
    return delete_result_to_reply(result)


@router.get("", response_model=SearchPlayersReply)
async def search_players(
    endpoints: PlayerEndpointsDep,
    country: Optional[str] = Query(None, description="Country to filter by"),
    limit: int = Query(0, ge=0, le=1000, description="Page size, 0 for the default"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
) -> SearchPlayersReply:
    """
    Search players by country.

    Returns an empty list when no country is given.

    Examples:
        GET /players?country=Spain
        GET /players?country=Spain&limit=10&offset=20
    """
    criteria = query_to_search_criteria(country, limit, offset)
    result = await endpoints.search_players.invoke(criteria)
    return search_result_to_reply(result)
