"""Dependencies for the players feature.

Injects repository, hasher and notifier into the service following the
dependency inversion principle. App-wide collaborators live on ``app.state``
and are created by the application lifespan.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from players_api.protocols import Notifier, PasswordHasher
from .endpoints import Endpoints, make_endpoints
from .repository import PlayerRepositoryInterface, SQLAlchemyPlayerRepository
from .service import PlayerService


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session bound to the request."""
    async with request.app.state.db_manager.get_session() as session:
        yield session


async def get_player_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerRepositoryInterface:
    """Get player repository instance.

    :param db: Database session
    :returns: Player repository implementation
    """
    return SQLAlchemyPlayerRepository(db)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


async def get_player_service(
    repository: Annotated[PlayerRepositoryInterface, Depends(get_player_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
) -> PlayerService:
    """Get player service instance.

    :param repository: Player repository
    :param hasher: Password hasher
    :param notifier: Player event notifier
    :returns: Player service with injected dependencies
    """
    return PlayerService(repository, hasher, notifier)


async def get_player_endpoints(
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> Endpoints:
    return make_endpoints(service)


# Type aliases for cleaner dependency injection
PlayerServiceDep = Annotated[PlayerService, Depends(get_player_service)]
PlayerEndpointsDep = Annotated[Endpoints, Depends(get_player_endpoints)]

__all__ = [
    "get_db",
    "get_player_repository",
    "get_password_hasher",
    "get_notifier",
    "get_player_service",
    "get_player_endpoints",
    "PlayerServiceDep",
    "PlayerEndpointsDep",
]
