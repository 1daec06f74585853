"""Players feature module.

Router and dependencies are imported from their modules directly so that the
background tasks can depend on the domain models without pulling in FastAPI.
"""

from .exceptions import (
    AlreadyExistsError,
    NotFoundError,
    PlayerServiceError,
    ValidationError,
    Violation,
)
from .models import NewPlayer, Player, PlayerID, SearchCriteria, SearchResult, UpdatePlayer
from .service import PlayerService

__all__ = [
    "AlreadyExistsError",
    "NotFoundError",
    "PlayerServiceError",
    "ValidationError",
    "Violation",
    "NewPlayer",
    "Player",
    "PlayerID",
    "SearchCriteria",
    "SearchResult",
    "UpdatePlayer",
    "PlayerService",
]
