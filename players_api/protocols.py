"""Protocol definitions for the collaborators of the player service."""

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from players_api.features.players.models import NewEvent


class PasswordHasher(Protocol):
    """Protocol for password hashing mechanisms."""

    @abstractmethod
    def hash(self, password: str) -> bytes:
        """Hash a plaintext password.

        :raises HashingError: If the password cannot be hashed
        """
        ...


class Notifier(Protocol):
    """Protocol for player event notifiers."""

    @abstractmethod
    def notify(self, event: "NewEvent") -> None:
        """Hand over an event without blocking the caller."""
        ...


class EventBus(Protocol):
    """Protocol for event bus publishers."""

    @abstractmethod
    async def publish(self, event: "NewEvent") -> None:
        """Publish an event, raising on failure."""
        ...
