"""Error taxonomy of the players feature.

Errors raised by the player service carry the operation that failed; their text
starts with the matching context (``unable to create player: ...``) and keeps
the inner cause.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from players_api.core.exceptions import DatabaseError, ServiceException

OPERATION_CONTEXTS = {
    "create": "unable to create player",
    "update": "unable to update player",
    "delete": "unable to delete player",
    "list": "unable to list players",
}


class Violation(Enum):
    """Field level validation violations, declared in reporting order."""

    EMPTY_FIRST_NAME = "first name is empty"
    EMPTY_LAST_NAME = "last name is empty"
    EMPTY_NICKNAME = "nickname is empty"
    EMPTY_EMAIL = "email is empty"
    EMPTY_COUNTRY = "country is empty"
    EMPTY_PASSWORD = "password is empty"


class StorageError(DatabaseError):
    """Raised by storage adapters when reading or writing players fails."""


class PlayerServiceError(ServiceException):
    """Base class for business failures of the player service."""

    default_message = "player operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message or self.default_message,
            operation=operation,
            context=context,
            original_error=original_error,
        )

    def during(self, operation: str) -> "PlayerServiceError":
        """Attach the failing service operation and return the same error."""
        self.operation = operation
        return self

    def __str__(self) -> str:
        detail = super().__str__()
        prefix = OPERATION_CONTEXTS.get(self.operation or "")
        if prefix:
            return f"{prefix}: {detail}"
        return detail


class ValidationError(PlayerServiceError):
    """Aggregate of every field violation found in a command."""

    def __init__(self, violations: List[Violation], operation: Optional[str] = None):
        self.violations = list(violations)
        super().__init__(
            message="\n".join(v.value for v in self.violations),
            operation=operation,
            context={"violations": [v.name for v in self.violations]},
        )


class AlreadyExistsError(PlayerServiceError):
    """Another player already uses the given email and/or nickname."""

    def __init__(
        self,
        email_exists: bool,
        nickname_exists: bool,
        operation: Optional[str] = None,
    ):
        self.email_exists = email_exists
        self.nickname_exists = nickname_exists

        if email_exists and nickname_exists:
            message = "player with the given email or nickname already exists"
        elif email_exists:
            message = "player with the given email already exists"
        else:
            message = "player with the given nickname already exists"

        super().__init__(message=message, operation=operation)


class NotFoundError(PlayerServiceError):
    default_message = "player doesn't exist"


class HashingError(PlayerServiceError):
    default_message = "unable to hash password"


class PersistError(PlayerServiceError):
    default_message = "player storage failed"


class ExistenceCheckError(PlayerServiceError):
    default_message = "unable to check if player already exists"


class SearchError(PlayerServiceError):
    default_message = "unable to search players"


class InvalidPlayerIDError(PlayerServiceError):
    default_message = "invalid player id"


class InvalidRequestTypeError(ServiceException):
    """An endpoint received a request of the wrong type.

    This is a programming error in the transport layer, not a business failure.
    """
