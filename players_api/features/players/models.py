"""Domain value types for the players feature.

Commands (``NewPlayer``, ``UpdatePlayer``, ``SearchCriteria``) validate
themselves and know how to turn into ``Player`` records and storage filters.
Update commands use a tri-state per optional field: ``UNSET`` means the field
was not sent, ``""`` means it was sent empty (a validation error) and any other
string is the new value.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, NewType, Optional, Union

from .exceptions import InvalidPlayerIDError, ValidationError, Violation

if TYPE_CHECKING:
    from players_api.protocols import PasswordHasher

PlayerID = NewType("PlayerID", uuid.UUID)

REDACTED_VALUE = "[REDACTED]"
DEFAULT_SEARCH_LIMIT = 5

CREATED_EVENT = "new player was created"
UPDATED_EVENT = "player was updated"
DELETED_EVENT = "player was deleted"


class Unset(Enum):
    """Marker type for patch fields that were not sent."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET

PatchField = Union[str, Unset]


def new_player_id() -> PlayerID:
    """Generate a new random player id."""
    return PlayerID(uuid.uuid4())


def parse_player_id(value: str) -> PlayerID:
    """Parse a player id from its string form.

    :param value: UUID string
    :returns: Player id
    :raises InvalidPlayerIDError: If the value is not a UUID
    """
    try:
        return PlayerID(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidPlayerIDError(
            context={"value": str(value)}, original_error=e
        ) from e


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Player:
    """Full player record. ``password`` always holds a hash."""

    first_name: str
    last_name: str
    nickname: str
    email: str
    password: bytes
    country: str
    date_created: datetime
    date_updated: datetime
    id: Optional[PlayerID] = None

    def obfuscated(self) -> "Player":
        """Copy of this player that is safe to log."""
        return replace(self, password=REDACTED_VALUE.encode())


@dataclass
class PlayerFilter:
    """Existence check query; empty values never collide."""

    email: str = ""
    nickname: str = ""
    ignore_id: Optional[PlayerID] = None


@dataclass
class PlayerExistResult:
    email_exists: bool = False
    nickname_exists: bool = False

    @property
    def exists(self) -> bool:
        return self.email_exists or self.nickname_exists


@dataclass
class NewPlayer:
    """Data required to create a player. ``password`` is plaintext."""

    first_name: str
    last_name: str
    nickname: str
    email: str
    password: str
    country: str

    def validate(self) -> None:
        """Check that every field is filled.

        :raises ValidationError: With every violation found, in field order
        """
        violations: List[Violation] = []

        if not self.first_name:
            violations.append(Violation.EMPTY_FIRST_NAME)
        if not self.last_name:
            violations.append(Violation.EMPTY_LAST_NAME)
        if not self.nickname:
            violations.append(Violation.EMPTY_NICKNAME)
        if not self.email:
            violations.append(Violation.EMPTY_EMAIL)
        if not self.country:
            violations.append(Violation.EMPTY_COUNTRY)
        if not self.password:
            violations.append(Violation.EMPTY_PASSWORD)

        if violations:
            raise ValidationError(violations)

    def to_player(self, hashed_password: bytes) -> Player:
        """Build a new player record with a fresh id and timestamps."""
        now = utc_now()
        return Player(
            id=new_player_id(),
            first_name=self.first_name,
            last_name=self.last_name,
            nickname=self.nickname,
            email=self.email,
            password=hashed_password,
            country=self.country,
            date_created=now,
            date_updated=now,
        )

    def to_player_filter(self) -> PlayerFilter:
        return PlayerFilter(email=self.email, nickname=self.nickname)

    def obfuscated(self) -> "NewPlayer":
        return replace(self, password=REDACTED_VALUE)


@dataclass
class UpdateResult:
    """Outcome of merging an update into an existing player."""

    player: Optional[Player] = None
    changes: bool = False


def _is_present_empty(value: PatchField) -> bool:
    return value is not UNSET and value == ""


def _is_new_value(value: PatchField, current: str) -> bool:
    return value is not UNSET and value != "" and value != current


@dataclass
class UpdatePlayer:
    """Partial update of an existing player."""

    id: PlayerID
    first_name: PatchField = UNSET
    last_name: PatchField = UNSET
    nickname: PatchField = UNSET
    email: PatchField = UNSET
    password: PatchField = UNSET
    country: PatchField = UNSET

    def validate(self) -> None:
        """Check that present fields are not empty.

        :raises ValidationError: With every violation found, in field order
        """
        violations: List[Violation] = []

        if _is_present_empty(self.first_name):
            violations.append(Violation.EMPTY_FIRST_NAME)
        if _is_present_empty(self.last_name):
            violations.append(Violation.EMPTY_LAST_NAME)
        if _is_present_empty(self.nickname):
            violations.append(Violation.EMPTY_NICKNAME)
        if _is_present_empty(self.email):
            violations.append(Violation.EMPTY_EMAIL)
        if _is_present_empty(self.country):
            violations.append(Violation.EMPTY_COUNTRY)
        if _is_present_empty(self.password):
            violations.append(Violation.EMPTY_PASSWORD)

        if violations:
            raise ValidationError(violations)

    def updates_key_fields(self) -> bool:
        """Whether the update touches a uniqueness constrained field."""
        return self.email is not UNSET or self.nickname is not UNSET

    def to_player_filter(self) -> PlayerFilter:
        return PlayerFilter(
            email=self.email if self.email is not UNSET else "",
            nickname=self.nickname if self.nickname is not UNSET else "",
            ignore_id=self.id,
        )

    def to_player(self, player: Player, hasher: "PasswordHasher") -> UpdateResult:
        """Merge this update into a copy of ``player``.

        A present password is always re-hashed and counts as a change.

        :param player: Stored player
        :param hasher: Password hasher
        :returns: Updated copy and whether anything changed
        :raises HashingError: If the password cannot be hashed
        """
        updated = replace(player)
        changes = False

        for name in ("first_name", "last_name", "nickname", "country", "email"):
            value = getattr(self, name)
            if _is_new_value(value, getattr(updated, name)):
                setattr(updated, name, value)
                changes = True

        if self.password is not UNSET:
            updated.password = hasher.hash(self.password)
            changes = True

        if not changes:
            return UpdateResult()

        updated.date_updated = utc_now()
        return UpdateResult(player=updated, changes=True)

    def obfuscated(self) -> "UpdatePlayer":
        if self.password is UNSET:
            return replace(self)
        return replace(self, password=REDACTED_VALUE)


@dataclass
class SearchCriteria:
    """Player search filters and pagination. A limit of 0 means unset."""

    country: Optional[str] = None
    limit: int = 0
    offset: int = 0

    def is_empty(self) -> bool:
        return not self.country

    def with_default_pagination(self) -> "SearchCriteria":
        if self.limit == 0:
            return replace(self, limit=DEFAULT_SEARCH_LIMIT)
        return replace(self)


@dataclass
class PlayerItem:
    """Listing projection of a player, without email or password."""

    id: PlayerID
    first_name: str
    last_name: str
    nickname: str
    country: str


@dataclass
class SearchResult:
    items: List[PlayerItem] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0


@dataclass
class NewEvent:
    """Domain event published for player changes."""

    player_id: str
    event: str

    @classmethod
    def created(cls, player_id: PlayerID) -> "NewEvent":
        return cls(player_id=str(player_id), event=CREATED_EVENT)

    @classmethod
    def updated(cls, player_id: PlayerID) -> "NewEvent":
        return cls(player_id=str(player_id), event=UPDATED_EVENT)

    @classmethod
    def deleted(cls, player_id: PlayerID) -> "NewEvent":
        return cls(player_id=str(player_id), event=DELETED_EVENT)


@dataclass
class CreatePlayerResult:
    player_id: Optional[PlayerID] = None
    err: str = ""


@dataclass
class UpdatePlayerResult:
    err: str = ""


@dataclass
class DeletePlayerResult:
    err: str = ""


@dataclass
class SearchPlayersDataResult:
    search_result: Optional[SearchResult] = None
    err: str = ""
