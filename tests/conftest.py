"""Shared fixtures for the players test suite."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from players_api.features.players.models import NewPlayer, Player, PlayerID
from players_api.features.players.repository import PlayerRepositoryInterface


@pytest.fixture
def player_id() -> PlayerID:
    return PlayerID(uuid.UUID("5f0b6a4e-3c3b-4b8e-9d8c-0a2b4c6d8e10"))


@pytest.fixture
def stored_player(player_id) -> Player:
    """Player as returned by storage."""
    created = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
    return Player(
        id=player_id,
        first_name="Alice",
        last_name="Smith",
        nickname="alice",
        email="alice@example.com",
        password=b"stored-hash",
        country="Spain",
        date_created=created,
        date_updated=created,
    )


@pytest.fixture
def new_player() -> NewPlayer:
    return NewPlayer(
        first_name="Alice",
        last_name="Smith",
        nickname="alice",
        email="alice@example.com",
        password="s3cret",
        country="Spain",
    )


@pytest.fixture
def mock_repository():
    return AsyncMock(spec=PlayerRepositoryInterface)


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash.side_effect = lambda password: f"hashed:{password}".encode()
    return hasher


@pytest.fixture
def mock_notifier():
    return MagicMock()
