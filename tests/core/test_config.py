"""
Tests for service settings.
"""

import pytest
from pydantic import ValidationError

from players_api.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PLAYERS_WEB_SERVER_PORT", raising=False)
    monkeypatch.delenv("PLAYERS_TIMEOUT_TO_PUBLISH_SEC", raising=False)

    settings = Settings(_env_file=None)

    assert settings.web_server_port == 8080
    assert settings.timeout_to_publish_sec == 3
    assert settings.event_queue_size == 10
    assert settings.rabbitmq_routing_key == "players.events"


def test_environment_prefix(monkeypatch):
    monkeypatch.setenv("PLAYERS_POSTGRES_HOST", "db.internal")
    monkeypatch.setenv("PLAYERS_POSTGRES_PORT", "6543")
    monkeypatch.setenv("PLAYERS_WEB_SERVER_PORT", "9090")

    settings = Settings(_env_file=None)

    assert settings.web_server_port == 9090
    assert settings.database_url.startswith("postgresql+asyncpg://")
    assert settings.database_url.endswith("@db.internal:6543/players")


@pytest.mark.parametrize("value", [0, -5])
def test_publish_timeout_below_one_second_uses_default(value):
    assert Settings(_env_file=None, timeout_to_publish_sec=value).timeout_to_publish_sec == 3


def test_event_queue_size_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, event_queue_size=0)
