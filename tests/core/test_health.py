"""
Tests for resource health reporting.
"""

from players_api.core import DatabaseManager, Settings, check_health


class StubResource:
    def __init__(self, name, error=None):
        self.name = name
        self.error = error

    async def health(self):
        return self.name, self.error


async def test_all_resources_healthy():
    report = await check_health(
        [StubResource("event-notifier"), StubResource("storage")],
        version="1.0.0",
        commit="abc123",
        build="2024-05-01",
    )

    assert report.healthy
    assert report.info == "version: 1.0.0, commit: abc123, build: 2024-05-01"
    assert report.resources == ["event-notifier", "ok", "storage", "ok"]


async def test_unhealthy_resource():
    report = await check_health(
        [StubResource("event-notifier", "worker stopped"), StubResource("storage")],
        version="1.0.0",
        commit="",
        build="",
    )

    assert not report.healthy
    assert report.resources == ["event-notifier", "worker stopped", "storage", "ok"]


async def test_database_health(tmp_path):
    manager = DatabaseManager(
        Settings(_env_file=None),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'health.db'}",
    )
    try:
        assert await manager.health() == ("storage", None)
    finally:
        await manager.close()
