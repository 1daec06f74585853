"""
Tests for the player event notifier.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from players_api.features.players.models import NewEvent
from players_api.tasks.notifier import EventNotifier


def make_event(n: int) -> NewEvent:
    return NewEvent(player_id=f"player-{n}", event="new player was created")


async def wait_until(condition, timeout: float = 2.0) -> None:
    """Poll ``condition`` until it is true or the timeout expires."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


class TestEventNotifier:
    """Test cases for EventNotifier class."""

    @pytest.fixture
    def event_bus(self):
        bus = MagicMock()
        bus.publish = AsyncMock()
        return bus

    @pytest.fixture
    async def notifier(self, event_bus):
        notifier = EventNotifier(event_bus=event_bus, timeout_to_publish=1, queue_size=10)
        yield notifier
        await notifier.stop()

    async def test_initialization(self, notifier, event_bus):
        assert notifier.event_bus is event_bus
        assert notifier.timeout_to_publish == 1
        assert notifier.queue.maxsize == 10
        assert not notifier.running

    @pytest.mark.parametrize("timeout", [0, -1, 0.5])
    async def test_timeout_below_one_second_uses_default(self, timeout):
        assert EventNotifier(timeout_to_publish=timeout).timeout_to_publish == 3

    async def test_publishes_in_fifo_order(self, notifier, event_bus):
        await notifier.start()

        for n in range(5):
            notifier.notify(make_event(n))

        await wait_until(lambda: event_bus.publish.await_count == 5)
        published = [call.args[0] for call in event_bus.publish.await_args_list]
        assert published == [make_event(n) for n in range(5)]

    async def test_notify_does_not_block(self, notifier, event_bus):
        release = asyncio.Event()

        async def slow_publish(event):
            await release.wait()

        event_bus.publish.side_effect = slow_publish
        await notifier.start()

        notifier.notify(make_event(1))
        notifier.notify(make_event(2))

        assert event_bus.publish.await_count == 0
        release.set()
        await wait_until(lambda: event_bus.publish.await_count == 2)

    async def test_notify_when_not_running_drops_event(self, notifier, event_bus):
        notifier.notify(make_event(1))

        assert notifier.queue.empty()
        assert not notifier._enqueue_tasks

    async def test_full_queue_drops_event_after_timeout(self, event_bus):
        notifier = EventNotifier(event_bus=event_bus, queue_size=1)
        notifier.timeout_to_publish = 0.05
        notifier.logger = MagicMock()
        # Accept events without a worker draining the queue
        notifier.running = True

        try:
            notifier.notify(make_event(1))
            notifier.notify(make_event(2))

            await wait_until(lambda: not notifier._enqueue_tasks)
            notifier.logger.warning.assert_called_once_with(
                "Event queue is full, dropping event",
                event_name="new player was created",
                player_id="player-2",
                timeout=0.05,
            )
            assert notifier.queue.qsize() == 1
            assert notifier.queue.get_nowait() == make_event(1)
        finally:
            await notifier.stop()
        event_bus.publish.assert_not_awaited()

    async def test_publish_failure_keeps_worker_alive(self, notifier, event_bus):
        event_bus.publish.side_effect = [ConnectionError("broker down"), None]
        notifier.logger = MagicMock()
        await notifier.start()

        notifier.notify(make_event(1))
        notifier.notify(make_event(2))

        await wait_until(lambda: event_bus.publish.await_count == 2)
        notifier.logger.error.assert_any_call(
            "Publishing event failed",
            event_name="new player was created",
            player_id="player-1",
            error="broker down",
            error_type="ConnectionError",
        )
        assert (await notifier.health())[1] is None

    async def test_without_event_bus_events_are_consumed(self):
        notifier = EventNotifier(timeout_to_publish=1)
        await notifier.start()

        try:
            notifier.notify(make_event(1))
            await wait_until(lambda: notifier.queue.empty() and not notifier._enqueue_tasks)
            await asyncio.wait_for(notifier.queue.join(), timeout=1)
        finally:
            await notifier.stop()

    async def test_health(self, notifier):
        name, error = await notifier.health()
        assert name == "event-notifier"
        assert error is not None

        await notifier.start()
        assert await notifier.health() == ("event-notifier", None)

        await notifier.stop()
        assert (await notifier.health())[1] is not None

    async def test_overflow_at_default_capacity(self, event_bus):
        release = asyncio.Event()

        async def blocked_publish(event):
            await release.wait()

        event_bus.publish.side_effect = blocked_publish
        notifier = EventNotifier(event_bus=event_bus)
        notifier.timeout_to_publish = 0.2
        await notifier.start()

        try:
            for n in range(15):
                notifier.notify(make_event(n))

            # 10 queued plus 1 in flight, the remaining enqueues time out
            await wait_until(lambda: not notifier._enqueue_tasks)
            release.set()
            await wait_until(lambda: notifier.queue.empty())
            await asyncio.wait_for(notifier.queue.join(), timeout=1)

            published = [call.args[0] for call in event_bus.publish.await_args_list]
            assert published == [make_event(n) for n in range(11)]
            assert await notifier.health() == ("event-notifier", None)
        finally:
            await notifier.stop()

    async def test_stop_cancels_pending_enqueues(self, event_bus):
        release = asyncio.Event()

        async def blocked_publish(event):
            await release.wait()

        event_bus.publish.side_effect = blocked_publish
        notifier = EventNotifier(event_bus=event_bus, timeout_to_publish=5, queue_size=1)
        await notifier.start()

        notifier.notify(make_event(1))
        await wait_until(lambda: event_bus.publish.await_count == 1)
        notifier.notify(make_event(2))
        notifier.notify(make_event(3))
        await asyncio.sleep(0.05)

        await notifier.stop()

        assert not notifier.running
        assert not notifier._enqueue_tasks
