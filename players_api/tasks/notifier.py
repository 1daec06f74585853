"""
Background notifier for player events.

Decouples the player service from the event bus: ``notify`` hands events to a
bounded in-memory queue without blocking and a single worker publishes them in
FIFO order. Delivery is best-effort and at-most-once; events that cannot be
queued or published in time are logged and dropped.
"""

import asyncio
from typing import Any, Optional, Set, Tuple

import structlog

from players_api.core.config import DEFAULT_EVENT_QUEUE_SIZE, DEFAULT_TIMEOUT_TO_PUBLISH_SEC
from players_api.features.players.models import NewEvent
from players_api.protocols import EventBus


class EventNotifier:
    """Buffered, cancellable publisher of player events."""

    resource_name = "event-notifier"

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        timeout_to_publish: float = DEFAULT_TIMEOUT_TO_PUBLISH_SEC,
        queue_size: int = DEFAULT_EVENT_QUEUE_SIZE,
        logger: Optional[Any] = None,
    ):
        """
        Initialize the notifier.

        Args:
            event_bus: Destination of the events, events are only logged when None
            timeout_to_publish: Seconds allowed to enqueue and to publish an event,
                values below one second fall back to the default
            queue_size: Capacity of the event queue
            logger: structlog logger, defaults to the module logger
        """
        if timeout_to_publish < 1:
            timeout_to_publish = DEFAULT_TIMEOUT_TO_PUBLISH_SEC

        self.event_bus = event_bus
        self.timeout_to_publish = timeout_to_publish
        self.queue: asyncio.Queue[NewEvent] = asyncio.Queue(maxsize=queue_size)
        self.running = False
        self.logger = logger or structlog.get_logger(__name__)
        self._worker_task: Optional[asyncio.Task] = None
        self._enqueue_tasks: Set[asyncio.Task] = set()

    async def start(self) -> None:
        """Start the worker that publishes queued events."""
        if self.running:
            self.logger.warning("Event notifier is already running")
            return

        self.logger.info("Starting worker as a notifier")
        self.running = True
        self._worker_task = asyncio.create_task(self._worker())

    async def stop(self) -> None:
        """Stop the worker and cancel every pending enqueue attempt."""
        if not self.running:
            return

        self.running = False

        for task in list(self._enqueue_tasks):
            task.cancel()

        if self._worker_task is not None:
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                pass

        if self._enqueue_tasks:
            await asyncio.gather(*self._enqueue_tasks, return_exceptions=True)

        self.logger.info("Event notifier stopped")

    def notify(self, event: NewEvent) -> None:
        """Queue an event without waiting for space in the queue.

        Must be called from a running event loop.
        """
        self.logger.info("Notifying new player event", event_name=event.event, player_id=event.player_id)

        if not self.running:
            self.logger.warning(
                "Event notifier is not running, dropping event",
                event_name=event.event,
                player_id=event.player_id,
            )
            return

        task = asyncio.create_task(self._enqueue(event))
        self._enqueue_tasks.add(task)
        task.add_done_callback(self._enqueue_tasks.discard)

    async def health(self) -> Tuple[str, Optional[str]]:
        """Report whether the worker is alive. The event bus is not probed."""
        if self._worker_task is None or self._worker_task.done():
            return self.resource_name, "event notifier worker is not running"
        return self.resource_name, None

    async def _enqueue(self, event: NewEvent) -> None:
        try:
            await asyncio.wait_for(self.queue.put(event), timeout=self.timeout_to_publish)
        except asyncio.TimeoutError:
            self.logger.warning(
                "Event queue is full, dropping event",
                event_name=event.event,
                player_id=event.player_id,
                timeout=self.timeout_to_publish,
            )
        except asyncio.CancelledError:
            self.logger.info(
                "Notifying was cancelled, dropping event",
                event_name=event.event,
                player_id=event.player_id,
            )
            raise

    async def _worker(self) -> None:
        """Publish queued events one at a time until cancelled."""
        self.logger.info("Event notifier worker started")

        while self.running:
            try:
                event = await self.queue.get()
            except asyncio.CancelledError:
                self.logger.info("Event notifier worker cancelled")
                raise

            try:
                await asyncio.wait_for(self._publish(event), timeout=self.timeout_to_publish)
            except asyncio.TimeoutError:
                self.logger.error(
                    "Publishing event timed out",
                    event_name=event.event,
                    player_id=event.player_id,
                    timeout=self.timeout_to_publish,
                )
            except asyncio.CancelledError:
                self.logger.info("Event notifier worker cancelled while publishing")
                raise
            except Exception as e:
                self.logger.error(
                    "Publishing event failed",
                    event_name=event.event,
                    player_id=event.player_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            finally:
                self.queue.task_done()

        self.logger.info("Event notifier worker stopped")

    async def _publish(self, event: NewEvent) -> None:
        self.logger.info(
            "Publishing event into event bus", event_name=event.event, player_id=event.player_id
        )

        if self.event_bus is None:
            return

        await self.event_bus.publish(event)
