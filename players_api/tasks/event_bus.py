"""
RabbitMQ event bus
Publishes player events to a RabbitMQ exchange
"""

import json
from dataclasses import asdict
from typing import Optional

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractRobustConnection
import structlog

from players_api.features.players.models import NewEvent

logger = structlog.get_logger(__name__)


class RabbitMQEventBus:
    """Publishes player events as JSON messages on the default exchange."""

    def __init__(self, url: str, routing_key: str = "players.events"):
        """
        Initialize the event bus.

        Args:
            url: AMQP connection URL
            routing_key: Routing key used for every player event
        """
        self.url = url
        self.routing_key = routing_key
        self._connection: Optional[AbstractRobustConnection] = None
        self._channel: Optional[AbstractChannel] = None

    async def connect(self) -> None:
        """Open the connection and channel used to publish."""
        self._connection = await aio_pika.connect_robust(self.url)
        self._channel = await self._connection.channel()
        logger.info("Connected to event bus", routing_key=self.routing_key)

    async def publish(self, event: NewEvent) -> None:
        """
        Publish a player event

        Args:
            event: Player event to publish
        """
        if self._channel is None:
            raise RuntimeError("event bus is not connected")

        await self._channel.default_exchange.publish(
            aio_pika.Message(
                body=json.dumps(asdict(event)).encode(),
                content_type="application/json",
            ),
            routing_key=self.routing_key,
        )

        logger.debug(
            "Published player event",
            event_name=event.event,
            player_id=event.player_id,
        )

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            self._channel = None
