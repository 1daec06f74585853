"""
Background tasks for player event delivery.

This package provides:
- The buffered event notifier used by the player service
- The RabbitMQ event bus the notifier publishes to
"""

from .notifier import EventNotifier
from .event_bus import RabbitMQEventBus

__all__ = [
    "EventNotifier",
    "RabbitMQEventBus",
]
