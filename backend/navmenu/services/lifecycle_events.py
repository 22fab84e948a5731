"""Lifecycle Events - EventSink implementations for menu item notifications.

Invariants:
    - notify() never raises into the controller: observer failures are logged
    - Subscribers run in registration order, synchronously
"""

import logging
from collections.abc import Callable
from typing import Any

from navmenu.core.repository_protocols import PostLike

logger = logging.getLogger(__name__)

Subscriber = Callable[[PostLike, Any, bool], None]


class NullEventSink:
    """Drops every notification."""

    def notify(
        self, event_name: str, item: PostLike, request: Any, creating: bool,
    ) -> None:
        return None


class LoggingEventSink:
    """Logs every notification and fans it out to subscribers."""

    def __init__(self):
        self._subscribers: dict[str, list[Subscriber]] = {}

    def subscribe(self, event_name: str, subscriber: Subscriber) -> None:
        self._subscribers.setdefault(event_name, []).append(subscriber)

    def notify(
        self, event_name: str, item: PostLike, request: Any, creating: bool,
    ) -> None:
        logger.info(
            f"{event_name} fired for item {item.id}",
            extra={"event": event_name, "item_id": item.id, "creating": creating},
        )
        for subscriber in self._subscribers.get(event_name, []):
            try:
                subscriber(item, request, creating)
            except Exception:
                logger.exception(
                    f"Subscriber failed for {event_name}",
                    extra={"event": event_name, "item_id": item.id},
                )
