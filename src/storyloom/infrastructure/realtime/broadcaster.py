"""In-process change broadcaster feeding Server-Sent Event streams."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """One change announced on a topic."""

    topic: str
    event: str
    data: dict[str, Any]


class ChangeBroadcaster:
    """Fan-out of change events to per-subscriber queues.

    Slow subscribers lose their oldest events once their queue is full.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._subscribers: dict[str, set[asyncio.Queue[ChangeEvent]]] = {}

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    async def publish(self, topic: str, event: str, data: dict[str, Any]) -> None:
        """Deliver event to every current subscriber of topic."""
        change = ChangeEvent(topic=topic, event=event, data=data)
        for queue in list(self._subscribers.get(topic, ())):
            if queue.full():
                queue.get_nowait()
                logger.warning("Subscriber queue full on %s, dropping oldest event", topic)
            queue.put_nowait(change)

    def add_subscriber(self, topic: str) -> asyncio.Queue[ChangeEvent]:
        """Register a new queue on topic. Pair with :meth:`remove_subscriber`."""
        queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.setdefault(topic, set()).add(queue)
        return queue

    def remove_subscriber(self, topic: str, queue: asyncio.Queue[ChangeEvent]) -> None:
        subscribers = self._subscribers.get(topic)
        if subscribers is not None:
            subscribers.discard(queue)
            if not subscribers:
                del self._subscribers[topic]

    @asynccontextmanager
    async def subscribe(self, topic: str) -> AsyncIterator[asyncio.Queue[ChangeEvent]]:
        """Register a queue for topic for the lifetime of the context."""
        queue = self.add_subscriber(topic)
        try:
            yield queue
        finally:
            self.remove_subscriber(topic, queue)
