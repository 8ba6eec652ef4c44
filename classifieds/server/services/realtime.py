"""
In-process message event broker.

Each open message stream registers a bounded queue under its user id.
``send_message`` publishes an ``INSERT`` event to the receiver and
``mark_as_read`` publishes ``UPDATE`` events to the original sender. The
broker lives in one process; there is no cross-worker delivery.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Set

from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.messages import MessageEvent

logger = get_logger(__name__)

DEFAULT_QUEUE_SIZE = 100


class MessageBroker:
    """Fan out message events to the streams of their recipients."""

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self.queue_size = queue_size
        self._subscribers: Dict[str, Set[asyncio.Queue[MessageEvent]]] = defaultdict(set)

    def subscriber_count(self, user_id: str) -> int:
        return len(self._subscribers.get(user_id, ()))

    @asynccontextmanager
    async def subscribe(self, user_id: str) -> AsyncIterator[asyncio.Queue[MessageEvent]]:
        """Register a queue for ``user_id`` for the lifetime of the context."""
        queue: asyncio.Queue[MessageEvent] = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers[user_id].add(queue)
        logger.debug(f"Message stream opened for {user_id}")
        try:
            yield queue
        finally:
            queues = self._subscribers.get(user_id)
            if queues is not None:
                queues.discard(queue)
                if not queues:
                    del self._subscribers[user_id]
            logger.debug(f"Message stream closed for {user_id}")

    def publish(self, user_id: str, event: MessageEvent) -> int:
        """Deliver ``event`` to every stream of ``user_id``.

        A full queue means the client stopped reading; the event is dropped
        for that stream only.

        Returns:
            Number of streams that received the event
        """
        delivered = 0
        for queue in list(self._subscribers.get(user_id, ())):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropping {event.type} event for {user_id}: stream queue is full")
        return delivered


_broker = MessageBroker()


def get_broker() -> MessageBroker:
    """Dependency returning the process-wide broker."""
    return _broker
