"""
🚌 MessageBus - Internal pub/sub

Decouples the state tracker from whatever displays notifications.
Fire-and-forget so a slow subscriber never blocks a sweep.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List

LOGGER = logging.getLogger(__name__)


class MessageBus:
    """Simple asynchronous message bus (pub/sub)"""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._task_group: List[asyncio.Task] = []

    def subscribe(self, topic: str, handler: Callable):
        """
        Subscribe an async handler to a topic.

        Args:
            topic: Topic name ("system.event", ...)
            handler: Async callable receiving the published data
        """
        self._subscribers.setdefault(topic, []).append(handler)
        LOGGER.debug(f"📌 Subscriber added: {topic} -> {handler.__name__}")

    def unsubscribe(self, topic: str, handler: Callable):
        handlers = self._subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    async def publish(self, topic: str, data: Any):
        """
        Publish a message on a topic (fire-and-forget).

        Args:
            topic: Topic name
            data: Payload (SystemEvent, ...)
        """
        handlers = self._subscribers.get(topic, [])

        if not handlers:
            LOGGER.debug(f"⚠️ MessageBus: no subscriber for topic: {topic}")
            return

        for handler in handlers:
            task = asyncio.create_task(self._safe_handle(handler, data, topic))
            self._task_group.append(task)
            task.add_done_callback(lambda t: self._task_group.remove(t) if t in self._task_group else None)

    async def _safe_handle(self, handler: Callable, data: Any, topic: str):
        try:
            await handler(data)
        except Exception as e:
            LOGGER.error(f"❌ Handler {handler.__name__} failed on topic {topic}: {e}", exc_info=True)

    async def wait_all(self):
        """Wait for all in-flight handler tasks"""
        if self._task_group:
            await asyncio.gather(*self._task_group, return_exceptions=True)
