"""
In-process multicast sink feeding GraphQL subscriptions.

Each subscriber gets its own unbounded queue, so a slow subscriber never
blocks the emitter or the other subscribers. Items are not replayed:
a subscriber only sees what is emitted after it subscribed.
"""

import asyncio
from typing import AsyncIterator, Generic, Set, TypeVar

T = TypeVar("T")


class MulticastSink(Generic[T]):
    """Hot multicast sink with per-subscriber buffering"""

    def __init__(self, name: str):
        self.name = name
        self._queues: Set["asyncio.Queue[T]"] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    def emit(self, item: T) -> int:
        """Deliver item to every current subscriber; returns how many got it."""
        for queue in self._queues:
            queue.put_nowait(item)
        return len(self._queues)

    def register(self) -> "asyncio.Queue[T]":
        queue: "asyncio.Queue[T]" = asyncio.Queue()
        self._queues.add(queue)
        return queue

    def unregister(self, queue: "asyncio.Queue[T]") -> None:
        self._queues.discard(queue)

    def subscribe(self) -> AsyncIterator[T]:
        """Async iterator over items emitted from the moment of this call."""
        return self._drain(self.register())

    async def _drain(self, queue: "asyncio.Queue[T]") -> AsyncIterator[T]:
        try:
            while True:
                yield await queue.get()
        finally:
            self.unregister(queue)
