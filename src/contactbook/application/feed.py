"""Live feed: a push-based observable holding the latest snapshot of some value."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by LiveFeed.subscribe. close() stops further notifications."""

    def __init__(self, feed: "LiveFeed", token: int) -> None:
        self._feed = feed
        self._token = token

    def close(self) -> None:
        self._feed._unsubscribe(self._token)


class LiveFeed(Generic[T]):
    """Holds the current value and pushes every published value to subscribers.

    Subscribers receive the current value immediately on subscribe, then each
    subsequent publish. Consumers never poll.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._version = 0
        self._callbacks: dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        """Number of values published since creation."""
        return self._version

    def publish(self, value: T) -> None:
        self._value = value
        self._version += 1
        for token, callback in list(self._callbacks.items()):
            try:
                callback(value)
            except Exception:
                logger.exception("Feed subscriber %d failed", token)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        token = self._next_token
        self._next_token += 1
        self._callbacks[token] = callback
        callback(self._value)
        return Subscription(self, token)

    def _unsubscribe(self, token: int) -> None:
        self._callbacks.pop(token, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    async def updates(self) -> AsyncIterator[T]:
        """Yield the current value, then every published value, until the consumer stops."""
        queue: asyncio.Queue = asyncio.Queue()
        subscription = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            subscription.close()
