"""In-memory implementation of ContactStore (no DB)."""

import asyncio
import logging

from contactbook.application.feed import LiveFeed
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


class InMemoryContactStore:
    """Stores contacts in memory. Order preserved by insertion; ids are never reused."""

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._last_id = 0
        self._lock = asyncio.Lock()
        self._feed: LiveFeed[list[Contact]] = LiveFeed([])

    async def open(self) -> None:
        self._publish()

    async def close(self) -> None:
        pass

    def read_all(self) -> LiveFeed[list[Contact]]:
        return self._feed

    async def insert(self, contact: Contact) -> int:
        async with self._lock:
            self._last_id += 1
            stored = contact.with_id(self._last_id)
            self._by_id[stored.id] = stored
            self._publish()
        logger.debug("Inserted contact id=%d", stored.id)
        return stored.id

    async def update(self, contact: Contact) -> None:
        async with self._lock:
            if contact.id not in self._by_id:
                return
            self._by_id[contact.id] = contact
            self._publish()

    async def delete(self, contact: Contact) -> None:
        async with self._lock:
            if self._by_id.pop(contact.id, None) is None:
                return
            self._publish()

    def _publish(self) -> None:
        self._feed.publish(list(self._by_id.values()))
