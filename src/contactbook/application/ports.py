"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.application.feed import LiveFeed
from contactbook.domain import Contact


class ContactStore(Protocol):
    """Durable table of contacts keyed by id. Serializes its own writes."""

    async def open(self) -> None:
        """Acquire the backing resource and publish the first snapshot."""
        ...

    async def close(self) -> None:
        ...

    async def insert(self, contact: Contact) -> int:
        """Store a contact under a freshly generated id (contact.id is ignored). Return the id."""
        ...

    def read_all(self) -> LiveFeed[list[Contact]]:
        """Return the live feed of all contacts, ordered by id."""
        ...

    async def update(self, contact: Contact) -> None:
        """Replace the record with contact.id. No-op if there is none."""
        ...

    async def delete(self, contact: Contact) -> None:
        """Remove the record with contact.id. No-op if there is none."""
        ...


class ImageCopier(Protocol):
    """Copies a picked image into storage the application owns."""

    async def copy_into_storage(self, source: str, file_name: str) -> str | None:
        """Return the stored image path, or None if the source could not be copied."""
        ...
