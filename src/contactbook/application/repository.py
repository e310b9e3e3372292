"""Repository: thin facade over a ContactStore."""

from contactbook.application.feed import LiveFeed
from contactbook.application.ports import ContactStore
from contactbook.domain import Contact


class ContactRepository:
    """Pure delegation to the store, so the storage technology can change without touching presentation code."""

    def __init__(self, store: ContactStore) -> None:
        self._store = store

    @property
    def all_contacts(self) -> LiveFeed[list[Contact]]:
        return self._store.read_all()

    async def insert(self, contact: Contact) -> int:
        return await self._store.insert(contact)

    async def update(self, contact: Contact) -> None:
        await self._store.update(contact)

    async def delete(self, contact: Contact) -> None:
        await self._store.delete(contact)
