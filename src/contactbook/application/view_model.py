"""Presentation-state holder: live contacts for display plus add/update/delete intents."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal

from contactbook.application.feed import LiveFeed
from contactbook.application.repository import ContactRepository
from contactbook.domain import TRANSIENT_ID, Contact

logger = logging.getLogger(__name__)

Operation = Literal["insert", "update", "delete"]


@dataclass(frozen=True)
class _Intent:
    operation: Operation
    contact: Contact


class ContactViewModel:
    """Bridges screens and the repository.

    Intents are fire-and-forget: each one is queued and run in call order by a
    single worker task bound to this holder. The live feed is the only success
    signal. close() cancels the worker and drops intents that have not run.
    A store fault stops the worker for good: join() re-raises it and any
    later intent raises RuntimeError.
    """

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository
        self._queue: asyncio.Queue[_Intent] = asyncio.Queue()
        self._worker: asyncio.Task | None = None
        self._closed = False
        self._failure: Exception | None = None

    @property
    def all_contacts(self) -> LiveFeed[list[Contact]]:
        return self._repo.all_contacts

    @property
    def contacts(self) -> list[Contact]:
        """Current snapshot of the feed."""
        return list(self._repo.all_contacts.value)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def failure(self) -> Exception | None:
        return self._failure

    def find_contact(self, contact_id: int) -> Contact | None:
        """Return the contact with this id in the current snapshot, or None."""
        for contact in self._repo.all_contacts.value:
            if contact.id == contact_id:
                return contact
        return None

    def add_contact(self, image: str, phone_number: str, email: str, name: str) -> None:
        contact = Contact(
            id=TRANSIENT_ID,
            image=image,
            phone_number=phone_number,
            email=email,
            name=name,
        )
        self._dispatch("insert", contact)

    def update_contact(self, contact: Contact) -> None:
        self._dispatch("update", contact)

    def delete_contact(self, contact: Contact) -> None:
        self._dispatch("delete", contact)

    async def join(self) -> None:
        """Wait until every intent dispatched so far has run.

        Re-raises the storage fault that stopped the worker, if any.
        """
        await self._queue.join()
        if self._failure is not None:
            raise self._failure

    async def close(self) -> None:
        """Cancel the worker; queued intents that have not started are discarded."""
        if self._closed:
            return
        self._closed = True
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        dropped = self._discard_pending()
        if dropped:
            logger.info("Discarded %d pending contact intent(s) on close", dropped)

    def _dispatch(self, operation: Operation, contact: Contact) -> None:
        if self._closed:
            raise RuntimeError("ContactViewModel is closed")
        if self._failure is not None:
            raise RuntimeError("ContactViewModel stopped after a storage fault") from self._failure
        if self._worker is None:
            self._worker = asyncio.get_running_loop().create_task(
                self._worker_loop(), name="contact-intents"
            )
        self._queue.put_nowait(_Intent(operation=operation, contact=contact))
        logger.debug("Queued contact %s for id=%d", operation, contact.id)

    def _discard_pending(self) -> int:
        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            dropped += 1
        return dropped

    async def _worker_loop(self) -> None:
        while True:
            intent = await self._queue.get()
            try:
                await self._run(intent)
            except Exception as e:
                # Storage faults are fatal: stop here and hand the error to join().
                logger.exception(
                    "Contact %s failed for id=%d", intent.operation, intent.contact.id
                )
                self._failure = e
                dropped = self._discard_pending()
                if dropped:
                    logger.error("Discarded %d contact intent(s) after storage fault", dropped)
                return
            finally:
                self._queue.task_done()

    async def _run(self, intent: _Intent) -> None:
        if intent.operation == "insert":
            await self._repo.insert(intent.contact)
        elif intent.operation == "update":
            await self._repo.update(intent.contact)
        else:
            await self._repo.delete(intent.contact)
