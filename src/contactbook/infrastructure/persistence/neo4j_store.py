"""Neo4j implementation of ContactStore.
Graph: (:Contact {owner_id, id, name, phone_number, email, image}) nodes scoped by owner_id.
Ids come from one (:ContactSequence {owner_id, value}) counter node per owner, so they are never reused.
"""

import asyncio
import logging

from contactbook.application.feed import LiveFeed
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


class Neo4jContactStore:
    """Stores contacts in Neo4j through the async driver, scoped by owner_id."""

    def __init__(self, driver: object, owner_id: str = "default") -> None:
        self._driver = driver
        self._owner_id = owner_id
        self._lock = asyncio.Lock()
        self._feed: LiveFeed[list[Contact]] = LiveFeed([])

    async def open(self) -> None:
        async with self._driver.session() as session:
            await session.run(
                """
                CREATE CONSTRAINT contact_owner_id IF NOT EXISTS
                FOR (c:Contact) REQUIRE (c.owner_id, c.id) IS UNIQUE
                """
            )
        await self._publish()
        logger.info("Opened Neo4j contact store for owner %s", self._owner_id)

    async def close(self) -> None:
        """The driver belongs to the caller and is closed there."""

    def read_all(self) -> LiveFeed[list[Contact]]:
        return self._feed

    async def insert(self, contact: Contact) -> int:
        async with self._lock:
            async with self._driver.session() as session:
                result = await session.run(
                    """
                    MERGE (s:ContactSequence {owner_id: $owner_id})
                    ON CREATE SET s.value = 0
                    SET s.value = s.value + 1
                    WITH s
                    CREATE (c:Contact {
                        owner_id: $owner_id,
                        id: s.value,
                        name: $name,
                        phone_number: $phone_number,
                        email: $email,
                        image: $image
                    })
                    RETURN c.id AS id
                    """,
                    owner_id=self._owner_id,
                    name=contact.name,
                    phone_number=contact.phone_number,
                    email=contact.email,
                    image=contact.image,
                )
                record = await result.single()
            await self._publish()
        logger.debug("Inserted contact id=%d", record["id"])
        return record["id"]

    async def update(self, contact: Contact) -> None:
        async with self._lock:
            async with self._driver.session() as session:
                result = await session.run(
                    """
                    MATCH (c:Contact {owner_id: $owner_id, id: $id})
                    SET c.name = $name,
                        c.phone_number = $phone_number,
                        c.email = $email,
                        c.image = $image
                    RETURN 1 AS ok
                    """,
                    owner_id=self._owner_id,
                    id=contact.id,
                    name=contact.name,
                    phone_number=contact.phone_number,
                    email=contact.email,
                    image=contact.image,
                )
                found = await result.single() is not None
            if found:
                await self._publish()

    async def delete(self, contact: Contact) -> None:
        async with self._lock:
            async with self._driver.session() as session:
                result = await session.run(
                    """
                    MATCH (c:Contact {owner_id: $owner_id, id: $id})
                    DELETE c
                    RETURN 1 AS ok
                    """,
                    owner_id=self._owner_id,
                    id=contact.id,
                )
                found = await result.single() is not None
            if found:
                await self._publish()

    async def _publish(self) -> None:
        async with self._driver.session() as session:
            result = await session.run(
                """
                MATCH (c:Contact {owner_id: $owner_id})
                RETURN c
                ORDER BY c.id
                """,
                owner_id=self._owner_id,
            )
            contacts = [_record_to_contact(record) async for record in result]
        self._feed.publish(contacts)


def _record_to_contact(record) -> Contact:
    c = record["c"]
    return Contact(
        id=c["id"],
        name=c.get("name") or "",
        phone_number=c.get("phone_number") or "",
        email=c.get("email") or "",
        image=c.get("image") or "",
    )
