"""SQLite implementation of ContactStore, using aiosqlite so queries run off the event loop."""

import asyncio
import logging
from pathlib import Path

import aiosqlite

from contactbook.application.feed import LiveFeed
from contactbook.domain import Contact

logger = logging.getLogger(__name__)

TABLE_NAME = "contacts"
COLUMNS = ("id", "name", "phoneNumber", "email", "image")

_CREATE_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        phoneNumber TEXT NOT NULL,
        email TEXT NOT NULL,
        image TEXT NOT NULL DEFAULT ''
    )
"""


def _row_to_contact(row) -> Contact:
    return Contact(
        id=row[0],
        name=row[1],
        phone_number=row[2],
        email=row[3],
        image=row[4] or "",
    )


class SqliteContactStore:
    """One table of contacts in a local SQLite file.

    A table whose columns do not match the expected set is dropped and
    recreated; there is no migration.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = path
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()
        self._feed: LiveFeed[list[Contact]] = LiveFeed([])

    async def open(self) -> None:
        if self._conn is not None:
            return
        if str(self._path) != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self._path)
        await self._ensure_schema()
        await self._publish()
        logger.info("Opened contact database at %s", self._path)

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Closed contact database at %s", self._path)

    def read_all(self) -> LiveFeed[list[Contact]]:
        return self._feed

    async def insert(self, contact: Contact) -> int:
        conn = self._connection()
        async with self._lock:
            cursor = await conn.execute(
                f"INSERT INTO {TABLE_NAME} (name, phoneNumber, email, image) VALUES (?, ?, ?, ?)",
                (contact.name, contact.phone_number, contact.email, contact.image),
            )
            contact_id = cursor.lastrowid
            await cursor.close()
            await conn.commit()
            await self._publish()
        logger.debug("Inserted contact id=%d", contact_id)
        return contact_id

    async def update(self, contact: Contact) -> None:
        conn = self._connection()
        async with self._lock:
            cursor = await conn.execute(
                f"UPDATE {TABLE_NAME} SET name = ?, phoneNumber = ?, email = ?, image = ? WHERE id = ?",
                (contact.name, contact.phone_number, contact.email, contact.image, contact.id),
            )
            changed = cursor.rowcount
            await cursor.close()
            await conn.commit()
            if changed:
                await self._publish()

    async def delete(self, contact: Contact) -> None:
        conn = self._connection()
        async with self._lock:
            cursor = await conn.execute(
                f"DELETE FROM {TABLE_NAME} WHERE id = ?", (contact.id,)
            )
            changed = cursor.rowcount
            await cursor.close()
            await conn.commit()
            if changed:
                await self._publish()

    async def _ensure_schema(self) -> None:
        conn = self._connection()
        async with conn.execute(f"PRAGMA table_info({TABLE_NAME})") as cursor:
            existing = {row[1] for row in await cursor.fetchall()}
        if existing and existing != set(COLUMNS):
            logger.warning(
                "Table %s has columns %s, expected %s; recreating it",
                TABLE_NAME,
                sorted(existing),
                sorted(COLUMNS),
            )
            await conn.execute(f"DROP TABLE {TABLE_NAME}")
        await conn.execute(_CREATE_TABLE)
        await conn.commit()

    async def _publish(self) -> None:
        conn = self._connection()
        async with conn.execute(
            f"SELECT id, name, phoneNumber, email, image FROM {TABLE_NAME} ORDER BY id"
        ) as cursor:
            rows = await cursor.fetchall()
        self._feed.publish([_row_to_contact(row) for row in rows])

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("SqliteContactStore is not open")
        return self._conn
