"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.images import ImageStorage
from contactbook.infrastructure.memory_store import InMemoryContactStore
from contactbook.infrastructure.persistence.neo4j_store import Neo4jContactStore
from contactbook.infrastructure.phone import format_phone_for_display
from contactbook.infrastructure.sqlite_store import SqliteContactStore

__all__ = [
    "ImageStorage",
    "InMemoryContactStore",
    "Neo4jContactStore",
    "SqliteContactStore",
    "format_phone_for_display",
]
