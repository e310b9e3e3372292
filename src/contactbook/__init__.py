"""
contactbook core: clean-architecture layout.

- domain: the Contact entity. No outer dependencies.
- application: live feed, ports (ContactStore, ImageCopier), ContactRepository,
  ContactViewModel, add/edit forms.
- infrastructure: adapters (SqliteContactStore, InMemoryContactStore,
  Neo4jContactStore, ImageStorage).
"""

from contactbook.application import (
    ContactEditor,
    ContactForm,
    ContactNotFound,
    ContactRepository,
    ContactStore,
    ContactSubmitted,
    ContactViewModel,
    Invalid,
    LiveFeed,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    ImageStorage,
    InMemoryContactStore,
    Neo4jContactStore,
    SqliteContactStore,
)

__all__ = [
    "Contact",
    "ContactEditor",
    "ContactForm",
    "ContactNotFound",
    "ContactRepository",
    "ContactStore",
    "ContactSubmitted",
    "ContactViewModel",
    "ImageStorage",
    "InMemoryContactStore",
    "Invalid",
    "LiveFeed",
    "Neo4jContactStore",
    "SqliteContactStore",
]
