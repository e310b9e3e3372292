"""Domain entity: Contact."""

from dataclasses import dataclass, replace

# id value for a contact the store has not assigned an id to yet.
TRANSIENT_ID = 0


@dataclass(frozen=True)
class Contact:
    """
    A personal contact record.
    id is assigned by the persistence store on insert; 0 means not yet persisted.
    image is either empty (no photo) or a path to a copied image file.
    """

    id: int = TRANSIENT_ID
    name: str = ""
    phone_number: str = ""
    email: str = ""
    image: str = ""

    def __post_init__(self):
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError("Contact id must be an integer.")
        if self.id < 0:
            raise ValueError("Contact id must be non-negative.")

    @property
    def is_transient(self) -> bool:
        return self.id == TRANSIENT_ID

    def with_id(self, contact_id: int) -> "Contact":
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=contact_id)
