"""Domain layer: entities. No dependencies on outer layers."""

from contactbook.domain.entities import TRANSIENT_ID, Contact

__all__ = ["TRANSIENT_ID", "Contact"]
