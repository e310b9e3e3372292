"""Result types returned by the contact forms."""

from dataclasses import dataclass, field

from contactbook.domain import Contact

# Notice ids; texts live in the messages file of the presentation layer.
NOTICE_CONTACT_ADDED = "contact_added"
NOTICE_CONTACT_UPDATED = "contact_updated"
NOTICE_FILL_ALL_FIELDS = "fill_all_fields"
NOTICE_NAME_REQUIRED = "name_required"
NOTICE_CONTACT_NOT_FOUND = "contact_not_found"
NOTICE_IMAGE_UPDATE_FAILED = "image_update_failed"


@dataclass(frozen=True)
class ContactSubmitted:
    """The write was dispatched. contact is what was sent to the store."""

    contact: Contact
    notices: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class Invalid:
    """Validation failed; nothing was written."""

    notice: str


@dataclass(frozen=True)
class ContactNotFound:
    contact_id: int
    notice: str = NOTICE_CONTACT_NOT_FOUND
