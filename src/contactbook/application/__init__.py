"""Application layer: live feed, ports, repository, presentation state and forms. Depends only on domain."""

from contactbook.application.contact_form import ContactEditor, ContactForm, image_file_name
from contactbook.application.dto import (
    NOTICE_CONTACT_ADDED,
    NOTICE_CONTACT_NOT_FOUND,
    NOTICE_CONTACT_UPDATED,
    NOTICE_FILL_ALL_FIELDS,
    NOTICE_IMAGE_UPDATE_FAILED,
    NOTICE_NAME_REQUIRED,
    ContactNotFound,
    ContactSubmitted,
    Invalid,
)
from contactbook.application.feed import LiveFeed, Subscription
from contactbook.application.ports import ContactStore, ImageCopier
from contactbook.application.repository import ContactRepository
from contactbook.application.view_model import ContactViewModel

__all__ = [
    "NOTICE_CONTACT_ADDED",
    "NOTICE_CONTACT_NOT_FOUND",
    "NOTICE_CONTACT_UPDATED",
    "NOTICE_FILL_ALL_FIELDS",
    "NOTICE_IMAGE_UPDATE_FAILED",
    "NOTICE_NAME_REQUIRED",
    "ContactEditor",
    "ContactForm",
    "ContactNotFound",
    "ContactRepository",
    "ContactStore",
    "ContactSubmitted",
    "ContactViewModel",
    "ImageCopier",
    "Invalid",
    "LiveFeed",
    "Subscription",
    "image_file_name",
]
