"""Add and edit flows: non-empty validation, image association, then the intent."""

from dataclasses import dataclass, replace

from contactbook.application.dto import (
    NOTICE_CONTACT_ADDED,
    NOTICE_CONTACT_UPDATED,
    NOTICE_FILL_ALL_FIELDS,
    NOTICE_IMAGE_UPDATE_FAILED,
    NOTICE_NAME_REQUIRED,
    ContactSubmitted,
    Invalid,
)
from contactbook.application.ports import ImageCopier
from contactbook.application.view_model import ContactViewModel
from contactbook.domain import Contact


@dataclass(frozen=True)
class ContactForm:
    """What the user typed. image_source is the picked image reference, None if nothing was picked."""

    name: str = ""
    phone_number: str = ""
    email: str = ""
    image_source: str | None = None


def image_file_name(name: str) -> str:
    """File name a contact's copied image is stored under."""
    safe = "".join("_" if ch in '/\\:\0' else ch for ch in name.strip())
    return f"{safe or 'contact'}.jpg"


class ContactEditor:
    """Runs the add and edit flows against a ContactViewModel."""

    def __init__(self, view_model: ContactViewModel, images: ImageCopier) -> None:
        self._view_model = view_model
        self._images = images

    async def add(self, form: ContactForm) -> ContactSubmitted | Invalid:
        """Every field is required. A failed image copy saves the contact without a photo."""
        if not (form.name.strip() and form.email.strip() and form.phone_number.strip()):
            return Invalid(notice=NOTICE_FILL_ALL_FIELDS)

        notices: list[str] = []
        image, failed = await self._associate_image(form.image_source, form.name, previous="")
        if failed:
            notices.append(NOTICE_IMAGE_UPDATE_FAILED)

        self._view_model.add_contact(image, form.phone_number, form.email, form.name)
        notices.append(NOTICE_CONTACT_ADDED)
        contact = Contact(
            name=form.name,
            phone_number=form.phone_number,
            email=form.email,
            image=image,
        )
        return ContactSubmitted(contact=contact, notices=tuple(notices))

    async def edit(self, contact: Contact, form: ContactForm) -> ContactSubmitted | Invalid:
        """Only the name is required. A failed image copy keeps the previous image."""
        if not form.name:
            return Invalid(notice=NOTICE_NAME_REQUIRED)

        notices: list[str] = []
        image, failed = await self._associate_image(
            form.image_source, form.name, previous=contact.image
        )
        if failed:
            notices.append(NOTICE_IMAGE_UPDATE_FAILED)

        updated = replace(
            contact,
            name=form.name,
            phone_number=form.phone_number,
            email=form.email,
            image=image,
        )
        self._view_model.update_contact(updated)
        notices.append(NOTICE_CONTACT_UPDATED)
        return ContactSubmitted(contact=updated, notices=tuple(notices))

    async def _associate_image(
        self, source: str | None, name: str, previous: str
    ) -> tuple[str, bool]:
        """Return (image path to save, whether a copy failed)."""
        if not source:
            return previous, False
        path = await self._images.copy_into_storage(source, image_file_name(name))
        if path is None:
            return previous, True
        return path, False
