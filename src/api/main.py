"""
FastAPI backend: the contact screens as a REST surface.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging

from api.config import Settings, load_env

load_env()

from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, HTTPException, Path, Request
from fastapi.responses import JSONResponse
from neo4j import AsyncGraphDatabase
from pydantic import BaseModel

from api.messages import notice_text
from api.navigation import EVENTS, DetailDestination, EditDestination, Navigator
from contactbook.application import (
    ContactEditor,
    ContactForm,
    ContactRepository,
    ContactStore,
    ContactViewModel,
    Invalid,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    ImageStorage,
    InMemoryContactStore,
    Neo4jContactStore,
    SqliteContactStore,
    format_phone_for_display,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

SESSION_ID_HEADER = "X-Session-Id"
DEFAULT_SESSION_ID = "default"


def _build_store(settings: Settings) -> tuple[ContactStore, object | None]:
    """Return (store, neo4j driver or None) for the configured backend."""
    if settings.backend == "memory":
        return InMemoryContactStore(), None
    if settings.backend == "neo4j":
        driver = AsyncGraphDatabase.driver(
            settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
        )
        return Neo4jContactStore(driver, owner_id=settings.owner_id), driver
    return SqliteContactStore(settings.db_path), None


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    store, driver = _build_store(settings)
    await store.open()
    view_model = ContactViewModel(ContactRepository(store))
    app.state.settings = settings
    app.state.view_model = view_model
    app.state.editor = ContactEditor(view_model, ImageStorage(settings.image_dir))
    app.state.navigators = {}
    logger.info("Contact store ready (backend=%s)", settings.backend)
    try:
        yield
    finally:
        await view_model.close()
        await store.close()
        if driver is not None:
            await driver.close()


app = FastAPI(title="Contactbook API", lifespan=lifespan)


class ContactBody(BaseModel):
    name: str = ""
    phone_number: str = ""
    email: str = ""
    image_source: str | None = None


class ContactItem(BaseModel):
    id: int
    name: str
    phone_number: str
    phone_display: str
    email: str
    image: str


class NavigationEventBody(BaseModel):
    event: str
    contact_id: int | None = None


class NavigationView(BaseModel):
    destination: str
    handled: bool = True
    contact: ContactItem | None = None
    notice: str | None = None
    placeholder: str | None = None


def _view_model(request: Request) -> ContactViewModel:
    return request.app.state.view_model


def _to_item(contact: Contact, request: Request) -> ContactItem:
    region = request.app.state.settings.phone_region
    return ContactItem(
        id=contact.id,
        name=contact.name,
        phone_number=contact.phone_number,
        phone_display=format_phone_for_display(contact.phone_number, region),
        email=contact.email,
        image=contact.image,
    )


def _form(body: ContactBody) -> ContactForm:
    return ContactForm(
        name=body.name,
        phone_number=body.phone_number,
        email=body.email,
        image_source=body.image_source,
    )


def _find_or_404(view_model: ContactViewModel, contact_id: int) -> Contact:
    contact = view_model.find_contact(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail=notice_text("contact_not_found"))
    return contact


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


@app.get("/contacts")
def list_contacts(request: Request):
    return [_to_item(c, request) for c in _view_model(request).contacts]


@app.post("/contacts")
async def add_contact(body: ContactBody, request: Request):
    view_model = _view_model(request)
    result = await request.app.state.editor.add(_form(body))
    if isinstance(result, Invalid):
        raise HTTPException(status_code=422, detail=notice_text(result.notice))
    await view_model.join()
    return JSONResponse(
        content={"notices": [notice_text(n) for n in result.notices]},
        status_code=202,
    )


@app.get("/contacts/{contact_id}")
def get_contact(request: Request, contact_id: int = Path(ge=0)):
    return _to_item(_find_or_404(_view_model(request), contact_id), request)


@app.put("/contacts/{contact_id}")
async def edit_contact(body: ContactBody, request: Request, contact_id: int = Path(ge=0)):
    view_model = _view_model(request)
    contact = _find_or_404(view_model, contact_id)
    result = await request.app.state.editor.edit(contact, _form(body))
    if isinstance(result, Invalid):
        raise HTTPException(status_code=422, detail=notice_text(result.notice))
    await view_model.join()
    return {
        "contact": _to_item(result.contact, request).model_dump(),
        "notices": [notice_text(n) for n in result.notices],
    }


@app.delete("/contacts/{contact_id}")
async def delete_contact(request: Request, contact_id: int = Path(ge=0)):
    view_model = _view_model(request)
    view_model.delete_contact(Contact(id=contact_id))
    await view_model.join()
    return JSONResponse(content={"status": "accepted"}, status_code=202)


# --- Navigation ---


def _navigator(request: Request, session_id: str | None) -> Navigator:
    key = (session_id or "").strip() or DEFAULT_SESSION_ID
    navigators: dict[str, Navigator] = request.app.state.navigators
    if key not in navigators:
        navigators[key] = Navigator()
    return navigators[key]


def _navigation_view(result, request: Request) -> NavigationView:
    destination = result.destination
    contact = None
    if isinstance(destination, DetailDestination | EditDestination):
        contact = _to_item(destination.contact, request)
    placeholder = None
    if destination.name == "list" and not _view_model(request).contacts:
        placeholder = notice_text("no_contacts")
    return NavigationView(
        destination=destination.name,
        handled=result.handled,
        contact=contact,
        notice=notice_text(result.notice) if result.notice else None,
        placeholder=placeholder,
    )


@app.get("/navigation")
def current_destination(
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    navigator = _navigator(request, x_session_id)
    result = navigator.current(_view_model(request).contacts)
    return _navigation_view(result, request)


@app.post("/navigation/events")
def navigation_event(
    body: NavigationEventBody,
    request: Request,
    x_session_id: str | None = Header(None, alias=SESSION_ID_HEADER),
):
    if body.event not in EVENTS:
        raise HTTPException(status_code=400, detail=f"Unknown navigation event '{body.event}'")
    navigator = _navigator(request, x_session_id)
    result = navigator.dispatch(
        body.event, _view_model(request).contacts, contact_id=body.contact_id
    )
    return _navigation_view(result, request)
