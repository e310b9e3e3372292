"""
Navigation between the contact screens, as an XState-compatible state machine.

flows/contacts_machine.json holds the standard XState JSON (id, initial,
states with on: { EVENT: target }) and xstate-python evaluates transitions.
Every state of the machine is one of the destinations below, and every event
is one of EVENTS. The contact id for detail and edit travels beside the
machine state and is resolved against the current contacts snapshot.
"""

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from xstate.machine import Machine
from xstate.state import State

from contactbook.application import NOTICE_CONTACT_NOT_FOUND
from contactbook.domain import Contact

EVENTS = frozenset(
    {"OPEN_ADD", "OPEN_DETAIL", "OPEN_EDIT", "BACK", "SAVED", "DELETED", "NOT_FOUND"}
)


@dataclass(frozen=True)
class ListDestination:
    name: ClassVar[str] = "list"


@dataclass(frozen=True)
class AddDestination:
    name: ClassVar[str] = "add"


@dataclass(frozen=True)
class DetailDestination:
    name: ClassVar[str] = "detail"
    contact: Contact


@dataclass(frozen=True)
class EditDestination:
    name: ClassVar[str] = "edit"
    contact: Contact


Destination = ListDestination | AddDestination | DetailDestination | EditDestination

DESTINATIONS: dict[str, type] = {
    cls.name: cls
    for cls in (ListDestination, AddDestination, DetailDestination, EditDestination)
}


@dataclass(frozen=True)
class NavigationResult:
    destination: Destination
    handled: bool = True
    notice: str | None = None


def machine_path() -> Path:
    """Machine JSON location; XSTATE_MACHINE_PATH overrides the bundled file."""
    override = os.environ.get("XSTATE_MACHINE_PATH", "").strip()
    if override:
        return Path(override).resolve()
    return Path(__file__).resolve().parent / "flows" / "contacts_machine.json"


def read_machine_config(path: Path) -> dict:
    """Load the machine JSON and check it only names known destinations and events."""
    config = json.loads(path.read_text(encoding="utf-8"))
    states = config.get("states")
    if not isinstance(states, dict) or config.get("initial") not in DESTINATIONS:
        raise ValueError(f"{path.name}: 'initial' must name one of {sorted(DESTINATIONS)}")
    if set(states) != set(DESTINATIONS):
        raise ValueError(f"{path.name}: states must be exactly {sorted(DESTINATIONS)}")
    for state_name, node in states.items():
        for event, target in (node.get("on") or {}).items():
            if event not in EVENTS:
                raise ValueError(f"{path.name}: unknown event {event!r} in {state_name!r}")
            if target not in DESTINATIONS:
                raise ValueError(f"{path.name}: {state_name}.{event} targets {target!r}")
    return config


@lru_cache(maxsize=None)
def _bundled_config(path: Path) -> dict:
    return read_machine_config(path)


class Navigator:
    """Current destination of one client. Detail and edit need an id present in the snapshot."""

    def __init__(self, config: dict | None = None) -> None:
        if config is None:
            config = _bundled_config(machine_path())
        self._machine = Machine(config)
        self._initial = config["initial"]
        self._state: State = self._machine.state_from(self._initial)
        self._contact_id: int | None = None

    @property
    def state_value(self) -> str:
        return self._state.value

    @property
    def contact_id(self) -> int | None:
        return self._contact_id

    def current(self, contacts: list[Contact]) -> NavigationResult:
        """Destination for the current state, re-resolved against contacts."""
        return self._resolve(contacts, handled=True)

    def dispatch(
        self, event: str, contacts: list[Contact], contact_id: int | None = None
    ) -> NavigationResult:
        """Apply event. Unknown events and events with no transition leave the state as it is."""
        if event not in EVENTS or not self._step(event):
            return self._resolve(contacts, handled=False)
        if DESTINATIONS[self.state_value] in (DetailDestination, EditDestination):
            if contact_id is not None:
                self._contact_id = contact_id
        else:
            self._contact_id = None
        return self._resolve(contacts, handled=True)

    def _step(self, event: str) -> bool:
        """Take the machine transition for event. False when the current state has none."""
        next_state = self._machine.transition(self._state, event)
        if next_state.value == self._state.value:
            return False
        self._state = next_state
        return True

    def _resolve(self, contacts: list[Contact], handled: bool) -> NavigationResult:
        kind = DESTINATIONS[self.state_value]
        if kind is ListDestination or kind is AddDestination:
            return NavigationResult(kind(), handled=handled)

        contact = next((c for c in contacts if c.id == self._contact_id), None)
        if contact is None:
            if not self._step("NOT_FOUND"):
                self._state = self._machine.state_from(self._initial)
            self._contact_id = None
            return NavigationResult(
                ListDestination(), handled=handled, notice=NOTICE_CONTACT_NOT_FOUND
            )
        return NavigationResult(kind(contact), handled=handled)
