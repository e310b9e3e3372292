"""Unit tests for ContactViewModel over an in-memory store."""

import pytest

from contactbook.application import ContactRepository, ContactViewModel
from contactbook.domain import Contact
from contactbook.infrastructure import InMemoryContactStore


@pytest.fixture
async def view_model():
    store = InMemoryContactStore()
    await store.open()
    vm = ContactViewModel(repository=ContactRepository(store))
    yield vm
    await vm.close()


async def test_add_contact_appears_once_with_fresh_id(view_model) -> None:
    view_model.add_contact("", "123", "a@x.com", "Ann")
    view_model.add_contact("", "456", "b@x.com", "Bob")
    await view_model.join()

    contacts = view_model.contacts
    assert [c.name for c in contacts] == ["Ann", "Bob"]
    ids = [c.id for c in contacts]
    assert all(i > 0 for i in ids)
    assert len(set(ids)) == 2


async def test_add_contact_returns_before_write(view_model) -> None:
    result = view_model.add_contact("", "123", "a@x.com", "Ann")
    assert result is None
    assert view_model.contacts == []
    await view_model.join()
    assert len(view_model.contacts) == 1


async def test_ann_scenario(view_model) -> None:
    view_model.add_contact("", "123", "a@x.com", "Ann")
    await view_model.join()
    [ann] = view_model.contacts
    assert (ann.name, ann.phone_number, ann.email, ann.image) == ("Ann", "123", "a@x.com", "")

    view_model.update_contact(Contact(id=ann.id, name="Ann", phone_number="999", email="a@x.com"))
    await view_model.join()
    [updated] = view_model.contacts
    assert updated.id == ann.id
    assert updated.phone_number == "999"
    assert updated.name == "Ann"
    assert updated.email == "a@x.com"

    view_model.delete_contact(updated)
    await view_model.join()
    assert view_model.contacts == []


async def test_delete_twice_same_as_once(view_model) -> None:
    view_model.add_contact("", "1", "a@x.com", "Ann")
    view_model.add_contact("", "2", "b@x.com", "Bob")
    await view_model.join()
    ann = view_model.contacts[0]

    view_model.delete_contact(ann)
    view_model.delete_contact(ann)
    await view_model.join()
    assert [c.name for c in view_model.contacts] == ["Bob"]


async def test_update_unknown_id_leaves_feed_unchanged(view_model) -> None:
    view_model.add_contact("", "1", "a@x.com", "Ann")
    await view_model.join()
    before = view_model.contacts

    view_model.update_contact(Contact(id=999, name="Ghost"))
    view_model.delete_contact(Contact(id=999))
    await view_model.join()
    assert view_model.contacts == before


async def test_intents_run_in_call_order(view_model) -> None:
    view_model.add_contact("", "1", "a@x.com", "Ann")
    await view_model.join()
    ann = view_model.contacts[0]

    view_model.update_contact(Contact(id=ann.id, name="Ann B", phone_number="1", email="a@x.com"))
    view_model.update_contact(Contact(id=ann.id, name="Ann C", phone_number="1", email="a@x.com"))
    await view_model.join()
    assert view_model.contacts[0].name == "Ann C"


async def test_feed_pushes_mutations_to_subscribers(view_model) -> None:
    snapshots = []
    view_model.all_contacts.subscribe(lambda contacts: snapshots.append(len(contacts)))
    view_model.add_contact("", "1", "a@x.com", "Ann")
    await view_model.join()
    view_model.delete_contact(view_model.contacts[0])
    await view_model.join()
    assert snapshots == [0, 1, 0]


async def test_find_contact(view_model) -> None:
    view_model.add_contact("", "1", "a@x.com", "Ann")
    await view_model.join()
    ann = view_model.contacts[0]
    assert view_model.find_contact(ann.id) == ann
    assert view_model.find_contact(ann.id + 100) is None


async def test_close_discards_pending_intents_and_rejects_new_ones() -> None:
    store = InMemoryContactStore()
    await store.open()
    vm = ContactViewModel(repository=ContactRepository(store))

    vm.add_contact("", "1", "a@x.com", "Ann")
    vm.add_contact("", "2", "b@x.com", "Bob")
    await vm.close()

    assert vm.closed
    assert store.read_all().value == []
    with pytest.raises(RuntimeError):
        vm.add_contact("", "3", "c@x.com", "Cid")


async def test_store_fault_reaches_caller_and_stops_worker() -> None:
    class FullDiskStore(InMemoryContactStore):
        async def insert(self, contact):
            raise OSError("disk full")

    store = FullDiskStore()
    await store.open()
    vm = ContactViewModel(repository=ContactRepository(store))
    try:
        vm.add_contact("", "1", "a@x.com", "Ann")
        vm.update_contact(Contact(id=1, name="Bob"))
        with pytest.raises(OSError, match="disk full"):
            await vm.join()

        assert isinstance(vm.failure, OSError)
        assert store.read_all().value == []
        with pytest.raises(RuntimeError) as excinfo:
            vm.delete_contact(Contact(id=1))
        assert excinfo.value.__cause__ is vm.failure
        with pytest.raises(OSError):
            await vm.join()
    finally:
        await vm.close()
