"""Tests for client and provider lifecycle services."""
import pytest

from cadetex.db.models import Address, Client, Task
from cadetex.schemas.address import AddressInput
from cadetex.schemas.contact import ClientCreate, ClientUpdate, ProviderCreate, ProviderUpdate
from cadetex.schemas.task import TaskCreate
from cadetex.services.result import ErrorKind, Ok


def _client(state, db, actor, name="Acme", **fields):
    result = state.clients.create(db, actor, ClientCreate(name=name, **fields))
    assert isinstance(result, Ok), result
    return result.value


def test_create_trims_name_and_stores_address(db, state, admin_a, as_actor):
    client = _client(
        state,
        db,
        as_actor(admin_a),
        name="  Acme  ",
        address=AddressInput(street="Av. Corrientes", street_number="1234", city="CABA"),
    )

    assert client.name == "Acme"
    assert client.organization_id == admin_a.organization_id
    assert client.address.full_address == "Av. Corrientes 1234, CABA"


def test_create_without_address_values_stores_none(db, state, admin_a, as_actor):
    client = _client(state, db, as_actor(admin_a), address=AddressInput())
    assert client.address_id is None


def test_blank_name_is_rejected(db, state, admin_a, as_actor):
    result = state.clients.create(db, as_actor(admin_a), ClientCreate(name="   "))
    assert result.kind == ErrorKind.VALIDATION_FAILED


def test_duplicate_name_in_same_organization_conflicts(db, state, admin_a, admin_b, as_actor):
    _client(state, db, as_actor(admin_a), name="Acme")

    duplicate = state.clients.create(db, as_actor(admin_a), ClientCreate(name="Acme"))
    assert duplicate.kind == ErrorKind.CONFLICT

    other_org = state.clients.create(db, as_actor(admin_b), ClientCreate(name="Acme"))
    assert isinstance(other_org, Ok)


def test_rename_to_taken_name_conflicts(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    _client(state, db, actor, name="Acme")
    other = _client(state, db, actor, name="Globex")

    result = state.clients.update(db, actor, other.id, ClientUpdate(name="Acme"))

    assert result.kind == ErrorKind.CONFLICT
    assert db.get(Client, other.id).name == "Globex"


def test_rename_to_own_name_succeeds(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    client = _client(state, db, actor, name="Acme")

    result = state.clients.update(db, actor, client.id, ClientUpdate(name="Acme"))

    assert isinstance(result, Ok)
    assert result.value.name == "Acme"


def test_update_address_in_place_keeps_unset_fields(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    client = _client(
        state, db, actor, address=AddressInput(street="Old St", city="CABA")
    )
    address_id = client.address_id

    updated = state.clients.update(
        db, actor, client.id, ClientUpdate(address=AddressInput(street="New St"))
    ).value

    assert updated.address_id == address_id
    assert updated.address.street == "New St"
    assert updated.address.city == "CABA"


def test_update_adds_address_when_missing(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    client = _client(state, db, actor)

    updated = state.clients.update(
        db, actor, client.id, ClientUpdate(address=AddressInput(street="First St"))
    ).value

    assert updated.address_id is not None
    assert updated.address.street == "First St"


def test_delete_removes_address_and_detaches_tasks(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    client = _client(state, db, actor, address=AddressInput(street="Acme St"))
    address_id = client.address_id
    task = state.tasks.create(
        db, actor, TaskCreate(type="DELIVER", client_id=str(client.id))
    ).value.task
    task_id = task.id

    assert isinstance(state.clients.delete(db, actor, client.id), Ok)

    assert db.get(Address, address_id) is None
    db.expire_all()
    assert db.get(Task, task_id).client_id is None


@pytest.mark.parametrize("operation", ["get", "update", "delete"])
def test_other_organization_is_forbidden(db, state, admin_a, admin_b, as_actor, operation):
    client = _client(state, db, as_actor(admin_a))
    intruder = as_actor(admin_b)

    if operation == "get":
        result = state.clients.get(db, intruder, client.id)
    elif operation == "update":
        result = state.clients.update(db, intruder, client.id, ClientUpdate(name="Mine"))
    else:
        result = state.clients.delete(db, intruder, client.id)

    assert result.kind == ErrorKind.FORBIDDEN


def test_courier_cannot_manage_clients(db, state, courier_user_a, as_actor):
    result = state.clients.create(db, as_actor(courier_user_a), ClientCreate(name="Acme"))
    assert result.kind == ErrorKind.FORBIDDEN


def test_superadmin_manages_any_organization(db, state, superadmin, admin_a, org_a, as_actor):
    client = _client(state, db, as_actor(admin_a))
    result = state.clients.update(db, as_actor(superadmin), client.id, ClientUpdate(phone_number="123"))
    assert result.value.phone_number == "123"

    created = state.clients.create(
        db, as_actor(superadmin), ClientCreate(name="Hooli", organization_id=str(org_a.id))
    )
    assert created.value.organization_id == org_a.id


def test_list_filters_by_name_and_city(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    _client(state, db, actor, name="Acme", address=AddressInput(city="Rosario"))
    _client(state, db, actor, name="Globex", address=AddressInput(city="CABA"))

    by_city = state.clients.list(db, actor, city="rosa").value
    by_name = state.clients.list(db, actor, name="glob").value

    assert [c.name for c in by_city] == ["Acme"]
    assert [c.name for c in by_name] == ["Globex"]


def test_provider_lifecycle(db, state, admin_a, as_actor):
    actor = as_actor(admin_a)
    provider = state.providers.create(
        db,
        actor,
        ProviderCreate(name="Proveedor SA", contact_name="Ana", address=AddressInput(street="P St")),
    ).value
    state.providers.create(db, actor, ProviderCreate(name="Otro SA"))

    assert provider.contact_name == "Ana"
    assert state.providers.update(
        db, actor, provider.id, ProviderUpdate(name="Otro SA")
    ).kind == ErrorKind.CONFLICT

    renamed = state.providers.update(
        db, actor, provider.id, ProviderUpdate(name="Proveedor SA", contact_phone="555")
    ).value
    assert renamed.contact_phone == "555"

    address_id = provider.address_id
    assert isinstance(state.providers.delete(db, actor, provider.id), Ok)
    assert db.get(Address, address_id) is None
