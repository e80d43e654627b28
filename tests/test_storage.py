"""
Tests for the in-memory entity store: CRUD per kind, the shared id counter,
merge semantics of updates and the contract -> property availability hooks.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from kiratakip.storage import MemStorage


def _contract(tenant, prop, landlord, **overrides):
    data = {
        "tenant_id": tenant.id,
        "property_id": prop.id,
        "landlord_id": landlord.id,
        "start_date": datetime(2024, 3, 1, tzinfo=timezone.utc),
        "end_date": datetime(2025, 3, 1, tzinfo=timezone.utc),
        "monthly_rent": Decimal("5000"),
        "is_active": True,
    }
    data.update(overrides)
    return data


@pytest.fixture
def landlord(storage, landlord_data):
    return storage.create_landlord(landlord_data)


@pytest.fixture
def tenant(storage, tenant_data):
    return storage.create_tenant(tenant_data)


@pytest.fixture
def prop(storage, landlord, property_data):
    return storage.create_property(dict(property_data, landlord_id=landlord.id))


# =============================================================================
# Create / Read
# =============================================================================

class TestCreate:

    def test_ids_are_unique_across_kinds(self, storage, landlord, tenant, prop):
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        payment = storage.create_payment({
            "contract_id": contract.id, "tenant_id": tenant.id, "amount": Decimal("5000"),
            "due_date": datetime.now(timezone.utc), "status": "pending",
        })
        ids = [landlord.id, tenant.id, prop.id, contract.id, payment.id]
        assert ids == [1, 2, 3, 4, 5]

    def test_optional_fields_default_to_none(self, storage):
        tenant = storage.create_tenant({
            "name": "Elif Kaya", "email": "elif@example.com", "phone": "1", "national_id": "2",
        })
        assert tenant.address is None
        assert tenant.emergency_contact is None
        assert tenant.emergency_phone is None

    def test_created_at_is_stamped(self, storage, tenant_data):
        before = datetime.now(timezone.utc)
        tenant = storage.create_tenant(tenant_data)
        assert before <= tenant.created_at <= datetime.now(timezone.utc)

    def test_get_returns_created_record(self, storage, tenant):
        assert storage.get_tenant(tenant.id) == tenant
        assert storage.get_tenants() == [tenant]

    def test_get_missing_returns_none(self, storage):
        assert storage.get_tenant(999) is None
        assert storage.get_payment(999) is None

    def test_client_supplied_id_and_created_at_are_ignored(self, storage, tenant_data):
        stamp = datetime(2000, 1, 1, tzinfo=timezone.utc)
        tenant = storage.create_tenant(dict(tenant_data, id=42, created_at=stamp))
        assert tenant.id == 1
        assert tenant.created_at != stamp

    def test_duplicate_emails_are_allowed(self, storage, tenant_data):
        first = storage.create_tenant(tenant_data)
        second = storage.create_tenant(tenant_data)
        assert first.id != second.id

    def test_naive_datetimes_are_read_as_utc(self, storage, tenant, prop, landlord):
        contract = storage.create_contract(_contract(
            tenant, prop, landlord, start_date=datetime(2024, 3, 1), end_date=datetime(2025, 3, 1),
        ))
        assert contract.start_date.tzinfo is timezone.utc


# =============================================================================
# Update / Delete
# =============================================================================

class TestUpdate:

    def test_update_merges_supplied_fields(self, storage, tenant):
        updated = storage.update_tenant(tenant.id, {"phone": "+90 555 000 0000"})
        assert updated.phone == "+90 555 000 0000"
        assert updated.name == tenant.name
        assert updated.email == tenant.email
        assert storage.get_tenant(tenant.id) == updated

    def test_explicit_none_overwrites(self, storage, tenant):
        assert tenant.emergency_contact == "Ayşe Demir"
        updated = storage.update_tenant(tenant.id, {"emergency_contact": None})
        assert updated.emergency_contact is None

    def test_id_and_created_at_never_change(self, storage, tenant):
        updated = storage.update_tenant(tenant.id, {
            "id": 77, "created_at": datetime(2000, 1, 1, tzinfo=timezone.utc), "name": "Yeni",
        })
        assert updated.id == tenant.id
        assert updated.created_at == tenant.created_at

    def test_update_missing_returns_none(self, storage):
        assert storage.update_landlord(404, {"name": "x"}) is None
        assert storage.get_landlords() == []

    def test_delete(self, storage, tenant):
        assert storage.delete_tenant(tenant.id) is True
        assert storage.get_tenant(tenant.id) is None

    def test_delete_missing_returns_false(self, storage, tenant):
        assert storage.delete_tenant(999) is False
        assert storage.get_tenants() == [tenant]

    def test_delete_does_not_cascade(self, storage, landlord, prop):
        storage.delete_landlord(landlord.id)
        assert storage.get_property(prop.id) == prop


# =============================================================================
# Contract side effects
# =============================================================================

class TestContractAvailability:

    def test_active_contract_marks_property_taken(self, storage, tenant, prop, landlord):
        storage.create_contract(_contract(tenant, prop, landlord))
        assert storage.get_property(prop.id).is_available is False

    def test_inactive_contract_leaves_property_alone(self, storage, tenant, prop, landlord):
        storage.create_contract(_contract(tenant, prop, landlord, is_active=False))
        assert storage.get_property(prop.id).is_available is True

    def test_deactivating_frees_property(self, storage, tenant, prop, landlord):
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        storage.update_contract(contract.id, {"is_active": False})
        assert storage.get_property(prop.id).is_available is True
        storage.update_contract(contract.id, {"is_active": True})
        assert storage.get_property(prop.id).is_available is False

    def test_update_without_is_active_keeps_availability(self, storage, tenant, prop, landlord):
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        storage.update_contract(contract.id, {"terms": "Yenilendi"})
        assert storage.get_property(prop.id).is_available is False

    def test_delete_frees_property(self, storage, tenant, prop, landlord):
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        assert storage.delete_contract(contract.id) is True
        assert storage.get_property(prop.id).is_available is True

    def test_delete_frees_property_even_with_another_active_contract(self, storage, tenant, prop, landlord):
        first = storage.create_contract(_contract(tenant, prop, landlord))
        storage.create_contract(_contract(tenant, prop, landlord))
        storage.delete_contract(first.id)
        assert storage.get_property(prop.id).is_available is True
        assert len(storage.get_active_contracts_by_property(prop.id)) == 1

    def test_contract_for_missing_property(self, storage, tenant, landlord, prop):
        storage.delete_property(prop.id)
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        assert storage.get_contract(contract.id) == contract
        assert storage.get_property(prop.id) is None


# =============================================================================
# Lookup helpers
# =============================================================================

class TestLookups:

    def test_properties_by_landlord(self, storage, landlord, prop, property_data):
        other = storage.create_landlord({"name": "B", "email": "b@example.com", "phone": "1", "national_id": "2"})
        storage.create_property(dict(property_data, landlord_id=other.id))
        assert storage.get_properties_by_landlord(landlord.id) == [prop]

    def test_active_contracts_by_tenant(self, storage, tenant, prop, landlord):
        active = storage.create_contract(_contract(tenant, prop, landlord))
        storage.create_contract(_contract(tenant, prop, landlord, is_active=False))
        assert storage.get_active_contracts_by_tenant(tenant.id) == [active]

    def test_payments_by_contract(self, storage, tenant, prop, landlord):
        contract = storage.create_contract(_contract(tenant, prop, landlord))
        due = datetime.now(timezone.utc) + timedelta(days=5)
        payment = storage.create_payment({
            "contract_id": contract.id, "tenant_id": tenant.id, "amount": Decimal("5000"),
            "due_date": due, "status": "pending",
        })
        assert storage.get_payments_by_contract(contract.id) == [payment]
        assert storage.get_payments_by_contract(999) == []


def test_stores_are_isolated(landlord_data):
    a, b = MemStorage(), MemStorage()
    a.create_landlord(landlord_data)
    assert b.get_landlords() == []
    assert b.create_landlord(landlord_data).id == 1
