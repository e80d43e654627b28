"""
In-memory entity store.

Five dicts keyed by id share one id counter, so an id is unique across every
entity kind. Nothing is persisted; the store lives as long as the process.
"""

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from fastapi import Request

from . import joins
from .models import (
    Contract,
    ContractWithDetails,
    DashboardStats,
    Landlord,
    Payment,
    PaymentWithDetails,
    Property,
    PropertyWithDetails,
    Tenant,
    utcnow,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

_READONLY = ("id", "created_at")


def _clean(record_type: type, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only writable columns of ``record_type``; naive datetimes become UTC."""
    names = {f.name for f in fields(record_type)} - set(_READONLY)
    out = {}
    for key, value in data.items():
        if key not in names:
            continue
        if isinstance(value, datetime):
            value = joins.as_utc(value)
        out[key] = value
    return out


class MemStorage:
    def __init__(self) -> None:
        self.tenants: Dict[int, Tenant] = {}
        self.landlords: Dict[int, Landlord] = {}
        self.properties: Dict[int, Property] = {}
        self.contracts: Dict[int, Contract] = {}
        self.payments: Dict[int, Payment] = {}
        self._current_id = 1

    # ---------- generic helpers ----------
    def _insert(self, table: Dict[int, R], record_type: Type[R], data: Mapping[str, Any]) -> R:
        values = _clean(record_type, data)
        record_id = self._current_id
        self._current_id += 1
        record = record_type(
            id=record_id,
            created_at=utcnow(),
            **{f.name: values.get(f.name) for f in fields(record_type) if f.name not in _READONLY},
        )
        table[record_id] = record
        logger.debug("created %s %s", record_type.__name__, record_id)
        return record

    def _update(self, table: Dict[int, R], record_id: int, changes: Mapping[str, Any]) -> Optional[R]:
        current = table.get(record_id)
        if current is None:
            return None
        updated = replace(current, **_clean(type(current), changes))
        table[record_id] = updated
        logger.debug("updated %s %s", type(current).__name__, record_id)
        return updated

    def _delete(self, table: Dict[int, Any], record_id: int) -> bool:
        record = table.pop(record_id, None)
        if record is None:
            return False
        logger.debug("deleted %s %s", type(record).__name__, record_id)
        return True

    def _set_availability(self, property_id: int, available: bool) -> None:
        prop = self.properties.get(property_id)
        if prop is not None:
            self.properties[property_id] = replace(prop, is_available=available)

    # ---------- tenants ----------
    def get_tenant(self, tenant_id: int) -> Optional[Tenant]:
        return self.tenants.get(tenant_id)

    def get_tenants(self) -> List[Tenant]:
        return list(self.tenants.values())

    def create_tenant(self, data: Mapping[str, Any]) -> Tenant:
        return self._insert(self.tenants, Tenant, data)

    def update_tenant(self, tenant_id: int, changes: Mapping[str, Any]) -> Optional[Tenant]:
        return self._update(self.tenants, tenant_id, changes)

    def delete_tenant(self, tenant_id: int) -> bool:
        return self._delete(self.tenants, tenant_id)

    # ---------- landlords ----------
    def get_landlord(self, landlord_id: int) -> Optional[Landlord]:
        return self.landlords.get(landlord_id)

    def get_landlords(self) -> List[Landlord]:
        return list(self.landlords.values())

    def create_landlord(self, data: Mapping[str, Any]) -> Landlord:
        return self._insert(self.landlords, Landlord, data)

    def update_landlord(self, landlord_id: int, changes: Mapping[str, Any]) -> Optional[Landlord]:
        return self._update(self.landlords, landlord_id, changes)

    def delete_landlord(self, landlord_id: int) -> bool:
        return self._delete(self.landlords, landlord_id)

    # ---------- properties ----------
    def get_property(self, property_id: int) -> Optional[Property]:
        return self.properties.get(property_id)

    def get_properties(self) -> List[Property]:
        return list(self.properties.values())

    def get_properties_with_details(self) -> List[PropertyWithDetails]:
        return joins.properties_with_details(
            self.properties, self.landlords, self.contracts, self.tenants, self.payments,
        )

    def get_properties_by_landlord(self, landlord_id: int) -> List[Property]:
        return [p for p in self.properties.values() if p.landlord_id == landlord_id]

    def create_property(self, data: Mapping[str, Any]) -> Property:
        return self._insert(self.properties, Property, data)

    def update_property(self, property_id: int, changes: Mapping[str, Any]) -> Optional[Property]:
        return self._update(self.properties, property_id, changes)

    def delete_property(self, property_id: int) -> bool:
        return self._delete(self.properties, property_id)

    # ---------- contracts ----------
    def get_contract(self, contract_id: int) -> Optional[Contract]:
        return self.contracts.get(contract_id)

    def get_contracts(self) -> List[Contract]:
        return list(self.contracts.values())

    def get_contracts_with_details(self) -> List[ContractWithDetails]:
        return joins.contracts_with_details(
            self.contracts, self.tenants, self.properties, self.landlords,
        )

    def get_active_contracts_by_property(self, property_id: int) -> List[Contract]:
        return [c for c in self.contracts.values() if c.property_id == property_id and c.is_active]

    def get_active_contracts_by_tenant(self, tenant_id: int) -> List[Contract]:
        return [c for c in self.contracts.values() if c.tenant_id == tenant_id and c.is_active]

    def create_contract(self, data: Mapping[str, Any]) -> Contract:
        contract = self._insert(self.contracts, Contract, data)
        if contract.is_active:
            self._set_availability(contract.property_id, False)
        return contract

    def update_contract(self, contract_id: int, changes: Mapping[str, Any]) -> Optional[Contract]:
        current = self.contracts.get(contract_id)
        updated = self._update(self.contracts, contract_id, changes)
        if updated is not None and "is_active" in changes:
            # the property the contract pointed at before this update
            self._set_availability(current.property_id, not changes["is_active"])
        return updated

    def delete_contract(self, contract_id: int) -> bool:
        contract = self.contracts.get(contract_id)
        if contract is not None:
            # other active contracts on the same property are not consulted
            self._set_availability(contract.property_id, True)
        return self._delete(self.contracts, contract_id)

    # ---------- payments ----------
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self.payments.get(payment_id)

    def get_payments(self) -> List[Payment]:
        return list(self.payments.values())

    def get_payments_with_details(self) -> List[PaymentWithDetails]:
        return joins.payments_with_details(
            self.payments, self.tenants, self.contracts, self.properties,
        )

    def get_payments_by_contract(self, contract_id: int) -> List[Payment]:
        return [p for p in self.payments.values() if p.contract_id == contract_id]

    def get_pending_payments(self) -> List[PaymentWithDetails]:
        return joins.pending_payments(self.get_payments_with_details())

    def get_overdue_payments(self, now: Optional[datetime] = None) -> List[PaymentWithDetails]:
        return joins.overdue_payments(self.get_payments_with_details(), now or utcnow())

    def create_payment(self, data: Mapping[str, Any]) -> Payment:
        return self._insert(self.payments, Payment, data)

    def update_payment(self, payment_id: int, changes: Mapping[str, Any]) -> Optional[Payment]:
        return self._update(self.payments, payment_id, changes)

    def delete_payment(self, payment_id: int) -> bool:
        return self._delete(self.payments, payment_id)

    # ---------- dashboard ----------
    def get_dashboard_stats(self) -> DashboardStats:
        return joins.dashboard_stats(self.tenants, self.properties, self.contracts, self.payments)


def get_storage(request: Request) -> MemStorage:
    """Dependency returning the store the app was built with."""
    return request.app.state.storage
