"""
Read-time joins across the entity collections.

Every function takes the collections it reads (dicts keyed by id) and builds
the composite views fresh on each call. A record whose parent reference no
longer resolves is left out of the result rather than reported.
"""

from datetime import datetime, timezone
from typing import List, Mapping, Optional

from .models import (
    OPEN_PAYMENT_STATUSES,
    Contract,
    ContractWithDetails,
    ContractWithProperty,
    DashboardStats,
    Landlord,
    Payment,
    PaymentWithDetails,
    Property,
    PropertyWithDetails,
    Tenant,
)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def latest_payment(payments: Mapping[int, Payment], contract_id: int) -> Optional[Payment]:
    matches = [p for p in payments.values() if p.contract_id == contract_id]
    # stable sort: equal timestamps keep insertion order
    matches.sort(key=lambda p: as_utc(p.created_at), reverse=True)
    return matches[0] if matches else None


def properties_with_details(
    properties: Mapping[int, Property],
    landlords: Mapping[int, Landlord],
    contracts: Mapping[int, Contract],
    tenants: Mapping[int, Tenant],
    payments: Mapping[int, Payment],
) -> List[PropertyWithDetails]:
    result = []
    for prop in properties.values():
        landlord = landlords.get(prop.landlord_id)
        if landlord is None:
            continue
        contract = next(
            (c for c in contracts.values() if c.property_id == prop.id and c.is_active),
            None,
        )
        tenant = last_payment = None
        if contract is not None:
            tenant = tenants.get(contract.tenant_id)
            last_payment = latest_payment(payments, contract.id)
        result.append(PropertyWithDetails(
            **vars(prop),
            landlord=landlord,
            tenant=tenant,
            contract=contract,
            last_payment=last_payment,
        ))
    return result


def contracts_with_details(
    contracts: Mapping[int, Contract],
    tenants: Mapping[int, Tenant],
    properties: Mapping[int, Property],
    landlords: Mapping[int, Landlord],
) -> List[ContractWithDetails]:
    result = []
    for contract in contracts.values():
        tenant = tenants.get(contract.tenant_id)
        prop = properties.get(contract.property_id)
        landlord = landlords.get(contract.landlord_id)
        if tenant and prop and landlord:
            result.append(ContractWithDetails(
                **vars(contract), tenant=tenant, property=prop, landlord=landlord,
            ))
    return result


def payments_with_details(
    payments: Mapping[int, Payment],
    tenants: Mapping[int, Tenant],
    contracts: Mapping[int, Contract],
    properties: Mapping[int, Property],
) -> List[PaymentWithDetails]:
    result = []
    for payment in payments.values():
        tenant = tenants.get(payment.tenant_id)
        contract = contracts.get(payment.contract_id)
        if not (tenant and contract):
            continue
        prop = properties.get(contract.property_id)
        if prop is None:
            continue
        result.append(PaymentWithDetails(
            **vars(payment),
            tenant=tenant,
            contract=ContractWithProperty(**vars(contract), property=prop),
        ))
    return result


def pending_payments(joined: List[PaymentWithDetails]) -> List[PaymentWithDetails]:
    return [p for p in joined if p.status in OPEN_PAYMENT_STATUSES]


def overdue_payments(joined: List[PaymentWithDetails], now: datetime) -> List[PaymentWithDetails]:
    """Open payments (pending or overdue) whose due date has passed."""
    now = as_utc(now)
    return [
        p for p in joined
        if p.status in OPEN_PAYMENT_STATUSES and as_utc(p.due_date) < now
    ]


def dashboard_stats(
    tenants: Mapping[int, Tenant],
    properties: Mapping[int, Property],
    contracts: Mapping[int, Contract],
    payments: Mapping[int, Payment],
) -> DashboardStats:
    # contract rent of every contract flagged active, end date not checked
    income = sum((c.monthly_rent for c in contracts.values() if c.is_active), start=0)
    return DashboardStats(
        total_tenants=len(tenants),
        active_properties=sum(1 for p in properties.values() if not p.is_available),
        monthly_income=float(income),
        pending_payments=sum(1 for p in payments.values() if p.status in OPEN_PAYMENT_STATUSES),
    )
