from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base

OPEN_PAYMENT_STATUSES = ("pending", "overdue")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---- Auth / Users ----
class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), default="manager")  # admin, manager, viewer
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# ---- People ----
@dataclass(frozen=True)
class Tenant:
    id: int
    name: str
    email: str
    phone: str
    national_id: str
    address: Optional[str]
    emergency_contact: Optional[str]
    emergency_phone: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Landlord:
    id: int
    name: str
    email: str
    phone: str
    national_id: str
    address: Optional[str]
    bank_account: Optional[str]
    tax_number: Optional[str]
    created_at: datetime


# ---- Properties / Contracts / Payments ----
@dataclass(frozen=True)
class Property:
    id: int
    landlord_id: int
    address: str
    type: str  # "1+1", "2+1", "Daire", "Ofis", ...
    area: Optional[int]  # square meters
    floor: Optional[int]
    has_balcony: Optional[bool]
    has_parking: Optional[bool]
    is_available: Optional[bool]  # cleared while an active contract exists
    monthly_rent: Decimal
    deposit: Optional[Decimal]
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Contract:
    id: int
    tenant_id: int
    property_id: int
    landlord_id: int
    start_date: datetime
    end_date: datetime
    monthly_rent: Decimal  # snapshot, may differ from the property's current rent
    deposit: Optional[Decimal]
    is_active: Optional[bool]
    terms: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Payment:
    id: int
    contract_id: int
    tenant_id: int
    amount: Decimal
    due_date: datetime
    paid_date: Optional[datetime]
    status: str  # pending, paid, overdue
    payment_method: Optional[str]  # cash, bank_transfer, credit_card
    notes: Optional[str]
    created_at: datetime


# ---- Joined views ----
@dataclass(frozen=True)
class PropertyWithDetails(Property):
    landlord: Landlord
    tenant: Optional[Tenant] = None
    contract: Optional[Contract] = None
    last_payment: Optional[Payment] = None


@dataclass(frozen=True)
class ContractWithDetails(Contract):
    tenant: Tenant
    property: Property
    landlord: Landlord


@dataclass(frozen=True)
class ContractWithProperty(Contract):
    property: Property


@dataclass(frozen=True)
class PaymentWithDetails(Payment):
    tenant: Tenant
    contract: ContractWithProperty


@dataclass(frozen=True)
class DashboardStats:
    total_tenants: int
    active_properties: int
    monthly_income: float
    pending_payments: int
