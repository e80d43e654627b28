from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, EmailStr, Field, create_model
from pydantic.alias_generators import to_camel

PaymentStatus = Literal["pending", "paid", "overdue"]
# decimal(10, 2) columns
Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]


class Camel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORM(Camel):
    model_config = ConfigDict(from_attributes=True)


def _constrained(field):
    # annotation alone drops Field constraints such as max_digits
    if field.metadata:
        return Annotated[(field.annotation, *field.metadata)]
    return field.annotation


def partial(model: Type[BaseModel]) -> Type[BaseModel]:
    """Every field of ``model`` made optional, without defaults.

    Omitted fields stay unset (see ``model_dump(exclude_unset=True)``) and
    ``None`` is only accepted where the field's declared annotation allows it.
    """
    fields = {name: (_constrained(field), None) for name, field in model.model_fields.items()}
    return create_model(model.__name__.replace("In", "Update"), __base__=Camel, **fields)


# ---- Auth ----
class RegisterReq(Camel):
    email: EmailStr
    full_name: str
    password: str
    role: str = "manager"


class LoginReq(Camel):
    email: EmailStr
    password: str


class UserOut(ORM):
    id: int
    email: EmailStr
    full_name: str
    role: str


# ---- Tenants / Landlords ----
class TenantIn(Camel):
    name: str
    email: EmailStr
    phone: str
    national_id: str
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None


class TenantOut(ORM):
    id: int
    name: str
    email: str
    phone: str
    national_id: str
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    created_at: datetime


class LandlordIn(Camel):
    name: str
    email: EmailStr
    phone: str
    national_id: str
    address: Optional[str] = None
    bank_account: Optional[str] = None
    tax_number: Optional[str] = None


class LandlordOut(ORM):
    id: int
    name: str
    email: str
    phone: str
    national_id: str
    address: Optional[str] = None
    bank_account: Optional[str] = None
    tax_number: Optional[str] = None
    created_at: datetime


# ---- Properties ----
class PropertyIn(Camel):
    landlord_id: int
    address: str
    type: str
    area: Optional[int] = None
    floor: Optional[int] = None
    has_balcony: Optional[bool] = False
    has_parking: Optional[bool] = False
    is_available: Optional[bool] = True
    monthly_rent: Money
    deposit: Optional[Money] = None
    description: Optional[str] = None


class PropertyOut(ORM):
    id: int
    landlord_id: int
    address: str
    type: str
    area: Optional[int] = None
    floor: Optional[int] = None
    has_balcony: Optional[bool] = None
    has_parking: Optional[bool] = None
    is_available: Optional[bool] = None
    monthly_rent: Decimal
    deposit: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: datetime


# ---- Contracts / Payments ----
class ContractIn(Camel):
    tenant_id: int
    property_id: int
    landlord_id: int
    start_date: datetime
    end_date: datetime
    monthly_rent: Money
    deposit: Optional[Money] = None
    is_active: Optional[bool] = True
    terms: Optional[str] = None


class ContractOut(ORM):
    id: int
    tenant_id: int
    property_id: int
    landlord_id: int
    start_date: datetime
    end_date: datetime
    monthly_rent: Decimal
    deposit: Optional[Decimal] = None
    is_active: Optional[bool] = None
    terms: Optional[str] = None
    created_at: datetime


class PaymentIn(Camel):
    contract_id: int
    tenant_id: int
    amount: Money
    due_date: datetime
    paid_date: Optional[datetime] = None
    status: PaymentStatus
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class PaymentOut(ORM):
    id: int
    contract_id: int
    tenant_id: int
    amount: Decimal
    due_date: datetime
    paid_date: Optional[datetime] = None
    status: str
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


TenantUpdate = partial(TenantIn)
LandlordUpdate = partial(LandlordIn)
PropertyUpdate = partial(PropertyIn)
ContractUpdate = partial(ContractIn)
PaymentUpdate = partial(PaymentIn)


# ---- Joined views ----
class PropertyWithDetailsOut(PropertyOut):
    landlord: LandlordOut
    tenant: Optional[TenantOut] = None
    contract: Optional[ContractOut] = None
    last_payment: Optional[PaymentOut] = None


class ContractWithDetailsOut(ContractOut):
    tenant: TenantOut
    property: PropertyOut
    landlord: LandlordOut


class ContractWithPropertyOut(ContractOut):
    property: PropertyOut


class PaymentWithDetailsOut(PaymentOut):
    tenant: TenantOut
    contract: ContractWithPropertyOut


# ---- Dashboard / Chat ----
class DashboardStatsOut(ORM):
    total_tenants: int
    active_properties: int
    monthly_income: float
    pending_payments: int


class ChatStatusOut(Camel):
    active_connections: int
    status: str
