import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .auth import authenticate, clear_session_cookie, hash_password, set_session_cookie, verify_password
from .database import get_db
from .models import User
from .schemas import (
    ContractIn, ContractOut, ContractUpdate, ContractWithDetailsOut,
    DashboardStatsOut,
    LandlordIn, LandlordOut, LandlordUpdate,
    LoginReq, RegisterReq, UserOut,
    PaymentIn, PaymentOut, PaymentUpdate, PaymentWithDetailsOut,
    PropertyIn, PropertyOut, PropertyUpdate, PropertyWithDetailsOut,
    TenantIn, TenantOut, TenantUpdate,
)
from .storage import MemStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ---------- AUTH ----------
@router.post("/auth/register", response_model=UserOut, status_code=201, tags=["Auth"])
def register(body: RegisterReq, response: Response, db: Session = Depends(get_db)):
    exists = db.scalar(select(func.count()).select_from(User).where(User.email == body.email))
    if exists:
        raise HTTPException(400, "Email already registered")
    u = User(email=body.email, full_name=body.full_name, password_hash=hash_password(body.password), role=body.role)
    db.add(u); db.commit(); db.refresh(u)
    set_session_cookie(response, u)
    logger.info("Registered user %s", u.id)
    return u


@router.post("/auth/login", response_model=UserOut, tags=["Auth"])
def login(body: LoginReq, response: Response, db: Session = Depends(get_db)):
    u = db.scalar(select(User).where(User.email == body.email))
    if not u or not verify_password(body.password, u.password_hash):
        logger.info("Failed login for %s", body.email)
        raise HTTPException(401, "Invalid credentials")
    set_session_cookie(response, u)
    return u


@router.post("/auth/logout", tags=["Auth"])
def logout(response: Response):
    clear_session_cookie(response)
    return {"message": "Logged out"}


@router.get("/auth/me", response_model=UserOut, tags=["Auth"])
def me(user: User = Depends(authenticate)):
    return user


# ---------- DASHBOARD ----------
@router.get("/dashboard/stats", response_model=DashboardStatsOut, tags=["Dashboard"])
async def dashboard_stats(storage: MemStorage = Depends(get_storage)):
    return storage.get_dashboard_stats()


# ---------- TENANTS ----------
@router.get("/tenants", response_model=List[TenantOut], tags=["Tenants"])
async def list_tenants(storage: MemStorage = Depends(get_storage)):
    return storage.get_tenants()


@router.get("/tenants/{tenant_id}", response_model=TenantOut, tags=["Tenants"])
async def get_tenant(tenant_id: int, storage: MemStorage = Depends(get_storage)):
    tenant = storage.get_tenant(tenant_id)
    if not tenant: raise HTTPException(404, "Tenant not found")
    return tenant


@router.post("/tenants", response_model=TenantOut, status_code=201, tags=["Tenants"])
async def create_tenant(body: TenantIn, storage: MemStorage = Depends(get_storage)):
    return storage.create_tenant(body.model_dump())


@router.put("/tenants/{tenant_id}", response_model=TenantOut, tags=["Tenants"])
async def update_tenant(tenant_id: int, body: TenantUpdate, storage: MemStorage = Depends(get_storage)):
    tenant = storage.update_tenant(tenant_id, body.model_dump(exclude_unset=True))
    if not tenant: raise HTTPException(404, "Tenant not found")
    return tenant


@router.delete("/tenants/{tenant_id}", status_code=204, tags=["Tenants"])
async def delete_tenant(tenant_id: int, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_tenant(tenant_id): raise HTTPException(404, "Tenant not found")
    return Response(status_code=204)


# ---------- LANDLORDS ----------
@router.get("/landlords", response_model=List[LandlordOut], tags=["Landlords"])
async def list_landlords(storage: MemStorage = Depends(get_storage)):
    return storage.get_landlords()


@router.get("/landlords/{landlord_id}", response_model=LandlordOut, tags=["Landlords"])
async def get_landlord(landlord_id: int, storage: MemStorage = Depends(get_storage)):
    landlord = storage.get_landlord(landlord_id)
    if not landlord: raise HTTPException(404, "Landlord not found")
    return landlord


@router.post("/landlords", response_model=LandlordOut, status_code=201, tags=["Landlords"])
async def create_landlord(body: LandlordIn, storage: MemStorage = Depends(get_storage)):
    return storage.create_landlord(body.model_dump())


@router.put("/landlords/{landlord_id}", response_model=LandlordOut, tags=["Landlords"])
async def update_landlord(landlord_id: int, body: LandlordUpdate, storage: MemStorage = Depends(get_storage)):
    landlord = storage.update_landlord(landlord_id, body.model_dump(exclude_unset=True))
    if not landlord: raise HTTPException(404, "Landlord not found")
    return landlord


@router.delete("/landlords/{landlord_id}", status_code=204, tags=["Landlords"])
async def delete_landlord(landlord_id: int, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_landlord(landlord_id): raise HTTPException(404, "Landlord not found")
    return Response(status_code=204)


# ---------- PROPERTIES ----------
@router.get("/properties", response_model=List[PropertyWithDetailsOut], tags=["Properties"])
async def list_properties(storage: MemStorage = Depends(get_storage)):
    return storage.get_properties_with_details()


@router.get("/properties/{property_id}", response_model=PropertyOut, tags=["Properties"])
async def get_property(property_id: int, storage: MemStorage = Depends(get_storage)):
    prop = storage.get_property(property_id)
    if not prop: raise HTTPException(404, "Property not found")
    return prop


@router.post("/properties", response_model=PropertyOut, status_code=201, tags=["Properties"])
async def create_property(body: PropertyIn, storage: MemStorage = Depends(get_storage)):
    return storage.create_property(body.model_dump())


@router.put("/properties/{property_id}", response_model=PropertyOut, tags=["Properties"])
async def update_property(property_id: int, body: PropertyUpdate, storage: MemStorage = Depends(get_storage)):
    prop = storage.update_property(property_id, body.model_dump(exclude_unset=True))
    if not prop: raise HTTPException(404, "Property not found")
    return prop


@router.delete("/properties/{property_id}", status_code=204, tags=["Properties"])
async def delete_property(property_id: int, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_property(property_id): raise HTTPException(404, "Property not found")
    return Response(status_code=204)


# ---------- CONTRACTS ----------
@router.get("/contracts", response_model=List[ContractWithDetailsOut], tags=["Contracts"])
async def list_contracts(storage: MemStorage = Depends(get_storage)):
    contracts = storage.get_contracts_with_details()
    logger.debug("contracts: %d stored, %d with details", len(storage.contracts), len(contracts))
    return contracts


@router.get("/contracts/{contract_id}", response_model=ContractOut, tags=["Contracts"])
async def get_contract(contract_id: int, storage: MemStorage = Depends(get_storage)):
    contract = storage.get_contract(contract_id)
    if not contract: raise HTTPException(404, "Contract not found")
    return contract


@router.post("/contracts", response_model=ContractOut, status_code=201, tags=["Contracts"])
async def create_contract(body: ContractIn, storage: MemStorage = Depends(get_storage)):
    return storage.create_contract(body.model_dump())


@router.put("/contracts/{contract_id}", response_model=ContractOut, tags=["Contracts"])
async def update_contract(contract_id: int, body: ContractUpdate, storage: MemStorage = Depends(get_storage)):
    contract = storage.update_contract(contract_id, body.model_dump(exclude_unset=True))
    if not contract: raise HTTPException(404, "Contract not found")
    return contract


@router.delete("/contracts/{contract_id}", status_code=204, tags=["Contracts"])
async def delete_contract(contract_id: int, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_contract(contract_id): raise HTTPException(404, "Contract not found")
    return Response(status_code=204)


# ---------- PAYMENTS ----------
@router.get("/payments", response_model=List[PaymentWithDetailsOut], tags=["Payments"])
async def list_payments(storage: MemStorage = Depends(get_storage)):
    return storage.get_payments_with_details()


# declared before /payments/{payment_id} so the literal paths win
@router.get("/payments/pending", response_model=List[PaymentWithDetailsOut], tags=["Payments"])
async def list_pending_payments(storage: MemStorage = Depends(get_storage)):
    return storage.get_pending_payments()


@router.get("/payments/overdue", response_model=List[PaymentWithDetailsOut], tags=["Payments"])
async def list_overdue_payments(storage: MemStorage = Depends(get_storage)):
    return storage.get_overdue_payments()


@router.get("/payments/{payment_id}", response_model=PaymentOut, tags=["Payments"])
async def get_payment(payment_id: int, storage: MemStorage = Depends(get_storage)):
    payment = storage.get_payment(payment_id)
    if not payment: raise HTTPException(404, "Payment not found")
    return payment


@router.post("/payments", response_model=PaymentOut, status_code=201, tags=["Payments"])
async def create_payment(body: PaymentIn, storage: MemStorage = Depends(get_storage)):
    return storage.create_payment(body.model_dump())


@router.put("/payments/{payment_id}", response_model=PaymentOut, tags=["Payments"])
async def update_payment(payment_id: int, body: PaymentUpdate, storage: MemStorage = Depends(get_storage)):
    payment = storage.update_payment(payment_id, body.model_dump(exclude_unset=True))
    if not payment: raise HTTPException(404, "Payment not found")
    return payment


@router.delete("/payments/{payment_id}", status_code=204, tags=["Payments"])
async def delete_payment(payment_id: int, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_payment(payment_id): raise HTTPException(404, "Payment not found")
    return Response(status_code=204)
