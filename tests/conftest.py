"""
KiraTakip - Shared Test Fixtures
Every test gets its own empty store; the user table is an in-memory SQLite db.
"""

import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

# Configure test environment BEFORE importing app
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["CHAT_RESPONSE_DELAY"] = "0"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"

from kiratakip.main import create_app
from kiratakip.storage import MemStorage


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
def anyio_backend():
    """Use asyncio for async tests."""
    return "asyncio"


@pytest.fixture
def storage() -> MemStorage:
    return MemStorage()


@pytest.fixture
def app(storage):
    return create_app(storage=storage)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def yesterday() -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=1)


@pytest.fixture
def tomorrow() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


@pytest.fixture
def landlord_data():
    return {
        "name": "Mehmet Öztürk",
        "email": "mehmet.ozturk@example.com",
        "phone": "+90 532 123 4567",
        "national_id": "12345678901",
        "bank_account": "TR33 0006 1005 1978 6457 8413 26",
    }


@pytest.fixture
def tenant_data():
    return {
        "name": "Ali Demir",
        "email": "ali.demir@example.com",
        "phone": "+90 535 456 7890",
        "national_id": "56789012345",
        "emergency_contact": "Ayşe Demir",
    }


@pytest.fixture
def property_data():
    """Property payload without its landlord id."""
    return {
        "address": "Barbaros Bulvarı No:45 D:8, Beşiktaş/İstanbul",
        "type": "2+1",
        "area": 120,
        "floor": 8,
        "has_balcony": True,
        "has_parking": False,
        "is_available": True,
        "monthly_rent": Decimal("5000"),
    }
