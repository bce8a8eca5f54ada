"""Test configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import copy
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.models.account import Account
from app.services.warehouse_service import WarehouseService


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

VALID_WAREHOUSE = {
    "name": "Main Warehouse",
    "title": "Acme Traders",
    "registered_name": "Acme Traders Pvt Ltd",
    "contact_person": {
        "name": "Priya Shah",
        "phone": "9876543210",
        "email": "priya@example.com",
    },
    "address": {
        "full_address": "221 Industrial Estate, Andheri East",
        "landmark": "Opp. bus depot",
        "city": "Mumbai",
        "state": "Maharashtra",
        "pincode": "400093",
    },
    "gstin": "27AAPFU0939F1ZV",
}


def warehouse_payload(**overrides) -> dict:
    """A valid create payload with top-level overrides applied."""
    payload = copy.deepcopy(VALID_WAREHOUSE)
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _make_account(db_session: AsyncSession, name: str, is_active: bool = True) -> Account:
    account = Account(id=str(uuid.uuid4()), name=name, is_active=is_active)
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


@pytest_asyncio.fixture
async def test_account(db_session: AsyncSession) -> Account:
    return await _make_account(db_session, "Acme Traders")


@pytest_asyncio.fixture
async def other_account(db_session: AsyncSession) -> Account:
    return await _make_account(db_session, "Globex Retail")


def headers_for(account: Account) -> dict:
    token = create_access_token(
        user_id=str(uuid.uuid4()),
        account_id=account.id,
        email="owner@example.com",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_account: Account) -> dict:
    """Authorization headers for the primary test account."""
    return headers_for(test_account)


@pytest.fixture
def other_headers(other_account: Account) -> dict:
    return headers_for(other_account)


@pytest.fixture
def service(db_session: AsyncSession, test_account: Account) -> WarehouseService:
    """Warehouse service bound to the primary test account."""
    return WarehouseService(db_session, account_id=test_account.id, user_id="test-user")


@pytest.fixture
def make_payload():
    """Factory for valid warehouse payloads: ``make_payload(name="Second")``."""
    return warehouse_payload
