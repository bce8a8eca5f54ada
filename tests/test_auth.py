"""Authentication and account scoping tests."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import create_access_token, decode_token
from app.models.account import Account


@pytest.mark.asyncio
async def test_list_unauthenticated(client: AsyncClient):
    """Requests without a bearer token are rejected."""
    response = await client.get("/api/v1/warehouses")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get(
        "/api/v1/warehouses",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, test_account: Account):
    token = create_access_token(
        user_id=str(uuid.uuid4()),
        account_id=test_account.id,
        expires_minutes=-5,
    )

    response = await client.get(
        "/api/v1/warehouses",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_without_account(client: AsyncClient):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "type": "access", "exp": now + timedelta(minutes=5), "iat": now},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    response = await client.get(
        "/api/v1/warehouses",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Token carries no account"


@pytest.mark.asyncio
async def test_inactive_account(client: AsyncClient, db_session: AsyncSession):
    account = Account(id=str(uuid.uuid4()), name="Dormant", is_active=False)
    db_session.add(account)
    await db_session.commit()

    token = create_access_token(user_id=str(uuid.uuid4()), account_id=account.id)
    response = await client.get(
        "/api/v1/warehouses",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_account(client: AsyncClient):
    token = create_access_token(user_id=str(uuid.uuid4()), account_id=str(uuid.uuid4()))

    response = await client.get(
        "/api/v1/warehouses",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403


def test_decode_token_reads_account_from_app_metadata():
    """Tokens minted by the identity provider keep the account in app_metadata."""
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": "user-1",
            "exp": now + timedelta(minutes=5),
            "iat": now,
            "app_metadata": {"account_id": "acct-1"},
        },
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    payload = decode_token(token)

    assert payload is not None
    assert payload.account_id == "acct-1"
    assert payload.type == "access"
