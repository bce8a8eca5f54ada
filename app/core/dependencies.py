"""Application dependencies for dependency injection."""
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.security import decode_token, TokenPayload
from app.core.logging import get_logger
from app.models.account import Account
from app.services.warehouse_service import WarehouseService


security = HTTPBearer()
logger = get_logger(__name__)


async def get_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> TokenPayload:
    """Validate and decode the JWT token from the Authorization header."""
    payload = decode_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.type != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type. Access token required.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not payload.account_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token carries no account",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


async def get_current_account(
    token: TokenPayload = Depends(get_current_token),
    db: AsyncSession = Depends(get_db),
) -> Account:
    """Resolve the account named by the token and make sure it is active."""
    result = await db.execute(
        select(Account).where(Account.id == token.account_id)
    )
    account = result.scalar_one_or_none()

    if account is None or not account.is_active:
        logger.warning(
            "Account resolution failed",
            extra={"account_id": token.account_id, "user_id": token.sub},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account not found or inactive",
        )

    return account


class AccountContext:
    """Context object containing account-scoped information."""

    def __init__(self, token: TokenPayload, account: Account):
        self.token = token
        self.account = account
        self.account_id = account.id
        self.user_id = token.sub


async def get_account_context(
    token: TokenPayload = Depends(get_current_token),
    account: Account = Depends(get_current_account),
) -> AccountContext:
    """Get the full account context for the current request."""
    return AccountContext(token=token, account=account)


# Type aliases for cleaner dependency injection
AccountCtx = Annotated[AccountContext, Depends(get_account_context)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_warehouse_service(ctx: AccountCtx, db: DbSession) -> WarehouseService:
    """Warehouse service bound to the caller's account."""
    return WarehouseService(db, account_id=ctx.account_id, user_id=ctx.user_id)


Warehouses = Annotated[WarehouseService, Depends(get_warehouse_service)]
