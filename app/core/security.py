"""JWT helpers for resolving the calling account."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError
import uuid

from app.core.config import settings
from app.core.logging import get_logger


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Access token payload issued by the main platform."""
    sub: str  # user_id
    email: Optional[str] = None
    account_id: Optional[str] = None  # Custom claim, may live in app_metadata
    type: Optional[str] = "access"
    exp: datetime
    iat: datetime
    app_metadata: dict = {}
    user_metadata: dict = {}

    class Config:
        extra = "allow"


def create_access_token(
    user_id: str,
    account_id: str,
    email: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create an access token (used by seed data and tests)."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": user_id,
        "account_id": account_id,
        "email": email,
        "type": "access",
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a JWT, returning None when it is unusable."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.warning(f"Token decode error: {e}")
        return None

    # Account claim may be nested in app_metadata (Supabase-style tokens)
    app_meta = payload.get("app_metadata") or {}
    user_meta = payload.get("user_metadata") or {}
    if not payload.get("account_id"):
        payload["account_id"] = app_meta.get("account_id") or user_meta.get("account_id")

    try:
        return TokenPayload(**payload)
    except ValidationError as e:
        logger.warning(f"Token payload rejected: {e.error_count()} invalid claim(s)")
        return None
