"""
Service base
============

Transaction handling shared by the directory services.
"""
from functools import wraps
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.services.exceptions import DirectoryError, ConflictError

logger = get_logger(__name__)

# Constraint names as reported by Postgres and SQLite for a duplicate warehouse name
DUPLICATE_NAME_MARKERS = ("uq_warehouse_account_name", "warehouses.account_id, warehouses.name")


def _conflict_from_integrity(exc: IntegrityError) -> ConflictError:
    """Translate a constraint violation left by a concurrent writer into a retryable conflict."""
    reason = str(exc.orig)
    if any(marker in reason for marker in DUPLICATE_NAME_MARKERS):
        return ConflictError("Warehouse with this name already exists", "Warehouse")
    return ConflictError(
        "Warehouse directory changed concurrently, please retry",
        "Warehouse",
        details={"retryable": True},
    )


def transactional(func):
    """Run a service method as one transaction: commit on success, rollback on any error."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            result = await func(self, *args, **kwargs)
            await self.db_session.commit()
            return result
        except DirectoryError:
            await self.db_session.rollback()
            raise
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(
                f"Constraint violation in {func.__name__}: {e.orig}",
                extra={"account_id": getattr(self, "account_id", None)},
            )
            raise _conflict_from_integrity(e) from e
        except Exception as e:
            await self.db_session.rollback()
            logger.error(
                f"Transaction failed in {func.__name__}: {type(e).__name__}: {e}",
                extra={"account_id": getattr(self, "account_id", None)},
            )
            raise
    return wrapper


class BaseService:
    """Base service bound to one DB session and one account."""

    def __init__(self, db_session: AsyncSession, account_id: str, user_id: Optional[str] = None):
        self.db_session = db_session
        self.account_id = account_id
        self.user_id = user_id
        self.logger = get_logger(f"app.services.{self.__class__.__name__}")

    def _log_context(self, **extra) -> dict:
        context = {"account_id": self.account_id, "user_id": self.user_id}
        context.update(extra)
        return context
