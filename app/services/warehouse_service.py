"""
Warehouse Directory Service
===========================

Sole writer of an account's warehouse records. Every mutation runs as one
transaction; mutations that can move the default flag lock the account row
first so that concurrent requests for the same account are serialized and
the "exactly one default among active warehouses" rule holds after each
commit.
"""
import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import select, update, func

from app.core.enums import WarehouseStatusFilter
from app.models.account import Account
from app.models.shipment import Shipment
from app.models.warehouse import Warehouse
from app.schemas.warehouse import WarehouseCreate, WarehouseUpdate
from app.services.base import BaseService, transactional
from app.services.exceptions import ValidationError, NotFoundError, ConflictError

# Flags owned by set_default / set_active; silently dropped from update payloads
PROTECTED_FLAGS = ("is_default", "is_active")


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


class WarehouseService(BaseService):
    """Warehouse directory operations scoped to a single account"""

    # ------------------------------------------------------------------ helpers

    @staticmethod
    def _validate(schema: Type[BaseModel], data: Any) -> Any:
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    def _scoped(self):
        return select(Warehouse).where(Warehouse.account_id == self.account_id)

    @staticmethod
    def _ordered(query):
        # default first, newest next, id as the final tie-breaker
        return query.order_by(
            Warehouse.is_default.desc(),
            Warehouse.created_at.desc(),
            Warehouse.id,
        )

    async def _lock_account(self) -> None:
        """Serialize default-flag changes for this account (no-op lock on SQLite)."""
        result = await self.db_session.execute(
            select(Account.id).where(Account.id == self.account_id).with_for_update()
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Account", self.account_id)

    async def _get_or_404(self, warehouse_id: str) -> Warehouse:
        result = await self.db_session.execute(
            self._scoped().where(Warehouse.id == warehouse_id)
        )
        warehouse = result.scalar_one_or_none()
        if warehouse is None:
            raise NotFoundError("Warehouse", warehouse_id)
        return warehouse

    async def _current_default(self) -> Optional[Warehouse]:
        result = await self.db_session.execute(
            self._scoped().where(Warehouse.is_default == True)  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def _ensure_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        query = select(Warehouse.id).where(
            Warehouse.account_id == self.account_id,
            Warehouse.name == name,
        )
        if exclude_id:
            query = query.where(Warehouse.id != exclude_id)
        result = await self.db_session.execute(query)
        if result.first() is not None:
            raise ConflictError("Warehouse with this name already exists", "Warehouse")

    async def _count(self, *conditions) -> int:
        result = await self.db_session.execute(
            select(func.count(Warehouse.id)).where(
                Warehouse.account_id == self.account_id, *conditions
            )
        )
        return result.scalar() or 0

    async def _generate_code(self) -> str:
        count = await self._count()
        return f"WH{int(time.time() * 1000)}{count + 1}{secrets.token_hex(2).upper()}"

    async def _demote_defaults(self, keep_id: Optional[str] = None) -> None:
        """Clear the default flag on every warehouse of the account except ``keep_id``."""
        stmt = (
            update(Warehouse)
            .where(
                Warehouse.account_id == self.account_id,
                Warehouse.is_default == True,  # noqa: E712
            )
            .values(is_default=False, updated_at=datetime.now(timezone.utc))
        )
        if keep_id is not None:
            stmt = stmt.where(Warehouse.id != keep_id)
        await self.db_session.execute(stmt)

    async def _flush_refresh(self, *warehouses: Warehouse) -> None:
        await self.db_session.flush()
        for warehouse in warehouses:
            await self.db_session.refresh(warehouse)

    # -------------------------------------------------------------------- reads

    async def list_warehouses(
        self, status: WarehouseStatusFilter = WarehouseStatusFilter.ALL
    ) -> List[Warehouse]:
        """All warehouses of the account in stable display order."""
        query = self._scoped()
        if status == WarehouseStatusFilter.ACTIVE:
            query = query.where(Warehouse.is_active == True)  # noqa: E712
        elif status == WarehouseStatusFilter.INACTIVE:
            query = query.where(Warehouse.is_active == False)  # noqa: E712

        result = await self.db_session.execute(self._ordered(query))
        return list(result.scalars().all())

    async def get(self, warehouse_id: str) -> Warehouse:
        return await self._get_or_404(warehouse_id)

    async def get_default(self) -> Warehouse:
        warehouse = await self._current_default()
        if warehouse is None:
            raise NotFoundError("Default warehouse")
        return warehouse

    async def dropdown(self) -> List[Dict[str, Any]]:
        """Active warehouses in the compact shape used by pickup selectors."""
        warehouses = await self.list_warehouses(WarehouseStatusFilter.ACTIVE)
        return [
            {
                "id": w.id,
                "name": w.name,
                "title": w.title,
                "city": w.address.get("city"),
                "state": w.address.get("state"),
                "pincode": w.address.get("pincode"),
                "is_default": w.is_default,
            }
            for w in warehouses
        ]

    async def resolve_pickup(self, warehouse_id: Optional[str] = None) -> Warehouse:
        """Warehouse a new shipment should be picked up from.

        An explicit id must point at an active warehouse; without one the
        account default is used.
        """
        if warehouse_id:
            warehouse = await self._get_or_404(warehouse_id)
            if not warehouse.is_active:
                raise ConflictError(
                    "Selected warehouse is inactive and cannot be used for pickup",
                    "Warehouse",
                )
            return warehouse
        return await self.get_default()

    async def statistics(self) -> Dict[str, Any]:
        result = await self.db_session.execute(
            select(Warehouse.is_active, func.count(Warehouse.id))
            .where(Warehouse.account_id == self.account_id)
            .group_by(Warehouse.is_active)
        )
        counts = {bool(is_active): count for is_active, count in result.all()}
        active = counts.get(True, 0)
        inactive = counts.get(False, 0)
        return {
            "total": active + inactive,
            "active": active,
            "inactive": inactive,
            "default_warehouse": await self._current_default(),
        }

    # ---------------------------------------------------------------- mutations

    @transactional
    async def create(self, data: Dict[str, Any]) -> Warehouse:
        """Create a warehouse; the account's first (or only active) one becomes default."""
        payload: WarehouseCreate = self._validate(WarehouseCreate, data)

        await self._lock_account()
        await self._ensure_unique_name(payload.name)

        current_default = await self._current_default()
        make_default = current_default is None or payload.is_default
        if make_default and current_default is not None:
            await self._demote_defaults()

        warehouse = Warehouse(
            account_id=self.account_id,
            code=await self._generate_code(),
            name=payload.name,
            title=payload.title,
            registered_name=payload.registered_name,
            contact_person=_dump(payload.contact_person),
            address=_dump(payload.address),
            return_address=_dump(payload.return_address),
            gstin=payload.gstin,
            support_contact=_dump(payload.support_contact),
            notes=payload.notes,
            is_default=make_default,
            is_active=True,
        )
        self.db_session.add(warehouse)
        await self._flush_refresh(warehouse)

        self.logger.info(
            f"Warehouse created: {warehouse.name} (default={warehouse.is_default})",
            extra=self._log_context(warehouse_id=warehouse.id),
        )
        if current_default is not None and make_default:
            self.logger.info(
                f"Default warehouse moved from {current_default.id} to {warehouse.id}",
                extra=self._log_context(warehouse_id=warehouse.id),
            )
        return warehouse

    @transactional
    async def update(self, warehouse_id: str, data: Dict[str, Any]) -> Warehouse:
        """Partial update; the default/active flags are left to their own operations."""
        payload: WarehouseUpdate = self._validate(WarehouseUpdate, data)
        warehouse = await self._get_or_404(warehouse_id)

        ignored = [flag for flag in PROTECTED_FLAGS if isinstance(data, dict) and flag in data]
        if ignored:
            self.logger.debug(
                f"Ignoring {', '.join(ignored)} in update payload",
                extra=self._log_context(warehouse_id=warehouse_id),
            )

        changed = payload.model_fields_set
        if "name" in changed and payload.name != warehouse.name:
            await self._ensure_unique_name(payload.name, exclude_id=warehouse.id)

        for field in changed:
            setattr(warehouse, field, _dump(getattr(payload, field)))

        await self._flush_refresh(warehouse)
        self.logger.info(
            f"Warehouse updated: {sorted(changed)}",
            extra=self._log_context(warehouse_id=warehouse.id),
        )
        return warehouse

    @transactional
    async def delete(self, warehouse_id: str) -> str:
        """Hard-delete a warehouse that no shipment references."""
        await self._lock_account()
        warehouse = await self._get_or_404(warehouse_id)

        if warehouse.is_default:
            other_active = await self._count(
                Warehouse.id != warehouse.id,
                Warehouse.is_active == True,  # noqa: E712
            )
            if other_active:
                self.logger.warning(
                    "Refused to delete default warehouse while other active warehouses exist",
                    extra=self._log_context(warehouse_id=warehouse_id),
                )
                raise ConflictError(
                    "Cannot delete the default warehouse. Set another warehouse as default first.",
                    "Warehouse",
                )

        result = await self.db_session.execute(
            select(func.count(Shipment.id)).where(Shipment.warehouse_id == warehouse.id)
        )
        shipments = result.scalar() or 0
        if shipments:
            self.logger.warning(
                f"Refused to delete warehouse referenced by {shipments} shipment(s)",
                extra=self._log_context(warehouse_id=warehouse_id),
            )
            raise ConflictError(
                f"Cannot delete warehouse. It is being used in {shipments} shipment(s). "
                "Please deactivate it instead.",
                "Warehouse",
                details={"shipment_count": shipments},
            )

        await self.db_session.delete(warehouse)
        await self.db_session.flush()
        self.logger.info("Warehouse deleted", extra=self._log_context(warehouse_id=warehouse_id))
        return warehouse_id

    @transactional
    async def set_default(self, warehouse_id: str) -> Tuple[Warehouse, Optional[Warehouse]]:
        """Make ``warehouse_id`` the only default; returns (new default, demoted previous)."""
        await self._lock_account()
        warehouse = await self._get_or_404(warehouse_id)

        if not warehouse.is_active:
            raise ConflictError(
                "Inactive warehouse cannot be set as default. Activate it first.",
                "Warehouse",
            )
        if warehouse.is_default:
            return warehouse, None

        previous = await self._current_default()
        # demote before promote so the partial unique index never sees two defaults
        await self._demote_defaults(keep_id=warehouse.id)
        warehouse.is_default = True

        refreshed = [warehouse] + ([previous] if previous is not None else [])
        await self._flush_refresh(*refreshed)
        self.logger.info(
            f"Default warehouse set (previous={previous.id if previous else None})",
            extra=self._log_context(warehouse_id=warehouse.id),
        )
        return warehouse, previous

    async def _apply_active(self, warehouse: Warehouse, active: bool) -> Warehouse:
        if warehouse.is_active == active:
            return warehouse

        if not active:
            if warehouse.is_default:
                self.logger.warning(
                    "Refused to deactivate the default warehouse",
                    extra=self._log_context(warehouse_id=warehouse.id),
                )
                raise ConflictError(
                    "Cannot deactivate the default warehouse. Set another warehouse as default first.",
                    "Warehouse",
                )
            warehouse.is_active = False
        else:
            warehouse.is_active = True
            if await self._current_default() is None:
                # account had no active warehouse left; the reactivated one takes over
                warehouse.is_default = True

        await self._flush_refresh(warehouse)
        self.logger.info(
            f"Warehouse {'activated' if active else 'deactivated'} (default={warehouse.is_default})",
            extra=self._log_context(warehouse_id=warehouse.id),
        )
        return warehouse

    @transactional
    async def set_active(self, warehouse_id: str, active: bool) -> Warehouse:
        """Activate or deactivate; deactivating the default is rejected."""
        await self._lock_account()
        warehouse = await self._get_or_404(warehouse_id)
        return await self._apply_active(warehouse, active)

    @transactional
    async def toggle_active(self, warehouse_id: str) -> Warehouse:
        await self._lock_account()
        warehouse = await self._get_or_404(warehouse_id)
        return await self._apply_active(warehouse, not warehouse.is_active)
