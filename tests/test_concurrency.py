"""Concurrent writers on the same account."""
import asyncio
import uuid

import pytest
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.core.database import Base
from app.models.account import Account
from app.models.warehouse import Warehouse
from app.services.exceptions import ConflictError
from app.services.warehouse_service import WarehouseService


async def _stale_default():
    return None


async def _skip_name_check(name, exclude_id=None):
    return None


async def _default_count(session: AsyncSession, account_id: str) -> int:
    result = await session.execute(
        select(func.count(Warehouse.id)).where(
            Warehouse.account_id == account_id,
            Warehouse.is_default == True,  # noqa: E712
        )
    )
    return result.scalar()


@pytest.mark.asyncio
async def test_stale_default_read_is_conflict(
    service: WarehouseService, db_session: AsyncSession, test_account: Account, make_payload, monkeypatch
):
    """A writer that missed the current default gets a retryable conflict, not a 500."""
    account_id = test_account.id
    await service.create(make_payload(name="A"))
    monkeypatch.setattr(service, "_current_default", _stale_default)

    with pytest.raises(ConflictError) as exc_info:
        await service.create(make_payload(name="B"))

    assert exc_info.value.message == "Warehouse directory changed concurrently, please retry"
    assert exc_info.value.details == {"retryable": True}
    assert await _default_count(db_session, account_id) == 1


@pytest.mark.asyncio
async def test_duplicate_name_race_is_conflict(
    service: WarehouseService, make_payload, monkeypatch
):
    await service.create(make_payload(name="A"))
    b_id = (await service.create(make_payload(name="B"))).id
    monkeypatch.setattr(service, "_ensure_unique_name", _skip_name_check)

    with pytest.raises(ConflictError) as exc_info:
        await service.update(b_id, {"name": "A"})

    assert exc_info.value.message == "Warehouse with this name already exists"
    assert [w.name for w in await service.list_warehouses()] == ["A", "B"]


@pytest.mark.asyncio
async def test_concurrent_first_creates_keep_one_default(tmp_path, make_payload, monkeypatch):
    """Two sessions create the first warehouse of an empty account at the same time."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    account_id = str(uuid.uuid4())
    async with session_factory() as session:
        session.add(Account(id=account_id, name="Race Traders", is_active=True))
        await session.commit()

    reads = 0
    both_read = asyncio.Event()

    def hold_after_read(service: WarehouseService):
        # both writers see "no default" before either one inserts
        original = service._current_default

        async def current_default():
            nonlocal reads
            found = await original()
            reads += 1
            if reads == 2:
                both_read.set()
            await asyncio.wait_for(both_read.wait(), timeout=5)
            return found

        monkeypatch.setattr(service, "_current_default", current_default)

    try:
        async with session_factory() as first, session_factory() as second:
            writers = [
                WarehouseService(first, account_id=account_id),
                WarehouseService(second, account_id=account_id),
            ]
            for writer in writers:
                hold_after_read(writer)

            results = await asyncio.gather(
                writers[0].create(make_payload(name="A")),
                writers[1].create(make_payload(name="B")),
                return_exceptions=True,
            )

        created = [r for r in results if isinstance(r, Warehouse)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(created) == 1
        assert len(conflicts) == 1
        assert created[0].is_default is True
        assert conflicts[0].details == {"retryable": True}

        async with session_factory() as session:
            assert await _default_count(session, account_id) == 1
    finally:
        await engine.dispose()
