"""Warehouse API endpoints."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from app.core.dependencies import Warehouses
from app.core.enums import WarehouseStatusFilter
from app.schemas.warehouse import (
    WarehouseResponse, WarehouseListResponse, WarehouseDropdownItem,
    WarehouseStatusUpdate, SetDefaultResponse, WarehouseDeleteResponse,
    WarehouseStatistics, ErrorResponse,
)


router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
CONFLICT = {409: {"model": ErrorResponse}}
INVALID = {422: {"model": ErrorResponse}}


def _serialize(warehouse) -> Optional[WarehouseResponse]:
    if warehouse is None:
        return None
    return WarehouseResponse.model_validate(warehouse)


@router.get("", response_model=WarehouseListResponse)
async def list_warehouses(
    service: Warehouses,
    status_filter: WarehouseStatusFilter = Query(WarehouseStatusFilter.ALL, alias="status"),
):
    """List the account's warehouses, default first then newest first."""
    warehouses = await service.list_warehouses(status_filter)
    return WarehouseListResponse(
        warehouses=[_serialize(w) for w in warehouses],
        total=len(warehouses),
    )


@router.get("/dropdown", response_model=List[WarehouseDropdownItem])
async def warehouse_dropdown(service: Warehouses):
    """Active warehouses for pickup selection."""
    return [WarehouseDropdownItem(**item) for item in await service.dropdown()]


@router.get("/default", response_model=WarehouseResponse, responses=NOT_FOUND)
async def get_default_warehouse(service: Warehouses):
    return _serialize(await service.get_default())


@router.get("/pickup", response_model=WarehouseResponse, responses={**NOT_FOUND, **CONFLICT})
async def resolve_pickup_warehouse(
    service: Warehouses,
    warehouse_id: Optional[str] = Query(None),
):
    """Warehouse a shipment is picked up from: the given one, else the default."""
    return _serialize(await service.resolve_pickup(warehouse_id))


@router.get("/statistics/overview", response_model=WarehouseStatistics)
async def warehouse_statistics(service: Warehouses):
    stats = await service.statistics()
    stats["default_warehouse"] = _serialize(stats["default_warehouse"])
    return WarehouseStatistics(**stats)


@router.get("/{warehouse_id}", response_model=WarehouseResponse, responses=NOT_FOUND)
async def get_warehouse(warehouse_id: str, service: Warehouses):
    """Get a specific warehouse by ID."""
    return _serialize(await service.get(warehouse_id))


@router.post(
    "",
    response_model=WarehouseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CONFLICT, **INVALID},
)
async def create_warehouse(
    service: Warehouses,
    payload: Dict[str, Any] = Body(...),
):
    """Create a warehouse. The account's first warehouse becomes the default."""
    return _serialize(await service.create(payload))


@router.put(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={**NOT_FOUND, **CONFLICT, **INVALID},
)
async def update_warehouse(
    warehouse_id: str,
    service: Warehouses,
    payload: Dict[str, Any] = Body(...),
):
    """Update warehouse details. Default and active flags are ignored here."""
    return _serialize(await service.update(warehouse_id, payload))


@router.delete(
    "/{warehouse_id}",
    response_model=WarehouseDeleteResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def delete_warehouse(warehouse_id: str, service: Warehouses):
    deleted_id = await service.delete(warehouse_id)
    return WarehouseDeleteResponse(message="Warehouse deleted successfully", id=deleted_id)


@router.patch(
    "/{warehouse_id}/set-default",
    response_model=SetDefaultResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def set_default_warehouse(warehouse_id: str, service: Warehouses):
    """Make this warehouse the account default, demoting the previous one."""
    warehouse, previous = await service.set_default(warehouse_id)
    return SetDefaultResponse(
        warehouse=_serialize(warehouse),
        previous_default=_serialize(previous),
    )


@router.patch(
    "/{warehouse_id}/status",
    response_model=WarehouseResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def set_warehouse_status(
    warehouse_id: str,
    request: WarehouseStatusUpdate,
    service: Warehouses,
):
    return _serialize(await service.set_active(warehouse_id, request.is_active))


@router.patch(
    "/{warehouse_id}/toggle-status",
    response_model=WarehouseResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def toggle_warehouse_status(warehouse_id: str, service: Warehouses):
    """Flip the active flag."""
    return _serialize(await service.toggle_active(warehouse_id))
