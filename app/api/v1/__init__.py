"""API v1 router."""
from fastapi import APIRouter

from app.api.v1.warehouses import router as warehouses_router


router = APIRouter(prefix="/v1")

router.include_router(warehouses_router, prefix="/warehouses", tags=["Warehouses"])
