"""Shipment model (read-only from the directory's point of view)."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base
from app.core.enums import ShipmentStatus


class Shipment(Base):
    """Shipment booked against a pickup warehouse.

    Shipments are created by the order pipeline; the directory only counts
    them to decide whether a warehouse can still be deleted.
    """

    __tablename__ = "shipments"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    warehouse_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("warehouses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    awb_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[ShipmentStatus] = mapped_column(
        SQLEnum(ShipmentStatus),
        default=ShipmentStatus.CREATED,
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    account = relationship("Account", back_populates="shipments")
    warehouse = relationship("Warehouse", back_populates="shipments")

    __table_args__ = (
        Index("ix_shipment_awb", "awb_number"),
    )
