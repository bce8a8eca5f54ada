"""Warehouse model."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import (
    String, Boolean, DateTime, Text, JSON, ForeignKey, Index, UniqueConstraint, text
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Warehouse(Base):
    """A pickup/return address registered by an account.

    ``contact_person``, ``address``, ``return_address`` and ``support_contact``
    are stored as JSON documents shaped by the value types in
    ``app.schemas.warehouse``.
    """

    __tablename__ = "warehouses"

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
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    registered_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_person: Mapped[dict] = mapped_column(JSON, nullable=False)
    address: Mapped[dict] = mapped_column(JSON, nullable=False)
    return_address: Mapped[Optional[dict]] = mapped_column(JSON(none_as_null=True), nullable=True)
    gstin: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)
    support_contact: Mapped[Optional[dict]] = mapped_column(JSON(none_as_null=True), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False
    )

    # Relationships
    account = relationship("Account", back_populates="warehouses")
    shipments = relationship("Shipment", back_populates="warehouse", passive_deletes="all")

    __table_args__ = (
        UniqueConstraint("account_id", "name", name="uq_warehouse_account_name"),
        # At most one default per account
        Index(
            "ix_warehouse_account_default",
            "account_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default"),
        ),
        Index("ix_warehouse_account_active", "account_id", "is_active"),
    )

    @property
    def effective_return_address(self) -> dict:
        """Return address, falling back to the pickup address."""
        return self.return_address or self.address

    def __repr__(self) -> str:
        return f"<Warehouse id={self.id!r} name={self.name!r} default={self.is_default}>"
