"""
Acaia Club Backend — Supplier and Purchase Order Models
========================================================

What:  ORM models for `suppliers`, `purchase_orders` and `purchase_order_items`.
Why:   Stock is bought from suppliers through purchase orders; each order
       moves through a status pipeline until it is received.

Table Design Rationale:
    - invoice_number UNIQUE: one supplier invoice reconciles one order
      (NULLs are not compared, so drafts without an invoice are fine)
    - purchase_orders → suppliers uses RESTRICT: a supplier with order
      history cannot be deleted out from under it
    - items cascade with their order
    - total_cost / unit_cost / total_item_cost are NUMERIC: money and
      quantities never go through a float
    - actual_delivery_date is only ever written together with
      status = RECEIVED (see PurchaseOrderService.update_status)
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin, utcnow
from acaiaclub.models.enums import PurchaseOrderStatus


class Supplier(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    contact_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)

    purchase_orders: Mapped[List["PurchaseOrder"]] = relationship(
        back_populates="supplier",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id}, name='{self.name}')>"


class PurchaseOrder(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    An order placed with a supplier.

    Query Patterns:
        - List orders: ORDER BY order_date DESC, with supplier and items
        - Order detail: order + supplier + items, selectin loaded
    """

    __tablename__ = "purchase_orders"

    supplier_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("suppliers.id", ondelete="RESTRICT"),
        nullable=False,
    )
    status: Mapped[PurchaseOrderStatus] = mapped_column(
        Enum(PurchaseOrderStatus, name="purchase_order_status"),
        nullable=False,
        default=PurchaseOrderStatus.PENDING,
    )

    # ── Dates ─────────────────────────────────────────────────────────────
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expected_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    actual_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    invoice_number: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, unique=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )

    supplier: Mapped["Supplier"] = relationship(back_populates="purchase_orders")
    items: Mapped[List["PurchaseOrderItem"]] = relationship(
        back_populates="purchase_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: PurchaseOrderItem.description,
    )

    __table_args__ = (
        Index("idx_purchase_orders_order_date", "order_date"),
        Index("idx_purchase_orders_supplier_id", "supplier_id"),
    )

    def __repr__(self) -> str:
        return f"<PurchaseOrder(id={self.id}, status={self.status})>"


class PurchaseOrderItem(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "purchase_order_items"

    purchase_order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("purchase_orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(300), nullable=False)
    ordered_quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    ordered_unit: Mapped[str] = mapped_column(String(30), nullable=False)
    unit_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_item_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    purchase_order: Mapped["PurchaseOrder"] = relationship(back_populates="items")
