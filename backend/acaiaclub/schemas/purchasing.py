"""
Acaia Club Backend — Supplier and Purchase Order Schemas
=========================================================

What:  Bodies for /api/suppliers and /api/purchase-orders.

Money:
    ordered_quantity, unit_cost, total_item_cost and total_cost accept
    numbers or numeric strings and are always returned as strings.
    total_item_cost and total_cost are computed by the service, never
    taken from the client.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from acaiaclub.models.enums import PurchaseOrderStatus
from acaiaclub.schemas.common import CamelModel, DecimalString


# ══════════════════════════════════════════════════════════════════════════
# Suppliers
# ══════════════════════════════════════════════════════════════════════════


class SupplierCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    contact_name: Optional[str] = Field(default=None, max_length=200)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=254)


class SupplierUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    contact_name: Optional[str] = Field(default=None, max_length=200)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=254)

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class SupplierRead(CamelModel):
    id: uuid.UUID
    name: str
    contact_name: Optional[str]
    contact_phone: Optional[str]
    contact_email: Optional[str]
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Purchase Orders
# ══════════════════════════════════════════════════════════════════════════


class PurchaseOrderItemCreate(CamelModel):
    description: str = Field(min_length=1, max_length=300)
    ordered_quantity: DecimalString = Field(gt=0, max_digits=12, decimal_places=3)
    ordered_unit: str = Field(min_length=1, max_length=30)
    unit_cost: DecimalString = Field(ge=0, max_digits=12, decimal_places=2)


class PurchaseOrderCreate(CamelModel):
    """
    What:  Body of POST /api/purchase-orders: the order and its line items.
    Rules: supplierId required, at least one item, every quantity > 0 and
           every unit cost >= 0. orderDate defaults to now, status to PENDING.
    """

    supplier_id: uuid.UUID
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    order_date: Optional[datetime] = None
    expected_delivery_date: Optional[datetime] = None
    invoice_number: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None
    items: List[PurchaseOrderItemCreate] = Field(min_length=1)


class PurchaseOrderStatusUpdate(CamelModel):
    status: PurchaseOrderStatus


class PurchaseOrderItemRead(CamelModel):
    id: uuid.UUID
    purchase_order_id: uuid.UUID
    description: str
    ordered_quantity: DecimalString
    ordered_unit: str
    unit_cost: DecimalString
    total_item_cost: DecimalString


class PurchaseOrderRead(CamelModel):
    id: uuid.UUID
    supplier_id: uuid.UUID
    supplier: SupplierRead
    status: PurchaseOrderStatus
    order_date: datetime
    expected_delivery_date: Optional[datetime]
    actual_delivery_date: Optional[datetime]
    invoice_number: Optional[str]
    notes: Optional[str]
    total_cost: DecimalString
    items: List[PurchaseOrderItemRead]
    created_at: datetime
    updated_at: datetime
