"""
Acaia Club Backend — Supplier and Purchase Order Services
==========================================================

What:  Gateways for suppliers and purchase orders.
Why:   Purchase orders are created together with their line items, and
       their totals are derived, never trusted from the client.

Totals:
    total_item_cost = ordered_quantity × unit_cost      (per item)
    total_cost      = Σ total_item_cost                 (per order)
    Decimal arithmetic throughout, rounded half-up to cents for storage.

Status Changes:
    Any status may follow any other. Setting RECEIVED also stamps
    actual_delivery_date = now; both columns go out in the same UPDATE.
    Every other status leaves actual_delivery_date exactly as it was.
"""

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from acaiaclub.models import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    Supplier,
)
from acaiaclub.models.base import utcnow
from acaiaclub.exceptions import ValidationError
from acaiaclub.services.crud import CrudService

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
# Largest value a NUMERIC(12, 2) total column stores
MAX_TOTAL = Decimal("9999999999.99")


def line_total(quantity: Decimal, unit_cost: Decimal) -> Decimal:
    return (quantity * unit_cost).quantize(CENTS, rounding=ROUND_HALF_UP)


class PurchaseOrderService(CrudService[PurchaseOrder]):
    def __init__(self):
        super().__init__(
            PurchaseOrder,
            resource="purchase order",
            order_by=(PurchaseOrder.order_date.desc(),),
            load_options=(
                selectinload(PurchaseOrder.supplier),
                selectinload(PurchaseOrder.items),
            ),
            conflict_message="A purchase order with this invoice number already exists",
        )

    async def create_with_items(
        self, db: AsyncSession, values: Dict[str, Any], items: List[Dict[str, Any]]
    ) -> PurchaseOrder:
        """
        Create an order and its items in one flush.

        Args:
            values: Order columns (supplier_id, status, dates, invoice_number, notes)
            items:  Item dicts with description, ordered_quantity, ordered_unit, unit_cost

        Raises:
            NotFoundError: supplier_id matches no supplier (→ 404)
            ValidationError: a line or order total does not fit its column (→ 400)
            ConflictError: invoice_number already used (→ 409)
        """
        order_items = [
            PurchaseOrderItem(
                **item,
                total_item_cost=line_total(item["ordered_quantity"], item["unit_cost"]),
            )
            for item in items
        ]
        total = sum((item.total_item_cost for item in order_items), Decimal("0"))
        if total > MAX_TOTAL or any(item.total_item_cost > MAX_TOTAL for item in order_items):
            raise ValidationError(
                message=f"Order total must not exceed {MAX_TOTAL}",
                field="items",
                context={"total": str(total)},
            )

        values = {key: value for key, value in values.items() if value is not None}
        values.setdefault("order_date", utcnow())
        order = PurchaseOrder(**values, total_cost=total, items=order_items)
        db.add(order)
        await self.flush(db, action="create")
        logger.info(
            "Purchase order created: %s (%d items, total %s)", order.id, len(order_items), total
        )
        return await self.get(db, order.id, refresh=True)

    async def update_status(
        self, db: AsyncSession, order_id: uuid.UUID, status: PurchaseOrderStatus
    ) -> PurchaseOrder:
        order = await self.get(db, order_id)
        changes: Dict[str, Any] = {"status": status}
        if status == PurchaseOrderStatus.RECEIVED:
            changes["actual_delivery_date"] = utcnow()
        self.apply(order, changes)
        await self.flush(db, action="update")
        logger.info("Purchase order %s status set to %s", order_id, status.value)
        return await self.get(db, order_id, refresh=True)


# ── Singleton Instances ───────────────────────────────────────────────────
supplier_service = CrudService(
    Supplier,
    resource="supplier",
    order_by=(Supplier.name,),
    conflict_message="A supplier with this name already exists",
)

purchase_order_service = PurchaseOrderService()
