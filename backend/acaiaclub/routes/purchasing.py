"""
Acaia Club Backend — Supplier and Purchase Order Routes
========================================================

Every route here requires a logged-in user (router-level dependency).
Reads are open to COOK, FINANCIAL, MANAGER and OWNER; writes to
FINANCIAL, MANAGER and OWNER; deleting a supplier to MANAGER and OWNER.
Other roles get 403.

Route Inventory:
    GET    /api/suppliers                      suppliers by name
    POST   /api/suppliers                      409 on duplicate name
    GET    /api/suppliers/{id}
    PATCH  /api/suppliers/{id}
    DELETE /api/suppliers/{id}                 409 while orders reference it
    GET    /api/purchase-orders                orders, newest order_date first
    POST   /api/purchase-orders                order + items, totals computed
    GET    /api/purchase-orders/{id}
    DELETE /api/purchase-orders/{id}           items go with it
    PATCH  /api/purchase-orders/{id}/status    RECEIVED stamps actualDeliveryDate
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import AUTH_RESPONSES, ApiResponse, DeletedResponse
from acaiaclub.schemas.purchasing import (
    PurchaseOrderCreate,
    PurchaseOrderRead,
    PurchaseOrderStatusUpdate,
    SupplierCreate,
    SupplierRead,
    SupplierUpdate,
)
from acaiaclub.services.purchasing_service import purchase_order_service, supplier_service
from acaiaclub.services.session_service import (
    ADMINS,
    PURCHASING_READERS,
    PURCHASING_WRITERS,
    require_role,
    require_user,
)

router = APIRouter(
    prefix="/api",
    tags=["Purchasing"],
    dependencies=[Depends(require_user)],
    responses=AUTH_RESPONSES,
)

READERS = Depends(require_role(*PURCHASING_READERS))
WRITERS = Depends(require_role(*PURCHASING_WRITERS))
ADMIN_ONLY = Depends(require_role(*ADMINS))


# ══════════════════════════════════════════════════════════════════════════
# Suppliers
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/suppliers",
    response_model=ApiResponse[List[SupplierRead]],
    summary="List suppliers",
    dependencies=[READERS],
)
async def list_suppliers(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[SupplierRead]]:
    suppliers = await supplier_service.list(db)
    return ApiResponse(data=[SupplierRead.model_validate(s) for s in suppliers])


@router.post(
    "/suppliers",
    response_model=ApiResponse[SupplierRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a supplier",
    dependencies=[WRITERS],
)
async def create_supplier(
    payload: SupplierCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[SupplierRead]:
    supplier = await supplier_service.create(db, payload.model_dump())
    return ApiResponse(data=SupplierRead.model_validate(supplier))


@router.get(
    "/suppliers/{supplier_id}",
    response_model=ApiResponse[SupplierRead],
    summary="Get a supplier",
    dependencies=[READERS],
)
async def get_supplier(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[SupplierRead]:
    supplier = await supplier_service.get(db, supplier_id)
    return ApiResponse(data=SupplierRead.model_validate(supplier))


@router.patch(
    "/suppliers/{supplier_id}",
    response_model=ApiResponse[SupplierRead],
    summary="Update a supplier",
    dependencies=[WRITERS],
)
async def update_supplier(
    supplier_id: uuid.UUID,
    payload: SupplierUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[SupplierRead]:
    supplier = await supplier_service.update(
        db, supplier_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=SupplierRead.model_validate(supplier))


@router.delete(
    "/suppliers/{supplier_id}",
    response_model=ApiResponse[DeletedResponse],
    summary="Delete a supplier without orders",
    dependencies=[ADMIN_ONLY],
)
async def delete_supplier(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await supplier_service.delete(db, supplier_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


# ══════════════════════════════════════════════════════════════════════════
# Purchase Orders
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/purchase-orders",
    response_model=ApiResponse[List[PurchaseOrderRead]],
    summary="List purchase orders",
    dependencies=[READERS],
)
async def list_purchase_orders(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[PurchaseOrderRead]]:
    orders = await purchase_order_service.list(db)
    return ApiResponse(data=[PurchaseOrderRead.model_validate(order) for order in orders])


@router.post(
    "/purchase-orders",
    response_model=ApiResponse[PurchaseOrderRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a purchase order with its items",
    dependencies=[WRITERS],
)
async def create_purchase_order(
    payload: PurchaseOrderCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PurchaseOrderRead]:
    """
    totalItemCost and totalCost are computed from quantities and unit
    costs. 404 when supplierId matches no supplier; 409 on a reused
    invoice number.
    """
    values = payload.model_dump(exclude={"items"})
    items = [item.model_dump() for item in payload.items]
    order = await purchase_order_service.create_with_items(db, values, items)
    return ApiResponse(data=PurchaseOrderRead.model_validate(order))


@router.get(
    "/purchase-orders/{order_id}",
    response_model=ApiResponse[PurchaseOrderRead],
    summary="Get a purchase order",
    dependencies=[READERS],
)
async def get_purchase_order(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PurchaseOrderRead]:
    order = await purchase_order_service.get(db, order_id)
    return ApiResponse(data=PurchaseOrderRead.model_validate(order))


@router.delete(
    "/purchase-orders/{order_id}",
    response_model=ApiResponse[DeletedResponse],
    summary="Delete a purchase order",
    dependencies=[WRITERS],
)
async def delete_purchase_order(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await purchase_order_service.delete(db, order_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


@router.patch(
    "/purchase-orders/{order_id}/status",
    response_model=ApiResponse[PurchaseOrderRead],
    summary="Change a purchase order's status",
    dependencies=[WRITERS],
)
async def update_purchase_order_status(
    order_id: uuid.UUID,
    payload: PurchaseOrderStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PurchaseOrderRead]:
    """
    Any status may follow any other. RECEIVED also sets
    actualDeliveryDate to now in the same write; other statuses leave it
    untouched.
    """
    order = await purchase_order_service.update_status(db, order_id, payload.status)
    return ApiResponse(data=PurchaseOrderRead.model_validate(order))
