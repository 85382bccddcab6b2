"""
Acaia Club Backend — Company Client Routes
===========================================

Corporate accounts and where they stand in the sales pipeline. Every
route requires a logged-in user. Writes are limited to SALES, MANAGER
and OWNER; deleting a client to MANAGER and OWNER.

Route Inventory:
    GET    /api/company-clients                     by company name
    POST   /api/company-clients                     409 on duplicate name or phone
    GET    /api/company-clients/{id}
    PATCH  /api/company-clients/{id}
    DELETE /api/company-clients/{id}
    PATCH  /api/company-clients/{id}/sales-stage    stage only
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import AUTH_RESPONSES, ApiResponse, DeletedResponse
from acaiaclub.schemas.company_client import (
    CompanyClientCreate,
    CompanyClientRead,
    CompanyClientUpdate,
    SalesStageUpdate,
)
from acaiaclub.services.company_client_service import company_client_service
from acaiaclub.services.session_service import ADMINS, SALES_WRITERS, require_role, require_user

router = APIRouter(
    prefix="/api/company-clients",
    tags=["Company Clients"],
    dependencies=[Depends(require_user)],
    responses=AUTH_RESPONSES,
)

WRITERS = Depends(require_role(*SALES_WRITERS))
ADMIN_ONLY = Depends(require_role(*ADMINS))


@router.get(
    "",
    response_model=ApiResponse[List[CompanyClientRead]],
    summary="List company clients",
)
async def list_company_clients(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[CompanyClientRead]]:
    clients = await company_client_service.list(db)
    return ApiResponse(data=[CompanyClientRead.model_validate(c) for c in clients])


@router.post(
    "",
    response_model=ApiResponse[CompanyClientRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a company client",
    dependencies=[WRITERS],
)
async def create_company_client(
    payload: CompanyClientCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CompanyClientRead]:
    client = await company_client_service.create(db, payload.model_dump())
    return ApiResponse(data=CompanyClientRead.model_validate(client))


@router.get(
    "/{client_id}",
    response_model=ApiResponse[CompanyClientRead],
    summary="Get a company client",
)
async def get_company_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CompanyClientRead]:
    client = await company_client_service.get(db, client_id)
    return ApiResponse(data=CompanyClientRead.model_validate(client))


@router.patch(
    "/{client_id}",
    response_model=ApiResponse[CompanyClientRead],
    summary="Update a company client",
    dependencies=[WRITERS],
)
async def update_company_client(
    client_id: uuid.UUID,
    payload: CompanyClientUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CompanyClientRead]:
    client = await company_client_service.update(
        db, client_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=CompanyClientRead.model_validate(client))


@router.delete(
    "/{client_id}",
    response_model=ApiResponse[DeletedResponse],
    summary="Delete a company client",
    dependencies=[ADMIN_ONLY],
)
async def delete_company_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await company_client_service.delete(db, client_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


@router.patch(
    "/{client_id}/sales-stage",
    response_model=ApiResponse[CompanyClientRead],
    summary="Move a client to another sales stage",
    dependencies=[WRITERS],
)
async def update_sales_stage(
    client_id: uuid.UUID,
    payload: SalesStageUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[CompanyClientRead]:
    client = await company_client_service.set_sales_stage(
        db, client_id, payload.sales_pipeline_stage
    )
    return ApiResponse(data=CompanyClientRead.model_validate(client))
