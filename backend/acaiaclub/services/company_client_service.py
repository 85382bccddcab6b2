"""Gateway for company clients (corporate sales pipeline)."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.models import CompanyClient
from acaiaclub.services.crud import CrudService


class CompanyClientService(CrudService[CompanyClient]):
    def __init__(self):
        super().__init__(
            CompanyClient,
            resource="company client",
            order_by=(CompanyClient.company_name,),
            conflict_message="A company client with this name or phone number already exists",
        )

    async def set_sales_stage(
        self, db: AsyncSession, client_id: uuid.UUID, stage: str
    ) -> CompanyClient:
        """Move a client to another pipeline stage; nothing else is written."""
        return await self.update(db, client_id, {"sales_pipeline_stage": stage})


company_client_service = CompanyClientService()
