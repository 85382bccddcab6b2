"""Bodies for /api/company-clients, including the sales-stage action."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from acaiaclub.schemas.common import INT32_MAX, CamelModel, DecimalString


class CompanyClientCreate(CamelModel):
    company_name: str = Field(min_length=1, max_length=200)
    contact_name: Optional[str] = Field(default=None, max_length=200)
    contact_phone: str = Field(min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=254)
    employee_count: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    consumption_factor: DecimalString = Field(
        default=Decimal("1.0"), ge=0, max_digits=6, decimal_places=2
    )
    sales_pipeline_stage: str = Field(default="LEAD", min_length=1, max_length=50)
    notes: Optional[str] = None


class CompanyClientUpdate(CamelModel):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    contact_name: Optional[str] = Field(default=None, max_length=200)
    contact_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=254)
    employee_count: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    consumption_factor: Optional[DecimalString] = Field(
        default=None, ge=0, max_digits=6, decimal_places=2
    )
    sales_pipeline_stage: Optional[str] = Field(default=None, min_length=1, max_length=50)
    notes: Optional[str] = None

    @field_validator(
        "company_name", "contact_phone", "consumption_factor", "sales_pipeline_stage"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class SalesStageUpdate(CamelModel):
    """Body of PATCH /api/company-clients/{id}/sales-stage."""

    sales_pipeline_stage: str = Field(min_length=1, max_length=50)


class CompanyClientRead(CamelModel):
    id: uuid.UUID
    company_name: str
    contact_name: Optional[str]
    contact_phone: str
    contact_email: Optional[str]
    employee_count: Optional[int]
    consumption_factor: DecimalString
    sales_pipeline_stage: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
