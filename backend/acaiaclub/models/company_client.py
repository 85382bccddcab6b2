"""ORM model for `company_clients`: businesses in the corporate sales pipeline."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class CompanyClient(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "company_clients"

    company_name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    contact_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    contact_phone: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    employee_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Multiplier applied to per-employee consumption estimates
    consumption_factor: Mapped[Decimal] = mapped_column(
        Numeric(6, 2), nullable=False, default=Decimal("1.0")
    )
    # Free-form so the sales team can add stages without a migration
    sales_pipeline_stage: Mapped[str] = mapped_column(
        String(50), nullable=False, default="LEAD"
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<CompanyClient(id={self.id}, company_name='{self.company_name}')>"
