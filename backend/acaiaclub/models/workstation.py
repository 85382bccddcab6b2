"""ORM model for the `workstations` table (bar, kitchen, POS stations)."""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class Workstation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "workstations"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)

    # At most one venue object per workstation (unique FK on venue_objects)
    venue_object: Mapped[Optional["VenueObject"]] = relationship(  # noqa: F821
        back_populates="workstation",
        uselist=False,
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Workstation(id={self.id}, name='{self.name}')>"
