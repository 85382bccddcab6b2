"""
ORM model for `users`: staff who log in at the terminal with a PIN.

Only the bcrypt hash of the PIN is stored. PINs are short, so login compares
the submitted PIN against every active user's hash (see auth_service).
"""

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from acaiaclub.models.enums import Role


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role, name="user_role"), nullable=False)
    pin_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}', role={self.role})>"
