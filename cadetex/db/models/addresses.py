"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cadetex.db.base import Base


class Address(Base):
    """
    Postal address owned by exactly one client, provider or task override.

    References to an address are ON DELETE SET NULL; owners remove their
    address row explicitly when they are deleted.
    """

    __tablename__ = "addresses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    street: Mapped[str | None] = mapped_column(String(200), nullable=True)
    street_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    complement: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str | None] = mapped_column(String(80), nullable=True)
    province: Mapped[str | None] = mapped_column(String(80), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)

    @property
    def full_address(self) -> str:
        """Single-line rendering, e.g. "Av. Corrientes 1234, Depto 5, CABA"."""
        first = " ".join(part for part in (self.street, self.street_number) if part)
        parts = [first, self.complement, self.city, self.province, self.postal_code]
        return ", ".join(part for part in parts if part)
