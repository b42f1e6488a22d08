"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from cadetex.db.base import Base
from cadetex.db.enums import DEFAULT_TASK_PRIORITY, DEFAULT_TASK_STATUS


class Task(Base):
    """
    A pickup (RETIRE) or drop-off (DELIVER) job.

    Names at most one contact party: a client or a provider, never both.
    reference_number is unique per organization when present.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint(
            "organization_id",
            "reference_number",
            name="uq_tasks_org_reference_number",
        ),
        CheckConstraint(
            "client_id IS NULL OR provider_id IS NULL",
            name="ck_tasks_single_contact_party",
        ),
        Index("idx_tasks_org_created", "organization_id", "created_at"),
        Index("idx_tasks_org_status", "organization_id", "status"),
        Index("idx_tasks_courier", "courier_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    reference_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Contact party and address sources
    client_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    provider_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("providers.id", ondelete="SET NULL"), nullable=True
    )
    address_override_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    contact: Mapped[str | None] = mapped_column(String(120), nullable=True)

    courier_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("couriers.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(30), server_default=text(f"'{DEFAULT_TASK_STATUS.value}'"), nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10), server_default=text(f"'{DEFAULT_TASK_PRIORITY.value}'"), nullable=False
    )
    scheduled_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    courier_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Customs
    mbl: Mapped[str | None] = mapped_column(String(50), nullable=True)
    hbl: Mapped[str | None] = mapped_column(String(50), nullable=True)
    freight_cert: Mapped[bool] = mapped_column(
        Boolean, server_default=text("FALSE"), default=False, nullable=False
    )
    fo_cert: Mapped[bool] = mapped_column(
        Boolean, server_default=text("FALSE"), default=False, nullable=False
    )
    bunker_cert: Mapped[bool] = mapped_column(
        Boolean, server_default=text("FALSE"), default=False, nullable=False
    )

    linked_task_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True
    )
    receipt_photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    photo_required: Mapped[bool] = mapped_column(
        Boolean, server_default=text("FALSE"), default=False, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)


class TaskPhoto(Base):
    """Non-receipt photo attached to a task."""

    __tablename__ = "task_photos"
    __table_args__ = (Index("idx_task_photos_task", "task_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    task_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
    photo_url: Mapped[str] = mapped_column(String(500), nullable=False)
    photo_type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)


class TaskHistory(Base):
    """Append-only status audit trail for a task."""

    __tablename__ = "task_history"
    __table_args__ = (Index("idx_task_history_task_changed", "task_id", "changed_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    task_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
    previous_status: Mapped[str | None] = mapped_column(String(30), nullable=True)
    new_status: Mapped[str | None] = mapped_column(String(30), nullable=True)
    changed_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    changed_at: Mapped[datetime] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)
