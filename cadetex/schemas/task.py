"""Pydantic schemas for tasks."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cadetex.db.enums import PhotoType, TaskPriority, TaskStatus, TaskType
from cadetex.schemas.address import AddressInput, AddressRead


class TaskCreate(BaseModel):
    """Request to create a task."""
    organization_id: str | None = None  # Defaults to the actor's organization
    type: TaskType
    reference_number: str | None = Field(None, max_length=50)
    client_id: str | None = None
    provider_id: str | None = None
    address_override: AddressInput | None = None
    contact: str | None = Field(None, max_length=120)
    courier_id: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.NORMAL
    scheduled_date: str | None = Field(None, max_length=10, description="YYYY-MM-DD")
    notes: str | None = None
    courier_notes: str | None = None
    mbl: str | None = Field(None, max_length=50)
    hbl: str | None = Field(None, max_length=50)
    freight_cert: bool = False
    fo_cert: bool = False
    bunker_cert: bool = False
    linked_task_id: str | None = None
    photo_required: bool = False


class TaskUpdate(BaseModel):
    """
    Request to update a task (partial).

    Only fields present in the request are applied. Setting client_id or
    provider_id to null detaches that party; unassign_courier clears the
    courier.
    """
    type: TaskType | None = None
    reference_number: str | None = Field(None, max_length=50)
    client_id: str | None = None
    provider_id: str | None = None
    address_override: AddressInput | None = None
    contact: str | None = Field(None, max_length=120)
    courier_id: str | None = None
    unassign_courier: bool = False
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    scheduled_date: str | None = Field(None, max_length=10)
    notes: str | None = None
    courier_notes: str | None = None
    mbl: str | None = Field(None, max_length=50)
    hbl: str | None = Field(None, max_length=50)
    freight_cert: bool | None = None
    fo_cert: bool | None = None
    bunker_cert: bool | None = None
    linked_task_id: str | None = None
    receipt_photo_url: str | None = Field(None, max_length=500)
    photo_required: bool | None = None


class TaskStatusChange(BaseModel):
    status: TaskStatus


class TaskRead(BaseModel):
    """Full task response with the resolved address."""
    id: UUID
    organization_id: UUID
    type: TaskType
    reference_number: str | None
    client_id: UUID | None
    client_name: str | None = None
    provider_id: UUID | None
    provider_name: str | None = None
    address_override_id: UUID | None
    address: AddressRead | None = None
    contact: str | None
    courier_id: UUID | None
    courier_name: str | None = None
    status: TaskStatus
    priority: TaskPriority
    scheduled_date: str | None
    notes: str | None
    courier_notes: str | None
    mbl: str | None
    hbl: str | None
    freight_cert: bool
    fo_cert: bool
    bunker_cert: bool
    linked_task_id: UUID | None
    receipt_photo_url: str | None
    photo_required: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PhotoUploadResponse(BaseModel):
    photo_url: str
    photo_id: UUID | None = None
    photo_type: PhotoType
