"""Pydantic schemas for task status history."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from cadetex.db.enums import TaskStatus


class TaskHistoryCreate(BaseModel):
    """Manual correction entry."""
    task_id: str
    previous_status: TaskStatus | None = None
    new_status: TaskStatus | None = None
    changed_by: str | None = None


class TaskHistoryUpdate(BaseModel):
    previous_status: TaskStatus | None = None
    new_status: TaskStatus | None = None
    changed_by: str | None = None


class TaskHistoryRead(BaseModel):
    id: UUID
    task_id: UUID
    previous_status: TaskStatus | None
    new_status: TaskStatus | None
    changed_by: UUID | None
    changed_at: datetime

    model_config = {"from_attributes": True}
