"""Pydantic schemas for task photos."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cadetex.db.enums import PhotoType


class TaskPhotoCreate(BaseModel):
    task_id: str
    photo_url: str = Field(..., max_length=500)
    photo_type: PhotoType = PhotoType.ADDITIONAL


class TaskPhotoUpdate(BaseModel):
    photo_url: str | None = Field(None, max_length=500)
    photo_type: PhotoType | None = None


class TaskPhotoRead(BaseModel):
    id: UUID
    task_id: UUID
    photo_url: str
    photo_type: PhotoType
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
