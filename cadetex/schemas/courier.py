"""Courier Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class CourierCreate(BaseModel):
    organization_id: str | None = None
    user_id: str | None = None
    name: str = Field(..., max_length=120)
    phone_number: str = Field(..., max_length=40)
    address: str | None = Field(None, max_length=255)
    vehicle_type: str | None = Field(None, max_length=50)
    is_active: bool = True


class CourierUpdate(BaseModel):
    user_id: str | None = None
    name: str | None = Field(None, max_length=120)
    phone_number: str | None = Field(None, max_length=40)
    address: str | None = Field(None, max_length=255)
    vehicle_type: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class CourierRead(BaseModel):
    id: UUID
    organization_id: UUID
    user_id: UUID | None
    name: str
    phone_number: str
    address: str | None
    vehicle_type: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
