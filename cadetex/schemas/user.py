"""User-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cadetex.db.enums import Role


class UserCreate(BaseModel):
    organization_id: str | None = None  # Defaults to the actor's organization
    name: str
    email: str
    password: str = Field(..., max_length=72)
    role: Role = Role.COURIER
    is_active: bool = True


class UserUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: str | None = None
    email: str | None = None
    password: str | None = Field(None, max_length=72)
    role: Role | None = None
    is_active: bool | None = None


class UserRead(BaseModel):
    """User response. Never carries the password hash."""
    id: UUID
    organization_id: UUID
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
