"""Client and provider (contact party) Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cadetex.schemas.address import AddressInput, AddressRead


class ClientCreate(BaseModel):
    organization_id: str | None = None  # Defaults to the actor's organization
    name: str = Field(..., max_length=120)
    address: AddressInput | None = None
    phone_number: str | None = Field(None, max_length=40)
    email: str | None = Field(None, max_length=255)
    is_active: bool = True


class ClientUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: str | None = Field(None, max_length=120)
    address: AddressInput | None = None
    phone_number: str | None = Field(None, max_length=40)
    email: str | None = Field(None, max_length=255)
    is_active: bool | None = None


class ClientRead(BaseModel):
    id: UUID
    organization_id: UUID
    name: str
    address: AddressRead | None = None
    phone_number: str | None
    email: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProviderCreate(BaseModel):
    organization_id: str | None = None
    name: str = Field(..., max_length=120)
    address: AddressInput | None = None
    contact_name: str | None = Field(None, max_length=120)
    contact_phone: str | None = Field(None, max_length=40)
    is_active: bool = True


class ProviderUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: str | None = Field(None, max_length=120)
    address: AddressInput | None = None
    contact_name: str | None = Field(None, max_length=120)
    contact_phone: str | None = Field(None, max_length=40)
    is_active: bool | None = None


class ProviderRead(BaseModel):
    id: UUID
    organization_id: UUID
    name: str
    address: AddressRead | None = None
    contact_name: str | None
    contact_phone: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
