"""Address Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, Field


class AddressInput(BaseModel):
    """
    Address payload embedded in client, provider and task requests.

    Only non-null fields are written when an existing address is updated.
    """
    street: str | None = Field(None, max_length=200)
    street_number: str | None = Field(None, max_length=20)
    complement: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=80)
    province: str | None = Field(None, max_length=80)
    postal_code: str | None = Field(None, max_length=20)

    def has_values(self) -> bool:
        """True when at least one field is set."""
        return any(value is not None for value in self.model_dump().values())


class AddressRead(BaseModel):
    id: UUID
    street: str | None
    street_number: str | None
    complement: str | None
    city: str | None
    province: str | None
    postal_code: str | None
    full_address: str

    model_config = {"from_attributes": True}
