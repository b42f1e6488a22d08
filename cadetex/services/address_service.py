"""Address writes shared by client, provider and task services."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.db.models import Address
from cadetex.repositories import AddressRepository
from cadetex.schemas.address import AddressInput


class AddressWriter:
    """Create-or-update for an address owned by a single entity."""

    def __init__(self, addresses: AddressRepository):
        self.addresses = addresses

    def create(self, db: Session, payload: AddressInput | None) -> UUID | None:
        """Insert an address when the payload carries at least one value."""
        if payload is None or not payload.has_values():
            return None
        now = datetime.now(timezone.utc)
        address = Address(**payload.model_dump(), created_at=now, updated_at=now)
        self.addresses.add(db, address)
        return address.id

    def upsert(
        self, db: Session, current_id: UUID | None, payload: AddressInput | None
    ) -> UUID | None:
        """
        Update the owned address in place, or create one.

        In-place updates only write the non-null fields of the payload.
        Returns the id the owner should point at.
        """
        if payload is None:
            return current_id
        if current_id is not None and self.addresses.get(db, current_id) is not None:
            values = payload.model_dump(exclude_none=True)
            if values:
                values["updated_at"] = datetime.now(timezone.utc)
                self.addresses.update_fields(db, current_id, values)
            return current_id
        return self.create(db, payload)

    def delete(self, db: Session, address_id: UUID | None) -> None:
        if address_id is not None:
            self.addresses.delete(db, address_id)
