"""Repositories for clients and providers.

Both entities share the same shape: organization-owned, unique trimmed
name, optional attached address.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from cadetex.db.models import Address, Client, Provider
from cadetex.repositories.base_repository import ModelT, OrganizationScopedRepository


class _ContactPartyRepository(OrganizationScopedRepository[ModelT]):
    def name_taken(
        self,
        db: Session,
        organization_id: UUID,
        name: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Exact match on the stored (trimmed) name within one organization."""
        stmt = select(self.model.id).where(
            self.model.organization_id == organization_id,
            self.model.name == name,
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        return db.scalar(stmt.limit(1)) is not None

    def search(
        self,
        db: Session,
        organization_id: UUID | None = None,
        name: str | None = None,
        city: str | None = None,
    ) -> Sequence[ModelT]:
        """List rows, optionally filtered by organization, name and city substrings.

        Args:
            db: Active session
            organization_id: Restrict to one organization (None = all)
            name: Case-insensitive substring of the name
            city: Case-insensitive substring of the attached address city

        Returns:
            Matching rows ordered by name
        """
        stmt = select(self.model)
        if organization_id is not None:
            stmt = stmt.where(self.model.organization_id == organization_id)
        if name:
            stmt = stmt.where(self.model.name.ilike(f"%{name.strip()}%"))
        if city:
            stmt = stmt.join(Address, Address.id == self.model.address_id).where(
                Address.city.ilike(f"%{city.strip()}%")
            )
        return db.scalars(stmt.order_by(self.model.name)).all()


class ClientRepository(_ContactPartyRepository[Client]):
    model = Client


class ProviderRepository(_ContactPartyRepository[Provider]):
    model = Provider
