"""Repository for organizations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from cadetex.db.models import Organization
from cadetex.repositories.base_repository import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model = Organization

    def list_all(self, db: Session):
        return db.scalars(select(Organization).order_by(Organization.name)).all()

    def name_taken(self, db: Session, name: str, exclude_id: UUID | None = None) -> bool:
        stmt = select(Organization.id).where(Organization.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Organization.id != exclude_id)
        return db.scalar(stmt.limit(1)) is not None
