"""Repository for user accounts."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from cadetex.db.enums import Role
from cadetex.db.models import User
from cadetex.repositories.base_repository import OrganizationScopedRepository


class UserRepository(OrganizationScopedRepository[User]):
    model = User

    def get_by_email(self, db: Session, email: str) -> User | None:
        """Emails are stored lowercased; lookups normalise the same way."""
        return db.scalar(select(User).where(User.email == email.strip().lower()))

    def email_taken(self, db: Session, email: str, exclude_id: UUID | None = None) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return db.scalar(stmt.limit(1)) is not None

    def search(
        self,
        db: Session,
        organization_id: UUID | None = None,
        email: str | None = None,
        role: Role | None = None,
    ) -> Sequence[User]:
        """List users, optionally narrowed to one organization, email or role.

        Email is an exact match after normalisation.
        """
        stmt = select(User)
        if organization_id is not None:
            stmt = stmt.where(User.organization_id == organization_id)
        if email:
            stmt = stmt.where(User.email == email.strip().lower())
        if role is not None:
            stmt = stmt.where(User.role == role.value)
        return db.scalars(stmt.order_by(User.name)).all()
