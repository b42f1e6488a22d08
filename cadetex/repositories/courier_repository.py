"""Repository for couriers."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from cadetex.db.models import Courier
from cadetex.repositories.base_repository import OrganizationScopedRepository


class CourierRepository(OrganizationScopedRepository[Courier]):
    model = Courier

    def get_by_user(self, db: Session, user_id: UUID) -> Courier | None:
        return db.scalar(select(Courier).where(Courier.user_id == user_id).limit(1))

    def search(
        self,
        db: Session,
        organization_id: UUID | None = None,
        active_only: bool = False,
        name: str | None = None,
        phone: str | None = None,
    ) -> Sequence[Courier]:
        stmt = select(Courier)
        if organization_id is not None:
            stmt = stmt.where(Courier.organization_id == organization_id)
        if active_only:
            stmt = stmt.where(Courier.is_active.is_(True))
        if name:
            stmt = stmt.where(Courier.name.ilike(f"%{name.strip()}%"))
        if phone:
            stmt = stmt.where(Courier.phone_number.contains(phone.strip()))
        return db.scalars(stmt.order_by(Courier.name)).all()
