"""Courier lifecycle service."""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.db.models import Courier
from cadetex.repositories import CourierRepository, UserRepository
from cadetex.schemas.auth import UserSession
from cadetex.schemas.courier import CourierCreate, CourierUpdate
from cadetex.services.access import authorize, creation_organization, listing_scope
from cadetex.services.result import (
    Err,
    Ok,
    Result,
    invalid,
    not_found,
    parse_id,
    transactional,
)

logger = logging.getLogger(__name__)


class CourierService:
    def __init__(self, couriers: CourierRepository, users: UserRepository):
        self.couriers = couriers
        self.users = users

    def _check_user(self, db: Session, org_id: UUID, raw_user_id: str | None) -> UUID | None | Err:
        """A linked login must belong to the courier's organization."""
        user_id = parse_id(raw_user_id, "user_id")
        if user_id is None or isinstance(user_id, Err):
            return user_id
        user = self.users.get(db, user_id)
        if user is None or user.organization_id != org_id:
            return not_found("User not found")
        return user_id

    @transactional()
    def list(
        self,
        db: Session,
        actor: UserSession,
        organization_id: UUID | None = None,
        active_only: bool = False,
        name: str | None = None,
        phone: str | None = None,
    ) -> Result[Sequence[Courier]]:
        scope = listing_scope(actor, Resource.COURIER, organization_id)
        if isinstance(scope, Err):
            return scope
        return Ok(
            self.couriers.search(
                db, organization_id=scope, active_only=active_only, name=name, phone=phone
            )
        )

    @transactional()
    def get(self, db: Session, actor: UserSession, courier_id: UUID) -> Result[Courier]:
        courier = self.couriers.get(db, courier_id)
        if courier is None:
            return not_found("Courier not found")
        denied = authorize(actor, Action.READ, Resource.COURIER, courier.organization_id)
        if denied:
            return denied
        return Ok(courier)

    @transactional()
    def create(self, db: Session, actor: UserSession, data: CourierCreate) -> Result[Courier]:
        org_id = creation_organization(actor, Resource.COURIER, data.organization_id)
        if isinstance(org_id, Err):
            return org_id
        if not data.name.strip():
            return invalid("Name is required")
        if not data.phone_number.strip():
            return invalid("Phone number is required")
        user_id = self._check_user(db, org_id, data.user_id)
        if isinstance(user_id, Err):
            return user_id

        now = datetime.now(timezone.utc)
        courier = Courier(
            organization_id=org_id,
            user_id=user_id,
            name=data.name.strip(),
            phone_number=data.phone_number.strip(),
            address=data.address,
            vehicle_type=data.vehicle_type,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        self.couriers.add(db, courier)
        return Ok(courier)

    @transactional()
    def update(
        self, db: Session, actor: UserSession, courier_id: UUID, data: CourierUpdate
    ) -> Result[Courier]:
        courier = self.couriers.get(db, courier_id)
        if courier is None:
            return not_found("Courier not found")
        denied = authorize(actor, Action.WRITE, Resource.COURIER, courier.organization_id)
        if denied:
            return denied

        update_data = data.model_dump(exclude_unset=True)
        values: dict[str, Any] = {}
        for field in ("name", "phone_number"):
            if field in update_data:
                value = (update_data[field] or "").strip()
                if not value:
                    return invalid(f"{field.replace('_', ' ').capitalize()} cannot be blank")
                values[field] = value
        if "user_id" in update_data:
            user_id = self._check_user(db, courier.organization_id, update_data["user_id"])
            if isinstance(user_id, Err):
                return user_id
            values["user_id"] = user_id
        for field in ("address", "vehicle_type"):
            if field in update_data:
                values[field] = update_data[field]
        if update_data.get("is_active") is not None:
            values["is_active"] = update_data["is_active"]

        values["updated_at"] = datetime.now(timezone.utc)
        if self.couriers.update_fields(db, courier.id, values) == 0:
            return not_found("Courier no longer exists")
        db.refresh(courier)
        return Ok(courier)

    @transactional()
    def delete(self, db: Session, actor: UserSession, courier_id: UUID) -> Result[None]:
        """Assigned tasks become unassigned through ON DELETE SET NULL."""
        courier = self.couriers.get(db, courier_id)
        if courier is None:
            return not_found("Courier not found")
        denied = authorize(actor, Action.DELETE, Resource.COURIER, courier.organization_id)
        if denied:
            return denied
        self.couriers.delete(db, courier.id)
        return Ok(None)
