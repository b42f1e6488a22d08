"""Organization service - tenant roots, SUPERADMIN-managed."""

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.db.models import Organization
from cadetex.repositories import OrganizationRepository
from cadetex.schemas.auth import UserSession
from cadetex.schemas.organization import OrganizationCreate, OrganizationUpdate
from cadetex.services.access import authorize
from cadetex.services.result import (
    Err,
    Ok,
    Result,
    conflict,
    invalid,
    not_found,
    transactional,
)

logger = logging.getLogger(__name__)

ORGANIZATION_CONFLICTS = {
    "An organization with this name already exists": (
        "uq_organizations_name",
        "organizations.name",
    ),
}


class OrganizationService:
    def __init__(self, organizations: OrganizationRepository):
        self.organizations = organizations

    @transactional()
    def list(self, db: Session, actor: UserSession) -> Result[Sequence[Organization]]:
        denied = authorize(actor, Action.ADMINISTER, Resource.ORGANIZATION, None)
        if denied:
            return denied
        return Ok(self.organizations.list_all(db))

    @transactional()
    def get(self, db: Session, actor: UserSession, org_id: UUID) -> Result[Organization]:
        org = self.organizations.get(db, org_id)
        if org is None:
            return not_found("Organization not found")
        denied = authorize(actor, Action.READ, Resource.ORGANIZATION, org.id)
        if denied:
            return denied
        return Ok(org)

    @transactional(ORGANIZATION_CONFLICTS)
    def create(
        self, db: Session, actor: UserSession, data: OrganizationCreate
    ) -> Result[Organization]:
        denied = authorize(actor, Action.ADMINISTER, Resource.ORGANIZATION, None)
        if denied:
            return denied
        name = data.name.strip()
        if not name:
            return invalid("Name is required")
        if self.organizations.name_taken(db, name):
            return conflict("An organization with this name already exists")

        now = datetime.now(timezone.utc)
        org = Organization(name=name, created_at=now, updated_at=now)
        self.organizations.add(db, org)
        logger.info("Created organization %s", org.id)
        return Ok(org)

    @transactional(ORGANIZATION_CONFLICTS)
    def update(
        self, db: Session, actor: UserSession, org_id: UUID, data: OrganizationUpdate
    ) -> Result[Organization]:
        denied = authorize(actor, Action.ADMINISTER, Resource.ORGANIZATION, org_id)
        if denied:
            return denied
        org = self.organizations.get(db, org_id)
        if org is None:
            return not_found("Organization not found")

        values = {"updated_at": datetime.now(timezone.utc)}
        if data.name is not None:
            name = data.name.strip()
            if not name:
                return invalid("Name cannot be blank")
            if self.organizations.name_taken(db, name, exclude_id=org.id):
                return conflict("An organization with this name already exists")
            values["name"] = name
        if self.organizations.update_fields(db, org.id, values) == 0:
            return not_found("Organization no longer exists")
        db.refresh(org)
        return Ok(org)

    @transactional()
    def delete(self, db: Session, actor: UserSession, org_id: UUID) -> Result[None]:
        """Removes the organization and, through ON DELETE CASCADE, its rows."""
        denied = authorize(actor, Action.ADMINISTER, Resource.ORGANIZATION, org_id)
        if denied:
            return denied
        if not self.organizations.delete(db, org_id):
            return not_found("Organization not found")
        logger.warning("Deleted organization %s", org_id)
        return Ok(None)
