"""
Lifecycle logic shared by clients and providers.

Both are organization-owned contact parties with a unique trimmed name
and one attached address. ClientService and ProviderService only bind
the repository, the model and their extra columns.
"""

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar, Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.core.structured_logging import build_log_context
from cadetex.schemas.auth import UserSession
from cadetex.services.access import authorize, creation_organization, listing_scope
from cadetex.services.address_service import AddressWriter
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


class ContactPartyService:
    resource: ClassVar[Resource]
    label: ClassVar[str]
    # Columns copied from create/update payloads besides name and address
    fields: ClassVar[tuple[str, ...]]

    def __init__(self, repository, addresses: AddressWriter):
        self.repository = repository
        self.addresses = addresses

    def _duplicate_message(self, name: str) -> str:
        return f"A {self.label} named '{name}' already exists in this organization"

    @transactional()
    def list(
        self,
        db: Session,
        actor: UserSession,
        organization_id: UUID | None = None,
        name: str | None = None,
        city: str | None = None,
    ) -> Result[Sequence[Any]]:
        scope = listing_scope(actor, self.resource, organization_id)
        if isinstance(scope, Err):
            return scope
        return Ok(self.repository.search(db, organization_id=scope, name=name, city=city))

    @transactional()
    def get(self, db: Session, actor: UserSession, entity_id: UUID) -> Result[Any]:
        entity = self.repository.get(db, entity_id)
        if entity is None:
            return not_found(f"{self.label.capitalize()} not found")
        denied = authorize(actor, Action.READ, self.resource, entity.organization_id)
        if denied:
            return denied
        return Ok(entity)

    def _create(self, db: Session, actor: UserSession, data: BaseModel) -> Result[Any]:
        org_id = creation_organization(actor, self.resource, data.organization_id)
        if isinstance(org_id, Err):
            return org_id

        name = data.name.strip()
        if not name:
            return invalid("Name is required")
        if self.repository.name_taken(db, org_id, name):
            return conflict(self._duplicate_message(name))

        address_id = self.addresses.create(db, data.address)
        now = datetime.now(timezone.utc)
        entity = self.repository.model(
            organization_id=org_id,
            name=name,
            address_id=address_id,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
            **{field: getattr(data, field) for field in self.fields},
        )
        self.repository.add(db, entity)
        logger.info(
            "Created %s %s",
            self.label,
            entity.id,
            extra=build_log_context(user_id=str(actor.user_id), org_id=str(org_id)),
        )
        return Ok(entity)

    def _update(
        self, db: Session, actor: UserSession, entity_id: UUID, data: BaseModel
    ) -> Result[Any]:
        entity = self.repository.get(db, entity_id)
        if entity is None:
            return not_found(f"{self.label.capitalize()} not found")
        denied = authorize(actor, Action.WRITE, self.resource, entity.organization_id)
        if denied:
            return denied

        update_data = data.model_dump(exclude_unset=True)
        values: dict[str, Any] = {}

        if "name" in update_data:
            if update_data["name"] is None or not update_data["name"].strip():
                return invalid("Name cannot be blank")
            name = update_data["name"].strip()
            if name != entity.name and self.repository.name_taken(
                db, entity.organization_id, name, exclude_id=entity.id
            ):
                return conflict(self._duplicate_message(name))
            values["name"] = name

        if "address" in update_data:
            address_id = self.addresses.upsert(db, entity.address_id, data.address)
            if address_id != entity.address_id:
                values["address_id"] = address_id

        for field in (*self.fields, "is_active"):
            if field in update_data:
                if field == "is_active" and update_data[field] is None:
                    continue
                values[field] = update_data[field]

        values["updated_at"] = datetime.now(timezone.utc)
        if self.repository.update_fields(db, entity.id, values) == 0:
            return not_found(f"{self.label.capitalize()} no longer exists")
        db.refresh(entity)
        return Ok(entity)

    def _delete(self, db: Session, actor: UserSession, entity_id: UUID) -> Result[None]:
        entity = self.repository.get(db, entity_id)
        if entity is None:
            return not_found(f"{self.label.capitalize()} not found")
        denied = authorize(actor, Action.DELETE, self.resource, entity.organization_id)
        if denied:
            return denied

        # Tasks keep their rows; their reference and this address are detached
        # by ON DELETE SET NULL.
        address_id = entity.address_id
        self.repository.delete(db, entity.id)
        self.addresses.delete(db, address_id)
        logger.info(
            "Deleted %s %s",
            self.label,
            entity_id,
            extra=build_log_context(user_id=str(actor.user_id), org_id=str(actor.org_id)),
        )
        return Ok(None)
