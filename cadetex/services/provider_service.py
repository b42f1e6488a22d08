"""Provider lifecycle service."""

from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Resource
from cadetex.db.models import Provider
from cadetex.schemas.auth import UserSession
from cadetex.schemas.contact import ProviderCreate, ProviderUpdate
from cadetex.services.contact_service import ContactPartyService
from cadetex.services.result import Result, transactional

PROVIDER_CONFLICTS = {
    "A provider with this name already exists in this organization": (
        "uq_providers_org_name",
        "providers.name",
    ),
}


class ProviderService(ContactPartyService):
    resource = Resource.PROVIDER
    label = "provider"
    fields = ("contact_name", "contact_phone")

    @transactional(PROVIDER_CONFLICTS)
    def create(self, db: Session, actor: UserSession, data: ProviderCreate) -> Result[Provider]:
        return self._create(db, actor, data)

    @transactional(PROVIDER_CONFLICTS)
    def update(
        self, db: Session, actor: UserSession, provider_id: UUID, data: ProviderUpdate
    ) -> Result[Provider]:
        return self._update(db, actor, provider_id, data)

    @transactional()
    def delete(self, db: Session, actor: UserSession, provider_id: UUID) -> Result[None]:
        return self._delete(db, actor, provider_id)
