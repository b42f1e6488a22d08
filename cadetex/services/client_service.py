"""Client lifecycle service."""

from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Resource
from cadetex.db.models import Client
from cadetex.schemas.auth import UserSession
from cadetex.schemas.contact import ClientCreate, ClientUpdate
from cadetex.services.contact_service import ContactPartyService
from cadetex.services.result import Result, transactional

CLIENT_CONFLICTS = {
    "A client with this name already exists in this organization": (
        "uq_clients_org_name",
        "clients.name",
    ),
}


class ClientService(ContactPartyService):
    resource = Resource.CLIENT
    label = "client"
    fields = ("phone_number", "email")

    @transactional(CLIENT_CONFLICTS)
    def create(self, db: Session, actor: UserSession, data: ClientCreate) -> Result[Client]:
        return self._create(db, actor, data)

    @transactional(CLIENT_CONFLICTS)
    def update(
        self, db: Session, actor: UserSession, client_id: UUID, data: ClientUpdate
    ) -> Result[Client]:
        return self._update(db, actor, client_id, data)

    @transactional()
    def delete(self, db: Session, actor: UserSession, client_id: UUID) -> Result[None]:
        return self._delete(db, actor, client_id)
