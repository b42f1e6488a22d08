"""
Effective address of a task.

Precedence, highest first:
1. The task's own override address.
2. The linked client's address.
3. The linked provider's address.
4. None.

Inactive clients and providers still contribute their address. The
resolver only reads.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.db.models import Address
from cadetex.repositories import AddressRepository, ClientRepository, ProviderRepository


class AddressResolver:
    def __init__(
        self,
        addresses: AddressRepository,
        clients: ClientRepository,
        providers: ProviderRepository,
    ):
        self.addresses = addresses
        self.clients = clients
        self.providers = providers

    def resolve(
        self,
        db: Session,
        *,
        client_id: UUID | None,
        provider_id: UUID | None,
        address_override_id: UUID | None,
    ) -> Address | None:
        """
        Return the address a courier should go to, or None.

        Reads at most one client/provider row plus the chosen address row.
        """
        if address_override_id is not None:
            return self.addresses.get(db, address_override_id)

        party_address_id = None
        if client_id is not None:
            client = self.clients.get(db, client_id)
            party_address_id = client.address_id if client else None
        elif provider_id is not None:
            provider = self.providers.get(db, provider_id)
            party_address_id = provider.address_id if provider else None

        if party_address_id is None:
            return None
        return self.addresses.get(db, party_address_id)

    def resolve_for_task(self, db: Session, task) -> Address | None:
        return self.resolve(
            db,
            client_id=task.client_id,
            provider_id=task.provider_id,
            address_override_id=task.address_override_id,
        )
