"""Repository layer modules."""

from cadetex.repositories.address_repository import AddressRepository
from cadetex.repositories.contact_repository import ClientRepository, ProviderRepository
from cadetex.repositories.courier_repository import CourierRepository
from cadetex.repositories.organization_repository import OrganizationRepository
from cadetex.repositories.task_repository import (
    TaskHistoryRepository,
    TaskPhotoRepository,
    TaskRepository,
)
from cadetex.repositories.user_repository import UserRepository

__all__ = [
    "AddressRepository",
    "ClientRepository",
    "CourierRepository",
    "OrganizationRepository",
    "ProviderRepository",
    "TaskHistoryRepository",
    "TaskPhotoRepository",
    "TaskRepository",
    "UserRepository",
]
