"""Repository for postal addresses."""

from cadetex.db.models import Address
from cadetex.repositories.base_repository import BaseRepository


class AddressRepository(BaseRepository[Address]):
    model = Address
