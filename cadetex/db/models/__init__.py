"""SQLAlchemy ORM models."""

from cadetex.db.models.addresses import Address
from cadetex.db.models.contacts import Client, Provider
from cadetex.db.models.couriers import Courier
from cadetex.db.models.organizations import Organization
from cadetex.db.models.tasks import Task, TaskHistory, TaskPhoto
from cadetex.db.models.users import User

__all__ = [
    "Address",
    "Client",
    "Courier",
    "Organization",
    "Provider",
    "Task",
    "TaskHistory",
    "TaskPhoto",
    "User",
]
