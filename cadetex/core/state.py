"""Application state: services wired once per process."""

from __future__ import annotations

from dataclasses import dataclass

from cadetex.repositories import (
    AddressRepository,
    ClientRepository,
    CourierRepository,
    OrganizationRepository,
    ProviderRepository,
    TaskHistoryRepository,
    TaskPhotoRepository,
    TaskRepository,
    UserRepository,
)
from cadetex.services.address_resolver import AddressResolver
from cadetex.services.address_service import AddressWriter
from cadetex.services.auth_service import AuthService
from cadetex.services.client_service import ClientService
from cadetex.services.courier_service import CourierService
from cadetex.services.org_service import OrganizationService
from cadetex.services.provider_service import ProviderService
from cadetex.services.task_history_service import TaskHistoryService
from cadetex.services.task_photo_service import TaskPhotoService
from cadetex.services.task_service import TaskService
from cadetex.services.user_service import UserService


@dataclass
class AppState:
    """Runtime application state. Services hold no per-request data."""

    auth: AuthService
    organizations: OrganizationService
    users: UserService
    couriers: CourierService
    clients: ClientService
    providers: ProviderService
    tasks: TaskService
    task_photos: TaskPhotoService
    task_history: TaskHistoryService


def build_app_state() -> AppState:
    """Construct every service with its repositories."""
    addresses = AddressRepository()
    clients = ClientRepository()
    providers = ProviderRepository()
    couriers = CourierRepository()
    organizations = OrganizationRepository()
    users = UserRepository()
    tasks = TaskRepository()
    photos = TaskPhotoRepository()
    history = TaskHistoryRepository()

    address_writer = AddressWriter(addresses)
    resolver = AddressResolver(addresses, clients, providers)
    user_service = UserService(users, organizations)
    task_service = TaskService(
        tasks, clients, providers, couriers, history, address_writer, resolver
    )

    return AppState(
        auth=AuthService(users, user_service),
        organizations=OrganizationService(organizations),
        users=user_service,
        couriers=CourierService(couriers, users),
        clients=ClientService(clients, address_writer),
        providers=ProviderService(providers, address_writer),
        tasks=task_service,
        task_photos=TaskPhotoService(photos, tasks, task_service),
        task_history=TaskHistoryService(history, tasks, users),
    )


# Global application state container
_state_container: dict[str, AppState | None] = {"app_state": None}


def get_app_state() -> AppState:
    """Get the current application state."""
    app_state = _state_container["app_state"]
    if app_state is None:
        raise RuntimeError("Application state not initialized")
    return app_state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    app_state = build_app_state()
    _state_container["app_state"] = app_state
    return app_state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    _state_container["app_state"] = None
