"""
Permission policy: role x action x tenant decisions.

Every service asks this module before touching a row. Functions here do
no I/O and never raise; callers turn a False into a forbidden outcome.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from cadetex.db.enums import Role


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    WRITE = "write"
    DELETE = "delete"
    # Cross-tenant operations: listing every organization's rows, managing
    # organizations themselves.
    ADMINISTER = "administer"


class Resource(str, Enum):
    ORGANIZATION = "organization"
    USER = "user"
    COURIER = "courier"
    CLIENT = "client"
    PROVIDER = "provider"
    TASK = "task"
    TASK_PHOTO = "task_photo"
    TASK_HISTORY = "task_history"


@dataclass(frozen=True)
class ResourcePolicy:
    """What a COURIER may do with a resource inside their own organization."""

    courier_actions: frozenset[Action] = frozenset()
    courier_self_actions: frozenset[Action] = frozenset()


_TASK_WORK = frozenset({Action.READ, Action.WRITE})

POLICIES: dict[Resource, ResourcePolicy] = {
    Resource.ORGANIZATION: ResourcePolicy(),
    Resource.USER: ResourcePolicy(courier_self_actions=frozenset({Action.READ})),
    Resource.COURIER: ResourcePolicy(),
    Resource.CLIENT: ResourcePolicy(),
    Resource.PROVIDER: ResourcePolicy(),
    Resource.TASK: ResourcePolicy(courier_actions=_TASK_WORK),
    Resource.TASK_PHOTO: ResourcePolicy(courier_actions=_TASK_WORK),
    Resource.TASK_HISTORY: ResourcePolicy(courier_actions=_TASK_WORK),
}

# ORGADMIN may only read its own organization record.
_ORGADMIN_OWN_ORGANIZATION = frozenset({Action.READ})


def same_organization(actor_org_id: UUID | None, resource_org_id: UUID | None) -> bool:
    """True when both ids are known and equal."""
    return actor_org_id is not None and actor_org_id == resource_org_id


def is_self(actor_user_id: UUID | None, resource_user_id: UUID | None) -> bool:
    return actor_user_id is not None and actor_user_id == resource_user_id


def allowed(
    role: Role,
    action: Action,
    resource: Resource,
    actor_org_id: UUID | None,
    resource_org_id: UUID | None,
    *,
    is_self_action: bool = False,
) -> bool:
    """
    Decide whether an actor may perform `action` on a resource.

    - SUPERADMIN: everything, everywhere.
    - ORGADMIN: everything inside its own organization, except managing
      organizations (read of its own organization only).
    - COURIER: per-resource allowance inside its own organization, plus
      reading its own user record.
    - ADMINISTER is SUPERADMIN-only for every resource.
    """
    if role == Role.SUPERADMIN:
        return True
    if action == Action.ADMINISTER:
        return False
    if not same_organization(actor_org_id, resource_org_id):
        return False

    if resource == Resource.ORGANIZATION:
        return role == Role.ORGADMIN and action in _ORGADMIN_OWN_ORGANIZATION

    if role == Role.ORGADMIN:
        return True

    if role == Role.COURIER:
        policy = POLICIES[resource]
        if action in policy.courier_actions:
            return True
        return is_self_action and action in policy.courier_self_actions

    return False


def creation_org_allowed(
    role: Role, actor_org_id: UUID | None, requested_org_id: UUID | None
) -> bool:
    """
    Check the organization embedded in a creation request.

    Non-SUPERADMIN actors may only create inside their own organization.
    """
    if role == Role.SUPERADMIN:
        return True
    return same_organization(actor_org_id, requested_org_id)
