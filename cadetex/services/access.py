"""Bridges the permission policy and lifecycle services."""

import logging
from uuid import UUID

from cadetex.core.policies import Action, Resource, allowed, creation_org_allowed
from cadetex.core.structured_logging import build_log_context
from cadetex.db.enums import Role
from cadetex.schemas.auth import UserSession
from cadetex.services.result import Err, forbidden, parse_id

logger = logging.getLogger(__name__)


def _log_denial(actor: UserSession, action: Action, resource: Resource, target_org: UUID | None) -> None:
    logger.warning(
        "Permission denied: %s %s (target org %s)",
        action.value,
        resource.value,
        target_org,
        extra=build_log_context(
            user_id=str(actor.user_id), org_id=str(actor.org_id), role=actor.role.value
        ),
    )


def authorize(
    actor: UserSession,
    action: Action,
    resource: Resource,
    resource_org_id: UUID | None,
    *,
    is_self_action: bool = False,
) -> Err | None:
    """Return a FORBIDDEN error when the policy denies, otherwise None."""
    if allowed(
        actor.role,
        action,
        resource,
        actor.org_id,
        resource_org_id,
        is_self_action=is_self_action,
    ):
        return None
    _log_denial(actor, action, resource, resource_org_id)
    return forbidden(f"Not allowed to {action.value} this {resource.value.replace('_', ' ')}")


def creation_organization(
    actor: UserSession, resource: Resource, requested: str | None
) -> UUID | Err:
    """
    Organization a new row will belong to.

    Defaults to the actor's organization. A mismatching explicit id is
    rejected for everyone but SUPERADMIN before anything is written.
    """
    parsed = parse_id(requested, "organization_id")
    if isinstance(parsed, Err):
        return parsed
    org_id = parsed or actor.org_id
    if not creation_org_allowed(actor.role, actor.org_id, org_id):
        _log_denial(actor, Action.CREATE, resource, org_id)
        return forbidden(f"Cannot create a {resource.value.replace('_', ' ')} in another organization")
    denied = authorize(actor, Action.CREATE, resource, org_id)
    if denied:
        return denied
    return org_id


def listing_scope(
    actor: UserSession, resource: Resource, requested_org_id: UUID | None = None
) -> UUID | None | Err:
    """
    Organization filter for a list query.

    None means every organization and is only returned to SUPERADMIN.
    """
    if requested_org_id is None:
        if actor.role == Role.SUPERADMIN:
            return None
        requested_org_id = actor.org_id
    denied = authorize(actor, Action.READ, resource, requested_org_id)
    if denied:
        return denied
    return requested_org_id
