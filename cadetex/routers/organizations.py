"""Organizations router - SUPERADMIN tenant management."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state, require_roles
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.db.enums import Role
from cadetex.schemas.auth import UserSession
from cadetex.schemas.organization import (
    OrganizationCreate,
    OrganizationRead,
    OrganizationUpdate,
)

router = APIRouter()

superadmin_only = require_roles([Role.SUPERADMIN])


@router.get("", response_model=list[OrganizationRead])
def list_organizations(
    session: UserSession = Depends(superadmin_only),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.organizations.list(db, session))


@router.get("/{org_id}", response_model=OrganizationRead)
def get_organization(
    org_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """SUPERADMIN, or an ORGADMIN of this organization."""
    return unwrap(state.organizations.get(db, session, org_id))


@router.post("", response_model=OrganizationRead, status_code=201)
def create_organization(
    body: OrganizationCreate,
    session: UserSession = Depends(superadmin_only),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.organizations.create(db, session, body))


@router.put("/{org_id}", response_model=OrganizationRead)
def update_organization(
    org_id: UUID,
    body: OrganizationUpdate,
    session: UserSession = Depends(superadmin_only),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.organizations.update(db, session, org_id, body))


@router.delete("/{org_id}", status_code=204)
def delete_organization(
    org_id: UUID,
    session: UserSession = Depends(superadmin_only),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.organizations.delete(db, session, org_id))
