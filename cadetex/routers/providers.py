"""Providers router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.schemas.auth import UserSession
from cadetex.schemas.contact import ProviderCreate, ProviderRead, ProviderUpdate

router = APIRouter()


@router.get("", response_model=list[ProviderRead])
def list_providers(
    organization_id: UUID | None = Query(None, description="SUPERADMIN only"),
    name: str | None = Query(None, description="Substring of the provider name"),
    city: str | None = Query(None, description="Substring of the address city"),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(
        state.providers.list(db, session, organization_id=organization_id, name=name, city=city)
    )


@router.get("/{provider_id}", response_model=ProviderRead)
def get_provider(
    provider_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.providers.get(db, session, provider_id))


@router.post("", response_model=ProviderRead, status_code=201)
def create_provider(
    body: ProviderCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """SUPERADMIN anywhere, ORGADMIN in its own organization."""
    return unwrap(state.providers.create(db, session, body))


@router.put("/{provider_id}", response_model=ProviderRead)
def update_provider(
    provider_id: UUID,
    body: ProviderUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.providers.update(db, session, provider_id, body))


@router.delete("/{provider_id}", status_code=204)
def delete_provider(
    provider_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.providers.delete(db, session, provider_id))
