"""Clients router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.schemas.auth import UserSession
from cadetex.schemas.contact import ClientCreate, ClientRead, ClientUpdate

router = APIRouter()


@router.get("", response_model=list[ClientRead])
def list_clients(
    organization_id: UUID | None = Query(None, description="SUPERADMIN only"),
    name: str | None = Query(None, description="Substring of the client name"),
    city: str | None = Query(None, description="Substring of the address city"),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(
        state.clients.list(db, session, organization_id=organization_id, name=name, city=city)
    )


@router.get("/{client_id}", response_model=ClientRead)
def get_client(
    client_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.clients.get(db, session, client_id))


@router.post("", response_model=ClientRead, status_code=201)
def create_client(
    body: ClientCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """SUPERADMIN anywhere, ORGADMIN in its own organization."""
    return unwrap(state.clients.create(db, session, body))


@router.put("/{client_id}", response_model=ClientRead)
def update_client(
    client_id: UUID,
    body: ClientUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.clients.update(db, session, client_id, body))


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.clients.delete(db, session, client_id))
