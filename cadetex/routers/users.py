"""Users router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.db.enums import Role
from cadetex.schemas.auth import UserSession
from cadetex.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter()


@router.get("", response_model=list[UserRead])
def list_users(
    organization_id: UUID | None = Query(None, description="SUPERADMIN only"),
    email: str | None = Query(None, description="Exact email, case-insensitive"),
    role: Role | None = Query(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(
        state.users.list(db, session, organization_id=organization_id, email=email, role=role)
    )


@router.get("/me", response_model=UserRead)
def get_me(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.users.get(db, session, session.user_id))


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.users.get(db, session, user_id))


@router.post("", response_model=UserRead, status_code=201)
def create_user(
    body: UserCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.users.create(db, session, body))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: UUID,
    body: UserUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.users.update(db, session, user_id, body))


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.users.delete(db, session, user_id))
