"""Couriers router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.schemas.auth import UserSession
from cadetex.schemas.courier import CourierCreate, CourierRead, CourierUpdate

router = APIRouter()


@router.get("", response_model=list[CourierRead])
def list_couriers(
    organization_id: UUID | None = Query(None, description="SUPERADMIN only"),
    active_only: bool = False,
    name: str | None = Query(None, description="Substring of the courier name"),
    phone: str | None = Query(None, description="Substring of the phone number"),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(
        state.couriers.list(
            db,
            session,
            organization_id=organization_id,
            active_only=active_only,
            name=name,
            phone=phone,
        )
    )


@router.get("/{courier_id}", response_model=CourierRead)
def get_courier(
    courier_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.couriers.get(db, session, courier_id))


@router.post("", response_model=CourierRead, status_code=201)
def create_courier(
    body: CourierCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.couriers.create(db, session, body))


@router.put("/{courier_id}", response_model=CourierRead)
def update_courier(
    courier_id: UUID,
    body: CourierUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.couriers.update(db, session, courier_id, body))


@router.delete("/{courier_id}", status_code=204)
def delete_courier(
    courier_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.couriers.delete(db, session, courier_id))
