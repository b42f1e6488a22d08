"""Task photos router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task_photo import TaskPhotoCreate, TaskPhotoRead, TaskPhotoUpdate

router = APIRouter()


@router.get("", response_model=list[TaskPhotoRead])
def list_task_photos(
    task_id: UUID = Query(...),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_photos.list_by_task(db, session, task_id))


@router.get("/{photo_id}", response_model=TaskPhotoRead)
def get_task_photo(
    photo_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_photos.get(db, session, photo_id))


@router.post("", response_model=TaskPhotoRead, status_code=201)
def create_task_photo(
    body: TaskPhotoCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """Register an already-hosted photo URL against a task."""
    return unwrap(state.task_photos.create(db, session, body))


@router.put("/{photo_id}", response_model=TaskPhotoRead)
def update_task_photo(
    photo_id: UUID,
    body: TaskPhotoUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_photos.update(db, session, photo_id, body))


@router.delete("/{photo_id}", status_code=204)
def delete_task_photo(
    photo_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.task_photos.delete(db, session, photo_id))
