"""Task history router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task_history import TaskHistoryCreate, TaskHistoryRead, TaskHistoryUpdate

router = APIRouter()


@router.get("", response_model=list[TaskHistoryRead])
def list_task_history(
    task_id: UUID = Query(...),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_history.list_by_task(db, session, task_id))


@router.get("/{entry_id}", response_model=TaskHistoryRead)
def get_task_history_entry(
    entry_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_history.get(db, session, entry_id))


@router.post("", response_model=TaskHistoryRead, status_code=201)
def create_task_history_entry(
    body: TaskHistoryCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """Manual correction entry."""
    return unwrap(state.task_history.create(db, session, body))


@router.put("/{entry_id}", response_model=TaskHistoryRead)
def update_task_history_entry(
    entry_id: UUID,
    body: TaskHistoryUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return unwrap(state.task_history.update(db, session, entry_id, body))


@router.delete("/{entry_id}", status_code=204)
def delete_task_history_entry(
    entry_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.task_history.delete(db, session, entry_id))
