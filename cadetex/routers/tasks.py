"""Tasks router - API endpoints for delivery tasks."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from cadetex.core.deps import get_current_session, get_db, get_state
from cadetex.core.outcomes import unwrap
from cadetex.core.state import AppState
from cadetex.db.enums import PhotoType, TaskStatus
from cadetex.schemas.address import AddressRead
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task import (
    PhotoUploadResponse,
    TaskCreate,
    TaskRead,
    TaskStatusChange,
    TaskUpdate,
)
from cadetex.services.task_service import TaskView

router = APIRouter()


def _to_read(view: TaskView) -> TaskRead:
    """Flatten a task view into the response model."""
    read = TaskRead.model_validate(view.task)
    return read.model_copy(
        update={
            "address": AddressRead.model_validate(view.address) if view.address else None,
            "client_name": view.client_name,
            "provider_name": view.provider_name,
            "courier_name": view.courier_name,
        }
    )


@router.get("", response_model=list[TaskRead])
def list_tasks(
    organization_id: UUID | None = Query(None, description="SUPERADMIN only"),
    courier_id: UUID | None = None,
    unassigned: bool = False,
    status: list[TaskStatus] | None = Query(None, description="Repeatable status filter"),
    mine: bool = Query(False, description="Couriers: only tasks assigned to me"),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """List tasks newest first."""
    views = unwrap(
        state.tasks.list(
            db,
            session,
            organization_id=organization_id,
            courier_id=courier_id,
            unassigned=unassigned,
            statuses=status,
            mine=mine,
        )
    )
    return [_to_read(view) for view in views]


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """Get a task with its resolved address."""
    return _to_read(unwrap(state.tasks.get(db, session, task_id)))


@router.post("", response_model=TaskRead, status_code=201)
def create_task(
    body: TaskCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return _to_read(unwrap(state.tasks.create(db, session, body)))


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: UUID,
    body: TaskUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """Partial update: only fields present in the body are applied."""
    return _to_read(unwrap(state.tasks.update(db, session, task_id, body)))


@router.patch("/{task_id}/status", response_model=TaskRead)
def change_task_status(
    task_id: UUID,
    body: TaskStatusChange,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    return _to_read(unwrap(state.tasks.change_status(db, session, task_id, body.status)))


@router.post("/{task_id}/photo", response_model=PhotoUploadResponse)
def upload_task_photo(
    task_id: UUID,
    photo: UploadFile = File(...),
    photo_type: PhotoType = Form(PhotoType.RECEIPT),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    """
    Upload a photo for a task.

    RECEIPT sets the task's receipt_photo_url; other types add a photo row.
    """
    uploaded = unwrap(
        state.task_photos.upload(
            db,
            session,
            task_id,
            filename=photo.filename or "",
            content_type=photo.content_type or "",
            data=photo.file.read(),
            photo_type=photo_type,
        )
    )
    return PhotoUploadResponse(
        photo_url=uploaded.photo_url,
        photo_id=uploaded.photo_id,
        photo_type=uploaded.photo_type,
    )


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    state: AppState = Depends(get_state),
):
    unwrap(state.tasks.delete(db, session, task_id))
