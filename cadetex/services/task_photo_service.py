"""Task photo service - photo rows and uploads."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.core.structured_logging import build_log_context
from cadetex.db.enums import PhotoType
from cadetex.db.models import Task, TaskPhoto
from cadetex.repositories import TaskPhotoRepository, TaskRepository
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task_photo import TaskPhotoCreate, TaskPhotoUpdate
from cadetex.services import storage_service
from cadetex.services.access import authorize
from cadetex.services.result import (
    Err,
    ErrorKind,
    Ok,
    Result,
    invalid,
    not_found,
    parse_id,
    transactional,
)
from cadetex.services.task_service import TaskService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedPhoto:
    photo_url: str
    photo_type: PhotoType
    photo_id: UUID | None = None


class TaskPhotoService:
    def __init__(
        self,
        photos: TaskPhotoRepository,
        tasks: TaskRepository,
        task_service: TaskService,
    ):
        self.photos = photos
        self.tasks = tasks
        self.task_service = task_service

    def _authorized_task(
        self, db: Session, actor: UserSession, task_id: UUID, action: Action
    ) -> Task | Err:
        """Photos inherit the tenant of their task."""
        task = self.tasks.get(db, task_id)
        if task is None:
            return not_found("Task not found")
        denied = authorize(actor, action, Resource.TASK_PHOTO, task.organization_id)
        if denied:
            return denied
        return task

    def _authorized_photo(
        self, db: Session, actor: UserSession, photo_id: UUID, action: Action
    ) -> TaskPhoto | Err:
        photo = self.photos.get(db, photo_id)
        if photo is None:
            return not_found("Photo not found")
        task = self._authorized_task(db, actor, photo.task_id, action)
        if isinstance(task, Err):
            return task
        return photo

    @transactional()
    def list_by_task(
        self, db: Session, actor: UserSession, task_id: UUID
    ) -> Result[Sequence[TaskPhoto]]:
        task = self._authorized_task(db, actor, task_id, Action.READ)
        if isinstance(task, Err):
            return task
        return Ok(self.photos.list_by_task(db, task.id))

    @transactional()
    def get(self, db: Session, actor: UserSession, photo_id: UUID) -> Result[TaskPhoto]:
        photo = self._authorized_photo(db, actor, photo_id, Action.READ)
        if isinstance(photo, Err):
            return photo
        return Ok(photo)

    @transactional()
    def create(self, db: Session, actor: UserSession, data: TaskPhotoCreate) -> Result[TaskPhoto]:
        task_id = parse_id(data.task_id, "task_id")
        if isinstance(task_id, Err):
            return task_id
        if task_id is None:
            return invalid("task_id is required")
        task = self._authorized_task(db, actor, task_id, Action.CREATE)
        if isinstance(task, Err):
            return task
        url = data.photo_url.strip()
        if not url:
            return invalid("Photo URL is required")
        if data.photo_type == PhotoType.RECEIPT:
            return invalid("Receipt photos are stored on the task; upload them to the task")
        return Ok(self._insert(db, task.id, url, data.photo_type))

    def _insert(self, db: Session, task_id: UUID, url: str, photo_type: PhotoType) -> TaskPhoto:
        now = datetime.now(timezone.utc)
        photo = TaskPhoto(
            task_id=task_id,
            photo_url=url,
            photo_type=photo_type.value,
            created_at=now,
            updated_at=now,
        )
        return self.photos.add(db, photo)

    @transactional()
    def update(
        self, db: Session, actor: UserSession, photo_id: UUID, data: TaskPhotoUpdate
    ) -> Result[TaskPhoto]:
        photo = self._authorized_photo(db, actor, photo_id, Action.WRITE)
        if isinstance(photo, Err):
            return photo

        update_data = data.model_dump(exclude_unset=True)
        values: dict[str, Any] = {}
        if "photo_url" in update_data:
            url = (update_data["photo_url"] or "").strip()
            if not url:
                return invalid("Photo URL cannot be blank")
            values["photo_url"] = url
        if update_data.get("photo_type") is not None:
            if update_data["photo_type"] == PhotoType.RECEIPT:
                return invalid("Receipt photos are stored on the task")
            values["photo_type"] = update_data["photo_type"].value

        values["updated_at"] = datetime.now(timezone.utc)
        if self.photos.update_fields(db, photo.id, values) == 0:
            return not_found("Photo no longer exists")
        db.refresh(photo)
        return Ok(photo)

    @transactional()
    def delete(self, db: Session, actor: UserSession, photo_id: UUID) -> Result[None]:
        photo = self._authorized_photo(db, actor, photo_id, Action.DELETE)
        if isinstance(photo, Err):
            return photo
        self.photos.delete(db, photo.id)
        return Ok(None)

    # =========================================================================
    # Uploads
    # =========================================================================

    @transactional()
    def _check_uploadable(self, db: Session, actor: UserSession, task_id: UUID) -> Result[UUID]:
        """Uploading a photo counts as updating the task."""
        task = self.task_service.load_for(db, actor, task_id, Action.WRITE)
        if isinstance(task, Err):
            return task
        return Ok(task.id)

    @transactional()
    def _record_upload(
        self, db: Session, actor: UserSession, task_id: UUID, url: str, photo_type: PhotoType
    ) -> Result[TaskPhoto]:
        task = self.task_service.load_for(db, actor, task_id, Action.WRITE)
        if isinstance(task, Err):
            return task
        return Ok(self._insert(db, task.id, url, photo_type))

    def upload(
        self,
        db: Session,
        actor: UserSession,
        task_id: UUID,
        *,
        filename: str,
        content_type: str,
        data: bytes,
        photo_type: PhotoType = PhotoType.RECEIPT,
    ) -> Result[UploadedPhoto]:
        """
        Store photo bytes, then record them.

        The object write happens outside any transaction. If the database
        write fails afterwards the object is left behind and logged.
        """
        checked = self._check_uploadable(db, actor, task_id)
        if isinstance(checked, Err):
            return checked

        is_valid, error = storage_service.validate_photo(filename, content_type, len(data))
        if not is_valid:
            return invalid(error or "Invalid photo")

        extension = filename.rsplit(".", 1)[-1]
        key = storage_service.build_photo_key(task_id, photo_type.value, extension)
        try:
            url = storage_service.store_photo(key, data, content_type)
        except storage_service.StorageError as exc:
            return Err(ErrorKind.UNAVAILABLE, str(exc))

        if photo_type == PhotoType.RECEIPT:
            recorded = self.task_service.set_receipt_photo(db, actor, task_id, url)
            photo_id = None
        else:
            recorded = self._record_upload(db, actor, task_id, url, photo_type)
            photo_id = recorded.value.id if isinstance(recorded, Ok) else None

        if isinstance(recorded, Err):
            logger.warning(
                "Orphaned photo object %s: database write failed (%s)",
                key,
                recorded.message,
                extra=build_log_context(user_id=str(actor.user_id), org_id=str(actor.org_id)),
            )
            return recorded
        return Ok(UploadedPhoto(photo_url=url, photo_type=photo_type, photo_id=photo_id))
