"""Task history service - status audit entries and their corrections."""

from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.db.models import Task, TaskHistory
from cadetex.repositories import TaskHistoryRepository, TaskRepository, UserRepository
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task_history import TaskHistoryCreate, TaskHistoryUpdate
from cadetex.services.access import authorize
from cadetex.services.result import (
    Err,
    Ok,
    Result,
    invalid,
    not_found,
    parse_id,
    transactional,
)


class TaskHistoryService:
    """
    Entries are written automatically on every status change.

    Manual create/update exist for corrections; delete is administrative
    cleanup only.
    """

    def __init__(
        self,
        history: TaskHistoryRepository,
        tasks: TaskRepository,
        users: UserRepository,
    ):
        self.history = history
        self.tasks = tasks
        self.users = users

    def _authorized_task(
        self, db: Session, actor: UserSession, task_id: UUID, action: Action
    ) -> Task | Err:
        task = self.tasks.get(db, task_id)
        if task is None:
            return not_found("Task not found")
        denied = authorize(actor, action, Resource.TASK_HISTORY, task.organization_id)
        if denied:
            return denied
        return task

    def _authorized_entry(
        self, db: Session, actor: UserSession, entry_id: UUID, action: Action
    ) -> TaskHistory | Err:
        entry = self.history.get(db, entry_id)
        if entry is None:
            return not_found("History entry not found")
        task = self._authorized_task(db, actor, entry.task_id, action)
        if isinstance(task, Err):
            return task
        return entry

    def _check_changed_by(self, db: Session, raw: str | None) -> UUID | None | Err:
        user_id = parse_id(raw, "changed_by")
        if user_id is None or isinstance(user_id, Err):
            return user_id
        if self.users.get(db, user_id) is None:
            return not_found("User not found")
        return user_id

    @transactional()
    def list_by_task(
        self, db: Session, actor: UserSession, task_id: UUID
    ) -> Result[Sequence[TaskHistory]]:
        task = self._authorized_task(db, actor, task_id, Action.READ)
        if isinstance(task, Err):
            return task
        return Ok(self.history.list_by_task(db, task.id))

    @transactional()
    def get(self, db: Session, actor: UserSession, entry_id: UUID) -> Result[TaskHistory]:
        entry = self._authorized_entry(db, actor, entry_id, Action.READ)
        if isinstance(entry, Err):
            return entry
        return Ok(entry)

    @transactional()
    def create(
        self, db: Session, actor: UserSession, data: TaskHistoryCreate
    ) -> Result[TaskHistory]:
        task_id = parse_id(data.task_id, "task_id")
        if isinstance(task_id, Err):
            return task_id
        if task_id is None:
            return invalid("task_id is required")
        task = self._authorized_task(db, actor, task_id, Action.CREATE)
        if isinstance(task, Err):
            return task
        changed_by = self._check_changed_by(db, data.changed_by)
        if isinstance(changed_by, Err):
            return changed_by

        now = datetime.now(timezone.utc)
        entry = TaskHistory(
            task_id=task.id,
            previous_status=data.previous_status.value if data.previous_status else None,
            new_status=data.new_status.value if data.new_status else None,
            changed_by=changed_by,
            changed_at=now,
            created_at=now,
            updated_at=now,
        )
        return Ok(self.history.add(db, entry))

    @transactional()
    def update(
        self, db: Session, actor: UserSession, entry_id: UUID, data: TaskHistoryUpdate
    ) -> Result[TaskHistory]:
        entry = self._authorized_entry(db, actor, entry_id, Action.WRITE)
        if isinstance(entry, Err):
            return entry

        update_data = data.model_dump(exclude_unset=True)
        values: dict[str, Any] = {}
        for field in ("previous_status", "new_status"):
            if field in update_data:
                value = update_data[field]
                values[field] = value.value if value is not None else None
        if "changed_by" in update_data:
            changed_by = self._check_changed_by(db, update_data["changed_by"])
            if isinstance(changed_by, Err):
                return changed_by
            values["changed_by"] = changed_by

        values["updated_at"] = datetime.now(timezone.utc)
        if self.history.update_fields(db, entry.id, values) == 0:
            return not_found("History entry no longer exists")
        db.refresh(entry)
        return Ok(entry)

    @transactional()
    def delete(self, db: Session, actor: UserSession, entry_id: UUID) -> Result[None]:
        entry = self._authorized_entry(db, actor, entry_id, Action.DELETE)
        if isinstance(entry, Err):
            return entry
        self.history.delete(db, entry.id)
        return Ok(None)
