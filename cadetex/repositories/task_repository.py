"""Repository for tasks, task photos and task history rows."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from cadetex.db.models import Task, TaskHistory, TaskPhoto
from cadetex.repositories.base_repository import BaseRepository, OrganizationScopedRepository


class TaskRepository(OrganizationScopedRepository[Task]):
    model = Task

    def reference_number_taken(
        self,
        db: Session,
        organization_id: UUID,
        reference_number: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        stmt = select(Task.id).where(
            Task.organization_id == organization_id,
            Task.reference_number == reference_number,
        )
        if exclude_id is not None:
            stmt = stmt.where(Task.id != exclude_id)
        return db.scalar(stmt.limit(1)) is not None

    def search(
        self,
        db: Session,
        organization_id: UUID | None = None,
        courier_id: UUID | None = None,
        unassigned: bool = False,
        statuses: Sequence[str] | None = None,
    ) -> Sequence[Task]:
        """List tasks newest first.

        Args:
            db: Active session
            organization_id: Restrict to one organization (None = all)
            courier_id: Only tasks assigned to this courier
            unassigned: Only tasks with no courier (ignored when courier_id set)
            statuses: Only tasks in one of these statuses

        Returns:
            Matching tasks ordered by created_at descending
        """
        stmt = select(Task)
        if organization_id is not None:
            stmt = stmt.where(Task.organization_id == organization_id)
        if courier_id is not None:
            stmt = stmt.where(Task.courier_id == courier_id)
        elif unassigned:
            stmt = stmt.where(Task.courier_id.is_(None))
        if statuses:
            stmt = stmt.where(Task.status.in_(list(statuses)))
        return db.scalars(stmt.order_by(Task.created_at.desc(), Task.id)).all()


class TaskPhotoRepository(BaseRepository[TaskPhoto]):
    model = TaskPhoto

    def list_by_task(self, db: Session, task_id: UUID) -> Sequence[TaskPhoto]:
        stmt = (
            select(TaskPhoto)
            .where(TaskPhoto.task_id == task_id)
            .order_by(TaskPhoto.created_at)
        )
        return db.scalars(stmt).all()


class TaskHistoryRepository(BaseRepository[TaskHistory]):
    model = TaskHistory

    def list_by_task(self, db: Session, task_id: UUID) -> Sequence[TaskHistory]:
        stmt = (
            select(TaskHistory)
            .where(TaskHistory.task_id == task_id)
            .order_by(TaskHistory.changed_at.desc(), TaskHistory.created_at.desc())
        )
        return db.scalars(stmt).all()
