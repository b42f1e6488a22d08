"""Task service - transactional create/update of delivery tasks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cadetex.core.policies import Action, Resource
from cadetex.core.structured_logging import build_log_context
from cadetex.db.enums import Role, TaskStatus
from cadetex.db.models import Address, Task, TaskHistory
from cadetex.repositories import (
    ClientRepository,
    CourierRepository,
    ProviderRepository,
    TaskHistoryRepository,
    TaskRepository,
)
from cadetex.schemas.auth import UserSession
from cadetex.schemas.task import TaskCreate, TaskUpdate
from cadetex.services.access import authorize, creation_organization, listing_scope
from cadetex.services.address_resolver import AddressResolver
from cadetex.services.address_service import AddressWriter
from cadetex.services.result import (
    Err,
    Ok,
    Result,
    conflict,
    invalid,
    not_found,
    parse_id,
    transactional,
)

logger = logging.getLogger(__name__)

TASK_CONFLICTS = {
    "A task with this reference number already exists in this organization": (
        "uq_tasks_org_reference_number",
        "tasks.reference_number",
    ),
}

REFERENCE_FIELDS = ("client_id", "provider_id", "courier_id", "linked_task_id")

# Columns that reject null; a null in a partial update leaves them untouched.
NON_NULLABLE_FIELDS = {
    "type",
    "status",
    "priority",
    "freight_cert",
    "fo_cert",
    "bunker_cert",
    "photo_required",
}


@dataclass
class TaskView:
    """A task together with its resolved address and display names."""

    task: Task
    address: Address | None = None
    client_name: str | None = None
    provider_name: str | None = None
    courier_name: str | None = None


def _normalize_reference(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        clients: ClientRepository,
        providers: ProviderRepository,
        couriers: CourierRepository,
        history: TaskHistoryRepository,
        addresses: AddressWriter,
        resolver: AddressResolver,
    ):
        self.tasks = tasks
        self.clients = clients
        self.providers = providers
        self.couriers = couriers
        self.history = history
        self.addresses = addresses
        self.resolver = resolver

    # =========================================================================
    # Reads
    # =========================================================================

    def build_view(self, db: Session, task: Task) -> TaskView:
        """Re-read the task's address and display names."""
        view = TaskView(task=task, address=self.resolver.resolve_for_task(db, task))
        if task.client_id:
            client = self.clients.get(db, task.client_id)
            view.client_name = client.name if client else None
        if task.provider_id:
            provider = self.providers.get(db, task.provider_id)
            view.provider_name = provider.name if provider else None
        if task.courier_id:
            courier = self.couriers.get(db, task.courier_id)
            view.courier_name = courier.name if courier else None
        return view

    def load_for(
        self, db: Session, actor: UserSession, task_id: UUID, action: Action
    ) -> Task | Err:
        """Fetch a task and check the actor may perform `action` on it."""
        task = self.tasks.get(db, task_id)
        if task is None:
            return not_found("Task not found")
        denied = authorize(actor, action, Resource.TASK, task.organization_id)
        if denied:
            return denied
        return task

    @transactional()
    def list(
        self,
        db: Session,
        actor: UserSession,
        organization_id: UUID | None = None,
        courier_id: UUID | None = None,
        unassigned: bool = False,
        statuses: Sequence[TaskStatus] | None = None,
        mine: bool = False,
    ) -> Result[list[TaskView]]:
        """
        List tasks newest first.

        mine=True narrows a COURIER's list to tasks assigned to the courier
        row linked to their user.
        """
        scope = listing_scope(actor, Resource.TASK, organization_id)
        if isinstance(scope, Err):
            return scope

        if mine and actor.role == Role.COURIER:
            courier = self.couriers.get_by_user(db, actor.user_id)
            if courier is None:
                return Ok([])
            courier_id = courier.id

        rows = self.tasks.search(
            db,
            organization_id=scope,
            courier_id=courier_id,
            unassigned=unassigned,
            statuses=[s.value for s in statuses] if statuses else None,
        )
        return Ok([self.build_view(db, task) for task in rows])

    @transactional()
    def get(self, db: Session, actor: UserSession, task_id: UUID) -> Result[TaskView]:
        task = self.load_for(db, actor, task_id, Action.READ)
        if isinstance(task, Err):
            return task
        return Ok(self.build_view(db, task))

    # =========================================================================
    # Reference checks
    # =========================================================================

    def _parse_references(self, payload: dict[str, Any]) -> dict[str, UUID | None] | Err:
        parsed: dict[str, UUID | None] = {}
        for field in REFERENCE_FIELDS:
            if field in payload:
                value = parse_id(payload[field], field)
                if isinstance(value, Err):
                    return value
                parsed[field] = value
        return parsed

    def _check_references(
        self,
        db: Session,
        org_id: UUID,
        refs: dict[str, UUID | None],
        task_id: UUID | None = None,
    ) -> Err | None:
        """Referenced rows must exist inside the task's organization."""
        lookups = (
            ("client_id", self.clients, "Client"),
            ("provider_id", self.providers, "Provider"),
            ("courier_id", self.couriers, "Courier"),
            ("linked_task_id", self.tasks, "Linked task"),
        )
        for field, repository, label in lookups:
            ref_id = refs.get(field)
            if ref_id is None:
                continue
            if field == "linked_task_id" and ref_id == task_id:
                return invalid("A task cannot be linked to itself")
            row = repository.get(db, ref_id)
            if row is None or row.organization_id != org_id:
                return not_found(f"{label} not found")
        return None

    def _record_status(
        self,
        db: Session,
        task_id: UUID,
        previous: str | None,
        new: str,
        actor: UserSession,
        now: datetime,
    ) -> None:
        self.history.add(
            db,
            TaskHistory(
                task_id=task_id,
                previous_status=previous,
                new_status=new,
                changed_by=actor.user_id,
                changed_at=now,
                created_at=now,
                updated_at=now,
            ),
        )

    # =========================================================================
    # Writes
    # =========================================================================

    @transactional(TASK_CONFLICTS)
    def create(self, db: Session, actor: UserSession, data: TaskCreate) -> Result[TaskView]:
        """
        Create a task.

        Order: tenant check, id parsing, client/provider exclusivity,
        reference-number uniqueness, referenced rows, override address,
        task row, first history entry.
        """
        org_id = creation_organization(actor, Resource.TASK, data.organization_id)
        if isinstance(org_id, Err):
            return org_id

        refs = self._parse_references(data.model_dump(include=set(REFERENCE_FIELDS)))
        if isinstance(refs, Err):
            return refs
        if refs.get("client_id") and refs.get("provider_id"):
            return invalid("A task cannot have both a client and a provider")

        reference_number = _normalize_reference(data.reference_number)
        if reference_number and self.tasks.reference_number_taken(db, org_id, reference_number):
            return conflict(f"Reference number '{reference_number}' is already in use")

        missing = self._check_references(db, org_id, refs)
        if missing:
            return missing

        override_id = self.addresses.create(db, data.address_override)

        now = datetime.now(timezone.utc)
        task = Task(
            organization_id=org_id,
            type=data.type.value,
            reference_number=reference_number,
            client_id=refs.get("client_id"),
            provider_id=refs.get("provider_id"),
            address_override_id=override_id,
            contact=data.contact,
            courier_id=refs.get("courier_id"),
            status=data.status.value,
            priority=data.priority.value,
            scheduled_date=data.scheduled_date,
            notes=data.notes,
            courier_notes=data.courier_notes,
            mbl=data.mbl,
            hbl=data.hbl,
            freight_cert=data.freight_cert,
            fo_cert=data.fo_cert,
            bunker_cert=data.bunker_cert,
            linked_task_id=refs.get("linked_task_id"),
            photo_required=data.photo_required,
            created_at=now,
            updated_at=now,
        )
        self.tasks.add(db, task)
        self._record_status(db, task.id, None, task.status, actor, now)

        logger.info(
            "Created task %s",
            task.id,
            extra=build_log_context(user_id=str(actor.user_id), org_id=str(org_id)),
        )
        return Ok(self.build_view(db, task))

    @transactional(TASK_CONFLICTS)
    def update(
        self, db: Session, actor: UserSession, task_id: UUID, data: TaskUpdate
    ) -> Result[TaskView]:
        """
        Apply a partial update.

        Fields absent from the request keep their stored value. Exclusivity
        is checked on the merged view of stored and requested values.
        """
        task = self.load_for(db, actor, task_id, Action.WRITE)
        if isinstance(task, Err):
            return task

        update_data = data.model_dump(exclude_unset=True)
        unassign_courier = update_data.pop("unassign_courier", False)
        override_payload = data.address_override if "address_override" in update_data else None
        update_data.pop("address_override", None)

        refs = self._parse_references(update_data)
        if isinstance(refs, Err):
            return refs

        merged_client = refs["client_id"] if "client_id" in refs else task.client_id
        merged_provider = refs["provider_id"] if "provider_id" in refs else task.provider_id
        if merged_client and merged_provider:
            return invalid("A task cannot have both a client and a provider")

        if "reference_number" in update_data:
            reference_number = _normalize_reference(update_data["reference_number"])
            if reference_number and self.tasks.reference_number_taken(
                db, task.organization_id, reference_number, exclude_id=task.id
            ):
                return conflict(f"Reference number '{reference_number}' is already in use")
            update_data["reference_number"] = reference_number

        missing = self._check_references(db, task.organization_id, refs, task_id=task.id)
        if missing:
            return missing

        values: dict[str, Any] = {}
        for field, value in update_data.items():
            if field in REFERENCE_FIELDS:
                value = refs[field]
            elif value is None and field in NON_NULLABLE_FIELDS:
                continue
            elif hasattr(value, "value"):
                value = value.value
            values[field] = value

        if unassign_courier:
            values["courier_id"] = None

        if override_payload is not None:
            override_id = self.addresses.upsert(db, task.address_override_id, override_payload)
            if override_id != task.address_override_id:
                values["address_override_id"] = override_id

        now = datetime.now(timezone.utc)
        previous_status = task.status
        if "status" in values and values["status"] != previous_status:
            self._record_status(db, task.id, previous_status, values["status"], actor, now)

        values["updated_at"] = now
        if self.tasks.update_fields(db, task.id, values) == 0:
            return not_found("Task no longer exists")
        db.refresh(task)
        return Ok(self.build_view(db, task))

    @transactional()
    def change_status(
        self, db: Session, actor: UserSession, task_id: UUID, status: TaskStatus
    ) -> Result[TaskView]:
        """Set the status. Any status may follow any other."""
        task = self.load_for(db, actor, task_id, Action.WRITE)
        if isinstance(task, Err):
            return task

        now = datetime.now(timezone.utc)
        if status.value != task.status:
            self._record_status(db, task.id, task.status, status.value, actor, now)
        if self.tasks.update_fields(db, task.id, {"status": status.value, "updated_at": now}) == 0:
            return not_found("Task no longer exists")
        db.refresh(task)
        return Ok(self.build_view(db, task))

    @transactional()
    def set_receipt_photo(
        self, db: Session, actor: UserSession, task_id: UUID, photo_url: str
    ) -> Result[TaskView]:
        task = self.load_for(db, actor, task_id, Action.WRITE)
        if isinstance(task, Err):
            return task
        now = datetime.now(timezone.utc)
        values = {"receipt_photo_url": photo_url, "updated_at": now}
        if self.tasks.update_fields(db, task.id, values) == 0:
            return not_found("Task no longer exists")
        db.refresh(task)
        return Ok(self.build_view(db, task))

    @transactional()
    def delete(self, db: Session, actor: UserSession, task_id: UUID) -> Result[None]:
        """Delete a task with its photos and history; its override address goes too."""
        task = self.load_for(db, actor, task_id, Action.DELETE)
        if isinstance(task, Err):
            return task
        override_id = task.address_override_id
        self.tasks.delete(db, task.id)
        self.addresses.delete(db, override_id)
        logger.info(
            "Deleted task %s",
            task_id,
            extra=build_log_context(user_id=str(actor.user_id), org_id=str(actor.org_id)),
        )
        return Ok(None)
