"""Enum definitions for application constants."""

from cadetex.db.enums.auth import Role
from cadetex.db.enums.tasks import (
    DEFAULT_TASK_PRIORITY,
    DEFAULT_TASK_STATUS,
    PhotoType,
    TaskPriority,
    TaskStatus,
    TaskType,
)

__all__ = [
    "DEFAULT_TASK_PRIORITY",
    "DEFAULT_TASK_STATUS",
    "PhotoType",
    "Role",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
]
