"""Task-related enums."""

from enum import Enum


class TaskType(str, Enum):
    """Whether the courier picks goods up or drops them off."""

    RETIRE = "RETIRE"
    DELIVER = "DELIVER"


class TaskStatus(str, Enum):
    """
    Task status values.

    Any status may follow any other; changes are recorded in task history.
    """

    PENDING = "PENDING"
    PENDING_CONFIRMATION = "PENDING_CONFIRMATION"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskPriority(str, Enum):
    NORMAL = "NORMAL"
    URGENT = "URGENT"


class PhotoType(str, Enum):
    """Photo kinds. RECEIPT is stored on the task itself."""

    ADDITIONAL = "ADDITIONAL"
    RECEIPT = "RECEIPT"
    OTHER = "OTHER"


DEFAULT_TASK_STATUS = TaskStatus.PENDING
DEFAULT_TASK_PRIORITY = TaskPriority.NORMAL
