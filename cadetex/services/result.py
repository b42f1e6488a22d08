"""
Two-case outcome returned by every lifecycle service.

Expected failures (missing rows, bad input, duplicates, permission denials)
are values, not exceptions. Routers map ErrorKind to an HTTP status.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def not_found(message: str) -> Err:
    return Err(ErrorKind.NOT_FOUND, message)


def invalid(message: str) -> Err:
    return Err(ErrorKind.VALIDATION_FAILED, message)


def conflict(message: str) -> Err:
    return Err(ErrorKind.CONFLICT, message)


def forbidden(message: str = "Not allowed") -> Err:
    return Err(ErrorKind.FORBIDDEN, message)


def parse_id(value: str | UUID | None, field: str) -> UUID | None | Err:
    """
    Parse an optional identifier from a request body.

    Returns None for missing/blank input and an Err for malformed input.
    """
    if value is None or isinstance(value, UUID):
        return value
    if not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return invalid(f"Invalid {field} format")


# =============================================================================
# Persistence error translation
# =============================================================================

def _constraint_text(error: IntegrityError) -> str:
    """Constraint name on PostgreSQL, driver message elsewhere."""
    diag = getattr(error.orig, "diag", None)
    name = getattr(diag, "constraint_name", None) if diag else None
    return name or str(error.orig)


def classify_integrity_error(
    error: IntegrityError, conflicts: dict[str, tuple[str, ...]] | None = None
) -> Err:
    """
    Translate a constraint violation into a classified failure.

    `conflicts` maps a user-facing message to the markers that identify
    the unique constraint: its name (PostgreSQL) and the "table.column"
    text SQLite puts in its message.
    """
    detail = _constraint_text(error)
    for message, markers in (conflicts or {}).items():
        if any(marker in detail for marker in markers):
            return conflict(message)

    lowered = detail.lower()
    if "foreign key" in lowered or "fk_" in lowered or "_fkey" in lowered:
        return not_found("Referenced entity not found")
    if "unique" in lowered or "uq_" in lowered:
        return conflict("Duplicate value")
    return invalid("Request violates a data constraint")


def transactional(conflicts: dict[str, tuple[str, ...]] | None = None) -> Callable:
    """
    Run a service method as one unit of work.

    The wrapped method receives the Session as its first argument after
    self. Ok commits, Err rolls back. Persistence exceptions never escape:
    IntegrityError is classified, anything else from SQLAlchemy becomes
    UNAVAILABLE.
    """

    def decorator(func: Callable[..., Result]) -> Callable[..., Result]:
        @functools.wraps(func)
        def wrapper(self: Any, db: Session, *args: Any, **kwargs: Any) -> Result:
            try:
                result = func(self, db, *args, **kwargs)
                if isinstance(result, Err):
                    db.rollback()
                    return result
                db.commit()
                return result
            except IntegrityError as exc:
                db.rollback()
                err = classify_integrity_error(exc, conflicts)
                logger.info(
                    "Constraint violation in %s: %s", func.__qualname__, err.message
                )
                return err
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Persistence failure in %s", func.__qualname__)
                return Err(ErrorKind.UNAVAILABLE, "Storage temporarily unavailable")

        return wrapper

    return decorator
