"""Translate service outcomes into HTTP responses."""

from typing import TypeVar

from fastapi import HTTPException

from cadetex.services.result import Err, ErrorKind, Ok, Result

T = TypeVar("T")

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.UNAVAILABLE: 503,
}


def raise_for_error(error: Err) -> None:
    raise HTTPException(status_code=ERROR_STATUS[error.kind], detail=error.message)


def unwrap(result: Result[T]) -> T:
    """Return the success value or raise the mapped HTTPException."""
    if isinstance(result, Ok):
        return result.value
    raise_for_error(result)
