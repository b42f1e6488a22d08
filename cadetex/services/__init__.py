"""Service layer modules."""

from cadetex.services.result import Err, ErrorKind, Ok, Result

__all__ = ["Err", "ErrorKind", "Ok", "Result"]
