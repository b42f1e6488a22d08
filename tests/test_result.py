"""Tests for the Ok/Err outcome type and the transactional decorator."""
import uuid
from unittest.mock import Mock

from sqlalchemy.exc import IntegrityError, OperationalError

from cadetex.services.result import (
    Err,
    ErrorKind,
    Ok,
    classify_integrity_error,
    conflict,
    parse_id,
    transactional,
)

CONFLICTS = {"Reference number already in use": ("uq_tasks_org_reference_number", "tasks.reference_number")}


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO tasks ...", {}, Exception(message))


class _Service:
    def __init__(self, outcome):
        self.outcome = outcome

    @transactional(CONFLICTS)
    def run(self, db, value):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def test_ok_and_err_flags():
    assert Ok(1).ok
    assert not Err(ErrorKind.CONFLICT, "x").ok


def test_parse_id():
    value = uuid.uuid4()
    assert parse_id(str(value), "client_id") == value
    assert parse_id(f"  {value} ", "client_id") == value
    assert parse_id(value, "client_id") == value
    assert parse_id(None, "client_id") is None
    assert parse_id("   ", "client_id") is None

    err = parse_id("not-a-uuid", "client_id")
    assert isinstance(err, Err)
    assert err.kind == ErrorKind.VALIDATION_FAILED
    assert "client_id" in err.message


def test_transactional_commits_on_ok():
    db = Mock()
    result = _Service(Ok("done")).run(db, 1)
    assert result == Ok("done")
    db.commit.assert_called_once()
    db.rollback.assert_not_called()


def test_transactional_rolls_back_on_err():
    db = Mock()
    result = _Service(conflict("taken")).run(db, 1)
    assert result.kind == ErrorKind.CONFLICT
    db.rollback.assert_called_once()
    db.commit.assert_not_called()


def test_transactional_classifies_unique_violation_from_sqlite_message():
    db = Mock()
    error = _integrity_error(
        "UNIQUE constraint failed: tasks.organization_id, tasks.reference_number"
    )
    result = _Service(error).run(db, 1)
    assert result == Err(ErrorKind.CONFLICT, "Reference number already in use")
    db.rollback.assert_called_once()


def test_transactional_classifies_constraint_name_from_postgres_diag():
    orig = Exception("duplicate key value violates unique constraint")
    orig.diag = Mock(constraint_name="uq_tasks_org_reference_number")
    error = IntegrityError("INSERT", {}, orig)
    result = classify_integrity_error(error, CONFLICTS)
    assert result.message == "Reference number already in use"


def test_transactional_maps_foreign_key_violation_to_not_found():
    result = _Service(_integrity_error("FOREIGN KEY constraint failed")).run(Mock(), 1)
    assert result.kind == ErrorKind.NOT_FOUND


def test_unlisted_unique_violation_is_a_generic_conflict():
    result = classify_integrity_error(_integrity_error("UNIQUE constraint failed: users.email"))
    assert result.kind == ErrorKind.CONFLICT


def test_check_violation_is_validation_failure():
    result = classify_integrity_error(
        _integrity_error("CHECK constraint failed: ck_tasks_single_contact_party")
    )
    assert result.kind == ErrorKind.VALIDATION_FAILED


def test_transactional_maps_storage_failure_to_unavailable():
    db = Mock()
    error = OperationalError("SELECT 1", {}, Exception("database is locked"))
    result = _Service(error).run(db, 1)
    assert result.kind == ErrorKind.UNAVAILABLE
    db.rollback.assert_called_once()
