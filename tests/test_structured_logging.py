"""Tests for credential-safe log context."""
from cadetex.core.structured_logging import build_log_context


def test_build_log_context_drops_empty_keys():
    context = build_log_context(user_id="u1", org_id=None, role="", route="/tasks", method="GET")
    assert context == {"user_id": "u1", "route": "/tasks", "method": "GET"}


def test_build_log_context_has_no_credential_fields():
    context = build_log_context(
        user_id="u1", org_id="o1", role="ORGADMIN", request_id="r1", route="/x", method="POST"
    )
    assert set(context) == {"user_id", "org_id", "role", "request_id", "route", "method"}
