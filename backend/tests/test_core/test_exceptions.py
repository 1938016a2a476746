"""Tests for the error taxonomy."""

from teamtasks.core.exceptions import (
    BUSINESS_ERRORS,
    AuthorizationError,
    InternalError,
    NotFoundError,
    ValidationError,
)


class TestErrorPayload:
    def test_to_dict(self):
        assert NotFoundError("Task not found").to_dict() == {
            "errorType": "NotFoundError",
            "message": "Task not found",
        }

    def test_kinds(self):
        assert ValidationError("x").error_type == "ValidationError"
        assert AuthorizationError("x").error_type == "AuthorizationError"
        assert InternalError("x").error_type == "InternalError"

    def test_internal_error_is_not_a_business_error(self):
        assert not isinstance(InternalError("x"), BUSINESS_ERRORS)
