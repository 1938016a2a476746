"""
Error taxonomy shared by every domain operation.

Callers branch on ``error_type``; the three business kinds travel to the
caller unchanged, anything else is wrapped in InternalError at the
operation boundary.
"""


class TaskServiceError(Exception):
    """Base class for errors that are reported to the caller."""

    error_type = "InternalError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"errorType": self.error_type, "message": self.message}


class ValidationError(TaskServiceError):
    """Caller-supplied input is malformed or breaks a business rule."""

    error_type = "ValidationError"


class AuthorizationError(TaskServiceError):
    """Caller lacks the relationship or role the operation needs."""

    error_type = "AuthorizationError"


class NotFoundError(TaskServiceError):
    """A referenced team or task does not exist."""

    error_type = "NotFoundError"


class InternalError(TaskServiceError):
    """Unexpected store or transport failure. Safe to retry later."""

    error_type = "InternalError"


# Kinds that propagate to the caller as-is
BUSINESS_ERRORS = (ValidationError, AuthorizationError, NotFoundError)
