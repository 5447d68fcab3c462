"""
Domain errors raised by the CRUD, policy and dependency layers.

Each error knows the HTTP status it maps to; main.py turns them into
{"message": ...} JSON responses. Nothing here depends on FastAPI, so the
same errors surface when the layers are called directly.
"""


class JobBoardError(Exception):
    """Base class for all job board errors."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(JobBoardError):
    """Missing, malformed, expired or revoked credentials."""
    status_code = 401
    default_message = "Unauthenticated"


class Forbidden(JobBoardError):
    """Caller is authenticated but its role or ownership does not allow the action."""
    status_code = 403
    default_message = "Unauthorized"


class NotFound(JobBoardError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(JobBoardError):
    status_code = 422
    default_message = "The given data was invalid"


class Conflict(JobBoardError):
    """Write rejected because it clashes with existing state (duplicates, terminal status)."""
    status_code = 422
    default_message = "Conflict"
