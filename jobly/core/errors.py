"""
Error taxonomy for the API.

Repositories and dependencies raise these; main.py translates them into
a status code plus a {"detail": ...} body at the request boundary.
"""

from typing import Any


class JoblyError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Any = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    """Invalid input: empty update payload, unknown field, failed validation."""
    status_code = 400
    default_message = "Bad Request"


class NotFoundError(JoblyError):
    """No record matched the requested identity."""
    status_code = 404
    default_message = "Not Found"


class InvalidRangeError(JoblyError):
    """
    A min/max filter pair where min > max.

    Reported as 404 rather than 400; consumers of the listing endpoints
    already depend on this status.
    """
    status_code = 404
    default_message = "Minimum cannot be greater than maximum"


class UnauthorizedError(JoblyError):
    """Caller failed the authorization gate or gave bad credentials."""
    status_code = 401
    default_message = "Unauthorized"


class DuplicateError(JoblyError):
    """A uniqueness constraint would be violated."""
    status_code = 409
    default_message = "Duplicate"
