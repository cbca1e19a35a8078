"""Domain errors raised by repositories and services.

Each error carries the HTTP status the API boundary answers with, so the
exception handler in ``app.main`` does not need to know individual types.
"""

from fastapi import status


class TaskBoardError(Exception):
    """Base class for expected, client-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(TaskBoardError):
    """Missing or malformed input (empty name, empty id, unknown status)."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "invalid_argument"


class ConflictError(TaskBoardError):
    """Uniqueness violation: duplicate name, title, email or association."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "conflict"


class NotFoundError(TaskBoardError):
    """Referenced entity is missing, or belongs to another user."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class InvalidStateError(TaskBoardError):
    """Removal requested for an association that does not exist."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "invalid_state"


__all__ = [
    "TaskBoardError",
    "InvalidArgumentError",
    "ConflictError",
    "NotFoundError",
    "InvalidStateError",
]
