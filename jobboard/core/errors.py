"""
Error taxonomy for the jobboard service.

Every failure that reaches a caller is one of these. The HTTP layer maps
``status_code`` onto the response and renders ``message``/``details``.
"""

from typing import Any, Optional


class JobBoardError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Structured error body."""
        body: dict[str, Any] = {"message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFoundError(JobBoardError):
    """Candidate, job or relation does not exist."""

    status_code = 404


class InvalidArgumentError(JobBoardError):
    """Malformed id, out-of-range page/limit or unsupported listing type."""

    status_code = 400


class ConflictError(JobBoardError):
    """Duplicate save/apply for a (candidate, job) pair."""

    status_code = 409


class TransientError(JobBoardError):
    """Backing store unavailable. Not retried at this layer."""

    status_code = 503
