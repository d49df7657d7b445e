"""Errors raised by chat backends."""


class BackendError(Exception):
    """Base class for backend failures."""


class BackendUnavailableError(BackendError):
    """Transport failure, timeout, or non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(BackendError):
    """Response body is not JSON or lacks the expected field."""
