"""Transport-level errors raised by the remote collaborators."""

from typing import Any, Optional


class ApiError(RuntimeError):
    """A remote call failed or was rejected.

    Attributes:
        status_code: HTTP status if a response was received.
        payload: Decoded response body, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(ApiError):
    """The service rejected the attached credential (HTTP 401)."""


class ServiceUnavailableError(ApiError):
    """The service could not be reached (connection error or timeout)."""
