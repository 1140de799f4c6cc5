"""
Exception hierarchy for the TeaDoc client.

Input validation errors are raised before any network call.
Remote failures are split into transport and response-shape errors so
controllers can surface them as an observable error state.
"""
from typing import Optional


class TeaDocError(Exception):
    """Base class for all client errors."""
    pass


class InvalidHistoryRequest(TeaDocError, ValueError):
    """Raised when a history view is initialized with a bad category or url."""
    pass


class InvalidWeatherRequest(TeaDocError, ValueError):
    """Raised when the weather view lacks a user or a location."""
    pass


class DetectionServiceError(TeaDocError):
    """Raised when a remote call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServiceUnavailable(DetectionServiceError):
    """Connection error, timeout or non-2xx status."""
    pass


class MalformedResponse(DetectionServiceError):
    """Body was not JSON or did not match the expected shape."""
    pass
