"""Error taxonomy for the reporting API.

Every error carries the HTTP status it maps to and a message that is safe to
show to clients. The application renders them all as ``{"error": message}``.
"""

from fastapi import status


class WormWatchError(Exception):
    """Base class for errors that terminate a request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReportValidationError(WormWatchError):
    """Malformed, out-of-range or out-of-bounds input."""

    status_code = status.HTTP_400_BAD_REQUEST


class RateLimitError(WormWatchError):
    """Client exceeded its submission quota."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class AuthError(WormWatchError):
    """Missing or mismatched admin secret."""

    status_code = status.HTTP_401_UNAUTHORIZED


class StoreError(WormWatchError):
    """An underlying query failed. The message is generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
