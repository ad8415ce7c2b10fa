# Error taxonomy shared by services and handlers
from typing import Any, Optional

from fastapi import status


class ShiftTrackError(Exception):
    """Base error carrying the user-facing message and the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ShiftTrackError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ShiftTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(ShiftTrackError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ShiftTrackError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(ShiftTrackError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
