"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Routers translate them to HTTP status codes:

- ValidationError -> 400
- AuthorizationError -> 401
- NotFoundError -> 404
- StoreReadError / StoreWriteError -> 500
"""

from typing import Optional


class FitStreakError(Exception):
    """Base class for all domain errors raised by the service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FitStreakError):
    """Bad caller input. Never retried."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreReadError(FitStreakError):
    """A read against the record store failed.

    Carries the underlying store message. Safe to retry.
    """

    pass


class StoreWriteError(FitStreakError):
    """A write against the record store failed.

    Carries the underlying store message. Safe to retry, every write in the
    service is an upsert or delete keyed on a natural key.
    """

    pass


class CloseDayError(StoreWriteError):
    """Closing a day stopped at a specific stage.

    Earlier stages are not rolled back; re-running close-day with the same
    progress converges to the same state.
    """

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage


class NotFoundError(FitStreakError):
    """A required record does not exist (or is only partially created)."""

    pass


class AuthorizationError(FitStreakError):
    """Shared secret missing or mismatched."""

    pass


class NotificationError(FitStreakError):
    """The messaging provider rejected or failed to deliver a message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
