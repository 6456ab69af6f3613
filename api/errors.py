"""
Translate application exceptions into HTTP responses.

- ValidationError -> 400
- AuthorizationError -> 401
- NotFoundError -> 404
- StoreReadError / StoreWriteError -> 500
"""

from fastapi import HTTPException

from application.exceptions import (
    AuthorizationError,
    FitStreakError,
    NotFoundError,
    ValidationError,
)


def status_for(exc: FitStreakError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthorizationError):
        return 401
    if isinstance(exc, NotFoundError):
        return 404
    return 500


def to_http_exception(exc: FitStreakError) -> HTTPException:
    return HTTPException(status_code=status_for(exc), detail=exc.message)
