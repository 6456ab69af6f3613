"""
Domain layer for the FitStreak API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    DayExercise,
    DayHistoryEntry,
    DaySession,
    Program,
    ProgramDay,
    UserState,
)

__all__ = [
    "DayExercise",
    "DayHistoryEntry",
    "DaySession",
    "Program",
    "ProgramDay",
    "UserState",
]
