"""
Domain models for the FitStreak API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Program / ProgramDay / DayExercise: a fixed-length plan and its schedule
- UserState: which program a user follows and the current day pointer
- ExerciseProgress: transient rep counters for the active day
- DayHistoryEntry / DayHistoryExerciseEntry: the closed-day log
- DaySession: the aggregate the progression engine operates on

Usage:
    >>> from domain.models import DaySession, DayExercise

    >>> session = DaySession(
    ...     user_id="u1",
    ...     program_id="p1",
    ...     exercises=[DayExercise(id="e1", name="Push-ups", target=50)],
    ...     progress={"e1": 25},
    ... )
    >>> session.totals().pct
    50
"""

from domain.models.program import (
    DayExercise,
    ExerciseDraft,
    ExercisePlan,
    ExerciseUnit,
    Program,
    ProgramDay,
)
from domain.models.progress import (
    DayHistoryEntry,
    DayHistoryExerciseEntry,
    ExerciseProgress,
    Subscriber,
    UserState,
)
from domain.models.day_session import DaySession, DayTotals

__all__ = [
    # Programs
    "Program",
    "ProgramDay",
    "DayExercise",
    "ExerciseDraft",
    "ExercisePlan",
    "ExerciseUnit",
    # Per-user state
    "UserState",
    "ExerciseProgress",
    "DayHistoryEntry",
    "DayHistoryExerciseEntry",
    "Subscriber",
    # Aggregates
    "DaySession",
    "DayTotals",
]
