"""
Exercise Progress Repository Interface (Port).

Transient per-day rep counters, unique per (user_id, day_exercise_id).
"""
from typing import Dict, Protocol, Sequence


class ProgressRepository(Protocol):
    """Abstract interface for the ``user_exercise_progress`` table."""

    def get_for_exercises(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
    ) -> Dict[str, int]:
        """Map exercise id -> reps done, for exactly the given ids."""
        ...

    def upsert(self, user_id: str, exercise_id: str, reps_done: int) -> None:
        """Write a counter keyed on (user_id, exercise_id)."""
        ...

    def delete_for_exercises(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
    ) -> None:
        """Delete this user's counters for the given exercises only."""
        ...

    def delete_all(self, user_id: str) -> None:
        """Delete every counter of a user."""
        ...
