"""
Day History Repository Interface (Port).

Closed-day totals and their per-exercise breakdown. Both are upserted on
natural keys so closing the same day twice overwrites instead of duplicating.
"""
from typing import List, Protocol, Sequence

from domain.models.progress import DayHistoryEntry, DayHistoryExerciseEntry


class HistoryRepository(Protocol):
    """
    Abstract interface for ``user_day_history`` and
    ``user_day_history_exercises``.
    """

    def upsert_day(self, entry: DayHistoryEntry) -> None:
        """Upsert on (user_id, program_id, day_number)."""
        ...

    def upsert_exercises(self, entries: Sequence[DayHistoryExerciseEntry]) -> None:
        """Upsert on (user_id, program_id, day_number, exercise_name)."""
        ...

    def list_days(
        self,
        user_id: str,
        program_id: str,
        *,
        limit: int = 500,
    ) -> List[DayHistoryEntry]:
        """History entries ordered by day_number ascending."""
        ...

    def list_exercise_entries(
        self,
        user_id: str,
        program_id: str,
        *,
        limit: int = 10000,
    ) -> List[DayHistoryExerciseEntry]:
        """Per-exercise breakdown rows for a user's program."""
        ...

    def has_closed_day(self, user_id: str, local_date: str) -> bool:
        """True when a non-skipped entry exists for this user and date."""
        ...

    def delete_days(self, user_id: str, program_id: str) -> None:
        """Delete a user's history entries for a program."""
        ...

    def delete_exercise_entries(self, user_id: str, program_id: str) -> None:
        """Delete a user's breakdown rows for a program."""
        ...
