"""
Exercise Writer Interface (Port).

Two physically different ``day_exercises`` row shapes exist in deployed
stores. Each shape is one ExerciseWriter strategy; callers only ever see a
single writer and never learn which shape was accepted.
"""
from typing import Protocol, Sequence

from domain.models.program import ExerciseDraft


class ExerciseWriter(Protocol):
    """Writes exercise rows in one physical shape."""

    shape: str

    def insert(self, drafts: Sequence[ExerciseDraft]) -> int:
        """
        Insert exercise rows in one batch.

        Returns:
            Number of rows submitted

        Raises:
            StoreWriteError: The store rejected the batch
        """
        ...

    def update_one(self, exercise_id: str, *, name: str, target: int) -> int:
        """Update a single exercise row. Returns affected row count."""
        ...

    def update_by_name(
        self,
        program_day_ids: Sequence[str],
        original_name: str,
        *,
        name: str,
        target: int,
    ) -> int:
        """
        Update every row in the given days whose name equals original_name.

        Returns:
            Affected row count
        """
        ...
