"""
Program Repository Interface (Port).

Read/write access to programs, their day schedule and day-scoped exercises.
Implementations raise StoreReadError / StoreWriteError carrying the
underlying store message.
"""
from typing import List, Optional, Protocol

from domain.models.program import DayExercise, Program, ProgramDay


class ProgramRepository(Protocol):
    """
    Abstract interface for the ``programs``, ``program_days`` and
    ``day_exercises`` tables.
    """

    def find_by_name(
        self,
        name: str,
        *,
        ownerless_only: bool = False,
    ) -> List[Program]:
        """
        Find programs with an exact name, newest first.

        Args:
            name: Program name
            ownerless_only: Restrict to built-in programs (no owner)

        Returns:
            Matching programs, newest first
        """
        ...

    def get(self, program_id: str) -> Optional[Program]:
        """Get a program by id, or None."""
        ...

    def create(
        self,
        name: str,
        owner_user_id: Optional[str],
        *,
        total_days: int,
    ) -> Program:
        """
        Insert a program row.

        Returns:
            The created program with its generated id
        """
        ...

    def create_days(self, program_id: str, total_days: int) -> List[ProgramDay]:
        """
        Insert day rows 1..total_days in one batch.

        Returns:
            Created days ordered by day_number
        """
        ...

    def get_day(self, program_id: str, day_number: int) -> Optional[ProgramDay]:
        """Get one program day, or None when it does not exist."""
        ...

    def list_day_ids(self, program_id: str) -> List[str]:
        """Ids of every day of a program."""
        ...

    def get_day_exercises(self, program_day_id: str) -> List[DayExercise]:
        """Exercises of a day ordered by sort_order."""
        ...
