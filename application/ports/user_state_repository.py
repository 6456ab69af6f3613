"""
User State Repository Interface (Port).

One ``user_state`` row per user holding the chosen program and the current
day pointer.
"""
from typing import Optional, Protocol

from domain.models.progress import UserState


class UserStateRepository(Protocol):
    """Abstract interface for the ``user_state`` table."""

    def get(self, user_id: str) -> Optional[UserState]:
        """Get a user's state row, or None when the user is new."""
        ...

    def insert(self, state: UserState) -> UserState:
        """Insert a new state row."""
        ...

    def set_program(self, user_id: str, program_id: str) -> int:
        """
        Point the user at a program and reset current_day to 1.

        Returns:
            Number of rows updated (0 when the user has no row yet)
        """
        ...

    def set_current_day(self, user_id: str, day_number: int) -> int:
        """
        Move the day pointer and touch updated_at.

        Returns:
            Number of rows updated
        """
        ...
