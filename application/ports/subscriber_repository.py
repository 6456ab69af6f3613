"""
Subscriber Repository Interface (Port).

Chat-platform users who started the bot; the reminder job's recipient list.
"""
from typing import List, Protocol

from domain.models.progress import Subscriber


class SubscriberRepository(Protocol):
    """Abstract interface for the ``telegram_users`` table."""

    def upsert(self, subscriber: Subscriber) -> None:
        """Create or refresh a subscriber keyed on user_id."""
        ...

    def list_all(self) -> List[Subscriber]:
        """Every subscriber that has both a user id and a chat id."""
        ...
