"""
Fake SubscriberRepository and Notifier Implementations for Testing.
"""
from typing import Dict, List, Optional, Set

from application.exceptions import NotificationError, StoreReadError, StoreWriteError
from domain.models.progress import Subscriber


class FakeSubscriberRepository:
    """In-memory fake implementation of SubscriberRepository."""

    def __init__(self, subscribers: Optional[List[Subscriber]] = None):
        self.subscribers: List[Subscriber] = list(subscribers or [])
        self._failures: Dict[str, str] = {}

    def fail(self, method: str, message: str = "boom") -> None:
        self._failures[method] = message

    def upsert(self, subscriber: Subscriber) -> None:
        if "upsert" in self._failures:
            raise StoreWriteError(self._failures["upsert"])
        self.subscribers = [s for s in self.subscribers if s.user_id != subscriber.user_id]
        self.subscribers.append(subscriber)

    def list_all(self) -> List[Subscriber]:
        if "list_all" in self._failures:
            raise StoreReadError(self._failures["list_all"])
        return list(self.subscribers)


class FakeNotifier:
    """
    Records sent messages instead of calling Telegram.

    Attributes:
        sent: One dict per delivered message
        rejected_chats: Chats for which Telegram "answers" ok=false
        unreachable_chats: Chats for which the request "never completes"
    """

    def __init__(self):
        self.sent: List[dict] = []
        self.rejected_chats: Set[str] = set()
        self.unreachable_chats: Set[str] = set()

    def send_message(
        self,
        chat_id: str,
        text: str,
        *,
        button_text: Optional[str] = None,
        button_url: Optional[str] = None,
    ) -> None:
        if chat_id in self.unreachable_chats:
            raise NotificationError("connection refused")
        if chat_id in self.rejected_chats:
            raise NotificationError("Forbidden: bot was blocked by the user", status_code=403)
        self.sent.append({
            "chat_id": chat_id,
            "text": text,
            "button_text": button_text,
            "button_url": button_url,
        })
