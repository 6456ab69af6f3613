"""
HandleBotUpdate Use Case.

Processes one incoming Telegram update. Only ``/start`` does anything: the
sender is stored as a reminder subscriber and welcomed with a button that
opens the web client.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from application.exceptions import ValidationError
from application.ports import Notifier, SubscriberRepository
from domain.models import Subscriber

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "🔥 Добро пожаловать в FitStreak!\n\n"
    "Сможешь продержаться 100 дней подряд?\n\n"
    "Жми кнопку ниже и начинай сегодня 💪"
)
WELCOME_BUTTON = "🚀 Открыть приложение"


@dataclass
class BotUpdateResult:
    handled: bool
    subscriber: Optional[Subscriber] = None


class HandleBotUpdateUseCase:
    """Reacts to /start; every other update is acknowledged and ignored."""

    def __init__(
        self,
        subscriber_repo: SubscriberRepository,
        notifier: Optional[Notifier],
        *,
        webapp_url: Optional[str] = None,
    ) -> None:
        self._subscriber_repo = subscriber_repo
        self._notifier = notifier
        self._webapp_url = webapp_url

    def execute(self, update: Dict[str, Any]) -> BotUpdateResult:
        """
        Handle one update payload.

        Raises:
            ValidationError: The bot is not configured
            StoreWriteError: The subscriber could not be saved
            NotificationError: The welcome message was not delivered
        """
        message = update.get("message") or update.get("edited_message")
        if not isinstance(message, dict):
            return BotUpdateResult(handled=False)

        chat_id = (message.get("chat") or {}).get("id")
        text = message.get("text") or ""
        if not chat_id or not text.startswith("/start"):
            return BotUpdateResult(handled=False)

        if self._notifier is None or not self._webapp_url:
            raise ValidationError("BOT_TOKEN or WEBAPP_URL missing")

        sender = message.get("from") or {}
        subscriber = Subscriber(
            user_id=sender.get("id") or chat_id,
            chat_id=chat_id,
            username=sender.get("username"),
            first_name=sender.get("first_name"),
            last_name=sender.get("last_name"),
        )
        self._subscriber_repo.upsert(subscriber)
        logger.info(f"Subscribed {subscriber.user_id} (chat {subscriber.chat_id})")

        self._notifier.send_message(
            subscriber.chat_id,
            WELCOME_TEXT,
            button_text=WELCOME_BUTTON,
            button_url=self._webapp_url,
        )
        return BotUpdateResult(handled=True, subscriber=subscriber)
