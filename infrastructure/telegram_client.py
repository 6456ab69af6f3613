"""
HTTP client for the Telegram Bot API.

Only ``sendMessage`` is used: reminders and the /start welcome both carry a
single inline ``web_app`` button that opens the web client.
"""

import logging
from typing import Any, Optional

import httpx

from application.exceptions import NotificationError

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """
    Notifier implementation backed by the Telegram Bot API.

    Raises NotificationError with ``status_code`` set when Telegram answered
    but refused the message, and with ``status_code=None`` when the request
    never completed.
    """

    def __init__(
        self,
        bot_token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
    ):
        """
        Initialize the Telegram client.

        Args:
            bot_token: Bot token issued by BotFather
            api_base: Base URL of the Bot API
            timeout: Request timeout in seconds
        """
        self._bot_token = bot_token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _method_url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._bot_token}/{method}"

    @staticmethod
    def build_payload(
        chat_id: str,
        text: str,
        button_text: Optional[str] = None,
        button_url: Optional[str] = None,
    ) -> dict[str, Any]:
        """Build a sendMessage body, with a web_app button when both parts are given."""
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if button_text and button_url:
            payload["reply_markup"] = {
                "inline_keyboard": [
                    [{"text": button_text, "web_app": {"url": button_url}}],
                ],
            }
        return payload

    def send_message(
        self,
        chat_id: str,
        text: str,
        *,
        button_text: Optional[str] = None,
        button_url: Optional[str] = None,
    ) -> None:
        """
        Send one message to one chat.

        Raises:
            NotificationError: Transport failure, non-2xx status, or a body
                whose ``ok`` is not true
        """
        payload = self.build_payload(chat_id, text, button_text, button_url)

        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(self._method_url("sendMessage"), json=payload)
        except httpx.ConnectError as e:
            logger.error(f"Telegram API unavailable: {e}")
            raise NotificationError(str(e) or "connection failed") from e
        except httpx.TimeoutException as e:
            logger.error(f"Telegram API timeout: {e}")
            raise NotificationError("request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Telegram API request failed: {e}")
            raise NotificationError(str(e) or e.__class__.__name__) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.is_success or body.get("ok") is not True:
            description = body.get("description") or response.reason_phrase or "unknown"
            logger.error(f"Telegram API error: {response.status_code} - {description}")
            raise NotificationError(description, status_code=response.status_code)
