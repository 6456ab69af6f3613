"""
Notifier Interface (Port).

The "send notification" capability of the messaging provider.
"""
from typing import Optional, Protocol


class Notifier(Protocol):
    """Delivers one message to one chat."""

    def send_message(
        self,
        chat_id: str,
        text: str,
        *,
        button_text: Optional[str] = None,
        button_url: Optional[str] = None,
    ) -> None:
        """
        Send a message, optionally with a single deep-link button.

        Raises:
            NotificationError: Transport failure or non-success response
        """
        ...
