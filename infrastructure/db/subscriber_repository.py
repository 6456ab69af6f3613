"""
Supabase Subscriber Repository Implementation.

``telegram_users`` holds everyone who pressed Start in the bot. The platform
user id doubles as the app user id when the client runs inside Telegram.
"""
import logging
from typing import List

from supabase import Client

from application.exceptions import StoreReadError, StoreWriteError
from domain.models.progress import Subscriber
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)


class SupabaseSubscriberRepository:
    """Supabase implementation of SubscriberRepository."""

    def __init__(self, client: Client):
        self._client = client

    def upsert(self, subscriber: Subscriber) -> None:
        try:
            self._client.table("telegram_users") \
                .upsert(subscriber.model_dump(), on_conflict="user_id") \
                .execute()
        except Exception as e:
            logger.error(f"Error saving subscriber {subscriber.user_id}: {e}")
            raise StoreWriteError(f"telegram_users write error: {store_message(e)}") from e

    def list_all(self) -> List[Subscriber]:
        try:
            result = self._client.table("telegram_users").select("*").execute()
        except Exception as e:
            logger.error(f"Error reading subscribers: {e}")
            raise StoreReadError(f"telegram_users read error: {store_message(e)}") from e

        subscribers = []
        for row in result.data or []:
            if not row.get("user_id") or not row.get("chat_id"):
                continue
            subscribers.append(Subscriber(
                user_id=row["user_id"],
                chat_id=row["chat_id"],
                username=row.get("username"),
                first_name=row.get("first_name"),
                last_name=row.get("last_name"),
            ))
        return subscribers
