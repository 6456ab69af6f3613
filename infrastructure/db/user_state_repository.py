"""
Supabase User State Repository Implementation.

One ``user_state`` row per user. The store's upsert-by-unique-key cannot be
relied on in every deployment, so writers use update-then-insert instead.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from application.exceptions import StoreReadError, StoreWriteError
from domain.models.progress import UserState
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseUserStateRepository:
    """Supabase implementation of UserStateRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get(self, user_id: str) -> Optional[UserState]:
        try:
            result = self._client.table("user_state") \
                .select("user_id, program_id, current_day, updated_at") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching user_state for {user_id}: {e}")
            raise StoreReadError(f"user_state: {store_message(e)}") from e

        rows = result.data or []
        return UserState(**rows[0]) if rows else None

    def insert(self, state: UserState) -> UserState:
        row = {
            "user_id": state.user_id,
            "program_id": state.program_id,
            "current_day": state.current_day,
        }
        try:
            result = self._client.table("user_state").insert(row).execute()
        except Exception as e:
            logger.error(f"Error creating user_state for {state.user_id}: {e}")
            raise StoreWriteError(f"failed to create user_state: {store_message(e)}") from e

        rows = result.data or []
        return UserState(**rows[0]) if rows else state

    def set_program(self, user_id: str, program_id: str) -> int:
        try:
            result = self._client.table("user_state") \
                .update({"program_id": program_id, "current_day": 1, "updated_at": _now_iso()}) \
                .eq("user_id", user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error binding program {program_id} to {user_id}: {e}")
            raise StoreWriteError(f"failed to update user_state: {store_message(e)}") from e

        return len(result.data or [])

    def set_current_day(self, user_id: str, day_number: int) -> int:
        try:
            result = self._client.table("user_state") \
                .update({"current_day": day_number, "updated_at": _now_iso()}) \
                .eq("user_id", user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error moving {user_id} to day {day_number}: {e}")
            raise StoreWriteError(f"failed to update user_state: {store_message(e)}") from e

        return len(result.data or [])
