"""
Supabase Day History Repository Implementation.

Queries against:
- user_day_history: totals per (user_id, program_id, day_number)
- user_day_history_exercises: breakdown per exercise name
"""
import logging
from typing import List, Sequence

from supabase import Client

from application.exceptions import StoreReadError, StoreWriteError
from domain.models.progress import DayHistoryEntry, DayHistoryExerciseEntry
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)

DAY_CONFLICT_KEY = "user_id,program_id,day_number"
EXERCISE_CONFLICT_KEY = "user_id,program_id,day_number,exercise_name"


class SupabaseHistoryRepository:
    """Supabase implementation of HistoryRepository."""

    def __init__(self, client: Client):
        self._client = client

    def upsert_day(self, entry: DayHistoryEntry) -> None:
        try:
            self._client.table("user_day_history") \
                .upsert(entry.to_row(), on_conflict=DAY_CONFLICT_KEY) \
                .execute()
        except Exception as e:
            logger.error(f"Error saving history for {entry.key}: {e}")
            raise StoreWriteError(store_message(e)) from e

    def upsert_exercises(self, entries: Sequence[DayHistoryExerciseEntry]) -> None:
        if not entries:
            return
        try:
            self._client.table("user_day_history_exercises") \
                .upsert([entry.to_row() for entry in entries], on_conflict=EXERCISE_CONFLICT_KEY) \
                .execute()
        except Exception as e:
            logger.error(f"Error saving history breakdown: {e}")
            raise StoreWriteError(store_message(e)) from e

    def list_days(
        self,
        user_id: str,
        program_id: str,
        *,
        limit: int = 500,
    ) -> List[DayHistoryEntry]:
        try:
            result = self._client.table("user_day_history") \
                .select("*") \
                .eq("user_id", user_id) \
                .eq("program_id", program_id) \
                .order("day_number") \
                .limit(limit) \
                .execute()
        except Exception as e:
            logger.error(f"Error loading history for {user_id}: {e}")
            raise StoreReadError(f"history: {store_message(e)}") from e

        entries = []
        for row in result.data or []:
            entries.append(DayHistoryEntry(
                user_id=row.get("user_id", user_id),
                program_id=row.get("program_id", program_id),
                day_number=row["day_number"],
                local_date=row.get("local_date") or "",
                total_done=int(row.get("total_done") or 0),
                total_target=int(row.get("total_target") or 0),
                skipped=bool(row.get("skipped") or False),
            ))
        return entries

    def list_exercise_entries(
        self,
        user_id: str,
        program_id: str,
        *,
        limit: int = 10000,
    ) -> List[DayHistoryExerciseEntry]:
        try:
            result = self._client.table("user_day_history_exercises") \
                .select("*") \
                .eq("user_id", user_id) \
                .eq("program_id", program_id) \
                .limit(limit) \
                .execute()
        except Exception as e:
            logger.error(f"Error loading history breakdown for {user_id}: {e}")
            raise StoreReadError(f"history breakdown: {store_message(e)}") from e

        entries = []
        for row in result.data or []:
            entries.append(DayHistoryExerciseEntry(
                user_id=row.get("user_id", user_id),
                program_id=row.get("program_id", program_id),
                day_number=row["day_number"],
                local_date=row.get("local_date") or "",
                exercise_name=row.get("exercise_name") or "",
                reps_done=int(row.get("reps_done") or 0),
                reps_target=int(row.get("reps_target") or 0),
            ))
        return entries

    def has_closed_day(self, user_id: str, local_date: str) -> bool:
        try:
            result = self._client.table("user_day_history") \
                .select("user_id") \
                .eq("user_id", user_id) \
                .eq("local_date", local_date) \
                .eq("skipped", False) \
                .limit(1) \
                .execute()
        except Exception as e:
            raise StoreReadError(store_message(e)) from e

        return len(result.data or []) > 0

    def delete_days(self, user_id: str, program_id: str) -> None:
        try:
            self._client.table("user_day_history") \
                .delete() \
                .eq("user_id", user_id) \
                .eq("program_id", program_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error deleting history for {user_id}: {e}")
            raise StoreWriteError(store_message(e)) from e

    def delete_exercise_entries(self, user_id: str, program_id: str) -> None:
        try:
            self._client.table("user_day_history_exercises") \
                .delete() \
                .eq("user_id", user_id) \
                .eq("program_id", program_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error deleting history breakdown for {user_id}: {e}")
            raise StoreWriteError(store_message(e)) from e
