"""
Supabase Exercise Progress Repository Implementation.

Rows of ``user_exercise_progress`` are keyed on (user_id, day_exercise_id) and
deleted, never zeroed, when a day closes.
"""
import logging
from typing import Dict, Sequence

from supabase import Client

from application.exceptions import StoreReadError, StoreWriteError
from domain.models.progress import ExerciseProgress
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)


def _row_to_progress(user_id: str, row: dict) -> ExerciseProgress:
    return ExerciseProgress(
        user_id=user_id,
        exercise_id=row["day_exercise_id"],
        reps_done=max(0, int(row.get("reps_done") or 0)),
    )


class SupabaseProgressRepository:
    """Supabase implementation of ProgressRepository."""

    def __init__(self, client: Client):
        self._client = client

    def get_for_exercises(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
    ) -> Dict[str, int]:
        if not exercise_ids:
            return {}
        try:
            result = self._client.table("user_exercise_progress") \
                .select("day_exercise_id, reps_done") \
                .eq("user_id", user_id) \
                .in_("day_exercise_id", list(exercise_ids)) \
                .execute()
        except Exception as e:
            logger.error(f"Error loading progress for {user_id}: {e}")
            raise StoreReadError(store_message(e)) from e

        rows = [_row_to_progress(user_id, row) for row in result.data or []]
        return {row.exercise_id: row.reps_done for row in rows}

    def upsert(self, user_id: str, exercise_id: str, reps_done: int) -> None:
        try:
            self._client.table("user_exercise_progress").upsert({
                "user_id": user_id,
                "day_exercise_id": exercise_id,
                "reps_done": reps_done,
            }, on_conflict="user_id,day_exercise_id").execute()
        except Exception as e:
            logger.error(f"Error saving progress for {user_id}/{exercise_id}: {e}")
            raise StoreWriteError(store_message(e)) from e

    def delete_for_exercises(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
    ) -> None:
        if not exercise_ids:
            return
        try:
            self._client.table("user_exercise_progress") \
                .delete() \
                .eq("user_id", user_id) \
                .in_("day_exercise_id", list(exercise_ids)) \
                .execute()
        except Exception as e:
            logger.error(f"Error clearing progress for {user_id}: {e}")
            raise StoreWriteError(store_message(e)) from e

    def delete_all(self, user_id: str) -> None:
        try:
            self._client.table("user_exercise_progress") \
                .delete() \
                .eq("user_id", user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error clearing all progress for {user_id}: {e}")
            raise StoreWriteError(store_message(e)) from e
