"""
ExerciseWriter strategies for the two ``day_exercises`` row shapes.

- TargetRepsExerciseWriter: ``target_reps`` column (primary shape)
- GenericTargetExerciseWriter: ``target`` + ``unit`` + ``weight`` columns
- FallbackExerciseWriter: tries strategies in fixed priority order; this is
  the only place that knows a fallback exists
"""
import logging
from typing import Any, Callable, Dict, List, Sequence

from supabase import Client

from application.exceptions import StoreWriteError
from application.ports import ExerciseWriter
from domain.models.program import ExerciseDraft
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)


class _SupabaseExerciseWriter:
    """Shared Supabase plumbing; subclasses only decide the row shape."""

    shape = ""

    def __init__(self, client: Client):
        self._client = client

    def _row(self, draft: ExerciseDraft) -> Dict[str, Any]:
        raise NotImplementedError

    def _changes(self, name: str, target: int) -> Dict[str, Any]:
        raise NotImplementedError

    def insert(self, drafts: Sequence[ExerciseDraft]) -> int:
        rows = [self._row(draft) for draft in drafts]
        if not rows:
            return 0
        try:
            self._client.table("day_exercises").insert(rows).execute()
        except Exception as e:
            raise StoreWriteError(store_message(e)) from e
        return len(rows)

    def update_one(self, exercise_id: str, *, name: str, target: int) -> int:
        try:
            result = self._client.table("day_exercises") \
                .update(self._changes(name, target)) \
                .eq("id", exercise_id) \
                .execute()
        except Exception as e:
            raise StoreWriteError(store_message(e)) from e
        return len(result.data or [])

    def update_by_name(
        self,
        program_day_ids: Sequence[str],
        original_name: str,
        *,
        name: str,
        target: int,
    ) -> int:
        if not program_day_ids:
            return 0
        try:
            result = self._client.table("day_exercises") \
                .update(self._changes(name, target)) \
                .in_("program_day_id", list(program_day_ids)) \
                .eq("name", original_name) \
                .execute()
        except Exception as e:
            raise StoreWriteError(store_message(e)) from e
        return len(result.data or [])


class TargetRepsExerciseWriter(_SupabaseExerciseWriter):
    """Rows shaped ``{program_day_id, name, target_reps, sort_order}``."""

    shape = "target_reps"

    def _row(self, draft: ExerciseDraft) -> Dict[str, Any]:
        return {
            "program_day_id": draft.program_day_id,
            "name": draft.name,
            "target_reps": draft.target,
            "sort_order": draft.sort_order,
        }

    def _changes(self, name: str, target: int) -> Dict[str, Any]:
        return {"name": name, "target_reps": target}


class GenericTargetExerciseWriter(_SupabaseExerciseWriter):
    """Rows shaped ``{program_day_id, name, target, unit, weight, sort_order}``."""

    shape = "target_unit"

    def _row(self, draft: ExerciseDraft) -> Dict[str, Any]:
        return {
            "program_day_id": draft.program_day_id,
            "name": draft.name,
            "target": draft.target,
            "unit": draft.unit.value,
            "weight": None,
            "sort_order": draft.sort_order,
        }

    def _changes(self, name: str, target: int) -> Dict[str, Any]:
        return {"name": name, "target": target}


class FallbackExerciseWriter:
    """
    Try each writer in order; the first one that does not raise wins.

    When every writer fails, the last writer's message is surfaced.
    """

    def __init__(self, *writers: ExerciseWriter):
        if not writers:
            raise ValueError("FallbackExerciseWriter needs at least one writer")
        self._writers = writers

    @property
    def shape(self) -> str:
        return "|".join(writer.shape for writer in self._writers)

    def _attempt(self, action: str, call: Callable[[ExerciseWriter], int]) -> int:
        errors: List[str] = []
        for writer in self._writers:
            try:
                return call(writer)
            except StoreWriteError as e:
                logger.warning(
                    "Exercise %s rejected in %s shape: %s", action, writer.shape, e.message
                )
                errors.append(e.message)
        raise StoreWriteError(errors[-1] or f"failed to {action} exercises")

    def insert(self, drafts: Sequence[ExerciseDraft]) -> int:
        return self._attempt("insert", lambda writer: writer.insert(drafts))

    def update_one(self, exercise_id: str, *, name: str, target: int) -> int:
        return self._attempt(
            "update",
            lambda writer: writer.update_one(exercise_id, name=name, target=target),
        )

    def update_by_name(
        self,
        program_day_ids: Sequence[str],
        original_name: str,
        *,
        name: str,
        target: int,
    ) -> int:
        return self._attempt(
            "update",
            lambda writer: writer.update_by_name(
                program_day_ids, original_name, name=name, target=target
            ),
        )


def create_exercise_writer(client: Client) -> FallbackExerciseWriter:
    """The production writer: primary shape first, then the generic shape."""
    return FallbackExerciseWriter(
        TargetRepsExerciseWriter(client),
        GenericTargetExerciseWriter(client),
    )
