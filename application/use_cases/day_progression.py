"""
DayProgression Use Case.

The per-user day state machine:

    NoProgram -> DayActive <-> (rep updates) -> DayClosing -> DayActive(next)

Every operation takes the DaySession explicitly and returns or mutates it.
Loading never raises (failures surface as ``session.diagnostic``), while
close, reset and edit raise a typed error for that single operation.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from application.exceptions import (
    CloseDayError,
    FitStreakError,
    StoreWriteError,
    ValidationError,
)
from application.ports import (
    ExerciseWriter,
    HistoryRepository,
    ProgramRepository,
    ProgressRepository,
    UserStateRepository,
)
from application.use_cases.assign_program import coerce_target
from backend.core.dates import local_iso_date
from domain.models import DayHistoryEntry, DayHistoryExerciseEntry, DaySession

logger = logging.getLogger(__name__)

APPLY_TODAY = "today"
APPLY_PROGRAM = "program"


def parse_custom_reps(raw: Optional[str]) -> Optional[int]:
    """
    Parse free-text reps: signed integers or decimals, truncated toward zero.

    Returns None for empty, non-numeric or zero input.
    """
    text = str(raw or "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    value = int(number)
    return value or None


@dataclass
class CloseDayResult:
    """The written history entry and the freshly loaded next day."""

    history_entry: DayHistoryEntry
    next_session: DaySession


class DayProgressionService:
    """
    Use case for working through a program day.

    Usage:
        >>> service = DayProgressionService(
        ...     program_repo, exercise_writer, state_repo, progress_repo, history_repo
        ... )
        >>> session = service.open_session("user-123")
        >>> service.update_reps(session, session.exercise_ids[0], 10)
        10
        >>> result = service.close_day(session)
    """

    def __init__(
        self,
        program_repo: ProgramRepository,
        exercise_writer: ExerciseWriter,
        user_state_repo: UserStateRepository,
        progress_repo: ProgressRepository,
        history_repo: HistoryRepository,
        *,
        reset_code: str = "0000",
        today: Callable[[], str] = local_iso_date,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            program_repo: Program days and their exercises
            exercise_writer: Writer for exercise edits (any row shape)
            user_state_repo: Current day pointer
            progress_repo: Rep counters for the active day
            history_repo: Closed-day log
            reset_code: Confirmation code required by reset()
            today: Returns the local date as YYYY-MM-DD
        """
        self._program_repo = program_repo
        self._exercise_writer = exercise_writer
        self._user_state_repo = user_state_repo
        self._progress_repo = progress_repo
        self._history_repo = history_repo
        self._reset_code = reset_code
        self._today = today

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def open_session(self, user_id: str) -> DaySession:
        """
        Load the user's current day.

        Raises:
            StoreReadError: The user's state could not be read
        """
        state = self._user_state_repo.get(user_id)
        if state is None or not state.has_program:
            return DaySession(user_id=user_id)
        return self.load_day(user_id, state.program_id, state.current_day)

    def load_day(self, user_id: str, program_id: str, day_number: int) -> DaySession:
        """Load a day's exercises and the user's counters for them. Never raises."""
        session = DaySession(user_id=user_id, program_id=program_id, day_number=day_number)

        try:
            day = self._program_repo.get_day(program_id, day_number)
        except FitStreakError as e:
            session.diagnostic = f"program_day: {e.message}"
            return session
        if day is None:
            session.diagnostic = "program_day: not found"
            return session

        try:
            exercises = self._program_repo.get_day_exercises(day.id)
        except FitStreakError as e:
            session.diagnostic = f"day_exercises: {e.message}"
            return session

        session.exercises = sorted(exercises, key=lambda ex: ex.sort_order)
        if not session.exercises:
            return session

        try:
            session.progress = self._progress_repo.get_for_exercises(
                user_id, session.exercise_ids
            )
        except FitStreakError as e:
            session.exercises = []
            session.diagnostic = f"progress: {e.message}"
        return session

    # -------------------------------------------------------------------------
    # Rep counters
    # -------------------------------------------------------------------------

    def update_reps(self, session: DaySession, exercise_id: str, delta: int) -> int:
        """
        Apply a delta to an exercise counter, flooring at zero.

        The session is updated before the write; a failed write leaves the new
        value in place and records a diagnostic.

        Raises:
            ValidationError: The exercise is not part of this day
        """
        if session.exercise(exercise_id) is None:
            raise ValidationError(f"unknown exercise {exercise_id}", field="exerciseId")

        updated = max(0, session.done_for(exercise_id) + int(delta))
        session.progress[exercise_id] = updated

        try:
            self._progress_repo.upsert(session.user_id, exercise_id, updated)
        except FitStreakError as e:
            logger.warning(f"Progress save failed for {session.user_id}/{exercise_id}: {e.message}")
            session.diagnostic = f"save progress: {e.message}"
        return updated

    def add_custom_reps(
        self,
        session: DaySession,
        exercise_id: str,
        raw_text: Optional[str],
    ) -> Optional[int]:
        """Apply a typed-in delta; unusable input is ignored and returns None."""
        delta = parse_custom_reps(raw_text)
        if delta is None:
            return None
        return self.update_reps(session, exercise_id, delta)

    # -------------------------------------------------------------------------
    # Closing a day
    # -------------------------------------------------------------------------

    def close_day(self, session: DaySession, *, force: bool = False) -> CloseDayResult:
        """
        Record the day in history and advance to the next one.

        ``force=True`` is the skip path: the day is logged as skipped whatever
        its progress. Stages run in order and the first failure stops the rest;
        re-running with the same progress converges to the same rows.

        Raises:
            ValidationError: No program, the day did not load, or it is not
                complete and not forced
            CloseDayError: A stage failed (``stage`` names it)
        """
        if not session.has_program:
            raise ValidationError("no program selected")
        # An empty day is a failed or exhausted load and is never closed.
        if not session.exercises:
            raise ValidationError("day is not loaded")
        if not force and not session.all_completed():
            raise ValidationError("day is not completed yet")

        totals = session.totals()
        local_date = self._today()
        entry = DayHistoryEntry(
            user_id=session.user_id,
            program_id=session.program_id,
            day_number=session.day_number,
            local_date=local_date,
            total_done=totals.total_done,
            total_target=totals.total_target,
            skipped=force,
        )
        breakdown = [
            DayHistoryExerciseEntry(
                user_id=session.user_id,
                program_id=session.program_id,
                day_number=session.day_number,
                local_date=local_date,
                exercise_name=ex.name,
                reps_done=session.done_for(ex.id),
                reps_target=ex.target,
            )
            for ex in session.exercises
        ]
        next_day = session.day_number + 1

        self._stage("history", lambda: self._history_repo.upsert_day(entry))
        self._stage("breakdown", lambda: self._history_repo.upsert_exercises(breakdown))
        self._stage(
            "user_state",
            lambda: self._user_state_repo.set_current_day(session.user_id, next_day),
        )
        self._stage(
            "progress",
            lambda: self._progress_repo.delete_for_exercises(
                session.user_id, session.exercise_ids
            ),
        )

        logger.info(
            f"Closed day {session.day_number} for {session.user_id} "
            f"({'skipped' if force else 'completed'}, {totals.total_done}/{totals.total_target})"
        )
        next_session = self.load_day(session.user_id, session.program_id, next_day)
        return CloseDayResult(history_entry=entry, next_session=next_session)

    def _stage(self, stage: str, action: Callable[[], object]) -> None:
        try:
            action()
        except FitStreakError as e:
            logger.error(f"Close day failed at {stage}: {e.message}")
            raise CloseDayError(stage, e.message) from e

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self, session: DaySession, confirmation_code: str) -> DaySession:
        """
        Wipe the user's progress and history for the active program and go
        back to day 1.

        Raises:
            ValidationError: Wrong confirmation code
            StoreWriteError: A delete or update failed (message names the stage)
        """
        if str(confirmation_code or "").strip() != self._reset_code:
            raise ValidationError("invalid confirmation code", field="code")

        user_id = session.user_id
        self._reset_stage("progress", lambda: self._progress_repo.delete_all(user_id))
        if not session.has_program:
            session.clear_progress()
            return session

        program_id = session.program_id
        self._reset_stage(
            "history", lambda: self._history_repo.delete_days(user_id, program_id)
        )
        self._reset_stage(
            "breakdown",
            lambda: self._history_repo.delete_exercise_entries(user_id, program_id),
        )
        self._reset_stage(
            "user_state", lambda: self._user_state_repo.set_current_day(user_id, 1)
        )

        logger.info(f"Reset progress of {user_id} on program {program_id}")
        return self.load_day(user_id, program_id, 1)

    @staticmethod
    def _reset_stage(stage: str, action: Callable[[], object]) -> None:
        try:
            action()
        except FitStreakError as e:
            logger.error(f"Reset failed at {stage}: {e.message}")
            raise StoreWriteError(f"reset {stage}: {e.message}") from e

    # -------------------------------------------------------------------------
    # Editing exercises
    # -------------------------------------------------------------------------

    def edit_exercise(
        self,
        session: DaySession,
        exercise_id: str,
        name: str,
        target,
        apply_to: str = APPLY_TODAY,
    ) -> DaySession:
        """
        Rename an exercise and change its target.

        ``apply_to="today"`` touches only this day's row; ``"program"`` touches
        every row in the program with the same original name.

        Raises:
            ValidationError: Bad name, scope or unknown exercise
            StoreWriteError: Neither row shape accepted the update
        """
        exercise = session.exercise(exercise_id)
        if exercise is None:
            raise ValidationError(f"unknown exercise {exercise_id}", field="exerciseId")
        name = str(name or "").strip()
        if not name:
            raise ValidationError("name is required", field="name")
        if apply_to not in (APPLY_TODAY, APPLY_PROGRAM):
            raise ValidationError(f"applyTo must be '{APPLY_TODAY}' or '{APPLY_PROGRAM}'", field="applyTo")

        target = coerce_target(target)

        if apply_to == APPLY_TODAY:
            self._exercise_writer.update_one(exercise_id, name=name, target=target)
        else:
            day_ids = self._program_repo.list_day_ids(session.program_id)
            updated = self._exercise_writer.update_by_name(
                day_ids, exercise.name, name=name, target=target
            )
            logger.info(
                f"Updated {updated} rows of {exercise.name!r} in program {session.program_id}"
            )

        session.exercises = [
            ex.model_copy(update={"name": name, "target": target}) if ex.id == exercise_id else ex
            for ex in session.exercises
        ]
        return session
