"""
ProgramAssignment Use Case.

Attaches exactly one program to a user's state: either the shared built-in
program or a freshly created custom program.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from application.exceptions import NotFoundError, ValidationError
from application.ports import (
    ExerciseWriter,
    ProgramRepository,
    ProgressRepository,
    UserStateRepository,
)
from domain.models import ExerciseDraft, ExercisePlan, ExerciseUnit, Program, UserState

logger = logging.getLogger(__name__)


def coerce_target(value: Any) -> int:
    """Coerce a submitted target to a whole number of at least 1."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if math.isnan(number) or math.isinf(number):
        number = 0.0
    return max(1, int(number))


def normalize_exercises(raw: Optional[Iterable[Mapping[str, Any]]]) -> List[ExercisePlan]:
    """
    Clean submitted exercises: trim names, drop nameless entries, clamp
    targets to >= 1 and default the unit to reps.
    """
    plans: List[ExercisePlan] = []
    for item in raw or []:
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        unit = ExerciseUnit.STEPS if item.get("unit") == "steps" else ExerciseUnit.REPS
        plans.append(ExercisePlan(name=name, target=coerce_target(item.get("target")), unit=unit))
    return plans


@dataclass
class AssignProgramResult:
    """Result of binding a program to a user."""

    program: Program
    created: bool = False
    exercises_written: int = 0

    @property
    def program_id(self) -> str:
        return self.program.id


class ProgramAssignmentUseCase:
    """
    Use case for choosing a user's program.

    Usage:
        >>> use_case = ProgramAssignmentUseCase(
        ...     program_repo=program_repo,
        ...     exercise_writer=writer,
        ...     user_state_repo=state_repo,
        ...     progress_repo=progress_repo,
        ... )
        >>> result = use_case.assign_built_in("user-123")
        >>> result.program_id
        '7'
    """

    def __init__(
        self,
        program_repo: ProgramRepository,
        exercise_writer: ExerciseWriter,
        user_state_repo: UserStateRepository,
        progress_repo: ProgressRepository,
        *,
        built_in_name: str = "100 days v.2",
        program_days: int = 100,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            program_repo: Programs, their days and day exercises
            exercise_writer: Writer for day_exercises rows (any shape)
            user_state_repo: Per-user program pointer
            progress_repo: Transient rep counters, purged on a program switch
            built_in_name: Name of the shared built-in program
            program_days: Length of a custom program in days
        """
        self._program_repo = program_repo
        self._exercise_writer = exercise_writer
        self._user_state_repo = user_state_repo
        self._progress_repo = progress_repo
        self._built_in_name = built_in_name
        self._program_days = program_days

    # -------------------------------------------------------------------------
    # Built-in program
    # -------------------------------------------------------------------------

    def _built_in_candidates(self) -> List[Program]:
        ownerless = self._program_repo.find_by_name(self._built_in_name, ownerless_only=True)
        anyone = self._program_repo.find_by_name(self._built_in_name)

        seen = set()
        candidates = []
        for program in ownerless + anyone:
            if program.id in seen:
                continue
            seen.add(program.id)
            candidates.append(program)
        return candidates

    def assign_built_in(self, user_id: str) -> AssignProgramResult:
        """
        Bind the built-in program to the user.

        Only candidates with a day 1 count; a half-created program is never
        handed out and never fabricated here.

        Raises:
            ValidationError: user_id is empty
            NotFoundError: No usable built-in program exists
            StoreReadError / StoreWriteError: Store failure
        """
        user_id = _require_user(user_id)

        for program in self._built_in_candidates():
            if self._program_repo.get_day(program.id, 1) is None:
                logger.warning(f"Built-in candidate {program.id} has no day 1, skipping")
                continue
            self.bind(user_id, program.id)
            return AssignProgramResult(program=program)

        raise NotFoundError(f"program '{self._built_in_name}' not found or has no days")

    # -------------------------------------------------------------------------
    # Custom program
    # -------------------------------------------------------------------------

    def create_custom_program(
        self,
        user_id: str,
        name: str,
        exercises: Optional[Iterable[Mapping[str, Any]]],
    ) -> AssignProgramResult:
        """
        Create a custom program with identical exercises on every day and
        bind it to the user.

        Nothing is rolled back when a later step fails; the partially created
        program simply stays unreachable.

        Raises:
            ValidationError: Missing user, name or exercises
            StoreWriteError: Program, day or exercise rows could not be written
        """
        user_id = _require_user(user_id)
        name = str(name or "").strip()
        if not name:
            raise ValidationError("name is required", field="name")
        plans = normalize_exercises(exercises)
        if not plans:
            raise ValidationError("at least one exercise is required", field="exercises")

        program = self._program_repo.create(
            name, user_id, total_days=self._program_days
        )
        logger.info(f"Created program {program.id} ({name!r}) for {user_id}")

        days = self._program_repo.create_days(program.id, self._program_days)

        drafts = [
            ExerciseDraft(
                program_day_id=day.id,
                name=plan.name,
                target=plan.target,
                unit=plan.unit,
                sort_order=index + 1,
            )
            for day in sorted(days, key=lambda d: d.day_number)
            for index, plan in enumerate(plans)
        ]
        written = self._exercise_writer.insert(drafts)

        self.bind(user_id, program.id)
        return AssignProgramResult(program=program, created=True, exercises_written=written)

    # -------------------------------------------------------------------------
    # Binding
    # -------------------------------------------------------------------------

    def bind(self, user_id: str, program_id: str) -> UserState:
        """
        Point the user at a program's day 1 and clear the day's counters.

        Raises:
            StoreWriteError: The state row could not be written
        """
        updated = self._user_state_repo.set_program(user_id, program_id)
        if updated == 0:
            state = self._user_state_repo.insert(
                UserState(user_id=user_id, program_id=program_id, current_day=1)
            )
        else:
            state = UserState(user_id=user_id, program_id=program_id, current_day=1)

        self._progress_repo.delete_all(user_id)
        logger.info(f"Bound program {program_id} to {user_id}")
        return state


def _require_user(user_id: Optional[str]) -> str:
    user_id = str(user_id or "").strip()
    if not user_id:
        raise ValidationError("userId is required", field="userId")
    return user_id
