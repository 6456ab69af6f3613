"""
DaySession aggregate: the active program day plus a user's rep counts.

The session is passed explicitly to every progression operation instead of
living in ambient state. All methods here are pure reads over the session;
persistence happens in the application layer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from backend.core.dates import clamp, round_half_up
from domain.models.program import DayExercise


@dataclass(frozen=True)
class DayTotals:
    """Day progress figures.

    ``pct`` is the equal-weight mean of per-exercise completion, each clamped
    to [0, 1] before averaging, so over-completing one exercise cannot make up
    for another.
    """

    pct: int
    total_done: int
    total_target: int


@dataclass
class DaySession:
    """
    The state machine's view of "today" for one user.

    ``program_id is None`` means no program has been chosen yet. An empty
    exercise list means the day is unusable (lookup failed or the program is
    exhausted), never that it is complete.
    """

    user_id: str
    program_id: Optional[str] = None
    day_number: int = 1
    exercises: List[DayExercise] = field(default_factory=list)
    progress: Dict[str, int] = field(default_factory=dict)
    diagnostic: Optional[str] = None

    @property
    def has_program(self) -> bool:
        return self.program_id is not None

    @property
    def exercise_ids(self) -> List[str]:
        return [ex.id for ex in self.exercises]

    def exercise(self, exercise_id: str) -> Optional[DayExercise]:
        for ex in self.exercises:
            if ex.id == exercise_id:
                return ex
        return None

    def done_for(self, exercise_id: str) -> int:
        return self.progress.get(exercise_id, 0)

    def remaining_for(self, exercise: DayExercise) -> int:
        return max(exercise.target - self.done_for(exercise.id), 0)

    def is_exercise_completed(self, exercise: DayExercise) -> bool:
        return self.done_for(exercise.id) >= exercise.target

    def fraction_for(self, exercise: DayExercise) -> float:
        if exercise.target == 0:
            return 0.0
        return clamp(self.done_for(exercise.id) / exercise.target, 0.0, 1.0)

    def percent_for(self, exercise: DayExercise) -> int:
        percent = round_half_up(self.fraction_for(exercise) * 100)
        if percent == 100 and not self.is_exercise_completed(exercise):
            return 99
        return percent

    def all_completed(self) -> bool:
        return bool(self.exercises) and all(
            self.is_exercise_completed(ex) for ex in self.exercises
        )

    def totals(self) -> DayTotals:
        total_done = sum(self.done_for(ex.id) for ex in self.exercises)
        total_target = sum(ex.target for ex in self.exercises)
        if not self.exercises:
            return DayTotals(pct=0, total_done=total_done, total_target=total_target)

        mean = sum(self.fraction_for(ex) for ex in self.exercises) / len(self.exercises)
        pct = clamp(round_half_up(mean * 100), 0, 100)
        # Rounding alone could report 100 for e.g. 199/200.
        if pct == 100 and not self.all_completed():
            pct = 99
        return DayTotals(pct=pct, total_done=total_done, total_target=total_target)

    def clear_progress(self) -> None:
        self.progress = {}
