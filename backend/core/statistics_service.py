"""
Statistics Service for closed-day history.

This module turns the history log into the numbers shown on the stats screen:
- Completed-day streaks (current and best)
- Reps by exercise, split into steps and everything else
- The recent window (latest days by calendar date)

Everything except StatisticsService.summary is a pure function of its inputs.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from application.ports.history_repository import HistoryRepository
from backend.core.dates import compute_streaks
from domain.models.progress import DayHistoryEntry, DayHistoryExerciseEntry

logger = logging.getLogger(__name__)

STEPS_ALIASES = ("steps",)


# =============================================================================
# Pure helpers
# =============================================================================


def is_step_exercise(name: str, step_name: str = "шаги") -> bool:
    """Reserved step-exercise check: trimmed, case-insensitive."""
    normalized = (name or "").strip().casefold()
    if not normalized:
        return False
    return normalized == step_name.strip().casefold() or normalized in STEPS_ALIASES


def totals_by_exercise(entries: Iterable[DayHistoryExerciseEntry]) -> Dict[str, int]:
    """Sum reps per exercise name, largest first."""
    totals: Dict[str, int] = {}
    for entry in entries:
        totals[entry.exercise_name] = totals.get(entry.exercise_name, 0) + entry.reps_done
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def split_steps(
    entries: Iterable[DayHistoryExerciseEntry],
    step_name: str = "шаги",
) -> Tuple[int, int]:
    """
    Partition the breakdown into (steps, others).

    Returns:
        Tuple of summed reps for step exercises and for all other exercises
    """
    steps = 0
    others = 0
    for entry in entries:
        if is_step_exercise(entry.exercise_name, step_name):
            steps += entry.reps_done
        else:
            others += entry.reps_done
    return steps, others


def recent_window(
    history: Sequence[DayHistoryEntry],
    size: int = 7,
) -> List[DayHistoryEntry]:
    """Entries with the latest local dates, newest first."""
    ordered = sorted(
        history,
        key=lambda entry: (entry.local_date, entry.day_number),
        reverse=True,
    )
    return ordered[:size]


# =============================================================================
# Summary
# =============================================================================


@dataclass
class StatisticsSummary:
    """Everything the stats screen shows for one user and program."""

    total_days: int = 0
    total_reps: int = 0
    streak: int = 0
    best_streak: int = 0
    last7: List[DayHistoryEntry] = field(default_factory=list)
    latest: Optional[DayHistoryEntry] = None
    totals_by_exercise: Dict[str, int] = field(default_factory=dict)
    steps: int = 0
    others: int = 0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "totalReps": self.total_reps,
            "streak": self.streak,
            "bestStreak": self.best_streak,
            "last7": [_entry_view(entry) for entry in self.last7],
            "latest": _entry_view(self.latest) if self.latest else None,
            "totalsByExercise": self.totals_by_exercise,
            "steps": self.steps,
            "others": self.others,
        }


def _entry_view(entry: DayHistoryEntry) -> dict:
    return {
        "day": entry.day_number,
        "date": entry.local_date,
        "totalDone": entry.total_done,
        "totalTarget": entry.total_target,
        "skipped": entry.skipped,
        "completed": entry.completed,
    }


def summarize(
    history: Sequence[DayHistoryEntry],
    breakdown: Sequence[DayHistoryExerciseEntry],
    *,
    step_name: str = "шаги",
    window_size: int = 7,
) -> StatisticsSummary:
    """Build the summary from already-loaded history and breakdown rows."""
    streaks = compute_streaks(history)
    last = recent_window(history, window_size)
    steps, others = split_steps(breakdown, step_name)

    return StatisticsSummary(
        total_days=len(history),
        total_reps=sum(entry.total_done for entry in history),
        streak=streaks.current,
        best_streak=streaks.best,
        last7=last,
        latest=last[0] if last else None,
        totals_by_exercise=totals_by_exercise(breakdown),
        steps=steps,
        others=others,
    )


class StatisticsService:
    """
    Loads a user's history for a program and summarizes it.

    Usage:
        service = StatisticsService(history_repo)
        summary = service.summary("user-1", "program-7")
    """

    def __init__(
        self,
        history_repo: HistoryRepository,
        *,
        step_name: str = "шаги",
        window_size: int = 7,
        history_limit: int = 500,
        breakdown_limit: int = 10000,
    ):
        self._history_repo = history_repo
        self._step_name = step_name
        self._window_size = window_size
        self._history_limit = history_limit
        self._breakdown_limit = breakdown_limit

    def summary(self, user_id: str, program_id: Optional[str]) -> StatisticsSummary:
        """
        Summarize a user's closed days.

        A user without a program has no history, so the summary is empty.

        Raises:
            StoreReadError: History could not be read
        """
        if not program_id:
            return StatisticsSummary()

        history = self._history_repo.list_days(
            user_id, program_id, limit=self._history_limit
        )
        breakdown = self._history_repo.list_exercise_entries(
            user_id, program_id, limit=self._breakdown_limit
        )
        logger.debug(
            f"Summarizing {len(history)} days / {len(breakdown)} breakdown rows for {user_id}"
        )
        return summarize(
            history,
            breakdown,
            step_name=self._step_name,
            window_size=self._window_size,
        )
