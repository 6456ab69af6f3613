"""
Local date helpers and streak computation.

Dates are handled as fixed-width ``YYYY-MM-DD`` strings in the server's local
timezone, so lexicographic order equals chronological order.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union


Number = Union[int, float]


@dataclass(frozen=True)
class Streaks:
    """Current (trailing) and best completed-day runs."""

    current: int = 0
    best: int = 0


def clamp(value: Number, minimum: Number, maximum: Number) -> Number:
    """Clamp value into [minimum, maximum]."""
    return max(minimum, min(value, maximum))


def local_iso_date(now: Optional[datetime] = None) -> str:
    """Return the local calendar date as YYYY-MM-DD."""
    if now is None:
        now = datetime.now()
    return now.date().isoformat()


def parse_local_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date (local midnight)."""
    return date.fromisoformat(value)


def diff_days(a: str, b: str) -> int:
    """Number of calendar days from b to a (negative when a is earlier)."""
    return (parse_local_date(a) - parse_local_date(b)).days


def is_completed_day(total_done: Number, total_target: Number) -> bool:
    """A day counts as completed when it had a target and met it."""
    return total_target > 0 and total_done >= total_target


def compute_streaks(history: Iterable) -> Streaks:
    """
    Walk history entries in day-number order and measure completed runs.

    Any entry that is not a completed day (including skipped days) resets the
    running counter, so ``current`` is the trailing run at the end of the
    sequence rather than the best one.

    Args:
        history: Objects exposing ``day_number``, ``total_done`` and
            ``total_target``.

    Returns:
        Streaks with the trailing run and the longest run.
    """
    ordered = sorted(history, key=lambda entry: entry.day_number)
    if not ordered:
        return Streaks()

    best = 0
    current = 0
    for entry in ordered:
        if is_completed_day(entry.total_done, entry.total_target):
            current += 1
            best = max(best, current)
        else:
            current = 0

    return Streaks(current=current, best=best)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))
