"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports failure injection via fail(method, message)
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeStore, create_store

    # Store with the built-in program and a user bound to it
    store = create_store(user_id="u1")
    session = store.day_service().open_session("u1")
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from application.use_cases import (
    DayProgressionService,
    ProgramAssignmentUseCase,
    SendRemindersUseCase,
)
from backend.core.statistics_service import StatisticsService
from domain.models import DayHistoryEntry, Program, Subscriber

# Import all fake implementations
from tests.fakes.program_repository import FakeExerciseWriter, FakeProgramRepository
from tests.fakes.user_state_repository import FakeUserStateRepository
from tests.fakes.progress_repository import FakeProgressRepository
from tests.fakes.history_repository import FakeHistoryRepository
from tests.fakes.subscriber_repository import FakeNotifier, FakeSubscriberRepository

TEST_DATE = "2024-03-10"
BUILT_IN_NAME = "100 days v.2"
DEFAULT_EXERCISES = [
    {"name": "Push-ups", "target": 50},
    {"name": "Squats", "target": 100},
]


@dataclass
class FakeStore:
    """Every fake wired together, plus builders for the use cases."""

    programs: FakeProgramRepository = field(default_factory=FakeProgramRepository)
    states: FakeUserStateRepository = field(default_factory=FakeUserStateRepository)
    progress: FakeProgressRepository = field(default_factory=FakeProgressRepository)
    history: FakeHistoryRepository = field(default_factory=FakeHistoryRepository)
    subscribers: FakeSubscriberRepository = field(default_factory=FakeSubscriberRepository)
    notifier: FakeNotifier = field(default_factory=FakeNotifier)
    writer: Optional[Any] = None
    today: str = TEST_DATE

    def __post_init__(self):
        if self.writer is None:
            self.writer = FakeExerciseWriter(self.programs)

    def assignment(self, **kwargs) -> ProgramAssignmentUseCase:
        return ProgramAssignmentUseCase(
            self.programs, self.writer, self.states, self.progress, **kwargs
        )

    def day_service(self, **kwargs) -> DayProgressionService:
        return DayProgressionService(
            self.programs,
            self.writer,
            self.states,
            self.progress,
            self.history,
            today=lambda: self.today,
            **kwargs,
        )

    def statistics(self, **kwargs) -> StatisticsService:
        return StatisticsService(self.history, **kwargs)

    def reminders(self, *, webapp_url: Optional[str] = "https://app.example", notifier=True):
        return SendRemindersUseCase(
            self.subscribers,
            self.history,
            self.notifier if notifier else None,
            webapp_url=webapp_url,
            today=lambda: self.today,
        )


# =============================================================================
# Factory Functions
# =============================================================================


def create_store(
    *,
    user_id: Optional[str] = None,
    exercises: Sequence[Dict[str, Any]] = DEFAULT_EXERCISES,
    total_days: int = 5,
    current_day: int = 1,
) -> FakeStore:
    """
    Create a FakeStore holding the built-in program.

    Args:
        user_id: When given, the user is bound to the built-in program
        exercises: Exercises scheduled on every day
        total_days: Program length
        current_day: The bound user's current day

    Returns:
        Pre-populated FakeStore
    """
    store = FakeStore()
    program = store.programs.seed_program(
        BUILT_IN_NAME, exercises=exercises, total_days=total_days
    )
    if user_id:
        store.states.seed(user_id, program.id, current_day=current_day)
    return store


def built_in_program(store: FakeStore) -> Program:
    return store.programs.find_by_name(BUILT_IN_NAME, ownerless_only=True)[0]


def history_entry(
    day_number: int,
    total_done: int,
    total_target: int,
    *,
    user_id: str = "u1",
    program_id: str = "p1",
    local_date: Optional[str] = None,
    skipped: bool = False,
) -> DayHistoryEntry:
    """Build a history entry; the date defaults to March 2024 + day_number."""
    return DayHistoryEntry(
        user_id=user_id,
        program_id=program_id,
        day_number=day_number,
        local_date=local_date or f"2024-03-{day_number:02d}",
        total_done=total_done,
        total_target=total_target,
        skipped=skipped,
    )


def subscriber(user_id: str, chat_id: Optional[str] = None) -> Subscriber:
    return Subscriber(user_id=user_id, chat_id=chat_id or f"chat-{user_id}")


__all__ = [
    # Fakes
    "FakeProgramRepository",
    "FakeExerciseWriter",
    "FakeUserStateRepository",
    "FakeProgressRepository",
    "FakeHistoryRepository",
    "FakeSubscriberRepository",
    "FakeNotifier",
    "FakeStore",
    # Factories
    "create_store",
    "built_in_program",
    "history_entry",
    "subscriber",
    "TEST_DATE",
    "BUILT_IN_NAME",
    "DEFAULT_EXERCISES",
]
