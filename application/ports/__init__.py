"""
Repository Interfaces (Ports) for the FitStreak API.

This package defines abstract interfaces that decouple the progression engine
from infrastructure (Supabase, Telegram). Implementations are provided in the
infrastructure layer; in-memory fakes live in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ProgramRepository, UserStateRepository

    class ProgramAssignmentUseCase:
        def __init__(self, program_repo: ProgramRepository, ...):
            self._program_repo = program_repo
"""

from application.ports.program_repository import ProgramRepository
from application.ports.exercise_writer import ExerciseWriter
from application.ports.user_state_repository import UserStateRepository
from application.ports.progress_repository import ProgressRepository
from application.ports.history_repository import HistoryRepository
from application.ports.subscriber_repository import SubscriberRepository
from application.ports.notifier import Notifier

__all__ = [
    # Programs
    "ProgramRepository",
    "ExerciseWriter",
    # Per-user state
    "UserStateRepository",
    "ProgressRepository",
    "HistoryRepository",
    # Messaging
    "SubscriberRepository",
    "Notifier",
]
