"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseProgramRepository,
        SupabaseUserStateRepository,
        create_exercise_writer,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    program_repo = SupabaseProgramRepository(client)
    state_repo = SupabaseUserStateRepository(client)
    exercise_writer = create_exercise_writer(client)
"""

from infrastructure.db.program_repository import SupabaseProgramRepository
from infrastructure.db.exercise_writer import (
    FallbackExerciseWriter,
    GenericTargetExerciseWriter,
    TargetRepsExerciseWriter,
    create_exercise_writer,
)
from infrastructure.db.user_state_repository import SupabaseUserStateRepository
from infrastructure.db.progress_repository import SupabaseProgressRepository
from infrastructure.db.history_repository import SupabaseHistoryRepository
from infrastructure.db.subscriber_repository import SupabaseSubscriberRepository

__all__ = [
    # Programs
    "SupabaseProgramRepository",

    # Exercise row shapes
    "TargetRepsExerciseWriter",
    "GenericTargetExerciseWriter",
    "FallbackExerciseWriter",
    "create_exercise_writer",

    # Per-user state
    "SupabaseUserStateRepository",
    "SupabaseProgressRepository",
    "SupabaseHistoryRepository",

    # Messaging
    "SupabaseSubscriberRepository",
]
