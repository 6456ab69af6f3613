"""
Application Use Cases for the FitStreak API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import (
        ProgramAssignmentUseCase,
        DayProgressionService,
        SendRemindersUseCase,
    )

    # Pick the built-in program
    assign = ProgramAssignmentUseCase(program_repo, writer, state_repo, progress_repo)
    assign.assign_built_in("user-123")

    # Work through today
    days = DayProgressionService(program_repo, writer, state_repo, progress_repo, history_repo)
    session = days.open_session("user-123")
    days.update_reps(session, session.exercise_ids[0], 10)

    # Nudge everyone who has not finished today
    report = SendRemindersUseCase(subscriber_repo, history_repo, notifier,
                                  webapp_url=url).execute()
"""

from application.use_cases.assign_program import (
    AssignProgramResult,
    ProgramAssignmentUseCase,
    coerce_target,
    normalize_exercises,
)
from application.use_cases.day_progression import (
    APPLY_PROGRAM,
    APPLY_TODAY,
    CloseDayResult,
    DayProgressionService,
    parse_custom_reps,
)
from application.use_cases.send_reminders import (
    ReminderReport,
    SendRemindersUseCase,
    distinct_recipients,
)
from application.use_cases.handle_bot_update import (
    BotUpdateResult,
    HandleBotUpdateUseCase,
)

__all__ = [
    # Program assignment
    "ProgramAssignmentUseCase",
    "AssignProgramResult",
    "coerce_target",
    "normalize_exercises",
    # Day progression
    "DayProgressionService",
    "CloseDayResult",
    "parse_custom_reps",
    "APPLY_TODAY",
    "APPLY_PROGRAM",
    # Reminders
    "SendRemindersUseCase",
    "ReminderReport",
    "distinct_recipients",
    # Bot updates
    "HandleBotUpdateUseCase",
    "BotUpdateResult",
]
