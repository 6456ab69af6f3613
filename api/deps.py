"""
FastAPI Dependency Providers for the FitStreak API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with in-memory fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Use case providers compose repositories with settings
- The caller identity comes from the X-User-Id header

Usage in routers:
    from api.deps import get_current_user, get_day_progression
    from application.use_cases import DayProgressionService

    @router.get("/days/today")
    def today(
        user_id: str = Depends(get_current_user),
        days: DayProgressionService = Depends(get_day_progression),
    ):
        return days.open_session(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_progress_repo] = lambda: FakeProgressRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ExerciseWriter,
    HistoryRepository,
    Notifier,
    ProgramRepository,
    ProgressRepository,
    SubscriberRepository,
    UserStateRepository,
)

# Use cases
from application.use_cases import (
    DayProgressionService,
    HandleBotUpdateUseCase,
    ProgramAssignmentUseCase,
    SendRemindersUseCase,
)
from backend.core.statistics_service import StatisticsService

# Concrete implementations
from infrastructure import (
    SupabaseHistoryRepository,
    SupabaseProgramRepository,
    SupabaseProgressRepository,
    SupabaseSubscriberRepository,
    SupabaseUserStateRepository,
    TelegramNotifier,
    create_exercise_writer,
)

from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings. The service
    role key is preferred over the anon key. Returns None if credentials are
    not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_program_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramRepository:
    """Get ProgramRepository implementation."""
    return SupabaseProgramRepository(client)


def get_exercise_writer(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseWriter:
    """
    Get the ExerciseWriter.

    Returns the fallback writer that tries the target_reps row shape first
    and the generic target/unit shape second.
    """
    return create_exercise_writer(client)


def get_user_state_repo(
    client: Client = Depends(get_supabase_client_required),
) -> UserStateRepository:
    """Get UserStateRepository implementation."""
    return SupabaseUserStateRepository(client)


def get_progress_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgressRepository:
    """Get ProgressRepository implementation."""
    return SupabaseProgressRepository(client)


def get_history_repo(
    client: Client = Depends(get_supabase_client_required),
) -> HistoryRepository:
    """Get HistoryRepository implementation."""
    return SupabaseHistoryRepository(client)


def get_subscriber_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SubscriberRepository:
    """Get SubscriberRepository implementation."""
    return SupabaseSubscriberRepository(client)


# =============================================================================
# Messaging Provider
# =============================================================================


def get_notifier(
    settings: Settings = Depends(get_settings),
) -> Optional[Notifier]:
    """
    Get the Telegram notifier.

    Returns None when no bot token is configured; use cases report the
    missing configuration per recipient instead of failing outright.
    """
    if not settings.telegram_bot_token:
        return None
    return TelegramNotifier(
        settings.telegram_bot_token,
        api_base=settings.telegram_api_base,
        timeout=settings.telegram_timeout_seconds,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_program_assignment(
    program_repo: ProgramRepository = Depends(get_program_repo),
    exercise_writer: ExerciseWriter = Depends(get_exercise_writer),
    user_state_repo: UserStateRepository = Depends(get_user_state_repo),
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    settings: Settings = Depends(get_settings),
) -> ProgramAssignmentUseCase:
    """Get ProgramAssignmentUseCase with injected dependencies."""
    return ProgramAssignmentUseCase(
        program_repo,
        exercise_writer,
        user_state_repo,
        progress_repo,
        built_in_name=settings.built_in_program_name,
        program_days=settings.program_days,
    )


def get_day_progression(
    program_repo: ProgramRepository = Depends(get_program_repo),
    exercise_writer: ExerciseWriter = Depends(get_exercise_writer),
    user_state_repo: UserStateRepository = Depends(get_user_state_repo),
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    history_repo: HistoryRepository = Depends(get_history_repo),
    settings: Settings = Depends(get_settings),
) -> DayProgressionService:
    """Get DayProgressionService with injected dependencies."""
    return DayProgressionService(
        program_repo,
        exercise_writer,
        user_state_repo,
        progress_repo,
        history_repo,
        reset_code=settings.reset_confirmation_code,
    )


def get_statistics_service(
    history_repo: HistoryRepository = Depends(get_history_repo),
    settings: Settings = Depends(get_settings),
) -> StatisticsService:
    """Get StatisticsService with injected dependencies."""
    return StatisticsService(
        history_repo,
        step_name=settings.step_exercise_name,
        window_size=settings.recent_window_size,
        history_limit=settings.history_limit,
        breakdown_limit=settings.breakdown_limit,
    )


def get_send_reminders(
    subscriber_repo: SubscriberRepository = Depends(get_subscriber_repo),
    history_repo: HistoryRepository = Depends(get_history_repo),
    notifier: Optional[Notifier] = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> SendRemindersUseCase:
    """Get SendRemindersUseCase with injected dependencies."""
    return SendRemindersUseCase(
        subscriber_repo,
        history_repo,
        notifier,
        webapp_url=settings.webapp_url,
    )


def get_handle_bot_update(
    subscriber_repo: SubscriberRepository = Depends(get_subscriber_repo),
    notifier: Optional[Notifier] = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> HandleBotUpdateUseCase:
    """Get HandleBotUpdateUseCase with injected dependencies."""
    return HandleBotUpdateUseCase(
        subscriber_repo,
        notifier,
        webapp_url=settings.webapp_url,
    )


# =============================================================================
# Identity Provider
# =============================================================================


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> str:
    """
    Get the caller's user id from the X-User-Id header.

    The id is the client's persisted local identifier (or the Telegram user
    id inside the bot's web app). It is an identifier, not a credential.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return user_id
