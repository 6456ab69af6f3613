"""
API package for the FitStreak API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_program_repo,
    get_exercise_writer,
    get_user_state_repo,
    get_progress_repo,
    get_history_repo,
    get_subscriber_repo,
    get_notifier,
    get_program_assignment,
    get_day_progression,
    get_statistics_service,
    get_send_reminders,
    get_handle_bot_update,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_program_repo",
    "get_exercise_writer",
    "get_user_state_repo",
    "get_progress_repo",
    "get_history_repo",
    "get_subscriber_repo",
    # Messaging
    "get_notifier",
    # Use cases
    "get_program_assignment",
    "get_day_progression",
    "get_statistics_service",
    "get_send_reminders",
    "get_handle_bot_update",
    # Identity
    "get_current_user",
]
