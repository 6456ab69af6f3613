"""
Infrastructure Layer for the FitStreak API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
- telegram_client: Telegram Bot API notifier
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseProgramRepository,
    SupabaseUserStateRepository,
    SupabaseProgressRepository,
    SupabaseHistoryRepository,
    SupabaseSubscriberRepository,
    create_exercise_writer,
)
from infrastructure.telegram_client import TelegramNotifier

__all__ = [
    "SupabaseProgramRepository",
    "SupabaseUserStateRepository",
    "SupabaseProgressRepository",
    "SupabaseHistoryRepository",
    "SupabaseSubscriberRepository",
    "create_exercise_writer",
    "TelegramNotifier",
]
