"""
Router package for the FitStreak API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- programs: Custom program creation and built-in program assignment
- days: Today's exercises, rep counters, close/skip/reset, exercise edits
- stats: Streaks and totals from the history log
- telegram: Bot webhook and the reminder batch trigger
"""

from api.routers.health import router as health_router
from api.routers.programs import router as programs_router
from api.routers.days import router as days_router
from api.routers.stats import router as stats_router
from api.routers.telegram import router as telegram_router

__all__ = [
    "health_router",
    "programs_router",
    "days_router",
    "stats_router",
    "telegram_router",
]
