"""
Command-line entry point.

    python -m backend.cli remind
    python -m backend.cli today
    python -m backend.cli reps <exercise_id> <value>
    python -m backend.cli close [--skip]

User-scoped commands resolve the user through IdentityResolver: the platform
id from FITSTREAK_PLATFORM_USER_ID when present, else a persisted local id.
"""
import argparse
import json
import logging
import sys

from supabase import create_client

from api.routers.days import history_view, session_view
from application.exceptions import FitStreakError
from application.use_cases import DayProgressionService, SendRemindersUseCase
from backend.identity import create_identity_resolver
from backend.settings import Settings, get_settings
from infrastructure import (
    SupabaseHistoryRepository,
    SupabaseProgramRepository,
    SupabaseProgressRepository,
    SupabaseSubscriberRepository,
    SupabaseUserStateRepository,
    TelegramNotifier,
    create_exercise_writer,
)

logger = logging.getLogger(__name__)


def _client(settings: Settings):
    if not settings.supabase_url or not settings.supabase_key:
        raise SystemExit("Error: SUPABASE_URL and a Supabase key must be set")
    return create_client(settings.supabase_url, settings.supabase_key)


def _day_service(settings: Settings) -> DayProgressionService:
    client = _client(settings)
    return DayProgressionService(
        SupabaseProgramRepository(client),
        create_exercise_writer(client),
        SupabaseUserStateRepository(client),
        SupabaseProgressRepository(client),
        SupabaseHistoryRepository(client),
        reset_code=settings.reset_confirmation_code,
    )


def _reminders(settings: Settings) -> SendRemindersUseCase:
    client = _client(settings)
    notifier = None
    if settings.telegram_bot_token:
        notifier = TelegramNotifier(
            settings.telegram_bot_token,
            api_base=settings.telegram_api_base,
            timeout=settings.telegram_timeout_seconds,
        )
    return SendRemindersUseCase(
        SupabaseSubscriberRepository(client),
        SupabaseHistoryRepository(client),
        notifier,
        webapp_url=settings.webapp_url,
    )


def run_remind(args, settings: Settings) -> dict:
    return _reminders(settings).execute().to_dict()


def run_today(args, settings: Settings) -> dict:
    user_id = create_identity_resolver(settings).resolve()
    return session_view(_day_service(settings).open_session(user_id))


def run_reps(args, settings: Settings) -> dict:
    user_id = create_identity_resolver(settings).resolve()
    days = _day_service(settings)
    session = days.open_session(user_id)
    days.add_custom_reps(session, args.exercise_id, args.value)
    return session_view(session)


def run_close(args, settings: Settings) -> dict:
    user_id = create_identity_resolver(settings).resolve()
    days = _day_service(settings)
    result = days.close_day(days.open_session(user_id), force=args.skip)
    view = session_view(result.next_session)
    view["history"] = history_view(result.history_entry)
    return view


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FitStreak 100-day tracker")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    remind = subparsers.add_parser("remind", help="Send reminders to users who have not closed today")
    remind.set_defaults(handler=run_remind)

    today = subparsers.add_parser("today", help="Show the current day")
    today.set_defaults(handler=run_today)

    reps = subparsers.add_parser("reps", help="Add (or subtract) reps for an exercise")
    reps.add_argument("exercise_id", help="Exercise id from `today`")
    reps.add_argument("value", help="Signed number of reps, e.g. 15 or -5")
    reps.set_defaults(handler=run_reps)

    close = subparsers.add_parser("close", help="Close the current day")
    close.add_argument("--skip", action="store_true", help="Log the day as skipped")
    close.set_defaults(handler=run_close)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
    )

    try:
        result = args.handler(args, get_settings())
    except FitStreakError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
