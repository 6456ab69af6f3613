"""
Supabase Program Repository Implementation.

Implements the ProgramRepository protocol against:
- programs: program metadata (built-in rows have owner_user_id = null)
- program_days: one row per day, unique (program_id, day_number)
- day_exercises: day-scoped exercise rows (read side only; writes go through
  the ExerciseWriter strategies)
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import StoreReadError, StoreWriteError
from domain.models.program import DayExercise, Program, ProgramDay
from infrastructure.db.errors import store_message

logger = logging.getLogger(__name__)


def program_insert_payloads(
    name: str,
    owner_user_id: Optional[str],
    total_days: int,
) -> List[Dict[str, Any]]:
    """
    Program row shapes to try, most specific first.

    Older stores lack ``days_count`` or ``is_public`` and some reject an owner
    id that is not a registered user, so progressively smaller rows are tried.
    """
    payloads = [
        {"name": name, "owner_user_id": owner_user_id, "is_public": False, "days_count": total_days},
        {"name": name, "owner_user_id": owner_user_id, "is_public": False},
        {"name": name, "owner_user_id": None, "is_public": False, "days_count": total_days},
        {"name": name, "owner_user_id": None, "is_public": False},
        {"name": name, "owner_user_id": owner_user_id},
        {"name": name},
    ]
    unique: List[Dict[str, Any]] = []
    for payload in payloads:
        if payload not in unique:
            unique.append(payload)
    return unique


class SupabaseProgramRepository:
    """
    Supabase implementation of ProgramRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def find_by_name(
        self,
        name: str,
        *,
        ownerless_only: bool = False,
    ) -> List[Program]:
        """Find programs by exact name, newest (highest id) first."""
        try:
            query = self._client.table("programs").select("*").eq("name", name)
            if ownerless_only:
                query = query.is_("owner_user_id", "null")
            result = query.order("id", desc=True).execute()
        except Exception as e:
            logger.error(f"Error searching programs named {name!r}: {e}")
            raise StoreReadError(f"programs: {store_message(e)}") from e

        return [Program.from_row(row) for row in result.data or []]

    def get(self, program_id: str) -> Optional[Program]:
        """Get a program by id."""
        try:
            result = self._client.table("programs") \
                .select("*") \
                .eq("id", program_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching program {program_id}: {e}")
            raise StoreReadError(f"programs: {store_message(e)}") from e

        rows = result.data or []
        return Program.from_row(rows[0]) if rows else None

    def create(
        self,
        name: str,
        owner_user_id: Optional[str],
        *,
        total_days: int,
    ) -> Program:
        """Insert a program, trying each known row shape until one is accepted."""
        last_error: Optional[str] = None

        for payload in program_insert_payloads(name, owner_user_id, total_days):
            try:
                result = self._client.table("programs").insert(payload).execute()
            except Exception as e:
                last_error = store_message(e)
                logger.warning(f"Program insert rejected ({sorted(payload)}): {last_error}")
                continue

            rows = result.data or []
            if rows and rows[0].get("id") is not None:
                row = {**payload, **rows[0]}
                row.setdefault("days_count", total_days)
                return Program.from_row(row)

        raise StoreWriteError(f"failed to create program: {last_error or 'unknown'}")

    def create_days(self, program_id: str, total_days: int) -> List[ProgramDay]:
        """Insert day rows 1..total_days in a single batch."""
        rows = [
            {"program_id": program_id, "day_number": day_number}
            for day_number in range(1, total_days + 1)
        ]
        try:
            result = self._client.table("program_days").insert(rows).execute()
        except Exception as e:
            logger.error(f"Error creating days for program {program_id}: {e}")
            raise StoreWriteError(f"program_days: {store_message(e)}") from e

        if not result.data:
            raise StoreWriteError("failed to create program days")

        days = [
            ProgramDay(id=row["id"], program_id=program_id, day_number=row["day_number"])
            for row in result.data
        ]
        return sorted(days, key=lambda d: d.day_number)

    def get_day(self, program_id: str, day_number: int) -> Optional[ProgramDay]:
        """Get one day of a program."""
        try:
            result = self._client.table("program_days") \
                .select("id, program_id, day_number") \
                .eq("program_id", program_id) \
                .eq("day_number", day_number) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching day {day_number} of program {program_id}: {e}")
            raise StoreReadError(f"program_days: {store_message(e)}") from e

        rows = result.data or []
        return ProgramDay(**rows[0]) if rows else None

    def list_day_ids(self, program_id: str) -> List[str]:
        """Ids of all days of a program."""
        try:
            result = self._client.table("program_days") \
                .select("id") \
                .eq("program_id", program_id) \
                .execute()
        except Exception as e:
            logger.error(f"Error listing days of program {program_id}: {e}")
            raise StoreReadError(f"program_days: {store_message(e)}") from e

        return [str(row["id"]) for row in result.data or []]

    def get_day_exercises(self, program_day_id: str) -> List[DayExercise]:
        """Exercises for a day ordered by sort_order (either row shape)."""
        try:
            result = self._client.table("day_exercises") \
                .select("*") \
                .eq("program_day_id", program_day_id) \
                .order("sort_order") \
                .execute()
        except Exception as e:
            logger.error(f"Error fetching exercises of day {program_day_id}: {e}")
            raise StoreReadError(f"day_exercises: {store_message(e)}") from e

        return [DayExercise.from_row(row) for row in result.data or []]
