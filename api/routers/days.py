"""
Days router for working through the current program day.

This router contains endpoints for:
- /days/today - Current day with per-exercise progress
- /days/reps, /days/reps/custom - Change an exercise counter
- /days/close, /days/skip - Log the day in history and advance
- /days/reset - Wipe progress and history (confirmation code required)
- /days/exercises/{exercise_id} - Rename / retarget an exercise

Every mutating endpoint answers with the refreshed day view.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from api.deps import get_current_user, get_day_progression
from api.errors import to_http_exception
from application.exceptions import FitStreakError
from application.use_cases import APPLY_TODAY, DayProgressionService
from domain.models import DayHistoryEntry, DaySession

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/days",
    tags=["Days"],
)


# =============================================================================
# Request Models
# =============================================================================


class RepsRequest(BaseModel):
    """Apply a signed delta to an exercise counter."""
    model_config = ConfigDict(populate_by_name=True)

    exercise_id: str = Field(..., alias="exerciseId")
    delta: int


class CustomRepsRequest(BaseModel):
    """Apply a typed-in delta; unusable text is ignored."""
    model_config = ConfigDict(populate_by_name=True)

    exercise_id: str = Field(..., alias="exerciseId")
    value: Optional[str] = None


class ResetRequest(BaseModel):
    code: str = ""


class EditExerciseRequest(BaseModel):
    """Rename an exercise and change its target, today only or program-wide."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    target: float | str
    apply_to: Literal["today", "program"] = Field(default=APPLY_TODAY, alias="applyTo")


# =============================================================================
# Views
# =============================================================================


def session_view(session: DaySession) -> dict:
    """Render a DaySession as the client's day payload."""
    exercises = []
    for ex in session.exercises:
        exercises.append({
            "id": ex.id,
            "name": ex.name,
            "target": ex.target,
            "unit": ex.unit.value,
            "sortOrder": ex.sort_order,
            "done": session.done_for(ex.id),
            "remaining": session.remaining_for(ex),
            "percent": session.percent_for(ex),
            "completed": session.is_exercise_completed(ex),
        })

    totals = session.totals()
    return {
        "day": session.day_number,
        "programId": session.program_id,
        "exercises": exercises,
        "pct": totals.pct,
        "totalDone": totals.total_done,
        "totalTarget": totals.total_target,
        "allCompleted": session.all_completed(),
        "diagnostic": session.diagnostic,
    }


def history_view(entry: DayHistoryEntry) -> dict:
    return {
        "day": entry.day_number,
        "date": entry.local_date,
        "totalDone": entry.total_done,
        "totalTarget": entry.total_target,
        "skipped": entry.skipped,
    }


def _open(days: DayProgressionService, user_id: str) -> DaySession:
    try:
        return days.open_session(user_id)
    except FitStreakError as e:
        raise to_http_exception(e)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/today")
def get_today(
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    """Current day for the user; an empty exercise list carries a diagnostic."""
    return session_view(_open(days, user_id))


@router.post("/reps")
def update_reps(
    request: RepsRequest,
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    session = _open(days, user_id)
    try:
        days.update_reps(session, request.exercise_id, request.delta)
    except FitStreakError as e:
        raise to_http_exception(e)
    return session_view(session)


@router.post("/reps/custom")
def add_custom_reps(
    request: CustomRepsRequest,
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    session = _open(days, user_id)
    try:
        days.add_custom_reps(session, request.exercise_id, request.value)
    except FitStreakError as e:
        raise to_http_exception(e)
    return session_view(session)


def _close(days: DayProgressionService, user_id: str, force: bool) -> dict:
    session = _open(days, user_id)
    try:
        result = days.close_day(session, force=force)
    except FitStreakError as e:
        logger.error(f"Close day failed for {user_id}: {e.message}")
        raise to_http_exception(e)

    view = session_view(result.next_session)
    view["history"] = history_view(result.history_entry)
    return view


@router.post("/close")
def close_day(
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    """Close a completed day; 400 while any exercise is below target."""
    return _close(days, user_id, force=False)


@router.post("/skip")
def skip_day(
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    """Log the day as skipped and move on regardless of progress."""
    return _close(days, user_id, force=True)


@router.post("/reset")
def reset_progress(
    request: ResetRequest,
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    session = _open(days, user_id)
    try:
        session = days.reset(session, request.code)
    except FitStreakError as e:
        raise to_http_exception(e)
    return session_view(session)


@router.patch("/exercises/{exercise_id}")
def edit_exercise(
    exercise_id: str,
    request: EditExerciseRequest,
    user_id: str = Depends(get_current_user),
    days: DayProgressionService = Depends(get_day_progression),
):
    session = _open(days, user_id)
    try:
        days.edit_exercise(
            session,
            exercise_id,
            request.name,
            request.target,
            apply_to=request.apply_to,
        )
    except FitStreakError as e:
        raise to_http_exception(e)
    return session_view(session)
