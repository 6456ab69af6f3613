"""
Programs router for choosing a user's program.

This router contains endpoints for:
- /programs/create - Create a custom program and bind it to the user
- /programs/built-in - Bind the shared built-in program to the user

Failures are returned as ``{"ok": false, "error": ...}`` bodies. Store errors
are prefixed with the Supabase key mode so a misconfigured anon deployment is
obvious from the client.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from api.deps import get_current_user, get_program_assignment, get_settings
from api.errors import status_for
from application.exceptions import FitStreakError, StoreReadError, StoreWriteError
from application.use_cases import ProgramAssignmentUseCase
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs",
    tags=["Programs"],
)


# =============================================================================
# Request Models
# =============================================================================


class ExerciseInput(BaseModel):
    """One exercise of a custom program, validated leniently by the use case."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    target: Optional[float | str] = None
    unit: Optional[str] = None


class CreateProgramRequest(BaseModel):
    """Request for creating a custom program."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    name: Optional[str] = None
    exercises: List[ExerciseInput] = []


def _error_response(exc: FitStreakError, settings: Settings) -> JSONResponse:
    message = exc.message
    if isinstance(exc, (StoreReadError, StoreWriteError)):
        message = f"[{settings.supabase_mode}] {message}"
    return JSONResponse(status_code=status_for(exc), content={"ok": False, "error": message})


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/create")
def create_program(
    request: CreateProgramRequest,
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    assignment: ProgramAssignmentUseCase = Depends(get_program_assignment),
    settings: Settings = Depends(get_settings),
):
    """
    Create a 100-day custom program with the same exercises every day.

    The user comes from the body (``userId``), falling back to X-User-Id.
    """
    user_id = request.user_id or x_user_id or ""
    try:
        result = assignment.create_custom_program(
            user_id,
            request.name or "",
            [exercise.model_dump() for exercise in request.exercises],
        )
    except FitStreakError as e:
        logger.error(f"Create program failed for {user_id or '<none>'}: {e.message}")
        return _error_response(e, settings)

    return {"ok": True, "programId": result.program_id}


@router.post("/built-in")
def assign_built_in(
    user_id: str = Depends(get_current_user),
    assignment: ProgramAssignmentUseCase = Depends(get_program_assignment),
    settings: Settings = Depends(get_settings),
):
    """Bind the built-in program; 404 when no usable copy exists."""
    try:
        result = assignment.assign_built_in(user_id)
    except FitStreakError as e:
        logger.error(f"Built-in assignment failed for {user_id}: {e.message}")
        return _error_response(e, settings)

    return {"ok": True, "programId": result.program_id}
