"""
Stats router.

- /stats - Streaks, totals and the recent window for the user's program
"""

from fastapi import APIRouter, Depends

from api.deps import get_current_user, get_statistics_service, get_user_state_repo
from api.errors import to_http_exception
from application.exceptions import FitStreakError
from application.ports import UserStateRepository
from backend.core.statistics_service import StatisticsService

router = APIRouter(
    tags=["Stats"],
)


@router.get("/stats")
def get_stats(
    user_id: str = Depends(get_current_user),
    state_repo: UserStateRepository = Depends(get_user_state_repo),
    statistics: StatisticsService = Depends(get_statistics_service),
):
    """Summary for the user's active program (empty when none is chosen)."""
    try:
        state = state_repo.get(user_id)
        program_id = state.program_id if state else None
        summary = statistics.summary(user_id, program_id)
    except FitStreakError as e:
        raise to_http_exception(e)

    payload = summary.to_dict()
    payload["programId"] = program_id
    return payload
