"""Best efforts API routes.

Provides:
- History analysis: ranked efforts per distance, recent PRs, notifications
  and insights
- Efforts and near misses for a single workout
"""

import logging

from fastapi import APIRouter, Depends, Query

from ..deps import get_best_efforts_service
from ...models.efforts import BestEffortsResponse, WorkoutBestEfforts
from ...services.best_efforts_service import BestEffortsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=BestEffortsResponse)
async def get_best_efforts(
    days: int = Query(365, ge=1, le=3650, description="Number of days of history to analyze"),
    user_id: str = Query("default", description="User identifier"),
    service: BestEffortsService = Depends(get_best_efforts_service),
) -> BestEffortsResponse:
    """
    Get the best-effort leaderboard for a runner.

    Returns up to ten efforts per standard distance (fastest first), PRs
    from the last 30 days, PR notifications from the last 7 days and
    motivational insights.
    """
    return service.get_best_efforts_with_insights(user_id=user_id, days=days)


@router.get("/workouts/{workout_id}", response_model=WorkoutBestEfforts)
async def get_workout_best_efforts(
    workout_id: str,
    user_id: str = Query("default", description="User identifier"),
    service: BestEffortsService = Depends(get_best_efforts_service),
) -> WorkoutBestEfforts:
    """
    Get the efforts found in one workout and its near misses.

    Responds 404 when the workout does not exist.
    """
    return service.get_workout_best_efforts(workout_id, user_id=user_id)
