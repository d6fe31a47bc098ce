"""Best efforts service.

This service handles:
- Loading a runner's workouts and laps from the store
- Running the chronological best-effort analysis over that history
- Single-workout efforts and near misses against all-time bests
- Guidance notifications when there is nothing to analyze yet
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Union

from ..config import Settings, get_settings
from ..db.database import BestEffortsDatabase
from ..engine.insights import get_best_effort_insights
from ..engine.leaderboard import (
    ChronologicalWorkouts,
    LeaderboardPolicy,
    analyze_workouts_for_best_efforts,
)
from ..engine.near_miss import find_near_misses
from ..engine.resolver import detect_best_efforts_in_workout
from ..exceptions import WorkoutNotFoundError
from ..models.efforts import (
    BestEffort,
    BestEffortsResponse,
    EffortAnalysis,
    WorkoutBestEfforts,
    WorkoutWithLaps,
)

logger = logging.getLogger(__name__)


NO_WORKOUTS_MESSAGES = [
    "No workouts found. Start logging runs to see your best efforts!",
]

NO_LAPS_MESSAGES = [
    "No lap/segment data found.",
    "Make sure your runs are synced with lap data from Strava or your watch.",
    "Laps are needed to detect efforts within your runs.",
]

NO_EFFORTS_MESSAGES = [
    "No standard distance efforts detected yet.",
    "Best efforts are found when you run close to standard distances (400m, 1mi, 5K, etc).",
    "Keep running and we'll automatically detect your PRs!",
]

NO_RECENT_PRS_MESSAGES = [
    "No recent PRs in the last 30 days.",
    "Time to chase some new personal records!",
]


class BestEffortsService:
    """Service for analyzing stored workouts for best efforts and PRs."""

    def __init__(
        self,
        db: BestEffortsDatabase,
        settings: Optional[Settings] = None,
    ):
        """Initialize the best efforts service.

        Args:
            db: Workout and lap store
            settings: Limits and windows; defaults to the cached settings
        """
        self.db = db
        self.settings = settings or get_settings()
        self.policy = LeaderboardPolicy(
            size=self.settings.leaderboard_size,
            recent_pr_days=self.settings.recent_pr_days,
            notification_days=self.settings.notification_days,
        )

    def _load_history(
        self,
        user_id: str,
        days: int,
        today: date,
    ) -> List[WorkoutWithLaps]:
        """Load workouts from the last `days` days with their laps."""
        start_date = today - timedelta(days=days)
        logger.info(f"Fetching workouts for {user_id} since {start_date.isoformat()}")

        workouts = self.db.get_workouts_since(start_date, user_id)
        if not workouts:
            return []

        laps_by_workout = self.db.get_laps_for_workouts([w.id for w in workouts], user_id)
        return [
            WorkoutWithLaps(workout=w, laps=laps_by_workout.get(str(w.id), []))
            for w in workouts
        ]

    @staticmethod
    def _bests_excluding(analysis: EffortAnalysis, workout_id: str) -> Dict[str, BestEffort]:
        """Fastest effort per distance from other workouts."""
        bests: Dict[str, BestEffort] = {}
        for effort in analysis.best_efforts:
            if str(effort.workout_id) == workout_id:
                continue
            if effort.distance not in bests:
                bests[effort.distance] = effort
        return bests

    def get_best_efforts_analysis(
        self,
        user_id: str = "default",
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> EffortAnalysis:
        """
        Analyze a runner's recent history for best efforts.

        Args:
            user_id: User identifier
            days: How far back to load workouts (defaults to settings)
            today: Evaluation date (defaults to today)

        Returns:
            EffortAnalysis, with guidance notifications when the history has
            no workouts, no laps, no efforts or no recent PRs
        """
        today = today or date.today()
        days = days if days is not None else self.settings.history_days

        history = self._load_history(user_id, days, today)
        logger.info(f"Found {len(history)} workouts for {user_id}")
        if not history:
            return EffortAnalysis(notifications=list(NO_WORKOUTS_MESSAGES))

        with_laps = [entry for entry in history if entry.laps]
        logger.info(f"{len(with_laps)} workouts have lap data")
        if not with_laps:
            return EffortAnalysis(notifications=list(NO_LAPS_MESSAGES))

        analysis = analyze_workouts_for_best_efforts(
            ChronologicalWorkouts(with_laps),
            today=today,
            policy=self.policy,
        )

        if not analysis.best_efforts:
            analysis.notifications.extend(NO_EFFORTS_MESSAGES)
        elif not analysis.recent_prs:
            analysis.notifications.extend(NO_RECENT_PRS_MESSAGES)

        logger.info(f"Found {len(analysis.best_efforts)} best efforts for {user_id}")
        return analysis

    def get_best_efforts_with_insights(
        self,
        user_id: str = "default",
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> BestEffortsResponse:
        """History analysis plus motivational insights."""
        analysis = self.get_best_efforts_analysis(user_id, days, today)
        return BestEffortsResponse(
            best_efforts=analysis.best_efforts,
            recent_prs=analysis.recent_prs,
            notifications=analysis.notifications,
            insights=get_best_effort_insights(analysis),
        )

    def get_workout_best_efforts(
        self,
        workout_id: Union[int, str],
        user_id: str = "default",
        today: Optional[date] = None,
    ) -> WorkoutBestEfforts:
        """
        Get efforts and near misses for one stored workout.

        The workout is compared against the fastest efforts of the long
        comparison history (five years by default), leaving out its own
        efforts so a record-setting run is not a near miss of itself.

        Raises:
            WorkoutNotFoundError: If the workout does not exist for the user
        """
        workout = self.db.get_workout(workout_id, user_id)
        if workout is None:
            logger.warning(f"Workout not found: {workout_id}")
            raise WorkoutNotFoundError(str(workout_id))

        laps = self.db.get_laps(workout_id, user_id)
        if not laps:
            return WorkoutBestEfforts()

        history = self.get_best_efforts_analysis(
            user_id,
            days=self.settings.comparison_history_days,
            today=today,
        )
        historical_bests = self._bests_excluding(history, str(workout.id))

        efforts = detect_best_efforts_in_workout(workout, laps, historical_bests)
        near_misses = find_near_misses(
            workout,
            laps,
            historical_bests,
            threshold_percent=self.settings.near_miss_threshold,
        )
        return WorkoutBestEfforts(efforts=efforts, near_misses=near_misses)
