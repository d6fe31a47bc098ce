"""
Chronological leaderboard tracker.

Folds a runner's workouts oldest to newest into a per-distance leaderboard
(fastest first, capped). Whether an effort is a PR depends only on workouts
dated strictly before it, so the input order matters. ChronologicalWorkouts
makes that ordering part of the type: its constructor sorts by date.

The fold is an explicit reducer: ``fold_workout(state, item) -> state``
never mutates its input state.
"""

import bisect
import logging
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..metrics.pace import round_half_up
from ..models.distances import StandardDistance
from ..models.efforts import BestEffort, EffortAnalysis, WorkoutWithLaps
from .resolver import WindowSelection, detect_best_efforts_in_workout

logger = logging.getLogger(__name__)


DEFAULT_LEADERBOARD_SIZE = 10
DEFAULT_RECENT_PR_DAYS = 30
DEFAULT_NOTIFICATION_DAYS = 7

WorkoutInput = Union[WorkoutWithLaps, Mapping[str, Any]]


def _coerce(item: WorkoutInput) -> WorkoutWithLaps:
    if isinstance(item, WorkoutWithLaps):
        return item
    return WorkoutWithLaps.model_validate(item)


class ChronologicalWorkouts(SequenceABC):
    """Workouts ordered oldest first.

    Sorting is stable, so workouts sharing a date keep their input order.
    """

    def __init__(self, workouts: Iterable[WorkoutInput] = ()):
        items = [_coerce(w) for w in workouts]
        self._items: Tuple[WorkoutWithLaps, ...] = tuple(
            sorted(items, key=lambda w: w.workout.date)
        )

    @classmethod
    def presorted(cls, workouts: Iterable[WorkoutInput]) -> "ChronologicalWorkouts":
        """Wrap workouts in exactly the given order, without sorting.

        Only for callers that already hold date-ordered data, or that want to
        see what the fold does with some other order.
        """
        instance = cls.__new__(cls)
        instance._items = tuple(_coerce(w) for w in workouts)
        return instance

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ChronologicalWorkouts({len(self._items)} workouts)"


@dataclass(frozen=True)
class LeaderboardPolicy:
    """Tunable limits for the fold."""
    size: int = DEFAULT_LEADERBOARD_SIZE
    recent_pr_days: int = DEFAULT_RECENT_PR_DAYS
    notification_days: int = DEFAULT_NOTIFICATION_DAYS
    selection: WindowSelection = WindowSelection.FIRST


@dataclass(frozen=True)
class LeaderboardState:
    """Accumulated leaderboard after some prefix of the history."""
    bests: Mapping[str, Tuple[BestEffort, ...]] = field(default_factory=dict)
    recent_prs: Tuple[BestEffort, ...] = ()
    notifications: Tuple[str, ...] = ()
    # Bests as of the start of baseline_date; PRs are judged against these
    baseline: Mapping[str, BestEffort] = field(default_factory=dict)
    baseline_date: Optional[date] = None

    def current_bests(self) -> Dict[str, BestEffort]:
        """Fastest effort so far for each distance."""
        return {name: efforts[0] for name, efforts in self.bests.items() if efforts}


def insert_ranked(
    efforts: Tuple[BestEffort, ...],
    effort: BestEffort,
    size: int = DEFAULT_LEADERBOARD_SIZE,
) -> Tuple[BestEffort, ...]:
    """
    Insert an effort keeping ascending time order, then cap the list.

    The effort goes before the first strictly slower entry, so an equal time
    ranks behind the effort that set it first.
    """
    times = [e.time_seconds for e in efforts]
    position = bisect.bisect_right(times, effort.time_seconds)
    ranked = efforts[:position] + (effort,) + efforts[position:]
    return ranked[:size]


def format_pr_notification(effort: BestEffort) -> str:
    """Phrase a PR announcement."""
    if effort.improvement_seconds and effort.improvement_seconds > 0:
        return (
            f"New {effort.distance} PR: {effort.time_formatted} "
            f"({round_half_up(effort.improvement_seconds)}s faster!)"
        )
    return f"New {effort.distance} PR: {effort.time_formatted}"


def fold_workout(
    state: LeaderboardState,
    item: WorkoutInput,
    today: date,
    policy: LeaderboardPolicy = LeaderboardPolicy(),
) -> LeaderboardState:
    """
    Fold one workout into the leaderboard.

    Args:
        state: Leaderboard built from the workouts before this one
        item: The next workout and its laps
        today: Evaluation date for the recent-PR and notification windows
        policy: Size and window limits

    Returns:
        A new state; ``state`` is left untouched
    """
    entry = _coerce(item)
    workout_date = entry.workout.date
    if workout_date != state.baseline_date:
        state = replace(state, baseline=state.current_bests(), baseline_date=workout_date)

    efforts = detect_best_efforts_in_workout(
        entry.workout,
        entry.laps,
        state.baseline,
        selection=policy.selection,
    )
    if not efforts:
        return state

    bests = dict(state.bests)
    recent_prs = list(state.recent_prs)
    notifications = list(state.notifications)
    days_since = (today - workout_date).days

    for effort in efforts:
        bests[effort.distance] = insert_ranked(
            bests.get(effort.distance, ()), effort, policy.size
        )

        if not effort.is_pr:
            continue
        logger.debug(
            f"PR at {effort.distance}: {effort.time_formatted} "
            f"(workout {effort.workout_id}, {effort.workout_date})"
        )
        if 0 <= days_since <= policy.recent_pr_days:
            recent_prs.append(effort)
        if 0 <= days_since <= policy.notification_days:
            notifications.append(format_pr_notification(effort))

    return replace(
        state,
        bests=bests,
        recent_prs=tuple(recent_prs),
        notifications=tuple(notifications),
    )


def build_analysis(state: LeaderboardState) -> EffortAnalysis:
    """Assign final ranks and package the state as an EffortAnalysis."""
    best_efforts: List[BestEffort] = []
    for distance in StandardDistance:
        for rank, effort in enumerate(state.bests.get(distance.display_name, ()), start=1):
            best_efforts.append(effort.model_copy(update={"rank_all_time": rank}))

    recent_prs = sorted(state.recent_prs, key=lambda e: e.workout_date, reverse=True)

    return EffortAnalysis(
        best_efforts=best_efforts,
        recent_prs=recent_prs,
        notifications=list(state.notifications),
    )


def analyze_workouts_for_best_efforts(
    workouts: Union[ChronologicalWorkouts, Iterable[WorkoutInput]],
    today: Optional[date] = None,
    policy: LeaderboardPolicy = LeaderboardPolicy(),
) -> EffortAnalysis:
    """
    Analyze a runner's full history for best efforts and PRs.

    The caller must supply every relevant prior workout: PR flags are only
    as good as the history they are folded over. Plain iterables are sorted
    by date on entry; a ChronologicalWorkouts is used as-is.

    Args:
        workouts: Workouts with their laps
        today: Evaluation date for recent windows (defaults to today)
        policy: Leaderboard size and window limits

    Returns:
        Ranked efforts per distance, recent PRs and notifications
    """
    ordered = (
        workouts if isinstance(workouts, ChronologicalWorkouts)
        else ChronologicalWorkouts(workouts)
    )
    today = today or date.today()

    state = LeaderboardState()
    for item in ordered:
        state = fold_workout(state, item, today, policy)

    analysis = build_analysis(state)
    logger.debug(
        f"Analyzed {len(ordered)} workouts: {len(analysis.best_efforts)} efforts, "
        f"{len(analysis.recent_prs)} recent PRs"
    )
    return analysis


def current_bests(analysis: EffortAnalysis) -> Dict[str, BestEffort]:
    """Rank-1 effort per distance from a finished analysis."""
    return {
        effort.distance: effort
        for effort in analysis.best_efforts
        if effort.rank_all_time == 1
    }
