"""Motivational insights derived from a best-effort analysis."""

from collections import Counter
from typing import List

from ..metrics.pace import round_half_up
from ..models.efforts import EffortAnalysis


# Reporting thresholds
STREAK_MIN_PR_DATES = 3
SPECIALIST_MIN_PRS = 2
IMPROVEMENT_MIN_SECONDS = 60


def get_best_effort_insights(analysis: EffortAnalysis) -> List[str]:
    """
    Summarize recent PRs as short encouragement strings.

    - PR streak: PRs on 3+ distinct dates in the recent window
    - Specialization: the distance with the most recent PRs (2+)
    - Cumulative improvement: more than 60 seconds saved across recent PRs

    Args:
        analysis: Output of the leaderboard fold

    Returns:
        Zero to three insight strings, in the order above
    """
    insights: List[str] = []
    recent = analysis.recent_prs

    pr_dates = {pr.workout_date for pr in recent}
    if len(pr_dates) >= STREAK_MIN_PR_DATES:
        insights.append(f"You're on fire! {len(pr_dates)} PRs in the last 30 days!")

    # most_common keeps first-seen order among equal counts
    by_distance = Counter(pr.distance for pr in recent).most_common(1)
    if by_distance and by_distance[0][1] >= SPECIALIST_MIN_PRS:
        distance, count = by_distance[0]
        insights.append(f"{distance} specialist! {count} PRs at this distance recently.")

    total_improvement = sum(pr.improvement_seconds or 0 for pr in recent)
    if total_improvement > IMPROVEMENT_MIN_SECONDS:
        insights.append(
            f"You've saved {round_half_up(total_improvement)} seconds across all PRs. "
            "Consistent progress!"
        )

    return insights
