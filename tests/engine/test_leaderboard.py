"""Tests for the chronological leaderboard fold."""

from datetime import timedelta

import pytest

from best_efforts.engine.leaderboard import (
    ChronologicalWorkouts,
    LeaderboardPolicy,
    LeaderboardState,
    analyze_workouts_for_best_efforts,
    current_bests,
    fold_workout,
    format_pr_notification,
    insert_ranked,
)
from best_efforts.engine.resolver import WindowSelection


def efforts_at(analysis, distance="400m"):
    return [e for e in analysis.best_efforts if e.distance == distance]


class TestChronologicalWorkouts:
    """Tests for date ordering of the input."""

    def test_sorts_oldest_first(self, make_run):
        runs = [make_run(1, 0, 90), make_run(2, 10, 95), make_run(3, 5, 92)]
        ordered = ChronologicalWorkouts(runs)
        assert [w.workout.id for w in ordered] == [2, 3, 1]
        assert len(ordered) == 3

    def test_same_date_keeps_input_order(self, make_run):
        runs = [make_run("b", 1, 90), make_run("a", 1, 95)]
        assert [w.workout.id for w in ChronologicalWorkouts(runs)] == ["b", "a"]

    def test_presorted_keeps_order(self, make_run):
        runs = [make_run(1, 0, 90), make_run(2, 10, 95)]
        assert [w.workout.id for w in ChronologicalWorkouts.presorted(runs)] == [1, 2]

    def test_accepts_dicts(self, today):
        raw = {
            "workout": {"id": 7, "date": today.isoformat(), "distanceMeters": 400},
            "laps": [{"lapIndex": 0, "distanceMeters": 400, "elapsedTimeSeconds": 90}],
        }
        ordered = ChronologicalWorkouts([raw])
        assert ordered[0].workout.id == 7
        assert ordered[0].laps[0].elapsed_time_seconds == 90


class TestInsertRanked:
    """Tests for ranked insertion."""

    def test_keeps_ascending_order(self, make_best):
        efforts = (make_best("400m", 85), make_best("400m", 95))
        ranked = insert_ranked(efforts, make_best("400m", 90))
        assert [e.time_seconds for e in ranked] == [85, 90, 95]

    def test_tie_goes_behind_existing(self, make_best):
        existing = make_best("400m", 90, workout_id=1)
        ranked = insert_ranked((existing,), make_best("400m", 90, workout_id=2))
        assert [e.workout_id for e in ranked] == [1, 2]

    def test_caps_size(self, make_best):
        efforts = tuple(make_best("400m", t) for t in (80, 81, 82))
        ranked = insert_ranked(efforts, make_best("400m", 79), size=3)
        assert [e.time_seconds for e in ranked] == [79, 80, 81]

    def test_slower_than_full_board_is_dropped(self, make_best):
        efforts = tuple(make_best("400m", t) for t in (80, 81, 82))
        ranked = insert_ranked(efforts, make_best("400m", 99), size=3)
        assert [e.time_seconds for e in ranked] == [80, 81, 82]


class TestFormatPrNotification:
    """Tests for PR notification text."""

    def test_with_improvement(self, make_best):
        effort = make_best("5K", 1200, meters=5000).model_copy(
            update={"improvement_seconds": 12.5}
        )
        assert format_pr_notification(effort) == "New 5K PR: 20:00 (13s faster!)"

    def test_first_ever(self, make_best):
        assert format_pr_notification(make_best("400m", 90)) == "New 400m PR: 1:30"


class TestAnalyzeWorkouts:
    """Tests for analyze_workouts_for_best_efforts."""

    def test_empty_history(self, today):
        analysis = analyze_workouts_for_best_efforts([], today=today)
        assert analysis.best_efforts == []
        assert analysis.recent_prs == []
        assert analysis.notifications == []

    def test_progression_of_prs(self, make_run, today):
        runs = [make_run(1, 100, 95), make_run(2, 90, 92), make_run(3, 80, 94)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        by_workout = {e.workout_id: e for e in efforts_at(analysis)}
        assert by_workout[1].is_pr is True
        assert by_workout[2].is_pr is True
        assert by_workout[2].improvement_seconds == 3
        assert by_workout[3].is_pr is False

    def test_ranks_are_sequential(self, make_run, today):
        runs = [make_run(i, 100 - i, 90 + (i % 4)) for i in range(6)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        board = efforts_at(analysis)
        assert [e.rank_all_time for e in board] == list(range(1, len(board) + 1))
        times = [e.time_seconds for e in board]
        assert times == sorted(times)

    def test_leaderboard_capped_at_ten(self, make_run, today):
        runs = [make_run(i, 200 - i, 80 + i) for i in range(15)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        board = efforts_at(analysis)
        assert len(board) == 10
        assert board[0].time_seconds == 80
        assert board[-1].time_seconds == 89

    def test_custom_leaderboard_size(self, make_run, today):
        runs = [make_run(i, 50 - i, 80 + i) for i in range(5)]
        analysis = analyze_workouts_for_best_efforts(
            runs, today=today, policy=LeaderboardPolicy(size=2)
        )
        assert len(efforts_at(analysis)) == 2

    def test_pr_means_faster_than_every_earlier_effort(self, make_run, today):
        times = [95, 97, 91, 93, 91, 88, 90, 88, 86]
        runs = [make_run(i, 300 - i * 10, t) for i, t in enumerate(times)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)

        flags = {e.workout_id: e.is_pr for e in efforts_at(analysis)}
        for i, t in enumerate(times):
            expected = all(t < earlier for earlier in times[:i])
            assert flags[i] is expected

    def test_input_order_does_not_matter(self, make_run, today):
        runs = [make_run(1, 30, 95), make_run(2, 20, 90), make_run(3, 10, 92)]
        forward = analyze_workouts_for_best_efforts(runs, today=today)
        backward = analyze_workouts_for_best_efforts(list(reversed(runs)), today=today)
        assert forward == backward

    def test_presorted_reverse_order_changes_pr_flags(self, make_run, today):
        """Folding newest first would call the older, slower run a PR too."""
        runs = [make_run(1, 30, 90), make_run(2, 10, 95)]
        reverse = ChronologicalWorkouts.presorted(list(reversed(runs)))

        correct = analyze_workouts_for_best_efforts(runs, today=today)
        wrong = analyze_workouts_for_best_efforts(reverse, today=today)

        correct_flags = {e.workout_id: e.is_pr for e in efforts_at(correct)}
        wrong_flags = {e.workout_id: e.is_pr for e in efforts_at(wrong)}
        assert correct_flags == {1: True, 2: False}
        assert wrong_flags == {1: True, 2: True}

    def test_repeatable(self, make_run, today):
        runs = [make_run(1, 30, 95), make_run(2, 20, 90)]
        first = analyze_workouts_for_best_efforts(runs, today=today)
        second = analyze_workouts_for_best_efforts(runs, today=today)
        assert first == second

    def test_same_day_efforts_judged_against_earlier_days(self, make_run, today):
        """Two runs on one date are both PRs against the day before."""
        runs = [make_run(0, 5, 100), make_run(1, 2, 95), make_run(2, 2, 92)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        flags = {e.workout_id: e.is_pr for e in efforts_at(analysis)}
        assert flags == {0: True, 1: True, 2: True}

    def test_tied_times_rank_earlier_first(self, make_run, today):
        runs = [make_run("early", 20, 90), make_run("late", 10, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        board = efforts_at(analysis)
        assert [(e.workout_id, e.rank_all_time) for e in board] == [("early", 1), ("late", 2)]
        assert board[1].is_pr is False

    def test_best_efforts_in_distance_order(self, make_workout, make_laps, today):
        from best_efforts.models.efforts import WorkoutWithLaps

        runs = [
            WorkoutWithLaps(workout=make_workout(1, 5), laps=make_laps([(5000, 1200)])),
            WorkoutWithLaps(workout=make_workout(2, 3), laps=make_laps([(400, 90)])),
        ]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        assert [e.distance for e in analysis.best_efforts] == ["400m", "5K"]

    def test_fastest_window_policy(self, make_workout, make_laps, today):
        from best_efforts.models.efforts import WorkoutWithLaps

        run = WorkoutWithLaps(workout=make_workout(1, 1), laps=make_laps([(400, 95), (400, 85)]))
        analysis = analyze_workouts_for_best_efforts(
            [run], today=today, policy=LeaderboardPolicy(selection=WindowSelection.FASTEST)
        )
        assert efforts_at(analysis)[0].time_seconds == 85


class TestRecentPrsAndNotifications:
    """Tests for the recent-PR and notification windows."""

    def test_recent_pr_window(self, make_run, today):
        runs = [make_run(1, 31, 100), make_run(2, 30, 95), make_run(3, 0, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        assert [e.workout_id for e in analysis.recent_prs] == [3, 2]

    def test_recent_prs_newest_first(self, make_run, today):
        runs = [make_run(1, 20, 100), make_run(2, 10, 95), make_run(3, 5, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        dates = [e.workout_date for e in analysis.recent_prs]
        assert dates == sorted(dates, reverse=True)

    def test_notification_window(self, make_run, today):
        runs = [make_run(1, 8, 100), make_run(2, 7, 95)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        assert analysis.notifications == ["New 400m PR: 1:35 (5s faster!)"]

    def test_future_workouts_not_recent(self, make_run, today):
        runs = [make_run(1, -3, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        assert len(efforts_at(analysis)) == 1
        assert analysis.recent_prs == []
        assert analysis.notifications == []

    def test_non_pr_not_reported(self, make_run, today):
        runs = [make_run(1, 40, 85), make_run(2, 1, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        assert analysis.recent_prs == []
        assert analysis.notifications == []


class TestFoldWorkout:
    """Tests for the single-step reducer."""

    def test_does_not_mutate_state(self, make_run, today):
        state = fold_workout(LeaderboardState(), make_run(1, 10, 95), today)
        before = dict(state.bests)
        fold_workout(state, make_run(2, 5, 90), today)
        assert state.bests == before
        assert state.current_bests()["400m"].time_seconds == 95

    def test_workout_without_efforts_leaves_board(self, make_run, today):
        state = fold_workout(LeaderboardState(), make_run(1, 10, 95), today)
        after = fold_workout(state, make_run(2, 5, 300, distance=1200), today)
        assert after.bests == state.bests


class TestCurrentBests:
    """Tests for extracting records from an analysis."""

    def test_rank_one_per_distance(self, make_run, today):
        runs = [make_run(1, 10, 95), make_run(2, 5, 90)]
        analysis = analyze_workouts_for_best_efforts(runs, today=today)
        bests = current_bests(analysis)
        assert bests["400m"].workout_id == 2


@pytest.mark.parametrize("days_ago", [0, 7])
def test_notification_boundaries(make_run, today, days_ago):
    analysis = analyze_workouts_for_best_efforts([make_run(1, days_ago, 90)], today=today)
    assert analysis.notifications == ["New 400m PR: 1:30"]


def test_default_today_is_used(make_run):
    from datetime import date

    run = make_run(1, 0, 90)
    run = run.model_copy(
        update={"workout": run.workout.model_copy(update={"date": date.today() - timedelta(days=1)})}
    )
    analysis = analyze_workouts_for_best_efforts([run])
    assert len(analysis.recent_prs) == 1
