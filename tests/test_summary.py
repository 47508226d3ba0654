"""
Unit tests for dashboard summaries.

Usage:
    pytest tests/test_summary.py -v
"""
import pytest
from datetime import date, datetime

from conftest import make_entry, make_meal, make_water, make_workout
from fitness_metrics.goals import GoalStatus
from fitness_metrics.models import TrendDirection
from fitness_metrics.summary import (
    daily_goals,
    estimate_calories_burned,
    progress_summary,
    progress_trends,
    user_stats,
    weekly_stats,
)


def march(day: int) -> date:
    return date(2025, 3, day)


TODAY = march(12)


@pytest.fixture
def workouts():
    return [
        make_workout(1, march(3), duration=40),
        make_workout(2, march(4), duration=50),
        make_workout(3, march(10), duration=45),
        make_workout(4, march(11)),
        make_workout(5, march(12), duration=30),
        make_workout(6, status="scheduled", scheduled=march(14)),
    ]


@pytest.fixture
def meals():
    return [
        make_meal(1, march(4), 1200),
        make_meal(2, march(11), 650),
        make_meal(3, march(12), 500),
        make_meal(4, march(12), 700, completed=False),
    ]


@pytest.fixture
def entries():
    return [
        make_entry(1, march(1), weight=80),
        make_entry(2, march(8), weight=78),
        make_entry(3, march(12), steps=8000),
    ]


class TestCaloriesBurned:
    def test_default_duration_for_missing(self, workouts):
        # 40 + 50 + 45 + 30 (default) + 30 minutes at 10 kcal/min
        assert estimate_calories_burned(workouts) == 1950

    def test_only_completed(self):
        workouts = [make_workout(1, status="scheduled", scheduled=TODAY, duration=60)]
        assert estimate_calories_burned(workouts) == 0


class TestProgressSummary:
    """Headline numbers for the progress page."""

    def test_summary(self, workouts, meals, entries):
        summary = progress_summary(workouts, meals, entries, TODAY)

        assert summary.workouts_completed == 5
        assert summary.calories_burned == 1950
        assert summary.calories_consumed == 500
        assert summary.calories_remaining == 1500
        assert summary.weight_change == -2
        assert summary.streak_days == 3

    def test_over_target_goes_negative(self):
        meals = [make_meal(1, TODAY, 2300)]
        summary = progress_summary([], meals, [], TODAY, daily_calorie_target=2000)
        assert summary.calories_remaining == -300

    def test_inputs_are_not_mutated(self, workouts, meals, entries):
        before = [r.model_dump() for r in workouts + meals + entries]
        progress_summary(workouts, meals, entries, TODAY)
        progress_trends(entries, workouts, meals, TODAY)
        assert [r.model_dump() for r in workouts + meals + entries] == before


class TestProgressTrends:
    """Weight by weigh-ins, workouts and nutrition by trailing weeks."""

    def test_trends(self, workouts, meals, entries):
        trends = progress_trends(entries, workouts, meals, TODAY)

        # Latest entry has no weight; the two latest weigh-ins are compared
        assert trends.weight == TrendDirection.DOWN
        # Mar 6-12: 3 workouts; Feb 27 - Mar 5: 2
        assert trends.workouts == TrendDirection.UP
        # 1150 kcal eaten this window vs 1200 before
        assert trends.nutrition == TrendDirection.DOWN
        assert trends.to_dict() == {"weight": "down", "workouts": "up", "nutrition": "down"}

    def test_no_data_is_stable(self):
        trends = progress_trends([], [], [], TODAY)
        assert trends.to_dict() == {"weight": "stable", "workouts": "stable", "nutrition": "stable"}


class TestUserStats:
    """Profile statistics with Sunday-start weeks."""

    def test_stats(self, workouts, meals):
        stats = user_stats(workouts, meals, TODAY)

        assert stats.workouts_completed == 5
        assert stats.current_streak == 3
        assert stats.longest_streak == 3
        assert stats.workouts_this_week == 3
        assert stats.goal_progress == 75
        assert stats.meal_adherence == 75
        assert stats.total_calories_burned == 1950

    def test_goal_progress_capped(self):
        workouts = [make_workout(i, march(8 + i)) for i in range(1, 5)]
        workouts.append(make_workout(5, march(12), scheduled=march(12)))
        stats = user_stats(workouts, [], TODAY, weekly_goal=4)

        assert stats.workouts_this_week == 5
        assert stats.goal_progress == 100
        assert stats.meal_adherence == 100


class TestWeeklyStats:
    def test_trailing_seven_days(self, workouts, meals):
        stats = weekly_stats(workouts, meals, TODAY)

        assert stats.workouts_this_week == 3
        assert stats.calories_burned == 1050
        assert stats.meal_adherence == 67
        assert stats.goal_progress == 75


class TestRecordsAfterAsOf:
    """Records dated after as_of do not leak into a past day's numbers."""

    @pytest.fixture
    def later_records(self):
        workouts = [make_workout(1, march(10), duration=30), make_workout(2, march(20), duration=30)]
        entries = [make_entry(1, march(1), weight=180), make_entry(2, march(25), weight=170)]
        meals = [make_meal(1, march(11), 500), make_meal(2, march(20), 400, completed=False)]
        return workouts, meals, entries

    def test_progress_summary(self, later_records):
        workouts, meals, entries = later_records
        summary = progress_summary(workouts, meals, entries, TODAY)

        assert summary.workouts_completed == 1
        assert summary.calories_burned == 300
        assert summary.weight_change == 0
        assert summary.streak_days == 0

    def test_user_stats(self, later_records):
        workouts, meals, _ = later_records
        stats = user_stats(workouts, meals, TODAY)

        assert stats.workouts_completed == 1
        assert stats.longest_streak == 1
        assert stats.total_calories_burned == 300
        assert stats.meal_adherence == 100

    def test_weight_trend(self, later_records):
        workouts, meals, entries = later_records
        entries.append(make_entry(3, march(8), weight=182))

        assert progress_trends(entries, workouts, meals, TODAY).weight == TrendDirection.UP


class TestDailyGoals:
    """Goal status from the day's logged values."""

    @pytest.fixture
    def logged(self, workouts):
        entries = [
            make_entry(1, march(11), sleepHours=8, steps=12000),
            make_entry(2, TODAY, sleepHours=6.5, steps=3000),
        ]
        intakes = [make_water(1, TODAY, 2600)]
        return entries, intakes, workouts

    def test_values_from_the_day(self, logged):
        entries, intakes, workouts = logged
        by_metric = {g.goal.metric: g for g in daily_goals(entries, intakes, workouts, TODAY)}

        assert by_metric["steps"].current_value == 3000
        assert by_metric["water"].status == GoalStatus.ACHIEVED
        assert by_metric["sleep"].current_value == 6.5
        assert by_metric["workouts"].current_value == 3
        assert by_metric["steps"].status == GoalStatus.IN_PROGRESS

    def test_evening_flags_lagging_goals(self, logged):
        entries, intakes, workouts = logged
        results = daily_goals(entries, intakes, workouts, TODAY, at=datetime(2025, 3, 12, 19, 0))
        by_metric = {g.goal.metric: g for g in results}

        assert by_metric["steps"].status == GoalStatus.AT_RISK
        assert by_metric["sleep"].status == GoalStatus.IN_PROGRESS
        assert by_metric["workouts"].status == GoalStatus.IN_PROGRESS

    def test_sleep_from_another_night_does_not_count(self, workouts):
        entries = [make_entry(1, march(11), sleepHours=8)]
        by_metric = {g.goal.metric: g for g in daily_goals(entries, [], workouts, TODAY)}

        assert by_metric["sleep"].current_value == 0
        assert by_metric["sleep"].status == GoalStatus.NOT_STARTED
