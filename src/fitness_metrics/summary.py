"""
Dashboard summaries.

Combines workouts, meals and progress entries into the rollups shown on
the dashboard and profile pages.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .dates import DateLike, to_day
from .goals import (
    DEFAULT_GOALS,
    GoalDefinition,
    GoalProgress,
    GoalStatus,
    capped_percent,
    evaluate_goal,
)
from .models import MealRecord, ProgressEntry, TrendDirection, WaterIntakeEntry, WorkoutRecord
from .nutrition import DEFAULT_DAILY_CALORIES, adherence, calories_consumed
from .progress import sleep_log, steps_data, trend, water_data, weight_change
from .streaks import (
    completed_workout_dates,
    current_streak,
    longest_streak,
    periodic_count,
    start_of_week,
    trailing_window,
)

logger = logging.getLogger(__name__)

DEFAULT_WEEKLY_WORKOUT_GOAL = 4
DEFAULT_KCAL_PER_WORKOUT_MINUTE = 10
DEFAULT_WORKOUT_DURATION = 30  # minutes, when a completed workout has none


@dataclass(frozen=True)
class ProgressSummary:
    """Headline numbers for the progress page."""

    workouts_completed: int
    calories_burned: float
    calories_consumed: float
    calories_remaining: float
    weight_change: float
    streak_days: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "workouts_completed": self.workouts_completed,
            "calories_burned": self.calories_burned,
            "calories_consumed": self.calories_consumed,
            "calories_remaining": self.calories_remaining,
            "weight_change": self.weight_change,
            "streak_days": self.streak_days,
        }


@dataclass(frozen=True)
class ProgressTrends:
    weight: TrendDirection
    workouts: TrendDirection
    nutrition: TrendDirection

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "weight": self.weight.value,
            "workouts": self.workouts.value,
            "nutrition": self.nutrition.value,
        }


@dataclass(frozen=True)
class UserStats:
    """All-time workout statistics for the profile page."""

    workouts_completed: int
    current_streak: int
    longest_streak: int
    total_calories_burned: float
    workouts_this_week: int
    goal_progress: int
    meal_adherence: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "workouts_completed": self.workouts_completed,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_calories_burned": self.total_calories_burned,
            "workouts_this_week": self.workouts_this_week,
            "goal_progress": self.goal_progress,
            "meal_adherence": self.meal_adherence,
        }


@dataclass(frozen=True)
class WeeklyStats:
    """Statistics over the trailing seven days."""

    workouts_this_week: int
    calories_burned: float
    meal_adherence: int
    goal_progress: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "workouts_this_week": self.workouts_this_week,
            "calories_burned": self.calories_burned,
            "meal_adherence": self.meal_adherence,
            "goal_progress": self.goal_progress,
        }


def estimate_calories_burned(
    workouts: Iterable[WorkoutRecord],
    kcal_per_minute: float = DEFAULT_KCAL_PER_WORKOUT_MINUTE,
    default_duration: int = DEFAULT_WORKOUT_DURATION,
) -> float:
    """Rough energy estimate for completed workouts from their durations."""
    return math.fsum(
        (w.duration if w.duration is not None else default_duration) * kcal_per_minute
        for w in workouts
        if w.is_completed
    )


def _compare(current: float, previous: float) -> TrendDirection:
    if current > previous:
        return TrendDirection.UP
    if current < previous:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def _completed_in(workouts, start, end) -> list:
    return [w for w in workouts if w.is_completed and start <= w.completed_date <= end]


def _completed_by(workouts: Iterable[WorkoutRecord], as_of: date) -> List[WorkoutRecord]:
    return [w for w in workouts if w.is_completed and w.completed_date <= as_of]


def _entries_by(entries: Iterable[ProgressEntry], as_of: date) -> List[ProgressEntry]:
    return [e for e in entries if e.date <= as_of]


def progress_summary(
    workouts: Iterable[WorkoutRecord],
    meals: Iterable[MealRecord],
    entries: Iterable[ProgressEntry],
    as_of: DateLike,
    daily_calorie_target: float = DEFAULT_DAILY_CALORIES,
    kcal_per_minute: float = DEFAULT_KCAL_PER_WORKOUT_MINUTE,
) -> ProgressSummary:
    """
    Headline numbers as of a day.

    Records dated after as_of are ignored. Calories consumed count completed
    meals on as_of; remaining calories go negative once the target is exceeded.
    """
    as_of = to_day(as_of)
    done = _completed_by(workouts, as_of)

    consumed = calories_consumed(meals, as_of)
    summary = ProgressSummary(
        workouts_completed=len(done),
        calories_burned=estimate_calories_burned(done, kcal_per_minute),
        calories_consumed=consumed,
        calories_remaining=daily_calorie_target - consumed,
        weight_change=weight_change(_entries_by(entries, as_of)),
        streak_days=current_streak(completed_workout_dates(done), as_of),
    )
    logger.debug(f"[SUMMARY] progress as of {as_of}: {summary.to_dict()}")
    return summary


def progress_trends(
    entries: Iterable[ProgressEntry],
    workouts: Iterable[WorkoutRecord],
    meals: Iterable[MealRecord],
    as_of: DateLike,
) -> ProgressTrends:
    """
    Weight, workout and nutrition direction.

    Weight compares the two most recent weigh-ins up to as_of. Workouts and
    nutrition compare the trailing seven days with the seven days before them.
    """
    workouts = list(workouts)
    meals = list(meals)

    start, end = trailing_window(as_of, 7)
    weighed = [e for e in _entries_by(entries, end) if e.weight is not None]
    prev_start, prev_end = start - timedelta(days=7), start - timedelta(days=1)

    workouts_now = len(_completed_in(workouts, start, end))
    workouts_before = len(_completed_in(workouts, prev_start, prev_end))

    def eaten(lo, hi):
        return math.fsum(m.calories for m in meals if m.completed and lo <= m.date <= hi)

    return ProgressTrends(
        weight=trend(weighed, "weight"),
        workouts=_compare(workouts_now, workouts_before),
        nutrition=_compare(eaten(start, end), eaten(prev_start, prev_end)),
    )


def user_stats(
    workouts: Iterable[WorkoutRecord],
    meals: Iterable[MealRecord],
    as_of: DateLike,
    weekly_goal: int = DEFAULT_WEEKLY_WORKOUT_GOAL,
    kcal_per_minute: float = DEFAULT_KCAL_PER_WORKOUT_MINUTE,
) -> UserStats:
    """
    All-time statistics as of a day.

    Records dated after as_of are ignored. "This week" runs from the Sunday
    on or before as_of. Goal progress is capped at 100.
    """
    as_of = to_day(as_of)
    done = _completed_by(workouts, as_of)
    days = completed_workout_dates(done)

    this_week = periodic_count(
        done, start_of_week(as_of), as_of, key=lambda w: w.completed_date
    )
    stats = UserStats(
        workouts_completed=len(done),
        current_streak=current_streak(days, as_of),
        longest_streak=longest_streak(days),
        total_calories_burned=estimate_calories_burned(done, kcal_per_minute),
        workouts_this_week=this_week,
        goal_progress=capped_percent(this_week, weekly_goal),
        meal_adherence=adherence(m for m in meals if m.date <= as_of),
    )
    logger.info(
        f"[SUMMARY] stats as of {as_of}: {stats.workouts_completed} workouts, "
        f"streak {stats.current_streak}/{stats.longest_streak}"
    )
    return stats


def weekly_stats(
    workouts: Iterable[WorkoutRecord],
    meals: Iterable[MealRecord],
    as_of: DateLike,
    weekly_goal: int = DEFAULT_WEEKLY_WORKOUT_GOAL,
    kcal_per_minute: float = DEFAULT_KCAL_PER_WORKOUT_MINUTE,
) -> WeeklyStats:
    """Workouts, calories burned and meal adherence over the trailing seven days."""
    start, end = trailing_window(as_of, 7)
    recent = _completed_in(list(workouts), start, end)
    recent_meals = [m for m in meals if start <= m.date <= end]

    return WeeklyStats(
        workouts_this_week=len(recent),
        calories_burned=estimate_calories_burned(recent, kcal_per_minute),
        meal_adherence=adherence(recent_meals),
        goal_progress=capped_percent(len(recent), weekly_goal),
    )


def daily_goals(
    entries: Iterable[ProgressEntry],
    water_intakes: Iterable[WaterIntakeEntry],
    workouts: Iterable[WorkoutRecord],
    as_of: DateLike,
    goals: Sequence[GoalDefinition] = DEFAULT_GOALS,
    at: Optional[datetime] = None,
) -> List[GoalProgress]:
    """
    Evaluate each goal against what was logged on as_of.

    Steps, water and sleep are read from that day; workouts count the
    Sunday-started week up to as_of. `at` is the moment of evaluation on
    as_of and enables the evening at-risk check; leave it out for past days.
    """
    as_of = to_day(as_of)
    entries = _entries_by(entries, as_of)

    last_night = sleep_log(entries, as_of, nights=1)
    values = {
        "steps": steps_data(entries, as_of).current,
        "water": water_data(entries, water_intakes, as_of).current,
        "sleep": last_night[0].hours if last_night and last_night[0].date == as_of else 0,
        "workouts": periodic_count(
            _completed_by(workouts, as_of),
            start_of_week(as_of),
            as_of,
            key=lambda w: w.completed_date,
        ),
    }

    results = [evaluate_goal(goal, values.get(goal.metric, 0), at) for goal in goals]
    achieved = sum(1 for r in results if r.status == GoalStatus.ACHIEVED)
    logger.debug(f"[GOALS] {achieved}/{len(results)} goals achieved on {as_of}")
    return results
