"""
Fitness Metrics.

Pure aggregation of logged workouts, meals and progress entries into
streaks, nutrition totals, trends and dashboard summaries.
"""

from .errors import MetricValidationError
from .goals import delta, percent_of_goal, evaluate_goal
from .models import (
    WorkoutStatus,
    TrendDirection,
    WorkoutRecord,
    MealRecord,
    DietPlan,
    Measurements,
    ProgressEntry,
    WaterIntakeEntry,
)
from .nutrition import sum_macros, macro_goals, adherence, nutrition_totals
from .progress import bmi, trend, series_for
from .streaks import current_streak, longest_streak, periodic_count, streak_summary
from .summary import progress_summary, progress_trends, user_stats, weekly_stats

__all__ = [
    "MetricValidationError",
    "WorkoutStatus",
    "TrendDirection",
    "WorkoutRecord",
    "MealRecord",
    "DietPlan",
    "Measurements",
    "ProgressEntry",
    "WaterIntakeEntry",
    "current_streak",
    "longest_streak",
    "periodic_count",
    "streak_summary",
    "sum_macros",
    "macro_goals",
    "adherence",
    "nutrition_totals",
    "bmi",
    "trend",
    "series_for",
    "percent_of_goal",
    "delta",
    "evaluate_goal",
    "progress_summary",
    "progress_trends",
    "user_stats",
    "weekly_stats",
]
