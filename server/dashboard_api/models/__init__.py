"""Pydantic models for dashboard API responses."""
from .stats import StreakStats, WeekCompletionStats, UserStats, WeeklyStats, GoalStatusItem
from .nutrition import NutritionTotals, DailyNutrition, NutritionAverages, NutritionHistory
from .progress import (
    ProgressSummary,
    ProgressTrends,
    MetricSeries,
    BMIResult,
    SleepData,
    StepsData,
    WaterData,
)

__all__ = [
    "StreakStats",
    "WeekCompletionStats",
    "UserStats",
    "WeeklyStats",
    "GoalStatusItem",
    "NutritionTotals",
    "DailyNutrition",
    "NutritionAverages",
    "NutritionHistory",
    "ProgressSummary",
    "ProgressTrends",
    "MetricSeries",
    "BMIResult",
    "SleepData",
    "StepsData",
    "WaterData",
]
