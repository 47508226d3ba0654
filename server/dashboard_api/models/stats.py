"""Workout statistics models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional


class StreakStats(BaseModel):
    """Current and longest workout streak."""

    model_config = ConfigDict(populate_by_name=True)

    current: int
    longest: int
    total_days: int = Field(serialization_alias="totalDays")


class WeekCompletionStats(BaseModel):
    """Scheduled versus completed workouts for one week."""

    model_config = ConfigDict(populate_by_name=True)

    week_start: str = Field(serialization_alias="weekStart")
    scheduled: int
    completed: int
    completion: int


class UserStats(BaseModel):
    """All-time workout statistics."""

    model_config = ConfigDict(populate_by_name=True)

    workouts_completed: int = Field(serialization_alias="workoutsCompleted")
    current_streak: int = Field(serialization_alias="currentStreak")
    longest_streak: int = Field(serialization_alias="longestStreak")
    total_calories_burned: float = Field(serialization_alias="totalCaloriesBurned")
    workouts_this_week: int = Field(serialization_alias="workoutsThisWeek")
    goal_progress: int = Field(serialization_alias="goalProgress")
    meal_adherence: int = Field(serialization_alias="mealAdherence")


class WeeklyStats(BaseModel):
    """Statistics over the trailing seven days."""

    model_config = ConfigDict(populate_by_name=True)

    workouts_this_week: int = Field(serialization_alias="workoutsThisWeek")
    calories_burned: float = Field(serialization_alias="caloriesBurned")
    meal_adherence: int = Field(serialization_alias="mealAdherence")
    goal_progress: int = Field(serialization_alias="goalProgress")


class GoalStatusItem(BaseModel):
    """Progress toward one daily or weekly goal."""

    model_config = ConfigDict(populate_by_name=True)

    goal_name: str = Field(serialization_alias="goalName")
    metric: str
    target: float
    unit: str
    current_value: float = Field(serialization_alias="currentValue")
    progress_percent: int = Field(serialization_alias="progressPercent")
    remaining: float
    status: Literal["not_started", "in_progress", "at_risk", "achieved"]
    message: Optional[str] = None
