"""Progress and biometric models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional

Trend = Literal["up", "down", "stable"]


class ProgressSummary(BaseModel):
    """Headline numbers for the progress page."""

    model_config = ConfigDict(populate_by_name=True)

    workouts_completed: int = Field(serialization_alias="workoutsCompleted")
    calories_burned: float = Field(serialization_alias="caloriesBurned")
    calories_consumed: float = Field(serialization_alias="caloriesConsumed")
    calories_remaining: float = Field(serialization_alias="caloriesRemaining")
    weight_change: float = Field(serialization_alias="weightChange")
    streak_days: int = Field(serialization_alias="streakDays")


class ProgressTrends(BaseModel):
    """Direction of weight, workouts and nutrition."""

    model_config = ConfigDict(populate_by_name=True)

    weight: Trend = Field(serialization_alias="weightTrend")
    workouts: Trend = Field(serialization_alias="workoutTrend")
    nutrition: Trend = Field(serialization_alias="nutritionTrend")


class SeriesPoint(BaseModel):
    date: str
    value: float


class MetricSeries(BaseModel):
    """History of one metric, oldest first."""

    field: str
    trend: Trend
    points: list[SeriesPoint]


class BMIResult(BaseModel):
    """Body-mass index from the latest weigh-in."""

    model_config = ConfigDict(populate_by_name=True)

    weight: Optional[float] = None
    height_cm: float = Field(serialization_alias="heightCm")
    bmi: Optional[float] = None
    category: Optional[str] = None


class SleepNight(BaseModel):
    date: str
    hours: float
    quality: float


class SleepData(BaseModel):
    """Recent nights with their averages."""

    model_config = ConfigDict(populate_by_name=True)

    nights: list[SleepNight]
    avg_hours: float = Field(serialization_alias="avgHours")
    avg_quality: float = Field(serialization_alias="avgQuality")


class StepsData(BaseModel):
    """Steps for a day against the step goal."""

    model_config = ConfigDict(populate_by_name=True)

    current: float
    goal: float
    percentage: int
    change_percent: int = Field(serialization_alias="changePercent")
    distance_miles: float = Field(serialization_alias="distanceMiles")
    calories: int
    active_minutes: int = Field(serialization_alias="activeMinutes")


class WaterData(BaseModel):
    """Water drunk on a day against the goal, in litres."""

    current: float
    goal: float
    percentage: int
