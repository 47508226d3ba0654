"""Record models consumed by the aggregation engine.

Records mirror the rows held by the record store. They accept snake_case
or camelCase keys and can be built straight from ORM objects or SQLite rows.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .dates import to_day


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class WorkoutStatus(str, Enum):
    """Lifecycle status of a workout session."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    MISSED = "missed"


class TrendDirection(str, Enum):
    """Numeric direction between the two most recent values of a metric."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class _Record(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class WorkoutRecord(_Record):
    """A scheduled or completed workout session."""

    id: int
    user_id: int
    plan_id: Optional[int] = None
    name: Optional[str] = None
    status: WorkoutStatus = WorkoutStatus.SCHEDULED
    scheduled_date: date
    completed_date: Optional[date] = None
    duration: Optional[int] = Field(default=None, ge=0)  # minutes

    @field_validator("scheduled_date", "completed_date", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        return None if value in (None, "") else to_day(value)

    @model_validator(mode="after")
    def _check_completion(self):
        is_completed = self.status == WorkoutStatus.COMPLETED
        if is_completed and self.completed_date is None:
            raise ValueError("completed workouts must carry a completed_date")
        if not is_completed and self.completed_date is not None:
            raise ValueError(
                f"completed_date is only valid for completed workouts, status is {self.status.value}"
            )
        return self

    @property
    def is_completed(self) -> bool:
        return self.status == WorkoutStatus.COMPLETED


class MealRecord(_Record):
    """A planned or eaten meal. Unknown nutrition is an explicit zero."""

    id: int
    user_id: int
    diet_plan_id: Optional[int] = None
    name: Optional[str] = None
    meal_type: str
    date: date
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)  # grams
    carbs: float = Field(ge=0)  # grams
    fat: float = Field(ge=0)  # grams
    completed: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        return to_day(value)


class DietPlan(_Record):
    """Daily calorie target with a percentage split across macros."""

    id: int
    user_id: int
    name: str = ""
    status: str = "active"
    daily_calories: int
    protein_percentage: int
    carbs_percentage: int
    fat_percentage: int


class Measurements(BaseModel):
    """
    Free-form metric bag attached to a progress entry.

    Keys the aggregator reads are typed fields; anything else (chest,
    waist, arms, ...) is kept as an extra value and can still be read
    through get().
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    sleep_hours: Optional[float] = Field(default=None, alias="sleepHours")
    sleep_quality: Optional[float] = Field(default=None, alias="sleepQuality")
    steps: Optional[float] = None
    steps_goal: Optional[float] = Field(default=None, alias="stepsGoal")
    water_intake: Optional[float] = Field(default=None, alias="waterIntake")  # litres
    water_goal: Optional[float] = Field(default=None, alias="waterGoal")  # litres

    def get(self, key: str) -> Optional[float]:
        """Numeric value for a field name, alias or extra key; None otherwise."""
        fields = type(self).model_fields
        name = key
        if name not in fields:
            name = next((n for n, f in fields.items() if f.alias == key), key)

        if name in fields:
            value = getattr(self, name)
        else:
            value = (self.model_extra or {}).get(key)

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    def keys(self) -> list[str]:
        """Names of every key holding a value, extras included."""
        present = [
            field.alias or name
            for name, field in type(self).model_fields.items()
            if getattr(self, name) is not None
        ]
        return present + list((self.model_extra or {}).keys())


class ProgressEntry(_Record):
    """A dated progress/biometric log entry."""

    id: int
    user_id: int
    date: date
    weight: Optional[float] = None
    body_fat: Optional[float] = None  # percent
    measurements: Optional[Measurements] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        return to_day(value)

    def value_of(self, field: str) -> Optional[float]:
        """
        Look up a metric on this entry.

        Direct fields (weight, body_fat / bodyFat) win over the
        measurements bag. Returns None when the metric is absent.
        """
        if field == "weight":
            return self.weight
        if field in ("body_fat", "bodyFat"):
            return self.body_fat
        if self.measurements is None:
            return None
        return self.measurements.get(field)


class WaterIntakeEntry(_Record):
    """A single logged drink, in millilitres."""

    id: int
    user_id: int
    date: date
    amount: int = Field(ge=0)

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        return to_day(value)


def completed_day(workout: WorkoutRecord) -> Optional[date]:
    """Completion day of a workout, or None if it is not completed."""
    return workout.completed_date if workout.is_completed else None

