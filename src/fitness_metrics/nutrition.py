"""
Nutrition aggregation.

Sums macros across meals, converts calorie-percentage targets into gram
targets and measures meal-plan adherence. Sums are never rounded; the
rounded() helpers exist for display only.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .dates import DateLike, iter_days, to_day
from .errors import MetricValidationError
from .goals import percent_of_goal, round_half_up
from .models import DietPlan, MealRecord

logger = logging.getLogger(__name__)

# Energy density in kcal per gram
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

DEFAULT_DAILY_CALORIES = 2000
# Split used when the user has no active diet plan
DEFAULT_MACRO_SPLIT = (30, 40, 30)  # protein, carbs, fat


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macro grams."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def rounded(self) -> dict:
        """Whole calories and grams for display."""
        return {k: round_half_up(v) for k, v in self.to_dict().items()}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass(frozen=True)
class MacroGoals:
    """Daily gram targets derived from a calorie target."""

    protein_grams: float
    carbs_grams: float
    fat_grams: float

    @property
    def calories(self) -> float:
        """Energy represented by the gram targets."""
        return (
            self.protein_grams * KCAL_PER_GRAM_PROTEIN
            + self.carbs_grams * KCAL_PER_GRAM_CARBS
            + self.fat_grams * KCAL_PER_GRAM_FAT
        )

    def rounded(self) -> dict:
        """Whole grams for display."""
        return {k: round_half_up(v) for k, v in self.to_dict().items()}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "protein_grams": self.protein_grams,
            "carbs_grams": self.carbs_grams,
            "fat_grams": self.fat_grams,
        }


@dataclass(frozen=True)
class NutritionTotals:
    """Macro totals next to the targets they are measured against."""

    totals: MacroTotals
    calorie_goal: float
    goals: MacroGoals

    @property
    def calories_percent(self) -> int:
        return percent_of_goal(self.totals.calories, self.calorie_goal)

    @property
    def protein_percent(self) -> int:
        return percent_of_goal(self.totals.protein, self.goals.protein_grams)

    @property
    def carbs_percent(self) -> int:
        return percent_of_goal(self.totals.carbs, self.goals.carbs_grams)

    @property
    def fat_percent(self) -> int:
        return percent_of_goal(self.totals.fat, self.goals.fat_grams)

    @property
    def calories_remaining(self) -> float:
        return self.calorie_goal - self.totals.calories

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            **self.totals.to_dict(),
            "calorie_goal": self.calorie_goal,
            **self.goals.to_dict(),
            "calories_percent": self.calories_percent,
            "protein_percent": self.protein_percent,
            "carbs_percent": self.carbs_percent,
            "fat_percent": self.fat_percent,
            "calories_remaining": self.calories_remaining,
        }


@dataclass(frozen=True)
class DailyNutrition:
    """One day of the nutrition chart."""

    day: date
    totals: MacroTotals
    total_meals: int
    completed_meals: int

    @property
    def adherence(self) -> int:
        if self.total_meals == 0:
            return 100
        return round_half_up(100 * self.completed_meals / self.total_meals)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.day.isoformat(),
            **self.totals.to_dict(),
            "total_meals": self.total_meals,
            "completed_meals": self.completed_meals,
            "adherence": self.adherence,
        }


def sum_macros(meals: Iterable[MealRecord]) -> MacroTotals:
    """Add up calories and macros; order of meals does not matter."""
    meals = list(meals)
    return MacroTotals(
        calories=math.fsum(m.calories for m in meals),
        protein=math.fsum(m.protein for m in meals),
        carbs=math.fsum(m.carbs for m in meals),
        fat=math.fsum(m.fat for m in meals),
    )


def macro_goals(
    daily_calories: float,
    protein_pct: float,
    carbs_pct: float,
    fat_pct: float,
) -> MacroGoals:
    """
    Convert percentage-of-calories targets into gram targets.

    Percentages are not required to add up to 100.

    Raises:
        MetricValidationError: if the calorie target or a percentage is negative
    """
    if daily_calories < 0:
        raise MetricValidationError(f"daily_calories must not be negative, got {daily_calories}")
    for label, pct in (("protein", protein_pct), ("carbs", carbs_pct), ("fat", fat_pct)):
        if pct < 0:
            raise MetricValidationError(f"{label} percentage must not be negative, got {pct}")

    return MacroGoals(
        protein_grams=daily_calories * protein_pct / 100 / KCAL_PER_GRAM_PROTEIN,
        carbs_grams=daily_calories * carbs_pct / 100 / KCAL_PER_GRAM_CARBS,
        fat_grams=daily_calories * fat_pct / 100 / KCAL_PER_GRAM_FAT,
    )


def goals_for_plan(plan: DietPlan) -> MacroGoals:
    return macro_goals(
        plan.daily_calories,
        plan.protein_percentage,
        plan.carbs_percentage,
        plan.fat_percentage,
    )


def adherence(meals: Iterable[MealRecord]) -> int:
    """
    Percentage of planned meals marked completed.

    With nothing planned the result is 100, so callers that need to tell
    "no meals" apart from "all eaten" must check for an empty list.
    """
    meals = list(meals)
    if not meals:
        return 100
    completed = sum(1 for m in meals if m.completed)
    return round_half_up(100 * completed / len(meals))


def meals_on(meals: Iterable[MealRecord], day: DateLike) -> List[MealRecord]:
    """Meals dated on the given calendar day."""
    day = to_day(day)
    return [m for m in meals if m.date == day]


def calories_consumed(
    meals: Iterable[MealRecord],
    day: DateLike,
    completed_only: bool = True,
) -> float:
    """Calories eaten on a day; planned-but-skipped meals are left out by default."""
    return math.fsum(
        m.calories for m in meals_on(meals, day) if m.completed or not completed_only
    )


def nutrition_totals(
    meals: Iterable[MealRecord],
    plan: Optional[DietPlan] = None,
    daily_calories: float = DEFAULT_DAILY_CALORIES,
) -> NutritionTotals:
    """
    Macro totals compared to the day's targets.

    Targets come from the diet plan when given; otherwise daily_calories
    is split by DEFAULT_MACRO_SPLIT.
    """
    if plan is not None:
        calorie_goal = plan.daily_calories
        goals = goals_for_plan(plan)
    else:
        calorie_goal = daily_calories
        goals = macro_goals(daily_calories, *DEFAULT_MACRO_SPLIT)

    result = NutritionTotals(totals=sum_macros(meals), calorie_goal=calorie_goal, goals=goals)
    logger.debug(
        f"[NUTRITION] {result.totals.calories:.0f}/{calorie_goal} kcal "
        f"({result.calories_percent}%)"
    )
    return result


def daily_nutrition(
    meals: Iterable[MealRecord],
    start: DateLike,
    end: DateLike,
) -> List[DailyNutrition]:
    """One row per calendar day from start to end, days without meals included."""
    by_day = {}
    for meal in meals:
        by_day.setdefault(meal.date, []).append(meal)

    rows = []
    for day in iter_days(start, end):
        day_meals = by_day.get(day, [])
        rows.append(
            DailyNutrition(
                day=day,
                totals=sum_macros(day_meals),
                total_meals=len(day_meals),
                completed_meals=sum(1 for m in day_meals if m.completed),
            )
        )
    return rows


def average_nutrition(days: List[DailyNutrition]) -> dict:
    """
    Average daily intake over a window.

    Macros are averaged over every day in the window. Adherence is averaged
    over days that had meals planned, and is 100 if none had.
    """
    if not days:
        return {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0, "adherence": 100.0}

    count = len(days)
    planned = [d for d in days if d.total_meals > 0]
    return {
        "calories": math.fsum(d.totals.calories for d in days) / count,
        "protein": math.fsum(d.totals.protein for d in days) / count,
        "carbs": math.fsum(d.totals.carbs for d in days) / count,
        "fat": math.fsum(d.totals.fat for d in days) / count,
        "adherence": (
            math.fsum(d.adherence for d in planned) / len(planned) if planned else 100.0
        ),
    }
