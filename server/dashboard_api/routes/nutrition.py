"""Nutrition API routes."""
from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query

from fitness_metrics.nutrition import (
    adherence,
    average_nutrition,
    daily_nutrition,
    meals_on,
    nutrition_totals,
)

from ..config import get_settings
from ..database import record_store
from ..dependencies import as_of_day
from ..models.nutrition import (
    DailyNutrition,
    NutritionAverages,
    NutritionHistory,
    NutritionTotals,
)

router = APIRouter(prefix="/api/users", tags=["Nutrition"])


@router.get("/{user_id}/nutrition", response_model=NutritionTotals)
async def get_nutrition(user_id: int, as_of: date = Depends(as_of_day)):
    """
    Macro totals for the day against the active diet plan.

    Falls back to the configured daily calorie target when the user has
    no active plan.
    """
    meals = meals_on(record_store.meals(user_id, start=as_of, end=as_of), as_of)
    totals = nutrition_totals(
        meals,
        plan=record_store.active_diet_plan(user_id),
        daily_calories=get_settings().daily_calorie_target,
    )
    return NutritionTotals(**totals.to_dict(), adherence=adherence(meals))


@router.get("/{user_id}/nutrition/daily", response_model=NutritionHistory)
async def get_daily_nutrition(
    user_id: int,
    days: int = Query(default=7, ge=1, le=90, description="Number of days of history"),
    as_of: date = Depends(as_of_day),
):
    """Per-day intake for the window ending on as_of, with averages."""
    start = as_of - timedelta(days=days - 1)
    rows = daily_nutrition(record_store.meals(user_id, start=start, end=as_of), start, as_of)
    return NutritionHistory(
        days=[DailyNutrition(**row.to_dict()) for row in rows],
        averages=NutritionAverages(**average_nutrition(rows)),
    )
