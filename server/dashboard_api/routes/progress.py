"""Progress and biometric API routes."""
from datetime import date

from fastapi import APIRouter, Depends, Query

from fitness_metrics.progress import (
    bmi,
    bmi_category,
    latest_entry,
    series_for,
    sleep_log,
    sleep_summary,
    steps_data,
    trend,
    water_data,
)
from fitness_metrics.summary import progress_summary, progress_trends

from ..config import get_settings
from ..database import record_store
from ..dependencies import as_of_day
from ..models.progress import (
    BMIResult,
    MetricSeries,
    ProgressSummary,
    ProgressTrends,
    SeriesPoint,
    SleepData,
    SleepNight,
    StepsData,
    WaterData,
)

router = APIRouter(prefix="/api/users", tags=["Progress"])


@router.get("/{user_id}/progress/summary", response_model=ProgressSummary)
async def get_progress_summary(user_id: int, as_of: date = Depends(as_of_day)):
    """Workouts, calories in and out, weight change and streak."""
    settings = get_settings()
    summary = progress_summary(
        record_store.workouts(user_id),
        record_store.meals(user_id, start=as_of, end=as_of),
        record_store.progress_entries(user_id),
        as_of,
        daily_calorie_target=settings.daily_calorie_target,
        kcal_per_minute=settings.kcal_per_workout_minute,
    )
    return ProgressSummary(**summary.to_dict())


@router.get("/{user_id}/progress/trends", response_model=ProgressTrends)
async def get_progress_trends(user_id: int, as_of: date = Depends(as_of_day)):
    """Direction of weight, workouts and nutrition."""
    trends = progress_trends(
        record_store.progress_entries(user_id),
        record_store.workouts(user_id),
        record_store.meals(user_id),
        as_of,
    )
    return ProgressTrends(**trends.to_dict())


@router.get("/{user_id}/progress/series/{field}", response_model=MetricSeries)
async def get_metric_series(user_id: int, field: str):
    """
    History of one metric: weight, bodyFat, or any measurement key.

    Unknown keys give an empty series.
    """
    entries = record_store.progress_entries(user_id)
    series = series_for(entries, field)
    recorded = [e for e in entries if e.value_of(field) is not None]
    return MetricSeries(
        field=field,
        trend=trend(recorded, field).value,
        points=[SeriesPoint(**point) for point in series.to_list()],
    )


@router.get("/{user_id}/progress/bmi", response_model=BMIResult)
async def get_bmi(
    user_id: int,
    height_cm: float = Query(..., description="Height in centimetres"),
):
    """BMI from the latest weigh-in; bmi is null when no weight is recorded."""
    weighed = [e for e in record_store.progress_entries(user_id) if e.weight is not None]
    latest = latest_entry(weighed)
    if latest is None:
        return BMIResult(height_cm=height_cm)

    value = bmi(latest.weight, height_cm)
    return BMIResult(
        weight=latest.weight,
        height_cm=height_cm,
        bmi=value,
        category=bmi_category(value),
    )


@router.get("/{user_id}/progress/sleep", response_model=SleepData)
async def get_sleep(
    user_id: int,
    nights: int = Query(default=7, ge=1, le=90),
    as_of: date = Depends(as_of_day),
):
    """Last logged nights up to as_of, oldest first."""
    log = sleep_log(record_store.progress_entries(user_id), as_of, nights=nights)
    summary = sleep_summary(log)
    return SleepData(
        nights=[SleepNight(**night.to_dict()) for night in log],
        avg_hours=summary.avg_hours,
        avg_quality=summary.avg_quality,
    )


@router.get("/{user_id}/progress/steps", response_model=StepsData)
async def get_steps(user_id: int, as_of: date = Depends(as_of_day)):
    """Steps on as_of against the step goal."""
    data = steps_data(
        record_store.progress_entries(user_id),
        as_of,
        default_goal=get_settings().steps_goal,
    )
    return StepsData(**data.to_dict())


@router.get("/{user_id}/progress/water", response_model=WaterData)
async def get_water(user_id: int, as_of: date = Depends(as_of_day)):
    """Water drunk on as_of against the hydration goal."""
    data = water_data(
        record_store.progress_entries(user_id),
        record_store.water_intakes(user_id, day=as_of),
        as_of,
        default_goal=get_settings().water_goal_liters,
    )
    return WaterData(**data.to_dict())
