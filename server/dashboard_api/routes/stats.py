"""Workout statistics and goal API routes."""
from dataclasses import replace
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query

from fitness_metrics.streaks import completed_workout_dates, streak_summary, weekly_completion
from fitness_metrics.goals import DEFAULT_GOALS
from fitness_metrics.summary import daily_goals, user_stats, weekly_stats

from ..config import get_settings
from ..database import record_store
from ..dependencies import as_of_day
from ..models.stats import (
    GoalStatusItem,
    StreakStats,
    UserStats,
    WeekCompletionStats,
    WeeklyStats,
)

router = APIRouter(prefix="/api/users", tags=["Stats"])


@router.get("/{user_id}/stats", response_model=UserStats)
async def get_user_stats(user_id: int, as_of: date = Depends(as_of_day)):
    """All-time workout statistics: streaks, calories burned, weekly goal and meal adherence."""
    settings = get_settings()
    stats = user_stats(
        record_store.workouts(user_id),
        record_store.meals(user_id),
        as_of,
        weekly_goal=settings.weekly_workout_goal,
        kcal_per_minute=settings.kcal_per_workout_minute,
    )
    return UserStats(**stats.to_dict())


@router.get("/{user_id}/stats/weekly", response_model=WeeklyStats)
async def get_weekly_stats(user_id: int, as_of: date = Depends(as_of_day)):
    """Statistics over the seven days ending on as_of."""
    settings = get_settings()
    stats = weekly_stats(
        record_store.workouts(user_id),
        record_store.meals(user_id),
        as_of,
        weekly_goal=settings.weekly_workout_goal,
        kcal_per_minute=settings.kcal_per_workout_minute,
    )
    return WeeklyStats(**stats.to_dict())


@router.get("/{user_id}/streaks", response_model=StreakStats)
async def get_streaks(user_id: int, as_of: date = Depends(as_of_day)):
    """Current and longest streak of days with a completed workout."""
    days = {d for d in completed_workout_dates(record_store.workouts(user_id)) if d <= as_of}
    return StreakStats(**streak_summary(days, as_of).to_dict())


@router.get("/{user_id}/stats/completion", response_model=list[WeekCompletionStats])
async def get_weekly_completion(
    user_id: int,
    weeks: int = Query(default=4, ge=1, le=52, description="Number of weeks of history"),
    as_of: date = Depends(as_of_day),
):
    """Scheduled versus completed workouts per week, oldest week first."""
    rows = weekly_completion(record_store.workouts(user_id), as_of, weeks=weeks)
    return [WeekCompletionStats(**row.to_dict()) for row in rows]


@router.get("/{user_id}/goals", response_model=list[GoalStatusItem])
async def get_goals(user_id: int, as_of: date = Depends(as_of_day)):
    """
    Steps, water, sleep and weekly workout goals for the day.

    Targets come from settings. Goals are only flagged at risk when as_of
    is today, since the evening check needs the current time.
    """
    settings = get_settings()
    targets = {
        "steps": settings.steps_goal,
        "water": settings.water_goal_liters,
        "workouts": settings.weekly_workout_goal,
    }
    goals = [replace(g, target=targets.get(g.metric, g.target)) for g in DEFAULT_GOALS]
    at = datetime.now() if as_of == date.today() else None

    results = daily_goals(
        record_store.progress_entries(user_id),
        record_store.water_intakes(user_id, day=as_of),
        record_store.workouts(user_id),
        as_of,
        goals=goals,
        at=at,
    )
    return [GoalStatusItem(**r.to_dict()) for r in results]
