"""
Streak and consistency engine.

Computes consecutive-day streaks and period counts over sparse dated
records. Every date is normalized to a calendar day first, so several
records on the same day count once.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .dates import DateLike, to_day
from .errors import MetricValidationError
from .goals import percent_of_goal
from .models import WorkoutRecord, completed_day

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakSummary:
    """Current and longest streak over a set of qualifying days."""

    current: int
    longest: int
    total_days: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "longest": self.longest,
            "total_days": self.total_days,
        }


@dataclass(frozen=True)
class WeekCompletion:
    """Scheduled versus completed workouts for one week."""

    week_start: date
    scheduled: int
    completed: int

    @property
    def completion(self) -> int:
        return percent_of_goal(self.completed, self.scheduled)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "week_start": self.week_start.isoformat(),
            "scheduled": self.scheduled,
            "completed": self.completed,
            "completion": self.completion,
        }


def _days(dates: Iterable[DateLike]) -> Set[date]:
    return {to_day(d) for d in dates}


def current_streak(qualifying_dates: Iterable[DateLike], today: DateLike) -> int:
    """
    Count consecutive qualifying days walking backward from today.

    Today itself may be missing (the day is not over yet): if yesterday
    qualifies the streak is counted from yesterday. Two missing days in a
    row end the streak.
    """
    days = _days(qualifying_dates)
    today = to_day(today)

    if today in days:
        streak = 1
        cursor = today - ONE_DAY
    elif today - ONE_DAY in days:
        streak = 0
        cursor = today - ONE_DAY
    else:
        return 0

    while cursor in days:
        streak += 1
        cursor -= ONE_DAY

    return streak


def longest_streak(qualifying_dates: Iterable[DateLike]) -> int:
    """Length of the longest run of consecutive qualifying days."""
    days = sorted(_days(qualifying_dates))
    if not days:
        return 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == ONE_DAY:
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return longest


def periodic_count(
    events: Iterable,
    period_start: DateLike,
    period_end: DateLike,
    key: Optional[Callable] = None,
) -> int:
    """
    Count events whose calendar day falls in [period_start, period_end].

    Args:
        events: Dates, or records when key is given
        period_start: First day of the period (inclusive)
        period_end: Last day of the period (inclusive)
        key: Extracts the date from a record; events with no date are skipped
    """
    start = to_day(period_start)
    end = to_day(period_end)
    count = 0
    for event in events:
        value = key(event) if key else event
        if value is None:
            continue
        if start <= to_day(value) <= end:
            count += 1
    return count


def streak_summary(qualifying_dates: Iterable[DateLike], today: DateLike) -> StreakSummary:
    """Current streak, longest streak and number of distinct qualifying days."""
    days = _days(qualifying_dates)
    summary = StreakSummary(
        current=current_streak(days, today),
        longest=longest_streak(days),
        total_days=len(days),
    )
    logger.debug(
        f"[STREAK] as of {to_day(today)}: current={summary.current} "
        f"longest={summary.longest} days={summary.total_days}"
    )
    return summary


def completed_workout_dates(workouts: Iterable[WorkoutRecord]) -> Set[date]:
    """Calendar days on which at least one workout was completed."""
    return {d for d in (completed_day(w) for w in workouts) if d is not None}


def start_of_week(day: DateLike) -> date:
    """The Sunday on or before day."""
    day = to_day(day)
    return day - timedelta(days=(day.weekday() + 1) % 7)


def trailing_window(as_of: DateLike, days: int = 7) -> Tuple[date, date]:
    """Inclusive (start, end) window of `days` calendar days ending on as_of."""
    if days <= 0:
        raise MetricValidationError(f"window must be at least one day, got {days}")
    end = to_day(as_of)
    return end - timedelta(days=days - 1), end


def weekly_completion(
    workouts: Iterable[WorkoutRecord],
    as_of: DateLike,
    weeks: int = 4,
) -> List[WeekCompletion]:
    """
    Scheduled versus completed workouts for the last `weeks` weeks.

    Weeks start on Sunday; the current (possibly partial) week is last.
    A workout belongs to the week of its scheduled date.
    """
    if weeks <= 0:
        raise MetricValidationError(f"weeks must be positive, got {weeks}")

    workouts = list(workouts)
    current_week = start_of_week(as_of)
    result = []
    for offset in range(weeks - 1, -1, -1):
        week_start = current_week - timedelta(weeks=offset)
        week_end = week_start + timedelta(days=6)
        in_week = [w for w in workouts if week_start <= w.scheduled_date <= week_end]
        result.append(
            WeekCompletion(
                week_start=week_start,
                scheduled=len(in_week),
                completed=sum(1 for w in in_week if w.is_completed),
            )
        )
    return result
