"""
Progress and trend analysis.

Derives BMI, metric history series and up/down/stable trends from
progress entries, plus the sleep, step and water trackers that read the
entries' measurement bag.

Trends are purely numeric: a falling body-fat percentage is reported as
"down", and deciding that this is good news is left to the caller.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Iterator, List, Optional, Union

from .dates import DateLike, to_day
from .errors import MetricValidationError
from .goals import Delta, delta, percent_change, percent_of_goal, round_half_up
from .models import Measurements, ProgressEntry, TrendDirection, WaterIntakeEntry

logger = logging.getLogger(__name__)

FieldAccessor = Union[str, Callable[[ProgressEntry], Optional[float]]]

DEFAULT_STEPS_GOAL = 10000
DEFAULT_WATER_GOAL_LITERS = 2.5
STEPS_PER_MILE = 2000
KCAL_PER_STEP = 0.04
STEPS_PER_ACTIVE_MINUTE = 100


@dataclass(frozen=True)
class SeriesPoint:
    """A single dated value of a metric."""

    date: date
    value: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass(frozen=True)
class SleepNight:
    """Sleep logged for one night."""

    date: date
    hours: float
    quality: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"date": self.date.isoformat(), "hours": self.hours, "quality": self.quality}


@dataclass(frozen=True)
class SleepSummary:
    avg_hours: float
    avg_quality: float
    nights: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "avg_hours": self.avg_hours,
            "avg_quality": self.avg_quality,
            "nights": self.nights,
        }


@dataclass(frozen=True)
class StepsData:
    """Step count for a day against the step goal."""

    current: float
    goal: float
    change_percent: int

    @property
    def percentage(self) -> int:
        return percent_of_goal(self.current, self.goal)

    @property
    def distance_miles(self) -> float:
        return self.current / STEPS_PER_MILE

    @property
    def calories(self) -> int:
        return round_half_up(self.current * KCAL_PER_STEP)

    @property
    def active_minutes(self) -> int:
        return round_half_up(self.current / STEPS_PER_ACTIVE_MINUTE)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "goal": self.goal,
            "percentage": self.percentage,
            "change_percent": self.change_percent,
            "distance_miles": self.distance_miles,
            "calories": self.calories,
            "active_minutes": self.active_minutes,
        }


@dataclass(frozen=True)
class WaterData:
    """Water drunk on a day against the hydration goal, in litres."""

    current: float
    goal: float

    @property
    def percentage(self) -> int:
        return percent_of_goal(self.current, self.goal)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"current": self.current, "goal": self.goal, "percentage": self.percentage}


class MetricSeries:
    """
    Dated values of one metric, oldest first.

    Iterating recomputes the points from the captured entries, so the
    series can be walked any number of times.
    """

    def __init__(self, entries: Iterable[ProgressEntry], field: FieldAccessor):
        self._entries = tuple(entries)
        self._accessor = _accessor(field)
        self.field = field

    def __iter__(self) -> Iterator[SeriesPoint]:
        points = []
        for entry in self._entries:
            value = self._accessor(entry)
            if value is not None:
                points.append(SeriesPoint(date=entry.date, value=value))
        points.sort(key=lambda p: p.date)
        return iter(points)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def values(self) -> List[float]:
        return [p.value for p in self]

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self]


def _accessor(field: FieldAccessor) -> Callable[[ProgressEntry], Optional[float]]:
    if callable(field):
        return field
    return lambda entry: entry.value_of(field)


def _recency(entry: ProgressEntry):
    # Same-day entries: the later-created (larger id) one is newer.
    return entry.date, entry.id


def bmi(weight_kg: float, height_cm: float) -> float:
    """
    Body-mass index from weight in kg and height in cm.

    Raises:
        MetricValidationError: if height is not positive or weight is negative
    """
    if height_cm <= 0:
        raise MetricValidationError(f"height must be positive, got {height_cm}")
    if weight_kg < 0:
        raise MetricValidationError(f"weight must not be negative, got {weight_kg}")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(value: float) -> str:
    if value < 18.5:
        return "Underweight"
    if value < 25:
        return "Normal"
    if value < 30:
        return "Overweight"
    return "Obese"


def sorted_newest_first(entries: Iterable[ProgressEntry]) -> List[ProgressEntry]:
    return sorted(entries, key=_recency, reverse=True)


def latest_entry(entries: Iterable[ProgressEntry]) -> Optional[ProgressEntry]:
    """Most recent entry by date, the larger id winning a same-day tie."""
    return max(entries, key=_recency, default=None)


def trend(entries: Iterable[ProgressEntry], field: FieldAccessor) -> TrendDirection:
    """
    Direction of a metric between the two most recent entries.

    Entries may come in any order; they are sorted newest first. Fewer than
    two entries, equal values, or a missing value on either entry all give
    STABLE.
    """
    ordered = sorted_newest_first(entries)
    if len(ordered) < 2:
        return TrendDirection.STABLE

    get = _accessor(field)
    latest, previous = get(ordered[0]), get(ordered[1])
    if latest is None or previous is None:
        return TrendDirection.STABLE
    if latest > previous:
        return TrendDirection.UP
    if latest < previous:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def series_for(entries: Iterable[ProgressEntry], field: FieldAccessor) -> MetricSeries:
    """Dated values of a direct field or measurement key, oldest first."""
    return MetricSeries(entries, field)


def weight_history(entries: Iterable[ProgressEntry]) -> MetricSeries:
    return series_for(entries, "weight")


def weight_change(entries: Iterable[ProgressEntry]) -> float:
    """Latest recorded weight minus the earliest one; 0 with fewer than two weigh-ins."""
    weights = weight_history(entries).values()
    if len(weights) < 2:
        return 0.0
    return weights[-1] - weights[0]


def weight_delta(entries: Iterable[ProgressEntry]) -> Optional[Delta]:
    """Change between the two most recent weigh-ins, or None."""
    weights = weight_history(entries).values()
    if len(weights) < 2:
        return None
    return delta(weights[-1], weights[-2])


def _measurements_on(entries: Iterable[ProgressEntry], day: date) -> Optional[Measurements]:
    same_day = [e for e in entries if e.date == day and e.measurements is not None]
    latest = latest_entry(same_day)
    return latest.measurements if latest else None


def sleep_log(
    entries: Iterable[ProgressEntry],
    as_of: DateLike,
    nights: int = 7,
) -> List[SleepNight]:
    """
    The last `nights` logged nights up to as_of, oldest first.

    Only nights with a sleepHours measurement are included; missing nights
    are not padded.
    """
    if nights <= 0:
        raise MetricValidationError(f"nights must be positive, got {nights}")

    as_of = to_day(as_of)
    logged = [
        e for e in sorted_newest_first(entries)
        if e.date <= as_of and e.measurements is not None and e.measurements.sleep_hours is not None
    ]

    result = []
    seen = set()
    for entry in logged:
        if entry.date in seen:
            continue
        seen.add(entry.date)
        m = entry.measurements
        result.append(SleepNight(date=entry.date, hours=m.sleep_hours, quality=m.sleep_quality or 0))
        if len(result) == nights:
            break

    result.reverse()
    return result


def sleep_summary(nights: Iterable[SleepNight]) -> SleepSummary:
    """Average hours and quality over nights with sleep recorded."""
    valid = [n for n in nights if n.hours > 0]
    if not valid:
        return SleepSummary(avg_hours=0.0, avg_quality=0.0, nights=0)
    return SleepSummary(
        avg_hours=math.fsum(n.hours for n in valid) / len(valid),
        avg_quality=math.fsum(n.quality for n in valid) / len(valid),
        nights=len(valid),
    )


def steps_data(
    entries: Iterable[ProgressEntry],
    as_of: DateLike,
    default_goal: float = DEFAULT_STEPS_GOAL,
) -> StepsData:
    """
    Steps logged on as_of against the step goal.

    The change is relative to the most recent earlier day with steps.
    A stepsGoal measurement on the day overrides default_goal.
    """
    entries = list(entries)
    as_of = to_day(as_of)

    today = _measurements_on(entries, as_of)
    current = today.steps if today and today.steps is not None else 0
    goal = today.steps_goal if today and today.steps_goal else default_goal

    earlier = [
        e for e in sorted_newest_first(entries)
        if e.date < as_of and e.measurements is not None and e.measurements.steps is not None
    ]
    previous = earlier[0].measurements.steps if earlier else 0

    return StepsData(current=current, goal=goal, change_percent=percent_change(current, previous))


def water_data(
    entries: Iterable[ProgressEntry],
    water_intakes: Iterable[WaterIntakeEntry],
    as_of: DateLike,
    default_goal: float = DEFAULT_WATER_GOAL_LITERS,
) -> WaterData:
    """
    Water drunk on as_of, in litres.

    Logged intakes (millilitres) are summed. If none were logged that day,
    the waterIntake measurement of the day's progress entry is used.
    A waterGoal measurement on the day overrides default_goal.
    """
    as_of = to_day(as_of)
    today = _measurements_on(list(entries), as_of)

    amounts = [w.amount for w in water_intakes if w.date == as_of]
    if amounts:
        current = math.fsum(amounts) / 1000
    elif today is not None and today.water_intake is not None:
        current = today.water_intake
    else:
        current = 0.0

    goal = today.water_goal if today and today.water_goal else default_goal
    logger.debug(f"[PROGRESS] water on {as_of}: {current:.2f}/{goal} L")
    return WaterData(current=current, goal=goal)
