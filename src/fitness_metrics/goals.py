"""
Goal and percentage utilities.

Shared helpers for percentage-of-goal math, signed deltas used for UI
colouring, and evaluation of daily/weekly goals against a measured value.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)

# Goals count as "at risk" from this hour of the evaluated day on.
AT_RISK_HOUR = 18


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def percent_of_goal(current: float, goal: float) -> int:
    """
    Percentage of a goal reached, rounded to an integer.

    Returns 0 when the goal is zero or negative. Overshoot is kept
    (120% of a step goal is 120); use capped_percent() to clamp.
    """
    if goal <= 0:
        return 0
    return round_half_up(100 * current / goal)


def capped_percent(current: float, goal: float) -> int:
    """percent_of_goal() clamped to 100."""
    return min(percent_of_goal(current, goal), 100)


@dataclass(frozen=True)
class Delta:
    """Unsigned change between two values plus its sign."""

    magnitude: float
    is_positive: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"magnitude": self.magnitude, "is_positive": self.is_positive}


def delta(current: float, previous: float) -> Delta:
    """
    Change from previous to current.

    A zero change counts as positive. Whether positive is good (steps) or
    bad (weight on a cutting plan) is for the caller to decide.
    """
    diff = current - previous
    return Delta(magnitude=abs(diff), is_positive=diff >= 0)


def percent_change(current: float, previous: float) -> int:
    """Relative change in percent, 0 when there is no previous value."""
    if previous == 0:
        return 0
    return round_half_up((current - previous) / previous * 100)


class GoalStatus(str, Enum):
    """Status of a goal."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AT_RISK = "at_risk"
    ACHIEVED = "achieved"


@dataclass(frozen=True)
class GoalDefinition:
    """Definition of a health goal."""

    name: str
    metric: str  # steps, water, sleep, workouts
    target: float
    unit: str
    reminder_threshold: float = 0.5  # fraction of target expected by the evening
    celebration_message: str = "Goal achieved!"


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward a goal for one evaluated value."""

    goal: GoalDefinition
    current_value: float
    status: GoalStatus

    @property
    def progress_percent(self) -> int:
        return percent_of_goal(self.current_value, self.goal.target)

    @property
    def remaining(self) -> float:
        return max(self.goal.target - self.current_value, 0)

    @property
    def message(self) -> Optional[str]:
        if self.status == GoalStatus.ACHIEVED:
            return self.goal.celebration_message
        if self.status == GoalStatus.AT_RISK:
            return (
                f"You're at {self.progress_percent}% of your {self.goal.name} goal. "
                f"{self.remaining:g} {self.goal.unit} to go!"
            )
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "goal_name": self.goal.name,
            "metric": self.goal.metric,
            "target": self.goal.target,
            "unit": self.goal.unit,
            "current_value": self.current_value,
            "progress_percent": self.progress_percent,
            "remaining": self.remaining,
            "status": self.status.value,
            "message": self.message,
        }


DEFAULT_GOALS: List[GoalDefinition] = [
    GoalDefinition(
        name="Daily Steps",
        metric="steps",
        target=10000,
        unit="steps",
        reminder_threshold=0.6,
        celebration_message="You hit your step goal! Great job staying active today!",
    ),
    GoalDefinition(
        name="Water Intake",
        metric="water",
        target=2.5,
        unit="L",
        reminder_threshold=0.5,
        celebration_message="You've stayed hydrated today!",
    ),
    GoalDefinition(
        name="Sleep Duration",
        metric="sleep",
        target=7.0,
        unit="hours",
        reminder_threshold=0.8,
        celebration_message="Great sleep! You got the recommended 7+ hours.",
    ),
    GoalDefinition(
        name="Weekly Workouts",
        metric="workouts",
        target=4,
        unit="workouts",
        reminder_threshold=0.5,
        celebration_message="Weekly workout goal complete!",
    ),
]


def evaluate_goal(
    goal: GoalDefinition,
    value: float,
    as_of: Optional[datetime] = None,
) -> GoalProgress:
    """
    Evaluate a measured value against a goal.

    Args:
        goal: The goal definition
        value: Current measured value for the goal's period
        as_of: Moment of evaluation; from AT_RISK_HOUR on, an unmet goal
            below its reminder threshold is reported as at risk

    Returns:
        GoalProgress for the value
    """
    if value >= goal.target:
        status = GoalStatus.ACHIEVED
    elif value > 0:
        status = GoalStatus.IN_PROGRESS
    else:
        status = GoalStatus.NOT_STARTED

    if (
        status != GoalStatus.ACHIEVED
        and as_of is not None
        and as_of.hour >= AT_RISK_HOUR
        and percent_of_goal(value, goal.target) < goal.reminder_threshold * 100
    ):
        status = GoalStatus.AT_RISK

    logger.debug(f"[GOALS] {goal.name}: {value}/{goal.target} - {status.value}")
    return GoalProgress(goal=goal, current_value=value, status=status)
