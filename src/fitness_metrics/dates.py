"""Calendar-day normalization shared by every aggregation module."""
from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime, str]


def to_day(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO string to a calendar date.

    Any time-of-day component is discarded. Timezone conversion is the
    caller's job; an aware datetime keeps its own wall-clock date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError as e:
            raise ValueError(f"Invalid date string {value!r}: {e}") from e
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    day = to_day(start)
    last = to_day(end)
    while day <= last:
        yield day
        day += timedelta(days=1)
