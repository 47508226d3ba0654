"""Shared route dependencies."""
from datetime import date
from typing import Optional

from fastapi import Query


def as_of_day(
    as_of: Optional[date] = Query(
        default=None, description="Reference day (ISO date); defaults to today"
    ),
) -> date:
    """Resolve the reference day for date-relative metrics."""
    return as_of or date.today()
