from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from .intervals import add_months, contains_instant, is_on_or_after, month_start, to_instant
from .models import DEFAULT_MAX_CAPACITY, Assignment, Engineer


@dataclass(frozen=True)
class Capacity:
    current_capacity: int
    available_capacity: int


@dataclass(frozen=True)
class MonthUtilization:
    year: int
    month: int
    label: str
    utilization: int


def is_current(assignment: Assignment, now: datetime) -> bool:
    """An assignment is current until its end date passes, including ones that have not started yet."""
    return is_on_or_after(assignment.end_date, now)


def assignments_for_engineer(assignments: Iterable[Assignment], engineer_id: str) -> List[Assignment]:
    return [a for a in assignments if a.engineer_id == engineer_id]


def active_assignments(assignments: Iterable[Assignment], now: datetime) -> List[Assignment]:
    return [a for a in assignments if is_current(a, now)]


def completed_assignments(assignments: Iterable[Assignment], now: datetime) -> List[Assignment]:
    return [a for a in assignments if not is_current(a, now)]


def compute_capacity(engineer: Engineer, assignments: Iterable[Assignment], now: datetime) -> Capacity:
    """
    Sums the allocation of every current assignment held by the engineer and
    derives the remaining headroom against their max capacity. The sum is never
    clamped, so an over-allocated engineer reports more than their maximum.
    """
    current = 0
    for a in assignments:
        if a.engineer_id == engineer.id and is_current(a, now):
            current += a.allocation_percentage or 0

    max_capacity = engineer.max_capacity if engineer.max_capacity is not None else DEFAULT_MAX_CAPACITY
    return Capacity(current_capacity=current, available_capacity=max(0, max_capacity - current))


def monthly_utilization(assignments: Iterable[Assignment], now: datetime, months: int = 3) -> List[MonthUtilization]:
    """
    Forecasts utilization for the month containing `now` and the following ones.
    An assignment counts towards a month when it spans that month's first day;
    each month is capped at 100%.
    """
    assignments, now = list(assignments), to_instant(now)
    forecast = []
    for offset in range(months):
        year, month = add_months(now.year, now.month, offset)
        first = month_start(year, month)
        total = sum(a.allocation_percentage or 0 for a in assignments if contains_instant(a.start_date, a.end_date, first))
        forecast.append(MonthUtilization(year, month, first.strftime("%b %Y"), min(total, 100)))
    return forecast
