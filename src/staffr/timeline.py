from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from .intervals import contains_instant, day_instant, days_in_month, is_on_or_after, to_instant
from .models import Assignment


@dataclass(frozen=True)
class AssignmentFilter:
    project_id: Optional[str] = None
    engineer_id: Optional[str] = None

    def matches(self, assignment: Assignment) -> bool:
        if self.project_id is not None and assignment.project_id != self.project_id: return False
        if self.engineer_id is not None and assignment.engineer_id != self.engineer_id: return False
        return True


@dataclass(frozen=True)
class DayBucket:
    day: int
    instant: datetime
    assignments: List[Assignment]


def bucket_assignments_by_month(
    assignments: Iterable[Assignment], year: int, month: int, filters: Optional[AssignmentFilter] = None
) -> List[DayBucket]:
    """
    One bucket per calendar day of the month, holding every assignment whose
    date range includes that day (both ends inclusive). Buckets are complete
    and ordered by assignment id.
    """
    selected = sorted((a for a in assignments if filters is None or filters.matches(a)), key=lambda a: a.id)

    buckets = []
    for day in range(1, days_in_month(year, month) + 1):
        instant = day_instant(year, month, day)
        hits = [a for a in selected if contains_instant(a.start_date, a.end_date, instant)]
        buckets.append(DayBucket(day=day, instant=instant, assignments=hits))
    return buckets


def upcoming_assignments(assignments: Iterable[Assignment], now: datetime, limit: Optional[int] = None) -> List[Assignment]:
    """Assignments starting at or after `now`, soonest first."""
    upcoming = sorted((a for a in assignments if is_on_or_after(a.start_date, now)), key=lambda a: to_instant(a.start_date))
    return upcoming if limit is None else upcoming[:max(limit, 0)]
