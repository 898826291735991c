from datetime import datetime, timezone
from typing import Protocol

from .intervals import InstantLike, to_instant


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Reads the wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same instant; used for reproducible reports and tests."""

    def __init__(self, instant: InstantLike) -> None:
        self._instant = to_instant(instant)

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"
