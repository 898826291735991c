import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .analytics import OVERLOAD_RATIO
from .clock import Clock, FixedClock, SystemClock
from .intervals import AssignmentStatus
from .snapshot import JsonSnapshotSource

# Initialize a single console to be imported across all apps
console = Console()

def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

def resolve_clock(now: Optional[str]) -> Clock:
    if not now:
        return SystemClock()
    try:
        return FixedClock(now)
    except ValueError:
        typer.secho(f"⚠️ Invalid --now value '{now}'. Please use YYYY-MM-DD (e.g., 2025-12-31).", fg="yellow")
        raise typer.Exit(1)

def format_date(value: datetime, date_format: str = "%Y-%m-%d") -> str:
    return value.strftime(date_format)

def get_utilization_color(utilization_pct: float, max_capacity: int = 100) -> str:
    if utilization_pct > max_capacity * OVERLOAD_RATIO: return "red"
    if utilization_pct >= max_capacity * 0.5: return "green"
    return "yellow"

def get_status_style(status: AssignmentStatus) -> str:
    if status == AssignmentStatus.COMPLETED: return "dim"
    if status == AssignmentStatus.ENDING_SOON: return "yellow"
    return "green"

def format_status(status: AssignmentStatus) -> str:
    label = status.value.replace("_", " ").title()
    return f"[{get_status_style(status)}]{label}[/]"

class Session:
    """Per-invocation state shared by every command: one snapshot, one clock, one config."""

    def __init__(self, source: JsonSnapshotSource, clock: Clock, config: dict):
        self.source = source
        self.clock = clock
        self.config = config
        self._now = None

    @property
    def now(self) -> datetime:
        # Read the clock once so every figure in a report shares the same instant
        if self._now is None:
            self._now = self.clock.now()
        return self._now

    def fmt(self, value: datetime) -> str:
        return format_date(value, self.config.get("date_format", "%Y-%m-%d"))

class SessionOptions:
    """Global options captured by the root callback. The snapshot is only opened once a command asks for it."""

    def __init__(self, data_dir: Path, now: Optional[str], config: dict):
        self.data_dir = data_dir
        self.now = now
        self.config = config
        self.session: Optional[Session] = None

    def open(self) -> Session:
        if not self.data_dir.is_dir():
            typer.secho(f"❌ Snapshot directory {self.data_dir} does not exist. Run 'staffr setup' or pass --data-dir.", fg="red")
            raise typer.Exit(1)
        return Session(JsonSnapshotSource(self.data_dir).load(), resolve_clock(self.now), self.config)

def get_session(ctx: typer.Context) -> Session:
    options = ctx.find_root().obj
    if options.session is None:
        options.session = options.open()
    return options.session
