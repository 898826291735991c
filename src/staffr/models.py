from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .intervals import to_instant

DEFAULT_MAX_CAPACITY = 100


class StaffrError(Exception):
    """Base class for errors raised by staffr."""


class InvalidRecordError(StaffrError, ValueError):
    """A raw engineer/project/assignment record could not be parsed."""


class _FallbackEnum(str, Enum):
    @classmethod
    def parse(cls, value: Optional[str]):
        if value is None: return cls("unknown")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls("unknown")


class Role(_FallbackEnum):
    MANAGER = "manager"
    ENGINEER = "engineer"
    UNKNOWN = "unknown"


class Seniority(_FallbackEnum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    UNKNOWN = "unknown"


class ProjectStatus(_FallbackEnum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


# --- RAW RECORD HELPERS ---

def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _ref_id(value: Any) -> str:
    """Reduces a reference that may be a bare id or an expanded sub-record to its id."""
    if isinstance(value, dict):
        value = _pick(value, "_id", "id")
    return "" if value is None else str(value)


def _instant(data: Dict[str, Any], kind: str, *keys: str) -> datetime:
    raw = _pick(data, *keys)
    if raw is None:
        raise InvalidRecordError(f"{kind} {_pick(data, '_id', 'id')!r} is missing {keys[0]}")
    try:
        return to_instant(raw)
    except ValueError as exc:
        raise InvalidRecordError(f"{kind} {_pick(data, '_id', 'id')!r}: {exc}") from exc



def _skill_list(data: Dict[str, Any], kind: str, *keys: str) -> Tuple[str, ...]:
    """A lone skill name counts as one skill rather than a sequence of characters."""
    raw = _pick(data, *keys, default=())
    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, (list, tuple, set, frozenset)):
        raise InvalidRecordError(f"{kind} {_pick(data, '_id', 'id')!r}: {keys[0]} must be a list, got {type(raw).__name__}")
    return tuple(str(s) for s in raw)

# --- ENTITIES ---

@dataclass(frozen=True)
class Engineer:
    id: str
    name: str
    email: str = ""
    role: Role = Role.ENGINEER
    skills: FrozenSet[str] = field(default_factory=frozenset)
    seniority: Seniority = Seniority.UNKNOWN
    max_capacity: int = DEFAULT_MAX_CAPACITY
    department: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Engineer":
        max_capacity = _pick(data, "maxCapacity", "max_capacity", default=DEFAULT_MAX_CAPACITY)
        return cls(
            id=_ref_id(_pick(data, "_id", "id")),
            name=_pick(data, "name", default=""),
            email=_pick(data, "email", default=""),
            role=Role.parse(_pick(data, "role")),
            skills=frozenset(_skill_list(data, "Engineer", "skills")),
            seniority=Seniority.parse(_pick(data, "seniority")),
            max_capacity=int(max_capacity),
            department=_pick(data, "department"),
        )


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    start_date: datetime
    end_date: datetime
    description: str = ""
    required_skills: Tuple[str, ...] = ()
    team_size: int = 0
    status: ProjectStatus = ProjectStatus.PLANNING
    manager_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        manager = _pick(data, "managerId", "manager_id")
        return cls(
            id=_ref_id(_pick(data, "_id", "id")),
            name=_pick(data, "name", default=""),
            start_date=_instant(data, "Project", "startDate", "start_date"),
            end_date=_instant(data, "Project", "endDate", "end_date"),
            description=_pick(data, "description", default=""),
            required_skills=_skill_list(data, "Project", "requiredSkills", "required_skills"),
            team_size=int(_pick(data, "teamSize", "team_size", default=0)),
            status=ProjectStatus.parse(_pick(data, "status")),
            manager_id=_ref_id(manager) if manager is not None else None,
        )


@dataclass(frozen=True)
class Assignment:
    id: str
    engineer_id: str
    project_id: str
    start_date: datetime
    end_date: datetime
    allocation_percentage: int = 0
    role: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assignment":
        return cls(
            id=_ref_id(_pick(data, "_id", "id")),
            engineer_id=_ref_id(_pick(data, "engineerId", "engineer_id")),
            project_id=_ref_id(_pick(data, "projectId", "project_id")),
            start_date=_instant(data, "Assignment", "startDate", "start_date"),
            end_date=_instant(data, "Assignment", "endDate", "end_date"),
            allocation_percentage=int(_pick(data, "allocationPercentage", "allocation_percentage", default=0)),
            role=_pick(data, "role", default=""),
        )
