"""
Team-wide reductions over a snapshot: utilization, overload, project status
mix, skill demand and skill gap. Every figure is recomputed from the full
snapshot on each call and every ratio is zero-safe.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .capacity import Capacity, active_assignments, compute_capacity
from .models import Assignment, Engineer, Project, ProjectStatus

OVERLOAD_RATIO = 0.9
AVAILABLE_THRESHOLD = 20
LOW_COVERAGE_THRESHOLD = 2

_TRACKED_STATUSES = (ProjectStatus.PLANNING, ProjectStatus.ACTIVE, ProjectStatus.COMPLETED)


@dataclass(frozen=True)
class EngineerLoad:
    engineer: Engineer
    capacity: Capacity

    @property
    def current_capacity(self) -> int:
        return self.capacity.current_capacity

    @property
    def available_capacity(self) -> int:
        return self.capacity.available_capacity

    @property
    def is_overloaded(self) -> bool:
        return self.current_capacity > self.engineer.max_capacity * OVERLOAD_RATIO

    @property
    def is_available(self) -> bool:
        return self.available_capacity > AVAILABLE_THRESHOLD


@dataclass(frozen=True)
class SkillGap:
    required_skills: List[str]
    available_skills: List[str]
    missing_skills: List[str]
    low_coverage_skills: List[str]
    coverage_percentage: float


@dataclass(frozen=True)
class TeamAnalytics:
    total_engineers: int
    active_projects: int
    active_assignments: int
    overloaded_engineers: int
    available_engineers: int
    average_utilization: float
    project_status_distribution: Dict[ProjectStatus, int]
    skill_demand: List[Tuple[str, int]]
    skill_gap: SkillGap
    loads: List[EngineerLoad] = field(default_factory=list)

    @property
    def underutilized_engineers(self) -> int:
        return self.available_engineers


def attach_capacity(engineers: Iterable[Engineer], assignments: Iterable[Assignment], now: datetime) -> List[EngineerLoad]:
    assignments = list(assignments)
    return [EngineerLoad(e, compute_capacity(e, assignments, now)) for e in engineers]


def count_overloaded(loads: Iterable[EngineerLoad]) -> int:
    return sum(1 for l in loads if l.is_overloaded)


def count_available(loads: Iterable[EngineerLoad]) -> int:
    return sum(1 for l in loads if l.is_available)


def average_utilization(loads: Sequence[EngineerLoad]) -> float:
    if not loads: return 0.0
    return sum(l.current_capacity for l in loads) / len(loads)


def project_status_distribution(projects: Iterable[Project]) -> Dict[ProjectStatus, int]:
    counts = {status: 0 for status in _TRACKED_STATUSES}
    for p in projects:
        if p.status in counts:
            counts[p.status] += 1
    return counts


def skill_demand(projects: Iterable[Project], top: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Number of projects requiring each skill, most demanded first. Ties keep the
    order in which skills were first seen; a project listing a skill twice counts once.
    """
    counts: Dict[str, int] = {}
    for p in projects:
        for skill in dict.fromkeys(p.required_skills):
            counts[skill] = counts.get(skill, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked if top is None else ranked[:max(top, 0)]


def skill_gap_analysis(engineers: Sequence[Engineer], projects: Iterable[Project]) -> SkillGap:
    required = list(dict.fromkeys(s for p in projects for s in p.required_skills))
    available = list(dict.fromkeys(s for e in engineers for s in sorted(e.skills)))
    available_set = set(available)

    missing = [s for s in required if s not in available_set]
    low_coverage = [s for s in required if sum(1 for e in engineers if s in e.skills) < LOW_COVERAGE_THRESHOLD]
    coverage = len(available) / len(required) * 100 if required else 0.0

    return SkillGap(
        required_skills=required, available_skills=available,
        missing_skills=missing, low_coverage_skills=low_coverage,
        coverage_percentage=coverage,
    )


def compute_team_analytics(
    engineers: Iterable[Engineer], projects: Iterable[Project], assignments: Iterable[Assignment],
    now: datetime, top_skills: Optional[int] = None
) -> TeamAnalytics:
    engineers, projects, assignments = list(engineers), list(projects), list(assignments)
    loads = attach_capacity(engineers, assignments, now)
    distribution = project_status_distribution(projects)

    return TeamAnalytics(
        total_engineers=len(engineers),
        active_projects=distribution[ProjectStatus.ACTIVE],
        active_assignments=len(active_assignments(assignments, now)),
        overloaded_engineers=count_overloaded(loads),
        available_engineers=count_available(loads),
        average_utilization=average_utilization(loads),
        project_status_distribution=distribution,
        skill_demand=skill_demand(projects, top=top_skills),
        skill_gap=skill_gap_analysis(engineers, projects),
        loads=loads,
    )
