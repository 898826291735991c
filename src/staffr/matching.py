from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .capacity import Capacity, compute_capacity
from .models import Assignment, Engineer, Project, ProjectStatus, Seniority


@dataclass(frozen=True)
class CandidateEngineer:
    engineer: Engineer
    capacity: Capacity
    matched_skills: Tuple[str, ...]

    @property
    def seniority(self) -> Seniority:
        return self.engineer.seniority

    @property
    def department(self) -> Optional[str]:
        return self.engineer.department


def matched_skills(engineer: Engineer, required_skills: Iterable[str]) -> Tuple[str, ...]:
    """Required skills the engineer lists, in the project's order, without repeats."""
    seen = []
    for skill in required_skills:
        if skill in engineer.skills and skill not in seen:
            seen.append(skill)
    return tuple(seen)


def find_suitable_engineers(
    project: Project, engineers: Iterable[Engineer], assignments: Iterable[Assignment], now: datetime
) -> List[CandidateEngineer]:
    """
    Engineers sharing at least one skill with the project's requirements,
    most matched skills first. Ties keep the order engineers were supplied in.
    A project without required skills has no candidates.
    """
    if not project.required_skills:
        return []

    assignments = list(assignments)
    candidates = []
    for engineer in engineers:
        matches = matched_skills(engineer, project.required_skills)
        if not matches: continue
        candidates.append(CandidateEngineer(engineer, compute_capacity(engineer, assignments, now), matches))

    candidates.sort(key=lambda c: len(c.matched_skills), reverse=True)
    return candidates


# --- ROSTER FILTERS ---

def filter_engineers(engineers: Iterable[Engineer], search: Optional[str] = None, skill: Optional[str] = None) -> List[Engineer]:
    result = []
    for e in engineers:
        if search:
            term = search.lower()
            haystack = [e.name.lower(), (e.email or "").lower()] + [s.lower() for s in e.skills]
            if not any(term in h for h in haystack): continue
        if skill and not any(skill.lower() in s.lower() for s in e.skills): continue
        result.append(e)
    return result


def filter_projects(projects: Iterable[Project], search: Optional[str] = None, status: Optional[ProjectStatus] = None) -> List[Project]:
    result = []
    for p in projects:
        if search and not (search.lower() in p.name.lower() or search.lower() in (p.description or "").lower()): continue
        if status is not None and p.status != status: continue
        result.append(p)
    return result


def all_skills(engineers: Iterable[Engineer]) -> List[str]:
    return sorted({s for e in engineers for s in e.skills})
