import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, TypeVar

from .models import Assignment, Engineer, Project, ProjectStatus

logger = logging.getLogger(__name__)

ENGINEERS_FILE = "engineers.json"
PROJECTS_FILE = "projects.json"
ASSIGNMENTS_FILE = "assignments.json"

# File name -> key of the REST envelope it may be wrapped in
SNAPSHOT_ENVELOPES = {ENGINEERS_FILE: "engineers", PROJECTS_FILE: "projects", ASSIGNMENTS_FILE: "assignments"}

T = TypeVar("T")


class SnapshotSource(Protocol):
    """Read-only view of the engineers, projects and assignments held by the backend."""

    def list_engineers(self) -> List[Engineer]: ...

    def list_projects(self, status: Optional[ProjectStatus] = None) -> List[Project]: ...

    def list_assignments(self, engineer_id: Optional[str] = None, project_id: Optional[str] = None) -> List[Assignment]: ...

    def list_assignments_by_engineer(self, engineer_id: str) -> List[Assignment]: ...


@dataclass(frozen=True)
class AssignmentView:
    assignment: Assignment
    engineer: Optional[Engineer]
    project: Optional[Project]

    @property
    def engineer_name(self) -> str:
        return self.engineer.name if self.engineer else "Unknown Engineer"

    @property
    def project_name(self) -> str:
        return self.project.name if self.project else "Unknown Project"


def join_assignments(assignments: Iterable[Assignment], engineers: Iterable[Engineer], projects: Iterable[Project]) -> List[AssignmentView]:
    """Expands engineer/project ids into their records; dangling ids resolve to None."""
    by_engineer = {e.id: e for e in engineers}
    by_project = {p.id: p for p in projects}
    return [AssignmentView(a, by_engineer.get(a.engineer_id), by_project.get(a.project_id)) for a in assignments]


# --- JSON FILE SOURCE ---

def _read_records(filepath: Path, envelope: str) -> List[Dict[str, Any]]:
    """Reads a JSON list, or a REST-style {"<envelope>": [...]} object. Missing or corrupt files read as empty."""
    try:
        with filepath.open("r") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning("Snapshot file %s not found; treating as empty", filepath)
        return []
    except json.JSONDecodeError as exc:
        logger.warning("Snapshot file %s is not valid JSON (%s); treating as empty", filepath, exc)
        return []

    if isinstance(data, dict):
        if envelope not in data:
            logger.warning("Snapshot file %s has no '%s' key (found: %s); treating as empty", filepath, envelope, ", ".join(sorted(data)) or "none")
            return []
        data = data[envelope]
    if not isinstance(data, list):
        logger.warning("Snapshot file %s does not hold a list of %s", filepath, envelope)
        return []
    return data


def _parse_all(records: List[Dict[str, Any]], parse: Callable[[Dict[str, Any]], T], kind: str) -> List[T]:
    parsed = []
    for raw in records:
        try:
            parsed.append(parse(raw))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Skipping malformed %s record: %s", kind, exc)
    return parsed


class JsonSnapshotSource:
    """
    Serves a snapshot exported from the REST backend as three JSON files in one
    directory. Files are read once, on first access, so every query against a
    source instance sees the same point-in-time view.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self._engineers: Optional[List[Engineer]] = None
        self._projects: Optional[List[Project]] = None
        self._assignments: Optional[List[Assignment]] = None

    def load(self) -> "JsonSnapshotSource":
        if self._engineers is None:
            self._engineers = _parse_all(_read_records(self.data_dir / ENGINEERS_FILE, SNAPSHOT_ENVELOPES[ENGINEERS_FILE]), Engineer.from_dict, "engineer")
            self._projects = _parse_all(_read_records(self.data_dir / PROJECTS_FILE, SNAPSHOT_ENVELOPES[PROJECTS_FILE]), Project.from_dict, "project")
            self._assignments = _parse_all(_read_records(self.data_dir / ASSIGNMENTS_FILE, SNAPSHOT_ENVELOPES[ASSIGNMENTS_FILE]), Assignment.from_dict, "assignment")
            logger.debug(
                "Loaded snapshot from %s: %d engineers, %d projects, %d assignments",
                self.data_dir, len(self._engineers), len(self._projects), len(self._assignments),
            )
        return self

    def list_engineers(self) -> List[Engineer]:
        return list(self.load()._engineers)

    def get_engineer(self, engineer_id: str) -> Optional[Engineer]:
        return next((e for e in self.list_engineers() if e.id == engineer_id), None)

    def list_projects(self, status: Optional[ProjectStatus] = None) -> List[Project]:
        projects = self.load()._projects
        return [p for p in projects if status is None or p.status == status]

    def get_project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self.list_projects() if p.id == project_id), None)

    def list_assignments(self, engineer_id: Optional[str] = None, project_id: Optional[str] = None) -> List[Assignment]:
        return [
            a for a in self.load()._assignments
            if (engineer_id is None or a.engineer_id == engineer_id) and (project_id is None or a.project_id == project_id)
        ]

    def list_assignments_by_engineer(self, engineer_id: str) -> List[Assignment]:
        return self.list_assignments(engineer_id=engineer_id)
