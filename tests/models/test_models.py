"""
tests/models/test_models.py

Covers:
  - Parsing REST (camelCase) and snake_case records
  - Defaults for missing optional fields
  - Closed enums with an unknown fallback
  - Embedded references reduced to ids
  - Invalid dates surfacing as InvalidRecordError
  - A lone skill string read as one skill
"""

import pytest

from staffr.intervals import to_instant
from staffr.models import (
    Assignment,
    Engineer,
    InvalidRecordError,
    Project,
    ProjectStatus,
    Role,
    Seniority,
    StaffrError,
)


# ── Engineer ──────────────────────────────────────────────────────────────────

class TestEngineerFromDict:

    def test_rest_payload(self):
        e = Engineer.from_dict({
            "_id": "64a1", "name": "Ana", "email": "ana@example.com", "role": "engineer",
            "skills": ["React", "Node.js"], "seniority": "senior", "maxCapacity": 50, "department": "Web",
        })
        assert e.id == "64a1"
        assert e.skills == frozenset({"React", "Node.js"})
        assert e.seniority == Seniority.SENIOR
        assert e.max_capacity == 50
        assert e.role == Role.ENGINEER
        assert e.department == "Web"

    def test_snake_case_payload(self):
        e = Engineer.from_dict({"id": 7, "name": "Ben", "max_capacity": 80})
        assert e.id == "7"
        assert e.max_capacity == 80

    def test_defaults(self):
        e = Engineer.from_dict({"_id": "x", "name": "Cy"})
        assert e.skills == frozenset()
        assert e.max_capacity == 100
        assert e.seniority == Seniority.UNKNOWN
        assert e.role == Role.UNKNOWN

    def test_null_max_capacity_defaults(self):
        assert Engineer.from_dict({"_id": "x", "name": "Cy", "maxCapacity": None}).max_capacity == 100

    def test_unknown_role(self):
        assert Engineer.from_dict({"_id": "x", "name": "Cy", "role": "director"}).role == Role.UNKNOWN

    def test_role_case_insensitive(self):
        assert Engineer.from_dict({"_id": "x", "name": "Cy", "role": "Manager"}).role == Role.MANAGER

    def test_single_skill_string(self):
        assert Engineer.from_dict({"_id": "x", "name": "Cy", "skills": "React"}).skills == frozenset({"React"})

    def test_non_list_skills_raise(self):
        with pytest.raises(InvalidRecordError, match="skills"):
            Engineer.from_dict({"_id": "x", "name": "Cy", "skills": 42})


# ── Project ───────────────────────────────────────────────────────────────────

class TestProjectFromDict:

    def test_rest_payload(self):
        p = Project.from_dict({
            "_id": "p1", "name": "Portal", "description": "Customer portal",
            "startDate": "2024-01-01T00:00:00.000Z", "endDate": "2024-06-30T00:00:00.000Z",
            "requiredSkills": ["React", "Node.js"], "teamSize": 4, "status": "active",
            "managerId": {"_id": "m1", "name": "Mo"},
        })
        assert p.start_date == to_instant("2024-01-01")
        assert p.required_skills == ("React", "Node.js")
        assert p.team_size == 4
        assert p.status == ProjectStatus.ACTIVE
        assert p.manager_id == "m1"

    def test_unknown_status(self):
        p = Project.from_dict({"_id": "p1", "name": "X", "startDate": "2024-01-01", "endDate": "2024-02-01", "status": "archived"})
        assert p.status == ProjectStatus.UNKNOWN

    def test_missing_skills(self):
        p = Project.from_dict({"_id": "p1", "name": "X", "startDate": "2024-01-01", "endDate": "2024-02-01"})
        assert p.required_skills == ()
        assert p.manager_id is None

    def test_single_required_skill_string(self):
        p = Project.from_dict({"_id": "p1", "name": "X", "startDate": "2024-01-01", "endDate": "2024-02-01", "requiredSkills": "Rust"})
        assert p.required_skills == ("Rust",)

    def test_missing_date_raises(self):
        with pytest.raises(InvalidRecordError):
            Project.from_dict({"_id": "p1", "name": "X", "startDate": "2024-01-01"})


# ── Assignment ────────────────────────────────────────────────────────────────

class TestAssignmentFromDict:

    def test_bare_references(self):
        a = Assignment.from_dict({
            "_id": "a1", "engineerId": "e1", "projectId": "p1", "allocationPercentage": 60,
            "startDate": "2024-01-10", "endDate": "2024-01-20", "role": "Tech Lead",
        })
        assert (a.engineer_id, a.project_id) == ("e1", "p1")
        assert a.allocation_percentage == 60
        assert a.role == "Tech Lead"

    def test_embedded_references_reduced_to_ids(self):
        a = Assignment.from_dict({
            "_id": "a1", "engineerId": {"_id": "e1", "name": "Ana"}, "projectId": {"_id": "p1", "name": "Portal"},
            "startDate": "2024-01-10", "endDate": "2024-01-20",
        })
        assert (a.engineer_id, a.project_id) == ("e1", "p1")

    def test_missing_allocation_is_zero(self):
        a = Assignment.from_dict({"_id": "a1", "engineerId": "e1", "projectId": "p1", "startDate": "2024-01-10", "endDate": "2024-01-20"})
        assert a.allocation_percentage == 0

    def test_unparseable_date_raises(self):
        with pytest.raises(InvalidRecordError) as exc:
            Assignment.from_dict({"_id": "a1", "engineerId": "e1", "projectId": "p1", "startDate": "soon", "endDate": "2024-01-20"})
        assert "a1" in str(exc.value)

    def test_invalid_record_error_hierarchy(self):
        assert issubclass(InvalidRecordError, StaffrError)
        assert issubclass(InvalidRecordError, ValueError)


# ── Immutability ──────────────────────────────────────────────────────────────

class TestFrozen:

    def test_engineer_is_frozen(self):
        e = Engineer(id="x", name="X")
        with pytest.raises(AttributeError):
            e.max_capacity = 50
