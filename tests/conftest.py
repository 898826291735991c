"""Shared builders for engineers, projects and assignments."""

import itertools

import pytest

from staffr.intervals import to_instant
from staffr.models import Assignment, Engineer, Project, ProjectStatus, Seniority


@pytest.fixture
def now():
    return to_instant("2024-01-15")


@pytest.fixture
def make_engineer():
    counter = itertools.count(1)

    def _make(skills=(), max_capacity=100, **kwargs):
        n = next(counter)
        kwargs.setdefault("id", f"e{n}")
        kwargs.setdefault("name", f"Engineer {n}")
        kwargs.setdefault("seniority", Seniority.MID)
        return Engineer(skills=frozenset(skills), max_capacity=max_capacity, **kwargs)

    return _make


@pytest.fixture
def make_project():
    counter = itertools.count(1)

    def _make(required_skills=(), status=ProjectStatus.ACTIVE, start="2024-01-01", end="2024-06-30", **kwargs):
        n = next(counter)
        kwargs.setdefault("id", f"p{n}")
        kwargs.setdefault("name", f"Project {n}")
        return Project(
            start_date=to_instant(start), end_date=to_instant(end),
            required_skills=tuple(required_skills), status=status, **kwargs
        )

    return _make


@pytest.fixture
def make_assignment():
    counter = itertools.count(1)

    def _make(engineer_id, start, end, allocation=50, project_id="p1", **kwargs):
        n = next(counter)
        kwargs.setdefault("id", f"a{n:03d}")
        return Assignment(
            engineer_id=engineer_id, project_id=project_id,
            start_date=to_instant(start), end_date=to_instant(end),
            allocation_percentage=allocation, **kwargs
        )

    return _make
