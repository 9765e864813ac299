"""Pytest configuration and fixtures for slnfcheck tests."""

from __future__ import annotations

import json
import os
import posixpath

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

import pytest  # noqa: E402

from slnfcheck.errors import SolutionParseError  # noqa: E402
from slnfcheck.filesystem import MemoryFileSystem  # noqa: E402
from slnfcheck.solution import SolutionEntry, SolutionParser  # noqa: E402

BASE_PATH = "/test"
FILTER_PATH = "/test/test.slnf"
SOLUTION_PATH = "/test/test.sln"


class FakeSolutionParser(SolutionParser):
    """Solution parser returning preconfigured projects for in-memory solutions."""

    def __init__(self) -> None:
        self._solutions: dict[str, list[SolutionEntry]] = {}
        self._failures: dict[str, str] = {}
        self.calls: list[str] = []

    def add_solution(
        self,
        solution_path: str,
        projects: list[str],
        folders: list[str] | None = None,
    ) -> None:
        """Register a solution whose projects are given relative to its directory."""
        directory = posixpath.dirname(solution_path)
        entries = [
            SolutionEntry(path=posixpath.join(directory, project.replace("\\", "/")))
            for project in projects
        ]
        entries.extend(
            SolutionEntry(path=posixpath.join(directory, folder), is_folder=True)
            for folder in folders or []
        )
        self._solutions[solution_path.casefold()] = entries

    def fail_on(self, solution_path: str, message: str) -> None:
        """Make parsing the given solution raise SolutionParseError."""
        self._failures[solution_path.casefold()] = message

    def parse(self, solution_path: str) -> list[SolutionEntry]:
        self.calls.append(solution_path)
        key = solution_path.casefold()
        if key in self._failures:
            raise SolutionParseError(self._failures[key], solution_path)
        return list(self._solutions.get(key, []))


def filter_json(solution_path: str, projects: list[str]) -> str:
    """Render the JSON content of a solution filter file."""
    return json.dumps({"solution": {"path": solution_path, "projects": projects}}, indent=2)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create an in-memory filesystem rooted at /test."""
    return MemoryFileSystem(BASE_PATH)


@pytest.fixture
def fake_parser() -> FakeSolutionParser:
    """Create a solution parser with no solutions registered."""
    return FakeSolutionParser()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SLNFCHECK_* variables so the host environment cannot leak into tests."""
    for var in list(os.environ):
        if var.startswith("SLNFCHECK_"):
            monkeypatch.delenv(var)
