"""Data models for solution filter validation.

A solution filter (``.slnf``) is a JSON document naming a parent solution
and the subset of its projects to load:

    {
      "solution": {
        "path": "App.sln",
        "projects": ["src\\App\\App.csproj", "tests\\App.Tests\\App.Tests.csproj"]
      }
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from slnfcheck.errors import FilterParseError


@dataclass(frozen=True)
class FilterDocument:
    """Parsed contents of a solution filter file.

    Attributes:
        solution_path: Path to the parent solution, relative to the filter file.
        projects: Declared project paths, relative to the parent solution, in
            the order and textual form they appear in the file.
    """

    solution_path: str
    projects: tuple[str, ...] = ()


@dataclass
class ValidationResult:
    """Outcome of validating one solution filter file.

    Attributes:
        filter_path: Path of the filter file as given to the validator.
        solution_path: Absolute path of the parent solution.
        document: The parsed filter document.
        solution_exists: False if the parent solution is missing or could not
            be read by the solution parser.
        missing_from_solution: Declared projects the parent solution does not contain.
        missing_from_disk: Declared projects with no file on disk.
        solution_error: Message of the solution parser failure, if any.
    """

    filter_path: str
    solution_path: str
    document: FilterDocument
    solution_exists: bool = True
    missing_from_solution: list[str] = field(default_factory=list)
    missing_from_disk: list[str] = field(default_factory=list)
    solution_error: str | None = None

    @property
    def has_issues(self) -> bool:
        """True if the filter has drifted from its solution or the disk."""
        return (
            not self.solution_exists
            or bool(self.missing_from_solution)
            or bool(self.missing_from_disk)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "filter": self.filter_path,
            "solution": self.solution_path,
            "solution_exists": self.solution_exists,
            "projects": list(self.document.projects),
            "missing_from_solution": list(self.missing_from_solution),
            "missing_from_disk": list(self.missing_from_disk),
            "solution_error": self.solution_error,
            "has_issues": self.has_issues,
        }


def parse_filter_document(text: str, source: str | None = None) -> FilterDocument:
    """Parse the JSON text of a solution filter.

    Only ``solution.path`` and ``solution.projects`` are read; any other
    fields are ignored.

    Args:
        text: JSON content of the filter file.
        source: Path of the file, used in error messages.

    Returns:
        The parsed FilterDocument.

    Raises:
        FilterParseError: If the text is not valid JSON or lacks a required field.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FilterParseError(f"invalid JSON: {e}", source) from e

    if not isinstance(data, dict):
        raise FilterParseError("expected a JSON object", source)

    solution = data.get("solution")
    if not isinstance(solution, dict):
        raise FilterParseError("missing 'solution' object", source)

    solution_path = solution.get("path")
    if not isinstance(solution_path, str):
        raise FilterParseError("'solution.path' must be a string", source)

    projects = solution.get("projects")
    if not isinstance(projects, list):
        raise FilterParseError("'solution.projects' must be an array", source)

    for project in projects:
        if not isinstance(project, str):
            raise FilterParseError(
                f"'solution.projects' entries must be strings, got {project!r}", source
            )

    return FilterDocument(solution_path=solution_path, projects=tuple(projects))
