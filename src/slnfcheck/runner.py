"""Validation runner for checking many filter files in one pass.

Runs the validator over each filter file in turn and aggregates the results.
A failure on one file is recorded and never stops the remaining files.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from slnfcheck.models import ValidationResult
from slnfcheck.validator import FilterValidator


@dataclass
class FileError:
    """A filter file whose validation raised an error.

    Attributes:
        filter_path: Path of the filter file.
        message: Description of the error.
    """

    filter_path: str
    message: str


@dataclass
class AggregatedResult:
    """Aggregated results from validating multiple filter files.

    Attributes:
        status: "pass" if every file validated without issues, "fail" otherwise.
        files_checked: Number of filter files processed.
        results: Results for the files that could be validated.
        errors: Files whose validation raised an error.
    """

    status: Literal["pass", "fail"]
    files_checked: int
    results: list[ValidationResult] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    @property
    def failed_results(self) -> list[ValidationResult]:
        """Results that have issues, in processing order."""
        return [result for result in self.results if result.has_issues]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status,
            "files_checked": self.files_checked,
            "results": [result.to_dict() for result in self.results],
            "errors": [
                {"filter": error.filter_path, "message": error.message}
                for error in self.errors
            ],
        }


class ValidationReporter(Protocol):
    """Receives progress events from a ValidationRunner."""

    def file_started(self, filter_path: str) -> None: ...

    def file_validated(self, result: ValidationResult) -> None: ...

    def file_failed(self, filter_path: str, error: Exception) -> None: ...


class ValidationRunner:
    """Runs a FilterValidator over a list of filter files."""

    def __init__(self, validator: FilterValidator) -> None:
        self.validator = validator

    def run(
        self,
        filter_paths: Iterable[str],
        reporter: ValidationReporter | None = None,
    ) -> AggregatedResult:
        """Validate each filter file sequentially.

        Args:
            filter_paths: Filter files to validate, in order.
            reporter: Optional receiver of per-file progress events.

        Returns:
            AggregatedResult combining all outcomes.
        """
        results: list[ValidationResult] = []
        errors: list[FileError] = []
        files_checked = 0

        for filter_path in filter_paths:
            files_checked += 1
            if reporter is not None:
                reporter.file_started(filter_path)

            try:
                result = self.validator.validate(filter_path)
            except Exception as e:
                errors.append(FileError(filter_path=filter_path, message=str(e)))
                if reporter is not None:
                    reporter.file_failed(filter_path, e)
                continue

            results.append(result)
            if reporter is not None:
                reporter.file_validated(result)

        has_failures = bool(errors) or any(result.has_issues for result in results)
        status: Literal["pass", "fail"] = "fail" if has_failures else "pass"

        return AggregatedResult(
            status=status,
            files_checked=files_checked,
            results=results,
            errors=errors,
        )
