"""Console reporting for validation runs.

Verbose narration goes to stdout; errors and failure summaries go to stderr.
Lines carrying paths are printed with ``soft_wrap`` so Rich never folds a
path at the console width.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from slnfcheck.config import SlnfCheckConfig
from slnfcheck.models import ValidationResult
from slnfcheck.runner import AggregatedResult


class ConsoleReporter:
    """Prints per-file progress of a validation run.

    Attributes:
        console: Console for standard output.
        err_console: Console for the error stream.
        config: Run configuration; controls verbosity and which checks are shown.
    """

    def __init__(
        self,
        console: Console,
        err_console: Console,
        config: SlnfCheckConfig,
    ) -> None:
        self.console = console
        self.err_console = err_console
        self.config = config

    def file_started(self, filter_path: str) -> None:
        if self.config.verbose:
            self.console.print(f"Processing {escape(filter_path)}...", soft_wrap=True)

    def file_validated(self, result: ValidationResult) -> None:
        if result.solution_error:
            self.err_console.print(
                f"[red]Error parsing solution file:[/red] {escape(result.solution_error)}",
                soft_wrap=True,
            )

        if self.config.verbose:
            self._narrate(result)

    def file_failed(self, filter_path: str, error: Exception) -> None:
        self.err_console.print(
            f"[red]Error validating {escape(filter_path)}:[/red] {escape(str(error))}",
            soft_wrap=True,
        )

    def _narrate(self, result: ValidationResult) -> None:
        out = self.console

        if not result.solution_exists:
            out.print(
                f"Parent solution file not found: {escape(result.solution_path)}",
                soft_wrap=True,
            )
            return

        out.print(f"Parent solution file: {escape(result.solution_path)}", soft_wrap=True)
        out.print(f"Projects in .slnf file ({len(result.document.projects)}):")
        _print_paths(out, result.document.projects, indent=2)
        out.print()

        if not self.config.skip_solution_check:
            if result.missing_from_solution:
                out.print("Projects missing from parent solution:")
                _print_paths(out, result.missing_from_solution, indent=2)
            else:
                out.print("All projects exist in the parent solution")

        if not self.config.skip_disk_check:
            if result.missing_from_disk:
                out.print("Projects missing from disk:")
                _print_paths(out, result.missing_from_disk, indent=2)
            else:
                out.print("All project files exist on disk")


def _print_paths(console: Console, paths: list[str] | tuple[str, ...], indent: int) -> None:
    for path in paths:
        console.print(f"{' ' * indent}{escape(path)}", soft_wrap=True)


def print_summary(aggregated: AggregatedResult, err_console: Console) -> None:
    """Print a summary of every filter file that has issues to the error stream."""
    for result in aggregated.failed_results:
        err_console.print(
            f"[red]Validation failed for {escape(result.filter_path)}:[/red]",
            soft_wrap=True,
        )

        if not result.solution_exists:
            err_console.print(
                f"  Parent solution file not found: {escape(result.solution_path)}",
                soft_wrap=True,
            )
            err_console.print()
            continue

        if result.missing_from_solution:
            err_console.print("  Projects missing from parent solution:")
            _print_paths(err_console, result.missing_from_solution, indent=4)

        if result.missing_from_disk:
            err_console.print("  Projects missing from disk:")
            _print_paths(err_console, result.missing_from_disk, indent=4)

        err_console.print()
