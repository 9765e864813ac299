"""validate-slnf CLI - Main entry point."""

from __future__ import annotations

import dataclasses
import json

import typer
from rich.console import Console
from rich.markup import escape

from slnfcheck import __version__
from slnfcheck.cli_utils import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    split_arguments,
    warning,
    wire_config,
)
from slnfcheck.config import SlnfCheckConfig
from slnfcheck.discovery import describe_filter_files, find_filter_files
from slnfcheck.filesystem import RealFileSystem
from slnfcheck.report import ConsoleReporter, print_summary
from slnfcheck.runner import AggregatedResult, ValidationRunner
from slnfcheck.solution import DotnetSolutionParser, SolutionMembershipResolver
from slnfcheck.validator import FilterValidator

app = typer.Typer(
    name="validate-slnf",
    help="Check that Visual Studio Solution Filter (.slnf) files have not fallen out of date.",
    add_completion=False,
)

# Rich consoles for output
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"validate-slnf version {__version__}")
        raise typer.Exit()


def run_validation(
    filter_paths: list[str],
    validator: FilterValidator,
    config: SlnfCheckConfig,
    *,
    json_output: bool = False,
    out: Console | None = None,
    err: Console | None = None,
) -> int:
    """Validate filter files, report the outcome and return the exit code.

    Args:
        filter_paths: Filter files to validate.
        validator: Validator to run on each file.
        config: Run configuration.
        json_output: Print the aggregated result as JSON instead of text.
        out: Console for standard output. Defaults to the module console.
        err: Console for the error stream. Defaults to the module error console.

    Returns:
        EXIT_SUCCESS if every file passed, EXIT_FAILURE otherwise.
    """
    out = out or console
    err = err or err_console

    # JSON mode keeps stdout for the document; errors still reach the error stream
    reporter_config = dataclasses.replace(config, verbose=False) if json_output else config
    reporter = ConsoleReporter(out, err, reporter_config)
    aggregated = ValidationRunner(validator).run(filter_paths, reporter)

    if json_output:
        out.print_json(json.dumps(aggregated.to_dict()))
    elif aggregated.status == "fail":
        print_summary(aggregated, err)
    elif config.verbose:
        out.print("All files validated successfully")

    return EXIT_SUCCESS if aggregated.status == "pass" else EXIT_FAILURE


@app.command(
    context_settings={
        "help_option_names": ["--help", "-h"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)
def validate(
    files: list[str] | None = typer.Argument(
        None,
        help="Solution filter files to validate. Defaults to every .slnf file in the current directory.",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print detailed information about the validation process.",
    ),
    skip_solution_check: bool = typer.Option(
        False,
        "--skip-solution-check",
        "-s",
        help="Skip checking if projects exist in the parent solution file (.sln or .slnx).",
    ),
    skip_disk_check: bool = typer.Option(
        False,
        "--skip-disk-check",
        "-d",
        help="Skip checking if projects exist on disk.",
    ),
    dotnet: str | None = typer.Option(
        None,
        "--dotnet",
        help="dotnet executable used to list solution projects (default: dotnet).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Validate that solution filter files match their parent solution and the disk.

    If no files are specified, all .slnf files in the current directory are
    validated.

    Exit codes:
      0: All checks passed (or no .slnf files found)
      1: One or more checks failed
    """
    filter_paths, unknown_options = split_arguments(files)
    for option in unknown_options:
        err_console.print(f"Unknown option: {escape(option)}")

    config = wire_config(
        verbose=verbose,
        skip_solution_check=skip_solution_check,
        skip_disk_check=skip_disk_check,
        dotnet_path=dotnet,
    )

    filesystem = RealFileSystem()
    resolver = SolutionMembershipResolver(filesystem, DotnetSolutionParser(config.dotnet_path))
    validator = FilterValidator(filesystem, resolver, config)

    if not filter_paths:
        filter_paths = find_filter_files(filesystem, config.filter_pattern)

        if not filter_paths:
            if json_output:
                empty = AggregatedResult(status="pass", files_checked=0)
                console.print_json(json.dumps(empty.to_dict()))
            else:
                missing = describe_filter_files(config.filter_pattern)
                warning(f"No {missing} found in the current directory.", err=False)
            raise typer.Exit(code=EXIT_SUCCESS)

        if config.verbose and not json_output:
            found = describe_filter_files(config.filter_pattern)
            console.print(
                f"Found {len(filter_paths)} {escape(found)} in current directory", soft_wrap=True
            )

    exit_code = run_validation(filter_paths, validator, config, json_output=json_output)
    raise typer.Exit(code=exit_code)
