"""CLI utility functions for validate-slnf.

Provides helper functions for:
- Config wiring: Passing Typer CLI options to load_config
- Argument splitting: Separating filter paths from unrecognized options
- Error formatting: Consistent user-friendly messages with exit codes
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import typer

from slnfcheck.config import SlnfCheckConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_FAILURE = 1  # Validation failed, a filter could not be read, or bad configuration


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_FAILURE) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_FAILURE=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def warning(msg: str, *, err: bool = True) -> None:
    """Print a warning message.

    Args:
        msg: The warning message to display.
        err: Write to stderr (default) instead of stdout.
    """
    styled_prefix = typer.style("Warning:", fg=typer.colors.YELLOW, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=err)


# -----------------------------------------------------------------------------
# Argument Helpers
# -----------------------------------------------------------------------------


def split_arguments(args: list[str] | None) -> tuple[list[str], list[str]]:
    """Split raw positional arguments into filter paths and unknown options.

    Any token starting with "-" that Typer did not recognize is an unknown
    option; everything else is a filter path.

    Args:
        args: Positional arguments collected by Typer, unknown options included.

    Returns:
        Tuple of (filter_paths, unknown_options), each in the original order.
    """
    paths: list[str] = []
    unknown: list[str] = []
    for arg in args or []:
        if arg.startswith("-") and len(arg) > 1:
            unknown.append(arg)
        else:
            paths.append(arg)
    return paths, unknown


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    verbose: bool = False,
    skip_solution_check: bool = False,
    skip_disk_check: bool = False,
    dotnet_path: str | None = None,
    start_dir: Path | None = None,
) -> SlnfCheckConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Flags only override lower-precedence sources when they are set, so a
    skip flag enabled in .slnfcheckrc is not switched off by its absence on
    the command line.

    Args:
        verbose: --verbose flag.
        skip_solution_check: --skip-solution-check flag.
        skip_disk_check: --skip-disk-check flag.
        dotnet_path: --dotnet option.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved SlnfCheckConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {
        "verbose": True if verbose else None,
        "skip_solution_check": True if skip_solution_check else None,
        "skip_disk_check": True if skip_disk_check else None,
        "dotnet_path": dotnet_path,
    }

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}")
