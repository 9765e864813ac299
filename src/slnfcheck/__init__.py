"""Validation of Visual Studio Solution Filter (.slnf) files.

Detects drift between the projects a solution filter declares and the
projects its parent solution and the disk actually contain.
"""

from __future__ import annotations

__version__ = "0.1.0"

from slnfcheck.config import SlnfCheckConfig, load_config
from slnfcheck.discovery import find_filter_files
from slnfcheck.errors import (
    FilterNotFoundError,
    FilterParseError,
    SlnfCheckError,
    SolutionCheckError,
    SolutionNotFoundError,
    SolutionParseError,
)
from slnfcheck.filesystem import FileSystem, MemoryFileSystem, RealFileSystem
from slnfcheck.models import FilterDocument, ValidationResult, parse_filter_document
from slnfcheck.paths import normalize_project_path
from slnfcheck.runner import AggregatedResult, FileError, ValidationRunner
from slnfcheck.solution import (
    DotnetSolutionParser,
    SolutionEntry,
    SolutionMembershipResolver,
    SolutionParser,
)
from slnfcheck.validator import FilterValidator

__all__ = [
    "__version__",
    # Configuration
    "SlnfCheckConfig",
    "load_config",
    # Errors
    "FilterNotFoundError",
    "FilterParseError",
    "SlnfCheckError",
    "SolutionCheckError",
    "SolutionNotFoundError",
    "SolutionParseError",
    # Filesystem
    "FileSystem",
    "MemoryFileSystem",
    "RealFileSystem",
    "normalize_project_path",
    # Models
    "FilterDocument",
    "ValidationResult",
    "parse_filter_document",
    # Solutions
    "DotnetSolutionParser",
    "SolutionEntry",
    "SolutionMembershipResolver",
    "SolutionParser",
    # Validation
    "AggregatedResult",
    "FileError",
    "FilterValidator",
    "ValidationRunner",
    "find_filter_files",
]
