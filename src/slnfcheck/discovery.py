"""Discovery of solution filter files."""

from __future__ import annotations

from slnfcheck.filesystem import FileSystem

DEFAULT_FILTER_PATTERN = "*.slnf"


def find_filter_files(filesystem: FileSystem, pattern: str = DEFAULT_FILTER_PATTERN) -> list[str]:
    """Find solution filter files in the current directory.

    Only the directory itself is searched, not its subdirectories. Files are
    returned in the order the filesystem lists them.

    Args:
        filesystem: Filesystem gateway to search.
        pattern: Glob matched against file names.

    Returns:
        Paths of the matching files. Empty if there are none.
    """
    return filesystem.list_files(filesystem.current_directory(), pattern)


def describe_filter_files(pattern: str = DEFAULT_FILTER_PATTERN) -> str:
    """Describe the files ``pattern`` selects, for user-facing messages."""
    if pattern == DEFAULT_FILTER_PATTERN:
        return ".slnf files"
    return f"files matching '{pattern}'"
