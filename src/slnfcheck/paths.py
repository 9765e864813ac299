"""Path normalization for comparing project paths.

Solution filters written on Windows use backslashes while solution parsers
and other tools may report forward slashes. Normalized forms are only used
for comparisons; reports always show the path as it was declared.
"""

from __future__ import annotations

import os

SEPARATORS = ("/", "\\")


def normalize_project_path(path: str, sep: str = os.sep) -> str:
    """Normalize a project path for comparison.

    Replaces every forward slash and backslash with ``sep`` and strips any
    leading separator.

    Args:
        path: Project path as declared or as reported by the solution parser.
        sep: Target separator. Defaults to the platform separator.

    Returns:
        The normalized path.
    """
    for separator in SEPARATORS:
        path = path.replace(separator, sep)
    return path.lstrip(sep)
