"""Exception types raised while validating solution filter files."""

from __future__ import annotations


class SlnfCheckError(Exception):
    """Base class for all slnfcheck errors."""


class FilterNotFoundError(SlnfCheckError, FileNotFoundError):
    """Raised when a solution filter file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"SLNF file not found: {path}")

    def __str__(self) -> str:
        return f"SLNF file not found: {self.path}"


class FilterParseError(SlnfCheckError, ValueError):
    """Raised when a solution filter file cannot be parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        self.message = message
        if path:
            message = f"Failed to parse SLNF file {path}: {message}"
        super().__init__(message)


class SolutionCheckError(SlnfCheckError):
    """Raised when the membership of a parent solution cannot be determined."""

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(message)


class SolutionNotFoundError(SolutionCheckError, FileNotFoundError):
    """Raised when a parent solution file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Solution file not found: {path}", path)

    def __str__(self) -> str:
        return f"Solution file not found: {self.path}"


class SolutionParseError(SolutionCheckError):
    """Raised when the solution parser fails on a parent solution."""
