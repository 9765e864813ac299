"""Filesystem access used by the validator.

All reads go through a ``FileSystem`` so that validation can run against the
host filesystem or against an in-memory tree in tests.
"""

from __future__ import annotations

import fnmatch
import os
import posixpath
from abc import ABC, abstractmethod
from pathlib import Path

from slnfcheck.paths import SEPARATORS


class FileSystem(ABC):
    """Read-only filesystem gateway.

    Attributes:
        sep: Path separator used by paths this gateway produces.
    """

    sep: str = os.sep

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file exists at ``path``."""

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Read the whole file at ``path``.

        Raises:
            FileNotFoundError: If the file does not exist.
        """

    @abstractmethod
    def list_files(self, directory: str, pattern: str) -> list[str]:
        """List files directly inside ``directory`` whose name matches ``pattern``."""

    @abstractmethod
    def directory_of(self, path: str) -> str:
        """Return the directory part of ``path``."""

    @abstractmethod
    def join(self, *parts: str) -> str:
        """Join path parts, converting either separator style to ``sep``."""

    @abstractmethod
    def resolve_absolute(self, path: str) -> str:
        """Return the absolute, normalized form of ``path``.

        Relative paths are resolved against the base directory; absolute
        paths are only normalized.
        """

    @abstractmethod
    def current_directory(self) -> str:
        """Return the directory relative paths are resolved against."""

    def _to_native(self, part: str) -> str:
        for separator in SEPARATORS:
            part = part.replace(separator, self.sep)
        return part


class RealFileSystem(FileSystem):
    """Filesystem gateway backed by the host filesystem.

    Args:
        base_directory: Directory relative paths are resolved against.
            Defaults to the process working directory at call time.
    """

    def __init__(self, base_directory: str | Path | None = None) -> None:
        self.base_directory = str(base_directory) if base_directory is not None else None

    def exists(self, path: str) -> bool:
        return Path(self.resolve_absolute(path)).is_file()

    def read_text(self, path: str) -> str:
        # Visual Studio writes solution filters with a UTF-8 BOM
        return Path(self.resolve_absolute(path)).read_text(encoding="utf-8-sig")

    def list_files(self, directory: str, pattern: str) -> list[str]:
        root = Path(self.resolve_absolute(directory))
        if not root.is_dir():
            return []
        pattern = pattern.casefold()
        return [
            str(p)
            for p in sorted(root.iterdir())
            if p.is_file() and fnmatch.fnmatchcase(p.name.casefold(), pattern)
        ]

    def directory_of(self, path: str) -> str:
        return os.path.dirname(path)

    def join(self, *parts: str) -> str:
        return os.path.join(*(self._to_native(part) for part in parts))

    def resolve_absolute(self, path: str) -> str:
        if not os.path.isabs(path):
            path = os.path.join(self.current_directory(), path)
        return os.path.normpath(path)

    def current_directory(self) -> str:
        return self.base_directory or os.getcwd()


class MemoryFileSystem(FileSystem):
    """In-memory filesystem gateway with POSIX-style paths.

    Lookups are case-insensitive, matching how Windows resolves the paths
    found in solution filters.

    Args:
        current_directory: Absolute directory relative paths are resolved against.
    """

    sep = "/"

    def __init__(self, current_directory: str = "/test") -> None:
        self._current_directory = current_directory
        self._files: dict[str, tuple[str, str]] = {}

    def add_file(self, path: str, contents: str = "") -> str:
        """Add a file, returning its absolute path."""
        full_path = self.resolve_absolute(self._to_native(path))
        self._files[full_path.casefold()] = (full_path, contents)
        return full_path

    def _key(self, path: str) -> str:
        return self.resolve_absolute(self._to_native(path)).casefold()

    def _lookup(self, path: str) -> tuple[str, str] | None:
        return self._files.get(self._key(path))

    def exists(self, path: str) -> bool:
        return self._lookup(path) is not None

    def read_text(self, path: str) -> str:
        entry = self._lookup(path)
        if entry is None:
            raise FileNotFoundError(f"File not found: {path}")
        return entry[1]

    def list_files(self, directory: str, pattern: str) -> list[str]:
        folder = self._key(directory)
        pattern = pattern.casefold()
        return [
            full_path
            for key, (full_path, _) in self._files.items()
            if posixpath.dirname(key) == folder
            and fnmatch.fnmatchcase(posixpath.basename(key), pattern)
        ]

    def directory_of(self, path: str) -> str:
        return posixpath.dirname(path)

    def join(self, *parts: str) -> str:
        return posixpath.join(*(self._to_native(part) for part in parts))

    def resolve_absolute(self, path: str) -> str:
        if not posixpath.isabs(path):
            path = posixpath.join(self._current_directory, path)
        return posixpath.normpath(path)

    def current_directory(self) -> str:
        return self._current_directory
