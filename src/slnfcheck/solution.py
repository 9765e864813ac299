"""Parent solution membership.

Reading the project list of a ``.sln`` or ``.slnx`` file is delegated to a
``SolutionParser``. The default parser asks the .NET SDK via
``dotnet sln <solution> list``; tests substitute their own parser.
"""

from __future__ import annotations

import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass

from slnfcheck.errors import SolutionCheckError, SolutionNotFoundError, SolutionParseError
from slnfcheck.filesystem import FileSystem
from slnfcheck.paths import SEPARATORS


@dataclass(frozen=True)
class SolutionEntry:
    """A project entry reported by a solution parser.

    Attributes:
        path: Absolute path of the entry.
        is_folder: True for solution folders, which are not buildable projects.
    """

    path: str
    is_folder: bool = False


class SolutionParser(ABC):
    """Reads the entries of a solution file."""

    @abstractmethod
    def parse(self, solution_path: str) -> list[SolutionEntry]:
        """Return the solution's entries in declared order.

        Raises:
            SolutionParseError: If the solution cannot be parsed.
        """


class DotnetSolutionParser(SolutionParser):
    """Solution parser backed by the ``dotnet sln list`` command.

    Args:
        executable: Name or path of the dotnet executable.
    """

    def __init__(self, executable: str = "dotnet") -> None:
        self.executable = executable

    def parse(self, solution_path: str) -> list[SolutionEntry]:
        env = dict(os.environ)
        # Keep the listing header in English so it can be skipped reliably
        env.setdefault("DOTNET_CLI_UI_LANGUAGE", "en")
        env.setdefault("DOTNET_NOLOGO", "1")

        try:
            result = subprocess.run(
                [self.executable, "sln", solution_path, "list"],
                capture_output=True,
                text=True,
                check=False,
                env=env,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise SolutionParseError(
                f"Could not run '{self.executable}': {e}", solution_path
            ) from e
        except ValueError as e:
            # Output that is not valid text in the locale encoding
            raise SolutionParseError(
                f"Could not read '{self.executable}' output: {e}", solution_path
            ) from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise SolutionParseError(
                f"'{self.executable} sln list' failed with exit code "
                f"{result.returncode}: {detail}",
                solution_path,
            )

        solution_directory = os.path.dirname(solution_path)
        return [
            SolutionEntry(path=os.path.join(solution_directory, _to_native(line)))
            for line in _listed_projects(result.stdout)
        ]


def _to_native(path: str) -> str:
    for separator in SEPARATORS:
        path = path.replace(separator, os.sep)
    return path


def _listed_projects(output: str) -> list[str]:
    """Extract project paths from ``dotnet sln list`` output.

    The listing is a ``Project(s)`` header, a dash rule, then one path per
    line. Output without the rule (e.g. "No projects found in the solution.")
    lists nothing.
    """
    lines = [line.strip() for line in output.splitlines()]
    for index, line in enumerate(lines):
        if line and set(line) == {"-"}:
            return [project for project in lines[index + 1 :] if project]
    return []


class SolutionMembershipResolver:
    """Resolves the projects of a parent solution relative to its directory.

    Args:
        filesystem: Filesystem gateway used for existence checks.
        parser: Parser that reads the solution file.
    """

    def __init__(self, filesystem: FileSystem, parser: SolutionParser) -> None:
        self.filesystem = filesystem
        self.parser = parser

    def members_of(self, solution_path: str) -> list[str]:
        """Return the solution's project paths in declared order.

        Solution folders are skipped. Paths under the solution directory are
        made relative to it; any other path is returned as reported.

        Args:
            solution_path: Absolute path of the solution file.

        Returns:
            Project paths relative to the solution directory.

        Raises:
            SolutionNotFoundError: If the solution file does not exist.
            SolutionParseError: If the parser fails for any reason.
        """
        if not self.filesystem.exists(solution_path):
            raise SolutionNotFoundError(solution_path)

        try:
            entries = list(self.parser.parse(solution_path))
        except SolutionCheckError:
            raise
        except Exception as e:
            raise SolutionParseError(str(e) or type(e).__name__, solution_path) from e

        solution_directory = self.filesystem.directory_of(solution_path)
        return [
            self._relative_to(entry.path, solution_directory)
            for entry in entries
            if not entry.is_folder
        ]

    def _relative_to(self, path: str, directory: str) -> str:
        if path.casefold().startswith(directory.casefold()):
            return path[len(directory) :].lstrip(self.filesystem.sep)
        return path
