"""Validation of a single solution filter file.

Checks that every project declared in a ``.slnf`` file is still part of the
parent solution and still exists on disk.
"""

from __future__ import annotations

from slnfcheck.config import SlnfCheckConfig
from slnfcheck.errors import FilterNotFoundError, SolutionCheckError
from slnfcheck.filesystem import FileSystem
from slnfcheck.models import FilterDocument, ValidationResult, parse_filter_document
from slnfcheck.paths import normalize_project_path
from slnfcheck.solution import SolutionMembershipResolver


class FilterValidator:
    """Validates solution filter files against their parent solution and the disk.

    Attributes:
        filesystem: Filesystem gateway for all reads.
        resolver: Resolver for the parent solution's projects.
        config: Run configuration; only the skip flags are read here.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        resolver: SolutionMembershipResolver,
        config: SlnfCheckConfig | None = None,
    ) -> None:
        """Initialize validator.

        Args:
            filesystem: Filesystem gateway for all reads.
            resolver: Resolver for the parent solution's projects.
            config: Run configuration. Defaults to running every check.
        """
        self.filesystem = filesystem
        self.resolver = resolver
        self.config = config or SlnfCheckConfig()

    def validate(self, filter_path: str) -> ValidationResult:
        """Validate one solution filter file.

        A missing parent solution ends validation early: with no solution
        there is nothing meaningful to compare against, so neither check runs.
        The same applies when the solution parser fails.

        Args:
            filter_path: Path of the ``.slnf`` file.

        Returns:
            ValidationResult describing any drift found.

        Raises:
            FilterNotFoundError: If the filter file does not exist.
            FilterParseError: If the filter file is not a valid solution filter.
        """
        fs = self.filesystem
        if not fs.exists(filter_path):
            raise FilterNotFoundError(filter_path)

        document = parse_filter_document(fs.read_text(filter_path), source=filter_path)

        solution_path = fs.resolve_absolute(
            fs.join(fs.directory_of(filter_path), document.solution_path)
        )
        result = ValidationResult(filter_path, solution_path, document)

        if not fs.exists(solution_path):
            result.solution_exists = False
            return result

        if not self.config.skip_solution_check:
            try:
                result.missing_from_solution = self._missing_from_solution(
                    document, solution_path
                )
            except SolutionCheckError as e:
                result.solution_exists = False
                result.solution_error = str(e)
                return result

        if not self.config.skip_disk_check:
            result.missing_from_disk = self._missing_from_disk(document, solution_path)

        return result

    def _missing_from_solution(self, document: FilterDocument, solution_path: str) -> list[str]:
        sep = self.filesystem.sep
        members = {
            normalize_project_path(member, sep).casefold()
            for member in self.resolver.members_of(solution_path)
        }
        return [
            project
            for project in document.projects
            if normalize_project_path(project, sep).casefold() not in members
        ]

    def _missing_from_disk(self, document: FilterDocument, solution_path: str) -> list[str]:
        solution_directory = self.filesystem.directory_of(solution_path)
        return [
            project
            for project in document.projects
            if not self.filesystem.exists(self.filesystem.join(solution_directory, project))
        ]
