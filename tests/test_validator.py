"""Tests for slnfcheck.validator module."""

from __future__ import annotations

import pytest
from conftest import FILTER_PATH, SOLUTION_PATH, FakeSolutionParser, filter_json

from slnfcheck.config import SlnfCheckConfig
from slnfcheck.errors import FilterNotFoundError, FilterParseError
from slnfcheck.filesystem import MemoryFileSystem
from slnfcheck.solution import SolutionEntry, SolutionMembershipResolver
from slnfcheck.validator import FilterValidator

PROJECT1 = "Project1\\Project1.csproj"
PROJECT2 = "Project2\\Project2.csproj"


def make_validator(
    fs: MemoryFileSystem,
    parser: FakeSolutionParser,
    skip_solution_check: bool = False,
    skip_disk_check: bool = False,
) -> FilterValidator:
    config = SlnfCheckConfig(
        skip_solution_check=skip_solution_check,
        skip_disk_check=skip_disk_check,
    )
    return FilterValidator(fs, SolutionMembershipResolver(fs, parser), config)


def add_projects_on_disk(fs: MemoryFileSystem, *projects: str) -> None:
    for project in projects:
        fs.add_file(fs.join("/test", project), "<Project></Project>")


@pytest.fixture
def two_project_filter(memory_fs: MemoryFileSystem) -> MemoryFileSystem:
    """Filesystem with a solution and a filter declaring Project1 and Project2."""
    memory_fs.add_file(FILTER_PATH, filter_json("test.sln", [PROJECT1, PROJECT2]))
    memory_fs.add_file(SOLUTION_PATH, "")
    return memory_fs


class TestValidateCleanFilter:
    """Tests for filters that match their solution and the disk."""

    def test_all_projects_valid_no_issues(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a filter whose projects are all in the solution and on disk."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1, PROJECT2])
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.has_issues is False
        assert result.solution_exists is True
        assert result.missing_from_solution == []
        assert result.missing_from_disk == []

    def test_result_records_paths_and_document(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test the result carries the filter path, solution path and document."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1, PROJECT2])
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.filter_path == FILTER_PATH
        assert result.solution_path == SOLUTION_PATH
        assert result.document.projects == (PROJECT1, PROJECT2)

    def test_forward_slash_members_match_backslash_projects(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test separator style does not matter when comparing with the solution."""
        fake_parser.add_solution(
            SOLUTION_PATH, ["Project1/Project1.csproj", "Project2/Project2.csproj"]
        )
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.missing_from_solution == []

    def test_comparison_ignores_case(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test project paths are compared case-insensitively."""
        fake_parser.add_solution(
            SOLUTION_PATH, ["PROJECT1\\project1.CSPROJ", "project2\\Project2.csproj"]
        )
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.has_issues is False


class TestValidateDrift:
    """Tests for filters that have drifted."""

    def test_missing_from_solution(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a declared project the solution no longer contains."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.has_issues is True
        assert result.solution_exists is True
        assert result.missing_from_solution == [PROJECT2]
        assert result.missing_from_disk == []

    def test_missing_from_disk(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a declared project whose file was deleted."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1, PROJECT2])
        add_projects_on_disk(two_project_filter, PROJECT1)

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.has_issues is True
        assert result.solution_exists is True
        assert result.missing_from_solution == []
        assert result.missing_from_disk == [PROJECT2]

    def test_missing_lists_keep_declared_order_and_text(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test missing projects are reported in declared order and original form."""
        declared = ["Zeta/Zeta.csproj", "\\Alpha\\Alpha.csproj", "Mid\\Mid.csproj"]
        memory_fs.add_file(FILTER_PATH, filter_json("test.sln", declared))
        memory_fs.add_file(SOLUTION_PATH, "")
        fake_parser.add_solution(SOLUTION_PATH, ["Other\\Other.csproj"])

        result = make_validator(memory_fs, fake_parser).validate(FILTER_PATH)

        assert result.missing_from_solution == declared
        assert result.missing_from_disk == declared

    def test_leading_separator_is_ignored_for_comparison(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a leading separator on a declared project still matches the solution."""
        memory_fs.add_file(FILTER_PATH, filter_json("test.sln", ["\\" + PROJECT1]))
        memory_fs.add_file(SOLUTION_PATH, "")
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])

        result = make_validator(memory_fs, fake_parser, skip_disk_check=True).validate(
            FILTER_PATH
        )

        assert result.missing_from_solution == []

    def test_solution_folders_are_not_members(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a project path matching only a solution folder is reported missing."""
        memory_fs.add_file(FILTER_PATH, filter_json("test.sln", ["src"]))
        memory_fs.add_file(SOLUTION_PATH, "")
        fake_parser.add_solution(SOLUTION_PATH, [], folders=["src"])

        result = make_validator(memory_fs, fake_parser, skip_disk_check=True).validate(
            FILTER_PATH
        )

        assert result.missing_from_solution == ["src"]


class TestValidateSolutionMissing:
    """Tests for filters whose parent solution is missing or unreadable."""

    def test_solution_missing_has_issues(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a filter pointing at a solution that does not exist."""
        memory_fs.add_file(FILTER_PATH, filter_json("missing.sln", [PROJECT1]))

        result = make_validator(memory_fs, fake_parser).validate(FILTER_PATH)

        assert result.has_issues is True
        assert result.solution_exists is False
        assert result.solution_path == "/test/missing.sln"
        assert result.missing_from_solution == []
        assert result.missing_from_disk == []
        assert fake_parser.calls == []

    @pytest.mark.parametrize(
        ("skip_solution_check", "skip_disk_check"),
        [(False, False), (True, False), (False, True), (True, True)],
    )
    def test_solution_missing_skips_checks_regardless_of_flags(
        self,
        memory_fs: MemoryFileSystem,
        fake_parser: FakeSolutionParser,
        skip_solution_check: bool,
        skip_disk_check: bool,
    ) -> None:
        """Test no check runs once the parent solution is known to be missing."""
        memory_fs.add_file(FILTER_PATH, filter_json("missing.sln", [PROJECT1]))

        validator = make_validator(
            memory_fs, fake_parser, skip_solution_check, skip_disk_check
        )
        result = validator.validate(FILTER_PATH)

        assert result.solution_exists is False
        assert result.missing_from_solution == []
        assert result.missing_from_disk == []

    def test_parser_failure_downgrades_to_solution_missing(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a solution parser failure marks the solution as not existing."""
        fake_parser.fail_on(SOLUTION_PATH, "unexpected token")

        result = make_validator(two_project_filter, fake_parser).validate(FILTER_PATH)

        assert result.solution_exists is False
        assert result.has_issues is True
        assert result.solution_error == "unexpected token"
        # The disk check does not run after a parser failure
        assert result.missing_from_disk == []

    def test_unexpected_parser_exception_downgrades_to_solution_missing(
        self, two_project_filter: MemoryFileSystem
    ) -> None:
        """Test any parser exception marks the solution as not existing."""

        class BrokenParser(FakeSolutionParser):
            def parse(self, solution_path: str) -> list[SolutionEntry]:
                raise RuntimeError("grammar blew up")

        result = make_validator(two_project_filter, BrokenParser()).validate(FILTER_PATH)

        assert result.solution_exists is False
        assert result.solution_error == "grammar blew up"
        assert result.missing_from_disk == []

    def test_solution_path_relative_to_filter_directory(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test the solution path is resolved against the filter's directory."""
        filter_path = "/test/filters/app.slnf"
        memory_fs.add_file(filter_path, filter_json("..\\test.sln", [PROJECT1]))
        memory_fs.add_file(SOLUTION_PATH, "")
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(memory_fs, PROJECT1)

        result = make_validator(memory_fs, fake_parser).validate(filter_path)

        assert result.solution_exists is True
        assert result.has_issues is False

    def test_relative_filter_path_resolves_against_current_directory(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a filter given by a relative path."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1, PROJECT2])
        add_projects_on_disk(two_project_filter, PROJECT1, PROJECT2)

        result = make_validator(two_project_filter, fake_parser).validate("test.slnf")

        assert result.solution_path == SOLUTION_PATH
        assert result.has_issues is False


class TestSkipChecks:
    """Tests for the skip flags."""

    def test_skip_solution_check(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test skipping the solution check leaves its list empty."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(two_project_filter, PROJECT1)

        result = make_validator(
            two_project_filter, fake_parser, skip_solution_check=True
        ).validate(FILTER_PATH)

        assert result.missing_from_solution == []
        assert result.missing_from_disk == [PROJECT2]
        assert fake_parser.calls == []

    def test_skip_disk_check(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test skipping the disk check leaves its list empty."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(two_project_filter, PROJECT1)

        result = make_validator(
            two_project_filter, fake_parser, skip_disk_check=True
        ).validate(FILTER_PATH)

        assert result.missing_from_solution == [PROJECT2]
        assert result.missing_from_disk == []

    def test_skip_both_checks_no_issues(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test skipping both checks on a drifted filter reports no issues."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(two_project_filter, PROJECT1)

        result = make_validator(
            two_project_filter,
            fake_parser,
            skip_solution_check=True,
            skip_disk_check=True,
        ).validate(FILTER_PATH)

        assert result.has_issues is False
        assert result.missing_from_solution == []
        assert result.missing_from_disk == []


class TestValidateErrors:
    """Tests for filter files that cannot be validated."""

    def test_missing_filter_raises(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a missing filter file raises FilterNotFoundError."""
        with pytest.raises(FilterNotFoundError) as exc_info:
            make_validator(memory_fs, fake_parser).validate("/test/nope.slnf")

        assert exc_info.value.path == "/test/nope.slnf"
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_malformed_filter_raises(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test malformed JSON raises FilterParseError."""
        memory_fs.add_file(FILTER_PATH, "{ not json")

        with pytest.raises(FilterParseError, match="test.slnf"):
            make_validator(memory_fs, fake_parser).validate(FILTER_PATH)

    def test_filter_without_solution_raises(
        self, memory_fs: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a filter lacking the solution object raises FilterParseError."""
        memory_fs.add_file(FILTER_PATH, '{"projects": []}')

        with pytest.raises(FilterParseError):
            make_validator(memory_fs, fake_parser).validate(FILTER_PATH)

    def test_default_config_runs_both_checks(
        self, two_project_filter: MemoryFileSystem, fake_parser: FakeSolutionParser
    ) -> None:
        """Test a validator built without config runs every check."""
        fake_parser.add_solution(SOLUTION_PATH, [PROJECT1])
        add_projects_on_disk(two_project_filter, PROJECT1)
        fs = two_project_filter

        validator = FilterValidator(fs, SolutionMembershipResolver(fs, fake_parser))
        result = validator.validate(FILTER_PATH)

        assert result.missing_from_solution == [PROJECT2]
        assert result.missing_from_disk == [PROJECT2]
