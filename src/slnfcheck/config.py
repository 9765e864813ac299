"""Configuration management for the validate-slnf tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .slnfcheckrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

RC_FILE_NAME = ".slnfcheckrc"
ENV_PREFIX = "SLNFCHECK_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass
class SlnfCheckConfig:
    """Configuration for a validation run.

    Attributes:
        verbose: Narrate the processing of every filter file.
        skip_solution_check: Do not check projects against the parent solution.
        skip_disk_check: Do not check that project files exist on disk.
        filter_pattern: Glob used to discover filter files (default: "*.slnf").
        dotnet_path: dotnet executable used to list solution projects.
    """

    verbose: bool = False
    skip_solution_check: bool = False
    skip_disk_check: bool = False
    filter_pattern: str = "*.slnf"
    dotnet_path: str = "dotnet"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        for name in ("verbose", "skip_solution_check", "skip_disk_check"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean")

        if not self.filter_pattern or not isinstance(self.filter_pattern, str):
            raise ValueError("filter_pattern must be a non-empty string")

        if not self.dotnet_path or not isinstance(self.dotnet_path, str):
            raise ValueError("dotnet_path must be a non-empty string")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(SlnfCheckConfig)}


def _get_bool_field_names() -> set[str]:
    return {f.name for f in fields(SlnfCheckConfig) if f.type in (bool, "bool")}


def find_config_file(filename: str = RC_FILE_NAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from a .slnfcheckrc file.

    Returns:
        Configuration from the rc file, or empty dict if not found or unreadable.
    """
    config_path = find_config_file(RC_FILE_NAME, start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.slnfcheck] section."""
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    section = data.get("tool", {}).get("slnfcheck", {})
    valid_fields = _get_config_field_names()
    return {k: v for k, v in section.items() if k in valid_fields}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {value!r}")


def _load_from_env() -> dict[str, Any]:
    """Load configuration from SLNFCHECK_* environment variables.

    For example: SLNFCHECK_SKIP_DISK_CHECK=1, SLNFCHECK_DOTNET_PATH=/usr/bin/dotnet

    Raises:
        ValueError: If a boolean variable holds an unrecognized value.
    """
    bool_fields = _get_bool_field_names()
    result: dict[str, Any] = {}

    for name in sorted(_get_config_field_names()):
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is None:
            continue
        result[name] = _parse_bool(name, value) if name in bool_fields else value

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries, later ones taking precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> SlnfCheckConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (SLNFCHECK_*)
    3. .slnfcheckrc file
    4. pyproject.toml [tool.slnfcheck] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments. None values
            are treated as "not given".
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved SlnfCheckConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    valid_fields = _get_config_field_names()
    cli_config = {
        k: v for k, v in (cli_overrides or {}).items() if k in valid_fields and v is not None
    }

    merged = _merge_configs(
        _load_from_pyproject(start_dir),
        _load_from_rc(start_dir),
        _load_from_env(),
        cli_config,
    )

    return SlnfCheckConfig(**merged)
