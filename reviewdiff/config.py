"""Configuration for reviewdiff.

Defaults can be stored in a YAML file (`.reviewdiff.yaml` in the working
directory, or any path passed with --config). Command-line flags always win
over file values, and file values over the built-in defaults.

Example:
    max_lines: 200
    max_hunks: 12
    grep_context: 5
    context: 3
    base_url: https://github.com/owner/repo/pull/42
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from reviewdiff.domain.filter_options import (
    DEFAULT_GREP_CONTEXT,
    DEFAULT_MAX_HUNKS,
)

DEFAULT_CONFIG_FILENAME = ".reviewdiff.yaml"


class ConfigError(Exception):
    """Raised when a config file cannot be read or holds invalid values."""

    pass


@dataclass(frozen=True)
class ReviewDiffConfig:
    """Defaults for the render command.

    Attributes:
        max_lines: Report line budget; None derives it from `context`
        max_hunks: Report hunk budget
        grep_context: Lines kept around grep matches when --grep-context is omitted
        context: `git diff --unified` size for --source git
        base_url: Default pull request URL for GitHub links
    """

    max_lines: int | None = None
    max_hunks: int = DEFAULT_MAX_HUNKS
    grep_context: int = DEFAULT_GREP_CONTEXT
    context: int | None = None
    base_url: str | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> ReviewDiffConfig:
        """Parse config values from a YAML mapping.

        Unknown keys are ignored.

        Raises:
            ConfigError: If a known key has the wrong type or a negative value
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping of settings")

        return cls(
            max_lines=_optional_int(data, "max_lines", minimum=1),
            max_hunks=_optional_int(data, "max_hunks", minimum=1) or DEFAULT_MAX_HUNKS,
            grep_context=_int_or_default(data, "grep_context", DEFAULT_GREP_CONTEXT),
            context=_optional_int(data, "context", minimum=0),
            base_url=_optional_str(data, "base_url"),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> ReviewDiffConfig:
        """Load config from a YAML file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def load(cls, path: str | None = None, cwd: str | Path = ".") -> ReviewDiffConfig:
        """Load the explicit config file, else the default one if present.

        Args:
            path: Explicit config path (must exist)
            cwd: Directory searched for DEFAULT_CONFIG_FILENAME

        Returns:
            Loaded config, or built-in defaults if no file applies
        """
        if path:
            return cls.from_file(path)
        default_path = Path(cwd) / DEFAULT_CONFIG_FILENAME
        if default_path.is_file():
            return cls.from_file(default_path)
        return cls()


def _optional_int(data: dict, key: str, minimum: int = 0) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Config value '{key}' must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"Config value '{key}' must be >= {minimum}, got {value}")
    return value


def _int_or_default(data: dict, key: str, default: int) -> int:
    value = _optional_int(data, key)
    return default if value is None else value


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Config value '{key}' must be a string, got {value!r}")
    return value
