"""Raw diff input for --source diff.

An already-produced unified diff is read from a file, or from stdin when no
path (or "-") is given, so `git diff | reviewdiff render` works.
"""

from __future__ import annotations

import sys
from pathlib import Path

STDIN_PATH = "-"


def read_diff(input_file: str | Path | None = None) -> str:
    """Read raw diff text.

    Args:
        input_file: Diff file path; None or "-" reads stdin

    Returns:
        Raw diff text (UTF-8)

    Raises:
        OSError: If the file cannot be read
    """
    if input_file is None or str(input_file) == STDIN_PATH:
        return sys.stdin.read()
    return Path(input_file).read_text(encoding="utf-8")


def has_content(diff_content: str) -> bool:
    """Check if the diff text is not blank."""
    return bool(diff_content.strip())
