"""Diff link command.

Prints a deep link into a pull request's changes view for a file, optionally
pointing at a specific line on the old (L) or new (R) side.
"""

from __future__ import annotations

import sys

from reviewdiff.services.anchor_linker import build_github_link


def cmd_diff_link(
    base_url: str,
    path: str,
    line: int | None = None,
    side: str = "R",
) -> int:
    """Print the GitHub diff link for a file.

    Args:
        base_url: Pull request URL
        path: File path as shown in the diff
        line: Optional line number
        side: "R" or "L"

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if not base_url or not path:
        print("Both --base-url and --path are required", file=sys.stderr)
        return 1

    print(build_github_link(base_url, path, line, side))
    return 0
