"""Domain enum for diff source selection.

This module defines the DiffSource enum used by the render command to choose
how raw diff text is acquired before it reaches the parser.
"""

from __future__ import annotations

from enum import Enum


class DiffSource(Enum):
    """Source for raw diff text.

    Attributes:
        GIT: Run `git diff` in the local repository
        PR: Fetch a pull request diff with `gh pr diff`
        DIFF: Read an already-produced unified diff from a file or stdin
    """

    GIT = "git"
    PR = "pr"
    DIFF = "diff"

    @classmethod
    def from_string(cls, value: str) -> DiffSource:
        """Parse DiffSource from string value.

        Args:
            value: String value ("git", "pr" or "diff")

        Returns:
            Corresponding DiffSource enum value

        Raises:
            ValueError: If value is not a valid DiffSource

        Examples:
            >>> DiffSource.from_string("PR")
            <DiffSource.PR: 'pr'>
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid diff source: {value}. Must be one of: {', '.join(valid_values)}"
        )
