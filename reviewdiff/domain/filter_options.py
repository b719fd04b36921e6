"""Domain models for diff filter and render options.

Options are parsed into type-safe values at the boundary (CLI flags, config
files) so the filter and renderer only ever see validated input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_GREP_CONTEXT = 3
DEFAULT_MAX_LINES = 150
DEFAULT_MAX_HUNKS = 8
MIN_CONTEXT_MAX_LINES = 50
LINES_PER_CONTEXT_LINE = 20

_LINE_RANGE_PATTERN = re.compile(r"^(\d+)\s*-\s*(\d+)$")


# ============================================================
# Domain Models
# ============================================================


@dataclass(frozen=True)
class LineRange:
    """Inclusive, 1-based range of new-file line numbers."""

    start: int
    end: int

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_string(cls, value: str) -> LineRange:
        """Parse a range such as "120-200".

        Args:
            value: Range text, whitespace allowed around the dash

        Returns:
            Parsed LineRange

        Raises:
            ValueError: If the text is not START-END with 1 <= START <= END

        Examples:
            >>> LineRange.from_string("120 - 200")
            LineRange(start=120, end=200)
        """
        match = _LINE_RANGE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(f"Invalid line range: {value!r}. Expected START-END, e.g. 120-200")
        start, end = int(match.group(1)), int(match.group(2))
        if start < 1 or start > end:
            raise ValueError(f"Invalid line range: {value!r}. Need 1 <= START <= END")
        return cls(start=start, end=end)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def contains(self, line_number: int) -> bool:
        return self.start <= line_number <= self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class DiffFilterOptions:
    """Compositional filters applied to a parsed diff.

    Attributes:
        paths: Path prefixes; a file matches a prefix exactly or below it.
            Empty means no path filtering.
        grep: Regex pattern matched against hunk lines (literal fallback if invalid)
        grep_context: Lines kept around each grep match; 0 keeps whole hunks
        line_range: New-file line range to slice hunks to
    """

    paths: tuple[str, ...] = ()
    grep: str | None = None
    grep_context: int = 0
    line_range: LineRange | None = None

    @property
    def has_content_filter(self) -> bool:
        """Check if a filter that removes hunks by their content is active."""
        return bool(self.grep)

    @property
    def is_noop(self) -> bool:
        return not self.paths and not self.grep and self.line_range is None


@dataclass(frozen=True)
class RenderBudget:
    """Line and hunk limits for one render call."""

    max_lines: int = DEFAULT_MAX_LINES
    max_hunks: int = DEFAULT_MAX_HUNKS

    @classmethod
    def from_context(cls, context: int | None) -> RenderBudget:
        """Derive the budget from the requested `git diff --unified` size.

        Wider context means bigger hunks, so the line budget grows with it
        (never below MIN_CONTEXT_MAX_LINES).
        """
        if context and context > 0:
            return cls(max_lines=max(MIN_CONTEXT_MAX_LINES, context * LINES_PER_CONTEXT_LINE))
        return cls()

    def to_dict(self) -> dict:
        return {"max_lines": self.max_lines, "max_hunks": self.max_hunks}
