"""Domain models for rendered diff output.

A render call produces two parallel outputs (an annotated report and a compact
numbered diff) plus structured counters for programmatic follow-up.
"""

from __future__ import annotations

from dataclasses import dataclass, field

NO_OUTPUT_MESSAGE = "No diff output (filters removed all hunks)."
TRUNCATED_SUFFIX = "... (truncated)"
TRUNCATION_NOTE = (
    "---\nDiff output truncated. The diff has already been shown to the user; "
    "do NOT show another diff unless the user explicitly asks."
)


@dataclass(frozen=True)
class RenderInfo:
    """Counters describing what a render call emitted.

    Attributes:
        shown_files: Files that contributed at least one block
        shown_hunks: Hunks rendered, partial ones included
        shown_lines: Report lines emitted, counted per block
        truncated: Whether a budget stopped rendering early
        suggested_ranges: Path -> "start-end" ranges that would retrieve
            omitted content of truncated new files
    """

    shown_files: int = 0
    shown_hunks: int = 0
    shown_lines: int = 0
    truncated: bool = False
    suggested_ranges: dict[str, list[str]] = field(default_factory=dict)

    def summary(self) -> str:
        """One-line stats used when the diff itself is collapsed."""
        stats = " • ".join(
            [
                f"files {self.shown_files}",
                f"hunks {self.shown_hunks}",
                f"lines {self.shown_lines}",
            ]
        )
        suffix = " (truncated)" if self.truncated else ""
        return f"Diff stats: {stats}{suffix}"

    def to_dict(self) -> dict:
        return {
            "shown_files": self.shown_files,
            "shown_hunks": self.shown_hunks,
            "shown_lines": self.shown_lines,
            "truncated": self.truncated,
            "suggested_ranges": {path: list(ranges) for path, ranges in self.suggested_ranges.items()},
        }


@dataclass(frozen=True)
class RenderedDiff:
    """Result of rendering a parsed diff."""

    text: str
    diff_text: str
    info: RenderInfo

    @classmethod
    def empty(cls) -> RenderedDiff:
        return cls(text=NO_OUTPUT_MESSAGE, diff_text="", info=RenderInfo())

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "diff_text": self.diff_text,
            "info": self.info.to_dict(),
        }
