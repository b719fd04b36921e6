"""Diff renderer service.

Renders a (filtered) ParsedDiff into two parallel outputs within a line and
hunk budget:

- text: annotated report, one block per file or hunk, optional GitHub links,
  truncation notes and suggested follow-up line ranges
- diff_text: compact diff with every line prefixed by its old/new line number,
  ready for colouring by prefix

Rendering is a single pass that either consumes all input or stops at the
first exhausted budget. It cannot fail.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rich.markup import escape

from reviewdiff.domain.diff import DiffFile, DiffHunk, DiffLineType, ParsedDiff
from reviewdiff.domain.filter_options import RenderBudget
from reviewdiff.domain.render_result import (
    TRUNCATED_SUFFIX,
    TRUNCATION_NOTE,
    RenderedDiff,
    RenderInfo,
)
from reviewdiff.services.anchor_linker import build_github_link, build_hunk_link

DIFF_STYLES = {
    "added": "green",
    "removed": "red",
    "context": "dim",
}

_COMPACT_LINE_PATTERN = re.compile(r"^([+\- ])(\s*\d*)\s(.*)$")


# ============================================================
# Render State
# ============================================================


@dataclass
class _RenderState:
    """Accumulates blocks and counters for one render call."""

    budget: RenderBudget
    base_url: str | None = None
    blocks: list[str] = field(default_factory=list)
    diff_lines: list[str] = field(default_factory=list)
    shown_files: int = 0
    shown_hunks: int = 0
    shown_lines: int = 0
    truncated: bool = False
    suggested_ranges: dict[str, list[str]] = field(default_factory=dict)

    @property
    def block_overhead(self) -> int:
        """Lines a hunk block needs besides its content: title, plus the link if any."""
        return 2 if self.base_url else 1

    @property
    def exhausted(self) -> bool:
        """Check if no further block fits.

        Fewer remaining lines than a title, the optional link and the
        truncation suffix count as exhausted.
        """
        return (
            self.shown_hunks >= self.budget.max_hunks
            or self.remaining_lines < self.block_overhead + 1
        )

    @property
    def remaining_lines(self) -> int:
        return self.budget.max_lines - self.shown_lines

    def add_block(self, text: str) -> None:
        self.shown_lines += len(text.split("\n"))
        self.blocks.append(text)

    def to_result(self) -> RenderedDiff:
        blocks = list(self.blocks)
        if self.truncated:
            blocks.append(format_truncation_note(self.suggested_ranges))
        return RenderedDiff(
            text="\n\n".join(blocks),
            diff_text="\n".join(self.diff_lines),
            info=RenderInfo(
                shown_files=self.shown_files,
                shown_hunks=self.shown_hunks,
                shown_lines=self.shown_lines,
                truncated=self.truncated,
                suggested_ranges=dict(self.suggested_ranges),
            ),
        )


# ============================================================
# Public API
# ============================================================


def render_diff(
    diff: ParsedDiff,
    budget: RenderBudget | None = None,
    base_url: str | None = None,
) -> RenderedDiff:
    """Render a parsed diff within a line and hunk budget.

    Args:
        diff: Parsed (and usually filtered) diff
        budget: Line and hunk limits (defaults to RenderBudget())
        base_url: Pull request URL; when set, every block gets a GitHub link

    Returns:
        RenderedDiff with report text, compact diff text and counters
    """
    if diff.is_empty:
        return RenderedDiff.empty()

    state = _RenderState(budget=budget or RenderBudget(), base_url=base_url)

    for diff_file in diff.files:
        if state.exhausted:
            state.truncated = True
            break

        if diff_file.is_header_only:
            if not _render_header_only_file(state, diff_file, base_url):
                break
            continue

        file_shown = False
        for hunk in diff_file.hunks:
            if state.exhausted:
                state.truncated = True
                break

            complete = _render_hunk(state, diff_file, hunk, base_url, first_in_file=not file_shown)
            file_shown = True
            if not complete:
                break

        if state.truncated and diff_file.is_new_file:
            state.suggested_ranges[diff_file.path] = compute_file_line_ranges(
                diff_file, state.budget.max_lines
            )

        if file_shown:
            state.shown_files += 1

        if state.truncated:
            break

    return state.to_result()


def compute_file_line_ranges(diff_file: DiffFile, chunk_size: int) -> list[str]:
    """Split a file's new-side line span into "start-end" chunks.

    Args:
        diff_file: File whose added and context lines define the span
        chunk_size: Lines per chunk (the render line budget)

    Returns:
        Ordered range strings, empty if the file has no new-side lines
    """
    span = diff_file.new_line_span()
    if span is None or chunk_size <= 0:
        return []

    min_line, max_line = span
    return [
        f"{start}-{min(max_line, start + chunk_size - 1)}"
        for start in range(min_line, max_line + 1, chunk_size)
    ]


def format_truncation_note(suggested_ranges: dict[str, list[str]]) -> str:
    """Build the trailing note appended to truncated reports."""
    note = TRUNCATION_NOTE
    hints = [
        f"{path}: {', '.join(ranges)}"
        for path, ranges in suggested_ranges.items()
        if ranges
    ]
    if hints:
        note += "\nSuggested lineRange values:\n" + "\n".join(hints)
    return note


def format_hunk_lines(hunk: DiffHunk) -> list[str]:
    """Format a hunk as compact numbered lines.

    Added and context lines carry their new-file number, removed lines their
    old-file number: "+12 text", "-9 text", " 13 text". The `@@` line is
    omitted.
    """
    formatted: list[str] = []
    for diff_line in hunk.get_diff_lines():
        if diff_line.line_type == DiffLineType.HEADER:
            continue
        if diff_line.line_type == DiffLineType.ADDED:
            formatted.append(f"+{diff_line.new_line_number} {diff_line.content}")
        elif diff_line.line_type == DiffLineType.REMOVED:
            formatted.append(f"-{diff_line.old_line_number} {diff_line.content}")
        else:
            formatted.append(f" {diff_line.new_line_number} {diff_line.content}")
    return formatted


def colorize_diff_text(diff_text: str) -> str:
    """Convert compact diff text into Rich markup coloured by line prefix.

    Args:
        diff_text: Output of render_diff().diff_text

    Returns:
        Markup string for rich.console.Console.print()
    """
    rendered: list[str] = []
    for line in diff_text.split("\n"):
        match = _COMPACT_LINE_PATTERN.match(line)
        if not match:
            rendered.append(_styled(DIFF_STYLES["context"], line))
            continue

        prefix, line_number, content = match.groups()
        if prefix == "+":
            rendered.append(_styled(DIFF_STYLES["added"], f"+{line_number} {content}"))
        elif prefix == "-":
            rendered.append(_styled(DIFF_STYLES["removed"], f"-{line_number} {content}"))
        else:
            rendered.append(_styled(DIFF_STYLES["context"], f" {line_number} {content}"))
    return "\n".join(rendered)


# ============================================================
# Private Helpers
# ============================================================


def _styled(style: str, text: str) -> str:
    if not text:
        return ""
    return f"[{style}]{escape(text)}[/{style}]"


def _render_header_only_file(
    state: _RenderState,
    diff_file: DiffFile,
    base_url: str | None,
) -> bool:
    """Render a rename/mode-change/binary entry as a single header block.

    Header blocks are never cut; one that does not fit ends the render.

    Returns:
        True if the block was rendered, False if it did not fit
    """
    if state.block_overhead + len(diff_file.header_lines) > state.remaining_lines:
        state.truncated = True
        return False

    state.add_block("\n".join([f"== {diff_file.path}", *diff_file.header_lines]))
    state.diff_lines.append(f"  {diff_file.path}")
    if base_url:
        state.add_block(f"GitHub: {build_github_link(base_url, diff_file.path)}")
    state.shown_files += 1
    return True


def _render_hunk(
    state: _RenderState,
    diff_file: DiffFile,
    hunk: DiffHunk,
    base_url: str | None,
    first_in_file: bool,
) -> bool:
    """Render one hunk block, cutting it short if it does not fit.

    The title line, the optional link line and the truncation suffix are
    reserved out of the remaining budget.

    Returns:
        True if the hunk was rendered completely, False if it was cut short
    """
    title = f"== {diff_file.path} (hunk +{hunk.new_start})"
    full_lines = [*diff_file.header_lines, *hunk.lines]
    overhead = state.block_overhead
    complete = overhead + len(full_lines) <= state.remaining_lines

    if complete:
        state.add_block("\n".join([title, *full_lines]))
    else:
        keep = state.remaining_lines - overhead - 1
        state.add_block("\n".join([title, *full_lines[:keep], TRUNCATED_SUFFIX]))
        state.truncated = True
    state.shown_hunks += 1

    if first_in_file:
        state.diff_lines.append(f"  {diff_file.path}")
    else:
        state.diff_lines.append("")
    state.diff_lines.extend(format_hunk_lines(hunk))

    if base_url:
        state.add_block(f"GitHub: {build_hunk_link(base_url, diff_file.path, hunk)}")

    return complete
