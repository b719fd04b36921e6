"""Diff filter service.

Applies path, new-file line-range and regex-with-context filters to a parsed
diff. Pure functions: the input ParsedDiff is never mutated, so callers can
re-filter the same parse with different options.

Stages run in a fixed order:
    1. path prefixes
    2. line-range slice (per hunk)
    3. grep with context (per hunk, on the already-sliced lines)
    4. drop files left without hunks
"""

from __future__ import annotations

import re

from reviewdiff.domain.diff import (
    DiffFile,
    DiffHunk,
    ParsedDiff,
    is_added_line,
    is_context_line,
    is_hunk_header,
    is_removed_line,
)
from reviewdiff.domain.filter_options import DiffFilterOptions, LineRange


# ============================================================
# Public API
# ============================================================


def compile_grep(pattern: str | None) -> re.Pattern[str] | None:
    """Compile a grep pattern, degrading to a literal match if it is not valid regex.

    Args:
        pattern: Regular expression text, or None/empty for no grep filter

    Returns:
        Compiled pattern, or None if no pattern was given
    """
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error:
        return re.compile(re.escape(pattern))


def matches_path(path: str, prefixes: tuple[str, ...] | list[str]) -> bool:
    """Check if a path equals a prefix or lies below it.

    "src/a" matches "src/a" and "src/a/b.ts" but not "src/a.ts".
    """
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in prefixes)


def filter_diff(diff: ParsedDiff, options: DiffFilterOptions) -> ParsedDiff:
    """Apply all configured filters to a parsed diff.

    Args:
        diff: Parsed diff (left untouched)
        options: Filters to apply

    Returns:
        A new ParsedDiff holding the reduced structure
    """
    files = list(diff.files)
    if options.paths:
        files = [diff_file for diff_file in files if matches_path(diff_file.path, options.paths)]

    grep = compile_grep(options.grep)
    filtered: list[DiffFile] = []

    for diff_file in files:
        hunks: list[DiffHunk] = []
        for hunk in diff_file.hunks:
            narrowed: DiffHunk | None = hunk
            if options.line_range is not None:
                narrowed = slice_hunk_by_range(narrowed, options.line_range)
            if narrowed is not None and grep is not None:
                narrowed = grep_hunk(narrowed, grep, options.grep_context)
            if narrowed is not None:
                hunks.append(narrowed)

        if hunks:
            filtered.append(diff_file.with_hunks(hunks))
        elif diff_file.is_header_only and not options.has_content_filter:
            filtered.append(diff_file)

    return ParsedDiff(files=tuple(filtered))


# ============================================================
# Hunk Stages
# ============================================================


def slice_hunk_by_range(hunk: DiffHunk, line_range: LineRange) -> DiffHunk | None:
    """Keep only added and context lines whose new-file number is in range.

    Removed lines are never retained; the `@@` line always is. The returned
    hunk is re-anchored at its first retained line so that replaying it still
    yields the original new-file numbers.

    Returns:
        Sliced hunk, or None if no content line falls in the range
    """
    old_line = hunk.old_start
    new_line = hunk.new_start
    collected: list[str] = []
    anchor: tuple[int, int] | None = None

    for line in hunk.lines:
        if is_hunk_header(line):
            collected.append(line)
            continue

        if is_added_line(line):
            if line_range.contains(new_line):
                collected.append(line)
                if anchor is None:
                    anchor = (old_line, new_line)
            new_line += 1
        elif is_removed_line(line):
            old_line += 1
        elif is_context_line(line):
            if line_range.contains(new_line):
                collected.append(line)
                if anchor is None:
                    anchor = (old_line, new_line)
            old_line += 1
            new_line += 1

    if anchor is None:
        return None
    return hunk.with_lines(collected, old_start=anchor[0], new_start=anchor[1])


def grep_hunk(hunk: DiffHunk, grep: re.Pattern[str], context: int = 0) -> DiffHunk | None:
    """Keep a hunk only if one of its lines matches.

    With context > 0 the hunk is narrowed to the matching lines plus `context`
    neighbours on each side (clamped to the hunk), always keeping index 0.

    Returns:
        The (possibly narrowed) hunk, or None if nothing matches
    """
    matches = [index for index, line in enumerate(hunk.lines) if grep.search(line)]
    if not matches:
        return None
    if context <= 0:
        return hunk

    last_index = len(hunk.lines) - 1
    keep = {0}
    for index in matches:
        keep.update(range(max(0, index - context), min(last_index, index + context) + 1))

    return hunk.with_lines([line for index, line in enumerate(hunk.lines) if index in keep])
