"""Domain models for unified diff parsing.

Parse-once pattern: Raw diff content is parsed into immutable models at the boundary.
Provides DiffHunk, DiffFile and ParsedDiff with factory methods for deterministic,
never-failing parsing. Filtering produces new instances; nothing here is mutated
after construction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

FILE_MARKER = "diff --git "
HUNK_MARKER = "@@ "

_FILE_HEADER_PATTERN = re.compile(r"^diff --git a/(.+?) b/(.+)$")
_HUNK_HEADER_PATTERN = re.compile(r"@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")


# ============================================================
# Line Classification
# ============================================================


def is_hunk_header(line: str) -> bool:
    return line.startswith("@@")


def is_added_line(line: str) -> bool:
    """Added lines start with '+' but are not '+++' file headers."""
    return line.startswith("+") and not line.startswith("+++")


def is_removed_line(line: str) -> bool:
    """Removed lines start with '-' but are not '---' file headers."""
    return line.startswith("-") and not line.startswith("---")


def is_context_line(line: str) -> bool:
    return line.startswith(" ")


# ============================================================
# Domain Models
# ============================================================


class DiffLineType(Enum):
    """Type of line in a hunk."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"
    HEADER = "header"
    OTHER = "other"


@dataclass(frozen=True)
class DiffLine:
    """A single hunk line with its replayed line numbers.

    Attributes:
        content: The line content (without the +/-/space prefix)
        raw_line: The original line including its prefix
        line_type: Classification of the line
        new_line_number: Line number in the new file (None for removed lines)
        old_line_number: Line number in the old file (None for added lines)
    """

    content: str
    raw_line: str
    line_type: DiffLineType
    new_line_number: int | None = None
    old_line_number: int | None = None


@dataclass(frozen=True)
class DiffHunk:
    """A contiguous change region of one file.

    `lines[0]` is the `@@` header line itself; the remaining entries are raw
    body lines. Replaying the lines from old_start/new_start reproduces the
    line numbers git and GitHub assign to each change.
    """

    header: str
    lines: tuple[str, ...] = ()
    old_start: int = 0
    new_start: int = 0

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_header(cls, header: str) -> DiffHunk:
        """Start a hunk from its `@@` line.

        An unparsable header yields zero-valued starts instead of failing.
        """
        match = _HUNK_HEADER_PATTERN.search(header)
        old_start = int(match.group(1)) if match else 0
        new_start = int(match.group(2)) if match else 0
        return cls(header=header, lines=(header,), old_start=old_start, new_start=new_start)

    def to_dict(self) -> dict:
        """Convert hunk to dictionary for JSON serialization."""
        return {
            "header": self.header,
            "old_start": self.old_start,
            "new_start": self.new_start,
            "lines": list(self.lines),
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def with_lines(
        self,
        lines: list[str] | tuple[str, ...],
        old_start: int | None = None,
        new_start: int | None = None,
    ) -> DiffHunk:
        """Return a copy holding a different line list (and optionally new anchors)."""
        return DiffHunk(
            header=self.header,
            lines=tuple(lines),
            old_start=self.old_start if old_start is None else old_start,
            new_start=self.new_start if new_start is None else new_start,
        )

    def get_diff_lines(self) -> list[DiffLine]:
        """Replay hunk lines into structured DiffLine objects.

        Added lines advance the new-side counter, removed lines the old-side
        counter, and context lines both. Any other body line (for example
        `\\ No newline at end of file`) is reported with the current new-side
        number but advances nothing.

        Returns:
            List of DiffLine objects with line numbers and types
        """
        diff_lines: list[DiffLine] = []
        old_line = self.old_start
        new_line = self.new_start

        for line in self.lines:
            if is_hunk_header(line):
                diff_lines.append(
                    DiffLine(content=line, raw_line=line, line_type=DiffLineType.HEADER)
                )
            elif is_added_line(line):
                diff_lines.append(
                    DiffLine(
                        content=line[1:],
                        raw_line=line,
                        line_type=DiffLineType.ADDED,
                        new_line_number=new_line,
                    )
                )
                new_line += 1
            elif is_removed_line(line):
                diff_lines.append(
                    DiffLine(
                        content=line[1:],
                        raw_line=line,
                        line_type=DiffLineType.REMOVED,
                        old_line_number=old_line,
                    )
                )
                old_line += 1
            elif is_context_line(line):
                diff_lines.append(
                    DiffLine(
                        content=line[1:],
                        raw_line=line,
                        line_type=DiffLineType.CONTEXT,
                        new_line_number=new_line,
                        old_line_number=old_line,
                    )
                )
                old_line += 1
                new_line += 1
            else:
                diff_lines.append(
                    DiffLine(
                        content=line,
                        raw_line=line,
                        line_type=DiffLineType.OTHER,
                        new_line_number=new_line,
                    )
                )

        return diff_lines

    def get_added_lines(self) -> list[DiffLine]:
        return [line for line in self.get_diff_lines() if line.line_type == DiffLineType.ADDED]

    def get_removed_lines(self) -> list[DiffLine]:
        return [line for line in self.get_diff_lines() if line.line_type == DiffLineType.REMOVED]


@dataclass(frozen=True)
class DiffFile:
    """All changes to one file.

    A file with no hunks represents a pure rename, mode change or binary notice;
    its header lines are the only content.
    """

    path: str
    header_lines: tuple[str, ...] = ()
    hunks: tuple[DiffHunk, ...] = ()

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_header(cls, line: str) -> DiffFile:
        """Start a file entry from its `diff --git` line.

        The b/ side path is used; an unparsable line falls back to its raw text
        with the marker removed.
        """
        match = _FILE_HEADER_PATTERN.match(line)
        path = match.group(2) if match else line.replace(FILE_MARKER, "", 1)
        return cls(path=path, header_lines=(line,))

    def to_dict(self) -> dict:
        """Convert file entry to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "is_new_file": self.is_new_file,
            "header_lines": list(self.header_lines),
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def is_new_file(self) -> bool:
        """Check if this entry adds a file that did not exist before."""
        return any(
            line.startswith("--- /dev/null") or line.startswith("new file mode")
            for line in self.header_lines
        )

    @property
    def is_header_only(self) -> bool:
        return not self.hunks

    def with_hunks(self, hunks: list[DiffHunk] | tuple[DiffHunk, ...]) -> DiffFile:
        return DiffFile(path=self.path, header_lines=self.header_lines, hunks=tuple(hunks))

    def new_line_span(self) -> tuple[int, int] | None:
        """Get the smallest and largest new-side line number across all hunks.

        Only added and context lines are considered.

        Returns:
            (min_line, max_line), or None if no hunk has new-side lines
        """
        numbers = [
            diff_line.new_line_number
            for hunk in self.hunks
            for diff_line in hunk.get_diff_lines()
            if diff_line.line_type in (DiffLineType.ADDED, DiffLineType.CONTEXT)
        ]
        if not numbers:
            return None
        return min(numbers), max(numbers)


@dataclass(frozen=True)
class ParsedDiff:
    """An ordered sequence of file entries, in order of appearance.

    Use from_diff_content() to parse raw diff output.
    """

    files: tuple[DiffFile, ...] = field(default_factory=tuple)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_diff_content(cls, diff_content: str) -> ParsedDiff:
        """Parse raw unified diff text.

        Never fails: lines before the first `diff --git` marker are discarded,
        and malformed headers degrade to best-effort values.

        Args:
            diff_content: Raw output from git diff or gh pr diff

        Returns:
            ParsedDiff with one DiffFile per `diff --git` marker
        """
        lines = diff_content.split("\n")
        if diff_content.endswith("\n"):
            lines.pop()

        files: list[DiffFile] = []
        file_header: DiffFile | None = None
        header_lines: list[str] = []
        hunks: list[tuple[DiffHunk, list[str]]] = []

        def flush() -> None:
            if file_header is None:
                return
            files.append(
                DiffFile(
                    path=file_header.path,
                    header_lines=tuple(header_lines),
                    hunks=tuple(hunk.with_lines(body) for hunk, body in hunks),
                )
            )

        for line in lines:
            if line.startswith(FILE_MARKER):
                flush()
                file_header = DiffFile.from_header(line)
                header_lines = list(file_header.header_lines)
                hunks = []
                continue

            if file_header is None:
                continue

            if line.startswith(HUNK_MARKER):
                hunk = DiffHunk.from_header(line)
                hunks.append((hunk, list(hunk.lines)))
                continue

            if hunks:
                hunks[-1][1].append(line)
            else:
                header_lines.append(line)

        flush()
        return cls(files=tuple(files))

    def to_dict(self) -> dict:
        """Convert diff to dictionary for JSON serialization."""
        return {
            "file_count": len(self.files),
            "hunk_count": self.hunk_count,
            "files": [diff_file.to_dict() for diff_file in self.files],
        }

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def __iter__(self) -> Iterator[DiffFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    @property
    def is_empty(self) -> bool:
        """Check if the diff contains no file entries."""
        return not self.files

    @property
    def hunk_count(self) -> int:
        return sum(len(diff_file.hunks) for diff_file in self.files)

    def get_paths(self) -> list[str]:
        """Get file paths in order of appearance."""
        return [diff_file.path for diff_file in self.files]


def parse_unified_diff(diff_content: str) -> ParsedDiff:
    """Parse raw unified diff text into a ParsedDiff."""
    return ParsedDiff.from_diff_content(diff_content)
