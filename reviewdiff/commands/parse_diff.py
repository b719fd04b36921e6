"""Parse diff command.

Thin command that reads a raw diff from stdin or a file and prints the parsed
file/hunk structure as JSON (or a short text summary for debugging).
"""

from __future__ import annotations

import json
import sys

from reviewdiff.domain.diff import ParsedDiff
from reviewdiff.infrastructure.diff_input import read_diff


def format_parsed_diff_as_text(diff: ParsedDiff) -> str:
    """Format a ParsedDiff as a human-readable summary.

    Args:
        diff: Parsed diff

    Returns:
        Text listing each file and the new-side start of each hunk
    """
    if diff.is_empty:
        return "Empty diff (no files found)"

    lines = [
        f"Files changed: {len(diff)}",
        f"Total hunks: {diff.hunk_count}",
        "",
    ]
    for diff_file in diff:
        marker = " (new file)" if diff_file.is_new_file else ""
        lines.append(f"{diff_file.path}{marker}")
        if diff_file.is_header_only:
            lines.append("  (no hunks)")
        for hunk in diff_file.hunks:
            lines.append(f"  {hunk.header}  old {hunk.old_start} / new {hunk.new_start}")
    return "\n".join(lines)


def cmd_parse_diff(input_file: str | None = None, output_format: str = "json") -> int:
    """Parse a diff and print its structure.

    Args:
        input_file: Optional path to read diff from. If None, reads from stdin.
        output_format: 'json' (default) or 'text'

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        diff_content = read_diff(input_file)
    except FileNotFoundError:
        print(f"Input file not found: {input_file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to read diff: {e}", file=sys.stderr)
        return 1

    diff = ParsedDiff.from_diff_content(diff_content)

    if output_format == "text":
        print(format_parsed_diff_as_text(diff))
    else:
        print(json.dumps(diff.to_dict(), indent=2))

    return 0
