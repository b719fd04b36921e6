"""GitHub diff anchor links.

GitHub's "Files changed" view anchors each file section at
`#diff-<sha256 hex of the path>` and individual lines at `R<new>` / `L<old>`
suffixes. Links built here must match that scheme exactly to resolve.
"""

from __future__ import annotations

import hashlib

from reviewdiff.domain.diff import DiffHunk
from reviewdiff.domain.github import LinkTarget


def diff_anchor(path: str) -> str:
    """Get the per-file anchor: SHA-256 of the UTF-8 path, lowercase hex."""
    return hashlib.sha256(path.encode("utf-8")).hexdigest()


def hunk_link_target(hunk: DiffHunk) -> LinkTarget:
    """Pick the line a link to this hunk should point at.

    Prefers the first added line (right side), then the first removed line
    (left side), then the hunk's new-side start.
    """
    added = hunk.get_added_lines()
    if added:
        return LinkTarget(line=added[0].new_line_number, side="R")

    removed = hunk.get_removed_lines()
    if removed:
        return LinkTarget(line=removed[0].old_line_number, side="L")
    return LinkTarget(line=hunk.new_start, side="R")


def build_github_link(
    base_url: str,
    path: str,
    line: int | None = None,
    side: str = "R",
) -> str:
    """Build a deep link into a pull request's changes view.

    Args:
        base_url: Pull request URL (trailing slash tolerated)
        path: File path as it appears in the diff
        line: Optional line number; ignored unless positive
        side: "R" (new file) or "L" (old file)

    Returns:
        URL of the form <base>/changes#diff-<anchor>[<side><line>]
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    anchor = f"diff-{diff_anchor(path)}"
    if line and line > 0:
        return f"{base}/changes#{anchor}{side}{line}"
    return f"{base}/changes#{anchor}"


def build_hunk_link(base_url: str, path: str, hunk: DiffHunk) -> str:
    """Build a link pointing at the most relevant line of a hunk."""
    target = hunk_link_target(hunk)
    return build_github_link(base_url, path, target.line, target.side)
