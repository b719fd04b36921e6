"""Services for reviewdiff.

The diff engine (filter, anchor linker, renderer) is a set of pure functions
over domain models. GitOperationsService wraps the git binary and receives its
repository path via constructor injection.
"""

from reviewdiff.services.anchor_linker import (
    build_github_link,
    build_hunk_link,
    diff_anchor,
    hunk_link_target,
)
from reviewdiff.services.diff_filter import compile_grep, filter_diff
from reviewdiff.services.diff_renderer import (
    colorize_diff_text,
    compute_file_line_ranges,
    render_diff,
)
from reviewdiff.services.git_operations import (
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
)

__all__ = [
    "GitDiffError",
    "GitOperationsService",
    "GitRepositoryError",
    "build_github_link",
    "build_hunk_link",
    "colorize_diff_text",
    "compile_grep",
    "compute_file_line_ranges",
    "diff_anchor",
    "filter_diff",
    "hunk_link_target",
    "render_diff",
]
