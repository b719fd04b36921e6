"""Domain models for reviewdiff."""

from reviewdiff.domain.diff import (
    DiffFile,
    DiffHunk,
    DiffLine,
    DiffLineType,
    ParsedDiff,
    parse_unified_diff,
)
from reviewdiff.domain.diff_source import DiffSource
from reviewdiff.domain.filter_options import DiffFilterOptions, LineRange, RenderBudget
from reviewdiff.domain.github import LinkTarget, PullRequest, PullRequestRef, Repository
from reviewdiff.domain.render_result import RenderedDiff, RenderInfo

__all__ = [
    "DiffFile",
    "DiffFilterOptions",
    "DiffHunk",
    "DiffLine",
    "DiffLineType",
    "DiffSource",
    "LineRange",
    "LinkTarget",
    "ParsedDiff",
    "PullRequest",
    "PullRequestRef",
    "RenderBudget",
    "RenderedDiff",
    "RenderInfo",
    "Repository",
    "parse_unified_diff",
]
