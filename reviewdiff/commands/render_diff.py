"""Render diff command.

Thin command that orchestrates diff acquisition and the diff engine:
1. Acquire raw diff text (git diff, gh pr diff, or a file/stdin)
2. Parse into the domain model
3. Apply path / line-range / grep filters
4. Render within a line and hunk budget and print the result
"""

from __future__ import annotations

import json
import sys

from rich.console import Console

from reviewdiff.config import ReviewDiffConfig
from reviewdiff.domain.diff import ParsedDiff
from reviewdiff.domain.diff_source import DiffSource
from reviewdiff.domain.filter_options import DiffFilterOptions, LineRange, RenderBudget
from reviewdiff.domain.github import PullRequestRef
from reviewdiff.infrastructure.diff_input import has_content, read_diff
from reviewdiff.infrastructure.github.runner import GhCommandRunner
from reviewdiff.services.diff_filter import filter_diff
from reviewdiff.services.diff_renderer import colorize_diff_text, render_diff
from reviewdiff.services.git_operations import (
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
)

NO_RAW_DIFF_MESSAGE = "No diff output"


class DiffAcquisitionError(Exception):
    """Raised when raw diff text cannot be obtained from its source."""

    pass


# ============================================================
# Acquisition
# ============================================================


def acquire_diff(
    source: DiffSource,
    input_file: str | None = None,
    base: str | None = None,
    head: str | None = None,
    pr: str | None = None,
    paths: tuple[str, ...] = (),
    context: int | None = None,
    repo_path: str = ".",
    gh: GhCommandRunner | None = None,
) -> tuple[str, str | None]:
    """Obtain raw unified diff text from the selected source.

    Args:
        source: Where the diff comes from
        input_file: Diff file for DiffSource.DIFF (stdin if None)
        base: Base ref for DiffSource.GIT
        head: Head ref for DiffSource.GIT
        pr: PR number or URL for DiffSource.PR
        paths: Pathspecs passed to git diff
        context: `--unified` size for git diff (3 if None)
        repo_path: Local repository for DiffSource.GIT
        gh: gh runner for DiffSource.PR

    Returns:
        Tuple of (diff_text, pull request URL or None)

    Raises:
        DiffAcquisitionError: If the source cannot produce a diff
    """
    if source == DiffSource.DIFF:
        try:
            return read_diff(input_file), None
        except OSError as e:
            raise DiffAcquisitionError(f"Failed to read diff: {e}")

    if source == DiffSource.GIT:
        git = GitOperationsService(repo_path)
        unified = 3 if context is None else context
        try:
            return git.get_diff(base=base, head=head, context=unified, paths=paths), None
        except (GitDiffError, GitRepositoryError) as e:
            raise DiffAcquisitionError(str(e))

    if not pr:
        raise DiffAcquisitionError("--pr is required when --source pr")
    try:
        pr_ref = PullRequestRef.from_string(pr)
    except ValueError as e:
        raise DiffAcquisitionError(str(e))

    gh = gh or GhCommandRunner()
    if not gh.is_available():
        raise DiffAcquisitionError("gh CLI not available")

    success, pr_result = gh.get_pull_request(pr_ref)
    if not success:
        raise DiffAcquisitionError(f"Failed to resolve PR info: {pr_result}")
    assert not isinstance(pr_result, str)

    success, diff_result = gh.pr_diff(pr)
    if not success:
        raise DiffAcquisitionError(f"gh pr diff failed\n{diff_result}")
    return diff_result, pr_result.url or None


# ============================================================
# Command
# ============================================================


def cmd_render_diff(
    source: DiffSource = DiffSource.DIFF,
    input_file: str | None = None,
    base: str | None = None,
    head: str | None = None,
    pr: str | None = None,
    paths: tuple[str, ...] = (),
    grep: str | None = None,
    grep_context: int | None = None,
    line_range: LineRange | None = None,
    context: int | None = None,
    max_lines: int | None = None,
    max_hunks: int | None = None,
    base_url: str | None = None,
    output_format: str = "text",
    config: ReviewDiffConfig | None = None,
    repo_path: str = ".",
    gh: GhCommandRunner | None = None,
) -> int:
    """Acquire, filter and render a diff.

    Explicit arguments override config values, which override built-in
    defaults. Grep context defaults to the configured value (3) only when a
    grep pattern is given.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    config = config or ReviewDiffConfig()
    context = context if context is not None else config.context

    # --------------------------------------------------------
    # 1. Acquire raw diff
    # --------------------------------------------------------
    try:
        diff_content, pr_url = acquire_diff(
            source,
            input_file=input_file,
            base=base,
            head=head,
            pr=pr,
            paths=paths,
            context=context,
            repo_path=repo_path,
            gh=gh,
        )
    except DiffAcquisitionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not has_content(diff_content):
        print(NO_RAW_DIFF_MESSAGE)
        return 0

    # --------------------------------------------------------
    # 2. Parse and filter
    # --------------------------------------------------------
    parsed = ParsedDiff.from_diff_content(diff_content)
    if grep_context is None and grep:
        grep_context = config.grep_context
    options = DiffFilterOptions(
        paths=tuple(paths),
        grep=grep,
        grep_context=grep_context or 0,
        line_range=line_range,
    )
    filtered = parsed if options.is_noop else filter_diff(parsed, options)

    # --------------------------------------------------------
    # 3. Render
    # --------------------------------------------------------
    budget = resolve_budget(max_lines, max_hunks, context, config)
    link_base = base_url or pr_url or config.base_url
    rendered = render_diff(filtered, budget, base_url=link_base)

    # --------------------------------------------------------
    # 4. Output in requested format
    # --------------------------------------------------------
    if output_format == "json":
        payload = {
            "files": len(filtered),
            "hunks": filtered.hunk_count,
            "paths": filtered.get_paths(),
            "budget": budget.to_dict(),
            **rendered.to_dict(),
        }
        print(json.dumps(payload, indent=2))
    elif output_format == "pretty":
        console = Console(highlight=False)
        if rendered.diff_text:
            console.print(colorize_diff_text(rendered.diff_text))
        else:
            console.print(rendered.text, markup=False)
        console.print(f"[dim]{rendered.info.summary()}[/dim]")
    else:
        print(rendered.text)

    return 0


def resolve_budget(
    max_lines: int | None,
    max_hunks: int | None,
    context: int | None,
    config: ReviewDiffConfig,
) -> RenderBudget:
    """Combine flags, config and context-derived defaults into a budget."""
    derived = RenderBudget.from_context(context)
    lines = max_lines if max_lines is not None else config.max_lines
    hunks = max_hunks if max_hunks is not None else config.max_hunks
    return RenderBudget(
        max_lines=lines if lines is not None else derived.max_lines,
        max_hunks=hunks,
    )
