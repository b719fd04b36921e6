"""GitHub CLI command runner.

Infrastructure component that wraps subprocess calls to the gh CLI.
This abstraction allows commands to be tested without actually calling gh.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from typing import Protocol

from reviewdiff.domain.github import PullRequest, PullRequestRef, Repository

# Fields fetched for PR metadata
_PR_FIELDS = ["number", "title", "url", "headRefOid"]

# Fields fetched for repository metadata
_REPO_FIELDS = ["name", "owner"]


class CommandRunner(Protocol):
    """Protocol for running shell commands."""

    def run(self, cmd: list[str]) -> tuple[bool, str]:
        """Run a command and return (success, output/error)."""
        ...


@dataclass
class GhCommandRunner:
    """Runs gh CLI commands via subprocess.

    This is the production implementation of CommandRunner.
    For testing, mock this class or use a fake implementation.
    """

    dry_run: bool = False

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def run(self, cmd: list[str]) -> tuple[bool, str]:
        """Run a gh CLI command.

        Args:
            cmd: Command and arguments (e.g., ["gh", "pr", "diff", "12"])

        Returns:
            Tuple of (success, output_or_error)
        """
        if self.dry_run:
            return True, f"[DRY RUN] Would run: {' '.join(cmd)}"

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return True, result.stdout
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {e.stderr}", file=sys.stderr)
            return False, e.stderr or e.stdout
        except FileNotFoundError:
            return False, f"{cmd[0]}: command not found"

    def is_available(self) -> bool:
        """Check whether the gh binary can be executed."""
        success, _ = self.run(["gh", "--version"])
        return success

    def pr_diff(self, pr_ref: str) -> tuple[bool, str]:
        """Get the unified diff for a pull request.

        Args:
            pr_ref: PR number or URL, passed through to gh

        Returns:
            Tuple of (success, diff_content_or_error)
        """
        return self.run(["gh", "pr", "diff", pr_ref, "--color=never"])

    def get_repository(self, repo: str | None = None) -> tuple[bool, Repository | str]:
        """Get repository metadata as a typed model.

        Args:
            repo: Repository in owner/name format (uses git remote if None)

        Returns:
            Tuple of (success, Repository or error string)
        """
        cmd = ["gh", "repo", "view", "--json", ",".join(_REPO_FIELDS)]
        if repo:
            cmd.insert(3, repo)
        success, result = self.run(cmd)
        if not success:
            return False, result
        return True, Repository.from_json(result)

    def get_pull_request(self, pr_ref: PullRequestRef) -> tuple[bool, PullRequest | str]:
        """Get PR metadata as a typed model.

        A bare PR number is resolved against the current repository.

        Args:
            pr_ref: Parsed PR reference

        Returns:
            Tuple of (success, PullRequest or error string)
        """
        repo = pr_ref.full_repo if pr_ref.has_repo else None
        if repo is None:
            success, repo_result = self.get_repository()
            if not success:
                return False, repo_result
            assert not isinstance(repo_result, str)
            repo = repo_result.full_name

        success, result = self.run(
            [
                "gh", "pr", "view", str(pr_ref.number),
                "--repo", repo,
                "--json", ",".join(_PR_FIELDS),
            ]
        )
        if not success:
            return False, result
        return True, PullRequest.from_json(result)
