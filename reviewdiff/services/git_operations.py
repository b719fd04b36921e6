"""Git operations service.

Core service for git command operations. Encapsulates the subprocess calls
that produce raw unified diff text for the render command.
"""

import subprocess
from pathlib import Path


class GitDiffError(Exception):
    """Raised when git diff command fails."""

    pass


class GitRepositoryError(Exception):
    """Raised when directory is not a git repository."""

    pass


class GitOperationsService:
    """Core service for git command operations.

    Encapsulates all subprocess calls to git commands.
    """

    def __init__(self, repo_path: str = "."):
        """Initialize with repository path.

        Args:
            repo_path: Path to git repository (default: current directory)
        """
        self.repo_path = Path(repo_path)

    def get_diff(
        self,
        base: str | None = None,
        head: str | None = None,
        context: int = 3,
        paths: tuple[str, ...] | list[str] = (),
    ) -> str:
        """Get a unified diff of the working tree or between refs.

        With neither ref the working tree is compared against the index; with
        one ref against that ref; with both, between them.

        Args:
            base: Base ref
            head: Head ref
            context: Number of context lines (`--unified`)
            paths: Optional pathspecs limiting the diff

        Returns:
            Raw unified diff text

        Raises:
            GitDiffError: If diff command fails
            GitRepositoryError: If not in a git repository
        """
        self._require_repository()

        cmd = ["git", "diff", f"--unified={context}"]
        cmd.extend(ref for ref in (base, head) if ref)
        if paths:
            cmd.append("--")
            cmd.extend(paths)

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitDiffError(f"git diff failed\n{e.stderr or e.stdout}")

    def is_git_repository(self) -> bool:
        """Check if current directory is a git repository.

        Returns:
            True if valid git repo, False otherwise
        """
        try:
            subprocess.run(
                ["git", "rev-parse", "--git-dir"],
                cwd=self.repo_path,
                capture_output=True,
                check=True,
            )
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def _require_repository(self) -> None:
        if not self.is_git_repository():
            raise GitRepositoryError(
                f"Not a git repository: {self.repo_path}\n"
                "Make sure you're running from within a git repository."
            )
