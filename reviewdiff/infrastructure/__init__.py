"""Infrastructure components for reviewdiff.

This layer handles external system interactions:
- GitHub pull requests via the gh CLI
- Raw diff input from files and stdin

Organized into subdirectories:
- github/ - gh CLI wrapper
"""

from .diff_input import has_content, read_diff
from .github import CommandRunner, GhCommandRunner

__all__ = [
    "CommandRunner",
    "GhCommandRunner",
    "has_content",
    "read_diff",
]
