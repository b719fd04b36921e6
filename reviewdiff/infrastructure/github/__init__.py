"""GitHub CLI wrapper."""

from .runner import CommandRunner, GhCommandRunner

__all__ = ["CommandRunner", "GhCommandRunner"]
