"""CLI command implementations."""

from reviewdiff.commands.diff_link import cmd_diff_link
from reviewdiff.commands.parse_diff import cmd_parse_diff
from reviewdiff.commands.render_diff import cmd_render_diff

__all__ = ["cmd_diff_link", "cmd_parse_diff", "cmd_render_diff"]
