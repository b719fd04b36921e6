#!/usr/bin/env python3
"""CLI entry point for reviewdiff.

Usage:
    python -m reviewdiff <command> [options]

Commands:
    render  Parse, filter and render a unified diff within a line/hunk budget
    parse   Parse a unified diff and print its file/hunk structure
    link    Print a GitHub diff link for a file (and optional line)
"""

import argparse
import sys

from reviewdiff.commands.diff_link import cmd_diff_link
from reviewdiff.commands.parse_diff import cmd_parse_diff
from reviewdiff.commands.render_diff import cmd_render_diff
from reviewdiff.config import ConfigError, ReviewDiffConfig
from reviewdiff.domain.diff_source import DiffSource
from reviewdiff.domain.filter_options import LineRange


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reviewdiff",
        description="Bounded, line-numbered unified diff views for code review",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  render  Parse, filter and render a unified diff within a line/hunk budget
  parse   Parse a unified diff and print its file/hunk structure
  link    Print a GitHub diff link for a file (and optional line)

Examples:
  git diff | reviewdiff render
  reviewdiff render --source git --base main --grep 'TODO' --format pretty
  reviewdiff render --source pr --pr 42 --path src/api --line-range 120-200
  reviewdiff link --base-url https://github.com/o/r/pull/42 --path src/x.ts --line 17
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # render command
    parser_render = subparsers.add_parser(
        "render",
        help="Parse, filter and render a unified diff",
    )
    parser_render.add_argument(
        "--source",
        type=DiffSource.from_string,
        default=DiffSource.DIFF,
        help="Diff source: diff (file/stdin, default), git, or pr",
    )
    parser_render.add_argument(
        "--input-file",
        help="Path to diff file for --source diff. If not provided, reads from stdin",
    )
    parser_render.add_argument("--base", help="Base ref for --source git")
    parser_render.add_argument("--head", help="Head ref for --source git")
    parser_render.add_argument("--pr", help="PR number or URL for --source pr")
    parser_render.add_argument(
        "--repo-path",
        default=".",
        help="Local repository for --source git (default: current directory)",
    )
    parser_render.add_argument(
        "--path",
        dest="paths",
        action="append",
        default=[],
        help="Only include files equal to or below this path (repeatable)",
    )
    parser_render.add_argument("--grep", help="Regex to filter hunks (literal if invalid)")
    parser_render.add_argument(
        "--grep-context",
        type=_non_negative_int,
        help="Lines of context around grep matches (default: 3 when --grep is set)",
    )
    parser_render.add_argument(
        "--line-range",
        type=LineRange.from_string,
        help="New-file line range to show, e.g. 120-200",
    )
    parser_render.add_argument(
        "--context",
        type=_non_negative_int,
        help="Context lines for git diff; also scales the default line budget",
    )
    parser_render.add_argument("--max-lines", type=_positive_int, help="Report line budget")
    parser_render.add_argument("--max-hunks", type=_positive_int, help="Report hunk budget")
    parser_render.add_argument(
        "--base-url",
        help="Pull request URL used for GitHub links (default: the PR's URL for --source pr)",
    )
    parser_render.add_argument(
        "--format",
        choices=["text", "pretty", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser_render.add_argument(
        "--config",
        help="YAML config file (default: .reviewdiff.yaml if present)",
    )

    # parse command
    parser_parse = subparsers.add_parser(
        "parse",
        help="Parse a unified diff and print its structure",
    )
    parser_parse.add_argument(
        "--input-file",
        help="Path to diff file. If not provided, reads from stdin",
    )
    parser_parse.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )

    # link command
    parser_link = subparsers.add_parser(
        "link",
        help="Print a GitHub diff link for a file",
    )
    parser_link.add_argument("--base-url", required=True, help="Pull request URL")
    parser_link.add_argument("--path", required=True, help="File path as shown in the diff")
    parser_link.add_argument("--line", type=_positive_int, help="Line number to link to")
    parser_link.add_argument(
        "--side",
        choices=["R", "L"],
        default="R",
        help="R for the new file (default), L for the old file",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "render":
        try:
            config = ReviewDiffConfig.load(args.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        return cmd_render_diff(
            source=args.source,
            input_file=args.input_file,
            base=args.base,
            head=args.head,
            pr=args.pr,
            paths=tuple(args.paths),
            grep=args.grep,
            grep_context=args.grep_context,
            line_range=args.line_range,
            context=args.context,
            max_lines=args.max_lines,
            max_hunks=args.max_hunks,
            base_url=args.base_url,
            output_format=args.format,
            config=config,
            repo_path=args.repo_path,
        )

    elif args.command == "parse":
        return cmd_parse_diff(input_file=args.input_file, output_format=args.format)

    elif args.command == "link":
        return cmd_diff_link(
            base_url=args.base_url,
            path=args.path,
            line=args.line,
            side=args.side,
        )

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
