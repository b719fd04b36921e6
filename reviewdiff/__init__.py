"""reviewdiff - bounded unified diff views for assisted code review.

Parses raw unified diff text, filters it by path, regex (with context) and
new-file line range, and renders a size-bounded, line-numbered view with
GitHub deep links and follow-up range hints when output had to be truncated.

Usage:
    python -m reviewdiff <command> [options]
    reviewdiff <command> [options]

Structure:
    reviewdiff/
    ├── __main__.py          # Entry point dispatcher
    ├── config.py            # YAML-backed defaults
    ├── domain/              # Immutable models (parse-once pattern)
    │   ├── diff.py          # ParsedDiff, DiffFile, DiffHunk
    │   ├── filter_options.py
    │   ├── render_result.py
    │   ├── diff_source.py
    │   └── github.py
    ├── services/            # Diff engine and git operations
    │   ├── diff_filter.py
    │   ├── anchor_linker.py
    │   ├── diff_renderer.py
    │   └── git_operations.py
    ├── infrastructure/      # External system interactions
    │   ├── diff_input.py
    │   └── github/runner.py
    └── commands/            # Thin command orchestrators
        ├── render_diff.py
        ├── parse_diff.py
        └── diff_link.py
"""

__version__ = "0.1.0"
