"""Tests for the diff filter service.

Tests cover:
- Path prefix matching (exact and directory prefixes only)
- Line-range slicing on new-file line numbers, including re-anchoring
- Grep filtering with and without context, invalid-regex fallback
- Dropping of files left without hunks
- Purity and idempotence of filter_diff()
"""

from __future__ import annotations

import re
import unittest

from reviewdiff.domain.diff import DiffHunk, ParsedDiff
from reviewdiff.domain.filter_options import DiffFilterOptions, LineRange
from reviewdiff.services.diff_filter import (
    compile_grep,
    filter_diff,
    grep_hunk,
    matches_path,
    slice_hunk_by_range,
)


# ============================================================
# Test Fixtures
# ============================================================


SAMPLE_DIFF = "\n".join(
    [
        "diff --git a/src/a.ts b/src/a.ts",
        "--- a/src/a.ts",
        "+++ b/src/a.ts",
        "@@ -1,3 +1,3 @@",
        " import x",
        "-const a = 1",
        "+const a = 2",
        " export a",
        "diff --git a/src/a/b.ts b/src/a/b.ts",
        "--- a/src/a/b.ts",
        "+++ b/src/a/b.ts",
        "@@ -5,2 +5,3 @@",
        " function b() {",
        "+  log('b')",
        " }",
        "diff --git a/img.png b/img.png",
        "Binary files a/img.png and b/img.png differ",
        "",
    ]
)


def make_hunk(new_start: int = 10, old_start: int = 10) -> DiffHunk:
    """Hunk: context 10..14, added 15, removed old 15, context 16."""
    header = f"@@ -{old_start},7 +{new_start},7 @@"
    body = [
        " line10",
        " line11",
        " line12",
        " line13",
        " line14",
        "+added15",
        "-removed",
        " line16",
    ]
    return DiffHunk(header=header, lines=(header, *body), old_start=old_start, new_start=new_start)


def parse(text: str = SAMPLE_DIFF) -> ParsedDiff:
    return ParsedDiff.from_diff_content(text)


# ============================================================
# Path Filter
# ============================================================


class TestPathFilter(unittest.TestCase):
    """Tests for path prefix matching."""

    def test_prefix_must_be_a_directory_boundary(self):
        result = filter_diff(parse(), DiffFilterOptions(paths=("src/a",)))
        self.assertEqual(result.get_paths(), ["src/a/b.ts"])

    def test_exact_path_matches(self):
        result = filter_diff(parse(), DiffFilterOptions(paths=("src/a.ts",)))
        self.assertEqual(result.get_paths(), ["src/a.ts"])

    def test_multiple_prefixes(self):
        result = filter_diff(parse(), DiffFilterOptions(paths=("src/a", "img.png")))
        self.assertEqual(result.get_paths(), ["src/a/b.ts", "img.png"])

    def test_empty_paths_keeps_everything(self):
        result = filter_diff(parse(), DiffFilterOptions())
        self.assertEqual(result.get_paths(), ["src/a.ts", "src/a/b.ts", "img.png"])

    def test_matches_path_helper(self):
        self.assertTrue(matches_path("src/a/b.ts", ["src"]))
        self.assertFalse(matches_path("srcx/b.ts", ["src"]))


# ============================================================
# Line Range
# ============================================================


class TestLineRangeSlice(unittest.TestCase):
    """Tests for slice_hunk_by_range()."""

    def test_single_added_line_in_range(self):
        sliced = slice_hunk_by_range(make_hunk(), LineRange(15, 15))
        self.assertIsNotNone(sliced)
        self.assertEqual(sliced.lines, ("@@ -10,7 +10,7 @@", "+added15"))

    def test_range_past_all_new_lines_drops_hunk(self):
        self.assertIsNone(slice_hunk_by_range(make_hunk(), LineRange(17, 20)))

    def test_removed_lines_never_retained(self):
        sliced = slice_hunk_by_range(make_hunk(), LineRange(15, 16))
        self.assertEqual(sliced.lines[1:], ("+added15", " line16"))

    def test_sliced_hunk_is_reanchored(self):
        sliced = slice_hunk_by_range(make_hunk(), LineRange(12, 13))
        self.assertEqual(sliced.new_start, 12)
        self.assertEqual(sliced.old_start, 12)
        self.assertEqual(sliced.header, "@@ -10,7 +10,7 @@")
        numbers = [line.new_line_number for line in sliced.get_diff_lines()[1:]]
        self.assertEqual(numbers, [12, 13])

    def test_file_header_markers_are_not_counted(self):
        header = "@@ -1,2 +1,2 @@"
        hunk = DiffHunk(header=header, lines=(header, "+++ not added", " one", "+two"), old_start=1, new_start=1)
        sliced = slice_hunk_by_range(hunk, LineRange(2, 2))
        self.assertEqual(sliced.lines, (header, "+two"))

    def test_original_hunk_untouched(self):
        hunk = make_hunk()
        slice_hunk_by_range(hunk, LineRange(15, 15))
        self.assertEqual(len(hunk.lines), 9)
        self.assertEqual(hunk.new_start, 10)


# ============================================================
# Grep
# ============================================================


class TestGrep(unittest.TestCase):
    """Tests for grep_hunk() and compile_grep()."""

    def test_no_match_drops_hunk(self):
        self.assertIsNone(grep_hunk(make_hunk(), re.compile("zzz")))

    def test_match_without_context_keeps_hunk_unchanged(self):
        hunk = make_hunk()
        self.assertIs(grep_hunk(hunk, re.compile("added15"), 0), hunk)

    def test_context_keeps_neighbours_and_header(self):
        result = grep_hunk(make_hunk(), re.compile("added15"), 1)
        self.assertEqual(result.lines, ("@@ -10,7 +10,7 @@", " line14", "+added15", "-removed"))

    def test_context_clamped_at_hunk_start(self):
        hunk = make_hunk()
        result = grep_hunk(hunk, re.compile("line10"), 5)
        self.assertEqual(result.lines, hunk.lines[:7])

    def test_context_clamped_at_hunk_end(self):
        hunk = make_hunk()
        result = grep_hunk(hunk, re.compile("line16"), 5)
        self.assertEqual(result.lines, (hunk.lines[0], *hunk.lines[3:]))

    def test_invalid_regex_falls_back_to_literal(self):
        pattern = compile_grep("foo(")
        self.assertTrue(pattern.search("call foo(bar)"))
        self.assertFalse(pattern.search("call foo"))

    def test_empty_pattern_disables_grep(self):
        self.assertIsNone(compile_grep(""))
        self.assertIsNone(compile_grep(None))


# ============================================================
# Whole-diff Behaviour
# ============================================================


class TestFilterDiff(unittest.TestCase):
    """Tests for filter_diff() stage composition."""

    def test_header_only_file_survives_path_filter(self):
        result = filter_diff(parse(), DiffFilterOptions(paths=("img.png",)))
        self.assertEqual(result.get_paths(), ["img.png"])

    def test_header_only_file_dropped_when_grep_active(self):
        result = filter_diff(parse(), DiffFilterOptions(grep="differ"))
        self.assertEqual(result.get_paths(), [])

    def test_grep_with_no_match_anywhere_yields_empty_diff(self):
        result = filter_diff(parse(), DiffFilterOptions(grep="zzz_no_match"))
        self.assertTrue(result.is_empty)

    def test_file_with_all_hunks_sliced_away_is_dropped(self):
        result = filter_diff(parse(), DiffFilterOptions(line_range=LineRange(100, 200)))
        self.assertEqual(result.get_paths(), ["img.png"])

    def test_range_then_grep_context(self):
        text = "\n".join(["diff --git a/f b/f", *make_hunk().lines])
        options = DiffFilterOptions(grep="line13", grep_context=1, line_range=LineRange(12, 16))
        result = filter_diff(parse(text), options)
        hunk = result.files[0].hunks[0]
        self.assertEqual(hunk.lines, ("@@ -10,7 +10,7 @@", " line12", " line13", " line14"))

    def test_input_is_not_mutated(self):
        diff = parse()
        before = diff.to_dict()
        filter_diff(diff, DiffFilterOptions(grep="log", grep_context=1, line_range=LineRange(5, 6)))
        self.assertEqual(diff.to_dict(), before)

    def test_idempotent_for_range(self):
        options = DiffFilterOptions(line_range=LineRange(6, 7))
        once = filter_diff(parse(), options)
        self.assertEqual(filter_diff(once, options), once)

    def test_idempotent_for_grep_with_context(self):
        options = DiffFilterOptions(paths=("src",), grep="const", grep_context=1)
        once = filter_diff(parse(), options)
        self.assertEqual(filter_diff(once, options), once)

    def test_idempotent_for_combined_filters(self):
        text = "\n".join(["diff --git a/f b/f", *make_hunk().lines])
        options = DiffFilterOptions(grep="line1[24]", grep_context=0, line_range=LineRange(11, 15))
        once = filter_diff(parse(text), options)
        self.assertEqual(filter_diff(once, options), once)


if __name__ == "__main__":
    unittest.main()
