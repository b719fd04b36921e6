"""Tests for filter and render option models.

Tests cover:
- LineRange parsing, validation and membership
- DiffFilterOptions flags
- RenderBudget defaults and context-derived line budgets
- RenderInfo summary and RenderedDiff serialization
"""

from __future__ import annotations

import unittest

from reviewdiff.domain.filter_options import DiffFilterOptions, LineRange, RenderBudget
from reviewdiff.domain.render_result import NO_OUTPUT_MESSAGE, RenderedDiff, RenderInfo


class TestLineRange(unittest.TestCase):
    """Tests for LineRange."""

    def test_from_string(self):
        self.assertEqual(LineRange.from_string("120-200"), LineRange(120, 200))

    def test_whitespace_around_dash(self):
        self.assertEqual(LineRange.from_string(" 5 - 9 "), LineRange(5, 9))

    def test_single_line_range(self):
        self.assertEqual(LineRange.from_string("15-15"), LineRange(15, 15))

    def test_rejects_non_numeric(self):
        with self.assertRaises(ValueError) as ctx:
            LineRange.from_string("abc")
        self.assertIn("Invalid line range", str(ctx.exception))

    def test_rejects_reversed_range(self):
        with self.assertRaises(ValueError):
            LineRange.from_string("9-5")

    def test_rejects_zero_start(self):
        with self.assertRaises(ValueError):
            LineRange.from_string("0-4")

    def test_contains_is_inclusive(self):
        line_range = LineRange(10, 12)
        self.assertTrue(line_range.contains(10))
        self.assertTrue(line_range.contains(12))
        self.assertFalse(line_range.contains(9))
        self.assertFalse(line_range.contains(13))

    def test_str(self):
        self.assertEqual(str(LineRange(3, 7)), "3-7")


class TestDiffFilterOptions(unittest.TestCase):
    """Tests for DiffFilterOptions flags."""

    def test_default_is_noop(self):
        options = DiffFilterOptions()
        self.assertTrue(options.is_noop)
        self.assertFalse(options.has_content_filter)

    def test_grep_is_content_filter(self):
        options = DiffFilterOptions(grep="TODO")
        self.assertFalse(options.is_noop)
        self.assertTrue(options.has_content_filter)

    def test_range_is_not_content_filter(self):
        options = DiffFilterOptions(line_range=LineRange(1, 2))
        self.assertFalse(options.is_noop)
        self.assertFalse(options.has_content_filter)


class TestRenderBudget(unittest.TestCase):
    """Tests for RenderBudget."""

    def test_defaults(self):
        self.assertEqual(RenderBudget(), RenderBudget(max_lines=150, max_hunks=8))

    def test_no_context_uses_default(self):
        self.assertEqual(RenderBudget.from_context(None).max_lines, 150)
        self.assertEqual(RenderBudget.from_context(0).max_lines, 150)

    def test_small_context_has_floor(self):
        self.assertEqual(RenderBudget.from_context(1).max_lines, 50)

    def test_context_scales_line_budget(self):
        budget = RenderBudget.from_context(5)
        self.assertEqual(budget.max_lines, 100)
        self.assertEqual(budget.max_hunks, 8)

    def test_to_dict(self):
        self.assertEqual(RenderBudget(10, 2).to_dict(), {"max_lines": 10, "max_hunks": 2})


class TestRenderResult(unittest.TestCase):
    """Tests for RenderInfo and RenderedDiff."""

    def test_summary(self):
        info = RenderInfo(shown_files=2, shown_hunks=3, shown_lines=40)
        self.assertEqual(info.summary(), "Diff stats: files 2 • hunks 3 • lines 40")

    def test_summary_marks_truncation(self):
        info = RenderInfo(shown_files=1, shown_hunks=1, shown_lines=10, truncated=True)
        self.assertTrue(info.summary().endswith("lines 10 (truncated)"))

    def test_empty_result(self):
        rendered = RenderedDiff.empty()
        self.assertEqual(rendered.text, NO_OUTPUT_MESSAGE)
        self.assertEqual(rendered.info, RenderInfo())

    def test_to_dict(self):
        info = RenderInfo(shown_files=1, truncated=True, suggested_ranges={"a": ["1-10"]})
        result = RenderedDiff(text="t", diff_text="d", info=info).to_dict()
        self.assertEqual(result["text"], "t")
        self.assertEqual(result["info"]["suggested_ranges"], {"a": ["1-10"]})
        self.assertTrue(result["info"]["truncated"])


if __name__ == "__main__":
    unittest.main()
