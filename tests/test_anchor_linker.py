"""Tests for GitHub diff anchor links.

Tests cover:
- SHA-256 path anchors
- Hunk link targets (first addition, then first removal, then hunk start)
- Link construction with and without line numbers
"""

from __future__ import annotations

import hashlib
import unittest

from reviewdiff.domain.diff import DiffHunk
from reviewdiff.domain.github import LinkTarget
from reviewdiff.services.anchor_linker import (
    build_github_link,
    build_hunk_link,
    diff_anchor,
    hunk_link_target,
)

PR_URL = "https://github.com/owner/repo/pull/42"


def make_hunk(*body: str, old_start: int = 20, new_start: int = 30) -> DiffHunk:
    header = f"@@ -{old_start},5 +{new_start},5 @@"
    return DiffHunk(header=header, lines=(header, *body), old_start=old_start, new_start=new_start)


class TestDiffAnchor(unittest.TestCase):
    """Tests for diff_anchor()."""

    def test_matches_sha256_of_utf8_path(self):
        expected = hashlib.sha256("src/x.ts".encode("utf-8")).hexdigest()
        self.assertEqual(diff_anchor("src/x.ts"), expected)

    def test_is_stable_64_char_lowercase_hex(self):
        anchor = diff_anchor("src/x.ts")
        self.assertEqual(anchor, diff_anchor("src/x.ts"))
        self.assertEqual(len(anchor), 64)
        self.assertRegex(anchor, r"^[0-9a-f]{64}$")

    def test_non_ascii_path(self):
        expected = hashlib.sha256("docs/ü.md".encode("utf-8")).hexdigest()
        self.assertEqual(diff_anchor("docs/ü.md"), expected)


class TestHunkLinkTarget(unittest.TestCase):
    """Tests for hunk_link_target()."""

    def test_prefers_first_added_line(self):
        hunk = make_hunk(" ctx", "-old", "+new", "+newer")
        self.assertEqual(hunk_link_target(hunk), LinkTarget(line=31, side="R"))

    def test_falls_back_to_first_removed_line(self):
        hunk = make_hunk(" ctx", " ctx", "-old", "-older")
        self.assertEqual(hunk_link_target(hunk), LinkTarget(line=22, side="L"))

    def test_falls_back_to_new_start(self):
        hunk = make_hunk(" ctx")
        self.assertEqual(hunk_link_target(hunk), LinkTarget(line=30, side="R"))

    def test_ignores_file_header_markers(self):
        hunk = make_hunk("+++ b/file", "--- a/file", " ctx")
        self.assertEqual(hunk_link_target(hunk), LinkTarget(line=30, side="R"))


class TestBuildGithubLink(unittest.TestCase):
    """Tests for build_github_link()."""

    def test_file_link_without_line(self):
        link = build_github_link(PR_URL, "src/x.ts")
        self.assertEqual(link, f"{PR_URL}/changes#diff-{diff_anchor('src/x.ts')}")

    def test_line_and_side_appended_to_anchor(self):
        link = build_github_link(PR_URL, "src/x.ts", 17, "L")
        self.assertTrue(link.endswith(f"#diff-{diff_anchor('src/x.ts')}L17"))

    def test_trailing_slash_stripped(self):
        link = build_github_link(PR_URL + "/", "a", 42)
        self.assertTrue(link.startswith(f"{PR_URL}/changes#diff-"))
        self.assertTrue(link.endswith("R42"))

    def test_non_positive_line_ignored(self):
        self.assertEqual(build_github_link(PR_URL, "a", 0), build_github_link(PR_URL, "a"))

    def test_hunk_link(self):
        hunk = make_hunk("-old", "+new")
        self.assertEqual(
            build_hunk_link(PR_URL, "a", hunk),
            f"{PR_URL}/changes#diff-{diff_anchor('a')}R30",
        )


if __name__ == "__main__":
    unittest.main()
