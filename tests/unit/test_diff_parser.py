"""Tests for gitpr.github.diff_parser."""

from __future__ import annotations

from conftest import SAMPLE_DIFF

from gitpr.core.models import FileStatus
from gitpr.github.diff_parser import parse_patch, section_status, split_unified_diff

# ── Sample Patches ──────────────────────────────────────────────────────────

SIMPLE_PATCH = """\
@@ -10,5 +10,7 @@ def existing():
     pass

 def foo():
-    return None
+    return 42
+    # Extra line
"""

MULTI_HUNK_PATCH = """\
@@ -1,3 +1,4 @@
 import os
+import sys

 def a():
@@ -20,4 +21,5 @@ def b():
     pass

 def c():
+    # new comment
     return True
"""

SINGLE_LINE_HUNK = """\
@@ -5 +5 @@ context
-old_line
+new_line
"""

RENAME_DIFF = """\
diff --git a/lib/old name.py b/lib/new name.py
similarity index 90%
rename from lib/old name.py
rename to lib/new name.py
index 5555555..6666666 100644
--- a/lib/old name.py
+++ b/lib/new name.py
@@ -1 +1 @@
-x = 1
+x = 2
"""


# ── split_unified_diff ──────────────────────────────────────────────────────


class TestSplitUnifiedDiff:
    def test_one_section_per_file(self):
        sections = split_unified_diff(SAMPLE_DIFF)
        assert [s.path for s in sections] == ["src/utils.py", "docs/new.md", "old.txt"]

    def test_sections_are_exact_slices(self):
        sections = split_unified_diff(SAMPLE_DIFF)
        assert "".join(s.text for s in sections) == SAMPLE_DIFF
        for s in sections:
            assert s.text.startswith("diff --git ")
            assert s.text in SAMPLE_DIFF

    def test_empty_diff(self):
        assert split_unified_diff("") == []

    def test_rename_paths(self):
        [section] = split_unified_diff(RENAME_DIFF)
        assert section.path == "lib/new name.py"
        assert section.previous_path == "lib/old name.py"

    def test_deleted_file_uses_old_path(self):
        sections = split_unified_diff(SAMPLE_DIFF)
        assert sections[2].path == "old.txt"

    def test_mode_only_change_uses_header(self):
        diff = "diff --git a/run.sh b/run.sh\nold mode 100644\nnew mode 100755\n"
        [section] = split_unified_diff(diff)
        assert section.path == "run.sh"
        assert section.text == diff


class TestSectionStatus:
    def test_statuses(self):
        modified, added, removed = split_unified_diff(SAMPLE_DIFF)
        assert section_status(modified) == FileStatus.MODIFIED
        assert section_status(added) == FileStatus.ADDED
        assert section_status(removed) == FileStatus.REMOVED

    def test_renamed(self):
        [section] = split_unified_diff(RENAME_DIFF)
        assert section_status(section) == FileStatus.RENAMED


# ── parse_patch ─────────────────────────────────────────────────────────────


class TestParsePatch:
    def test_simple_modification(self):
        fc = parse_patch("src/utils.py", SIMPLE_PATCH, "modified")
        assert fc.path == "src/utils.py"
        assert fc.status == FileStatus.MODIFIED
        assert fc.additions == 2
        assert fc.deletions == 1
        assert len(fc.hunks) == 1
        assert fc.hunks[0].start_line == 10
        assert fc.hunks[0].line_count == 7

    def test_multi_hunk(self):
        fc = parse_patch("main.py", MULTI_HUNK_PATCH, "modified")
        assert len(fc.hunks) == 2
        assert fc.hunks[0].start_line == 1
        assert fc.hunks[1].start_line == 21
        assert fc.additions == 2
        assert fc.deletions == 0

    def test_single_line_hunk_defaults_count(self):
        fc = parse_patch("x.txt", SINGLE_LINE_HUNK)
        assert fc.hunks[0].line_count == 1
        assert fc.additions == 1
        assert fc.deletions == 1

    def test_file_headers_not_counted(self):
        [section] = split_unified_diff(RENAME_DIFF)
        fc = parse_patch(section.path, section.text, "renamed")
        assert fc.additions == 1
        assert fc.deletions == 1

    def test_empty_patch(self):
        fc = parse_patch("bin.png", "", "added")
        assert fc.hunks == []
        assert fc.additions == 0
        assert fc.status == FileStatus.ADDED
