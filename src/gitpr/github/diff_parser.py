"""Unified diff parser: slices GitHub diffs into per-file sections and hunks."""

from __future__ import annotations

import re

from gitpr.core.models import ChangedFile, DiffSection, FileStatus, HunkRange

# Matches: @@ -10,5 +12,7 @@ optional context
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$",
    re.MULTILINE,
)

# Matches: diff --git a/old/path b/new/path
_FILE_HEADER_RE = re.compile(r"^diff --git a/(?P<old>.+?) b/(?P<new>.+)$", re.MULTILINE)

_NEW_PATH_RE = re.compile(r"^\+\+\+ b/(.+)$", re.MULTILINE)
_OLD_PATH_RE = re.compile(r"^--- a/(.+)$", re.MULTILINE)
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$", re.MULTILINE)
_RENAME_TO_RE = re.compile(r"^rename to (.+)$", re.MULTILINE)


def split_unified_diff(diff: str) -> list[DiffSection]:
    """Slice a multi-file unified diff at its ``diff --git`` boundaries.

    Each section's ``text`` is the exact substring of ``diff`` for that file,
    so joining every section's text reproduces the input from the first
    header onwards.
    """
    headers = list(_FILE_HEADER_RE.finditer(diff))
    sections: list[DiffSection] = []

    for i, header in enumerate(headers):
        end = headers[i + 1].start() if i + 1 < len(headers) else len(diff)
        text = diff[header.start() : end]
        path, previous = _section_paths(text, header.group("old"), header.group("new"))
        sections.append(DiffSection(path=path, text=text, previous_path=previous))

    return sections


def _section_paths(text: str, old: str, new: str) -> tuple[str, str | None]:
    """Prefer the unambiguous ``rename``/``+++``/``---`` lines over the header."""
    rename_to = _RENAME_TO_RE.search(text)
    if rename_to:
        rename_from = _RENAME_FROM_RE.search(text)
        return rename_to.group(1), rename_from.group(1) if rename_from else old

    new_path = _NEW_PATH_RE.search(text)
    if new_path:
        return new_path.group(1), None

    old_path = _OLD_PATH_RE.search(text)
    if old_path:
        return old_path.group(1), None

    return new, None


def section_status(section: DiffSection) -> FileStatus:
    """Infer the change kind from a section's extended header lines."""
    head = section.text.split("\n@@", 1)[0]
    if "\nnew file mode " in head:
        return FileStatus.ADDED
    if "\ndeleted file mode " in head:
        return FileStatus.REMOVED
    if section.previous_path is not None:
        return FileStatus.RENAMED
    return FileStatus.MODIFIED


def parse_patch(path: str, patch: str, status: str = "modified") -> ChangedFile:
    """Parse a single file's patch text into a ChangedFile model.

    Args:
        path: Path of the file in the repo.
        patch: Raw unified diff text for that file (a GitHub ``patch`` field
            or a sliced ``DiffSection``).
        status: One of 'added', 'modified', 'removed', 'renamed'.

    Returns:
        Structured ChangedFile with hunks and line counts.
    """
    hunks: list[HunkRange] = []
    additions = 0
    deletions = 0

    if patch:
        for match in _HUNK_HEADER_RE.finditer(patch):
            new_start = int(match.group(3))
            new_count = int(match.group(4)) if match.group(4) else 1

            # Extract the hunk body: everything from this @@ to next @@ or end
            hunk_start = match.end()
            next_match = _HUNK_HEADER_RE.search(patch, hunk_start)
            hunk_body = patch[hunk_start : next_match.start()] if next_match else patch[hunk_start:]

            hunks.append(
                HunkRange(
                    start_line=new_start,
                    line_count=new_count,
                    content=hunk_body.strip("\n"),
                )
            )

        # Count additions/deletions from the patch lines
        for line in patch.splitlines():
            if line.startswith("+") and not line.startswith("+++"):
                additions += 1
            elif line.startswith("-") and not line.startswith("---"):
                deletions += 1

    return ChangedFile(
        path=path,
        status=FileStatus(status),
        patch=patch,
        additions=additions,
        deletions=deletions,
        hunks=hunks,
    )
