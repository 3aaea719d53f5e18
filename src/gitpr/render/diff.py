"""Render a PR's diff through an external pager, or raw."""

from __future__ import annotations

import shlex
import shutil
import subprocess
import sys
from typing import TextIO

from gitpr.core.logging import get_logger
from gitpr.core.models import ChangedFile, DiffSection
from gitpr.github.client import GitHubClient
from gitpr.github.diff_parser import parse_patch, section_status, split_unified_diff

logger = get_logger(__name__)


def section_header(section: DiffSection, meta: ChangedFile | None, multi_file: bool) -> str:
    """``── path ──`` for a lone file; kind and ``+added -removed`` when there are several."""
    name = section.path
    if section.previous_path and section.previous_path != section.path:
        name = f"{section.previous_path} → {section.path}"
    if not multi_file:
        return f"── {name} ──"

    if meta is None:
        meta = parse_patch(section.path, section.text, section_status(section))
    return f"── {name} ({meta.status.value}, +{meta.additions} -{meta.deletions}) ──"


def decorate(diff: str, files: list[ChangedFile]) -> str:
    """Interleave per-file headers with the diff's sections, left byte-for-byte intact."""
    sections = split_unified_diff(diff)
    by_path = {f.path: f for f in files}
    multi_file = len(sections) > 1

    parts: list[str] = []
    for section in sections:
        parts.append(section_header(section, by_path.get(section.path), multi_file) + "\n")
        parts.append(section.text if section.text.endswith("\n") else section.text + "\n")
    return "".join(parts)


class DiffRenderer:
    """Shows a PR's unified diff against its base.

    ``raw`` writes GitHub's diff unmodified.  Otherwise a header is written
    above each file and the result is piped to ``pager``; when the pager is not
    installed the same text is written plainly.
    """

    def __init__(self, client: GitHubClient, pager: str = "delta", out: TextIO | None = None) -> None:
        self._client = client
        self._pager = pager
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    def show_diff(self, number: int, raw: bool = False) -> None:
        diff = self._client.get_pull_request_diff(number)

        if raw:
            self.out.write(diff)
            self.out.flush()
            return

        if not diff.strip():
            logger.debug("empty_diff", pr_number=number)
            return

        text = decorate(diff, self._client.get_pull_request_files(number))
        if not self._page(text):
            self.out.write(text)
            self.out.flush()

    def _page(self, text: str) -> bool:
        """Pipe ``text`` to the pager; False when it is not installed."""
        if not self._pager.strip():
            return False
        argv = shlex.split(self._pager)
        executable = shutil.which(argv[0])
        if executable is None:
            logger.debug("pager_unavailable", pager=self._pager)
            return False

        self.out.flush()
        try:
            result = subprocess.run([executable, *argv[1:]], input=text, text=True, check=False)
        except OSError as e:
            logger.info("pager_failed", pager=self._pager, error=str(e))
            return False

        if result.returncode != 0:
            logger.info("pager_exit_status", pager=self._pager, returncode=result.returncode)
        return True
