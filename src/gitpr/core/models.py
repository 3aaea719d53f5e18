"""Domain models shared across all git-pr modules.

These are read-only snapshots re-derived from the GitHub API on every command;
nothing here is persisted.  Modules communicate through these types, never the
raw API payloads.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gitpr.core.constants import FORK_BRANCH_TEMPLATE, SAME_REPO_BRANCH_TEMPLATE, SHORT_SHA_LENGTH


# ── Enums ────────────────────────────────────────────────────────────────────


class PRStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class FileStatus(StrEnum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"
    COPIED = "copied"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


class ReviewDecision(StrEnum):
    APPROVE = "approve"
    COMMENT_ONLY = "comment-only"
    REQUEST_CHANGES = "reject"

    @property
    def event(self) -> str:
        """The review event name GitHub expects for this decision."""
        return _REVIEW_EVENTS[self]


_REVIEW_EVENTS: dict[ReviewDecision, str] = {
    ReviewDecision.APPROVE: "APPROVE",
    ReviewDecision.COMMENT_ONLY: "COMMENT",
    ReviewDecision.REQUEST_CHANGES: "REQUEST_CHANGES",
}


# ── Repository / origin ──────────────────────────────────────────────────────


class RepoRef(BaseModel):
    """``owner/repo`` coordinates of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class SameRepo(BaseModel):
    """Head branch lives in the base repository."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["same-repo"] = "same-repo"


class Fork(BaseModel):
    """Head branch lives in someone else's fork."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fork"] = "fork"
    owner: str


HeadOrigin = SameRepo | Fork


class LocalBranch(BaseModel):
    """Local branch name derived from a PR's identity and head origin."""

    model_config = ConfigDict(frozen=True)

    name: str
    pushable: bool
    upstream_ref: str | None = None  # remote head branch to track, same-repo only

    @classmethod
    def for_pull_request(cls, number: int, origin: HeadOrigin, head_ref: str = "") -> LocalBranch:
        if isinstance(origin, Fork):
            return cls(name=FORK_BRANCH_TEMPLATE.format(owner=origin.owner, number=number), pushable=False)
        return cls(
            name=SAME_REPO_BRANCH_TEMPLATE.format(number=number),
            pushable=True,
            upstream_ref=head_ref or None,
        )


# ── PR / Diff Models ────────────────────────────────────────────────────────


class PullRequest(BaseModel):
    """Snapshot of one pull request."""

    number: int = Field(gt=0)
    title: str
    author: str
    created_at: datetime
    status: PRStatus = PRStatus.OPEN
    base_ref: str
    head_ref: str
    head_sha: str = ""
    origin: HeadOrigin = Field(default_factory=SameRepo, discriminator="kind")
    commit_count: int = 0
    changed_file_count: int = 0
    labels: list[str] = Field(default_factory=list)
    description: str | None = None

    @property
    def is_fork(self) -> bool:
        return isinstance(self.origin, Fork)

    @property
    def local_branch(self) -> LocalBranch:
        return LocalBranch.for_pull_request(self.number, self.origin, self.head_ref)


class Commit(BaseModel):
    """A commit within a PR, in the order the API returns them (oldest first)."""

    sha: str
    author: str = ""
    message: str = ""
    files: list[str] = Field(default_factory=list)

    @property
    def short_sha(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]


class HunkRange(BaseModel):
    """A single @@ hunk within a file diff."""

    start_line: int
    line_count: int
    content: str


class ChangedFile(BaseModel):
    """A single file affected by the PR."""

    path: str
    status: FileStatus = FileStatus.MODIFIED
    additions: int = 0
    deletions: int = 0
    previous_path: str | None = None
    patch: str = ""
    hunks: list[HunkRange] = Field(default_factory=list)


class DiffSection(BaseModel):
    """One ``diff --git`` block sliced verbatim out of a unified diff."""

    path: str
    text: str
    previous_path: str | None = None
