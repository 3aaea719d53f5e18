"""Pydantic models for GitHub API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from gitpr.core.models import (
    ChangedFile,
    Commit,
    FileStatus,
    Fork,
    HeadOrigin,
    PRStatus,
    PullRequest,
    SameRepo,
)


class GitHubUser(BaseModel):
    login: str


class GitHubLabel(BaseModel):
    name: str


class GitHubRepo(BaseModel):
    full_name: str
    owner: GitHubUser


class GitHubPRRef(BaseModel):
    ref: str
    sha: str
    label: str = ""
    repo: GitHubRepo | None = None  # null when the fork was deleted


class GitHubPullRequest(BaseModel):
    """Subset of GitHub's PR response we actually need.

    ``commits`` and ``changed_files`` are only present on the single-PR
    endpoint, not in list responses.
    """

    number: int
    title: str
    body: str | None = None
    state: str = "open"
    merged: bool = False
    merged_at: datetime | None = None
    created_at: datetime
    head: GitHubPRRef
    base: GitHubPRRef
    user: GitHubUser | None = None
    labels: list[GitHubLabel] = Field(default_factory=list)
    commits: int = 0
    changed_files: int = 0
    html_url: str = ""

    def head_origin(self) -> HeadOrigin:
        """Same-repo when head and base share a repository, otherwise the fork's owner."""
        base_name = self.base.repo.full_name if self.base.repo else ""
        if self.head.repo is not None:
            if self.head.repo.full_name == base_name:
                return SameRepo()
            return Fork(owner=self.head.repo.owner.login)
        # Deleted fork: fall back to the "owner:branch" label, then the author.
        owner = self.head.label.split(":", 1)[0] if ":" in self.head.label else ""
        return Fork(owner=owner or (self.user.login if self.user else "unknown"))

    def status(self) -> PRStatus:
        if self.merged or self.merged_at is not None:
            return PRStatus.MERGED
        return PRStatus(self.state) if self.state in {s.value for s in PRStatus} else PRStatus.OPEN

    def to_domain(self) -> PullRequest:
        return PullRequest(
            number=self.number,
            title=self.title,
            author=self.user.login if self.user else "",
            created_at=self.created_at,
            status=self.status(),
            base_ref=self.base.ref,
            head_ref=self.head.ref,
            head_sha=self.head.sha,
            origin=self.head_origin(),
            commit_count=self.commits,
            changed_file_count=self.changed_files,
            labels=[label.name for label in self.labels],
            description=self.body,
        )


class GitHubCommitAuthor(BaseModel):
    name: str = ""


class GitHubCommitDetail(BaseModel):
    message: str = ""
    author: GitHubCommitAuthor | None = None


class GitHubFile(BaseModel):
    """A file entry from GET /pulls/{number}/files or GET /commits/{sha}."""

    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None
    previous_filename: str | None = None
    sha: str | None = None

    def to_domain(self) -> ChangedFile:
        status = self.status if self.status in {s.value for s in FileStatus} else FileStatus.MODIFIED
        return ChangedFile(
            path=self.filename,
            status=FileStatus(status),
            additions=self.additions,
            deletions=self.deletions,
            previous_path=self.previous_filename,
            patch=self.patch or "",
        )


class GitHubCommit(BaseModel):
    """An entry from GET /pulls/{number}/commits (or GET /commits/{sha})."""

    sha: str
    commit: GitHubCommitDetail = Field(default_factory=GitHubCommitDetail)
    author: GitHubUser | None = None  # null when the commit email maps to no account
    files: list[GitHubFile] = Field(default_factory=list)

    def to_domain(self) -> Commit:
        if self.author is not None:
            author = self.author.login
        elif self.commit.author is not None:
            author = self.commit.author.name
        else:
            author = ""
        return Commit(
            sha=self.sha,
            author=author,
            message=self.commit.message,
            files=[f.filename for f in self.files],
        )


class GitHubReviewRequest(BaseModel):
    """Payload for submitting a PR review."""

    event: str  # APPROVE, REQUEST_CHANGES, COMMENT
    body: str = ""
    commit_id: str | None = None
