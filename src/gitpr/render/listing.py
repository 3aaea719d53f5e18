"""Table views for ``list`` and ``show-details``."""

from __future__ import annotations

import textwrap
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from gitpr.core.constants import DESCRIPTION_WRAP_WIDTH, DETAIL_COLUMNS, LIST_COLUMNS, PLACEHOLDER
from gitpr.core.exceptions import ApiError
from gitpr.core.logging import get_logger
from gitpr.core.models import Commit, PullRequest
from gitpr.github.client import GitHubClient
from gitpr.render.table import render_table

logger = get_logger(__name__)


def age_days(created_at: datetime, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return max((now - created_at).days, 0)


def format_age(created_at: datetime, now: datetime | None = None) -> str:
    """``today`` for PRs younger than a day, otherwise ``<days>d``."""
    days = age_days(created_at, now)
    return "today" if days == 0 else f"{days}d"


def format_labels(labels: list[str]) -> str:
    return ", ".join(labels) if labels else PLACEHOLDER


def format_description(body: str | None, width: int = DESCRIPTION_WRAP_WIDTH) -> str:
    """Wrap each paragraph of the PR body without breaking words."""
    if not body or not body.strip():
        return PLACEHOLDER
    lines: list[str] = []
    for paragraph in body.strip().splitlines():
        wrapped = textwrap.wrap(paragraph, width=width, break_long_words=False, break_on_hyphens=False)
        lines.extend(wrapped or [""])
    return "\n".join(lines)


# ── list ─────────────────────────────────────────────────────────────────────


class Listing(BaseModel):
    """Open PRs with their detail snapshots, plus any that could not be loaded."""

    pull_requests: list[PullRequest] = Field(default_factory=list)
    failures: dict[int, str] = Field(default_factory=dict)


def collect_listing(client: GitHubClient) -> Listing:
    """List open PRs, then load each one's detail view for commit/file counts.

    A PR whose detail fetch fails is left out and recorded in ``failures``.
    """
    listing = Listing()
    for summary in client.list_open_pull_requests():
        try:
            listing.pull_requests.append(client.get_pull_request(summary.number))
        except ApiError as e:
            logger.debug("pull_request_detail_failed", pr_number=summary.number, error=str(e))
            listing.failures[summary.number] = str(e)
    return listing


def list_rows(prs: list[PullRequest], now: datetime | None = None) -> list[list[str]]:
    """Rows for the ``list`` table, youngest PR first."""
    now = now or datetime.now(timezone.utc)
    ordered = sorted(prs, key=lambda pr: age_days(pr.created_at, now))
    return [
        [
            f"#{pr.number}",
            pr.title,
            pr.author,
            format_age(pr.created_at, now),
            str(pr.commit_count),
            str(pr.changed_file_count),
            format_labels(pr.labels),
            format_description(pr.description),
        ]
        for pr in ordered
    ]


def render_list(prs: list[PullRequest], now: datetime | None = None) -> str:
    return render_table(LIST_COLUMNS, list_rows(prs, now))


# ── show-details ─────────────────────────────────────────────────────────────


class CommitListing(BaseModel):
    """PR commits with their files, plus commits whose files could not be loaded."""

    commits: list[Commit] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)


def collect_commits(client: GitHubClient, number: int) -> CommitListing:
    """PR commits with the files each one touched.

    A commit whose file fetch fails is left out and recorded in ``failures``.
    """
    listing = CommitListing()
    for commit in client.get_pull_request_commits(number):
        try:
            files = client.get_commit_files(commit.sha)
        except ApiError as e:
            logger.debug("commit_files_failed", pr_number=number, sha=commit.sha, error=str(e))
            listing.failures[commit.sha] = str(e)
            continue
        listing.commits.append(commit.model_copy(update={"files": files}))
    return listing


def detail_rows(pr: PullRequest, commits: list[Commit], now: datetime | None = None) -> list[list[str]]:
    """One row per commit; the PR's identity columns are only filled on the first."""
    identity = [f"#{pr.number}", pr.title, pr.status.value, format_age(pr.created_at, now), pr.author]
    blank = [""] * len(identity)

    if not commits:
        return [[*identity, PLACEHOLDER, PLACEHOLDER]]

    return [
        [*(identity if i == 0 else blank), commit.short_sha, ", ".join(commit.files) or PLACEHOLDER]
        for i, commit in enumerate(commits)
    ]


def render_details(pr: PullRequest, commits: list[Commit], now: datetime | None = None) -> str:
    return render_table(DETAIL_COLUMNS, detail_rows(pr, commits, now))
