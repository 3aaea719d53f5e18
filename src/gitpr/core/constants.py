"""Constants and mappings used across the application."""

from __future__ import annotations

# ── GitHub API ───────────────────────────────────────────────────────────────

USER_AGENT: str = "git-pr"
API_VERSION: str = "2022-11-28"
JSON_MEDIA_TYPE: str = "application/vnd.github+json"
DIFF_MEDIA_TYPE: str = "application/vnd.github.v3.diff"

# ── Local branches ───────────────────────────────────────────────────────────

REMOTE_NAME: str = "origin"
PULL_HEAD_REFSPEC: str = "pull/{number}/head"
SAME_REPO_BRANCH_TEMPLATE: str = "pr-request-{number}"
FORK_BRANCH_TEMPLATE: str = "{owner}-pr-{number}"

SHORT_SHA_LENGTH: int = 7

# ── Rendering ────────────────────────────────────────────────────────────────

PLACEHOLDER: str = "-"
DESCRIPTION_WRAP_WIDTH: int = 60
DEFAULT_REVIEW_MESSAGE: str = "Looks good to me."

LIST_COLUMNS: tuple[str, ...] = (
    "Number",
    "Title",
    "Author",
    "Age",
    "Total Commits",
    "Number of Changed Files",
    "Labels",
    "Description",
)

DETAIL_COLUMNS: tuple[str, ...] = (
    "PR Number",
    "Title",
    "Status",
    "Age",
    "Authors",
    "Commit SHA",
    "Changed Files",
)
