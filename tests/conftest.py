"""Shared test fixtures for all git-pr tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from pydantic import SecretStr

from gitpr.core.config import Settings
from gitpr.core.exceptions import GitOperationError
from gitpr.core.models import RepoRef
from gitpr.git.runner import GitRunner

API = "https://api.github.com"
OWNER = "octo"
REPO = "widgets"
ORIGIN_URL = f"git@github.com:{OWNER}/{REPO}.git"


class FakeGit(GitRunner):
    """Records git invocations instead of running them."""

    def __init__(
        self,
        outputs: dict[tuple[str, ...], str] | None = None,
        failures: dict[tuple[str, ...], str] | None = None,
    ) -> None:
        super().__init__()
        self.calls: list[tuple[str, ...]] = []
        self.outputs = outputs or {}
        self.failures = failures or {}

    def run(self, *args: str) -> str:
        self.calls.append(args)
        if args in self.failures:
            raise GitOperationError(["git", *args], 128, self.failures[args])
        return self.outputs.get(args, "")


def make_pr_payload(
    number: int = 42,
    *,
    title: str = "Fix null return in utils",
    user: str = "alice",
    fork_owner: str | None = None,
    head_ref: str = "fix/null-return",
    head_sha: str = "a1b2c3d4e5f6a7b8c9d0a1b2c3d4e5f6a7b8c9d0",
    state: str = "open",
    merged: bool = False,
    created_at: datetime | None = None,
    labels: list[str] | None = None,
    body: str | None = "Fixes the null return value in foo().",
    commits: int = 2,
    changed_files: int = 3,
) -> dict[str, Any]:
    """A GitHub ``GET /pulls/{n}`` response body."""
    base_repo = {"full_name": f"{OWNER}/{REPO}", "owner": {"login": OWNER}}
    head_owner = fork_owner or OWNER
    head_repo = {"full_name": f"{head_owner}/{REPO}", "owner": {"login": head_owner}}
    created = created_at or datetime.now(timezone.utc) - timedelta(days=3)
    return {
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "merged": merged,
        "created_at": created.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "user": {"login": user},
        "labels": [{"name": name} for name in (labels or [])],
        "commits": commits,
        "changed_files": changed_files,
        "head": {"ref": head_ref, "sha": head_sha, "label": f"{head_owner}:{head_ref}", "repo": head_repo},
        "base": {"ref": "main", "sha": "f" * 40, "label": f"{OWNER}:main", "repo": base_repo},
        "html_url": f"https://github.com/{OWNER}/{REPO}/pull/{number}",
    }


def pulls_url(suffix: str = "") -> str:
    return f"{API}/repos/{OWNER}/{REPO}/pulls{suffix}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        github_token=SecretStr("ghp_test_token"),
        debug=False,
        pager="",
        default_review="approve",
    )


@pytest.fixture
def repo() -> RepoRef:
    return RepoRef(owner=OWNER, repo=REPO)


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit(outputs={("remote", "get-url", "origin"): ORIGIN_URL})


SAMPLE_DIFF = """\
diff --git a/src/utils.py b/src/utils.py
index 1111111..2222222 100644
--- a/src/utils.py
+++ b/src/utils.py
@@ -10,5 +10,6 @@ def existing():
     pass

 def foo():
-    return None
+    return 42
+    # Extra line
diff --git a/docs/new.md b/docs/new.md
new file mode 100644
index 0000000..3333333
--- /dev/null
+++ b/docs/new.md
@@ -0,0 +1,2 @@
+# New
+Hello
diff --git a/old.txt b/old.txt
deleted file mode 100644
index 4444444..0000000
--- a/old.txt
+++ /dev/null
@@ -1 +0,0 @@
-bye
"""

SAMPLE_FILES = [
    {"filename": "src/utils.py", "status": "modified", "additions": 2, "deletions": 1, "changes": 3},
    {"filename": "docs/new.md", "status": "added", "additions": 2, "deletions": 0, "changes": 2},
    {"filename": "old.txt", "status": "removed", "additions": 0, "deletions": 1, "changes": 1},
]
