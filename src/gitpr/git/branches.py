"""Fetch a PR's head into a local branch and check it out."""

from __future__ import annotations

from pydantic import BaseModel

from gitpr.core.constants import PULL_HEAD_REFSPEC, REMOTE_NAME
from gitpr.core.logging import get_logger
from gitpr.core.models import LocalBranch, PullRequest
from gitpr.git.runner import GitRunner
from gitpr.github.client import GitHubClient

logger = get_logger(__name__)


class PullResult(BaseModel):
    """Outcome of ``BranchManager.pull``."""

    pull_request: PullRequest
    branch: LocalBranch
    local_sha: str

    @property
    def matches_head(self) -> bool:
        """True when the checked-out tip is the head commit the API reported."""
        return bool(self.pull_request.head_sha) and self.local_sha == self.pull_request.head_sha


class BranchManager:
    """Maps a PR to a local branch and performs the fetch/checkout.

    Same-repo PRs land on ``pr-request-<n>`` with an upstream pointing at the
    PR's head branch, so work can be pushed back.  Fork PRs land on
    ``<owner>-pr-<n>`` with no upstream: that branch is a read-only copy.
    Git failures propagate as ``GitOperationError``; nothing is rolled back.
    """

    def __init__(self, client: GitHubClient, git: GitRunner, remote: str = REMOTE_NAME) -> None:
        self._client = client
        self._git = git
        self._remote = remote

    def pull(self, number: int) -> PullResult:
        pr = self._client.get_pull_request(number)
        branch = pr.local_branch
        logger.debug(
            "pull_request_origin",
            pr_number=number,
            origin=pr.origin.kind,
            head_ref=pr.head_ref,
            branch=branch.name,
        )

        refspec = f"{PULL_HEAD_REFSPEC.format(number=number)}:{branch.name}"
        self._git.fetch(self._remote, refspec)
        self._git.checkout(branch.name)

        if branch.upstream_ref:
            self._git.set_config(f"branch.{branch.name}.remote", self._remote)
            self._git.set_config(f"branch.{branch.name}.merge", f"refs/heads/{branch.upstream_ref}")

        result = PullResult(pull_request=pr, branch=branch, local_sha=self._git.rev_parse(branch.name))
        if not result.matches_head:
            logger.info(
                "head_sha_mismatch",
                pr_number=number,
                expected=pr.head_sha,
                actual=result.local_sha,
            )
        return result
