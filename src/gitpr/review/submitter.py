"""Submit review decisions and apply their side effects.

A submission moves ``PENDING -> SUBMITTING -> ACCEPTED | REJECTED_BY_REMOTE``.
Rejecting a PR is two remote calls (the review, then closing the PR) and each
is recorded as its own step, so a failed close never hides a successful review.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from gitpr.core.exceptions import ApiError
from gitpr.core.logging import get_logger
from gitpr.core.models import ReviewDecision
from gitpr.github.client import GitHubClient

logger = get_logger(__name__)


class ReviewState(StrEnum):
    PENDING = "pending"
    SUBMITTING = "submitting"
    ACCEPTED = "accepted"
    REJECTED_BY_REMOTE = "rejected_by_remote"


class StepName(StrEnum):
    SUBMIT_REVIEW = "submit_review"
    CLOSE_PULL_REQUEST = "close_pull_request"


class StepOutcome(BaseModel):
    step: StepName
    ok: bool
    error: str | None = None
    status_code: int | None = None


class ReviewReport(BaseModel):
    pr_number: int
    decision: ReviewDecision
    state: ReviewState = ReviewState.PENDING
    steps: list[StepOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state == ReviewState.ACCEPTED and all(s.ok for s in self.steps)

    def outcome(self, step: StepName) -> StepOutcome | None:
        return next((s for s in self.steps if s.step == step), None)


class ReviewSubmitter:
    """Runs one review submission and reports every remote call's outcome.

    Authorship is never pre-validated: GitHub's own rejection (for example
    self-approval) is recorded with its message unchanged.
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def submit(self, number: int, decision: ReviewDecision, message: str) -> ReviewReport:
        report = ReviewReport(pr_number=number, decision=decision)

        report.state = ReviewState.SUBMITTING
        try:
            head_sha = self._client.get_pull_request(number).head_sha or None
            self._client.submit_review(number, decision, message, commit_id=head_sha)
        except ApiError as e:
            report.state = ReviewState.REJECTED_BY_REMOTE
            report.steps.append(
                StepOutcome(step=StepName.SUBMIT_REVIEW, ok=False, error=str(e), status_code=e.status_code)
            )
            logger.info("review_rejected", pr_number=number, review_event=decision.event, status=e.status_code)
            return report

        report.state = ReviewState.ACCEPTED
        report.steps.append(StepOutcome(step=StepName.SUBMIT_REVIEW, ok=True))
        logger.info("review_accepted", pr_number=number, review_event=decision.event)

        if decision is ReviewDecision.REQUEST_CHANGES:
            report.steps.append(self._close(number))

        return report

    def _close(self, number: int) -> StepOutcome:
        try:
            self._client.close_pull_request(number)
        except ApiError as e:
            logger.info("close_failed", pr_number=number, status=e.status_code)
            return StepOutcome(step=StepName.CLOSE_PULL_REQUEST, ok=False, error=str(e), status_code=e.status_code)
        return StepOutcome(step=StepName.CLOSE_PULL_REQUEST, ok=True)
