"""GitHub API client for reading pull requests and submitting reviews."""

from __future__ import annotations

from typing import Any

import httpx

from gitpr.core.config import Settings
from gitpr.core.constants import API_VERSION, DIFF_MEDIA_TYPE, JSON_MEDIA_TYPE, USER_AGENT
from gitpr.core.exceptions import ApiError
from gitpr.core.logging import RequestTrace, TraceSink, get_logger
from gitpr.core.models import ChangedFile, Commit, PullRequest, RepoRef, ReviewDecision
from gitpr.github.schemas import GitHubCommit, GitHubFile, GitHubPullRequest, GitHubReviewRequest

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Render GitHub's error body as ``message: error[; error...]``.

    ``{"message": "Unprocessable Entity", "errors": ["Can not approve your own
    pull request"]}`` becomes ``Unprocessable Entity: Can not approve your own
    pull request``.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        text = response.text.strip()
        return f"{response.reason_phrase}: {text}" if text else response.reason_phrase

    message = str(body.get("message") or response.reason_phrase)
    details: list[str] = []
    for err in body.get("errors") or []:
        if isinstance(err, str):
            details.append(err)
        elif isinstance(err, dict):
            details.append(str(err.get("message") or err.get("code") or err))
    if details:
        return f"{message}: {'; '.join(details)}"
    return message


class GitHubClient:
    """Synchronous client for the GitHub REST API, bound to one repository.

    The token is checked when the client is built, so a missing token fails
    before any request is attempted.  Every round trip is reported to
    ``trace`` when one is given.
    """

    def __init__(
        self,
        settings: Settings,
        repo: RepoRef,
        *,
        trace: TraceSink | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._token = settings.require_token()
        self._repo = repo
        self._trace = trace
        self._transport = transport
        self._base_url = settings.github_api_base.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def repo(self) -> RepoRef:
        return self._repo

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self._base_url,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": JSON_MEDIA_TYPE,
                    "X-GitHub-Api-Version": API_VERSION,
                    "User-Agent": USER_AGENT,
                },
                timeout=self._settings.request_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ── Transport ────────────────────────────────────────────────────────────

    def _emit(self, event: RequestTrace) -> None:
        if self._trace is not None:
            self._trace(event)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        client = self._get_client()
        headers = {"Accept": accept} if accept else None
        request = client.build_request(method, path, params=params, json=json, headers=headers)

        try:
            response = client.send(request)
        except httpx.HTTPError as e:
            self._emit(RequestTrace(method=method, url=str(request.url), payload=json, error=str(e)))
            raise ApiError(f"{method} {request.url} failed: {e}", detail=type(e).__name__) from e

        self._emit(
            RequestTrace(method=method, url=str(request.url), status_code=response.status_code, payload=json)
        )

        if not response.is_success:
            raise ApiError(
                _error_message(response),
                status_code=response.status_code,
                detail=f"{method} {path}: HTTP {response.status_code}",
            )
        return response

    def _get_paginated(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """GET every page of a list endpoint."""
        per_page = self._settings.per_page
        items: list[Any] = []
        page = 1

        while True:
            data = self._request("GET", path, params={**(params or {}), "per_page": per_page, "page": page}).json()
            if not data:
                break
            items.extend(data)
            if len(data) < per_page:
                break
            page += 1

        return items

    def _pulls_path(self, suffix: str = "") -> str:
        return f"/repos/{self._repo.owner}/{self._repo.repo}/pulls{suffix}"

    # ── Pull requests ────────────────────────────────────────────────────────

    def list_open_pull_requests(self) -> list[PullRequest]:
        """Open PRs from the list endpoint (commit/file counts are not populated)."""
        data = self._get_paginated(self._pulls_path(), params={"state": "open"})
        prs = [GitHubPullRequest.model_validate(item).to_domain() for item in data]
        logger.debug("listed_pull_requests", repo=self._repo.full_name, count=len(prs))
        return prs

    def get_pull_request(self, number: int) -> PullRequest:
        data = self._request("GET", self._pulls_path(f"/{number}")).json()
        return GitHubPullRequest.model_validate(data).to_domain()

    def get_pull_request_commits(self, number: int) -> list[Commit]:
        """Commits on the PR, oldest first."""
        data = self._get_paginated(self._pulls_path(f"/{number}/commits"))
        return [GitHubCommit.model_validate(item).to_domain() for item in data]

    def get_pull_request_files(self, number: int) -> list[ChangedFile]:
        data = self._get_paginated(self._pulls_path(f"/{number}/files"))
        return [GitHubFile.model_validate(item).to_domain() for item in data]

    def get_commit_files(self, sha: str) -> list[str]:
        """Paths touched by a single commit."""
        data = self._request("GET", f"/repos/{self._repo.owner}/{self._repo.repo}/commits/{sha}").json()
        return GitHubCommit.model_validate(data).to_domain().files

    def get_pull_request_diff(self, number: int) -> str:
        """The PR's unified diff against its base, exactly as GitHub renders it."""
        response = self._request("GET", self._pulls_path(f"/{number}"), accept=DIFF_MEDIA_TYPE)
        return response.text

    # ── Writes ───────────────────────────────────────────────────────────────

    def submit_review(
        self,
        number: int,
        decision: ReviewDecision,
        message: str,
        commit_id: str | None = None,
    ) -> dict[str, Any]:
        """Submit a review; the remote's rejection surfaces as ``ApiError``."""
        review = GitHubReviewRequest(event=decision.event, body=message, commit_id=commit_id)
        logger.info("submitting_review", repo=self._repo.full_name, pr_number=number, review_event=review.event)
        return self._request(
            "POST",
            self._pulls_path(f"/{number}/reviews"),
            json=review.model_dump(exclude_none=True),
        ).json()

    def close_pull_request(self, number: int) -> PullRequest:
        logger.info("closing_pull_request", repo=self._repo.full_name, pr_number=number)
        data = self._request("PATCH", self._pulls_path(f"/{number}"), json={"state": "closed"}).json()
        return GitHubPullRequest.model_validate(data).to_domain()
