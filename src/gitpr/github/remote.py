"""Resolve the GitHub ``owner/repo`` behind the local ``origin`` remote."""

from __future__ import annotations

import re

from gitpr.core.constants import REMOTE_NAME
from gitpr.core.exceptions import ConfigurationError, GitOperationError
from gitpr.core.logging import get_logger
from gitpr.core.models import RepoRef
from gitpr.git.runner import GitRunner

logger = get_logger(__name__)

_SEGMENT = r"[A-Za-z0-9_.-]+"

# https://github.com/o/r(.git), http://, https://user@github.com/..., git://github.com/o/r.git
_HTTP_RE = re.compile(
    rf"^(?:https?|git)://(?:[^@/]+@)?github\.com(?::\d+)?/(?P<owner>{_SEGMENT})/(?P<repo>{_SEGMENT}?)(?:\.git)?/?$"
)
# ssh://git@github.com(:22)/o/r.git
_SSH_URL_RE = re.compile(
    rf"^ssh://(?:[^@/]+@)?github\.com(?::\d+)?/(?P<owner>{_SEGMENT})/(?P<repo>{_SEGMENT}?)(?:\.git)?/?$"
)
# git@github.com:o/r.git
_SCP_RE = re.compile(rf"^(?:[^@/]+@)?github\.com:/?(?P<owner>{_SEGMENT})/(?P<repo>{_SEGMENT}?)(?:\.git)?/?$")


def parse_remote_url(url: str) -> RepoRef:
    """Extract owner and repo from a GitHub remote URL.

    Raises:
        ConfigurationError: If the URL is not a recognised GitHub URL.
    """
    candidate = url.strip()
    for pattern in (_HTTP_RE, _SSH_URL_RE, _SCP_RE):
        match = pattern.match(candidate)
        if match and match.group("repo"):
            return RepoRef(owner=match.group("owner"), repo=match.group("repo"))
    raise ConfigurationError(
        f"Remote URL is not a GitHub repository: {url}",
        detail="Expected https://github.com/<owner>/<repo> or git@github.com:<owner>/<repo>.git",
    )


def resolve_origin(git: GitRunner, remote: str = REMOTE_NAME) -> RepoRef:
    """Read the ``origin`` remote URL from local git config and parse it."""
    try:
        url = git.remote_url(remote)
    except GitOperationError as e:
        raise ConfigurationError(
            f"Could not determine remote {remote} URL",
            detail=e.stderr.strip(),
        ) from e

    if not url:
        raise ConfigurationError(f"Could not determine remote {remote} URL")

    repo = parse_remote_url(url)
    logger.debug("resolved_origin", url=url, owner=repo.owner, repo=repo.repo)
    return repo
