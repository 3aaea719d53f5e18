"""Domain exception hierarchy.

All exceptions inherit from ``GitPrError`` so the CLI can catch broadly at the
command boundary and map every failure to a non-zero exit code.
"""

from __future__ import annotations

from collections.abc import Sequence


class GitPrError(Exception):
    """Base exception for all git-pr errors."""

    def __init__(self, message: str = "", *, detail: str = "") -> None:
        self.detail = detail or message
        super().__init__(message)


# ── Local setup ──────────────────────────────────────────────────────────────


class ConfigurationError(GitPrError):
    """No usable ``origin`` remote, or invalid settings."""


class AuthenticationError(GitPrError):
    """No GitHub token available for a command that needs the API."""


# ── GitHub ───────────────────────────────────────────────────────────────────


class ApiError(GitPrError):
    """Non-2xx response (or transport failure) from the GitHub API.

    ``str(err)`` is the remote's own message, passed through unchanged.
    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(self, message: str, *, status_code: int | None = None, detail: str = "") -> None:
        self.status_code = status_code
        super().__init__(message, detail=detail)


# ── Git ──────────────────────────────────────────────────────────────────────


class GitOperationError(GitPrError):
    """A ``git`` subprocess exited non-zero or could not be started."""

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = stderr.strip() or f"`{' '.join(self.command)}` exited with status {returncode}"
        super().__init__(message, detail=f"git exited with status {returncode}")
