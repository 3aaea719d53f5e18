"""Thin wrapper around the ``git`` executable."""

from __future__ import annotations

import subprocess

from gitpr.core.exceptions import GitOperationError
from gitpr.core.logging import get_logger

logger = get_logger(__name__)


class GitRunner:
    """Runs ``git`` subcommands in the current working tree.

    Output is captured; on failure git's stderr is carried verbatim on the
    raised ``GitOperationError``.
    """

    def __init__(self, executable: str = "git", cwd: str | None = None) -> None:
        self._executable = executable
        self._cwd = cwd

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its stripped stdout."""
        command = [self._executable, *args]
        logger.debug("git_command", command=command)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                cwd=self._cwd,
            )
        except FileNotFoundError as e:
            raise GitOperationError(command, None, f"{self._executable}: command not found") from e

        if result.returncode != 0:
            logger.debug("git_failed", command=command, returncode=result.returncode, stderr=result.stderr)
            raise GitOperationError(command, result.returncode, result.stderr)

        return result.stdout.strip()

    def remote_url(self, name: str) -> str:
        return self.run("remote", "get-url", name)

    def fetch(self, remote: str, refspec: str) -> None:
        self.run("fetch", remote, refspec)

    def checkout(self, branch: str) -> None:
        self.run("checkout", branch)

    def rev_parse(self, ref: str) -> str:
        return self.run("rev-parse", ref)

    def set_config(self, key: str, value: str) -> None:
        self.run("config", key, value)
