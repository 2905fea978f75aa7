"""
Git client implementation for gitrelease.

This module wraps the few Git queries the release tool needs: resolving
tags, reading commit messages between two revisions and finding the
GitHub user and repository behind a remote. All subprocess calls go
through :meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Separates commits in the ``git log`` output.
COMMIT_SEPARATOR = "0" * 35

_INFO_RE = re.compile(r"github\.com[:/](?P<user>[^/\s]+)/(?P<repo>[^\s/]+?)(?:\.git)?/?$")


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for querying a Git repository.

    Parameters
    ----------
    repo_root : Path
        Directory the Git commands run in.
    remote : str, optional
        Remote used to resolve the GitHub user and repository.
    """

    def __init__(self, repo_root: Path, remote: str = "origin") -> None:
        self.repo_root = repo_root
        self.remote = remote

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if the git binary cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Could not execute git: %s", exc)
            raise GitError(f"Failed to execute git: {exc}") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    def latest_tag(self) -> str:
        """Return the most recent tag reachable from HEAD."""
        result = self._run(["describe", "--tags", "--abbrev=0"])
        return result.stdout.strip("\n")

    def previous_tag(self, tag: str) -> str:
        """Return the tag preceding ``tag``.

        ``tag`` may be any revision, ``@`` included, in which case the
        most recent tag strictly before HEAD is returned.
        """
        result = self._run(["describe", "--tags", "--abbrev=0", f"{tag}^"])
        return result.stdout.strip("\n")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def commits(self, tag1: str, tag2: str) -> List[str]:
        """Return the full messages of all commits in ``tag1..tag2``.

        Messages are returned newest first, each as the raw multi-line
        text of the commit with surrounding newlines removed.
        """
        result = self._run(
            [
                "log",
                f"{tag1}..{tag2}",
                f"--pretty=format:{COMMIT_SEPARATOR}%B",
            ]
        )
        messages = []
        for chunk in result.stdout.split(COMMIT_SEPARATOR):
            message = chunk.strip("\n")
            if not message:
                continue
            messages.append(message)
        logger.debug("Found %d commits between %s and %s", len(messages), tag1, tag2)
        return messages

    # ------------------------------------------------------------------
    # Remote information
    # ------------------------------------------------------------------
    def remote_url(self) -> str:
        """Return the URL configured for the client's remote."""
        result = self._run(["config", "--get", f"remote.{self.remote}.url"])
        return result.stdout.strip()

    def repo_info(self) -> Tuple[str, str]:
        """Return the GitHub ``(user, repo)`` pair behind the remote.

        SSH (``git@github.com:user/repo.git``), HTTPS and scheme-less
        URLs are supported, with or without the ``.git`` suffix.

        Raises
        ------
        GitError
            If the remote is missing or does not point to GitHub.
        """
        url = self.remote_url()
        match = _INFO_RE.search(url)
        if match is None:
            raise GitError(f"could not parse repository info: {url}")
        return match.group("user"), match.group("repo")
