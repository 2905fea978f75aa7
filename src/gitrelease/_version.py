"""
Version information for gitrelease.

The version comes from the installed distribution metadata. When the
package runs from a Git checkout, the short SHA of that checkout is
reported alongside it by ``gitrelease version``.
"""

import subprocess
from importlib import metadata
from pathlib import Path
from typing import Optional


DISTRIBUTION = "gitrelease"
UNKNOWN_VERSION = "development"
UNKNOWN_SHA = "N/A"


def get_version() -> str:
    """
    Return the installed version of gitrelease.

    Returns:
        The distribution version, or ``"development"`` when the package
        is not installed.
    """
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


def source_checkout() -> Optional[Path]:
    """Return the checkout root when running from a ``src/`` layout clone.

    An installed copy lives in site-packages, which may itself sit inside
    an unrelated repository, so only the parent of ``src/`` is considered.
    """
    root = Path(__file__).resolve().parents[2]
    if (root / ".git").exists():
        return root
    return None


def get_git_commit_sha(repo_path: Optional[Path] = None) -> str:
    """
    Get the short commit SHA of the checkout containing ``repo_path``.

    Args:
        repo_path: Directory inside the checkout. Defaults to the source
            checkout this package runs from, if any.

    Returns:
        Short commit SHA (7 characters) or ``"N/A"`` outside a checkout.
    """
    path = repo_path if repo_path is not None else source_checkout()
    if path is None:
        return UNKNOWN_SHA
    try:
        result = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--short=7", "HEAD"],
            capture_output=True,
            text=True,
            check=True
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return UNKNOWN_SHA
    return result.stdout.strip() or UNKNOWN_SHA


def version_string(prog_name: str = "gitrelease") -> str:
    """Return the line printed by the ``version`` command."""
    return f"{prog_name} version {get_version()} ({get_git_commit_sha()})"
