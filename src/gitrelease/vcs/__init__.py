"""
Version control integration.

This package contains the :class:`GitClient` used to resolve tags, read
commit messages between two revisions and find the GitHub repository
behind a remote.
"""

from .git_client import GitClient, GitError  # noqa: F401
