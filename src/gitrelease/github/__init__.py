"""
GitHub integration for gitrelease.

This package contains the :class:`ReleaseClient` which publishes a
rendered changelog as the body of a GitHub release.
"""

from .release_client import ReleaseClient, ReleaseError, ReleaseExistsError, ReleaseRequest  # noqa: F401
