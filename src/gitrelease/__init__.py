"""
Top-level package for gitrelease.

gitrelease renders the commits between two tags as a grouped changelog
and publishes it as a GitHub release. The command line entry point lives
in :mod:`gitrelease.cli`.
"""

__all__ = ["__version__"]

from gitrelease._version import get_version

__version__ = get_version()
