"""
Changelog generation from commit messages.

This package normalizes raw commit messages, classifies them by their
conventional-commit verb and renders the result as a grouped Markdown
changelog. See :mod:`gitrelease.changelog.renderer` for the entry point
:func:`parse_groups`.
"""

from .classifier import classify  # noqa: F401
from .group_model import CommitGroup, Section  # noqa: F401
from .normalizer import normalize_entry, normalize_message, normalize_messages  # noqa: F401
from .renderer import parse_groups  # noqa: F401
