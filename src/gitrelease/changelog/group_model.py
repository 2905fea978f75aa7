"""
Data models for changelog grouping.

A :class:`CommitGroup` is one classified commit: the changelog section
it belongs to, its optional scope, its description and whether it
announces a breaking change. Groups sharing a verb are rendered together
under one section of the changelog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# Marker rendered after an entry that introduces a breaking change.
BREAKING_MARKER = "[**BREAKING CHANGE**]"
# Footer token recognised in commit bodies.
BREAKING_TOKEN = "BREAKING CHANGE"
# Markdown prefix before each item.
ITEM_PREFIX = "- "


class Section(Enum):
    """Canonical changelog sections."""

    REFACTOR = "Refactor"
    FEATURE = "Feature"
    FIX = "Fix"
    CHORE = "Chore"
    ENHANCEMENTS = "Enhancements"
    UPGRADES = "Upgrades"
    CI = "CI"
    STYLE = "Style"
    DOCS = "Docs"
    MISC = "Misc"


def upper_first(text: str) -> str:
    """Return ``text`` with its first character uppercased."""
    if not text:
        return ""
    return text[:1].upper() + text[1:]


@dataclass
class CommitGroup:
    """Representation of a classified commit.

    Attributes
    ----------
    verb : str
        Canonical section name, one of the :class:`Section` values.
    subject : str
        Optional scope, e.g. ``"api"`` or ``"git,commit"``.
    description : str
        Free text title. Pseudo-lines are separated by a literal
        backslash-n sequence and may carry issue references.
    breaking : bool
        True when the commit announces a breaking change.
    raw : str
        The line the group was classified from. Not part of equality.
    """

    verb: str
    subject: str = ""
    description: str = ""
    breaking: bool = False
    raw: str = field(default="", compare=False, repr=False)

    def section(self) -> str:
        """Return the section header line for this group."""
        return "### " + upper_first(self.verb)
