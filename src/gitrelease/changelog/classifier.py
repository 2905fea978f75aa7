"""
Classify normalized commit lines into changelog sections.

Each line is parsed with a single regular grammar::

    <verb>[!][(<subject>)][!][:] <description>

The verb selects the section through a static, case-insensitive lookup
table; anything unknown lands in ``Misc``. Classification is total: any
input, however malformed, yields a :class:`CommitGroup`.
"""

from __future__ import annotations

import re
from typing import Dict

from gitrelease.changelog.group_model import CommitGroup, Section


_HEADER_RE = re.compile(
    r"""
    \s*
    (?P<verb>[A-Za-z]+)(?P<verb_break>!)?
    (?:\((?P<subject>[A-Za-z,_-]+)\))?
    (?P<subject_break>!)?
    :?
    (?P<description>.*)
    """,
    re.VERBOSE,
)

_VERBS: Dict[str, Section] = {
    "ref": Section.REFACTOR,
    "refactor": Section.REFACTOR,
    "feat": Section.FEATURE,
    "feature": Section.FEATURE,
    "fix": Section.FIX,
    "fixed": Section.FIX,
    "chore": Section.CHORE,
    "enhance": Section.ENHANCEMENTS,
    "enhancements": Section.ENHANCEMENTS,
    "enhancement": Section.ENHANCEMENTS,
    "upgrade": Section.UPGRADES,
    "ci": Section.CI,
    "style": Section.STYLE,
    "docs": Section.DOCS,
}


def canonical_verb(verb: str) -> str:
    """Map a commit verb to its canonical section name.

    The lookup is case-insensitive and ignores a trailing ``!``. Unknown
    verbs map to ``Misc``.
    """
    key = verb.rstrip("!").lower()
    return _VERBS.get(key, Section.MISC).value


def classify(line: str, footer_break: bool = False) -> CommitGroup:
    """Classify a normalized commit line.

    Parameters
    ----------
    line : str
        A single line as produced by
        :func:`gitrelease.changelog.normalizer.normalize_entry`.
    footer_break : bool, optional
        True when a footer of the commit carried the breaking token.

    Returns
    -------
    CommitGroup
        The classified group. ``breaking`` is set by a ``!`` after the
        verb, a ``!`` after the subject, or ``footer_break``.
    """
    text = line.strip()
    match = _HEADER_RE.match(text)
    if match is None:
        # No verb token at all, e.g. a title starting with a digit.
        return CommitGroup(
            verb=Section.MISC.value,
            description=text,
            breaking=footer_break,
            raw=line,
        )

    description = match.group("description").strip()
    if not description:
        description = text

    breaking = bool(match.group("verb_break") or match.group("subject_break")) or footer_break
    return CommitGroup(
        verb=canonical_verb(match.group("verb")),
        subject=match.group("subject") or "",
        description=description,
        breaking=breaking,
        raw=line,
    )
