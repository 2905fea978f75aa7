"""
Render classified commits as a grouped Markdown changelog.

The output looks like::

    ### Feature

    - **Api:** Add the releases endpoint (Close #12)
    - Support tags without a prefix


    ### Fix

    - **CI:** Pin the runner image [**BREAKING CHANGE**]

Sections appear in the order their verb was first seen; entries keep
the order of the commits they come from.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from gitrelease.changelog.classifier import classify
from gitrelease.changelog.group_model import BREAKING_MARKER, ITEM_PREFIX, CommitGroup, upper_first
from gitrelease.changelog.normalizer import normalize_entries


# Pseudo-line separator inside descriptions: a literal backslash-n.
PSEUDO_NEWLINE = "\\n"

_REF_RE = re.compile(r"[A-Za-z]+\s+#\d+")


def render_scope(subject: str) -> str:
    """Return the emphasised scope prefix for ``subject``.

    Comma separated scopes are capitalised one by one; hyphens are left
    alone. ``ci`` in any case is rendered as ``CI``.
    """
    if not subject:
        return ""
    if subject.lower() == "ci":
        scope = "CI"
    else:
        scope = ",".join(upper_first(part) for part in subject.split(","))
    return f"**{scope}:** "


def render_description(group: CommitGroup, prefix: str = ITEM_PREFIX) -> str:
    """Return one changelog line for ``group``.

    The title is the first pseudo-line of the description. Issue
    references found on the following pseudo-lines are listed in
    parentheses after it, in order of appearance.
    """
    lines = group.description.split(PSEUDO_NEWLINE)
    title = lines[0]
    if title.startswith(" "):
        title = title[1:]

    refs: List[str] = []
    for line in lines[1:]:
        if not line:
            continue
        refs.extend(_REF_RE.findall(line))

    text = render_scope(group.subject) + upper_first(title)
    if refs:
        text = f"{text} ({', '.join(refs)})"
    if group.breaking:
        text = f"{text} {BREAKING_MARKER}"
    return prefix + text


def group_entries(groups: Iterable[CommitGroup]) -> Dict[str, List[CommitGroup]]:
    """Bucket ``groups`` by verb.

    The returned dict iterates in first-appearance order of each verb and
    every bucket keeps arrival order.
    """
    grouped: Dict[str, List[CommitGroup]] = {}
    for group in groups:
        grouped.setdefault(group.verb, []).append(group)
    return grouped


def render_groups(grouped: Dict[str, List[CommitGroup]], prefix: str = ITEM_PREFIX) -> str:
    """Serialize bucketed groups into the changelog text.

    Sections are separated by two blank lines and the result carries no
    trailing newline. Empty buckets are skipped.
    """
    sections = []
    for entries in grouped.values():
        if not entries:
            continue
        body = "\n".join(render_description(entry, prefix=prefix) for entry in entries)
        sections.append(f"{entries[0].section()}\n\n{body}")
    return "\n\n\n".join(sections)


def parse_groups(logs: Iterable[str]) -> str:
    """Run the whole pipeline over raw commit messages.

    Parameters
    ----------
    logs : Iterable[str]
        Raw, possibly multi-line, commit messages.

    Returns
    -------
    str
        The rendered changelog, or an empty string when no message
        survives normalization.
    """
    entries = normalize_entries(logs)
    return render_groups(group_entries(classify(line, breaking) for line, breaking in entries))
