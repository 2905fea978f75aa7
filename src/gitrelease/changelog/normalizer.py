"""
Reduce raw commit messages to single classification lines.

Git returns each commit as a title line followed by an optional body
and footer. Only the title is classified, but two things in the body
are worth keeping: lines referencing issues (anything containing
``#``) and the ``BREAKING CHANGE`` footer token. Both are folded into
the returned line.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from gitrelease.changelog.group_model import BREAKING_MARKER, BREAKING_TOKEN


def normalize_entry(raw: str) -> Optional[Tuple[str, bool]]:
    """Split one raw commit message into its line and footer flag.

    Parameters
    ----------
    raw : str
        The full commit message, lines separated by real newlines.

    Returns
    -------
    Optional[Tuple[str, bool]]
        The title with issue reference lines appended in parentheses,
        and whether a footer line carries the breaking token. ``None``
        if the title is empty.
    """
    lines = raw.split("\n")
    item = lines[0]
    if item.startswith(" "):
        item = item[1:]
    if not item.strip():
        return None

    breaking = False
    for line in lines[1:]:
        if BREAKING_TOKEN in line:
            breaking = True
        if "#" not in line:
            continue
        item = f"{item} ({line})"
    return item, breaking


def normalize_message(raw: str) -> Optional[str]:
    """Collapse one raw commit message into one line.

    The breaking marker is appended when a footer carries the breaking
    token. Returns ``None`` for messages with an empty title.
    """
    entry = normalize_entry(raw)
    if entry is None:
        return None
    item, breaking = entry
    if breaking:
        item = f"{item} {BREAKING_MARKER}"
    return item


def normalize_entries(raws: Iterable[str]) -> List[Tuple[str, bool]]:
    """Apply :func:`normalize_entry` in order, dropping empty messages."""
    entries = []
    for raw in raws:
        entry = normalize_entry(raw)
        if entry is None:
            continue
        entries.append(entry)
    return entries


def normalize_messages(raws: Iterable[str]) -> List[str]:
    """Normalize ``raws`` in order, dropping empty messages."""
    lines = []
    for raw in raws:
        line = normalize_message(raw)
        if line is None:
            continue
        lines.append(line)
    return lines
