"""Outline extraction — headings 1-3 with slug ids for in-page navigation."""

from __future__ import annotations

import re

from cartridge.models.result import OutlineEntry

_HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.+)$")
_NON_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, with every run of non [a-z0-9] characters collapsed to '-'.

    Leading/trailing hyphens are kept: "Act I: The Road!" -> "act-i-the-road-".
    """
    return _NON_SLUG_PATTERN.sub("-", text.lower())


def extract_outline(narrative: str) -> list[OutlineEntry]:
    """Flat outline of level 1-3 headings in document order.

    Headings of four or more '#' are ignored. Duplicate ids are kept.
    """
    entries: list[OutlineEntry] = []
    for line in narrative.splitlines():
        match = _HEADING_PATTERN.match(line)
        if not match:
            continue
        text = match.group(2).strip()
        if not text:
            continue
        entries.append(
            OutlineEntry(level=len(match.group(1)), text=text, id=slugify(text))
        )
    return entries
