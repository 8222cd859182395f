"""Markdown enhancement pipeline — narrative markdown to annotated HTML.

Stages run in a fixed order and each one must leave the markers of the
earlier ones intact:

1. ``[[Term]]`` references are swapped for placeholders (or plain text when
   the term is not in the glossary).
2. Tables whose header names a die (``d20``) are wrapped in marker
   paragraphs.
3. The marked-up text is rendered to HTML.
4. Reference placeholders become ``span.wiki-link`` elements.
5. Table markers become a roll button plus a ``div.rollable-table``.
6. Dice formulas in text become ``span.dice-roll`` elements.

Stages 1-2 work on markdown source, stages 4-6 on rendered HTML.
"""

from __future__ import annotations

import html
import itertools
import logging
import re
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup

from cartridge.infra.config import settings
from cartridge.models.result import RollTable
from cartridge.modules.dice.parser import INLINE_FORMULA_PATTERN
from cartridge.modules.rendering.renderer import Renderer, render_markdown
from cartridge.modules.tables.html_parsing import find_roll_tables
from cartridge.modules.tables.resolver import find_die_size

logger = logging.getLogger(__name__)

WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")
_WIKILINK_PLACEHOLDER = re.compile(r"\{\{WIKILINK::(\d+)\}\}")

# Header row, separator row, then one or more data rows. Each row is a
# single line starting and ending with a pipe.
_TABLE_BLOCK = re.compile(
    r"^\|[^\r\n]*\|[ \t]*\r?\n"  # header
    r"\|[-:| \t]+\|[ \t]*"  # separator
    r"(?:\r?\n\|[^\r\n]*\|[ \t]*)+\r?$",  # data rows
    re.MULTILINE,
)
_ROLLTABLE_REGION = re.compile(
    r"(?:<p>)?\{\{ROLLTABLE::d(\d+)\}\}(?:</p>)?"
    r"(.*?)"
    r"(?:<p>)?\{\{/ROLLTABLE\}\}(?:</p>)?",
    re.DOTALL,
)
_TAG_SPLIT = re.compile(r"(<[^>]*>)")


# --- Stage 1-2: markdown source ---


def protect_references(
    markdown: str, glossary: Mapping[str, Any]
) -> tuple[str, list[str]]:
    """Replace ``[[Term]]`` with placeholders for terms in the glossary.

    Unknown terms lose their brackets and stay as plain text. Returns the
    rewritten text and the list of terms the placeholders index into.
    """
    terms: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        term = match.group(1).strip()
        if term not in glossary:
            return term
        terms.append(term)
        return f"{{{{WIKILINK::{len(terms) - 1}}}}}"

    return WIKILINK_PATTERN.sub(_replace, markdown), terms


def tag_tables(markdown: str) -> str:
    """Wrap tables whose header row names a die in ROLLTABLE markers."""

    def _replace(match: re.Match[str]) -> str:
        block = match.group(0)
        header = block.splitlines()[0]
        size = find_die_size(header)
        if size is None:
            return block
        return f"\n\n{{{{ROLLTABLE::d{size}}}}}\n\n{block}\n\n{{{{/ROLLTABLE}}}}\n\n"

    return _TABLE_BLOCK.sub(_replace, markdown)


# --- Stage 4-6: rendered HTML ---


def materialize_references(rendered: str, terms: list[str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(terms):
            return match.group(0)
        term = html.escape(terms[index])
        return f'<span class="wiki-link" data-term="{term}">{term}</span>'

    return _WIKILINK_PLACEHOLDER.sub(_replace, rendered)


def materialize_tables(rendered: str, prefix: str | None = None) -> str:
    """Turn ROLLTABLE marker pairs into a roll button and table container.

    Table ids are ``<prefix>-1``, ``<prefix>-2``... in document order,
    unique within one call.
    """
    prefix = html.escape(prefix if prefix is not None else settings.table_id_prefix)
    counter = itertools.count(1)

    def _replace(match: re.Match[str]) -> str:
        size = match.group(1)
        table_id = f"{prefix}-{next(counter)}"
        content = match.group(2).strip()
        return (
            f'<div class="rollable-table-container" data-table-id="{table_id}">\n'
            f'<button class="roll-table-button" data-dice="d{size}" '
            f'data-table-id="{table_id}">Roll Table (d{size})</button>\n'
            f'<div class="rollable-table" data-table-id="{table_id}">\n'
            f"{content}\n"
            f"</div>\n"
            f"</div>"
        )

    return _ROLLTABLE_REGION.sub(_replace, rendered)


def _dice_span(match: re.Match[str]) -> str:
    formula = match.group(0)
    return f'<span class="dice-roll" data-formula="{formula}">{formula}</span>'


def highlight_dice(rendered: str) -> str:
    """Wrap dice formulas found in text (never inside tags) in spans."""
    parts = _TAG_SPLIT.split(rendered)
    for i, part in enumerate(parts):
        # odd indexes are the captured tags
        if i % 2 == 0 and part:
            parts[i] = INLINE_FORMULA_PATTERN.sub(_dice_span, part)
    return "".join(parts)


# --- Pipeline ---


def enhance(
    narrative: str,
    glossary: Mapping[str, Any],
    renderer: Renderer | None = None,
    table_id_prefix: str | None = None,
) -> str:
    """Render narrative markdown to HTML with interactive markers."""
    text, terms = protect_references(narrative, glossary)
    text = tag_tables(text)

    rendered = (renderer or render_markdown)(text)

    rendered = materialize_references(rendered, terms)
    rendered = materialize_tables(rendered, table_id_prefix)
    rendered = highlight_dice(rendered)

    logger.debug("Enhanced narrative: %d references resolved", len(terms))
    return rendered


def collect_roll_tables(enhanced: str) -> list[RollTable]:
    """Roll tables of an enhanced fragment, with the row keys of each."""
    return find_roll_tables(BeautifulSoup(enhanced, "html.parser"))
