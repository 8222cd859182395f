"""Cartridge loading — one complete engine pass over a document."""

from __future__ import annotations

import logging

from cartridge.domain.enhance import collect_roll_tables, enhance
from cartridge.domain.outline import extract_outline
from cartridge.domain.splitter import split_cartridge
from cartridge.models.result import Cartridge
from cartridge.modules.rendering.renderer import Renderer

logger = logging.getLogger(__name__)


def load_cartridge(document: str, renderer: Renderer | None = None) -> Cartridge:
    """Split, outline and enhance a raw cartridge document.

    Flow:
    1. Split the definitions block off the narrative
    2. Extract the heading outline from the narrative
    3. Enhance the narrative against the glossary
    4. Collect the rollable tables of the enhanced HTML
    """
    split = split_cartridge(document)
    outline = extract_outline(split.narrative)
    html = enhance(split.narrative, split.glossary, renderer=renderer)
    roll_tables = collect_roll_tables(html)

    logger.info(
        "Loaded cartridge: %d headings, %d definitions, %d roll tables",
        len(outline),
        len(split.glossary),
        len(roll_tables),
    )
    return Cartridge(
        narrative=split.narrative,
        glossary=split.glossary,
        outline=outline,
        html=html,
        roll_tables=roll_tables,
        decode_error=split.decode_error,
        entry_errors=split.entry_errors,
    )
