"""Cartridge splitter — separate narrative text from the definitions block."""

from __future__ import annotations

import logging
import re

import yaml
from pydantic import ValidationError

from cartridge.models.glossary import Glossary, parse_definition
from cartridge.models.result import CartridgeSplit

logger = logging.getLogger(__name__)

# First ```definitions block; tolerates \n and \r\n after the fence.
_DEFINITIONS_BLOCK = re.compile(r"```definitions[\r\n]+(.*?)```", re.DOTALL)


def decode_glossary(content: str) -> tuple[Glossary, dict[str, str]]:
    """Decode the YAML body of a definitions block.

    Returns the glossary plus the per-entry validation errors for entries
    that were skipped.

    Raises:
        yaml.YAMLError: If the content is not valid YAML.
        ValueError: If the top level is not a mapping of terms.
    """
    data = yaml.safe_load(content)
    if data is None:
        return {}, {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Definitions block must be a mapping of terms, got {type(data).__name__}"
        )

    glossary: Glossary = {}
    entry_errors: dict[str, str] = {}
    for key, raw in data.items():
        term = str(key).strip()
        try:
            glossary[term] = parse_definition(raw)
        except ValidationError as e:
            logger.warning("Skipping glossary entry %r: %s", term, e)
            entry_errors[term] = str(e)
    return glossary, entry_errors


def split_cartridge(document: str) -> CartridgeSplit:
    """Split a raw cartridge into narrative and glossary.

    Never raises on malformed definitions: the glossary degrades to empty
    and the failure is returned in ``decode_error``.
    """
    match = _DEFINITIONS_BLOCK.search(document)
    if match is None:
        logger.debug("No definitions block found")
        return CartridgeSplit(narrative=document.strip())

    narrative = (document[: match.start()] + document[match.end():]).strip()
    try:
        glossary, entry_errors = decode_glossary(match.group(1))
    except (yaml.YAMLError, ValueError) as e:
        logger.warning("Could not decode definitions block: %s", e)
        return CartridgeSplit(narrative=narrative, decode_error=str(e))

    logger.debug("Parsed %d definitions", len(glossary))
    return CartridgeSplit(
        narrative=narrative,
        glossary=glossary,
        entry_errors=entry_errors,
    )
