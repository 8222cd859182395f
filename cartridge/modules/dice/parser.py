"""Dice formula parser — supports NdM, NdM+X, NdM-X."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedFormula:
    """Result of parsing a dice formula."""

    original: str
    dice_count: int
    dice_sides: int
    modifier: int = 0


@dataclass(frozen=True)
class RollResult:
    """One evaluation of a dice formula."""

    formula: str
    rolls: tuple[int, ...]
    modifier: int
    total: int


_FORMULA_PATTERN = re.compile(
    r"^(\d+)d(\d+)"  # NdM
    r"(?:\s*([+-])\s*(\d+))?$",  # optional +X or -X
    re.IGNORECASE,
)

# Inline shape used when scanning prose: no spaces, must start on a word
# boundary ("x1d6" is not a formula) but may run into letters ("2d4hp").
INLINE_FORMULA_PATTERN = re.compile(r"\b\d+[dD]\d+(?:[+-]\d+)?(?!\d)")


def parse_formula(formula: str) -> ParsedFormula:
    """Parse a dice formula string into a ParsedFormula.

    Supported formats:
        NdM        - e.g. 2d6
        NdM+X      - e.g. 2d6+3
        NdM-X      - e.g. 1d20-1

    Raises:
        ValueError: If the formula cannot be parsed or the die has no sides.
    """
    expr = formula.strip()
    if not expr:
        raise ValueError("Empty dice formula")

    match = _FORMULA_PATTERN.match(expr)
    if match is None:
        raise ValueError(f"Invalid dice formula: {formula}")

    dice_count = int(match.group(1))
    sides = int(match.group(2))
    sign = match.group(3)
    mod_val = match.group(4)

    if sides < 1:
        raise ValueError(f"Die must have at least one side: {formula}")

    modifier = 0
    if sign and mod_val:
        modifier = int(mod_val) if sign == "+" else -int(mod_val)

    return ParsedFormula(
        original=formula,
        dice_count=dice_count,
        dice_sides=sides,
        modifier=modifier,
    )


def evaluate(parsed: ParsedFormula, rng: random.Random | None = None) -> RollResult:
    """Roll dice according to a ParsedFormula and return the result."""
    source = rng or random
    rolls = tuple(source.randint(1, parsed.dice_sides) for _ in range(parsed.dice_count))
    return RollResult(
        formula=parsed.original,
        rolls=rolls,
        modifier=parsed.modifier,
        total=parsed.modifier + sum(rolls),
    )


def roll(formula: str, rng: random.Random | None = None) -> RollResult | None:
    """Parse + evaluate in one call. Returns None for anything not rollable."""
    try:
        parsed = parse_formula(formula)
    except ValueError as e:
        logger.debug("Not a rollable formula: %s", e)
        return None
    return evaluate(parsed, rng)

