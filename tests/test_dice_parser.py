"""Tests for the dice formula parser."""

import random

import pytest

from cartridge.modules.dice.parser import (
    INLINE_FORMULA_PATTERN,
    ParsedFormula,
    RollResult,
    evaluate,
    parse_formula,
    roll,
)
from tests.conftest import FixedRng


def test_parse_simple_dice():
    parsed = parse_formula("2d6")
    assert parsed.dice_count == 2
    assert parsed.dice_sides == 6
    assert parsed.modifier == 0


def test_parse_dice_with_positive_modifier():
    parsed = parse_formula("3d8+5")
    assert parsed.dice_count == 3
    assert parsed.dice_sides == 8
    assert parsed.modifier == 5


def test_parse_dice_with_negative_modifier():
    parsed = parse_formula("1d20-1")
    assert parsed.dice_count == 1
    assert parsed.modifier == -1


def test_parse_uppercase_d_and_spaces():
    parsed = parse_formula(" 2D10 + 4 ")
    assert parsed.dice_sides == 10
    assert parsed.modifier == 4
    assert parsed.original == " 2D10 + 4 "


def test_parse_requires_count():
    with pytest.raises(ValueError):
        parse_formula("d100")


def test_parse_invalid_expression():
    with pytest.raises(ValueError):
        parse_formula("abc123")


def test_parse_trailing_text_rejected():
    with pytest.raises(ValueError):
        parse_formula("2d6 fire")


def test_parse_empty_expression():
    with pytest.raises(ValueError):
        parse_formula("")


def test_parse_zero_sided_die_rejected():
    with pytest.raises(ValueError, match="at least one side"):
        parse_formula("2d0")


def test_evaluate_basic():
    parsed = ParsedFormula(original="2d6", dice_count=2, dice_sides=6)
    result = evaluate(parsed)
    assert len(result.rolls) == 2
    assert all(1 <= r <= 6 for r in result.rolls)
    assert result.total == sum(result.rolls)


def test_evaluate_zero_dice_is_just_modifier():
    result = evaluate(ParsedFormula(original="0d6+2", dice_count=0, dice_sides=6, modifier=2))
    assert result.rolls == ()
    assert result.total == 2


class TestRoll:
    def test_roll_shape(self):
        for _ in range(100):
            result = roll("2d6+3")
            assert isinstance(result, RollResult)
            assert len(result.rolls) == 2
            assert all(1 <= r <= 6 for r in result.rolls)
            assert result.total == 3 + sum(result.rolls)

    def test_roll_not_a_formula(self):
        assert roll("not a formula") is None

    def test_roll_zero_sided_die_is_no_result(self):
        assert roll("1d0") is None

    def test_roll_echoes_formula(self):
        assert roll("1d20-1").formula == "1d20-1"

    def test_roll_with_injected_rng_is_reproducible(self):
        expected = random.Random(7)
        values = tuple(expected.randint(1, 6) for _ in range(3))
        result = roll("3d6-2", rng=random.Random(7))
        assert result.rolls == values
        assert result.total == sum(values) - 2

    def test_roll_preserves_generation_order(self):
        result = roll("3d6", rng=FixedRng(5, 1, 3))
        assert result.rolls == (5, 1, 3)
        assert result.modifier == 0
        assert result.total == 9

    def test_roll_result_is_immutable(self):
        result = roll("1d6", rng=FixedRng(4))
        with pytest.raises(AttributeError):
            result.total = 99


def test_inline_formulas_in_text():
    text = "Deal 2d6+3 damage, or 1D4 if weakened; a d20 alone is not a formula."
    assert INLINE_FORMULA_PATTERN.findall(text) == ["2d6+3", "1D4"]


def test_inline_formula_requires_leading_word_boundary():
    assert INLINE_FORMULA_PATTERN.findall("&#x1d6; and abc2d6") == []


def test_inline_formula_may_run_into_letters():
    assert INLINE_FORMULA_PATTERN.findall("heals 2d4hp, deals 1d6+2fire") == ["2d4", "1d6+2"]
