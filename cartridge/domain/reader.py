"""Reader state — per-session state owned by the presentation layer.

The engine itself is stateless. Everything a reader accumulates while
clicking through a cartridge (the open context card, the roll history,
highlighted table rows, bar-stat overrides) lives on a ReaderState that the
presentation layer creates per loaded cartridge and passes around.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from cartridge.infra.config import settings
from cartridge.models.glossary import (
    BarStat,
    EntityDefinition,
    LoreDefinition,
    RollStat,
    StaticStat,
)
from cartridge.models.result import Cartridge
from cartridge.modules.dice.parser import RollResult, roll
from cartridge.modules.tables.resolver import resolve_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContextCard:
    term: str
    definition: EntityDefinition | LoreDefinition


@dataclass(frozen=True)
class RollRecord:
    result: RollResult
    timestamp: datetime
    label: str | None = None


@dataclass(frozen=True)
class TableRoll:
    table_id: str
    record: RollRecord
    row_index: int | None  # None = no row matched


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReaderState:
    """Interaction state for one loaded cartridge."""

    def __init__(
        self,
        cartridge: Cartridge,
        rng: random.Random | None = None,
        history_limit: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.cartridge = cartridge
        self.context_card: ContextCard | None = None
        self._rng = rng
        self._clock = clock or _utcnow
        limit = history_limit if history_limit is not None else settings.roll_history_limit
        self._history: deque[RollRecord] = deque(maxlen=limit)
        self._highlights: dict[str, int] = {}
        self._bar_overrides: dict[tuple[str, int], int] = {}

    # --- Glossary ---

    def select_term(self, term: str) -> ContextCard | None:
        """Show the definition of ``term``. Unknown terms leave the card as is."""
        definition = self.cartridge.glossary.get(term)
        if definition is None:
            logger.debug("No definition for %r", term)
            return None
        self.context_card = ContextCard(term=term, definition=definition)
        return self.context_card

    def jump_target(self, term: str) -> str | None:
        definition = self.cartridge.glossary.get(term)
        if isinstance(definition, LoreDefinition):
            return definition.jump_target
        return None

    # --- Rolls ---

    @property
    def history(self) -> list[RollRecord]:
        """Roll history, newest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def roll_formula(self, formula: str, label: str | None = None) -> RollRecord | None:
        """Roll a formula and record it. Unrollable formulas are a no-op."""
        result = roll(formula, self._rng)
        if result is None:
            return None
        record = RollRecord(result=result, timestamp=self._clock(), label=label)
        self._history.appendleft(record)
        return record

    def roll_stat(self, term: str, index: int) -> RollRecord | None:
        stat = self._stat(term, index)
        if not isinstance(stat, RollStat):
            raise ValueError(f"Stat {index} of {term!r} is not a roll stat")
        return self.roll_formula(stat.formula, label=f"{term}: {stat.label}")

    def roll_table(self, table_id: str) -> TableRoll | None:
        """Roll the table's die and highlight the matching row.

        When no row matches, the roll is still recorded but the previous
        highlight of that table is kept.
        """
        table = self.cartridge.roll_table(table_id)
        if table is None:
            logger.debug("Unknown roll table %r", table_id)
            return None
        record = self.roll_formula(f"1d{table.die_size}", label=f"Table {table_id}")
        if record is None:
            return None

        row_index = resolve_row(record.result.total, table.row_keys)
        if row_index is not None:
            self._highlights[table_id] = row_index
        return TableRoll(table_id=table_id, record=record, row_index=row_index)

    def highlighted_row(self, table_id: str) -> int | None:
        return self._highlights.get(table_id)

    # --- Stats ---

    def _stat(self, term: str, index: int) -> StaticStat | BarStat | RollStat:
        definition = self.cartridge.glossary[term]
        if not isinstance(definition, EntityDefinition):
            raise ValueError(f"{term!r} is not an entity")
        return definition.stats[index]

    def _bar(self, term: str, index: int) -> BarStat:
        stat = self._stat(term, index)
        if not isinstance(stat, BarStat):
            raise ValueError(f"Stat {index} of {term!r} is not a bar stat")
        return stat

    def stat_value(self, term: str, index: int) -> str:
        """Display value of a stat, with bar overrides applied."""
        stat = self._stat(term, index)
        if isinstance(stat, BarStat):
            return f"{self.bar_current(term, index)}/{stat.maximum}"
        if isinstance(stat, RollStat):
            return stat.formula
        return stat.val

    def bar_current(self, term: str, index: int) -> int:
        stat = self._bar(term, index)
        return self._bar_overrides.get((term, index), stat.current)

    def set_bar(self, term: str, index: int, value: int) -> int:
        """Override a bar's current value, clamped to [0, max]."""
        stat = self._bar(term, index)
        value = max(0, min(value, stat.maximum))
        self._bar_overrides[(term, index)] = value
        return value

    def adjust_bar(self, term: str, index: int, delta: int) -> int:
        return self.set_bar(term, index, self.bar_current(term, index) + delta)

    def reset_overrides(self) -> None:
        self._bar_overrides.clear()
