"""Engine result schemas — what one pass over a cartridge produces."""

from __future__ import annotations

from pydantic import BaseModel

from cartridge.models.glossary import Glossary


class OutlineEntry(BaseModel):
    level: int  # 1-3
    text: str
    id: str

    model_config = {"frozen": True}


class RollTable(BaseModel):
    """A rendered table tagged with a die size, as found in enhanced HTML."""

    table_id: str
    die_size: int
    row_keys: list[str] = []

    @property
    def dice(self) -> str:
        return f"d{self.die_size}"


class CartridgeSplit(BaseModel):
    narrative: str
    glossary: Glossary = {}
    decode_error: str | None = None
    entry_errors: dict[str, str] = {}


class Cartridge(BaseModel):
    """Everything the presentation layer needs after loading one document."""

    narrative: str
    glossary: Glossary = {}
    outline: list[OutlineEntry] = []
    html: str = ""
    roll_tables: list[RollTable] = []
    decode_error: str | None = None
    entry_errors: dict[str, str] = {}

    def roll_table(self, table_id: str) -> RollTable | None:
        for table in self.roll_tables:
            if table.table_id == table_id:
                return table
        return None
