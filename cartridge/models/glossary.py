"""Glossary schemas — definitions embedded in a cartridge."""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

_BAR_VALUE_PATTERN = re.compile(r"^\s*(-?\d+)\s*/\s*(-?\d+)\s*$")


# --- Stats ---


class StaticStat(BaseModel):
    type: Literal["static"] = "static"
    label: str
    val: str = ""

    model_config = {"coerce_numbers_to_str": True}

    @field_validator("val", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # YAML hands us ints/floats for "AC: 12"
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class BarStat(BaseModel):
    """A current/max pair, e.g. hit points."""

    type: Literal["bar"] = "bar"
    label: str
    current: int
    maximum: int = Field(alias="max")

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}

    @model_validator(mode="before")
    @classmethod
    def _split_val(cls, data: Any) -> Any:
        if isinstance(data, dict) and "val" in data and "current" not in data:
            match = _BAR_VALUE_PATTERN.match(str(data["val"]))
            if match:
                data = {k: v for k, v in data.items() if k != "val"}
                data["current"] = int(match.group(1))
                data.setdefault("max", int(match.group(2)))
        return data


class RollStat(BaseModel):
    type: Literal["roll"] = "roll"
    label: str
    formula: str

    model_config = {"coerce_numbers_to_str": True}


Stat = Annotated[
    Union[StaticStat, BarStat, RollStat],
    Field(discriminator="type"),
]


def _infer_stat_type(raw: Any) -> Any:
    if not isinstance(raw, dict) or "type" in raw:
        return raw
    if "formula" in raw:
        kind = "roll"
    elif "current" in raw or "max" in raw:
        kind = "bar"
    else:
        kind = "static"
    return {**raw, "type": kind}


# --- Definitions ---


class EntityDefinition(BaseModel):
    type: Literal["entity"] = "entity"
    stats: list[Stat] = []

    @field_validator("stats", mode="before")
    @classmethod
    def _infer_stat_types(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [_infer_stat_type(item) for item in value]
        return value


class LoreDefinition(BaseModel):
    type: Literal["lore"] = "lore"
    desc: str = ""
    jump: str | None = None

    model_config = {"coerce_numbers_to_str": True}

    @property
    def jump_target(self) -> str | None:
        """Outline id to navigate to, without the leading '#'."""
        if not self.jump:
            return None
        return self.jump.replace("#", "")


Definition = Annotated[
    Union[EntityDefinition, LoreDefinition],
    Field(discriminator="type"),
]

Glossary = dict[str, Definition]

_definition_adapter: TypeAdapter[Definition] = TypeAdapter(Definition)


def parse_definition(raw: Any) -> EntityDefinition | LoreDefinition:
    """Validate one glossary entry as written in a definitions block.

    A bare string is read as a lore description; an entry without a
    ``type`` is an entity when it lists stats and lore otherwise.

    Raises:
        pydantic.ValidationError: If the entry still does not fit a variant.
    """
    if isinstance(raw, str):
        raw = {"type": "lore", "desc": raw}
    elif isinstance(raw, dict) and "type" not in raw:
        raw = {**raw, "type": "entity" if "stats" in raw else "lore"}
    return _definition_adapter.validate_python(raw)
