"""Shared test fixtures."""

import random

import pytest

SAMPLE_CARTRIDGE = """\
# The Sunken Crypt

Welcome, adventurer. The [[Crypt Guardian]] waits below.

## Wandering Monsters

| d6 | Encounter |
|----|-----------|
| 1-2 | Rats |
| 3-5 | [[Skeleton]] |
| 6 | The [[Crypt Guardian]] |

## The Vault

Traps deal 2d6+1 damage. See [[Old Map]].

#### Designer notes

```definitions
Skeleton:
  type: entity
  stats:
    - label: AC
      val: 13
    - label: HP
      type: bar
      val: 13/13
    - label: Attack
      formula: 1d6+2
Crypt Guardian:
  type: entity
  stats:
    - label: HP
      current: 30
      max: 30
Old Map:
  type: lore
  desc: A faded map of the lower halls.
  jump: "#the-vault"
```
"""


class FixedRng:
    """Random source stub that hands out preset values in order."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)

    def randint(self, a: int, b: int) -> int:
        return self._values.pop(0)


@pytest.fixture
def sample_document() -> str:
    return SAMPLE_CARTRIDGE


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
