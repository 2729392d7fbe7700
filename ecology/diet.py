"""
Ecology — ecology/diet.py
Diet classification: four closed categories derived from two capability flags.
==============================================================================
Version:     0.1
Stack:       Python 3.11+ | stdlib enum
Status:      Stable.

Capability table
----------------
  Diet         can_eat_meat   can_eat_plants
  CARNIVORE    True           False
  OMNIVORE     True           True
  HERBIVORE    False          True
  PLANT        False          False

The four predicates are mutually exclusive and exhaustive.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Diet(str, Enum):
    CARNIVORE = "carnivore"
    OMNIVORE = "omnivore"
    HERBIVORE = "herbivore"
    PLANT = "plant"

    @classmethod
    def from_flags(cls, can_eat_meat: bool, can_eat_plants: bool) -> "Diet":
        """Derive the category from the (meat, plants) capability pair."""
        return _BY_FLAGS[(bool(can_eat_meat), bool(can_eat_plants))]

    @classmethod
    def parse(cls, name: "str | Diet") -> "Diet":
        """Case-insensitive lookup by value ("Herbivore" -> HERBIVORE)."""
        if isinstance(name, Diet):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown diet category: {name!r}") from None

    @property
    def flags(self) -> Tuple[bool, bool]:
        return _FLAGS[self]

    @property
    def can_eat_meat(self) -> bool:
        return _FLAGS[self][0]

    @property
    def can_eat_plants(self) -> bool:
        return _FLAGS[self][1]

    # ----------------------------------------------------------
    # Predicates
    # ----------------------------------------------------------

    @property
    def is_carnivore(self) -> bool:
        return self.can_eat_meat and not self.can_eat_plants

    @property
    def is_omnivore(self) -> bool:
        return self.can_eat_meat and self.can_eat_plants

    @property
    def is_herbivore(self) -> bool:
        return not self.can_eat_meat and self.can_eat_plants

    @property
    def is_plant(self) -> bool:
        return not self.can_eat_meat and not self.can_eat_plants

    @property
    def is_meat_eater(self) -> bool:
        """Carnivore or omnivore."""
        return self.can_eat_meat


_FLAGS = {
    Diet.CARNIVORE: (True, False),
    Diet.OMNIVORE:  (True, True),
    Diet.HERBIVORE: (False, True),
    Diet.PLANT:     (False, False),
}

_BY_FLAGS = {flags: diet for diet, flags in _FLAGS.items()}
