"""
Ecology — ecology/organism.py
Organism value: species identity, vitality and diet category.
=============================================================
Version:     0.1
Stack:       Python 3.11+ | Pydantic v2
Status:      Stable.

Architecture notes
------------------
- Organism is a frozen Pydantic model. Vitality is NEVER mutated in place;
  encounters return new values via with_vitality().
- species is an opaque token. Only equality is ever asked of it.
- vitality == 0 is the one and only definition of death. A dead organism is
  still a valid value; it is inert in later encounters.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ecology.config import VITALITY_MAX
from ecology.diet import Diet


class Organism(BaseModel):
    model_config = ConfigDict(frozen=True)

    species: Any
    vitality: int = Field(ge=0, le=VITALITY_MAX)
    diet: Diet

    # ----------------------------------------------------------
    # Construction
    # ----------------------------------------------------------

    @classmethod
    def new(cls, species: Any, vitality: int, diet: Diet | str) -> "Organism":
        return cls(species=species, vitality=vitality, diet=Diet.parse(diet))

    @classmethod
    def carnivore(cls, species: Any, vitality: int) -> "Organism":
        return cls(species=species, vitality=vitality, diet=Diet.CARNIVORE)

    @classmethod
    def omnivore(cls, species: Any, vitality: int) -> "Organism":
        return cls(species=species, vitality=vitality, diet=Diet.OMNIVORE)

    @classmethod
    def herbivore(cls, species: Any, vitality: int) -> "Organism":
        return cls(species=species, vitality=vitality, diet=Diet.HERBIVORE)

    @classmethod
    def plant(cls, species: Any, vitality: int) -> "Organism":
        return cls(species=species, vitality=vitality, diet=Diet.PLANT)

    def with_vitality(self, vitality: int) -> "Organism":
        """Same species and diet, new vitality. The original is untouched."""
        return Organism(species=self.species, vitality=vitality, diet=self.diet)

    # ----------------------------------------------------------
    # Queries
    # ----------------------------------------------------------

    @property
    def handle(self) -> str:
        """Display handle used as the event source, e.g. 'herbivore:deer'."""
        return f"{self.diet.value}:{self.species}"

    def is_dead(self) -> bool:
        return self.vitality == 0

    def is_carnivore(self) -> bool:
        return self.diet.is_carnivore

    def is_omnivore(self) -> bool:
        return self.diet.is_omnivore

    def is_herbivore(self) -> bool:
        return self.diet.is_herbivore

    def is_plant(self) -> bool:
        return self.diet.is_plant

    def is_meat_eater(self) -> bool:
        return self.diet.is_meat_eater

    def same_kind(self, other: "Organism") -> bool:
        """Mating compatibility: identical species AND identical diet."""
        return self.species == other.species and self.diet == other.diet
