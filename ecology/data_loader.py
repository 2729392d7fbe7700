"""
Ecology — ecology/data_loader.py
TOML organism rosters validated by Pydantic.
============================================
Version:     0.1
Stack:       Python 3.11+ | Pydantic v2 | tomllib
Status:      Stable.

Roster layout
-------------
  [[organisms]]
  species = "wolf"
  diet = "carnivore"
  vitality = 10
"""

import tomllib
from pathlib import Path
from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ecology.config import VITALITY_MAX
from ecology.diet import Diet
from ecology.organism import Organism

# ================================================================================
# SCHEMAS
# ================================================================================

class OrganismDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    species: str
    diet: Diet
    vitality: int = Field(ge=0, le=VITALITY_MAX)

    @field_validator("diet", mode="before")
    @classmethod
    def _parse_diet(cls, value):
        return Diet.parse(value)

    def to_organism(self) -> Organism:
        return Organism(species=self.species, vitality=self.vitality, diet=self.diet)

class RosterDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    organisms: List[OrganismDef] = Field(default_factory=list)

# ================================================================================
# LOADERS & CACHE
# ================================================================================

_ROSTER_CACHE: Dict[Path, RosterDef] = {}

def get_roster_def(path: Union[str, Path]) -> RosterDef:
    """Loads a roster definition from TOML. Cached per resolved path."""
    path = Path(path).resolve()
    if path in _ROSTER_CACHE:
        return _ROSTER_CACHE[path]

    if not path.exists():
        raise FileNotFoundError(f"Roster definition not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    roster = RosterDef(**data)
    _ROSTER_CACHE[path] = roster
    return roster

def load_roster(path: Union[str, Path]) -> List[Organism]:
    """Organisms of a roster, in file order."""
    return [d.to_organism() for d in get_roster_def(path).organisms]

def clear_cache() -> None:
    _ROSTER_CACHE.clear()
