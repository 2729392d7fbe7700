"""
Ecology — ecology/config.py
Design variables and the TOML-backed encounter configuration.
=============================================================
Version:     0.1
Stack:       Python 3.11+ | Pydantic v2 | tomllib
Status:      Stable.

Design Variables (override here or via load_config; never hardcode elsewhere)
------------------------------------------------------------------------------
  VITALITY_MAX                2**64 - 1   — unsigned 64-bit ceiling
  DEFAULT_OVERFLOW_POLICY     "error"     — "error" | "saturate"
  CHRONICLE_SIGNIFICANCE_MIN  2           — minimum significance to inscribe

TOML layout
-----------
  [encounter]
  overflow_policy = "saturate"
  vitality_max = 1000
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================
# DESIGN VARIABLE DEFAULTS
# ============================================================

VITALITY_MAX: int = 2**64 - 1
DEFAULT_OVERFLOW_POLICY: str = "error"
CHRONICLE_SIGNIFICANCE_MIN: int = 2


class OverflowPolicy(str, Enum):
    """What happens when a vitality gain would exceed the ceiling."""
    ERROR = "error"
    SATURATE = "saturate"


# ============================================================
# SCHEMA
# ============================================================

class EncounterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    overflow_policy: OverflowPolicy = OverflowPolicy(DEFAULT_OVERFLOW_POLICY)
    vitality_max: int = Field(default=VITALITY_MAX, gt=0, le=VITALITY_MAX)

    @field_validator("overflow_policy", mode="before")
    @classmethod
    def _lower_policy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


_DEFAULT_CONFIG = EncounterConfig()


def default_config() -> EncounterConfig:
    return _DEFAULT_CONFIG


def load_config(path: Union[str, Path]) -> EncounterConfig:
    """Load an EncounterConfig from the [encounter] table of a TOML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Encounter config not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return EncounterConfig(**data.get("encounter", {}))
