"""
Ecology — ecology/encounter.py
Encounter resolution: pairwise outcome of two organisms, and the series fold.
=============================================================================
Version:     0.2
Stack:       Python 3.11+ | Pydantic v2 | bespoke EventBus
Status:      Stable.

Resolution order (first match wins; cases are mutually exclusive)
-----------------------------------------------------------------
  0. plant vs plant           — rejected before any case (InvalidPairingError)
  1. EITHER_DEAD              — nothing happens
  2. MATING                   — same species AND same diet; offspring born
  3. MUTUALLY_INEDIBLE        — herbivore/herbivore, carnivore/plant
  4. MUTUAL_PREDATION         — both meat eaters; lower vitality dies,
                                exact tie kills both
  5. DEVOURED                 — plant vs herbivore/omnivore; full gain
  6. HERBIVORE_RESISTED       — herbivore vitality >= predator vitality
     HERBIVORE_PREYED         — otherwise; herbivore dies, fight gain

Gain rules
----------
  FIGHT   loser_vitality // 2   (cases 4 and 6)
  DEVOUR  loser_vitality        (case 5)

Overflow
--------
  Gains are added under EncounterConfig.overflow_policy:
  "error" raises VitalityOverflowError, "saturate" clamps to vitality_max.
  Wraparound never happens.

Architecture notes
------------------
- resolve() is referentially transparent. encounter() adds optional event
  emission on an injected bus; the returned outcome is identical either way.
- Swapping the arguments swaps the first two outputs in every case.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Optional, Tuple

from ecology.config import EncounterConfig, OverflowPolicy, default_config
from ecology.events import (
    EncounterEvent,
    EventBus,
    EVT_ENCOUNTER_RESOLVED,
    EVT_ENCOUNTER_REJECTED,
    EVT_ORGANISM_FED,
    EVT_ORGANISM_DIED,
    EVT_ORGANISM_BORN,
    EVT_SERIES_STARTED,
    EVT_SERIES_STEP,
    EVT_SERIES_COMPLETED,
)
from ecology.organism import Organism

# ============================================================
# ERRORS
# ============================================================

class EncounterError(Exception):
    """Base class for every error raised by the resolver."""


class InvalidPairingError(EncounterError, ValueError):
    """Both organisms are plants. Plants do not interact."""


class DietMismatchError(EncounterError, ValueError):
    """A series mixes diet categories."""


class VitalityOverflowError(EncounterError, OverflowError):
    def __init__(self, base: int, gain: int, limit: int) -> None:
        super().__init__(
            f"Vitality {base} + {gain} exceeds the ceiling of {limit}"
        )
        self.base = base
        self.gain = gain
        self.limit = limit


# ============================================================
# OUTCOME TYPES
# ============================================================

class EncounterKind(str, Enum):
    EITHER_DEAD = "either_dead"
    MATING = "mating"
    MUTUALLY_INEDIBLE = "mutually_inedible"
    MUTUAL_PREDATION = "mutual_predation"
    DEVOURED = "devoured"
    HERBIVORE_RESISTED = "herbivore_resisted"
    HERBIVORE_PREYED = "herbivore_preyed"


class GainRule(Enum):
    FIGHT = "fight"
    DEVOUR = "devour"

    def amount(self, loser_vitality: int) -> int:
        if self is GainRule.FIGHT:
            return loser_vitality // 2
        return loser_vitality


class EncounterOutcome(NamedTuple):
    first: Organism
    second: Organism
    offspring: Optional[Organism] = None


@dataclass(frozen=True)
class EncounterResolution:
    kind: EncounterKind
    outcome: EncounterOutcome


# ============================================================
# ARITHMETIC
# ============================================================

def add_vitality(base: int, gain: int,
                 config: Optional[EncounterConfig] = None) -> int:
    """
    Add a non-negative gain, honouring the configured overflow policy.

    The result is never below base: an organism already above a lowered
    ceiling keeps its vitality, and a zero gain never fails.
    """
    if config is None:
        config = default_config()
    total = base + gain
    if total <= config.vitality_max or gain == 0:
        return total
    if config.overflow_policy is OverflowPolicy.SATURATE:
        return max(base, config.vitality_max)
    raise VitalityOverflowError(base, gain, config.vitality_max)


# ============================================================
# CASE SELECTION
# ============================================================

def classify(o1: Organism, o2: Organism) -> EncounterKind:
    """Select the resolution case for a pair. Pure; no vitality changes."""
    if o1.is_plant() and o2.is_plant():
        raise InvalidPairingError(
            f"Plants cannot encounter each other: {o1.handle} / {o2.handle}"
        )

    if o1.is_dead() or o2.is_dead():
        return EncounterKind.EITHER_DEAD

    if o1.same_kind(o2):
        return EncounterKind.MATING

    if ((o1.is_herbivore() and o2.is_herbivore())
            or (o1.is_carnivore() and o2.is_plant())
            or (o1.is_plant() and o2.is_carnivore())):
        return EncounterKind.MUTUALLY_INEDIBLE

    if o1.is_meat_eater() and o2.is_meat_eater():
        return EncounterKind.MUTUAL_PREDATION

    # Carnivore/plant is already excluded, so the consumer eats plants.
    if o1.is_plant() or o2.is_plant():
        return EncounterKind.DEVOURED

    herbivore, predator = (o1, o2) if o1.is_herbivore() else (o2, o1)
    if herbivore.vitality >= predator.vitality:
        return EncounterKind.HERBIVORE_RESISTED
    return EncounterKind.HERBIVORE_PREYED


def _feed(winner: Organism, loser: Organism, rule: GainRule,
          config: EncounterConfig) -> Tuple[Organism, Organism]:
    gained = add_vitality(winner.vitality, rule.amount(loser.vitality), config)
    return winner.with_vitality(gained), loser.with_vitality(0)


def _feed_in_order(o1: Organism, o2: Organism, first_wins: bool,
                   rule: GainRule, config: EncounterConfig) -> EncounterOutcome:
    if first_wins:
        fed, eaten = _feed(o1, o2, rule, config)
        return EncounterOutcome(fed, eaten)
    fed, eaten = _feed(o2, o1, rule, config)
    return EncounterOutcome(eaten, fed)


def resolve(o1: Organism, o2: Organism,
            config: Optional[EncounterConfig] = None) -> EncounterResolution:
    """Resolve one encounter and report which case applied."""
    if config is None:
        config = default_config()
    kind = classify(o1, o2)

    if kind is EncounterKind.MATING:
        child = o1.with_vitality((o1.vitality + o2.vitality) // 2)
        outcome = EncounterOutcome(o1, o2, child)

    elif kind is EncounterKind.MUTUAL_PREDATION:
        if o1.vitality == o2.vitality:
            outcome = EncounterOutcome(o1.with_vitality(0), o2.with_vitality(0))
        else:
            outcome = _feed_in_order(o1, o2, o1.vitality > o2.vitality,
                                     GainRule.FIGHT, config)

    elif kind is EncounterKind.DEVOURED:
        outcome = _feed_in_order(o1, o2, o2.is_plant(),
                                 GainRule.DEVOUR, config)

    elif kind is EncounterKind.HERBIVORE_PREYED:
        outcome = _feed_in_order(o1, o2, o2.is_herbivore(),
                                 GainRule.FIGHT, config)

    else:
        # EITHER_DEAD, MUTUALLY_INEDIBLE, HERBIVORE_RESISTED
        outcome = EncounterOutcome(o1, o2)

    return EncounterResolution(kind=kind, outcome=outcome)


# ============================================================
# PUBLIC API
# ============================================================

def encounter(o1: Organism, o2: Organism,
              config: Optional[EncounterConfig] = None,
              bus: Optional[EventBus] = None) -> EncounterOutcome:
    """
    Resolve an encounter and return (o1', o2', offspring-or-None).

    Raises InvalidPairingError for plant/plant and VitalityOverflowError
    when a gain exceeds the ceiling under the "error" policy.
    """
    try:
        resolution = resolve(o1, o2, config)
    except InvalidPairingError as exc:
        if bus:
            bus.emit(EncounterEvent(
                event_key=EVT_ENCOUNTER_REJECTED,
                source=o1.handle,
                target=o2.handle,
                data={"reason": str(exc)},
            ))
        raise

    if bus:
        _emit_resolution(bus, o1, o2, resolution)
    return resolution.outcome


def encounter_series(first: Organism, others: Iterable[Organism],
                     config: Optional[EncounterConfig] = None,
                     bus: Optional[EventBus] = None) -> Organism:
    """
    Left fold of encounter() over others, tracking only first's lineage.

    ((o1 + o2) + o3) + ... + on, where each step keeps element 0 of the
    outcome. Order matters: the fold is neither commutative nor associative.
    The first failing step aborts the fold.
    """
    chain = list(others)
    if not chain:
        raise ValueError("encounter_series needs at least one further organism")
    for other in chain:
        if other.diet != first.diet:
            raise DietMismatchError(
                f"Series diet is {first.diet.value}, got {other.diet.value} "
                f"for {other.handle}"
            )

    if bus:
        bus.emit(EncounterEvent(
            event_key=EVT_SERIES_STARTED,
            source=first.handle,
            data={"length": len(chain), "vitality": first.vitality},
        ))

    current = first
    for step, other in enumerate(chain, start=1):
        current = encounter(current, other, config=config, bus=bus).first
        if bus:
            bus.emit(EncounterEvent(
                event_key=EVT_SERIES_STEP,
                source=current.handle,
                target=other.handle,
                data={"step": step, "vitality": current.vitality},
            ))

    if bus:
        bus.emit(EncounterEvent(
            event_key=EVT_SERIES_COMPLETED,
            source=current.handle,
            data={"steps": len(chain), "vitality": current.vitality},
        ))
    return current


# ============================================================
# EVENT EMISSION
# ============================================================

def _emit_resolution(bus: EventBus, o1: Organism, o2: Organism,
                     resolution: EncounterResolution) -> None:
    after1, after2, child = resolution.outcome
    kind = resolution.kind.value

    bus.emit(EncounterEvent(
        event_key=EVT_ENCOUNTER_RESOLVED,
        source=o1.handle,
        target=o2.handle,
        data={
            "kind": kind,
            "before": [o1.vitality, o2.vitality],
            "after": [after1.vitality, after2.vitality],
            "offspring": child.vitality if child is not None else None,
        },
    ))

    pairs = ((o1, after1, o2), (o2, after2, o1))
    for before, after, other in pairs:
        if after.vitality > before.vitality:
            bus.emit(EncounterEvent(
                event_key=EVT_ORGANISM_FED,
                source=before.handle,
                target=other.handle,
                data={"gain": after.vitality - before.vitality,
                      "vitality": after.vitality,
                      "cause": kind},
            ))
    for before, after, other in pairs:
        if after.is_dead() and not before.is_dead():
            bus.emit(EncounterEvent(
                event_key=EVT_ORGANISM_DIED,
                source=before.handle,
                target=other.handle,
                data={"vitality_lost": before.vitality, "cause": kind},
            ))

    if child is not None:
        bus.emit(EncounterEvent(
            event_key=EVT_ORGANISM_BORN,
            source=child.handle,
            data={"vitality": child.vitality,
                  "parents": [o1.handle, o2.handle]},
        ))


# ============================================================
# SMOKE TEST
# ============================================================

if __name__ == "__main__":
    bus = EventBus()

    def chronicle_log(event: EncounterEvent) -> None:
        print(f"[EVENT] {event.event_key:20s} | "
              f"src={event.source:<18s} tgt={event.target or '—':<18s} | "
              f"{event.data}")

    bus.subscribe("*", chronicle_log)

    wolf = Organism.carnivore("wolf", 10)
    pack = [
        Organism.carnivore("coyote", 4),
        Organism.carnivore("wolf", 6),
        Organism.carnivore("lynx", 11),
    ]
    final = encounter_series(wolf, pack, bus=bus)
    print(f"\n{wolf.handle}: {wolf.vitality} -> {final.vitality}")
