"""
Ecology — ecology/events.py
Encounter event envelope, canonical event keys and the pub-sub EventBus.
========================================================================
Version:     0.1
Stack:       Python 3.11+ | Pydantic v2 | bespoke pub-sub
Status:      Stable.

Architecture notes
------------------
- All events are EncounterEvent (BaseModel). data must stay flat and
  JSON-serializable; vitalities are plain ints.
- Bus is injected by the caller (encounter(..., bus=bus)). No global
  singleton. Without a bus the resolver emits nothing.
- WILDCARD ("*") receives every emitted event (used by the Chronicle).

Event emission sequence per encounter
-------------------------------------
  1. encounter.rejected        — plant/plant pairing, then raise
  or
  1. encounter.resolved        — always, with the case kind
  2. organism.fed              — per organism whose vitality rose
  3. organism.died             — per organism killed by this encounter
  4. organism.born             — mating only

Series emission: series.started → (per step) series.step → series.completed
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

# ============================================================
# CANONICAL EVENT KEYS
# Never use raw strings. Add new keys here only.
# ============================================================

EVT_ENCOUNTER_RESOLVED = "encounter.resolved"
EVT_ENCOUNTER_REJECTED = "encounter.rejected"
EVT_ORGANISM_FED       = "organism.fed"
EVT_ORGANISM_DIED      = "organism.died"
EVT_ORGANISM_BORN      = "organism.born"
EVT_SERIES_STARTED     = "series.started"
EVT_SERIES_STEP        = "series.step"
EVT_SERIES_COMPLETED   = "series.completed"


class EncounterEvent(BaseModel):
    """Base envelope. Chronicle receives these directly."""
    event_key: str
    source: str
    target: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


HandlerFn = Callable[[EncounterEvent], None]

WILDCARD = "*"


class EventBus:
    """
    Pub-sub for EncounterEvent. Injected by the caller; no global singleton.

    Handlers are matched by equality, so a bound method read twice from
    the same instance (inscriber._on_event) unsubscribes cleanly.
    A failing handler is reported on stderr and the remaining handlers
    still run; an observer can never change an encounter's outcome.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[HandlerFn]] = {}

    def subscribe(self, event_key: str, handler: HandlerFn) -> HandlerFn:
        self._subscribers.setdefault(event_key, []).append(handler)
        return handler

    def unsubscribe(self, event_key: str, handler: HandlerFn) -> int:
        """Drop every registration of handler under event_key; return how many."""
        handlers = self._subscribers.get(event_key, [])
        kept = [h for h in handlers if h != handler]
        removed = len(handlers) - len(kept)
        if kept:
            self._subscribers[event_key] = kept
        else:
            self._subscribers.pop(event_key, None)
        return removed

    def subscriber_count(self, event_key: str) -> int:
        return len(self._subscribers.get(event_key, []))

    def emit(self, event: EncounterEvent) -> int:
        """Deliver to key subscribers, then wildcard ones. Returns the failure count."""
        failures = 0
        for handler in self._handlers_for(event.event_key):
            try:
                handler(event)
            except Exception as exc:  # noqa: BLE001
                failures += 1
                print(
                    f"[EventBus] Handler error on '{event.event_key}': {exc}",
                    file=sys.stderr,
                )
        return failures

    def _handlers_for(self, event_key: str) -> List[HandlerFn]:
        # Snapshot, so handlers may (un)subscribe while an event is delivered.
        specific = list(self._subscribers.get(event_key, []))
        if event_key == WILDCARD:
            return specific
        return specific + list(self._subscribers.get(WILDCARD, []))
