"""
Ecology — ecology/chronicle.py
Chronicle: append-only JSONL journal of encounter events.
=========================================================
Version:     0.1
Stack:       Python 3.11+ | stdlib json | bespoke EventBus
Status:      Stable.

Architecture notes
------------------
- Chronicle is a PASSIVE wildcard subscriber. It never emits events and
  never alters an encounter's outcome.
- Append-only JSONL. Inscribed entries are immutable after write.
- Significance gate (int 1–5): events below significance_min are
  discarded silently. Default threshold = CHRONICLE_SIGNIFICANCE_MIN.
- Time is logical (series / step) and injected via EncounterStamp.
  Chronicle never reads the system clock.

Significance Scoring Reference
------------------------------
  1 — routine (series.step, series.started)
  2 — standard (encounter.resolved, organism.fed)
  3 — notable (organism.born, encounter.rejected, series.completed)
  4 — significant (organism.died)
  5 — session markers (ungated)
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ecology.config import CHRONICLE_SIGNIFICANCE_MIN
from ecology.events import (
    EncounterEvent,
    EventBus,
    WILDCARD,
    EVT_ENCOUNTER_RESOLVED,
    EVT_ENCOUNTER_REJECTED,
    EVT_ORGANISM_FED,
    EVT_ORGANISM_DIED,
    EVT_ORGANISM_BORN,
    EVT_SERIES_STARTED,
    EVT_SERIES_STEP,
    EVT_SERIES_COMPLETED,
)

EVT_SESSION_OPENED = "chronicle.session_opened"
EVT_SESSION_CLOSED = "chronicle.session_closed"

_SIGNIFICANCE_TABLE: Dict[str, int] = {
    EVT_SERIES_STARTED:     1,
    EVT_SERIES_STEP:        1,

    EVT_ENCOUNTER_RESOLVED: 2,
    EVT_ORGANISM_FED:       2,

    EVT_ORGANISM_BORN:      3,
    EVT_ENCOUNTER_REJECTED: 3,
    EVT_SERIES_COMPLETED:   3,

    EVT_ORGANISM_DIED:      4,
}

_VERBS: Dict[str, str] = {
    EVT_ENCOUNTER_RESOLVED: "encountered",
    EVT_ENCOUNTER_REJECTED: "was_refused",
    EVT_ORGANISM_FED:       "fed_on",
    EVT_ORGANISM_DIED:      "died",
    EVT_ORGANISM_BORN:      "was_born",
    EVT_SERIES_STARTED:     "began_series",
    EVT_SERIES_STEP:        "advanced",
    EVT_SERIES_COMPLETED:   "finished_series",
}


@dataclass(frozen=True)
class EncounterStamp:
    """Logical time: series number and step within it (both 1-indexed)."""
    series: int = 1
    step: int = 1

    def to_dict(self) -> Dict[str, int]:
        return {"series": self.series, "step": self.step}

    def advance_step(self) -> "EncounterStamp":
        return EncounterStamp(series=self.series, step=self.step + 1)

    def next_series(self) -> "EncounterStamp":
        return EncounterStamp(series=self.series + 1, step=1)


@dataclass(frozen=True)
class ChronicleEntry:
    event_id: str                       # UUID4 string
    stamp: Dict[str, int]               # {series, step}
    actor_handle: str
    payload: Dict[str, Any]             # {event_type, verb, object, detail}
    significance: int                   # 1–5

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id":     self.event_id,
            "stamp":        self.stamp,
            "actor_handle": self.actor_handle,
            "payload":      self.payload,
            "significance": self.significance,
        }


def build_payload(event: EncounterEvent) -> Dict[str, Any]:
    """Normalize an event into {event_type, verb, object, detail}."""
    return {
        "event_type": event.event_key,
        "verb": _VERBS.get(event.event_key, "occurred"),
        "object": event.target or event.source,
        "detail": dict(event.data),
    }


def score_significance(event: EncounterEvent) -> int:
    """
    Return significance (1–5) for an event.

    Resolutions where somebody died are raised to 3 so that a chronicle
    gated at 3 still shows which encounter did the killing.
    """
    base = _SIGNIFICANCE_TABLE.get(event.event_key, 1)
    if event.event_key == EVT_ENCOUNTER_RESOLVED:
        before = event.data.get("before", [])
        after = event.data.get("after", [])
        if any(b > 0 and a == 0 for b, a in zip(before, after)):
            base = max(base, 3)
    return base


class ChronicleInscriber:
    """
    Wildcard subscriber that inscribes qualifying events to JSONL.

    Usage:
        bus = EventBus()
        inscriber = ChronicleInscriber(bus, Path("runs/chronicle.jsonl"))
        inscriber.open_session()
        encounter_series(wolf, pack, bus=bus)
        inscriber.close_session()
    """

    def __init__(
        self,
        bus: EventBus,
        chronicle_path: Path,
        stamp: Optional[EncounterStamp] = None,
        significance_min: int = CHRONICLE_SIGNIFICANCE_MIN,
    ) -> None:
        self.bus = bus
        self.chronicle_path = Path(chronicle_path)
        self.stamp = stamp or EncounterStamp()
        self.significance_min = significance_min

        self.chronicle_path.parent.mkdir(parents=True, exist_ok=True)
        bus.subscribe(WILDCARD, self._on_event)

    def open_session(self) -> ChronicleEntry:
        marker = EncounterEvent(
            event_key=EVT_SESSION_OPENED,
            source="system",
            data={"stamp": self.stamp.to_dict()},
        )
        return self._inscribe(marker, significance=5)

    def close_session(self) -> ChronicleEntry:
        marker = EncounterEvent(
            event_key=EVT_SESSION_CLOSED,
            source="system",
            data={"stamp": self.stamp.to_dict()},
        )
        return self._inscribe(marker, significance=5)

    def detach(self) -> None:
        self.bus.unsubscribe(WILDCARD, self._on_event)

    def _on_event(self, event: EncounterEvent) -> None:
        significance = score_significance(event)
        if significance >= self.significance_min:
            self._inscribe(event, significance=significance)
        # Logical time moves even when the marker itself is gated out.
        if event.event_key == EVT_SERIES_STEP:
            self.stamp = self.stamp.advance_step()
        elif event.event_key == EVT_SERIES_COMPLETED:
            self.stamp = self.stamp.next_series()

    def _inscribe(self, event: EncounterEvent, significance: int) -> ChronicleEntry:
        entry = ChronicleEntry(
            event_id=str(uuid.uuid4()),
            stamp=self.stamp.to_dict(),
            actor_handle=event.source,
            payload=build_payload(event),
            significance=significance,
        )
        with open(self.chronicle_path, "a", encoding="utf-8") as fh:
            fh.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")
        return entry


class ChronicleReader:
    """Read-only query interface for a chronicle JSONL file."""

    def __init__(self, chronicle_path: Path) -> None:
        self.chronicle_path = Path(chronicle_path)

    def all_entries(self) -> List[Dict[str, Any]]:
        if not self.chronicle_path.exists():
            return []
        entries = []
        with open(self.chronicle_path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if line:
                    entries.append(json.loads(line))
        return entries

    def by_event_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [
            e for e in self.all_entries()
            if e.get("payload", {}).get("event_type") == event_type
        ]

    def by_actor(self, actor_handle: str) -> List[Dict[str, Any]]:
        return [e for e in self.all_entries() if e.get("actor_handle") == actor_handle]

    def by_significance(self, minimum: int) -> List[Dict[str, Any]]:
        return [e for e in self.all_entries() if e.get("significance", 0) >= minimum]

    def deaths(self) -> List[Dict[str, Any]]:
        return self.by_event_type(EVT_ORGANISM_DIED)

    def births(self) -> List[Dict[str, Any]]:
        return self.by_event_type(EVT_ORGANISM_BORN)

    def session_markers(self) -> List[Dict[str, Any]]:
        return [
            e for e in self.all_entries()
            if e.get("payload", {}).get("event_type", "").startswith("chronicle.session")
        ]
