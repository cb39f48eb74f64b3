"""Data models for tick tracing.

Records are plain JSON-serializable structures so any history backend can
store them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class TickRecord:
    """Record of one colony tick.

    Attributes:
        tick: The tick number.
        elapsed_ms: Wall time spent inside run_tick.
        assignments: Store contents after the tick, agent name -> description
            such as "harvest node-1".
        events: Drops, assignments, culls, spawns and prunes of this tick.
        system_timings: Optional dict of phase name -> execution time in ms.
        metadata: Optional arbitrary metadata for annotations.

    Example:
        record = TickRecord(
            tick=42,
            elapsed_ms=0.8,
            assignments={"1-0": "upgrade controller"},
            events=[{"type": "drop", "agent": "1-0", "reason": "guard"}],
            system_timings={"executor": 0.3, "assigner": 0.4},
        )
    """

    tick: int
    elapsed_ms: float
    assignments: dict[str, str]
    events: list[dict[str, Any]] = field(default_factory=list)
    system_timings: dict[str, float] | None = None
    metadata: dict[str, Any] | None = None

    def count(self, event_type: str) -> int:
        """Number of events of the given type."""
        return sum(1 for event in self.events if event.get("type") == event_type)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "tick": self.tick,
            "elapsed_ms": self.elapsed_ms,
            "assignments": self.assignments,
            "events": self.events,
        }
        if self.system_timings is not None:
            result["system_timings"] = self.system_timings
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TickRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            tick=data["tick"],
            elapsed_ms=data["elapsed_ms"],
            assignments=data["assignments"],
            events=data.get("events", []),
            system_timings=data.get("system_timings"),
            metadata=data.get("metadata"),
        )
