"""Outcome of an executor or assigner pass.

Usage:
    result = executor.run()
    result.merge(assigner.run())
    for event in result.to_events():
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from colonytasks.core.assignment import Assignment, describe, kind_of
from colonytasks.world.result import DropReason


@dataclass
class PassResult:
    """Accumulated decisions of one pass over the agent population."""

    assigned: dict[str, Assignment] = field(default_factory=dict)
    dropped: dict[str, DropReason] = field(default_factory=dict)
    culled: list[str] = field(default_factory=list)
    commands: int = 0

    def is_empty(self) -> bool:
        """Check if the pass changed nothing and issued no command."""
        return not self.assigned and not self.dropped and not self.culled and not self.commands

    def merge(self, other: PassResult) -> None:
        """Merge other into this result in place.

        Args:
            other: PassResult from a later pass of the same tick.
        """
        self.assigned.update(other.assigned)
        self.dropped.update(other.dropped)
        self.culled.extend(other.culled)
        self.commands += other.commands

    def to_events(self) -> list[dict[str, Any]]:
        """Flatten into JSON-serializable event dicts for tracing."""
        events: list[dict[str, Any]] = []
        for name, reason in self.dropped.items():
            events.append({"type": "drop", "agent": name, "reason": reason.value})
        for name, assignment in self.assigned.items():
            events.append(
                {
                    "type": "assign",
                    "agent": name,
                    "kind": kind_of(assignment).value,
                    "target": describe(assignment),
                }
            )
        for name in self.culled:
            events.append({"type": "cull", "agent": name})
        return events

