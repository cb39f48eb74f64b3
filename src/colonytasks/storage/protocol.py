"""Assignment store protocol for swappable backends.

The store is the only state that survives from one tick to the next. It is
owned by the caller driving the tick and passed in explicitly, never held
as module-level state.

Usage:
    store = LocalAssignmentStore()
    loop = ColonyLoop(world, gateway, store)
"""

from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import Protocol, runtime_checkable

from colonytasks.core.assignment import Assignment, AssignmentKind


@runtime_checkable
class AssignmentStore(Protocol):
    """Mapping from agent name to its single current Assignment."""

    def get(self, name: str) -> Assignment | None:
        """Get the agent's assignment, if any."""
        ...

    def set(self, name: str, assignment: Assignment) -> None:
        """Assign, replacing any previous entry for the agent."""
        ...

    def remove(self, name: str) -> bool:
        """Drop the agent's entry. Returns True if one existed."""
        ...

    def __contains__(self, name: object) -> bool: ...

    def __len__(self) -> int: ...

    def items(self) -> Iterator[tuple[str, Assignment]]:
        """Iterate (name, assignment) pairs."""
        ...

    def holders(self, kind: AssignmentKind) -> list[str]:
        """Names of agents currently holding an assignment of this kind."""
        ...

    def any_holds(
        self,
        kind: AssignmentKind,
        live: Collection[str] | None = None,
    ) -> bool:
        """Check whether any agent holds an assignment of this kind.

        Args:
            kind: Assignment kind to look for.
            live: When given, only holders whose name is in live count.
        """
        ...

    def has_claim(self, assignment: Assignment, live: Collection[str] | None = None) -> bool:
        """Check whether some (optionally live) agent holds exactly this assignment."""
        ...

    def count_by_kind(self) -> dict[AssignmentKind, int]:
        """Tally entries per assignment kind."""
        ...

    def prune(self, live: Collection[str]) -> list[str]:
        """Remove entries of agents not in live. Returns removed names."""
        ...
