"""Local in-memory assignment store.

Simple dict-based storage for single-process use. Entries live as long as
the process; a cold start simply begins empty and the assigner refills it
within one tick.

Usage:
    store = LocalAssignmentStore()
    store.set("worker-1", Upgrade(controller_id))
    store.any_holds(AssignmentKind.DEPOSIT)
"""

from __future__ import annotations

from collections.abc import Collection, Iterator

from colonytasks.core.assignment import Assignment, AssignmentKind, kind_of


class LocalAssignmentStore:
    """In-memory AssignmentStore keyed by agent name.

    Structure:
        _entries[agent_name] = assignment

    Keys are unique by construction, so an agent never has more than one
    assignment.
    """

    def __init__(self, entries: dict[str, Assignment] | None = None):
        """Initialize the store.

        Args:
            entries: Optional initial entries, copied.
        """
        self._entries: dict[str, Assignment] = dict(entries or {})

    def get(self, name: str) -> Assignment | None:
        return self._entries.get(name)

    def set(self, name: str, assignment: Assignment) -> None:
        self._entries[name] = assignment

    def remove(self, name: str) -> bool:
        return self._entries.pop(name, None) is not None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[str, Assignment]]:
        # Copy so callers may remove entries while iterating.
        yield from list(self._entries.items())

    def holders(self, kind: AssignmentKind) -> list[str]:
        return [name for name, assignment in self._entries.items() if kind_of(assignment) is kind]

    def any_holds(
        self,
        kind: AssignmentKind,
        live: Collection[str] | None = None,
    ) -> bool:
        """Check whether any agent holds an assignment of this kind.

        Args:
            kind: Assignment kind to look for.
            live: When given, only holders whose name is in live count.
                Entries of dead agents linger until housekeeping prunes
                them, so liveness-qualified rules pass the live names here.

        Returns:
            True if a qualifying holder exists.
        """
        return any(live is None or name in live for name in self.holders(kind))

    def has_claim(self, assignment: Assignment, live: Collection[str] | None = None) -> bool:
        """Check whether some (optionally live) agent holds exactly this assignment."""
        return any(
            held == assignment and (live is None or name in live)
            for name, held in self._entries.items()
        )

    def count_by_kind(self) -> dict[AssignmentKind, int]:
        """Tally entries per assignment kind (for tick summaries)."""
        counts: dict[AssignmentKind, int] = {}
        for assignment in self._entries.values():
            kind = kind_of(assignment)
            counts[kind] = counts.get(kind, 0) + 1
        return counts

    def prune(self, live: Collection[str]) -> list[str]:
        """Remove entries of agents that are no longer live.

        Args:
            live: Names of agents alive this tick.

        Returns:
            Names whose entries were removed.
        """
        dead = [name for name in self._entries if name not in live]
        for name in dead:
            del self._entries[name]
        return dead

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> dict[str, Assignment]:
        """Shallow copy of the current entries (assignments are immutable)."""
        return dict(self._entries)
