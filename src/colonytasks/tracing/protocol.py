"""Protocols for tracing infrastructure.

These protocols define the interface for tick history backends, allowing
different implementations (in-memory, file, database).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from colonytasks.tracing.models import TickRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for storing and retrieving tick history.

    Usage:
        store = InMemoryHistoryStore(max_ticks=1000)

        # Record ticks as they happen
        store.record_tick(tick_record)

        # Later, inspect for debugging
        events = store.get_events(start_tick=40, end_tick=50)
    """

    def record_tick(self, record: TickRecord) -> None:
        """Record a tick.

        Args:
            record: Complete record of the tick to store.

        Note:
            Implementations may have bounded storage (e.g., last N ticks).
            Older records may be evicted when the limit is reached.
        """
        ...

    def get_tick(self, tick: int) -> TickRecord | None:
        """Get complete tick record, or None if not in storage."""
        ...

    def get_events(self, start_tick: int, end_tick: int) -> list[dict[str, Any]]:
        """Get events in tick range (inclusive), flattened."""
        ...

    def get_tick_range(self) -> tuple[int, int] | None:
        """Get (min_tick, max_tick) if history exists, None if empty."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def tick_count(self) -> int:
        """Number of ticks currently stored."""
        ...
