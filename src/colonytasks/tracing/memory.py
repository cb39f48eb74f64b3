"""Bounded in-memory tick history."""

from __future__ import annotations

from collections import deque
from typing import Any

from colonytasks.tracing.models import TickRecord


class InMemoryHistoryStore:
    """Keeps the last ``max_ticks`` tick records.

    Args:
        max_ticks: Capacity; the oldest record is evicted when full.
    """

    def __init__(self, max_ticks: int = 100):
        if max_ticks <= 0:
            raise ValueError(f"max_ticks must be positive, got {max_ticks}")
        self._records: deque[TickRecord] = deque(maxlen=max_ticks)

    def record_tick(self, record: TickRecord) -> None:
        self._records.append(record)

    def get_tick(self, tick: int) -> TickRecord | None:
        return next((r for r in self._records if r.tick == tick), None)

    def get_events(self, start_tick: int, end_tick: int) -> list[dict[str, Any]]:
        return [
            event
            for record in self._records
            if start_tick <= record.tick <= end_tick
            for event in record.events
        ]

    def get_tick_range(self) -> tuple[int, int] | None:
        if not self._records:
            return None
        return self._records[0].tick, self._records[-1].tick

    def clear(self) -> None:
        self._records.clear()

    @property
    def tick_count(self) -> int:
        return len(self._records)

    @property
    def latest(self) -> TickRecord | None:
        return self._records[-1] if self._records else None
