"""Tracing infrastructure for recording colony ticks.

Usage:
    from colonytasks.tracing import InMemoryHistoryStore

    history = InMemoryHistoryStore(max_ticks=500)
    loop = ColonyLoop(world, gateway, store, history=history)
    loop.run_tick()
    history.latest.events
"""

from colonytasks.tracing.memory import InMemoryHistoryStore
from colonytasks.tracing.models import TickRecord
from colonytasks.tracing.protocol import HistoryStore

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickRecord",
]
