"""The per-tick colony loop.

Usage:
    store = LocalAssignmentStore()
    loop = ColonyLoop(room, room, store)

    # Host callback, once per tick
    loop.run_tick()

    # Or drive a simulated host for a while
    loop.run(100, on_tick_end=room.advance)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from colonytasks.config import ColonySettings
from colonytasks.core.assignment import describe, kind_of
from colonytasks.scheduling.housekeeping import prune_dead_agents
from colonytasks.scheduling.spawner import Spawner
from colonytasks.scheduling.towers import TowerController
from colonytasks.storage.local import LocalAssignmentStore
from colonytasks.storage.protocol import AssignmentStore
from colonytasks.tasks.assigner import TaskAssigner
from colonytasks.tasks.executor import TaskExecutor
from colonytasks.tracing.models import TickRecord
from colonytasks.tracing.protocol import HistoryStore
from colonytasks.world.protocol import ActionGateway, WorldQuery

logger = logging.getLogger(__name__)


@contextmanager
def _timed(timings: dict[str, float], phase: str) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        timings[phase] = (time.perf_counter() - start) * 1000.0


class ColonyLoop:
    """Runs one colony tick: execute, assign, towers, spawns, housekeeping.

    The assignment store is owned by the caller and handed in, so several
    loops (or tests) can run side by side without shared state.

    Args:
        world: Host query surface.
        gateway: Host command surface.
        store: Assignment store persisted across ticks. A new empty one is
            created when omitted (a cold start).
        settings: Loop configuration; defaults read COLONY_* variables.
        history: Optional sink for one TickRecord per tick.
    """

    def __init__(
        self,
        world: WorldQuery,
        gateway: ActionGateway,
        store: AssignmentStore | None = None,
        settings: ColonySettings | None = None,
        history: HistoryStore | None = None,
    ):
        self._world = world
        self._gateway = gateway
        self.store: AssignmentStore = store if store is not None else LocalAssignmentStore()
        self._settings = settings or ColonySettings()
        self._history = history
        self.last_record: TickRecord | None = None

    def run_tick(self) -> None:
        """Per-tick entry point invoked by the host.

        The executor pass finishes before the assigner pass starts, so
        assignments dropped this tick are reassigned this tick.
        """
        start = time.perf_counter()
        tick = self._world.time
        timings: dict[str, float] = {}
        logger.debug("tick %d starting", tick)

        with _timed(timings, "executor"):
            result = TaskExecutor(self._world, self._gateway, self.store).run()
        with _timed(timings, "assigner"):
            result.merge(
                TaskAssigner(self._world, self._gateway, self.store).run()
            )
        with _timed(timings, "towers"):
            TowerController(self._world, self._gateway, self._settings.tower_range).run()
        with _timed(timings, "spawner"):
            spawned = Spawner(
                self._world,
                self._gateway,
                self.store,
                max_population=self._settings.max_population,
            ).run()

        pruned: list[str] = []
        if tick % self._settings.housekeeping_interval == 0:
            logger.info("running assignment cleanup")
            with _timed(timings, "housekeeping"):
                pruned = prune_dead_agents(self._world, self.store)

        events = result.to_events()
        events.extend({"type": "spawn", "agent": name} for name in spawned)
        events.extend({"type": "prune", "agent": name} for name in pruned)

        elapsed = (time.perf_counter() - start) * 1000.0
        record = TickRecord(
            tick=tick,
            elapsed_ms=elapsed,
            assignments={
                name: f"{kind_of(a).value} {describe(a)}" for name, a in self.store.items()
            },
            events=events,
            system_timings=timings,
        )
        self.last_record = record
        if self._history is not None:
            self._history.record_tick(record)

        logger.info(
            "tick %d done in %.2f ms: %d assigned, %d dropped, %d culled, %d spawned",
            tick,
            elapsed,
            len(result.assigned),
            len(result.dropped),
            len(result.culled),
            len(spawned),
        )

    def run(self, ticks: int, on_tick_end: Callable[[], None] | None = None) -> None:
        """Run several ticks back to back.

        Args:
            ticks: Number of ticks to run.
            on_tick_end: Called after each tick, typically the host's
                advance() that moves the world to the next tick.

        Raises:
            ValueError: If ticks is negative.
        """
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")
        for _ in range(ticks):
            self.run_tick()
            if on_tick_end is not None:
                on_tick_end()
