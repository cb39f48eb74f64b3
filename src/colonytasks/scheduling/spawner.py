"""Spawn policy and body composition.

Bodies come from fixed lookup tables keyed by the energy available in the
room. Harvester bodies have no CARRY part; they become pure gatherers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from colonytasks.core.assignment import AssignmentKind
from colonytasks.core.kinds import Capability
from colonytasks.storage.protocol import AssignmentStore
from colonytasks.world.protocol import ActionGateway, WorldQuery

logger = logging.getLogger(__name__)

M, W, C = Capability.MOVE, Capability.WORK, Capability.CARRY

BodyTable = tuple[tuple[int, tuple[Capability, ...]], ...]

# (minimum energy, body), richest first
HARVESTER_BODIES: BodyTable = (
    (750, (M, M, M, M, M, W, W, W, W, W)),
    (550, (M, M, M, W, W, W, W)),
    (300, (M, M, W, W)),
)
HAULER_BODIES: BodyTable = (
    (800, (M, M, M, M, C, C, C, C, W, W, W, W)),
    (550, (M, M, M, C, C, C, C, W, W)),
    (300, (M, M, C, C, W)),
)

PART_COST = {Capability.MOVE: 50, Capability.WORK: 100, Capability.CARRY: 50}


def body_cost(body: Sequence[Capability]) -> int:
    return sum(PART_COST[part] for part in body)


def body_for(energy: int, table: BodyTable) -> tuple[Capability, ...] | None:
    """Look up the richest body affordable with energy, or None below the floor."""
    for minimum, body in table:
        if energy >= minimum:
            return body
    return None


class Spawner:
    """Decides whether each spawn should produce an agent this tick.

    Args:
        world: Snapshot accessors for the current tick.
        gateway: Command surface.
        store: Assignment store, read to count working harvesters.
        max_population: No spawning at or above this many agents.
    """

    def __init__(
        self,
        world: WorldQuery,
        gateway: ActionGateway,
        store: AssignmentStore,
        max_population: int = 6,
    ):
        self._world = world
        self._gateway = gateway
        self._store = store
        self._max_population = max_population

    def run(self) -> list[str]:
        """Run every owned spawn once.

        Returns:
            Names of agents whose spawning started this tick.
        """
        agents = self._world.agents()
        live = {agent.name for agent in agents}
        harvesters = sum(1 for name in self._store.holders(AssignmentKind.HARVEST) if name in live)
        transporters = sum(1 for agent in agents if agent.has(Capability.CARRY))
        sources = len(self._world.active_resource_nodes())
        available = self._world.energy_available()
        capacity = self._world.energy_capacity()

        spawned: list[str] = []
        for spawn in self._world.spawns():
            logger.debug("running spawn %s", spawn.id)
            wanted = available == capacity or harvesters == 0 or transporters == 0
            if not wanted or len(agents) + len(spawned) >= self._max_population:
                continue

            table = HARVESTER_BODIES if harvesters < sources else HAULER_BODIES
            body = body_for(available, table)
            if body is None:
                continue

            name = f"{self._world.time}-{len(spawned)}"
            status = self._gateway.spawn_agent(spawn, body, name)
            if status.ok:
                spawned.append(name)
            else:
                logger.warning("couldn't spawn %s: %s", name, status.value)
        return spawned
