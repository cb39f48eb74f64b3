"""Per-tick orchestration and the stateless companions it runs.

Usage:
    loop = ColonyLoop(world, gateway, LocalAssignmentStore())
    loop.run_tick()
"""

from colonytasks.scheduling.housekeeping import prune_dead_agents
from colonytasks.scheduling.loop import ColonyLoop
from colonytasks.scheduling.spawner import (
    HARVESTER_BODIES,
    HAULER_BODIES,
    Spawner,
    body_cost,
    body_for,
)
from colonytasks.scheduling.towers import TowerController

__all__ = [
    "ColonyLoop",
    "Spawner",
    "TowerController",
    "prune_dead_agents",
    "HARVESTER_BODIES",
    "HAULER_BODIES",
    "body_cost",
    "body_for",
]
