"""Periodic cleanup of store entries left behind by dead agents."""

from __future__ import annotations

import logging

from colonytasks.storage.protocol import AssignmentStore
from colonytasks.world.protocol import WorldQuery

logger = logging.getLogger(__name__)


def prune_dead_agents(world: WorldQuery, store: AssignmentStore) -> list[str]:
    """Remove assignments of agents that are no longer alive.

    Args:
        world: Snapshot accessors for the current tick.
        store: Assignment store to prune in place.

    Returns:
        Names of the agents whose entries were deleted.
    """
    live = {agent.name for agent in world.agents()}
    removed = store.prune(live)
    for name in removed:
        logger.info("deleting assignment for dead agent %s", name)
    return removed
