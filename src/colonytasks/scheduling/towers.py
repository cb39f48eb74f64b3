"""Reactive tower behaviour, recomputed from scratch every tick.

Towers hold no assignment. Each tick a tower attacks the closest hostile if
it is in range; when there are no hostiles it heals the closest agent if
that agent is hurt, otherwise repairs the weakest damaged rampart in range,
otherwise the weakest damaged structure in range.
"""

from __future__ import annotations

import logging

from colonytasks.core.kinds import LookKind, StructureKind, is_repairable
from colonytasks.world.handles import AgentHandle, HostileHandle, StructureHandle
from colonytasks.world.protocol import ActionGateway, WorldQuery
from colonytasks.world.result import ActionStatus

logger = logging.getLogger(__name__)


class TowerController:
    """Operates every owned tower once per tick.

    Args:
        world: Snapshot accessors for the current tick.
        gateway: Command surface.
        tower_range: Range for attacking and repairing.
    """

    def __init__(self, world: WorldQuery, gateway: ActionGateway, tower_range: int = 20):
        self._world = world
        self._gateway = gateway
        self._range = tower_range

    def run(self) -> int:
        """Operate all towers. Returns the number of commands issued."""
        issued = 0
        for tower in self._world.owned_structures():
            if tower.kind is not StructureKind.TOWER:
                continue
            if self.operate(tower) is not None:
                issued += 1
        return issued

    def operate(self, tower: StructureHandle) -> ActionStatus | None:
        """Pick and issue this tick's command for one tower.

        Returns:
            Status of the command, or None if the tower stayed idle.
        """
        hostile = self._world.closest(tower.pos, LookKind.HOSTILES)
        if isinstance(hostile, HostileHandle):
            if not tower.pos.in_range_to(hostile.pos, self._range):
                return None
            logger.debug("tower %s attacking hostile at %s", tower.id, hostile.pos)
            return self._report(tower, self._gateway.tower_attack(tower, hostile))

        nearest = self._world.closest(tower.pos, LookKind.AGENTS)
        if isinstance(nearest, AgentHandle) and nearest.hits < nearest.hits_max:
            logger.debug("tower %s healing %s", tower.id, nearest.name)
            return self._report(tower, self._gateway.tower_heal(tower, nearest))

        damaged = [
            s
            for s in self._world.in_range(tower.pos, self._range, LookKind.STRUCTURES)
            if isinstance(s, StructureHandle) and is_repairable(s.kind) and s.damaged
        ]
        ramparts = [s for s in damaged if s.kind is StructureKind.RAMPART]
        target = min(ramparts or damaged, key=lambda s: s.hits, default=None)
        if target is None:
            return None
        logger.debug("tower %s repairing %s at %s", tower.id, target.kind.name, target.pos)
        return self._report(tower, self._gateway.tower_repair(tower, target))

    def _report(self, tower: StructureHandle, status: ActionStatus) -> ActionStatus:
        if not status.ok:
            logger.debug("tower %s command failed: %s", tower.id, status.value)
        return status
