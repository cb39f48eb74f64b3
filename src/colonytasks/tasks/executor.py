"""Task execution: advance every persisted assignment by one step.

For each agent holding an assignment the executor checks the variant's
carried-energy guard, re-resolves the target from its id or position, issues
exactly one command and decides whether the assignment survives the tick.

Failure handling:
    - guard fails            -> drop
    - id unresolvable        -> drop
    - nothing at position    -> drop
    - NOT_IN_RANGE           -> move toward the target, keep
    - any other rejection    -> drop with a warning

Usage:
    executor = TaskExecutor(world, gateway, store)
    result = executor.run()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from colonytasks.core.assignment import (
    Assignment,
    Construct,
    Deposit,
    Harvest,
    Pickup,
    Repair,
    Upgrade,
    Withdraw,
)
from colonytasks.core.identity import ObjectId, Position
from colonytasks.core.kinds import (
    LookKind,
    StructureKind,
    accepts_delivery,
    is_repairable,
    is_wall_type,
)
from colonytasks.storage.protocol import AssignmentStore
from colonytasks.tasks.result import PassResult
from colonytasks.world.handles import (
    AgentHandle,
    ConstructionSiteHandle,
    GroundResourceHandle,
    Handle,
    ResourceNodeHandle,
    StructureHandle,
)
from colonytasks.world.protocol import ActionGateway, WorldQuery
from colonytasks.world.result import ActionStatus, DropReason

logger = logging.getLogger(__name__)


def _structures(handles: Iterable[Handle]) -> list[StructureHandle]:
    return [h for h in handles if isinstance(h, StructureHandle)]


class TaskExecutor:
    """Runs the current tick's step of every persisted assignment.

    Args:
        world: Snapshot accessors for the current tick.
        gateway: Command surface for the current tick.
        store: Assignment store, mutated in place when assignments end.
    """

    def __init__(self, world: WorldQuery, gateway: ActionGateway, store: AssignmentStore):
        self._world = world
        self._gateway = gateway
        self._store = store
        self._commands = 0

    def run(self) -> PassResult:
        """Step every live, non-spawning agent that holds an assignment.

        One agent's failure never stops the pass: failures are values and
        only end that agent's assignment.

        Returns:
            PassResult with drop reasons and the number of commands issued.
        """
        result = PassResult()
        self._commands = 0
        for agent in self._world.agents():
            if agent.spawning:
                continue
            assignment = self._store.get(agent.name)
            if assignment is None:
                continue
            reason = self.step(agent, assignment)
            if reason is not None:
                logger.debug("%s: dropping assignment (%s)", agent.name, reason.value)
                self._store.remove(agent.name)
                result.dropped[agent.name] = reason
        result.commands = self._commands
        return result

    def step(self, agent: AgentHandle, assignment: Assignment) -> DropReason | None:
        """Perform one tick of an assignment.

        Args:
            agent: Handle of the acting agent, fetched this tick.
            assignment: The agent's persisted assignment.

        Returns:
            Why the assignment must be dropped, or None if it survives.
        """
        name = agent.name
        match assignment:
            case Upgrade(controller_id=controller_id) if agent.carried > 0:
                logger.info("%s: upgrading", name)
                return self._upgrade(agent, controller_id)
            case Construct(pos=pos) if agent.carried > 0:
                logger.info("%s: constructing", name)
                return self._construct(agent, pos)
            case Harvest(node_id=node_id):
                logger.info("%s: harvesting", name)
                return self._harvest(agent, node_id)
            case Withdraw(container_id=container_id) if agent.free_capacity > 0:
                logger.info("%s: withdrawing", name)
                return self._withdraw(agent, container_id)
            case Pickup(pos=pos) if agent.free_capacity > 0:
                logger.info("%s: picking up", name)
                return self._pickup(agent, pos)
            case Deposit(pos=pos) if agent.carried > 0:
                logger.info("%s: depositing", name)
                return self._deposit(agent, pos)
            case Repair(pos=pos) if agent.carried > 0:
                logger.info("%s: repairing", name)
                return self._repair(agent, pos)
            case _:
                logger.info("%s: clearing", name)
                return DropReason.GUARD

    # --- variants ---

    def _upgrade(self, agent: AgentHandle, controller_id: ObjectId) -> DropReason | None:
        controller = self._world.resolve(controller_id, StructureHandle)
        if controller is None:
            return DropReason.UNRESOLVABLE
        status = self._gateway.upgrade(agent, controller)
        return self._settle(agent, status, controller.pos, "upgrade")

    def _construct(self, agent: AgentHandle, pos: Position) -> DropReason | None:
        if not agent.pos.is_near_to(pos):
            self._move(agent, pos)
            return None

        site = next(
            (
                h
                for h in self._world.look_at(pos, LookKind.CONSTRUCTION_SITES)
                if isinstance(h, ConstructionSiteHandle)
            ),
            None,
        )
        if site is not None:
            return self._settle(agent, self._gateway.build(agent, site), pos, "build")

        # A finished rampart starts with almost no hits; keep reinforcing it.
        wall = next(
            (
                s
                for s in _structures(self._world.look_at(pos, LookKind.STRUCTURES))
                if is_wall_type(s.kind) and s.damaged
            ),
            None,
        )
        if wall is None:
            return DropReason.TARGET_ABSENT
        return self._settle(agent, self._gateway.repair(agent, wall), pos, "repair")

    def _harvest(self, agent: AgentHandle, node_id: ObjectId) -> DropReason | None:
        node = self._world.resolve(node_id, ResourceNodeHandle)
        if node is None:
            return DropReason.UNRESOLVABLE
        if not agent.pos.is_near_to(node.pos):
            self._move(agent, node.pos)
            return None

        container = next(
            (
                s
                for s in _structures(self._world.in_range(node.pos, 1, LookKind.STRUCTURES))
                if s.kind is StructureKind.CONTAINER
            ),
            None,
        )
        if container is not None and agent.pos != container.pos:
            # Stand on the container so overflow lands in it.
            self._move(agent, container.pos)
            return None
        return self._settle(agent, self._gateway.harvest(agent, node), node.pos, "harvest")

    def _withdraw(self, agent: AgentHandle, container_id: ObjectId) -> DropReason | None:
        container = self._world.resolve(container_id, StructureHandle)
        if container is None:
            return DropReason.UNRESOLVABLE
        if not agent.pos.is_near_to(container.pos):
            self._move(agent, container.pos)
            return None
        return self._settle(
            agent, self._gateway.withdraw(agent, container), container.pos, "withdraw"
        )

    def _pickup(self, agent: AgentHandle, pos: Position) -> DropReason | None:
        resource = next(
            (
                h
                for h in self._world.look_at(pos, LookKind.GROUND_RESOURCES)
                if isinstance(h, GroundResourceHandle)
            ),
            None,
        )
        if resource is None:
            return DropReason.TARGET_ABSENT
        if not agent.pos.is_near_to(pos):
            self._move(agent, pos)
            return None
        return self._settle(agent, self._gateway.pickup(agent, resource), pos, "pick up")

    def _deposit(self, agent: AgentHandle, pos: Position) -> DropReason | None:
        target = next(
            (
                s
                for s in _structures(self._world.look_at(pos, LookKind.STRUCTURES))
                if accepts_delivery(s.kind)
            ),
            None,
        )
        if target is None:
            return DropReason.TARGET_ABSENT
        if not agent.pos.is_near_to(target.pos):
            self._move(agent, pos)
            return None
        return self._settle(agent, self._gateway.transfer(agent, target), pos, "transfer")

    def _repair(self, agent: AgentHandle, pos: Position) -> DropReason | None:
        if not agent.pos.is_near_to(pos):
            self._move(agent, pos)
            return None
        structure = next(
            (
                s
                for s in _structures(self._world.look_at(pos, LookKind.STRUCTURES))
                if s.damaged and is_repairable(s.kind)
            ),
            None,
        )
        if structure is None:
            return DropReason.TARGET_ABSENT
        return self._settle(agent, self._gateway.repair(agent, structure), pos, "repair")

    # --- helpers ---

    def _move(self, agent: AgentHandle, target: Position) -> None:
        self._commands += 1
        self._gateway.move_to(agent, target)

    def _settle(
        self, agent: AgentHandle, status: ActionStatus, target: Position, verb: str
    ) -> DropReason | None:
        """Turn a command outcome into the assignment's fate.

        Args:
            agent: Acting agent.
            status: Outcome of the command just issued.
            target: Where to walk if the target was out of range.
            verb: Action name for the warning message.

        Returns:
            DropReason.REJECTED for terminal failures, otherwise None.
        """
        self._commands += 1
        if status.ok:
            return None
        if status is ActionStatus.NOT_IN_RANGE:
            self._move(agent, target)
            return None
        logger.warning("%s: couldn't %s: %s", agent.name, verb, status.value)
        return DropReason.REJECTED
