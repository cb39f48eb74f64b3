"""Task assignment: give every idle agent a new assignment.

The assigner is a greedy, priority-ordered, per-agent matcher. Exclusivity
is enforced against the store as it is being filled, so when two agents
compete for one exclusive target in the same pass the first one reached
wins and the other stays idle until the next tick.

Delivering agents (carrying energy), first match wins:
    1. Deposit into an extension   (best fit, no Deposit held anywhere)
    2. Deposit into a spawn        (same rules)
    3. Deposit into a tower        (same rules)
    4. Construct a site            (tiered, no Construct held anywhere)
    5. Repair a structure < 50%    (no live agent holds Repair)
    6. Upgrade the controller      (no exclusivity)

Gathering agents (empty):
    - haulers withdraw from the fullest container, else pick up the
      largest pile of ground energy;
    - pure gatherers harvest an unclaimed active node, or self-terminate;
    - anyone left idle on a road steps off it.

Usage:
    assigner = TaskAssigner(world, gateway, store)
    result = assigner.run()
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from functools import cached_property

from colonytasks.core.assignment import (
    Assignment,
    AssignmentKind,
    Construct,
    Deposit,
    Harvest,
    Pickup,
    Repair,
    Upgrade,
    Withdraw,
)
from colonytasks.core.identity import Position
from colonytasks.core.kinds import (
    Capability,
    LookKind,
    SiteTier,
    StructureKind,
    is_repairable,
    is_wall_type,
    site_tier,
)
from colonytasks.storage.protocol import AssignmentStore
from colonytasks.tasks.result import PassResult
from colonytasks.world.handles import (
    AgentHandle,
    ConstructionSiteHandle,
    GroundResourceHandle,
    ResourceNodeHandle,
    StructureHandle,
)
from colonytasks.world.protocol import ActionGateway, WorldQuery

logger = logging.getLogger(__name__)

DEPOSIT_ORDER = (StructureKind.EXTENSION, StructureKind.SPAWN, StructureKind.TOWER)


class _RoomView:
    """Candidate targets for one assigner pass, fetched lazily and once.

    Nothing here changes while the assigner runs, so each query is made at
    most once per pass regardless of how many agents are idle.
    """

    def __init__(self, world: WorldQuery):
        self._world = world

    @cached_property
    def _owned(self) -> list[StructureHandle]:
        return self._world.owned_structures()

    @cached_property
    def _all(self) -> list[StructureHandle]:
        return self._world.structures()

    def fillable(self, kind: StructureKind) -> list[StructureHandle]:
        """Owned structures of kind with free capacity."""
        return [s for s in self._owned if s.kind is kind and s.free_capacity > 0]

    @cached_property
    def sites_by_tier(self) -> dict[SiteTier, list[ConstructionSiteHandle]]:
        tiers: dict[SiteTier, list[ConstructionSiteHandle]] = {tier: [] for tier in SiteTier}
        for site in self._world.construction_sites():
            tiers[site_tier(site.kind)].append(site)
        return tiers

    @cached_property
    def repair_candidates(self) -> list[StructureHandle]:
        """Structures under half health, weakest first, walls win ties."""
        candidates = [
            s for s in self._all if is_repairable(s.kind) and s.hits < s.hits_max // 2
        ]
        candidates.sort(key=lambda s: (s.hits, 0 if is_wall_type(s.kind) else 1))
        return candidates

    @cached_property
    def controller(self) -> StructureHandle | None:
        return next((s for s in self._all if s.kind is StructureKind.CONTROLLER), None)

    @cached_property
    def containers(self) -> list[StructureHandle]:
        return [s for s in self._all if s.kind is StructureKind.CONTAINER]

    @cached_property
    def ground(self) -> list[GroundResourceHandle]:
        return self._world.ground_resources()

    @cached_property
    def active_nodes(self) -> list[ResourceNodeHandle]:
        return self._world.active_resource_nodes()


def best_fit(candidates: Iterable[StructureHandle]) -> StructureHandle | None:
    """Pick the structure with the least free capacity (best fit)."""
    return min(candidates, key=lambda s: s.free_capacity, default=None)


class TaskAssigner:
    """Assigns new tasks to agents absent from the store.

    Args:
        world: Snapshot accessors for the current tick.
        gateway: Command surface (culling and road vacating only).
        store: Assignment store, filled in place.
    """

    def __init__(
        self,
        world: WorldQuery,
        gateway: ActionGateway,
        store: AssignmentStore,
    ):
        self._world = world
        self._gateway = gateway
        self._store = store

    def run(self) -> PassResult:
        """Assign every idle agent, in the host's enumeration order.

        Returns:
            PassResult listing new assignments and culled agents.
        """
        result = PassResult()
        agents = self._world.agents()
        live = frozenset(agent.name for agent in agents)
        view = _RoomView(self._world)

        for agent in agents:
            if agent.name in self._store:
                continue
            logger.info("%s: assigning", agent.name)

            if agent.carried > 0:
                assignment = self._choose_delivery(agent, view, live)
            else:
                assignment = self._choose_gathering(agent, view, live)
                if assignment is None and not agent.has(Capability.CARRY):
                    self._cull(agent, result)
                    continue

            if assignment is not None:
                self._store.set(agent.name, assignment)
                result.assigned[agent.name] = assignment
            elif agent.carried == 0:
                if self._vacate_road(agent):
                    result.commands += 1
        return result

    def _choose_delivery(
        self, agent: AgentHandle, view: _RoomView, live: Collection[str]
    ) -> Assignment | None:
        deposit_held = self._store.any_holds(AssignmentKind.DEPOSIT)
        for kind in DEPOSIT_ORDER:
            target = best_fit(view.fillable(kind))
            if target is not None and not deposit_held:
                return Deposit(target.pos)

        construct_held = self._store.any_holds(AssignmentKind.CONSTRUCT)
        for tier in SiteTier:
            site = min(view.sites_by_tier[tier], key=lambda s: s.remaining, default=None)
            if site is None or construct_held:
                continue
            # Redundant for agents enumerated from the live population.
            if tier is SiteTier.DEFENSIVE and agent.name not in live:
                continue
            return Construct(site.pos)

        if view.repair_candidates and not self._store.any_holds(AssignmentKind.REPAIR, live):
            return Repair(view.repair_candidates[0].pos)

        if view.controller is not None:
            return Upgrade(view.controller.id)
        return None

    def _choose_gathering(
        self, agent: AgentHandle, view: _RoomView, live: Collection[str]
    ) -> Assignment | None:
        if agent.has(Capability.CARRY):
            capacity = agent.store.capacity
            container = max(
                (c for c in view.containers if c.energy >= capacity),
                key=lambda c: c.energy,
                default=None,
            )
            if container is not None:
                return Withdraw(container.id)
            pile = max(
                (g for g in view.ground if g.amount >= capacity),
                key=lambda g: g.amount,
                default=None,
            )
            if pile is not None:
                return Pickup(pile.pos)
            return None

        for node in view.active_nodes:
            if not self._store.has_claim(Harvest(node.id), live):
                return Harvest(node.id)
        return None

    def _cull(self, agent: AgentHandle, result: PassResult) -> None:
        """Self-terminate a surplus gatherer with no node left to work."""
        logger.info("%s: no unclaimed resource node, self-terminating", agent.name)
        status = self._gateway.suicide(agent)
        if status.rejected:
            logger.warning("%s: couldn't self-terminate: %s", agent.name, status.value)
            return
        result.culled.append(agent.name)
        result.commands += 1

    def _on_road(self, pos: Position) -> bool:
        return any(
            isinstance(s, StructureHandle) and s.kind is StructureKind.ROAD
            for s in self._world.look_at(pos, LookKind.STRUCTURES)
        )

    def _vacate_road(self, agent: AgentHandle) -> bool:
        """Step an idle agent off a road onto the first road-free neighbour.

        Returns:
            True if a move was issued.
        """
        if not self._on_road(agent.pos):
            return False
        for tile in agent.pos.neighbors(self._world.size):
            if not self._on_road(tile):
                self._gateway.move_to(agent, tile)
                return True
        return False
