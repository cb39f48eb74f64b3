"""Deterministic in-memory room implementing WorldQuery and ActionGateway.

The room applies commands immediately and hands out immutable handles
stamped with the current tick. Handles from an earlier tick are refused
with StaleHandleError. Movement is a single straight step toward the
target; there is no pathfinding.

Usage:
    room = SimRoom()
    room.add_node(Position(10, 10))
    room.add_agent("h1", Position(12, 10), body=(Capability.MOVE, Capability.WORK))

    loop = ColonyLoop(room, room, LocalAssignmentStore())
    loop.run(50, on_tick_end=room.advance)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar, assert_never

from colonytasks.core.identity import ROOM_SIZE, ObjectId, Position
from colonytasks.core.kinds import Capability, LookKind, StructureKind, is_repairable
from colonytasks.errors import StaleHandleError, UnknownObjectError
from colonytasks.scheduling.spawner import body_cost
from colonytasks.sim.records import (
    AGENT_HITS_PER_PART,
    BUILD_COST,
    NEUTRAL_KINDS,
    STRUCTURE_DEFAULTS,
    AgentRecord,
    HostileRecord,
    NodeRecord,
    PileRecord,
    SiteRecord,
    StructureRecord,
)
from colonytasks.world.handles import (
    AgentHandle,
    ConstructionSiteHandle,
    GroundResourceHandle,
    Handle,
    HostileHandle,
    ResourceNodeHandle,
    Store,
    StructureHandle,
)
from colonytasks.world.result import ActionStatus

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=Handle)

HARVEST_PER_WORK = 2
BUILD_PER_WORK = 5
REPAIR_PER_WORK = 100
UPGRADE_PER_WORK = 1
WORK_RANGE = 3
SPAWN_TICKS_PER_PART = 3
TOWER_ENERGY_PER_ACTION = 10
TOWER_ATTACK = 300
TOWER_HEAL = 200
TOWER_REPAIR = 800


class SimRoom:
    """A single simulated room.

    Args:
        size: Room edge length in tiles.
        tick: Starting tick number.
        regen_interval: Resource nodes refill every this many ticks.
    """

    def __init__(self, size: int = ROOM_SIZE, tick: int = 0, regen_interval: int = 300):
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        if regen_interval <= 0:
            raise ValueError(f"regen_interval must be positive, got {regen_interval}")
        self.size = size
        self._time = tick
        self._regen_interval = regen_interval
        self._ids = itertools.count(1)
        self._known: set[ObjectId] = set()

        self._agents: dict[ObjectId, AgentRecord] = {}
        self._structures: dict[ObjectId, StructureRecord] = {}
        self._sites: dict[ObjectId, SiteRecord] = {}
        self._nodes: dict[ObjectId, NodeRecord] = {}
        self._piles: dict[ObjectId, PileRecord] = {}
        self._hostiles: dict[ObjectId, HostileRecord] = {}

    # --- population setup ---

    def _new_id(self, prefix: str) -> ObjectId:
        object_id = ObjectId(f"{prefix}-{next(self._ids)}")
        self._known.add(object_id)
        return object_id

    def _check_pos(self, pos: Position) -> None:
        if not pos.in_bounds(self.size):
            raise ValueError(f"Position {pos} outside a {self.size}x{self.size} room")

    def add_agent(
        self,
        name: str,
        pos: Position,
        body: Sequence[Capability],
        energy: int = 0,
        hits: int | None = None,
        spawning: int = 0,
    ) -> ObjectId:
        """Place a controlled agent.

        Raises:
            ValueError: If the name is taken, the body is empty, or energy
                exceeds the carry capacity.
        """
        self._check_pos(pos)
        if self.agent_named(name) is not None:
            raise ValueError(f"Agent name {name!r} already in use")
        if not body:
            raise ValueError("Agent body must have at least one part")
        hits_max = AGENT_HITS_PER_PART * len(body)
        record = AgentRecord(
            id=self._new_id("agent"),
            name=name,
            pos=pos,
            body=tuple(body),
            energy=energy,
            hits=hits_max if hits is None else hits,
            hits_max=hits_max,
            spawning_ticks=spawning,
        )
        if energy > record.capacity:
            raise ValueError(f"Agent {name!r} cannot carry {energy} energy")
        self._agents[record.id] = record
        return record.id

    def add_structure(
        self,
        kind: StructureKind,
        pos: Position,
        hits: int | None = None,
        hits_max: int | None = None,
        energy: int | None = None,
        energy_capacity: int | None = None,
        owned: bool | None = None,
    ) -> ObjectId:
        """Place a structure, filling unspecified fields from kind defaults."""
        self._check_pos(pos)
        default_hits, default_capacity = STRUCTURE_DEFAULTS[kind]
        capacity = energy_capacity if energy_capacity is not None else default_capacity
        max_hits = default_hits if hits_max is None else hits_max
        record = StructureRecord(
            id=self._new_id(kind.name.lower()),
            kind=kind,
            pos=pos,
            hits=max_hits if hits is None else hits,
            hits_max=max_hits,
            energy=None if capacity is None else (energy or 0),
            energy_capacity=capacity or 0,
            owned=kind not in NEUTRAL_KINDS if owned is None else owned,
        )
        self._structures[record.id] = record
        return record.id

    def add_site(
        self,
        kind: StructureKind,
        pos: Position,
        progress: int = 0,
        progress_total: int | None = None,
    ) -> ObjectId:
        """Place a construction site for a structure of kind."""
        self._check_pos(pos)
        if kind not in BUILD_COST:
            raise ValueError(f"{kind.name} cannot be built")
        record = SiteRecord(
            id=self._new_id("site"),
            kind=kind,
            pos=pos,
            progress=progress,
            progress_total=BUILD_COST[kind] if progress_total is None else progress_total,
        )
        self._sites[record.id] = record
        return record.id

    def add_node(self, pos: Position, energy: int = 3000, energy_capacity: int = 3000) -> ObjectId:
        self._check_pos(pos)
        record = NodeRecord(
            id=self._new_id("node"), pos=pos, energy=energy, energy_capacity=energy_capacity
        )
        self._nodes[record.id] = record
        return record.id

    def add_pile(self, pos: Position, amount: int) -> ObjectId:
        """Drop energy on a tile, merging with any pile already there."""
        self._check_pos(pos)
        existing = next((p for p in self._piles.values() if p.pos == pos), None)
        if existing is not None:
            existing.amount += amount
            return existing.id
        record = PileRecord(id=self._new_id("pile"), pos=pos, amount=amount)
        self._piles[record.id] = record
        return record.id

    def add_hostile(self, pos: Position, hits: int = 100) -> ObjectId:
        self._check_pos(pos)
        record = HostileRecord(id=self._new_id("hostile"), pos=pos, hits=hits, hits_max=hits)
        self._hostiles[record.id] = record
        return record.id

    def kill(self, name: str) -> None:
        """Remove an agent as if it had died."""
        record = self._agent_record(name)
        del self._agents[record.id]

    # --- tick advancement ---

    def advance(self) -> None:
        """End the current tick and start the next one."""
        self._time += 1
        for agent in self._agents.values():
            if agent.spawning_ticks > 0:
                agent.spawning_ticks -= 1
        if self._time % self._regen_interval == 0:
            for node in self._nodes.values():
                node.energy = node.energy_capacity

    # --- handle construction ---

    def _agent_handle(self, r: AgentRecord) -> AgentHandle:
        return AgentHandle(
            id=r.id,
            name=r.name,
            pos=r.pos,
            store=Store(r.energy, r.capacity),
            body=r.body,
            hits=r.hits,
            hits_max=r.hits_max,
            spawning=r.spawning_ticks > 0,
            tick=self._time,
        )

    def _structure_handle(self, r: StructureRecord) -> StructureHandle:
        store = None if r.energy is None else Store(r.energy, r.energy_capacity)
        return StructureHandle(
            id=r.id,
            kind=r.kind,
            pos=r.pos,
            hits=r.hits,
            hits_max=r.hits_max,
            store=store,
            owned=r.owned,
            tick=self._time,
        )

    def _site_handle(self, r: SiteRecord) -> ConstructionSiteHandle:
        return ConstructionSiteHandle(
            id=r.id,
            kind=r.kind,
            pos=r.pos,
            progress=r.progress,
            progress_total=r.progress_total,
            tick=self._time,
        )

    def _node_handle(self, r: NodeRecord) -> ResourceNodeHandle:
        return ResourceNodeHandle(
            id=r.id, pos=r.pos, energy=r.energy, energy_capacity=r.energy_capacity, tick=self._time
        )

    def _pile_handle(self, r: PileRecord) -> GroundResourceHandle:
        return GroundResourceHandle(id=r.id, pos=r.pos, amount=r.amount, tick=self._time)

    def _hostile_handle(self, r: HostileRecord) -> HostileHandle:
        return HostileHandle(id=r.id, pos=r.pos, hits=r.hits, hits_max=r.hits_max, tick=self._time)

    def _handles(self, kind: LookKind) -> list[Handle]:
        match kind:
            case LookKind.AGENTS:
                return [self._agent_handle(r) for r in self._agents.values()]
            case LookKind.STRUCTURES:
                return [self._structure_handle(r) for r in self._structures.values()]
            case LookKind.CONSTRUCTION_SITES:
                return [self._site_handle(r) for r in self._sites.values()]
            case LookKind.RESOURCE_NODES:
                return [self._node_handle(r) for r in self._nodes.values()]
            case LookKind.GROUND_RESOURCES:
                return [self._pile_handle(r) for r in self._piles.values()]
            case LookKind.HOSTILES:
                return [self._hostile_handle(r) for r in self._hostiles.values()]
            case _:
                assert_never(kind)

    # --- WorldQuery ---

    @property
    def time(self) -> int:
        return self._time

    def resolve(self, object_id: ObjectId, handle_type: type[H]) -> H | None:
        handle: Handle | None = None
        if object_id in self._agents:
            handle = self._agent_handle(self._agents[object_id])
        elif object_id in self._structures:
            handle = self._structure_handle(self._structures[object_id])
        elif object_id in self._sites:
            handle = self._site_handle(self._sites[object_id])
        elif object_id in self._nodes:
            handle = self._node_handle(self._nodes[object_id])
        elif object_id in self._piles:
            handle = self._pile_handle(self._piles[object_id])
        elif object_id in self._hostiles:
            handle = self._hostile_handle(self._hostiles[object_id])
        return handle if isinstance(handle, handle_type) else None

    def agent_named(self, name: str) -> AgentHandle | None:
        """Handle of the live agent with this name, if any."""
        record = next((r for r in self._agents.values() if r.name == name), None)
        return None if record is None else self._agent_handle(record)

    def agents(self) -> list[AgentHandle]:
        return [self._agent_handle(r) for r in self._agents.values()]

    def structures(self) -> list[StructureHandle]:
        return [self._structure_handle(r) for r in self._structures.values()]

    def owned_structures(self) -> list[StructureHandle]:
        return [self._structure_handle(r) for r in self._structures.values() if r.owned]

    def spawns(self) -> list[StructureHandle]:
        return [s for s in self.owned_structures() if s.kind is StructureKind.SPAWN]

    def construction_sites(self) -> list[ConstructionSiteHandle]:
        return [self._site_handle(r) for r in self._sites.values()]

    def active_resource_nodes(self) -> list[ResourceNodeHandle]:
        return [self._node_handle(r) for r in self._nodes.values() if r.energy > 0]

    def ground_resources(self) -> list[GroundResourceHandle]:
        return [self._pile_handle(r) for r in self._piles.values()]

    def hostiles(self) -> list[HostileHandle]:
        return [self._hostile_handle(r) for r in self._hostiles.values()]

    def look_at(self, pos: Position, kind: LookKind) -> list[Handle]:
        return [h for h in self._handles(kind) if h.pos == pos]

    def in_range(self, pos: Position, distance: int, kind: LookKind) -> list[Handle]:
        return [h for h in self._handles(kind) if pos.in_range_to(h.pos, distance)]

    def closest(self, pos: Position, kind: LookKind, within: int | None = None) -> Handle | None:
        candidates: Iterable[Handle] = self._handles(kind)
        if within is not None:
            candidates = (h for h in candidates if pos.in_range_to(h.pos, within))
        return min(candidates, key=lambda h: pos.range_to(h.pos), default=None)

    def _spawn_energy(self) -> list[StructureRecord]:
        return [
            r
            for r in self._structures.values()
            if r.owned and r.kind in (StructureKind.SPAWN, StructureKind.EXTENSION)
        ]

    def energy_available(self) -> int:
        return sum(r.energy or 0 for r in self._spawn_energy())

    def energy_capacity(self) -> int:
        return sum(r.energy_capacity for r in self._spawn_energy())

    # --- command plumbing ---

    def _fresh(self, handle: Handle) -> None:
        if handle.tick != self._time:
            raise StaleHandleError(handle.tick, self._time)

    def _lookup(self, table: dict[ObjectId, Any], handle: Handle) -> Any:
        """Current record behind a handle, or None if it vanished this tick."""
        self._fresh(handle)
        record = table.get(handle.id)
        if record is None and handle.id not in self._known:
            raise UnknownObjectError(f"{handle.id} was never part of this room")
        return record

    def _actor(self, agent: AgentHandle) -> AgentRecord | None:
        record: AgentRecord | None = self._lookup(self._agents, agent)
        if record is None or record.spawning_ticks > 0:
            return None
        return record

    def _agent_record(self, name: str) -> AgentRecord:
        record = next((r for r in self._agents.values() if r.name == name), None)
        if record is None:
            raise UnknownObjectError(f"No live agent named {name!r}")
        return record

    def _store_overflow(self, pos: Position, amount: int) -> None:
        """Put energy that did not fit in an agent into a container or on the ground."""
        container = next(
            (
                r
                for r in self._structures.values()
                if r.kind is StructureKind.CONTAINER and r.pos == pos
            ),
            None,
        )
        if container is not None and container.energy is not None:
            stored = min(amount, container.free)
            container.energy += stored
            amount -= stored
        if amount > 0:
            self.add_pile(pos, amount)

    # --- ActionGateway ---

    def move_to(self, agent: AgentHandle, target: Position) -> ActionStatus:
        actor = self._actor(agent)
        if actor is None:
            return ActionStatus.OTHER
        if actor.parts(Capability.MOVE) == 0:
            return ActionStatus.FORBIDDEN
        step = actor.pos.step_toward(target)
        if step.in_bounds(self.size):
            actor.pos = step
        return ActionStatus.OK

    def harvest(self, agent: AgentHandle, node: ResourceNodeHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: NodeRecord | None = self._lookup(self._nodes, node)
        if actor is None or target is None:
            return ActionStatus.OTHER
        work = actor.parts(Capability.WORK)
        if work == 0:
            return ActionStatus.FORBIDDEN
        if not actor.pos.is_near_to(target.pos):
            return ActionStatus.NOT_IN_RANGE
        if target.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        amount = min(HARVEST_PER_WORK * work, target.energy)
        target.energy -= amount
        kept = min(amount, actor.free)
        actor.energy += kept
        if amount > kept:
            self._store_overflow(actor.pos, amount - kept)
        return ActionStatus.OK

    def build(self, agent: AgentHandle, site: ConstructionSiteHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: SiteRecord | None = self._lookup(self._sites, site)
        if actor is None or target is None:
            return ActionStatus.OTHER
        work = actor.parts(Capability.WORK)
        if work == 0:
            return ActionStatus.FORBIDDEN
        if not actor.pos.in_range_to(target.pos, WORK_RANGE):
            return ActionStatus.NOT_IN_RANGE
        if actor.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        amount = min(BUILD_PER_WORK * work, actor.energy, target.progress_total - target.progress)
        actor.energy -= amount
        target.progress += amount
        if target.progress >= target.progress_total:
            del self._sites[target.id]
            fresh_wall = target.kind in (StructureKind.RAMPART, StructureKind.WALL)
            self.add_structure(target.kind, target.pos, hits=1 if fresh_wall else None)
            logger.debug("site %s finished as %s", target.id, target.kind.name)
        return ActionStatus.OK

    def repair(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: StructureRecord | None = self._lookup(self._structures, structure)
        if actor is None or target is None or not is_repairable(target.kind):
            return ActionStatus.OTHER
        work = actor.parts(Capability.WORK)
        if work == 0:
            return ActionStatus.FORBIDDEN
        if not actor.pos.in_range_to(target.pos, WORK_RANGE):
            return ActionStatus.NOT_IN_RANGE
        if actor.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        if target.hits >= target.hits_max:
            return ActionStatus.OTHER
        spent = min(work, actor.energy)
        actor.energy -= spent
        target.hits = min(target.hits + REPAIR_PER_WORK * spent, target.hits_max)
        return ActionStatus.OK

    def upgrade(self, agent: AgentHandle, controller: StructureHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: StructureRecord | None = self._lookup(self._structures, controller)
        if actor is None or target is None or target.kind is not StructureKind.CONTROLLER:
            return ActionStatus.OTHER
        work = actor.parts(Capability.WORK)
        if work == 0:
            return ActionStatus.FORBIDDEN
        if not actor.pos.in_range_to(target.pos, WORK_RANGE):
            return ActionStatus.NOT_IN_RANGE
        if actor.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        spent = min(UPGRADE_PER_WORK * work, actor.energy)
        actor.energy -= spent
        target.progress += spent
        return ActionStatus.OK

    def transfer(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: StructureRecord | None = self._lookup(self._structures, structure)
        if actor is None or target is None or target.energy is None:
            return ActionStatus.OTHER
        if not actor.pos.is_near_to(target.pos):
            return ActionStatus.NOT_IN_RANGE
        if actor.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        if target.free == 0:
            return ActionStatus.OTHER
        amount = min(actor.energy, target.free)
        actor.energy -= amount
        target.energy += amount
        return ActionStatus.OK

    def withdraw(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: StructureRecord | None = self._lookup(self._structures, structure)
        if actor is None or target is None or target.energy is None:
            return ActionStatus.OTHER
        if not actor.pos.is_near_to(target.pos):
            return ActionStatus.NOT_IN_RANGE
        if target.energy == 0:
            return ActionStatus.INSUFFICIENT_RESOURCE
        if actor.free == 0:
            return ActionStatus.OTHER
        amount = min(target.energy, actor.free)
        target.energy -= amount
        actor.energy += amount
        return ActionStatus.OK

    def pickup(self, agent: AgentHandle, resource: GroundResourceHandle) -> ActionStatus:
        actor = self._actor(agent)
        target: PileRecord | None = self._lookup(self._piles, resource)
        if actor is None or target is None:
            return ActionStatus.OTHER
        if not actor.pos.is_near_to(target.pos):
            return ActionStatus.NOT_IN_RANGE
        if actor.free == 0:
            return ActionStatus.OTHER
        amount = min(target.amount, actor.free)
        actor.energy += amount
        target.amount -= amount
        if target.amount == 0:
            del self._piles[target.id]
        return ActionStatus.OK

    def suicide(self, agent: AgentHandle) -> ActionStatus:
        record: AgentRecord | None = self._lookup(self._agents, agent)
        if record is None:
            return ActionStatus.OTHER
        del self._agents[record.id]
        if record.energy > 0:
            self.add_pile(record.pos, record.energy)
        logger.debug("agent %s terminated", record.name)
        return ActionStatus.OK

    def _tower(self, tower: StructureHandle) -> tuple[StructureRecord | None, ActionStatus]:
        record: StructureRecord | None = self._lookup(self._structures, tower)
        if record is None:
            return None, ActionStatus.OTHER
        if record.kind is not StructureKind.TOWER or not record.owned:
            return None, ActionStatus.FORBIDDEN
        if (record.energy or 0) < TOWER_ENERGY_PER_ACTION:
            return None, ActionStatus.INSUFFICIENT_RESOURCE
        return record, ActionStatus.OK

    def tower_attack(self, tower: StructureHandle, hostile: HostileHandle) -> ActionStatus:
        record, status = self._tower(tower)
        target: HostileRecord | None = self._lookup(self._hostiles, hostile)
        if record is None or target is None:
            return status if record is None else ActionStatus.OTHER
        record.energy = (record.energy or 0) - TOWER_ENERGY_PER_ACTION
        target.hits -= TOWER_ATTACK
        if target.hits <= 0:
            del self._hostiles[target.id]
        return ActionStatus.OK

    def tower_heal(self, tower: StructureHandle, agent: AgentHandle) -> ActionStatus:
        record, status = self._tower(tower)
        target: AgentRecord | None = self._lookup(self._agents, agent)
        if record is None or target is None:
            return status if record is None else ActionStatus.OTHER
        record.energy = (record.energy or 0) - TOWER_ENERGY_PER_ACTION
        target.hits = min(target.hits + TOWER_HEAL, target.hits_max)
        return ActionStatus.OK

    def tower_repair(self, tower: StructureHandle, structure: StructureHandle) -> ActionStatus:
        record, status = self._tower(tower)
        target: StructureRecord | None = self._lookup(self._structures, structure)
        if record is None or target is None:
            return status if record is None else ActionStatus.OTHER
        record.energy = (record.energy or 0) - TOWER_ENERGY_PER_ACTION
        target.hits = min(target.hits + TOWER_REPAIR, target.hits_max)
        return ActionStatus.OK

    def spawn_agent(
        self, spawn: StructureHandle, body: Sequence[Capability], name: str
    ) -> ActionStatus:
        record: StructureRecord | None = self._lookup(self._structures, spawn)
        if record is None:
            return ActionStatus.OTHER
        if record.kind is not StructureKind.SPAWN or not record.owned:
            return ActionStatus.FORBIDDEN
        if not body or self.agent_named(name) is not None:
            return ActionStatus.OTHER
        if any(a.spawned_by == record.id and a.spawning_ticks > 0 for a in self._agents.values()):
            return ActionStatus.OTHER
        cost = body_cost(body)
        if cost > self.energy_available():
            return ActionStatus.INSUFFICIENT_RESOURCE

        # Draw from the spawn first, then extensions.
        sources = sorted(self._spawn_energy(), key=lambda r: r.kind is not StructureKind.SPAWN)
        remaining = cost
        for source in sources:
            taken = min(source.energy or 0, remaining)
            source.energy = (source.energy or 0) - taken
            remaining -= taken
            if remaining == 0:
                break

        agent_id = self.add_agent(
            name, record.pos, body, spawning=SPAWN_TICKS_PER_PART * len(body)
        )
        self._agents[agent_id].spawned_by = record.id
        logger.debug("spawn %s started %s", record.id, name)
        return ActionStatus.OK
