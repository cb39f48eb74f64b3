"""Mutable object records held by the simulated room.

Records never leave the simulator; callers only ever see handles built
from them for the current tick.
"""

from __future__ import annotations

from dataclasses import dataclass

from colonytasks.core.identity import ObjectId, Position
from colonytasks.core.kinds import Capability, StructureKind

CARRY_CAPACITY = 50
AGENT_HITS_PER_PART = 100

# kind -> (hits_max, energy_capacity or None when the kind has no store)
STRUCTURE_DEFAULTS: dict[StructureKind, tuple[int, int | None]] = {
    StructureKind.SPAWN: (5000, 300),
    StructureKind.EXTENSION: (1000, 50),
    StructureKind.TOWER: (3000, 1000),
    StructureKind.CONTAINER: (250_000, 2000),
    StructureKind.STORAGE: (10_000, 1_000_000),
    StructureKind.ROAD: (5000, None),
    StructureKind.WALL: (1_000_000, None),
    StructureKind.RAMPART: (300_000, None),
    StructureKind.CONTROLLER: (0, None),
}

NEUTRAL_KINDS = frozenset({StructureKind.CONTAINER, StructureKind.ROAD, StructureKind.WALL})

# Work needed to finish a site of each kind.
BUILD_COST: dict[StructureKind, int] = {
    StructureKind.SPAWN: 15000,
    StructureKind.EXTENSION: 3000,
    StructureKind.TOWER: 5000,
    StructureKind.CONTAINER: 5000,
    StructureKind.STORAGE: 30000,
    StructureKind.ROAD: 300,
    StructureKind.WALL: 1,
    StructureKind.RAMPART: 1,
}


@dataclass(slots=True)
class AgentRecord:
    id: ObjectId
    name: str
    pos: Position
    body: tuple[Capability, ...]
    energy: int
    hits: int
    hits_max: int
    spawning_ticks: int = 0
    spawned_by: ObjectId | None = None

    @property
    def capacity(self) -> int:
        return CARRY_CAPACITY * self.body.count(Capability.CARRY)

    @property
    def free(self) -> int:
        return max(self.capacity - self.energy, 0)

    def parts(self, capability: Capability) -> int:
        return self.body.count(capability)


@dataclass(slots=True)
class StructureRecord:
    id: ObjectId
    kind: StructureKind
    pos: Position
    hits: int
    hits_max: int
    energy: int | None
    energy_capacity: int
    owned: bool
    progress: int = 0  # controller upgrade progress

    @property
    def free(self) -> int:
        if self.energy is None:
            return 0
        return max(self.energy_capacity - self.energy, 0)


@dataclass(slots=True)
class SiteRecord:
    id: ObjectId
    kind: StructureKind
    pos: Position
    progress: int
    progress_total: int


@dataclass(slots=True)
class NodeRecord:
    id: ObjectId
    pos: Position
    energy: int
    energy_capacity: int


@dataclass(slots=True)
class PileRecord:
    id: ObjectId
    pos: Position
    amount: int


@dataclass(slots=True)
class HostileRecord:
    id: ObjectId
    pos: Position
    hits: int
    hits_max: int
