"""Per-tick world object handles.

Handles are immutable snapshots stamped with the tick they were fetched on.
They must not be cached across ticks: persist ``handle.id`` or
``handle.pos`` and resolve again next tick. Hosts reject stale handles.
"""

from __future__ import annotations

from dataclasses import dataclass

from colonytasks.core.identity import ObjectId, Position
from colonytasks.core.kinds import Capability, StructureKind


@dataclass(frozen=True, slots=True)
class Store:
    """Energy held by an agent or structure."""

    used: int = 0
    capacity: int = 0

    @property
    def free(self) -> int:
        return max(self.capacity - self.used, 0)


@dataclass(frozen=True, slots=True)
class AgentHandle:
    """A controlled worker as seen on one tick."""

    id: ObjectId
    name: str
    pos: Position
    store: Store
    body: tuple[Capability, ...]
    hits: int
    hits_max: int
    spawning: bool
    tick: int

    def has(self, capability: Capability) -> bool:
        return capability in self.body

    @property
    def carried(self) -> int:
        return self.store.used

    @property
    def free_capacity(self) -> int:
        return self.store.free


@dataclass(frozen=True, slots=True)
class StructureHandle:
    id: ObjectId
    kind: StructureKind
    pos: Position
    hits: int
    hits_max: int
    store: Store | None
    owned: bool
    tick: int

    @property
    def damaged(self) -> bool:
        return self.hits < self.hits_max

    @property
    def energy(self) -> int:
        return self.store.used if self.store else 0

    @property
    def free_capacity(self) -> int:
        return self.store.free if self.store else 0


@dataclass(frozen=True, slots=True)
class ConstructionSiteHandle:
    id: ObjectId
    kind: StructureKind
    pos: Position
    progress: int
    progress_total: int
    tick: int

    @property
    def remaining(self) -> int:
        """Work left before the site turns into a structure."""
        return self.progress_total - self.progress


@dataclass(frozen=True, slots=True)
class ResourceNodeHandle:
    id: ObjectId
    pos: Position
    energy: int
    energy_capacity: int
    tick: int

    @property
    def active(self) -> bool:
        return self.energy > 0


@dataclass(frozen=True, slots=True)
class GroundResourceHandle:
    """Energy lying on a tile."""

    id: ObjectId
    pos: Position
    amount: int
    tick: int


@dataclass(frozen=True, slots=True)
class HostileHandle:
    id: ObjectId
    pos: Position
    hits: int
    hits_max: int
    tick: int


Handle = (
    AgentHandle
    | StructureHandle
    | ConstructionSiteHandle
    | ResourceNodeHandle
    | GroundResourceHandle
    | HostileHandle
)
