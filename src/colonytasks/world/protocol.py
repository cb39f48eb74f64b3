"""Protocols for the host engine the colony runs against.

WorldQuery answers synchronous reads against the current tick. ActionGateway
issues per-object commands and reports the outcome as an ActionStatus value.
A host typically implements both on one object (see ``colonytasks.sim``).

Usage:
    node = world.resolve(node_id, ResourceNodeHandle)
    if node is None:
        ...  # gone this tick: drop the assignment
    status = gateway.harvest(agent, node)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

from colonytasks.core.identity import ObjectId, Position
from colonytasks.core.kinds import Capability, LookKind
from colonytasks.world.handles import (
    AgentHandle,
    ConstructionSiteHandle,
    GroundResourceHandle,
    Handle,
    HostileHandle,
    ResourceNodeHandle,
    StructureHandle,
)
from colonytasks.world.result import ActionStatus

H = TypeVar("H", bound=Handle)


@runtime_checkable
class WorldQuery(Protocol):
    """Per-tick snapshot accessors.

    Every handle returned is valid only for the current tick.
    """

    @property
    def time(self) -> int:
        """Current tick number."""
        ...

    @property
    def size(self) -> int:
        """Room edge length in tiles."""
        ...

    def resolve(self, object_id: ObjectId, handle_type: type[H]) -> H | None:
        """Resolve an id to a fresh handle.

        Returns:
            The handle, or None when the object is gone or is not of
            handle_type.
        """
        ...

    def agents(self) -> list[AgentHandle]:
        """All controlled agents alive this tick (spawning ones included)."""
        ...

    def structures(self) -> list[StructureHandle]:
        """All structures in the room, owned or neutral."""
        ...

    def owned_structures(self) -> list[StructureHandle]: ...

    def spawns(self) -> list[StructureHandle]: ...

    def construction_sites(self) -> list[ConstructionSiteHandle]: ...

    def active_resource_nodes(self) -> list[ResourceNodeHandle]:
        """Resource nodes that currently hold energy."""
        ...

    def ground_resources(self) -> list[GroundResourceHandle]: ...

    def hostiles(self) -> list[HostileHandle]: ...

    def look_at(self, pos: Position, kind: LookKind) -> Sequence[Handle]:
        """Everything of kind lying exactly at pos."""
        ...

    def in_range(self, pos: Position, distance: int, kind: LookKind) -> Sequence[Handle]:
        """Everything of kind within distance tiles of pos."""
        ...

    def closest(self, pos: Position, kind: LookKind, within: int | None = None) -> Handle | None:
        """Closest object of kind to pos, optionally bounded by range."""
        ...

    def energy_available(self) -> int:
        """Energy stored in spawns and extensions, usable for spawning."""
        ...

    def energy_capacity(self) -> int: ...


@runtime_checkable
class ActionGateway(Protocol):
    """Imperative commands. Each returns an ActionStatus, never raises for
    game-level failures."""

    def move_to(self, agent: AgentHandle, target: Position) -> ActionStatus: ...

    def harvest(self, agent: AgentHandle, node: ResourceNodeHandle) -> ActionStatus: ...

    def build(self, agent: AgentHandle, site: ConstructionSiteHandle) -> ActionStatus: ...

    def repair(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus: ...

    def upgrade(self, agent: AgentHandle, controller: StructureHandle) -> ActionStatus: ...

    def transfer(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus: ...

    def withdraw(self, agent: AgentHandle, structure: StructureHandle) -> ActionStatus: ...

    def pickup(self, agent: AgentHandle, resource: GroundResourceHandle) -> ActionStatus: ...

    def suicide(self, agent: AgentHandle) -> ActionStatus: ...

    def tower_attack(self, tower: StructureHandle, hostile: HostileHandle) -> ActionStatus: ...

    def tower_heal(self, tower: StructureHandle, agent: AgentHandle) -> ActionStatus: ...

    def tower_repair(self, tower: StructureHandle, structure: StructureHandle) -> ActionStatus: ...

    def spawn_agent(
        self, spawn: StructureHandle, body: Sequence[Capability], name: str
    ) -> ActionStatus: ...
