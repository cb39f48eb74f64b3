"""Host-facing interfaces: handles, query and command protocols, outcomes.

Architecture Note:
    world/ only describes the host engine. The engine itself is external;
    colonytasks.sim provides an in-memory one for tests and demos.
"""

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
from colonytasks.world.protocol import ActionGateway, WorldQuery
from colonytasks.world.result import ActionStatus, DropReason

__all__ = [
    "ActionGateway",
    "WorldQuery",
    "ActionStatus",
    "DropReason",
    "Handle",
    "AgentHandle",
    "StructureHandle",
    "ConstructionSiteHandle",
    "ResourceNodeHandle",
    "GroundResourceHandle",
    "HostileHandle",
    "Store",
]
