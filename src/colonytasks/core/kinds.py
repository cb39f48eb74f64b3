"""Closed kind enumerations and their exhaustive classifications.

Every helper here matches over the full enum and ends in ``assert_never``,
so adding a member is flagged by the type checker at each dispatch site.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import assert_never


class Capability(Enum):
    """Body part an agent is composed of."""

    MOVE = auto()
    WORK = auto()
    CARRY = auto()


class StructureKind(Enum):
    """Kind of a built structure (or of the structure a site will become)."""

    SPAWN = auto()
    EXTENSION = auto()
    TOWER = auto()
    CONTAINER = auto()
    ROAD = auto()
    WALL = auto()
    RAMPART = auto()
    CONTROLLER = auto()
    STORAGE = auto()


class LookKind(Enum):
    """Object category for spatial queries."""

    AGENTS = auto()
    STRUCTURES = auto()
    CONSTRUCTION_SITES = auto()
    RESOURCE_NODES = auto()
    GROUND_RESOURCES = auto()
    HOSTILES = auto()


class SiteTier(int, Enum):
    """Construction priority tier; lower builds first."""

    DEFENSIVE = 0
    DELIVERY_CONTAINER = 1
    EXTENSION = 2
    OTHER = 3


def accepts_delivery(kind: StructureKind) -> bool:
    """Whether a Deposit may target this kind of structure."""
    match kind:
        case StructureKind.EXTENSION | StructureKind.SPAWN | StructureKind.TOWER:
            return True
        case (
            StructureKind.CONTAINER
            | StructureKind.ROAD
            | StructureKind.WALL
            | StructureKind.RAMPART
            | StructureKind.CONTROLLER
            | StructureKind.STORAGE
        ):
            return False
        case _:
            assert_never(kind)


def is_wall_type(kind: StructureKind) -> bool:
    """Whether the kind is a defensive wall (walls and ramparts)."""
    match kind:
        case StructureKind.WALL | StructureKind.RAMPART:
            return True
        case (
            StructureKind.SPAWN
            | StructureKind.EXTENSION
            | StructureKind.TOWER
            | StructureKind.CONTAINER
            | StructureKind.ROAD
            | StructureKind.CONTROLLER
            | StructureKind.STORAGE
        ):
            return False
        case _:
            assert_never(kind)


def is_repairable(kind: StructureKind) -> bool:
    """Whether the kind has hit points that can be restored."""
    match kind:
        case StructureKind.CONTROLLER:
            return False
        case (
            StructureKind.SPAWN
            | StructureKind.EXTENSION
            | StructureKind.TOWER
            | StructureKind.CONTAINER
            | StructureKind.ROAD
            | StructureKind.WALL
            | StructureKind.RAMPART
            | StructureKind.STORAGE
        ):
            return True
        case _:
            assert_never(kind)


def site_tier(kind: StructureKind) -> SiteTier:
    """Construction tier for a site that will become a structure of this kind."""
    match kind:
        case StructureKind.WALL | StructureKind.RAMPART | StructureKind.TOWER:
            return SiteTier.DEFENSIVE
        case StructureKind.CONTAINER:
            return SiteTier.DELIVERY_CONTAINER
        case StructureKind.EXTENSION:
            return SiteTier.EXTENSION
        case (
            StructureKind.SPAWN
            | StructureKind.ROAD
            | StructureKind.CONTROLLER
            | StructureKind.STORAGE
        ):
            return SiteTier.OTHER
        case _:
            assert_never(kind)
