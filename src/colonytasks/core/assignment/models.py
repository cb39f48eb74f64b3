"""Assignment models: a tagged union of task descriptors.

Position-keyed variants re-derive their target by looking at the tile each
tick. Id-keyed variants re-resolve the object by id each tick. Neither ever
holds a world handle.

Usage:
    store.set("harvester-1", Harvest(ObjectId("node-1")))

    match assignment:
        case Harvest(node_id=node_id):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from colonytasks.core.identity import ObjectId, Position


class AssignmentKind(Enum):
    """Discriminant of the Assignment union, used for exclusivity checks."""

    CONSTRUCT = "construct"
    PICKUP = "pickup"
    REPAIR = "repair"
    DEPOSIT = "deposit"
    HARVEST = "harvest"
    UPGRADE = "upgrade"
    WITHDRAW = "withdraw"


@dataclass(frozen=True, slots=True)
class Construct:
    """Build the site at pos, or keep reinforcing the wall it became."""

    pos: Position


@dataclass(frozen=True, slots=True)
class Pickup:
    """Pick up the ground resource lying at pos."""

    pos: Position


@dataclass(frozen=True, slots=True)
class Repair:
    """Repair the damaged structure at pos."""

    pos: Position


@dataclass(frozen=True, slots=True)
class Deposit:
    """Transfer carried energy into the delivery point at pos."""

    pos: Position


@dataclass(frozen=True, slots=True)
class Harvest:
    node_id: ObjectId


@dataclass(frozen=True, slots=True)
class Upgrade:
    controller_id: ObjectId


@dataclass(frozen=True, slots=True)
class Withdraw:
    container_id: ObjectId


Assignment = Construct | Pickup | Repair | Deposit | Harvest | Upgrade | Withdraw


def kind_of(assignment: Assignment) -> AssignmentKind:
    """Get the discriminant of an assignment.

    Args:
        assignment: Any Assignment variant.

    Returns:
        Matching AssignmentKind.
    """
    match assignment:
        case Construct():
            return AssignmentKind.CONSTRUCT
        case Pickup():
            return AssignmentKind.PICKUP
        case Repair():
            return AssignmentKind.REPAIR
        case Deposit():
            return AssignmentKind.DEPOSIT
        case Harvest():
            return AssignmentKind.HARVEST
        case Upgrade():
            return AssignmentKind.UPGRADE
        case Withdraw():
            return AssignmentKind.WITHDRAW
        case _:
            assert_never(assignment)


def describe(assignment: Assignment) -> str:
    """Short human-readable target of an assignment: a tile or an object id."""
    match assignment:
        case Construct(pos=pos) | Pickup(pos=pos) | Repair(pos=pos) | Deposit(pos=pos):
            return str(pos)
        case Harvest(node_id=object_id) | Upgrade(controller_id=object_id) | Withdraw(
            container_id=object_id
        ):
            return str(object_id)
        case _:
            assert_never(assignment)
