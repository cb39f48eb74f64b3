"""Core functionalities: stateless primitives and closed type sets.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state.
    For stateful services, see world/, storage/, tasks/ and scheduling/.
"""

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
    describe,
    kind_of,
)
from colonytasks.core.identity import ROOM_SIZE, ObjectId, Position
from colonytasks.core.kinds import (
    Capability,
    LookKind,
    SiteTier,
    StructureKind,
    accepts_delivery,
    is_repairable,
    is_wall_type,
    site_tier,
)

__all__ = [
    # Identity
    "ObjectId",
    "Position",
    "ROOM_SIZE",
    # Kinds
    "Capability",
    "StructureKind",
    "LookKind",
    "SiteTier",
    "accepts_delivery",
    "is_repairable",
    "is_wall_type",
    "site_tier",
    # Assignment
    "Assignment",
    "AssignmentKind",
    "Construct",
    "Deposit",
    "Harvest",
    "Pickup",
    "Repair",
    "Upgrade",
    "Withdraw",
    "describe",
    "kind_of",
]
