"""Assignment functionality: the persisted per-agent task descriptors."""

from colonytasks.core.assignment.models import (
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

__all__ = [
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
