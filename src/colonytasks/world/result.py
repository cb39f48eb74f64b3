"""Command outcomes and drop reasons.

Usage:
    status = gateway.harvest(agent, node)
    if status is ActionStatus.NOT_IN_RANGE:
        gateway.move_to(agent, node.pos)
"""

from __future__ import annotations

from enum import Enum


class ActionStatus(Enum):
    """Result of an ActionGateway command.

    Failures are plain values. Only OK and NOT_IN_RANGE let an assignment
    survive; every other failure is a rejection.
    """

    OK = "ok"
    NOT_IN_RANGE = "not_in_range"
    FORBIDDEN = "forbidden"
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    OTHER = "other"

    @property
    def ok(self) -> bool:
        return self is ActionStatus.OK

    @property
    def rejected(self) -> bool:
        """True for failures that terminate an assignment."""
        return self not in (ActionStatus.OK, ActionStatus.NOT_IN_RANGE)


class DropReason(Enum):
    """Why the executor removed an assignment."""

    GUARD = "guard"  # carried/free energy precondition failed
    UNRESOLVABLE = "unresolvable"  # id no longer resolves this tick
    TARGET_ABSENT = "target_absent"  # nothing suitable at the recorded position
    REJECTED = "rejected"  # engine refused the command
