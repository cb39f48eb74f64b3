"""colonytasks: tick-based task assignment for a colony of worker agents.

Usage:
    from colonytasks import ColonyLoop, LocalAssignmentStore, load_scenario

    room = load_scenario("examples/starter_room.json")
    store = LocalAssignmentStore()
    loop = ColonyLoop(room, room, store)

    # Each tick: finish or drop current assignments, then hand out new ones
    loop.run(100, on_tick_end=room.advance)
"""

__version__ = "0.1.0"

# Core primitives
from colonytasks.config import ColonySettings
from colonytasks.core import (
    Assignment,
    AssignmentKind,
    Capability,
    Construct,
    Deposit,
    Harvest,
    LookKind,
    ObjectId,
    Pickup,
    Position,
    Repair,
    StructureKind,
    Upgrade,
    Withdraw,
)
from colonytasks.errors import ColonyError, ScenarioError, StaleHandleError, UnknownObjectError

# Scheduling
from colonytasks.scheduling import ColonyLoop, Spawner, TowerController, prune_dead_agents

# Simulator
from colonytasks.sim import SimRoom, load_scenario

# Storage
from colonytasks.storage import AssignmentStore, LocalAssignmentStore

# Tasks
from colonytasks.tasks import PassResult, TaskAssigner, TaskExecutor

# Tracing
from colonytasks.tracing import HistoryStore, InMemoryHistoryStore, TickRecord

# Host interfaces
from colonytasks.world import ActionGateway, ActionStatus, DropReason, WorldQuery

__all__ = [
    "__version__",
    # Core
    "Assignment",
    "AssignmentKind",
    "Capability",
    "Construct",
    "Deposit",
    "Harvest",
    "LookKind",
    "ObjectId",
    "Pickup",
    "Position",
    "Repair",
    "StructureKind",
    "Upgrade",
    "Withdraw",
    # Errors
    "ColonyError",
    "ScenarioError",
    "StaleHandleError",
    "UnknownObjectError",
    # Config
    "ColonySettings",
    # Scheduling
    "ColonyLoop",
    "Spawner",
    "TowerController",
    "prune_dead_agents",
    # Simulator
    "SimRoom",
    "load_scenario",
    # Storage
    "AssignmentStore",
    "LocalAssignmentStore",
    # Tasks
    "PassResult",
    "TaskAssigner",
    "TaskExecutor",
    # Tracing
    "HistoryStore",
    "InMemoryHistoryStore",
    "TickRecord",
    # World
    "ActionGateway",
    "ActionStatus",
    "DropReason",
    "WorldQuery",
]
