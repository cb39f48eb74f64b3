"""Deterministic in-memory room for running the colony without a game host.

Usage:
    from colonytasks.sim import load_scenario

    room = load_scenario("examples/starter_room.json")
    loop = ColonyLoop(room, room)
    loop.run(100, on_tick_end=room.advance)
"""

from colonytasks.sim.room import SimRoom
from colonytasks.sim.scenario import Scenario, load_scenario, parse_scenario

__all__ = [
    "SimRoom",
    "Scenario",
    "load_scenario",
    "parse_scenario",
]
