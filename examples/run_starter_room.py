"""Run the starter room for a few hundred ticks and print a summary.

Usage:
    python examples/run_starter_room.py
    python examples/run_starter_room.py --ticks 500 --log-level DEBUG
"""

from __future__ import annotations

import argparse
from pathlib import Path

from colonytasks import ColonyLoop, ColonySettings, InMemoryHistoryStore, load_scenario
from colonytasks.log import setup_logging

SCENARIO = Path(__file__).with_name("starter_room.json")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--ticks", type=int, default=300)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    settings = ColonySettings(log_level=args.log_level)
    setup_logging(settings.log_level)

    room = load_scenario(SCENARIO)
    history = InMemoryHistoryStore(max_ticks=args.ticks or 1)
    loop = ColonyLoop(room, room, settings=settings, history=history)
    loop.run(args.ticks, on_tick_end=room.advance)

    events = history.get_events(0, room.time)
    print(f"Ran {args.ticks} ticks, now at tick {room.time}")
    print(f"Agents alive: {', '.join(a.name for a in room.agents()) or 'none'}")
    print(f"Energy in spawns and extensions: {room.energy_available()}")
    for event_type in ("assign", "drop", "cull", "spawn", "prune"):
        count = sum(1 for e in events if e["type"] == event_type)
        print(f"  {event_type:<7}{count}")
    print("Current assignments:")
    for name, assignment in loop.store.items():
        print(f"  {name}: {assignment}")


if __name__ == "__main__":
    main()
