"""Command line entry point.

Usage:
    colonytasks run examples/starter_room.json --ticks 200
    colonytasks run room.json --ticks 50 --log-level DEBUG --history
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from colonytasks import __version__
from colonytasks.config import ColonySettings
from colonytasks.errors import ScenarioError
from colonytasks.log import setup_logging
from colonytasks.scheduling import ColonyLoop
from colonytasks.sim import load_scenario
from colonytasks.storage import LocalAssignmentStore
from colonytasks.tracing import InMemoryHistoryStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colonytasks", description="Run the colony task loop against a simulated room"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Run a scenario for a number of ticks")
    run.add_argument("scenario", help="Path to a scenario JSON file")
    run.add_argument("--ticks", type=int, default=100, help="Ticks to run (default: 100)")
    run.add_argument("--log-level", default=None, help="Override COLONY_LOG_LEVEL")
    run.add_argument(
        "--history",
        action="store_true",
        help="Print the recorded tick history as JSON lines when done",
    )
    return parser


def run_scenario(args: argparse.Namespace) -> int:
    try:
        overrides = {"log_level": args.log_level} if args.log_level else {}
        settings = ColonySettings(**overrides)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.ticks < 0:
        print("error: --ticks must be non-negative", file=sys.stderr)
        return 2

    setup_logging(settings.log_level)
    try:
        room = load_scenario(args.scenario)
    except ScenarioError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    history = InMemoryHistoryStore(settings.history_size) if settings.history_size else None
    loop = ColonyLoop(room, room, LocalAssignmentStore(), settings=settings, history=history)

    def report() -> None:
        record = loop.last_record
        if record is not None:
            print(
                f"tick {record.tick}: {len(room.agents())} agents, "
                f"{len(record.assignments)} assigned, "
                f"{record.count('drop')} dropped, {record.count('spawn')} spawned"
            )
        room.advance()

    loop.run(args.ticks, on_tick_end=report)

    if args.history and history is not None:
        first_last = history.get_tick_range()
        if first_last is not None:
            for tick in range(first_last[0], first_last[1] + 1):
                record = history.get_tick(tick)
                if record is not None:
                    print(json.dumps(record.to_dict()))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "run":
        return run_scenario(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
