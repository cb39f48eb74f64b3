"""Tests for scenario parsing and loading."""

import json
from pathlib import Path

import pytest

from colonytasks.core.identity import Position
from colonytasks.core.kinds import Capability, StructureKind
from colonytasks.errors import ScenarioError
from colonytasks.sim import load_scenario, parse_scenario

STARTER_ROOM = Path(__file__).parents[2] / "examples" / "starter_room.json"


def scenario_text(**overrides) -> str:
    data = {
        "structures": [{"kind": "spawn", "pos": [25, 25], "energy": 300}],
        "nodes": [{"pos": {"x": 10, "y": 10}}],
        "agents": [{"name": "h1", "pos": [24, 25], "body": ["move", "WORK"]}],
    }
    data.update(overrides)
    return json.dumps(data)


def test_parse_and_build_minimal_room() -> None:
    room = parse_scenario(scenario_text()).build()

    assert room.time == 0
    assert [s.kind for s in room.spawns()] == [StructureKind.SPAWN]
    assert room.energy_available() == 300
    assert room.active_resource_nodes()[0].pos == Position(10, 10)
    assert room.agent_named("h1").body == (Capability.MOVE, Capability.WORK)


def test_unknown_kind_is_rejected() -> None:
    text = scenario_text(structures=[{"kind": "castle", "pos": [1, 1]}])
    with pytest.raises(ScenarioError, match="castle"):
        parse_scenario(text)


def test_unknown_field_is_rejected() -> None:
    text = scenario_text(weather="rain")
    with pytest.raises(ScenarioError):
        parse_scenario(text)


def test_malformed_position_is_rejected() -> None:
    text = scenario_text(piles=[{"pos": [1, 2, 3], "amount": 5}])
    with pytest.raises(ScenarioError, match="position"):
        parse_scenario(text)


@pytest.mark.parametrize("pos", [[1.5, 2], [True, 2], ["1", 2], {"x": 3, "y": 4.0}])
def test_non_integer_coordinates_are_rejected(pos) -> None:
    text = scenario_text(piles=[{"pos": pos, "amount": 5}])
    with pytest.raises(ScenarioError, match="position coordinates must be integers"):
        parse_scenario(text)


def test_object_outside_room_is_rejected() -> None:
    text = scenario_text(size=20)
    with pytest.raises(ScenarioError, match="outside"):
        parse_scenario(text).build()


def test_duplicate_agent_names_are_rejected() -> None:
    agent = {"name": "h1", "pos": [1, 1], "body": ["move"]}
    with pytest.raises(ScenarioError, match="already in use"):
        parse_scenario(scenario_text(agents=[agent, agent])).build()


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(ScenarioError):
        parse_scenario("{not json")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ScenarioError, match="Cannot read"):
        load_scenario(tmp_path / "absent.json")


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "room.json"
    path.write_text(scenario_text(tick=7), encoding="utf-8")

    room = load_scenario(path)

    assert room.time == 7


def test_starter_room_loads() -> None:
    room = load_scenario(STARTER_ROOM)

    assert len(room.agents()) == 3
    assert len(room.construction_sites()) == 2
    assert room.energy_capacity() == 400
