"""Tests for reactive tower behaviour."""

from colonytasks.core.identity import Position
from colonytasks.core.kinds import Capability, StructureKind
from colonytasks.scheduling import TowerController
from colonytasks.world import ActionStatus, StructureHandle

M, W, C = Capability.MOVE, Capability.WORK, Capability.CARRY
TOWER_POS = Position(25, 25)


def hits_of(room, object_id) -> int:
    handle = room.resolve(object_id, StructureHandle)
    assert handle is not None
    return handle.hits


def test_attacks_closest_hostile_in_range(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_hostile(Position(30, 25), hits=100)
    far = room.add_hostile(Position(40, 25), hits=100)

    issued = TowerController(room, room).run()

    assert issued == 1
    assert [h.id for h in room.hostiles()] == [far]


def test_hostile_out_of_range_keeps_tower_idle(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_hostile(Position(49, 49))
    room.add_agent("hurt", Position(26, 26), (M, W, C), hits=10)
    room.add_structure(StructureKind.ROAD, Position(26, 25), hits=10)

    assert TowerController(room, room, tower_range=20).run() == 0
    assert room.agent_named("hurt").hits == 10


def test_heals_closest_agent_when_hurt(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_agent("hurt", Position(26, 26), (M, W, C), hits=50)

    TowerController(room, room).run()

    assert room.agent_named("hurt").hits == 250


def test_does_not_heal_past_the_closest_agent(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_agent("fine", Position(26, 26), (M, W, C))
    room.add_agent("hurt", Position(40, 40), (M, W, C), hits=50)
    road = room.add_structure(StructureKind.ROAD, Position(27, 27), hits=10)

    TowerController(room, room).run()

    assert room.agent_named("hurt").hits == 50
    assert hits_of(room, road) == 810


def test_ramparts_are_repaired_before_other_structures(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    rampart = room.add_structure(StructureKind.RAMPART, Position(30, 30), hits=1000)
    road = room.add_structure(StructureKind.ROAD, Position(26, 26), hits=10)

    TowerController(room, room).run()

    assert hits_of(room, rampart) == 1800
    assert hits_of(room, road) == 10


def test_weakest_damaged_structure_is_repaired(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_structure(StructureKind.ROAD, Position(26, 26), hits=3000)
    weak = room.add_structure(StructureKind.ROAD, Position(27, 27), hits=100)

    TowerController(room, room).run()

    assert hits_of(room, weak) == 900


def test_structures_out_of_range_are_ignored(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500)
    room.add_structure(StructureKind.ROAD, Position(49, 49), hits=10)

    assert TowerController(room, room, tower_range=20).run() == 0


def test_operate_reports_command_status(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=5)
    room.add_hostile(Position(26, 25))
    tower = room.owned_structures()[0]

    status = TowerController(room, room).operate(tower)

    assert status is ActionStatus.INSUFFICIENT_RESOURCE


def test_unowned_towers_are_not_operated(room) -> None:
    room.add_structure(StructureKind.TOWER, TOWER_POS, energy=500, owned=False)
    room.add_hostile(Position(26, 25))

    assert TowerController(room, room).run() == 0
