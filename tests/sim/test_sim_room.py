"""Tests for the simulated room's queries and commands."""

import pytest

from colonytasks.core.identity import ObjectId, Position
from colonytasks.core.kinds import Capability, LookKind, StructureKind
from colonytasks.errors import StaleHandleError, UnknownObjectError
from colonytasks.sim import SimRoom
from colonytasks.world import (
    ActionGateway,
    ActionStatus,
    AgentHandle,
    ResourceNodeHandle,
    Store,
    StructureHandle,
    WorldQuery,
)

M, W, C = Capability.MOVE, Capability.WORK, Capability.CARRY


def test_room_satisfies_both_protocols(room) -> None:
    assert isinstance(room, WorldQuery)
    assert isinstance(room, ActionGateway)


class TestHandles:
    def test_stale_handle_is_refused(self, room) -> None:
        room.add_agent("w", Position(5, 5), (M, W, C))
        handle = room.agent_named("w")
        room.advance()

        with pytest.raises(StaleHandleError) as exc_info:
            room.move_to(handle, Position(6, 6))
        assert exc_info.value.handle_tick == 1
        assert exc_info.value.current_tick == 2

    def test_unknown_object_is_a_programming_error(self, room) -> None:
        bogus = AgentHandle(
            id=ObjectId("agent-999"),
            name="bogus",
            pos=Position(1, 1),
            store=Store(),
            body=(M,),
            hits=100,
            hits_max=100,
            spawning=False,
            tick=room.time,
        )
        with pytest.raises(UnknownObjectError):
            room.move_to(bogus, Position(2, 2))

    def test_vanished_object_is_a_failure_value(self, room) -> None:
        room.add_agent("w", Position(5, 5), (M, W, C))
        handle = room.agent_named("w")
        room.kill("w")

        assert room.move_to(handle, Position(6, 6)) is ActionStatus.OTHER

    def test_resolve_checks_handle_type(self, room) -> None:
        node = room.add_node(Position(5, 5))

        assert isinstance(room.resolve(node, ResourceNodeHandle), ResourceNodeHandle)
        assert room.resolve(node, AgentHandle) is None
        assert room.resolve(ObjectId("node-404"), ResourceNodeHandle) is None

    def test_handles_are_snapshots(self, room) -> None:
        room.add_agent("w", Position(5, 5), (M, W, C))
        before = room.agent_named("w")
        room.move_to(before, Position(9, 9))

        assert before.pos == Position(5, 5)
        assert room.agent_named("w").pos == Position(6, 6)


class TestQueries:
    def test_owned_structures_exclude_neutral_kinds(self, room) -> None:
        room.add_structure(StructureKind.SPAWN, Position(1, 1))
        room.add_structure(StructureKind.CONTAINER, Position(2, 2))
        room.add_structure(StructureKind.ROAD, Position(3, 3))

        assert [s.kind for s in room.owned_structures()] == [StructureKind.SPAWN]
        assert len(room.structures()) == 3
        assert len(room.spawns()) == 1

    def test_spatial_queries(self, room) -> None:
        near = room.add_pile(Position(10, 12), 10)
        room.add_pile(Position(20, 20), 10)

        assert [h.id for h in room.look_at(Position(10, 12), LookKind.GROUND_RESOURCES)] == [near]
        assert len(room.in_range(Position(10, 10), 2, LookKind.GROUND_RESOURCES)) == 1
        closest = room.closest(Position(0, 0), LookKind.GROUND_RESOURCES)
        assert closest is not None and closest.id == near
        assert room.closest(Position(0, 0), LookKind.GROUND_RESOURCES, within=5) is None
        assert room.closest(Position(0, 0), LookKind.HOSTILES) is None

    def test_look_at_answers_every_kind(self, room) -> None:
        tile = Position(7, 7)
        expected = {
            LookKind.AGENTS: room.add_agent("a", tile, (M,)),
            LookKind.STRUCTURES: room.add_structure(StructureKind.ROAD, tile),
            LookKind.CONSTRUCTION_SITES: room.add_site(StructureKind.EXTENSION, tile),
            LookKind.RESOURCE_NODES: room.add_node(tile),
            LookKind.GROUND_RESOURCES: room.add_pile(tile, 5),
            LookKind.HOSTILES: room.add_hostile(tile),
        }

        for kind in LookKind:
            assert [h.id for h in room.look_at(tile, kind)] == [expected[kind]]

    def test_piles_on_one_tile_merge(self, room) -> None:
        first = room.add_pile(Position(10, 10), 10)
        second = room.add_pile(Position(10, 10), 15)

        assert first == second
        assert [p.amount for p in room.ground_resources()] == [25]

    def test_energy_totals_cover_spawns_and_extensions(self, room) -> None:
        room.add_structure(StructureKind.SPAWN, Position(1, 1), energy=100)
        room.add_structure(StructureKind.EXTENSION, Position(2, 2), energy=20)
        room.add_structure(StructureKind.TOWER, Position(3, 3), energy=500)

        assert room.energy_available() == 120
        assert room.energy_capacity() == 350

    def test_nodes_refill_on_regen_interval(self) -> None:
        room = SimRoom(tick=0, regen_interval=5)
        room.add_node(Position(5, 5), energy=0)
        assert room.active_resource_nodes() == []

        for _ in range(5):
            room.advance()

        assert [n.energy for n in room.active_resource_nodes()] == [3000]


class TestSetup:
    def test_duplicate_agent_name_is_rejected(self, room) -> None:
        room.add_agent("w", Position(5, 5), (M,))
        with pytest.raises(ValueError, match="already in use"):
            room.add_agent("w", Position(6, 6), (M,))

    def test_objects_must_be_inside_room(self, room) -> None:
        with pytest.raises(ValueError, match="outside"):
            room.add_node(Position(50, 0))

    def test_agent_cannot_start_over_capacity(self, room) -> None:
        with pytest.raises(ValueError, match="cannot carry"):
            room.add_agent("w", Position(5, 5), (M, C), energy=51)

    def test_structure_defaults(self, room) -> None:
        ext = room.add_structure(StructureKind.EXTENSION, Position(5, 5))
        handle = room.resolve(ext, StructureHandle)

        assert handle.store == Store(0, 50)
        assert handle.hits == handle.hits_max == 1000
        assert handle.owned


class TestAgentCommands:
    def test_move_needs_move_part(self, room) -> None:
        room.add_agent("w", Position(5, 5), (W, C))
        assert room.move_to(room.agent_named("w"), Position(9, 9)) is ActionStatus.FORBIDDEN

    def test_spawning_agent_cannot_act(self, room) -> None:
        room.add_agent("w", Position(5, 5), (M,), spawning=2)
        assert room.move_to(room.agent_named("w"), Position(9, 9)) is ActionStatus.OTHER

        room.advance()
        room.advance()

        assert not room.agent_named("w").spawning

    def test_build_completes_rampart_with_one_hit(self, room) -> None:
        room.add_site(StructureKind.RAMPART, Position(5, 5), progress_total=10)
        room.add_agent("w", Position(6, 6), (M, W, W, C), energy=50)

        status = room.build(room.agent_named("w"), room.construction_sites()[0])

        assert status is ActionStatus.OK
        assert room.construction_sites() == []
        rampart = room.look_at(Position(5, 5), LookKind.STRUCTURES)[0]
        assert rampart.kind is StructureKind.RAMPART and rampart.hits == 1
        assert room.agent_named("w").carried == 40

    def test_build_range_is_three(self, room) -> None:
        room.add_site(StructureKind.ROAD, Position(5, 5))
        room.add_agent("w", Position(9, 5), (M, W, C), energy=50)

        status = room.build(room.agent_named("w"), room.construction_sites()[0])

        assert status is ActionStatus.NOT_IN_RANGE

    def test_harvest_overflow_fills_container_then_ground(self, room) -> None:
        node = room.add_node(Position(5, 5))
        room.add_structure(StructureKind.CONTAINER, Position(6, 6), energy=0, energy_capacity=1)
        room.add_agent("h", Position(6, 6), (M, W, W, W))

        status = room.harvest(room.agent_named("h"), room.resolve(node, ResourceNodeHandle))

        assert status is ActionStatus.OK
        assert room.structures()[0].energy == 1
        assert [p.amount for p in room.ground_resources()] == [5]

    def test_harvest_needs_work_part(self, room) -> None:
        node = room.add_node(Position(5, 5))
        room.add_agent("t", Position(6, 6), (M, C))

        status = room.harvest(room.agent_named("t"), room.resolve(node, ResourceNodeHandle))

        assert status is ActionStatus.FORBIDDEN

    def test_transfer_with_nothing_carried(self, room) -> None:
        room.add_structure(StructureKind.SPAWN, Position(5, 5))
        room.add_agent("w", Position(6, 6), (M, W, C))

        status = room.transfer(room.agent_named("w"), room.spawns()[0])

        assert status is ActionStatus.INSUFFICIENT_RESOURCE

    def test_suicide_drops_carried_energy(self, room) -> None:
        room.add_agent("w", Position(6, 6), (M, W, C), energy=20)

        assert room.suicide(room.agent_named("w")) is ActionStatus.OK
        assert room.agents() == []
        assert [(p.pos, p.amount) for p in room.ground_resources()] == [(Position(6, 6), 20)]


class TestSpawning:
    def test_spawn_draws_from_spawn_then_extensions(self, room) -> None:
        room.add_structure(StructureKind.EXTENSION, Position(2, 2), energy=50)
        room.add_structure(StructureKind.SPAWN, Position(1, 1), energy=200)
        room.add_structure(StructureKind.EXTENSION, Position(3, 3), energy=50)

        status = room.spawn_agent(room.spawns()[0], (M, M, W, W), "baby")

        assert status is ActionStatus.OK
        assert [s.energy for s in room.owned_structures()] == [0, 0, 0]
        baby = room.agent_named("baby")
        assert baby.spawning and baby.pos == Position(1, 1)

    def test_spawn_busy_until_finished(self, room) -> None:
        room.add_structure(StructureKind.SPAWN, Position(1, 1), energy=300)
        assert room.spawn_agent(room.spawns()[0], (M,), "a") is ActionStatus.OK

        assert room.spawn_agent(room.spawns()[0], (M,), "b") is ActionStatus.OTHER
        for _ in range(3):
            room.advance()
        assert room.spawn_agent(room.spawns()[0], (M,), "b") is ActionStatus.OK

    @pytest.mark.parametrize(
        ("body", "name", "expected"),
        [
            ((M, W, W, W), "new", ActionStatus.INSUFFICIENT_RESOURCE),
            ((M,), "taken", ActionStatus.OTHER),
            ((), "new", ActionStatus.OTHER),
        ],
    )
    def test_spawn_failures(self, room, body, name, expected) -> None:
        room.add_structure(StructureKind.SPAWN, Position(1, 1), energy=300)
        room.add_agent("taken", Position(5, 5), (M,))

        assert room.spawn_agent(room.spawns()[0], body, name) is expected

    def test_only_spawns_spawn(self, room) -> None:
        room.add_structure(StructureKind.EXTENSION, Position(1, 1), energy=50)
        extension = room.owned_structures()[0]

        assert room.spawn_agent(extension, (M,), "x") is ActionStatus.FORBIDDEN


class TestTowerCommands:
    def test_attack_costs_energy_and_kills(self, room) -> None:
        tower = room.add_structure(StructureKind.TOWER, Position(1, 1), energy=100)
        room.add_hostile(Position(5, 5), hits=300)

        status = room.tower_attack(room.owned_structures()[0], room.hostiles()[0])

        assert status is ActionStatus.OK
        assert room.hostiles() == []
        assert room.resolve(tower, StructureHandle).energy == 90

    def test_tower_commands_need_a_tower(self, room) -> None:
        room.add_structure(StructureKind.SPAWN, Position(1, 1), energy=100)
        room.add_hostile(Position(5, 5))

        status = room.tower_attack(room.spawns()[0], room.hostiles()[0])

        assert status is ActionStatus.FORBIDDEN
