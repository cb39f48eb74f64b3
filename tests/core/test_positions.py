"""Tests for tile positions and object ids."""

from hypothesis import given
from hypothesis import strategies as st

from colonytasks.core.identity import ObjectId, Position

coords = st.integers(min_value=0, max_value=49)
positions = st.builds(Position, coords, coords)


def test_range_is_chebyshev() -> None:
    assert Position(10, 10).range_to(Position(13, 11)) == 3
    assert Position(10, 10).range_to(Position(10, 10)) == 0


def test_near_includes_same_tile_and_diagonals() -> None:
    origin = Position(5, 5)
    assert origin.is_near_to(origin)
    assert origin.is_near_to(Position(6, 6))
    assert not origin.is_near_to(Position(7, 5))


def test_in_range_to_is_inclusive() -> None:
    assert Position(0, 0).in_range_to(Position(3, 2), 3)
    assert not Position(0, 0).in_range_to(Position(4, 0), 3)


def test_neighbors_scan_order() -> None:
    """dx is the outer loop, dy the inner one, both from -1 to 1."""
    assert list(Position(5, 5).neighbors()) == [
        Position(4, 4),
        Position(4, 5),
        Position(4, 6),
        Position(5, 4),
        Position(5, 6),
        Position(6, 4),
        Position(6, 5),
        Position(6, 6),
    ]


def test_neighbors_skip_tiles_outside_room() -> None:
    assert list(Position(0, 0).neighbors(size=50)) == [
        Position(0, 1),
        Position(1, 0),
        Position(1, 1),
    ]
    assert len(list(Position(49, 49).neighbors(size=50))) == 3


def test_in_bounds() -> None:
    assert Position(0, 49).in_bounds(50)
    assert not Position(50, 0).in_bounds(50)
    assert not Position(-1, 3).in_bounds(50)


def test_str_forms() -> None:
    assert str(Position(3, 4)) == "(3, 4)"
    assert str(ObjectId("node-7")) == "node-7"


def test_positions_and_ids_are_value_objects() -> None:
    assert Position(1, 2) == Position(1, 2)
    assert len({ObjectId("a"), ObjectId("a"), ObjectId("b")}) == 2


@given(a=positions, b=positions)
def test_range_is_symmetric(a: Position, b: Position) -> None:
    assert a.range_to(b) == b.range_to(a)


@given(a=positions, b=positions)
def test_step_toward_closes_distance_by_one(a: Position, b: Position) -> None:
    """PROPERTY: A single step always reduces the distance by exactly one tile."""
    step = a.step_toward(b)
    assert a.is_near_to(step)
    assert step.range_to(b) == max(a.range_to(b) - 1, 0)


@given(pos=positions)
def test_every_neighbor_is_adjacent_and_in_room(pos: Position) -> None:
    tiles = list(pos.neighbors(50))
    assert pos not in tiles
    assert all(pos.range_to(t) == 1 and t.in_bounds(50) for t in tiles)
    assert len(set(tiles)) == len(tiles)
