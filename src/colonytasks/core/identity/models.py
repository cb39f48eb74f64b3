"""Identity models: the only values allowed to persist across ticks.

Usage:
    node_id = ObjectId("node-1")
    pos = Position(10, 12)
    pos.is_near_to(Position(11, 13))  # True
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

ROOM_SIZE = 50


@dataclass(frozen=True, slots=True)
class ObjectId:
    """Stable identifier of a world object.

    Unlike handles, ids stay valid across ticks. Resolving one may still fail
    when the object is gone.
    """

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Position:
    """Tile coordinates inside the single controlled room."""

    x: int
    y: int

    def range_to(self, other: Position) -> int:
        """Chebyshev distance, the number of moves between two tiles.

        Args:
            other: Position to measure to.

        Returns:
            Number of single-tile steps needed to reach other.
        """
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def in_range_to(self, other: Position, distance: int) -> bool:
        """Check whether other lies within distance tiles."""
        return self.range_to(other) <= distance

    def is_near_to(self, other: Position) -> bool:
        """Check adjacency (same tile included)."""
        return self.range_to(other) <= 1

    def in_bounds(self, size: int = ROOM_SIZE) -> bool:
        """Check that the tile lies inside a size x size room."""
        return 0 <= self.x < size and 0 <= self.y < size

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def neighbors(self, size: int = ROOM_SIZE) -> Iterator[Position]:
        """Yield the eight surrounding tiles in a fixed scan order.

        The order is dx from -1 to 1 (outer loop), dy from -1 to 1 (inner),
        skipping the centre. Tiles outside the room are not yielded.

        Args:
            size: Room edge length.

        Yields:
            In-room neighbouring positions.
        """
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                candidate = self.offset(dx, dy)
                if candidate.in_bounds(size):
                    yield candidate

    def step_toward(self, target: Position) -> Position:
        """Next tile on a straight Chebyshev line toward target."""
        dx = (target.x > self.x) - (target.x < self.x)
        dy = (target.y > self.y) - (target.y < self.y)
        return self.offset(dx, dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
