"""Grid - square integer grid with wall bounds and the border escape zone."""
from __future__ import annotations

from chicken_showdown.types import Direction, Position


class Grid:
    def __init__(self, size: int) -> None:
        if size < 3:
            raise ValueError(f"grid size must be at least 3, got {size}")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.x < self._size and 0 <= pos.y < self._size

    def step(self, pos: Position, direction: Direction) -> Position | None:
        """Return the neighbouring cell, or None if it lies beyond a wall."""
        target = pos.moved(direction)
        if not self.contains(target):
            return None
        return target

    def interior(self) -> list[Position]:
        """Cells at least one step away from every wall, row-major."""
        return [
            Position(x, y)
            for y in range(1, self._size - 1)
            for x in range(1, self._size - 1)
        ]

    def is_escape_zone(self, pos: Position) -> bool:
        return pos.x == 0 or pos.y == 0
