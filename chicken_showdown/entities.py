"""Per-level entity state: the snake, the chicken, and the egg field."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass, field

from chicken_showdown.grid import Grid
from chicken_showdown.types import Direction, Position


@dataclass
class Player:
    """The snake. ``generation`` changes whenever the level is set up again."""

    position: Position
    direction: Direction = Direction.RIGHT
    lives: int = 3
    carrying: bool = False
    powered_up: bool = False
    power_up_time: int = 0
    hit: bool = False
    skin: str = "snake_normal"
    generation: int = 0


@dataclass
class Chicken:
    position: Position
    direction: Direction = Direction.LEFT
    attacking: bool = False
    flap: bool = False


@dataclass
class EggField:
    """Uncollected eggs, the optional golden egg, and the delivered-egg trail."""

    eggs: set[Position] = field(default_factory=set)
    golden: Position | None = None
    collected: list[Position] = field(default_factory=list)

    def occupied(self) -> set[Position]:
        cells = set(self.eggs)
        if self.golden is not None:
            cells.add(self.golden)
        return cells

    def cleared(self) -> bool:
        return not self.eggs and self.golden is None


def spawn_field(
    grid: Grid,
    egg_count: int,
    golden_chance: float,
    blocked: set[Position],
    rng: _random.Random,
) -> EggField:
    """Scatter ``egg_count`` distinct eggs over free interior cells.

    The golden egg, when rolled, takes a further free interior cell so it
    never shares a cell with a regular egg.
    """
    free = [pos for pos in grid.interior() if pos not in blocked]
    if egg_count > len(free):
        raise ValueError(
            f"Cannot place {egg_count} eggs on {len(free)} free interior cells"
        )
    eggs = rng.sample(free, egg_count)
    golden: Position | None = None
    if rng.random() < golden_chance:
        taken = set(eggs)
        remaining = [pos for pos in free if pos not in taken]
        if remaining:
            golden = rng.choice(remaining)
    return EggField(eggs=set(eggs), golden=golden)


def free_interior_cell(
    grid: Grid, blocked: set[Position], rng: _random.Random
) -> Position | None:
    """Pick a random interior cell outside ``blocked``; None if all are taken."""
    free = [pos for pos in grid.interior() if pos not in blocked]
    if not free:
        return None
    return rng.choice(free)
