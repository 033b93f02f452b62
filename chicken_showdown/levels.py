"""Static level catalog."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Level:
    """One level's parameters. ``chicken_interval`` is in seconds; smaller is faster."""

    number: int
    name: str
    egg_count: int
    chicken_interval: float
    time_limit: int
    grid_size: int
    background: str


LEVELS: tuple[Level, ...] = (
    Level(1, "Peaceful Pastures", 3, 2.0, 60, 10, "level1_bg"),
    Level(2, "Wild Woods", 6, 1.5, 75, 10, "level2_bg"),
    Level(3, "Mountain Challenge", 9, 1.0, 90, 10, "level3_bg"),
    Level(4, "Final Showdown", 12, 0.8, 120, 10, "level4_bg"),
)


def get_level(number: int, levels: tuple[Level, ...] = LEVELS) -> Level:
    """Look up a level by ordinal. Raises KeyError if out of range."""
    if not 1 <= number <= len(levels):
        raise KeyError(f"No level {number} (catalog has {len(levels)})")
    return levels[number - 1]
