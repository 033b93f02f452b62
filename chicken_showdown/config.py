"""GameConfig - tunable rule constants, optionally loaded from TOML."""
from __future__ import annotations

import dataclasses
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class GameConfig:
    # Periods in seconds
    clock_period: float = 1.0
    player_period: float = 0.3
    animation_period: float = 0.5
    hit_flash: float = 0.5
    splash_duration: float = 3.0

    # Rules
    starting_lives: int = 3
    power_up_duration: int = 10
    attack_radius: int = 3
    golden_egg_chance: float = 0.30
    speed_runner_threshold: int = 10

    # Points
    egg_points: int = 10
    golden_egg_points: int = 50
    delivery_points: int = 20
    time_bonus_multiplier: int = 2

    # Start cells; the chicken starts this far in from the far corner
    player_start: tuple[int, int] = (2, 2)
    chicken_inset: int = 3

    def __post_init__(self) -> None:
        for name in ("clock_period", "player_period", "animation_period"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.hit_flash < 0 or self.splash_duration < 0:
            raise ValueError("hit_flash and splash_duration must not be negative")
        if self.starting_lives <= 0:
            raise ValueError("starting_lives must be positive")
        if self.power_up_duration <= 0:
            raise ValueError("power_up_duration must be positive")
        if self.attack_radius < 0:
            raise ValueError("attack_radius must not be negative")
        if not 0.0 <= self.golden_egg_chance <= 1.0:
            raise ValueError(
                f"golden_egg_chance must be in [0, 1], got {self.golden_egg_chance}"
            )
        if min(self.egg_points, self.golden_egg_points, self.delivery_points,
               self.time_bonus_multiplier) < 0:
            raise ValueError("point values must not be negative")
        if len(self.player_start) != 2:
            raise ValueError("player_start must be an (x, y) pair")
        if self.chicken_inset < 1:
            raise ValueError("chicken_inset must be at least 1")


def config_from_dict(data: dict[str, Any]) -> GameConfig:
    """Build a GameConfig from a flat mapping. Unknown keys raise ValueError."""
    known = {f.name for f in dataclasses.fields(GameConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    values = dict(data)
    if "player_start" in values:
        values["player_start"] = tuple(values["player_start"])
    return GameConfig(**values)


def load_config(path: str | Path) -> GameConfig:
    """Load the ``[game]`` table of a TOML file. Missing table means defaults."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    table = data.get("game", {})
    if not isinstance(table, dict):
        raise ValueError("[game] must be a table")
    return config_from_dict(table)
