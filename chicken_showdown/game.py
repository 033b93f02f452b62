"""Game - the simulation context: level lifecycle, commands, and the tick loop."""

from __future__ import annotations

import dataclasses
import logging
import os
import random
from typing import Any

from chicken_showdown import movement, signals
from chicken_showdown.ai import make_chicken_system
from chicken_showdown.clock import Clock
from chicken_showdown.commands import (
    CommandQueue,
    GoToMenu,
    NextLevel,
    PauseGame,
    ResetGame,
    RestartGame,
    SelectLevel,
    SelectSkin,
    SetDirection,
    ShowAchievements,
    ShowCustomization,
    StartGame,
)
from chicken_showdown.config import GameConfig
from chicken_showdown.entities import Chicken, EggField, Player, spawn_field
from chicken_showdown.grid import Grid
from chicken_showdown.levels import LEVELS, Level, get_level
from chicken_showdown.modes import ModeMachine
from chicken_showdown.progression import Progression
from chicken_showdown.schedule import DelayQueue, TickScheduler, Timer
from chicken_showdown.signals import SignalBus
from chicken_showdown.systems import make_animation_system, make_clock_system
from chicken_showdown.types import Direction, GameMode, Position, SnapshotError

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1


class Game:
    """One running simulation. Owned by the caller; nothing here is global.

    Drivers feed time in with ``tick(dt)`` (or ``step``/``run``/``run_for``
    for fixed steps) and read state back with ``observe()``. Commands can
    be called directly, submitted, or queued for the next tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        tps: int = 20,
        levels: tuple[Level, ...] = LEVELS,
    ) -> None:
        if not levels:
            raise ValueError("levels must not be empty")
        self.config = config if config is not None else GameConfig()
        self._levels = levels
        self._clock = Clock(tps)

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        self.bus = SignalBus()
        self.commands = CommandQueue()
        self.progress = Progression(self.bus)
        self._modes = ModeMachine(GameMode.SPLASH, self._on_mode_change)

        cfg = self.config
        self._scheduler = TickScheduler()
        self._scheduler.register("clock", cfg.clock_period, make_clock_system())
        self._scheduler.register(
            "chicken", levels[0].chicken_interval, make_chicken_system()
        )
        self._scheduler.register(
            "player", cfg.player_period, movement.make_player_system()
        )
        self._scheduler.register(
            "animation", cfg.animation_period, make_animation_system()
        )
        self._delays = DelayQueue()
        self._hit_timer: Timer | None = None
        self._generation = 0

        self.level_number = 1
        self.grid: Grid
        self.player: Player
        self.chicken: Chicken
        self.field: EggField
        self.time_left = 0
        self.eggs_this_level = 0
        self.hits_this_level = 0
        self.last_contact: tuple[int, Position, Position] | None = None
        self.setup_level()

        self._register_handlers()
        self._splash_timer: Timer | None = self._delays.after(
            cfg.splash_duration, "splash", self._leave_splash
        )

    # -- Accessors --

    @property
    def mode(self) -> GameMode:
        return self._modes.mode

    @property
    def level(self) -> Level:
        return get_level(self.level_number, self._levels)

    @property
    def levels(self) -> tuple[Level, ...]:
        return self._levels

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def eggs_remaining(self) -> int:
        return len(self.field.eggs)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    @property
    def delays(self) -> DelayQueue:
        return self._delays

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def rng(self) -> random.Random:
        return self._rng

    # -- Level lifecycle --

    def setup_level(self) -> None:
        """Recreate every per-level entity for the current level."""
        level = self.level
        cfg = self.config
        self.grid = Grid(level.grid_size)
        start = Position(*cfg.player_start)
        inset = level.grid_size - cfg.chicken_inset
        chicken_start = Position(inset, inset)
        for pos in (start, chicken_start):
            if not self.grid.contains(pos):
                raise ValueError(
                    f"Start cell {pos} lies outside the {level.grid_size}x"
                    f"{level.grid_size} grid of level {level.number}"
                )

        self._generation += 1
        self._cancel_hit_clear()
        self.player = Player(
            position=start,
            lives=cfg.starting_lives,
            skin=self.progress.active_skin,
            generation=self._generation,
        )
        self.chicken = Chicken(position=chicken_start)
        self.field = spawn_field(
            self.grid, level.egg_count, cfg.golden_egg_chance,
            {start, chicken_start}, self._rng,
        )
        self.time_left = level.time_limit
        self.eggs_this_level = 0
        self.hits_this_level = 0
        self.last_contact = None

    def complete_level(self) -> None:
        """Bank the time bonus and level-end progress, then leave ``playing``."""
        if self.mode is not GameMode.PLAYING:
            return
        self._scheduler.stop()
        cfg = self.config
        progress = self.progress
        bonus = self.time_left * cfg.time_bonus_multiplier
        progress.award(bonus, "time_bonus")

        if self.time_left >= cfg.speed_runner_threshold:
            progress.stats.levels_under_time += 1
            progress.update_achievement("speed_runner", progress.stats.levels_under_time)
            progress.update_challenge("speed_demon", 1)

        if self.hits_this_level == 0:
            progress.stats.levels_without_hit += 1
            progress.update_achievement("untouchable", progress.stats.levels_without_hit)
            progress.update_challenge("perfect_run", 1)

        self.bus.publish(
            signals.LEVEL_COMPLETE,
            level=self.level_number, time_left=self.time_left,
            bonus=bonus, score=self.score,
        )
        logger.info(
            "Level %d complete with %ds left, score %d",
            self.level_number, self.time_left, self.score,
        )
        if self.level_number >= len(self._levels):
            self._modes.transition(GameMode.GAME_COMPLETE)
        else:
            self._modes.transition(GameMode.LEVEL_COMPLETE)

    def end_game(self, reason: str = "lives") -> None:
        if self.mode is not GameMode.PLAYING:
            return
        self._scheduler.stop()
        self._modes.transition(GameMode.GAME_OVER)
        self.bus.publish(
            signals.GAME_OVER, reason=reason, level=self.level_number, score=self.score
        )
        logger.info("Game over (%s) on level %d, score %d",
                    reason, self.level_number, self.score)

    # -- Commands --

    def set_direction(self, direction: Direction) -> bool:
        return movement.set_direction(self, direction)

    def start_game(self) -> bool:
        if self.mode is GameMode.PAUSED or not self._modes.can(GameMode.PLAYING):
            return False
        self.setup_level()
        self._modes.transition(GameMode.PLAYING)
        self._start_scheduler()
        self.progress.evaluate_unlocks()
        logger.info("Starting level %d: %s", self.level_number, self.level.name)
        return True

    def pause_game(self) -> bool:
        if self.mode is GameMode.PLAYING:
            self._scheduler.stop()
            return self._modes.transition(GameMode.PAUSED)
        if self.mode is GameMode.PAUSED:
            self._modes.transition(GameMode.PLAYING)
            self._start_scheduler()
            return True
        return False

    def select_level(self, number: int) -> bool:
        if self.mode is not GameMode.MENU:
            return False
        if not 1 <= number <= len(self._levels):
            return False
        self.level_number = number
        return True

    def next_level(self) -> bool:
        if self.mode is not GameMode.LEVEL_COMPLETE:
            return False
        if self.level_number >= len(self._levels):
            return self._modes.transition(GameMode.GAME_COMPLETE)
        self.level_number += 1
        return self.start_game()

    def restart_game(self) -> bool:
        """Back to level 1 with a zeroed score. Unlocks are kept."""
        if self.mode is GameMode.PAUSED or not self._modes.can(GameMode.PLAYING):
            return False
        self.level_number = 1
        self.progress.reset_session()
        return self.start_game()

    def reset_game(self) -> bool:
        """Wipe all progression back to first launch and return to the menu."""
        self._scheduler.stop()
        self._cancel_splash()
        self.level_number = 1
        self.progress.reset()
        self.setup_level()
        self._modes.force(GameMode.MENU)
        logger.info("Progress reset")
        return True

    def select_skin(self, skin_id: str) -> bool:
        if not self.progress.select_skin(skin_id):
            return False
        self.player.skin = skin_id
        return True

    def go_to_menu(self) -> bool:
        if not self._modes.can(GameMode.MENU):
            return False
        self._scheduler.stop()
        self._cancel_splash()
        return self._modes.transition(GameMode.MENU)

    def show_achievements(self) -> bool:
        return self._modes.transition(GameMode.ACHIEVEMENTS)

    def show_customization(self) -> bool:
        if not self._modes.transition(GameMode.CUSTOMIZATION):
            return False
        self.progress.evaluate_unlocks()
        return True

    def submit(self, cmd: Any) -> bool:
        """Dispatch a command object immediately."""
        accepted = self.commands.dispatch(cmd, self)
        if not accepted:
            self._reject(cmd)
        return accepted

    def _register_handlers(self) -> None:
        q = self.commands
        q.handle(SetDirection, lambda cmd, game: game.set_direction(cmd.direction))
        q.handle(StartGame, lambda cmd, game: game.start_game())
        q.handle(PauseGame, lambda cmd, game: game.pause_game())
        q.handle(SelectSkin, lambda cmd, game: game.select_skin(cmd.skin_id))
        q.handle(SelectLevel, lambda cmd, game: game.select_level(cmd.number))
        q.handle(NextLevel, lambda cmd, game: game.next_level())
        q.handle(RestartGame, lambda cmd, game: game.restart_game())
        q.handle(ResetGame, lambda cmd, game: game.reset_game())
        q.handle(GoToMenu, lambda cmd, game: game.go_to_menu())
        q.handle(ShowAchievements, lambda cmd, game: game.show_achievements())
        q.handle(ShowCustomization, lambda cmd, game: game.show_customization())

    def _reject(self, cmd: Any) -> None:
        logger.debug("Rejected %r in mode %s", cmd, self.mode.value)
        self.bus.publish(
            signals.COMMAND_REJECTED, command=type(cmd).__name__, mode=self.mode.value
        )

    # -- Loop --

    def tick(self, dt: float) -> None:
        """Advance simulated time by ``dt`` seconds.

        One-shot timers advance before the periodic triggers, so a timer
        scheduled by a trigger starts counting on the next tick.
        """
        self._clock.advance(dt)
        ctx = self._clock.context(dt, self._rng)
        for cmd, accepted in self.commands.drain(self):
            if not accepted:
                self._reject(cmd)
        self._delays.advance(dt)
        self._scheduler.advance(self, ctx)
        self.bus.flush()

    def step(self) -> None:
        self.tick(self._clock.dt)

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def run_for(self, seconds: float) -> None:
        self.run(round(seconds * self._clock.tps))

    def _start_scheduler(self) -> None:
        self._scheduler.set_interval("chicken", self.level.chicken_interval)
        self._scheduler.start()

    # -- Delayed callbacks --

    def schedule_hit_clear(self) -> None:
        """Clear the hit flag after the flash, unless the level was rebuilt first."""
        self._cancel_hit_clear()
        generation = self.player.generation
        self._hit_timer = self._delays.after(
            self.config.hit_flash, "hit_flash", lambda: self._clear_hit(generation)
        )

    def _clear_hit(self, generation: int) -> None:
        self._hit_timer = None
        if self.player.generation != generation:
            return
        self.player.hit = False

    def _cancel_hit_clear(self) -> None:
        if self._hit_timer is not None:
            self._delays.cancel(self._hit_timer)
            self._hit_timer = None

    def _leave_splash(self) -> None:
        self._splash_timer = None
        if self.mode is GameMode.SPLASH:
            self._modes.transition(GameMode.MENU)

    def _cancel_splash(self) -> None:
        if self._splash_timer is not None:
            self._delays.cancel(self._splash_timer)
            self._splash_timer = None

    def _on_mode_change(self, old: GameMode, new: GameMode) -> None:
        logger.debug("Mode %s -> %s", old.value, new.value)
        self.bus.publish(signals.MODE, old=old.value, new=new.value)

    # -- Observation --

    def observe(self) -> dict[str, Any]:
        """Plain, JSON-compatible view of everything a presentation layer reads."""
        level = self.level
        player, chicken, field = self.player, self.chicken, self.field
        progress = self.progress
        return {
            "mode": self.mode.value,
            "level": {
                "number": level.number,
                "name": level.name,
                "egg_count": level.egg_count,
                "grid_size": level.grid_size,
                "time_limit": level.time_limit,
                "background": level.background,
            },
            "score": self.score,
            "time_left": self.time_left,
            "lives": player.lives,
            "eggs_collected_this_level": self.eggs_this_level,
            "eggs_remaining": self.eggs_remaining,
            "player": {
                "position": player.position.as_list(),
                "direction": player.direction.value,
                "carrying": player.carrying,
                "powered_up": player.powered_up,
                "power_up_time": player.power_up_time,
                "hit": player.hit,
                "skin": player.skin,
            },
            "chicken": {
                "position": chicken.position.as_list(),
                "direction": chicken.direction.value,
                "attacking": chicken.attacking,
                "flap": chicken.flap,
            },
            "eggs": [p.as_list() for p in sorted(field.eggs, key=lambda p: (p.x, p.y))],
            "golden_egg": field.golden.as_list() if field.golden is not None else None,
            "collected": [p.as_list() for p in field.collected],
            "achievements": [dataclasses.asdict(a) for a in progress.achievements.values()],
            "skins": [dataclasses.asdict(s) for s in progress.skins.values()],
            "challenges": [
                {
                    "id": c.id,
                    "name": c.name,
                    "description": c.description,
                    "target": c.target,
                    "reward": c.reward,
                    "progress": c.progress,
                    "completed": c.completed,
                    "started_at": c.started_at.isoformat(),
                    "expires_at": c.expires_at.isoformat(),
                }
                for c in progress.challenges.values()
            ],
            "leaderboard": dict(progress.leaderboard),
            "stats": dataclasses.asdict(progress.stats),
        }

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        """Progress, level and RNG state as a versioned plain dict."""
        return {
            "version": _SNAPSHOT_VERSION,
            "seed": self._seed,
            "tps": self._clock.tps,
            "tick_number": self._clock.tick_number,
            "elapsed": self._clock.elapsed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "level_number": self.level_number,
            "progress": self.progress.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Load a snapshot and land in the menu with a fresh level set up."""
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        level_number = data.get("level_number")
        if not isinstance(level_number, int) or not 1 <= level_number <= len(self._levels):
            raise SnapshotError(f"Invalid level number {level_number!r}")
        try:
            tick_number = int(data["tick_number"])
            elapsed = float(data["elapsed"])
            seed = int(data["seed"])
            rng_state = _deserialize_rng_state(data["rng_state"])
            random.Random().setstate(rng_state)
            progress = dict(data["progress"])
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc!r}") from exc

        # Progress validates everything before it mutates anything.
        self.progress.restore(progress)
        self._scheduler.stop()
        self._cancel_splash()
        self._clock.reset(tick_number, elapsed)
        self._seed = seed
        self._rng.setstate(rng_state)
        self.level_number = level_number
        self.setup_level()
        self._modes.force(GameMode.MENU)


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() into a JSON-compatible list."""
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
