"""Periodic triggers and one-shot delayed callbacks, both driven by tick(dt)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from chicken_showdown.types import System

if TYPE_CHECKING:
    from chicken_showdown.game import Game
    from chicken_showdown.types import TickContext

# Absorbs float drift when many small dt values add up to one period.
_EPSILON = 1e-9


@dataclass
class Periodic:
    """Recurring trigger. Fires every ``interval`` seconds while the scheduler runs."""

    name: str
    interval: float
    elapsed: float = 0.0


@dataclass
class Timer:
    """One-shot countdown. Fires once when ``remaining`` reaches 0."""

    name: str
    remaining: float
    callback: Callable[[], None]
    cancelled: bool = False


class TickScheduler:
    """Independent periodic triggers that start and stop together.

    Each trigger accumulates elapsed time against its own interval, so the
    game clock, chicken AI, player auto-move and animation keep separate
    cadences inside one single-threaded tick.
    """

    def __init__(self) -> None:
        self._periodics: list[Periodic] = []
        self._systems: dict[str, System] = {}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def register(self, name: str, interval: float, system: System) -> None:
        if interval <= 0:
            raise ValueError(f"interval for {name!r} must be positive")
        if name in self._systems:
            raise ValueError(f"Trigger {name!r} already registered")
        self._periodics.append(Periodic(name=name, interval=interval))
        self._systems[name] = system

    def periodic(self, name: str) -> Periodic:
        for periodic in self._periodics:
            if periodic.name == name:
                return periodic
        raise KeyError(f"No trigger named {name!r}")

    def set_interval(self, name: str, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval for {name!r} must be positive")
        self.periodic(name).interval = interval

    def start(self) -> None:
        """Start every trigger from a zero offset."""
        for periodic in self._periodics:
            periodic.elapsed = 0.0
        self._running = True

    def stop(self) -> None:
        self._running = False

    def advance(self, game: Game, ctx: TickContext) -> None:
        if not self._running:
            return
        for periodic in self._periodics:
            periodic.elapsed += ctx.dt
            while self._running and periodic.elapsed + _EPSILON >= periodic.interval:
                periodic.elapsed = max(0.0, periodic.elapsed - periodic.interval)
                self._systems[periodic.name](game, ctx)
            if not self._running:
                break


class DelayQueue:
    """Pending one-shot callbacks. Runs regardless of the periodic scheduler."""

    def __init__(self) -> None:
        self._timers: list[Timer] = []

    def after(self, delay: float, name: str, callback: Callable[[], None]) -> Timer:
        if delay < 0:
            raise ValueError("delay must not be negative")
        timer = Timer(name=name, remaining=delay, callback=callback)
        self._timers.append(timer)
        return timer

    def cancel(self, timer: Timer) -> None:
        timer.cancelled = True
        try:
            self._timers.remove(timer)
        except ValueError:
            pass

    def pending(self) -> list[Timer]:
        return [t for t in self._timers if not t.cancelled]

    def clear(self) -> None:
        for timer in self._timers:
            timer.cancelled = True
        self._timers.clear()

    def advance(self, dt: float) -> None:
        due: list[Timer] = []
        for timer in list(self._timers):
            timer.remaining -= dt
            if timer.remaining <= _EPSILON:
                self._timers.remove(timer)
                due.append(timer)
        for timer in due:
            if not timer.cancelled:
                timer.callback()
