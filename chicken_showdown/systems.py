"""Clock and animation systems."""
from __future__ import annotations

from typing import TYPE_CHECKING

from chicken_showdown import signals
from chicken_showdown.types import GameMode

if TYPE_CHECKING:
    from chicken_showdown.game import Game
    from chicken_showdown.types import System, TickContext


def make_clock_system() -> System:
    """Return a system that counts the level timer and the power-up down by one."""

    def clock_system(game: Game, ctx: TickContext) -> None:
        if game.mode is not GameMode.PLAYING:
            return
        game.time_left -= 1
        player = game.player
        if player.powered_up:
            player.power_up_time -= 1
            if player.power_up_time <= 0:
                player.power_up_time = 0
                player.powered_up = False
                game.bus.publish(signals.POWER_UP_ENDED)
        if game.time_left <= 0:
            game.time_left = 0
            game.end_game(reason="time")

    return clock_system


def make_animation_system() -> System:
    def animation_system(game: Game, ctx: TickContext) -> None:
        game.chicken.flap = not game.chicken.flap

    return animation_system
