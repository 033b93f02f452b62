"""Chicken AI: greedy pursuit inside the attack radius, random walk outside it."""
from __future__ import annotations

from typing import TYPE_CHECKING

from chicken_showdown.movement import resolve_contact
from chicken_showdown.types import Direction, GameMode, Position

if TYPE_CHECKING:
    from chicken_showdown.game import Game
    from chicken_showdown.types import System, TickContext

_WANDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def pursuit_direction(source: Position, target: Position) -> Direction:
    """One greedy step from ``source`` toward ``target``.

    The axis with the larger gap moves first; ties move vertically, so a
    chicken already on the target steps up off it.
    """
    dx = target.x - source.x
    dy = target.y - source.y
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def step_chicken(game: Game, ctx: TickContext) -> None:
    if game.mode is not GameMode.PLAYING:
        return
    chicken = game.chicken
    distance = chicken.position.distance(game.player.position)
    if distance <= game.config.attack_radius:
        chicken.attacking = True
        direction = pursuit_direction(chicken.position, game.player.position)
    else:
        chicken.attacking = False
        direction = ctx.random.choice(_WANDER)

    chicken.direction = direction
    target = game.grid.step(chicken.position, direction)
    if target is not None:
        chicken.position = target

    resolve_contact(game)


def make_chicken_system() -> System:
    """Return the system fired by the chicken trigger."""

    def chicken_system(game: Game, ctx: TickContext) -> None:
        step_chicken(game, ctx)

    return chicken_system
