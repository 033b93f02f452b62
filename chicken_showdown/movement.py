"""Player movement and collision resolution."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chicken_showdown import signals
from chicken_showdown.entities import free_interior_cell
from chicken_showdown.types import Direction, GameMode

if TYPE_CHECKING:
    from chicken_showdown.game import Game
    from chicken_showdown.types import System, TickContext

logger = logging.getLogger(__name__)


def set_direction(game: Game, direction: Direction) -> bool:
    """Turn the snake. A 180-degree reversal is refused."""
    if game.mode is not GameMode.PLAYING:
        return False
    player = game.player
    if direction is player.direction.opposite:
        return False
    player.direction = direction
    return True


def step_player(game: Game) -> None:
    """Advance the snake one cell, then resolve what it landed on.

    A move into a wall is dropped. The four checks run in a fixed order and
    are not exclusive of each other.
    """
    if game.mode is not GameMode.PLAYING:
        return
    player = game.player
    target = game.grid.step(player.position, player.direction)
    if target is None:
        return
    player.position = target
    collect_egg(game)
    collect_golden_egg(game)
    deliver_egg(game)
    resolve_contact(game)


def collect_egg(game: Game) -> bool:
    player = game.player
    if player.carrying or player.position not in game.field.eggs:
        return False
    game.field.eggs.discard(player.position)
    player.carrying = True
    game.eggs_this_level += 1
    game.progress.stats.eggs_collected += 1
    game.bus.publish(
        signals.EGG_COLLECTED,
        position=player.position.as_list(),
        remaining=len(game.field.eggs),
    )
    game.progress.award(game.config.egg_points, "egg")
    game.progress.update_achievement(
        "egg_collector", game.progress.stats.eggs_collected
    )
    game.progress.update_challenge("quick_collector", game.eggs_this_level)
    return True


def collect_golden_egg(game: Game) -> bool:
    player = game.player
    if game.field.golden is None or player.position != game.field.golden:
        return False
    game.field.golden = None
    player.powered_up = True
    player.power_up_time = game.config.power_up_duration
    game.progress.stats.golden_eggs_collected += 1
    game.bus.publish(signals.GOLDEN_EGG, position=player.position.as_list())
    game.progress.award(game.config.golden_egg_points, "golden_egg")
    game.progress.update_achievement(
        "golden_hunter", game.progress.stats.golden_eggs_collected
    )
    return True


def deliver_egg(game: Game) -> bool:
    player = game.player
    if not player.carrying or not game.grid.is_escape_zone(player.position):
        return False
    player.carrying = False
    game.field.collected.append(player.position)
    game.bus.publish(signals.EGG_DELIVERED, position=player.position.as_list())
    game.progress.award(game.config.delivery_points, "delivery")
    if game.field.cleared():
        game.complete_level()
    return True


def resolve_contact(game: Game) -> bool:
    """Hit the snake if it shares a cell with the chicken.

    Called after both the snake and the chicken move. The same pair of
    positions is only ever resolved once, so a second call in the same
    logical tick is a no-op.
    """
    if game.mode is not GameMode.PLAYING:
        return False
    player, chicken = game.player, game.chicken
    if player.position != chicken.position:
        game.last_contact = None
        return False
    key = (player.generation, player.position, chicken.position)
    if game.last_contact == key:
        return False
    game.last_contact = key
    hit_player(game)
    return True


def hit_player(game: Game) -> None:
    player = game.player
    player.hit = True
    player.lives -= 1
    game.hits_this_level += 1
    game.schedule_hit_clear()
    game.bus.publish(
        signals.PLAYER_HIT,
        position=player.position.as_list(),
        lives=player.lives,
    )

    if player.carrying:
        player.carrying = False
        blocked = game.field.occupied() | {player.position, game.chicken.position}
        drop = free_interior_cell(game.grid, blocked, game.rng)
        if drop is None:
            logger.warning("No free interior cell for a dropped egg; egg lost")
        else:
            game.field.eggs.add(drop)
            game.bus.publish(signals.EGG_DROPPED, position=drop.as_list())

    if player.lives <= 0:
        game.end_game()


def make_player_system() -> System:
    """Return the auto-move system fired by the player trigger."""

    def player_system(game: Game, ctx: TickContext) -> None:
        step_player(game)

    return player_system
