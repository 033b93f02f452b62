"""Tests for the chicken's pursuit and wander behaviour."""
import pytest

from chicken_showdown.ai import make_chicken_system, pursuit_direction, step_chicken
from chicken_showdown.types import Direction, GameMode, Position


def _ctx(game):
    return game.clock.context(0.0, game.rng)


class TestPursuitDirection:

    @pytest.mark.parametrize("source,target,expected", [
        (Position(5, 5), Position(2, 5), Direction.LEFT),
        (Position(5, 5), Position(8, 6), Direction.RIGHT),
        (Position(5, 5), Position(5, 1), Direction.UP),
        (Position(5, 5), Position(4, 8), Direction.DOWN),
    ])
    def test_larger_gap_moves_first(self, source, target, expected):
        assert pursuit_direction(source, target) is expected

    def test_tie_moves_vertically(self):
        assert pursuit_direction(Position(5, 5), Position(3, 3)) is Direction.UP
        assert pursuit_direction(Position(3, 3), Position(5, 5)) is Direction.DOWN

    def test_same_cell_steps_up(self):
        assert pursuit_direction(Position(4, 4), Position(4, 4)) is Direction.UP


class TestStepChicken:

    def test_attacks_within_radius(self, game):
        game.chicken.position = Position(4, 3)
        step_chicken(game, _ctx(game))
        assert game.chicken.attacking
        assert game.chicken.direction is Direction.LEFT
        assert game.chicken.position == Position(3, 3)

    def test_wanders_outside_radius(self, game):
        step_chicken(game, _ctx(game))
        chicken = game.chicken
        assert not chicken.attacking
        assert chicken.position.distance(Position(9, 9)) <= 1
        assert game.grid.contains(chicken.position)

    def test_stays_in_bounds(self, game):
        game.player.lives = 10_000
        ctx = _ctx(game)
        for _ in range(500):
            step_chicken(game, ctx)
            assert game.grid.contains(game.chicken.position)

    def test_idle_outside_playing(self, game):
        game.pause_game()
        game.chicken.position = Position(4, 3)
        step_chicken(game, _ctx(game))
        assert game.chicken.position == Position(4, 3)
        assert not game.chicken.attacking

    def test_lethal_contact_ends_game(self, game):
        game.player.lives = 1
        game.chicken.position = Position(2, 3)
        step_chicken(game, _ctx(game))

        assert game.chicken.position == Position(2, 2)
        assert game.player.lives == 0
        assert game.player.hit
        assert game.mode is GameMode.GAME_OVER
        assert not game.scheduler.running

        game.tick(0.5)
        assert not game.player.hit

    def test_system_wraps_step(self, game):
        game.chicken.position = Position(4, 3)
        make_chicken_system()(game, _ctx(game))
        assert game.chicken.position == Position(3, 3)

    def test_steps_off_shared_cell(self, game):
        game.chicken.position = game.player.position
        step_chicken(game, _ctx(game))
        assert game.chicken.attacking
        assert game.chicken.position == Position(2, 1)
        assert game.player.lives == 3

    def test_shared_cell_on_top_wall_stays(self, game):
        game.player.position = Position(4, 0)
        game.chicken.position = Position(4, 0)
        step_chicken(game, _ctx(game))
        assert game.chicken.direction is Direction.UP
        assert game.chicken.position == Position(4, 0)
