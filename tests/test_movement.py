"""Tests for snake movement and collision resolution."""
import pytest

from chicken_showdown import movement, signals
from chicken_showdown.types import Direction, GameMode, Position


def _signals(game):
    seen = []
    game.bus.subscribe_all(lambda name, data: seen.append((name, data)))
    return seen


# --- Direction changes ---

class TestSetDirection:

    def test_reverse_is_refused(self, game):
        assert game.player.direction is Direction.RIGHT
        assert not game.set_direction(Direction.LEFT)
        assert game.player.direction is Direction.RIGHT

    @pytest.mark.parametrize("direction", [Direction.UP, Direction.DOWN])
    def test_perpendicular_turns_apply_immediately(self, game, direction):
        assert game.set_direction(direction)
        assert game.player.direction is direction

    def test_same_direction_is_accepted(self, game):
        assert game.set_direction(Direction.RIGHT)

    def test_ignored_while_paused(self, game):
        game.pause_game()
        assert not game.set_direction(Direction.UP)
        assert game.player.direction is Direction.RIGHT


# --- Stepping ---

class TestStepPlayer:

    def test_moves_one_cell(self, game):
        movement.step_player(game)
        assert game.player.position == Position(3, 2)

    def test_wall_blocks_silently(self, game):
        game.player.position = Position(0, 5)
        game.player.direction = Direction.LEFT
        movement.step_player(game)
        assert game.player.position == Position(0, 5)
        assert game.mode is GameMode.PLAYING

    def test_no_move_outside_playing(self, game):
        game.pause_game()
        movement.step_player(game)
        assert game.player.position == Position(2, 2)

    def test_stays_in_bounds_against_every_wall(self, game):
        for direction in (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT):
            game.player.direction = direction
            for _ in range(15):
                movement.step_player(game)
                assert game.grid.contains(game.player.position)


# --- Egg pickup ---

class TestEggPickup:

    def test_basic_pickup(self, game):
        game.field.eggs.update({Position(2, 3), Position(5, 5)})
        assert game.set_direction(Direction.DOWN)
        movement.step_player(game)

        assert game.player.position == Position(2, 3)
        assert Position(2, 3) not in game.field.eggs
        assert game.field.eggs == {Position(5, 5)}
        assert game.player.carrying
        assert game.score == 10
        assert game.eggs_this_level == 1
        assert game.progress.stats.eggs_collected == 1
        assert game.progress.achievements["egg_collector"].progress == 1
        assert game.progress.challenges["quick_collector"].progress == 1
        assert game.progress.leaderboard["you"] == 10

    def test_cannot_carry_two_eggs(self, game):
        game.field.eggs.update({Position(3, 2), Position(4, 2)})
        movement.step_player(game)
        movement.step_player(game)
        assert game.player.carrying
        assert game.field.eggs == {Position(4, 2)}
        assert game.score == 10
        assert game.eggs_this_level == 1


# --- Golden egg ---

def test_golden_egg_powers_up(game):
    game.field.golden = Position(3, 2)
    movement.step_player(game)
    assert game.field.golden is None
    assert game.player.powered_up
    assert game.player.power_up_time == 10
    assert game.score == 50
    assert game.progress.stats.golden_eggs_collected == 1
    assert game.progress.achievements["golden_hunter"].progress == 1


def test_golden_egg_collected_while_carrying(game):
    game.player.carrying = True
    game.field.golden = Position(3, 2)
    movement.step_player(game)
    assert game.field.golden is None
    assert game.player.carrying


# --- Escape zone ---

class TestDelivery:

    def test_delivery_banks_egg(self, game):
        game.field.eggs.add(Position(6, 6))
        game.player.position = Position(1, 3)
        game.player.carrying = True
        game.player.direction = Direction.LEFT
        movement.step_player(game)

        assert game.player.position == Position(0, 3)
        assert not game.player.carrying
        assert game.score == 20
        assert game.field.collected == [Position(0, 3)]
        assert game.mode is GameMode.PLAYING

    def test_border_without_egg_scores_nothing(self, game):
        game.player.position = Position(1, 3)
        game.player.direction = Direction.LEFT
        movement.step_player(game)
        assert game.score == 0
        assert game.field.collected == []

    def test_last_delivery_completes_level(self, game):
        game.time_left = 30
        game.player.position = Position(3, 1)
        game.player.direction = Direction.UP
        game.player.carrying = True
        movement.step_player(game)

        assert game.mode is GameMode.LEVEL_COMPLETE
        assert not game.scheduler.running
        # delivery 20 + time bonus 60 + Speed Demon 120 + Perfect Run 150
        assert game.score == 350
        assert game.progress.stats.levels_under_time == 1
        assert game.progress.stats.levels_without_hit == 1
        assert game.progress.challenges["speed_demon"].completed
        assert game.progress.challenges["perfect_run"].completed

    def test_slow_hit_level_earns_only_time_bonus(self, game):
        game.time_left = 5
        game.hits_this_level = 1
        game.player.position = Position(3, 1)
        game.player.direction = Direction.UP
        game.player.carrying = True
        movement.step_player(game)

        assert game.mode is GameMode.LEVEL_COMPLETE
        assert game.score == 20 + 10
        assert game.progress.stats.levels_under_time == 0
        assert game.progress.stats.levels_without_hit == 0

    def test_golden_egg_left_blocks_completion(self, game):
        game.field.golden = Position(6, 6)
        game.player.position = Position(3, 1)
        game.player.direction = Direction.UP
        game.player.carrying = True
        movement.step_player(game)
        assert game.mode is GameMode.PLAYING


# --- Chicken contact ---

class TestContact:

    def test_walking_into_chicken_costs_a_life(self, game):
        game.chicken.position = Position(3, 2)
        seen = _signals(game)
        movement.step_player(game)
        assert game.player.lives == 2
        assert game.player.hit
        assert game.hits_this_level == 1
        game.bus.flush()
        assert (signals.PLAYER_HIT, {"position": [3, 2], "lives": 2}) in seen

    def test_contact_resolved_once_per_meeting(self, game):
        game.chicken.position = game.player.position
        assert movement.resolve_contact(game)
        assert not movement.resolve_contact(game)
        assert game.player.lives == 2

    def test_new_meeting_hits_again(self, game):
        game.chicken.position = game.player.position
        movement.resolve_contact(game)
        game.chicken.position = Position(9, 9)
        movement.resolve_contact(game)
        game.chicken.position = game.player.position
        movement.resolve_contact(game)
        assert game.player.lives == 1

    def test_hit_drops_carried_egg_on_free_interior_cell(self, game):
        game.player.carrying = True
        game.field.eggs.add(Position(5, 5))
        game.chicken.position = Position(3, 2)
        movement.step_player(game)

        assert not game.player.carrying
        assert len(game.field.eggs) == 2
        dropped = (game.field.eggs - {Position(5, 5)}).pop()
        assert 1 <= dropped.x <= 8 and 1 <= dropped.y <= 8
        assert dropped != game.player.position

    def test_hit_flag_clears_after_flash(self, game):
        game.chicken.position = game.player.position
        movement.resolve_contact(game)
        game.pause_game()
        game.tick(0.25)
        assert game.player.hit
        game.tick(0.25)
        assert not game.player.hit

    def test_stale_hit_clear_is_ignored(self, game):
        old_generation = game.player.generation
        game.setup_level()
        game.player.hit = True
        game._clear_hit(old_generation)
        assert game.player.hit

    def test_rebuilding_level_cancels_pending_clear(self, game):
        game.chicken.position = game.player.position
        movement.resolve_contact(game)
        assert [t.name for t in game.delays.pending()] == ["hit_flash"]
        game.setup_level()
        assert game.delays.pending() == []

    def test_last_life_ends_game(self, game):
        game.player.lives = 1
        game.chicken.position = Position(3, 2)
        movement.step_player(game)
        assert game.player.lives == 0
        assert game.mode is GameMode.GAME_OVER
        assert not game.scheduler.running

    def test_hit_flash_lasts_full_half_second(self, game):
        game.chicken.position = Position(3, 2)
        while not game.player.hit:
            game.tick(0.05)
        assert game.player.lives == 2

        for _ in range(9):
            game.tick(0.05)
        assert game.player.hit
        game.tick(0.05)
        assert not game.player.hit
