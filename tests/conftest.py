from __future__ import annotations

import pytest

from chicken_showdown.game import Game
from chicken_showdown.types import Position


@pytest.fixture
def game() -> Game:
    """Level 1 in progress with an empty board and the chicken parked far away."""
    g = Game(seed=42)
    g.go_to_menu()
    assert g.start_game()
    g.field.eggs.clear()
    g.field.golden = None
    g.chicken.position = Position(9, 9)
    return g
