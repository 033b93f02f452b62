"""Tests for CommandQueue routing."""
import pytest

from chicken_showdown.commands import CommandQueue, SetDirection, StartGame
from chicken_showdown.types import Direction


def test_drain_is_fifo_and_reports_acceptance():
    queue = CommandQueue()
    order = []
    queue.handle(StartGame, lambda cmd, game: order.append("start") or True)
    queue.handle(SetDirection, lambda cmd, game: order.append(cmd.direction) or False)

    queue.enqueue(StartGame())
    queue.enqueue(SetDirection(Direction.UP))
    assert queue.pending() == 2

    results = queue.drain(None)
    assert order == ["start", Direction.UP]
    assert results == [(StartGame(), True), (SetDirection(Direction.UP), False)]
    assert queue.pending() == 0


def test_missing_handler_raises():
    queue = CommandQueue()
    queue.enqueue(StartGame())
    with pytest.raises(TypeError):
        queue.drain(None)


def test_later_handler_overwrites():
    queue = CommandQueue()
    queue.handle(StartGame, lambda cmd, game: False)
    queue.handle(StartGame, lambda cmd, game: True)
    assert queue.dispatch(StartGame(), None) is True


def test_commands_are_frozen():
    cmd = SetDirection(Direction.LEFT)
    with pytest.raises(AttributeError):
        cmd.direction = Direction.RIGHT
