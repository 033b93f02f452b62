"""Unit tests for SignalBus."""
from __future__ import annotations

from chicken_showdown import signals
from chicken_showdown.signals import SignalBus


def test_subscribe_and_flush():
    bus = SignalBus()
    received = []
    bus.subscribe("egg_collected", lambda name, data: received.append((name, data)))
    bus.publish("egg_collected", remaining=2)
    bus.flush()
    assert received == [("egg_collected", {"remaining": 2})]


def test_nothing_dispatched_before_flush():
    bus = SignalBus()
    received = []
    bus.subscribe("score", lambda name, data: received.append(data))
    bus.publish("score", points=10)
    assert received == []
    assert bus.pending() == 1
    bus.flush()
    assert bus.pending() == 0
    assert len(received) == 1


def test_publish_without_subscribers():
    bus = SignalBus()
    bus.publish("nobody_listens", value=1)
    bus.flush()


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name, data):
        received.append(name)

    bus.subscribe("mode", handler)
    bus.unsubscribe("mode", handler)
    bus.unsubscribe("mode", handler)
    bus.unsubscribe("never_subscribed", handler)
    bus.publish("mode")
    bus.flush()
    assert received == []


def test_signals_published_during_flush_wait_for_next_flush():
    bus = SignalBus()
    received = []

    def chain(name, data):
        received.append(name)
        bus.publish("second")

    bus.subscribe("first", chain)
    bus.subscribe("second", lambda name, data: received.append(name))
    bus.publish("first")
    bus.flush()
    assert received == ["first"]
    bus.flush()
    assert received == ["first", "second"]


def test_subscribe_all_covers_every_game_signal():
    bus = SignalBus()
    received = []
    bus.subscribe_all(lambda name, data: received.append(name))
    for name in signals.ALL_SIGNALS:
        bus.publish(name)
    bus.flush()
    assert received == list(signals.ALL_SIGNALS)


def test_clear_drops_queue():
    bus = SignalBus()
    received = []
    bus.subscribe("score", lambda name, data: received.append(name))
    bus.publish("score")
    bus.clear()
    bus.flush()
    assert received == []
