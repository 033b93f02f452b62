"""In-process event bus with per-tick flush semantics."""
from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]

SCORE = "score"
EGG_COLLECTED = "egg_collected"
GOLDEN_EGG = "golden_egg"
EGG_DELIVERED = "egg_delivered"
EGG_DROPPED = "egg_dropped"
PLAYER_HIT = "player_hit"
POWER_UP_ENDED = "power_up_ended"
ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
CHALLENGE_COMPLETED = "challenge_completed"
SKIN_UNLOCKED = "skin_unlocked"
MODE = "mode"
LEVEL_COMPLETE = "level_complete"
GAME_OVER = "game_over"
COMMAND_REJECTED = "command_rejected"

ALL_SIGNALS: tuple[str, ...] = (
    SCORE, EGG_COLLECTED, GOLDEN_EGG, EGG_DELIVERED, EGG_DROPPED, PLAYER_HIT,
    POWER_UP_ENDED, ACHIEVEMENT_UNLOCKED, CHALLENGE_COMPLETED, SKIN_UNLOCKED,
    MODE, LEVEL_COMPLETE, GAME_OVER, COMMAND_REJECTED,
)


class SignalBus:
    """Queues published signals until ``flush``; handlers never run mid-tick."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        for signal_name in ALL_SIGNALS:
            self.subscribe(signal_name, handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()
