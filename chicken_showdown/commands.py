"""Player-facing commands and the queue that routes them to handlers."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from chicken_showdown.types import Direction

if TYPE_CHECKING:
    from chicken_showdown.game import Game


@dataclass(frozen=True)
class SetDirection:
    direction: Direction


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class PauseGame:
    pass


@dataclass(frozen=True)
class SelectSkin:
    skin_id: str


@dataclass(frozen=True)
class SelectLevel:
    number: int


@dataclass(frozen=True)
class NextLevel:
    pass


@dataclass(frozen=True)
class RestartGame:
    pass


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class GoToMenu:
    pass


@dataclass(frozen=True)
class ShowAchievements:
    pass


@dataclass(frozen=True)
class ShowCustomization:
    pass


Handler = Callable[[Any, "Game"], bool]


class CommandQueue:
    """Routes commands from an input surface to typed handlers, FIFO.

    ``handler(cmd, game) -> bool`` returns True to accept and False to
    reject. One handler per command class; later registrations overwrite.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Any], Handler] = {}
        self._pending: deque[Any] = deque()

    def handle(self, cmd_type: type[Any], handler: Handler) -> None:
        self._handlers[cmd_type] = handler

    def enqueue(self, cmd: Any) -> None:
        """Add a command to the queue. Safe to call between ticks."""
        self._pending.append(cmd)

    def pending(self) -> int:
        return len(self._pending)

    def dispatch(self, cmd: Any, game: Game) -> bool:
        """Run one command now. Raises TypeError if its type has no handler."""
        handler = self._handlers.get(type(cmd))
        if handler is None:
            raise TypeError(f"No handler registered for {type(cmd).__qualname__}")
        return handler(cmd, game)

    def drain(self, game: Game) -> list[tuple[Any, bool]]:
        """Process all pending commands. Returns ``[(cmd, accepted), ...]``."""
        results: list[tuple[Any, bool]] = []
        while self._pending:
            cmd = self._pending.popleft()
            results.append((cmd, self.dispatch(cmd, game)))
        return results
