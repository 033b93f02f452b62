"""Mode machine: the single authoritative game mode and its legal transitions."""
from __future__ import annotations

import logging
from typing import Callable

from chicken_showdown.types import GameMode

logger = logging.getLogger(__name__)

M = GameMode

TRANSITIONS: dict[GameMode, frozenset[GameMode]] = {
    M.SPLASH: frozenset({M.MENU}),
    M.MENU: frozenset({M.PLAYING, M.ACHIEVEMENTS, M.CUSTOMIZATION, M.MENU}),
    M.PLAYING: frozenset({M.PAUSED, M.LEVEL_COMPLETE, M.GAME_OVER,
                          M.GAME_COMPLETE, M.MENU}),
    M.PAUSED: frozenset({M.PLAYING, M.MENU}),
    M.LEVEL_COMPLETE: frozenset({M.PLAYING, M.GAME_COMPLETE, M.MENU}),
    M.GAME_OVER: frozenset({M.PLAYING, M.MENU}),
    M.ACHIEVEMENTS: frozenset({M.MENU}),
    M.CUSTOMIZATION: frozenset({M.MENU}),
    M.GAME_COMPLETE: frozenset({M.MENU}),
}

OnTransition = Callable[[GameMode, GameMode], None]


class ModeMachine:
    def __init__(
        self,
        initial: GameMode = GameMode.SPLASH,
        on_transition: OnTransition | None = None,
    ) -> None:
        self._mode = initial
        self._on_transition = on_transition

    @property
    def mode(self) -> GameMode:
        return self._mode

    def can(self, target: GameMode) -> bool:
        return target in TRANSITIONS[self._mode]

    def transition(self, target: GameMode) -> bool:
        """Move to ``target`` if the table allows it. Returns whether it moved."""
        if not self.can(target):
            logger.debug("Ignoring transition %s -> %s", self._mode.value, target.value)
            return False
        old = self._mode
        self._mode = target
        if self._on_transition is not None:
            self._on_transition(old, target)
        return True

    def force(self, target: GameMode) -> None:
        """Jump to ``target`` unconditionally (full reset, restore)."""
        old = self._mode
        self._mode = target
        if self._on_transition is not None and old is not target:
            self._on_transition(old, target)
