"""JSONL chronicle recorder - captures game signals for offline analysis."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from chicken_showdown.signals import ALL_SIGNALS, SignalBus

if TYPE_CHECKING:
    from chicken_showdown.game import Game

logger = logging.getLogger(__name__)


class ChronicleRecorder:
    """Subscribes to a SignalBus and accumulates one record per signal.

    *clock_fn* returns ``(tick_number, elapsed_seconds)`` for stamping.
    Every record is also emitted on this module's logger at DEBUG.
    """

    def __init__(
        self,
        bus: SignalBus,
        clock_fn: Callable[[], tuple[int, float]],
        signal_types: tuple[str, ...] = ALL_SIGNALS,
    ) -> None:
        self._records: list[dict[str, Any]] = []
        self._clock_fn = clock_fn
        for sig in signal_types:
            bus.subscribe(sig, self._make_handler(sig))

    def _make_handler(self, signal_type: str):
        def handler(signal: str, data: dict[str, Any]) -> None:
            tick, elapsed = self._clock_fn()
            record: dict[str, Any] = {
                "tick": tick,
                "elapsed": round(elapsed, 3),
                "type": signal_type,
            }
            record.update(data)
            self._records.append(record)
            logger.debug("%s %s", signal_type, data)
        return handler

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def of_type(self, signal_type: str) -> list[dict[str, Any]]:
        return [r for r in self._records if r["type"] == signal_type]

    def write(self, path: str | Path) -> int:
        """Write all records as JSONL. Returns number of lines written."""
        p = Path(path)
        with p.open("w") as f:
            for record in self._records:
                f.write(json.dumps(record, default=str) + "\n")
        return len(self._records)


def record_game(game: Game) -> ChronicleRecorder:
    """Attach a recorder to ``game``'s bus, stamped with its clock."""
    return ChronicleRecorder(
        game.bus, lambda: (game.clock.tick_number, game.clock.elapsed)
    )
