"""Progression - score, lifetime counters, achievements, challenges and skins.

Every flag here is sticky: once an achievement unlocks, a challenge
completes or a skin unlocks, only ``Progression.reset`` turns it back off.
Rewards are paid exactly once because the payout happens on the
false-to-true edge of the flag.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Callable

from chicken_showdown import signals
from chicken_showdown.signals import SignalBus
from chicken_showdown.types import SnapshotError

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1

LEADERBOARD_NAME = "you"


@dataclass
class Achievement:
    id: str
    name: str
    description: str
    target: int
    reward: int
    progress: int = 0
    unlocked: bool = False


@dataclass
class Skin:
    id: str
    name: str
    asset: str
    unlock_score: int
    unlocked: bool = False
    selected: bool = False


@dataclass
class DailyChallenge:
    """A challenge with a validity window. The window is informational only."""

    id: str
    name: str
    description: str
    target: int
    reward: int
    duration_hours: int
    started_at: datetime
    progress: int = 0
    completed: bool = False

    @property
    def expires_at(self) -> datetime:
        return self.started_at + timedelta(hours=self.duration_hours)


@dataclass
class LifetimeStats:
    eggs_collected: int = 0
    golden_eggs_collected: int = 0
    levels_without_hit: int = 0
    levels_under_time: int = 0


def default_achievements() -> list[Achievement]:
    return [
        Achievement("egg_collector", "Egg Collector", "Collect 50 eggs", 50, 100),
        Achievement("speed_runner", "Speed Runner",
                    "Complete 3 levels with 10+ seconds left", 3, 150),
        Achievement("untouchable", "Untouchable",
                    "Complete 2 levels without getting hit", 2, 200),
        Achievement("golden_hunter", "Golden Hunter", "Collect 5 golden eggs", 5, 250),
    ]


def default_skins() -> list[Skin]:
    return [
        Skin("snake_normal", "Green Snake", "snake_normal", 0, unlocked=True, selected=True),
        Skin("snake_blue", "Blue Viper", "snake_blue", 500),
        Skin("snake_gold", "Golden Python", "snake_gold", 1000),
        Skin("snake_fire", "Fire Serpent", "snake_fire", 2000),
    ]


def default_challenges(now: datetime) -> list[DailyChallenge]:
    return [
        DailyChallenge("quick_collector", "Quick Collector",
                       "Collect 10 eggs in one level", 10, 100, 24, now),
        DailyChallenge("perfect_run", "Perfect Run",
                       "Complete a level without getting hit", 1, 150, 24, now),
        DailyChallenge("speed_demon", "Speed Demon",
                       "Complete a level with 10+ seconds left", 1, 120, 24, now),
    ]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Progression:
    def __init__(
        self,
        bus: SignalBus | None = None,
        now_fn: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._bus = bus
        self._now_fn = now_fn
        self._score = 0
        self.stats = LifetimeStats()
        self.achievements: dict[str, Achievement] = {
            a.id: a for a in default_achievements()
        }
        self.skins: dict[str, Skin] = {s.id: s for s in default_skins()}
        self.challenges: dict[str, DailyChallenge] = {
            c.id: c for c in default_challenges(now_fn())
        }
        self.leaderboard: dict[str, int] = {}
        self._active_skin = self._default_skin().id
        self.evaluate_unlocks()
        self.update_leaderboard()

    @property
    def score(self) -> int:
        return self._score

    @property
    def active_skin(self) -> str:
        return self._active_skin

    def _publish(self, signal_name: str, **data: Any) -> None:
        if self._bus is not None:
            self._bus.publish(signal_name, **data)

    def _default_skin(self) -> Skin:
        return min(self.skins.values(), key=lambda s: s.unlock_score)

    # -- Scoring --

    def award(self, points: int, reason: str) -> None:
        """Add points, then re-check skin unlocks and the leaderboard."""
        if points < 0:
            raise ValueError("points must not be negative")
        self._score += points
        self._publish(signals.SCORE, points=points, reason=reason, total=self._score)
        self.evaluate_unlocks()
        self.update_leaderboard()

    def update_leaderboard(self) -> None:
        self.leaderboard[LEADERBOARD_NAME] = self._score

    def evaluate_unlocks(self) -> list[str]:
        """Unlock every skin whose threshold the score has reached. Idempotent."""
        unlocked: list[str] = []
        for skin in self.skins.values():
            if not skin.unlocked and self._score >= skin.unlock_score:
                skin.unlocked = True
                unlocked.append(skin.id)
                logger.info("Unlocked skin %s at score %d", skin.name, self._score)
                self._publish(signals.SKIN_UNLOCKED, skin=skin.id, score=self._score)
        return unlocked

    # -- Achievements and challenges --

    def update_achievement(self, achievement_id: str, progress: int) -> bool:
        """Overwrite progress with the caller's cumulative value.

        Returns False for an unknown id.
        """
        achievement = self.achievements.get(achievement_id)
        if achievement is None:
            return False
        achievement.progress = progress
        if progress >= achievement.target and not achievement.unlocked:
            achievement.unlocked = True
            logger.info("Achievement unlocked: %s", achievement.name)
            self._publish(
                signals.ACHIEVEMENT_UNLOCKED,
                achievement=achievement.id, reward=achievement.reward,
            )
            self.award(achievement.reward, f"achievement:{achievement.id}")
        return True

    def update_challenge(self, challenge_id: str, progress: int) -> bool:
        """Same contract as ``update_achievement``, for daily challenges."""
        challenge = self.challenges.get(challenge_id)
        if challenge is None:
            return False
        challenge.progress = progress
        if progress >= challenge.target and not challenge.completed:
            challenge.completed = True
            logger.info("Daily challenge completed: %s", challenge.name)
            self._publish(
                signals.CHALLENGE_COMPLETED,
                challenge=challenge.id, reward=challenge.reward,
            )
            self.award(challenge.reward, f"challenge:{challenge.id}")
        return True

    # -- Skins --

    def select_skin(self, skin_id: str) -> bool:
        """Make ``skin_id`` the single selected skin.

        Lock state is not checked; callers only offer unlocked skins.
        """
        if skin_id not in self.skins:
            return False
        for skin in self.skins.values():
            skin.selected = skin.id == skin_id
        self._active_skin = skin_id
        return True

    # -- Resets --

    def reset_session(self) -> None:
        """Zero the score and lifetime counters. Unlock flags survive."""
        self._score = 0
        self.stats = LifetimeStats()
        self.evaluate_unlocks()
        self.update_leaderboard()

    def reset(self) -> None:
        """Full reset back to first-launch progress."""
        self._score = 0
        self.stats = LifetimeStats()
        for achievement in self.achievements.values():
            achievement.progress = 0
            achievement.unlocked = False
        self.challenges = {c.id: c for c in default_challenges(self._now_fn())}
        default = self._default_skin()
        for skin in self.skins.values():
            if skin.unlock_score > 0:
                skin.unlocked = False
            skin.selected = skin is default
        self._active_skin = default.id
        self.evaluate_unlocks()
        self.update_leaderboard()

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "score": self._score,
            "stats": dataclasses.asdict(self.stats),
            "achievements": {
                a.id: {"progress": a.progress, "unlocked": a.unlocked}
                for a in self.achievements.values()
            },
            "skins": {
                s.id: {"unlocked": s.unlocked, "selected": s.selected}
                for s in self.skins.values()
            },
            "challenges": {
                c.id: {
                    "progress": c.progress,
                    "completed": c.completed,
                    "started_at": c.started_at.isoformat(),
                }
                for c in self.challenges.values()
            },
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Load a ``snapshot()`` dict. Nothing changes unless all of it parses."""
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported progress version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        try:
            _check_ids("achievement", data["achievements"], self.achievements)
            _check_ids("skin", data["skins"], self.skins)
            _check_ids("challenge", data["challenges"], self.challenges)
            score = int(data["score"])
            stats = LifetimeStats(**data["stats"])
            achievements = {
                aid: (int(f["progress"]), bool(f["unlocked"]))
                for aid, f in data["achievements"].items()
            }
            skins = {
                sid: (bool(f["unlocked"]), bool(f["selected"]))
                for sid, f in data["skins"].items()
            }
            challenges = {
                cid: (
                    int(f["progress"]),
                    bool(f["completed"]),
                    datetime.fromisoformat(f["started_at"]),
                )
                for cid, f in data["challenges"].items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SnapshotError(f"Malformed progress snapshot: {exc!r}") from exc
        selected = [sid for sid, (_, chosen) in skins.items() if chosen]
        if len(selected) != 1:
            raise SnapshotError(f"Expected exactly one selected skin, got {selected!r}")

        self._score = score
        self.stats = stats
        for aid, (progress, unlocked) in achievements.items():
            self.achievements[aid].progress = progress
            self.achievements[aid].unlocked = unlocked
        for sid, (unlocked, chosen) in skins.items():
            self.skins[sid].unlocked = unlocked
            self.skins[sid].selected = chosen
        for cid, (progress, completed, started_at) in challenges.items():
            challenge = self.challenges[cid]
            challenge.progress = progress
            challenge.completed = completed
            challenge.started_at = started_at
        self._active_skin = selected[0]
        self.update_leaderboard()


def _check_ids(kind: str, incoming: dict[str, Any], known: dict[str, Any]) -> None:
    unknown = sorted(set(incoming) - set(known))
    if unknown:
        raise SnapshotError(f"Unknown {kind} ids: {', '.join(unknown)}")
