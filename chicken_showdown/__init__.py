"""chicken-showdown - tick-driven snake-versus-chicken arcade simulation."""

from chicken_showdown.chronicle import ChronicleRecorder, record_game
from chicken_showdown.commands import (
    CommandQueue,
    GoToMenu,
    NextLevel,
    PauseGame,
    ResetGame,
    RestartGame,
    SelectLevel,
    SelectSkin,
    SetDirection,
    ShowAchievements,
    ShowCustomization,
    StartGame,
)
from chicken_showdown.config import GameConfig, load_config
from chicken_showdown.entities import Chicken, EggField, Player
from chicken_showdown.game import Game
from chicken_showdown.grid import Grid
from chicken_showdown.levels import LEVELS, Level, get_level
from chicken_showdown.progression import (
    Achievement,
    DailyChallenge,
    LifetimeStats,
    Progression,
    Skin,
)
from chicken_showdown.signals import SignalBus
from chicken_showdown.types import (
    Direction,
    GameMode,
    Position,
    SnapshotError,
    TickContext,
)

__all__ = [
    "Achievement",
    "Chicken",
    "ChronicleRecorder",
    "CommandQueue",
    "DailyChallenge",
    "Direction",
    "EggField",
    "Game",
    "GameConfig",
    "GameMode",
    "GoToMenu",
    "Grid",
    "LEVELS",
    "Level",
    "LifetimeStats",
    "NextLevel",
    "PauseGame",
    "Player",
    "Position",
    "Progression",
    "ResetGame",
    "RestartGame",
    "SelectLevel",
    "SelectSkin",
    "SetDirection",
    "ShowAchievements",
    "ShowCustomization",
    "SignalBus",
    "Skin",
    "SnapshotError",
    "StartGame",
    "TickContext",
    "get_level",
    "load_config",
    "record_game",
]
