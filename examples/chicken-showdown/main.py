"""
Chicken Showdown - pygame front end for the chicken_showdown engine

Renders Game.observe() and turns keys into commands. All rules live in
the engine; this file only draws and forwards input.

Controls:
  Arrows      Steer the snake
  Enter       Start / next level / restart
  Space       Pause / Resume
  1-4         Pick a level (menu)
  A / C       Achievements / Customization (menu)
  S           Cycle through unlocked skins
  M           Main menu
  X           Reset all progress
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from chicken_showdown import (
    Direction,
    Game,
    GameMode,
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
    load_config,
    record_game,
)

TITLE = "Chicken Showdown"
CELL = 48
HUD_H = 96
FPS = 60
BG_COLOR = (24, 40, 24)
GRID_COLOR = (40, 64, 40)
ESCAPE_COLOR = (60, 90, 50)
HUD_COLOR = (220, 220, 200)
EGG_COLOR = (245, 240, 225)
GOLDEN_COLOR = (250, 200, 40)
TRAIL_COLOR = (150, 140, 110)
CHICKEN_COLOR = (235, 235, 235)
CHICKEN_ATTACK_COLOR = (230, 80, 60)
HIT_COLOR = (255, 60, 60)

SKIN_COLORS: dict[str, tuple[int, int, int]] = {
    "snake_normal": (80, 190, 80),
    "snake_blue": (70, 130, 230),
    "snake_gold": (220, 180, 50),
    "snake_fire": (230, 100, 40),
}

ARROWS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Chicken Showdown - pygame demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--config", type=str, default=None, metavar="FILE",
                   help="TOML file with a [game] table of overrides")
    p.add_argument("--chronicle", type=str, default=None, metavar="FILE",
                   help="Save a JSONL chronicle to FILE on quit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args()


def _cell_rect(x: int, y: int) -> pygame.Rect:
    return pygame.Rect(x * CELL, HUD_H + y * CELL, CELL, CELL)


def _draw_board(screen: pygame.Surface, view: dict) -> None:
    size = view["level"]["grid_size"]
    for y in range(size):
        for x in range(size):
            color = ESCAPE_COLOR if x == 0 or y == 0 else BG_COLOR
            rect = _cell_rect(x, y)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_COLOR, rect, 1)

    for x, y in view["collected"]:
        pygame.draw.circle(screen, TRAIL_COLOR, _cell_rect(x, y).center, CELL // 8)
    for x, y in view["eggs"]:
        pygame.draw.ellipse(screen, EGG_COLOR, _cell_rect(x, y).inflate(-CELL // 2, -CELL // 3))
    if view["golden_egg"] is not None:
        x, y = view["golden_egg"]
        pygame.draw.ellipse(screen, GOLDEN_COLOR, _cell_rect(x, y).inflate(-CELL // 3, -CELL // 4))

    chicken = view["chicken"]
    color = CHICKEN_ATTACK_COLOR if chicken["attacking"] else CHICKEN_COLOR
    inset = CELL // 6 if chicken["flap"] else CELL // 5
    pygame.draw.rect(screen, color, _cell_rect(*chicken["position"]).inflate(-inset, -inset),
                     border_radius=8)

    player = view["player"]
    color = HIT_COLOR if player["hit"] else SKIN_COLORS.get(player["skin"], (80, 190, 80))
    rect = _cell_rect(*player["position"]).inflate(-CELL // 6, -CELL // 6)
    pygame.draw.rect(screen, color, rect, border_radius=CELL // 3)
    if player["carrying"]:
        pygame.draw.circle(screen, EGG_COLOR, rect.center, CELL // 7)
    if player["powered_up"]:
        pygame.draw.rect(screen, GOLDEN_COLOR, rect, 2, border_radius=CELL // 3)


def _draw_hud(screen: pygame.Surface, font: pygame.font.Font, view: dict) -> None:
    level = view["level"]
    mode = view["mode"]
    lines = [
        f"Level {level['number']}: {level['name']}   Score {view['score']}   "
        f"Time {view['time_left']}   Lives {view['lives']}",
        f"Eggs {view['eggs_collected_this_level']}/{level['egg_count']}   "
        f"Mode: {mode.replace('_', ' ')}",
    ]
    if mode == "achievements":
        lines.append("  ".join(
            f"{a['name']} {a['progress']}/{a['target']}{'*' if a['unlocked'] else ''}"
            for a in view["achievements"]
        ))
    elif mode == "customization":
        lines.append("  ".join(
            f"{s['name']}{' [x]' if s['selected'] else ''}{'' if s['unlocked'] else ' (locked)'}"
            for s in view["skins"]
        ))
    else:
        lines.append("Arrows=Steer  Enter=Go  Space=Pause  1-4=Level  A/C/M=Screens  Esc=Quit")
    for i, line in enumerate(lines):
        surf = font.render(line, True, HUD_COLOR)
        screen.blit(surf, (10, 8 + i * 28))


def _next_skin(view: dict) -> str | None:
    unlocked = [s["id"] for s in view["skins"] if s["unlocked"]]
    if not unlocked:
        return None
    current = view["player"]["skin"]
    idx = unlocked.index(current) if current in unlocked else -1
    return unlocked[(idx + 1) % len(unlocked)]


def _enter_command(mode: GameMode):
    if mode is GameMode.LEVEL_COMPLETE:
        return NextLevel()
    if mode is GameMode.GAME_OVER:
        return RestartGame()
    return StartGame()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    config = load_config(args.config) if args.config else None
    game = Game(config=config, seed=args.seed)
    chronicle = record_game(game) if args.chronicle else None

    size = game.level.grid_size
    pygame.init()
    screen = pygame.display.set_mode((size * CELL, HUD_H + size * CELL))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 16)

    running = True
    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in ARROWS:
                    game.commands.enqueue(SetDirection(ARROWS[event.key]))
                elif event.key == pygame.K_RETURN:
                    game.commands.enqueue(_enter_command(game.mode))
                elif event.key == pygame.K_SPACE:
                    game.commands.enqueue(PauseGame())
                elif pygame.K_1 <= event.key <= pygame.K_4:
                    game.commands.enqueue(SelectLevel(event.key - pygame.K_0))
                elif event.key == pygame.K_a:
                    game.commands.enqueue(ShowAchievements())
                elif event.key == pygame.K_c:
                    game.commands.enqueue(ShowCustomization())
                elif event.key == pygame.K_s:
                    skin = _next_skin(game.observe())
                    if skin is not None:
                        game.commands.enqueue(SelectSkin(skin))
                elif event.key == pygame.K_m:
                    game.commands.enqueue(GoToMenu())
                elif event.key == pygame.K_x:
                    game.commands.enqueue(ResetGame())

        game.tick(dt)

        view = game.observe()
        screen.fill(BG_COLOR)
        _draw_board(screen, view)
        _draw_hud(screen, font, view)
        pygame.display.flip()

    if chronicle is not None:
        n = chronicle.write(args.chronicle)
        logging.getLogger(__name__).info("Wrote %d chronicle records to %s", n, args.chronicle)

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
