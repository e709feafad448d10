#!/usr/bin/env python3
"""
Blob Platformer (Pygame)

Guide the blob from its spawn point into the glowing goal ring. Levels are
read from a JSON or YAML file and are either laid out platform by platform
or generated from a handful of parameters (ground, stairs, obstacles).

Dependencies
- Python 3.8+
- pygame, PyYAML

Controls
- Left/Right or A/D: move
- Space / W / Up: jump
- N: skip to the next level (wraps around)
- R: restart from the first level

Usage
    python platformer.py [levels.json]
"""
import logging
import sys
from pathlib import Path

import pygame

import game_session
from blob_player import BlobPlayer
from game_session import DEFAULT_HEIGHT, DEFAULT_WIDTH, Action
from level_data import ConfigError, load_levels

logger = logging.getLogger(__name__)

# ----------------------------- Config ---------------------------------
FPS = 60
LEVELS_PATH = Path(__file__).resolve().parent / "levels.json"

HUD_COLOR = (0, 0, 0)
END_BG_COLOR = (20, 20, 40)
END_TITLE_COLOR = (255, 255, 255)
END_SUBTITLE_COLOR = (200, 255, 100)
END_HINT_COLOR = (150, 200, 255)

KEY_ACTIONS = {
    pygame.K_SPACE: Action.JUMP,
    pygame.K_w: Action.JUMP,
    pygame.K_UP: Action.JUMP,
    pygame.K_n: Action.CYCLE_LEVEL,
    pygame.K_r: Action.RESTART,
}


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# ----------------------------- Game -----------------------------------
class Game:
    def __init__(self, levels):
        pygame.init()
        pygame.display.set_caption("Blob Platformer")
        self.screen = pygame.display.set_mode((DEFAULT_WIDTH, DEFAULT_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 14)
        self.mid_font = pygame.font.SysFont("arial", 32)
        self.big_font = pygame.font.SysFont("arial", 64, bold=True)

        self.frame = 0
        self.player = BlobPlayer()
        self.session = game_session.start(levels, self.player, self.resize)

    def resize(self, width: int, height: int):
        self.screen = pygame.display.set_mode((width, height))

    # --------------------------- Update --------------------------------
    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                action = KEY_ACTIONS.get(event.key)
                if action is not None:
                    self.session = game_session.handle_action(self.session, action, self.player, self.resize)
        return True

    def handle_input(self):
        keys = pygame.key.get_pressed()
        move = 0
        if keys[pygame.K_LEFT] or keys[pygame.K_a]:
            move -= 1
        if keys[pygame.K_RIGHT] or keys[pygame.K_d]:
            move += 1
        self.player.move_dir = move

    def update(self):
        self.handle_input()
        self.session = game_session.step(self.session, self.player, self.resize)
        self.frame += 1

    # --------------------------- Render --------------------------------
    def draw_hud(self):
        for i, line in enumerate(game_session.hud_lines(self.session)):
            surf = self.font.render(line, True, HUD_COLOR)
            self.screen.blit(surf, (10, 18 * (i + 1) - 9))

    def _blit_centered(self, font, text, color, dy):
        surf = font.render(text, True, color)
        w, h = self.screen.get_size()
        self.screen.blit(surf, surf.get_rect(center=(w // 2, h // 2 + dy)))

    def draw_end_screen(self):
        self.screen.fill(END_BG_COLOR)
        self._blit_centered(self.big_font, "YOU WIN!", END_TITLE_COLOR, -100)
        self._blit_centered(self.mid_font, f"You conquered all {self.session.level_count} levels!", END_SUBTITLE_COLOR, 0)
        self._blit_centered(self.font, "Press R to restart or N to play a specific level", END_HINT_COLOR, 80)

    def render(self):
        if self.session.completed:
            self.draw_end_screen()
            return
        world = self.session.world
        world.draw(self.screen, self.frame)
        self.player.draw(self.screen, world.theme.actor)
        self.draw_hud()

    def run(self):
        running = True
        while running:
            self.clock.tick(FPS)
            running = self.handle_events()
            if not running:
                break
            self.update()
            self.render()
            pygame.display.flip()
        pygame.quit()


def main():
    configure_logging()
    path = Path(sys.argv[1]) if len(sys.argv) >= 2 else LEVELS_PATH
    try:
        levels = load_levels(path)
    except ConfigError as e:
        logger.error("Cannot start: %s", e)
        sys.exit(1)
    Game(levels).run()


if __name__ == "__main__":
    main()
