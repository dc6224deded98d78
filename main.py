import argparse
import logging
import random
from typing import Optional

import pygame

from components import GameStatus
from config import GameConfig
from game import Game
from game_modes import GAME_MODES
from render import MENU_PAGE_SIZE, PygameRenderer

logger = logging.getLogger(__name__)

MOVE_KEYS = {
    pygame.K_UP: (0, -1), pygame.K_w: (0, -1),
    pygame.K_DOWN: (0, 1), pygame.K_s: (0, 1),
    pygame.K_LEFT: (-1, 0), pygame.K_a: (-1, 0),
    pygame.K_RIGHT: (1, 0), pygame.K_d: (1, 0),
}
PICKUP_KEYS = (pygame.K_g, pygame.K_COMMA)
USE_KEY = pygame.K_u
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)
NEW_GAME_KEY = pygame.K_n
PAGE_KEYS = {pygame.K_LEFTBRACKET: -1, pygame.K_RIGHTBRACKET: 1}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

MODE_KEYS = list(GAME_MODES)

class GameApp:
    """Window lifecycle, key bindings and modal dialogs. All rules live in Game."""
    def __init__(self, config: GameConfig, rng: random.Random, mode: Optional[str] = None):
        self.config = config
        self.rng = rng
        self.renderer = PygameRenderer(config)
        self.game: Optional[Game] = None
        self.overlay: Optional[str] = None
        self.menu_page = 0
        self.status = GameStatus.PLAYING
        self.running = True
        if mode is not None:
            self.start(mode)

    def start(self, mode: str):
        self.game = Game.new_game(mode, self.config, self.rng)
        self.overlay = None
        self.status = GameStatus.PLAYING

    def back_to_mode_select(self):
        self.game = None
        self.overlay = None
        self.status = GameStatus.PLAYING

    def handle_key(self, key: int):
        if self.game is None:
            self._handle_mode_select(key)
        elif self.overlay == 'quit':
            if key == pygame.K_y:
                self.running = False
            elif key in (pygame.K_n, pygame.K_ESCAPE):
                self.overlay = None
        elif key in QUIT_KEYS:
            self.overlay = 'quit'
        elif self.status is not GameStatus.PLAYING:
            # Finished games accept no more commands
            if key == NEW_GAME_KEY:
                self.back_to_mode_select()
        elif self.overlay == 'inventory':
            self._handle_inventory(key)
        else:
            self._handle_command(key)

    def _handle_mode_select(self, key: int):
        if key in QUIT_KEYS:
            self.running = False
            return
        index = key - pygame.K_1
        if 0 <= index < len(MODE_KEYS):
            self.start(MODE_KEYS[index])

    def _handle_inventory(self, key: int):
        if key in PAGE_KEYS:
            last_page = max(0, (len(self.game.inventory) - 1) // MENU_PAGE_SIZE)
            self.menu_page = min(max(self.menu_page + PAGE_KEYS[key], 0), last_page)
            return
        self.overlay = None
        if pygame.K_a <= key <= pygame.K_z:
            index = self.menu_page * MENU_PAGE_SIZE + key - pygame.K_a
            if self.game.use_and_advance(index) is None:
                self.game.state.log.append("Action canceled.")
            self.status = self.game.check_status()

    def _handle_command(self, key: int):
        if key in MOVE_KEYS:
            self.game.move_player(*MOVE_KEYS[key])
        elif key in PICKUP_KEYS:
            self.game.pickup_and_advance()
        elif key == USE_KEY:
            if not self.game.inventory:
                self.game.state.log.append("Your inventory is empty.")
            else:
                self.overlay = 'inventory'
                self.menu_page = 0
            return
        else:
            return
        self.status = self.game.check_status()

    def run(self):
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            if self.game is None:
                modes = [(factory.title, factory.win_description) for factory in GAME_MODES.values()]
                self.renderer.draw_mode_select(modes)
            else:
                self.renderer.draw(self.game, self.overlay, self.status, self.menu_page)
        pygame.quit()

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn-based dungeon simulation")
    parser.add_argument("--mode", choices=MODE_KEYS, help="skip the mode selection screen")
    parser.add_argument("--seed", type=int, help="seed for reproducible runs")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                        help="diagnostic logging level")
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    config = GameConfig()
    rng = random.Random(args.seed)
    logger.info("Starting with seed %s", args.seed)
    GameApp(config, rng, args.mode).run()

if __name__ == "__main__":
    main()
