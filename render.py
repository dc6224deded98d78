from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from components import GameStatus, ItemType, NPCType, TileType
from config import GameConfig
from game import Game

Color = Tuple[int, int, int]

# One letter key per entry on a menu page
MENU_PAGE_SIZE = 26
NEW_GAME_HINT = "[n] new game   [q] quit"

TILE_GLYPHS: Dict[TileType, str] = {
    TileType.WALL: '#',
    TileType.FLOOR: '.',
    TileType.DOOR: '+',
    TileType.STAIRS: '>',
    TileType.EMPTY: ' ',
}

NPC_GLYPHS: Dict[NPCType, Tuple[str, Color]] = {
    NPCType.GOBLIN: ('g', (0, 255, 0)),
    NPCType.ORC: ('O', (180, 50, 50)),
    NPCType.SKELETON: ('S', (200, 200, 200)),
    NPCType.MERCHANT: ('M', (100, 150, 255)),
    NPCType.GUARD: ('G', (70, 70, 150)),
}

ITEM_GLYPHS: Dict[ItemType, Tuple[str, Color]] = {
    ItemType.KEY: ('-', (255, 215, 0)),
    ItemType.TREASURE_CHEST: ('=', (139, 69, 19)),
    ItemType.TREASURE: ('$', (255, 215, 0)),
    ItemType.GEM: ('*', (255, 20, 147)),
    ItemType.SCROLL: ('?', (245, 245, 220)),
    ItemType.POTION: ('!', (138, 43, 226)),
}

COLORS: Dict[str, Color] = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'gray': (50, 50, 50),
    'log_text': (200, 200, 200),
    'wall_fg': (130, 110, 90),
    'floor_fg': (90, 90, 90),
    'door_fg': (150, 110, 50),
    'player': (255, 0, 0),
    'yellow': (255, 255, 0),
    'green': (0, 200, 0),
    'red': (220, 40, 40),
}

TILE_COLORS: Dict[TileType, str] = {
    TileType.WALL: 'wall_fg',
    TileType.FLOOR: 'floor_fg',
    TileType.DOOR: 'door_fg',
    TileType.STAIRS: 'white',
    TileType.EMPTY: 'black',
}

@dataclass
class Camera:
    x: int
    y: int
    width: int
    height: int

    def update(self, target_x: int, target_y: int, grid_width: int, grid_height: int, cell_size: int):
        # Center on the player, clamped to the map edges
        self.x = target_x * cell_size - self.width // 2
        self.y = target_y * cell_size - self.height // 2
        self.x = max(0, min(self.x, grid_width * cell_size - self.width))
        self.y = max(0, min(self.y, grid_height * cell_size - self.height))

class PygameRenderer:
    """Draws a Game. Reads state only through the Game accessors."""
    def __init__(self, config: GameConfig):
        self.config = config
        pygame.init()
        self.screen = pygame.display.set_mode((config.screen_width, config.screen_height))
        pygame.display.set_caption("Roguelike Game")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('monospace', 16)
        self.title_font = pygame.font.SysFont('monospace', 24, bold=True)
        self.text_cache: Dict[Tuple[str, Color], pygame.Surface] = {}
        viewport_width = config.screen_width - config.info_panel_width
        viewport_height = config.screen_height - config.log_panel_height
        self.camera = Camera(0, 0, viewport_width, viewport_height)

    def _glyph(self, char: str, color: Color) -> pygame.Surface:
        cache_key = (char, color)
        if cache_key not in self.text_cache:
            self.text_cache[cache_key] = self.font.render(char, True, color)
        return self.text_cache[cache_key]

    def _text(self, text: str, pos: Tuple[int, int], color: Color = COLORS['log_text'], font=None):
        surface = (font or self.font).render(text, True, color)
        self.screen.blit(surface, pos)

    def draw(self, game: Game, overlay: Optional[str] = None, status: GameStatus = GameStatus.PLAYING,
             menu_page: int = 0):
        player = game.player
        world = game.state.world
        self.camera.update(player.position.x, player.position.y, world.width, world.height, self.config.cell_size)

        self.screen.fill(COLORS['black'])
        self.draw_map(game)
        self.draw_info_panel(game)
        self.draw_log(game)

        if overlay == 'inventory':
            labels = [item.label for item in game.inventory]
            pages = max(1, -(-len(labels) // MENU_PAGE_SIZE))
            title = "Use which item?"
            if pages > 1:
                title += f" (page {menu_page + 1}/{pages}, [ and ] to turn)"
            start = menu_page * MENU_PAGE_SIZE
            self.draw_menu(title, labels[start:start + MENU_PAGE_SIZE])
        elif overlay == 'quit':
            self.draw_banner("Quit the game?", "[y] yes   [n] no", COLORS['yellow'])
        elif status is GameStatus.WON:
            self.draw_banner("VICTORY", game.condition.victory_message, COLORS['green'], NEW_GAME_HINT)
        elif status is GameStatus.LOST:
            self.draw_banner("GAME OVER", game.condition.loss_description, COLORS['red'], NEW_GAME_HINT)

        pygame.display.flip()
        self.clock.tick(self.config.fps)

    def draw_map(self, game: Game):
        cs = self.config.cell_size
        half_cs = cs // 2
        cam = self.camera
        world = game.state.world

        start_col, end_col = cam.x // cs, (cam.x + cam.width) // cs + 1
        start_row, end_row = cam.y // cs, (cam.y + cam.height) // cs + 1

        for y in range(start_row, end_row):
            for x in range(start_col, end_col):
                tile = game.tile_at(x, y)
                if tile is None:
                    continue
                char, color = TILE_GLYPHS[tile], COLORS[TILE_COLORS[tile]]

                world_item = game.item_at(x, y)
                if world_item is not None:
                    char, color = ITEM_GLYPHS[world_item.item.item_type]

                npc = game.npc_at(x, y)
                if npc is not None:
                    char, color = NPC_GLYPHS[npc.npc_type]

                if game.player.position.x == x and game.player.position.y == y:
                    char, color = '@', COLORS['player']

                if char == ' ':
                    continue
                screen_x = x * cs - cam.x
                screen_y = y * cs - cam.y
                if not (0 <= screen_x < cam.width and 0 <= screen_y < cam.height):
                    continue
                surface = self._glyph(char, color)
                self.screen.blit(surface, surface.get_rect(center=(screen_x + half_cs, screen_y + half_cs)))

    def draw_info_panel(self, game: Game):
        panel_x = self.config.screen_width - self.config.info_panel_width
        panel = pygame.Rect(panel_x, 0, self.config.info_panel_width, self.config.screen_height - self.config.log_panel_height)
        pygame.draw.rect(self.screen, COLORS['gray'], panel)

        player = game.player
        lines = [
            "Player Stats",
            f"Level: {player.level}",
            f"Health: {player.health}/{player.max_health}",
            f"Experience: {player.experience}",
            f"Floor: {game.state.world.current_floor}",
            f"Position: ({player.position.x}, {player.position.y})",
            f"Turn: {game.state.turn}",
            "",
            f"Goal: {game.condition.win_description}",
            "",
            "Inventory",
        ]
        lines += [f"  {item.label}" for item in game.inventory] or ["  Empty"]
        lines += ["", "Arrows/WASD: move", "G: pick up  U: use", "Esc: quit"]
        for i, line in enumerate(lines):
            self._text(line, (panel_x + 10, 10 + i * 20))

    def draw_log(self, game: Game):
        panel_y = self.config.screen_height - self.config.log_panel_height
        pygame.draw.rect(self.screen, COLORS['gray'], pygame.Rect(0, panel_y, self.config.screen_width, self.config.log_panel_height), 1)
        visible_lines = (self.config.log_panel_height - 10) // 20
        for i, msg in enumerate(game.log_tail(visible_lines)):
            self._text(msg, (20, panel_y + 5 + i * 20))

    def draw_menu(self, title: str, entries: Sequence[str]):
        menu_width = 450
        menu_height = (len(entries) + 2) * 25
        menu_x = (self.camera.width - menu_width) // 2
        menu_y = (self.camera.height - menu_height) // 2

        menu_rect = pygame.Rect(menu_x, menu_y, menu_width, menu_height)
        pygame.draw.rect(self.screen, COLORS['black'], menu_rect)
        pygame.draw.rect(self.screen, COLORS['white'], menu_rect, 2)
        self._text(title, (menu_x + 10, menu_y + 10), COLORS['yellow'])
        for i, entry in enumerate(entries):
            self._text(f"({chr(ord('a') + i)}) {entry}", (menu_x + 15, menu_y + 35 + i * 25), COLORS['white'])

    def draw_banner(self, title: str, subtitle: str, color: Color, hint: Optional[str] = None):
        width, height = 600, 140 if hint else 110
        x = (self.camera.width - width) // 2
        y = (self.camera.height - height) // 2
        rect = pygame.Rect(x, y, width, height)
        pygame.draw.rect(self.screen, COLORS['black'], rect)
        pygame.draw.rect(self.screen, color, rect, 2)
        self._text(title, (x + 20, y + 15), color, self.title_font)
        self._text(subtitle, (x + 20, y + 60), COLORS['white'])
        if hint:
            self._text(hint, (x + 20, y + 95), COLORS['yellow'])

    def draw_mode_select(self, modes: List[Tuple[str, str]]):
        """Startup screen listing (title, description) pairs."""
        self.screen.fill(COLORS['black'])
        self._text("Choose a game mode", (40, 40), COLORS['yellow'], self.title_font)
        for i, (title, description) in enumerate(modes):
            self._text(f"[{i + 1}] {title} - {description}", (40, 100 + i * 30), COLORS['white'])
        self._text("[Esc] quit", (40, 100 + len(modes) * 30 + 20))
        pygame.display.flip()
        self.clock.tick(self.config.fps)
