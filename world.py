from __future__ import annotations
import numpy as np
from typing import List, Optional, Tuple, TYPE_CHECKING

from components import TileType, Position, Item, WorldItem
from map_generator import MapGenerator

if TYPE_CHECKING:
    from game_state import GameState

WALKABLE_TILES = (TileType.FLOOR, TileType.DOOR, TileType.EMPTY)

# Base class for the per-turn systems
class System:
    def update(self, state: "GameState") -> List[str]:
        return []

class GameWorld:
    """The tile grid of the current floor and the items lying on it."""
    def __init__(self, width: int, height: int, generation_type: str = 'simple_room'):
        self.size: Tuple[int, int] = (width, height)
        self.current_floor = 1
        self.tiles: np.ndarray = MapGenerator(width, height).generate(generation_type)
        self.items: List[WorldItem] = []

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[TileType]:
        if not self.is_valid_position(x, y):
            return None
        return TileType(int(self.tiles[y, x]))

    def set_tile(self, x: int, y: int, tile: TileType):
        if not self.is_valid_position(x, y):
            raise ValueError(f"Tile ({x}, {y}) is outside the {self.width}x{self.height} grid")
        self.tiles[y, x] = tile

    def is_walkable(self, x: int, y: int) -> bool:
        # Out of bounds counts as blocked
        return self.get_tile(x, y) in WALKABLE_TILES

    def item_at(self, x: int, y: int) -> Optional[WorldItem]:
        return next((wi for wi in self.items if wi.position.x == x and wi.position.y == y), None)

    def add_item(self, x: int, y: int, item: Item) -> WorldItem:
        world_item = WorldItem(Position(x, y), item)
        self.items.append(world_item)
        return world_item

    def remove_item(self, world_item: WorldItem) -> Item:
        self.items.remove(world_item)
        return world_item.item
