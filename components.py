from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum, IntEnum, auto

# Plain data shared by the world, the resolver and the renderer

class TileType(IntEnum):
    # Stored directly in the numpy grid, so the values must fit in uint8
    FLOOR = 0
    WALL = 1
    DOOR = 2
    STAIRS = 3
    EMPTY = 4

class ItemType(Enum):
    KEY = auto()
    TREASURE_CHEST = auto()
    TREASURE = auto()
    GEM = auto()
    SCROLL = auto()
    POTION = auto()

class NPCType(Enum):
    GOBLIN = auto()
    ORC = auto()
    SKELETON = auto()
    MERCHANT = auto()
    GUARD = auto()

class GameStatus(Enum):
    PLAYING = auto()
    WON = auto()
    LOST = auto()

class MoveResult(Enum):
    MOVED = auto()
    BLOCKED = auto()
    INTERACTED = auto()

    def __bool__(self) -> bool:
        return self is MoveResult.MOVED

    @property
    def consumed_turn(self) -> bool:
        return self is not MoveResult.BLOCKED

CARDINAL_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

@dataclass
class Position:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple:
        return self.x, self.y

@dataclass(frozen=True)
class Item:
    item_type: ItemType
    label: str
    description: str

@dataclass
class WorldItem:
    """An item lying on a tile, not owned by anyone."""
    position: Position
    item: Item

@dataclass
class Player:
    position: Position
    health: int = 100
    max_health: int = 100
    level: int = 1
    experience: int = 0
    inventory: List[Item] = field(default_factory=list)

    def move_to(self, position: Position):
        self.position = Position(position.x, position.y)

    def take_damage(self, damage: int):
        self.health = max(0, self.health - damage)

    def heal(self, amount: int):
        self.health = min(self.max_health, self.health + amount)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def count_items(self, item_type: ItemType) -> int:
        return sum(1 for item in self.inventory if item.item_type == item_type)

    def find_item(self, item_type: ItemType) -> Optional[Item]:
        return next((item for item in self.inventory if item.item_type == item_type), None)

@dataclass
class NPC:
    position: Position
    npc_type: NPCType
    name: str
    inventory: List[Item] = field(default_factory=list)

    def move_to(self, position: Position):
        self.position = Position(position.x, position.y)

@dataclass
class InteractionResult:
    """Outcome of the player bumping into an NPC.

    `survivor` is the NPC to put back into the collection, or None when the
    NPC was destroyed. `dropped` items land on the collision tile.
    """
    survivor: Optional[NPC]
    dropped: List[Item] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)

@dataclass
class UseResult:
    returned_to_inventory: Optional[Item] = None
    dropped_on_ground: List[Item] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
