from __future__ import annotations
from components import Position, Player, NPC, NPCType, Item, ItemType
from config import GameConfig

def create_player(x: int, y: int, config: GameConfig | None = None) -> Player:
    health = config.player_health if config else 100
    return Player(Position(x, y), health=health, max_health=health)

def create_goblin(x: int, y: int, name: str = "Grob") -> NPC:
    return NPC(Position(x, y), NPCType.GOBLIN, name)

def create_orc(x: int, y: int, name: str = "Gorbag") -> NPC:
    return NPC(Position(x, y), NPCType.ORC, name)

def create_skeleton(x: int, y: int, name: str = "Bonecrusher") -> NPC:
    return NPC(Position(x, y), NPCType.SKELETON, name)

def create_merchant(x: int, y: int, name: str = "The Merchant") -> NPC:
    return NPC(Position(x, y), NPCType.MERCHANT, name)

def create_guard(x: int, y: int, name: str = "Guard Captain") -> NPC:
    return NPC(Position(x, y), NPCType.GUARD, name)

def create_key() -> Item:
    return Item(ItemType.KEY, "Rusty Key", "An old iron key. It might open something.")

def create_treasure_chest() -> Item:
    return Item(ItemType.TREASURE_CHEST, "Treasure Chest", "A heavy, locked chest bound with iron.")

def create_treasure() -> Item:
    return Item(ItemType.TREASURE, "Ancient Treasure", "Gold coins and jewels from a forgotten age.")

def create_gem() -> Item:
    return Item(ItemType.GEM, "Sparkling Gem", "A gem that glitters in the torchlight.")

def create_scroll() -> Item:
    return Item(ItemType.SCROLL, "Dusty Scroll", "A scroll covered in faded runes.")

def create_potion() -> Item:
    return Item(ItemType.POTION, "Murky Potion", "A small vial of murky liquid.")

# What a wandering merchant may leave behind, picked uniformly
MERCHANT_WARES = (create_gem, create_scroll, create_potion)

ITEM_FACTORIES = {
    ItemType.KEY: create_key,
    ItemType.TREASURE_CHEST: create_treasure_chest,
    ItemType.TREASURE: create_treasure,
    ItemType.GEM: create_gem,
    ItemType.SCROLL: create_scroll,
    ItemType.POTION: create_potion,
}
