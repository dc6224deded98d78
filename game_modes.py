from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from components import GameStatus, ItemType, NPC, Player, Position
from entities import (create_goblin, create_orc, create_skeleton, create_merchant, create_guard,
                      create_treasure_chest, ITEM_FACTORIES)
from spawner import find_spawn_position, is_free_tile, place_npc
from world import GameWorld

if TYPE_CHECKING:
    from game_state import GameState

logger = logging.getLogger(__name__)

class GameCondition(ABC):
    """A selectable mode: its win/loss rules plus the routine that populates the world."""
    key: str = ""
    title: str = ""
    loss_description: str = "Don't let your health reach zero!"
    win_description: str = ""
    victory_message: str = "You win!"

    def __init__(self, spawn_attempts: int = 100):
        self.spawn_attempts = spawn_attempts

    def check_status(self, state: GameState) -> GameStatus:
        # Death beats any win criteria
        if not state.player.is_alive:
            return GameStatus.LOST
        return GameStatus.WON if self.is_won(state) else GameStatus.PLAYING

    @abstractmethod
    def is_won(self, state: GameState) -> bool:
        ...

    @abstractmethod
    def setup_world(self, world: GameWorld, npcs: List[NPC], player: Player, rng: random.Random):
        ...

    def _free_position(self, world: GameWorld, npcs: List[NPC], player: Optional[Player], rng: random.Random,
                       preferred: Tuple[int, int], reserved: Sequence[Tuple[int, int]] = ()) -> Tuple[int, int]:
        """`preferred` if it is free, otherwise a sampled free tile."""
        if is_free_tile(world, npcs, player, *preferred, reserved=reserved):
            return preferred
        return find_spawn_position(world, npcs, player, rng, default=preferred,
                                   attempts=self.spawn_attempts, reserved=reserved)

    def _place_npcs(self, world: GameWorld, npcs: List[NPC], player: Player, rng: random.Random,
                    cast: Sequence[Tuple[Callable[[int, int], NPC], Tuple[int, int]]]):
        for factory, preferred in cast:
            x, y = self._free_position(world, npcs, player, rng, preferred)
            place_npc(world, npcs, player, factory(x, y))

class TreasureHuntCondition(GameCondition):
    """Win: carry the treasure. The chest needs the key a skeleton guards."""
    key = "treasure_hunt"
    title = "Treasure Hunt"
    win_description = "Find and collect the treasure!"
    victory_message = "You found the treasure! Riches beyond your wildest dreams are yours."

    def is_won(self, state: GameState) -> bool:
        return any(item.item_type == ItemType.TREASURE for item in state.player.inventory)

    def setup_world(self, world: GameWorld, npcs: List[NPC], player: Player, rng: random.Random):
        start = self._free_position(world, npcs, None, rng, (10, 15))
        player.move_to(Position(*start))
        self._place_npcs(world, npcs, player, rng, [
            (create_goblin, (5, 5)),
            (create_merchant, (15, 8)),
            (create_skeleton, (25, 12)),
            (create_guard, (8, 20)),
            (create_orc, (38, 22)),
        ])
        chest_x, chest_y = self._free_position(world, npcs, player, rng, (12, 15))
        world.add_item(chest_x, chest_y, create_treasure_chest())

class SurvivalCondition(GameCondition):
    """Win: stay alive for `target_turns` turns while orcs hunt you."""
    key = "survival"
    title = "Survival"
    win_description = "Survive for the required number of turns!"
    victory_message = "You survived! The orcs retreat into the darkness."

    def __init__(self, target_turns: int = 50, spawn_attempts: int = 100):
        super().__init__(spawn_attempts)
        self.target_turns = target_turns

    def is_won(self, state: GameState) -> bool:
        return state.turn >= self.target_turns

    def setup_world(self, world: GameWorld, npcs: List[NPC], player: Player, rng: random.Random):
        start = find_spawn_position(world, npcs, None, rng, default=(10, 15), attempts=self.spawn_attempts)
        player.move_to(Position(*start))
        hunters = [("Gorbag", (40, 5)), ("Uglúk", (40, 25)), ("Shagrat", (25, 25))]
        for name, default in hunters:
            x, y = find_spawn_position(world, npcs, player, rng, default=default, attempts=self.spawn_attempts)
            place_npc(world, npcs, player, create_orc(x, y, name))
        x, y = find_spawn_position(world, npcs, player, rng, default=(15, 8), attempts=self.spawn_attempts)
        place_npc(world, npcs, player, create_merchant(x, y))

class CollectionCondition(GameCondition):
    """Win: hold at least the required number of each listed item type."""
    key = "collection"
    title = "Collection"
    win_description = "Collect all required items!"
    victory_message = "Your collection is complete!"

    def __init__(self, required_items: Optional[Sequence[Tuple[ItemType, int]]] = None, spawn_attempts: int = 100):
        super().__init__(spawn_attempts)
        if required_items is None:
            required_items = [(ItemType.GEM, 3), (ItemType.SCROLL, 2), (ItemType.POTION, 1)]
        self.required_items: List[Tuple[ItemType, int]] = list(required_items)

    def is_won(self, state: GameState) -> bool:
        for item_type, count in self.required_items:
            if state.player.count_items(item_type) < count:
                return False
        return True

    def setup_world(self, world: GameWorld, npcs: List[NPC], player: Player, rng: random.Random):
        start = self._free_position(world, npcs, None, rng, (10, 15))
        player.move_to(Position(*start))
        self._place_npcs(world, npcs, player, rng, [
            (create_merchant, (15, 8)),
            (lambda x, y: create_merchant(x, y, "The Peddler"), (30, 20)),
            (create_orc, (40, 10)),
        ])

        # Items never share a tile, so placed ones are reserved
        taken: List[Tuple[int, int]] = []
        for index, (item_type, count) in enumerate(self.required_items):
            for n in range(count):
                default = (2 + 2 * n, 2 + 2 * index)
                x, y = find_spawn_position(world, npcs, player, rng, default=default,
                                           attempts=self.spawn_attempts, reserved=taken)
                world.add_item(x, y, ITEM_FACTORIES[item_type]())
                taken.append((x, y))

GAME_MODES: Dict[str, Callable[..., GameCondition]] = {
    TreasureHuntCondition.key: TreasureHuntCondition,
    SurvivalCondition.key: SurvivalCondition,
    CollectionCondition.key: CollectionCondition,
}

def create_condition(key: str, **kwargs) -> GameCondition:
    """Builds the mode registered under `key`."""
    try:
        factory = GAME_MODES[key]
    except KeyError:
        raise ValueError(f"Unknown game mode: {key}") from None
    logger.debug("Creating game mode %s", key)
    return factory(**kwargs)
