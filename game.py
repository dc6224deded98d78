from __future__ import annotations
import logging
import random
from typing import List, Optional, Union

from components import GameStatus, Item, MoveResult, NPC, Player, TileType, UseResult, WorldItem
from config import GameConfig
from entities import create_player
from game_modes import GameCondition, create_condition
from game_state import GameState, MessageLog
from systems import NPCBehaviorSystem, resolve_move, pickup_item, use_item
from world import GameWorld

logger = logging.getLogger(__name__)

WELCOME_MESSAGES = (
    "Welcome to the dungeon!",
    "Press arrow keys to move.",
    "Explore carefully...",
)

def new_game_state(condition: GameCondition, config: Optional[GameConfig] = None,
                   rng: Optional[random.Random] = None) -> GameState:
    """Creates the world for `condition` and lets the mode populate it."""
    config = config or GameConfig()
    rng = rng or random.Random()

    world = GameWorld(config.grid_width, config.grid_height, config.map_generation_type)
    player = create_player(*config.player_start, config=config)
    npcs: List[NPC] = []
    condition.setup_world(world, npcs, player, rng)

    log = MessageLog(config.log_capacity, WELCOME_MESSAGES)
    log.append(f"{condition.title}: {condition.win_description}")
    logger.info("Started %s with %d NPC(s) and %d item(s)", condition.key, len(npcs), len(world.items))
    return GameState(player=player, world=world, npcs=npcs, config=config, log=log,
                     condition=condition, rng=rng)

class Game:
    """Command interface for the presentation layer.

    Every command mutates the state and writes to its log. Commands that
    consume a turn are expected to be followed by `run_npc_turn`; the
    `*_and_advance` helpers do both.
    """
    def __init__(self, state: GameState):
        self.state = state
        self.npc_system = NPCBehaviorSystem()

    @classmethod
    def new_game(cls, mode: Union[str, GameCondition], config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None) -> Game:
        config = config or GameConfig()
        if isinstance(mode, str):
            kwargs = {"spawn_attempts": config.spawn_attempts}
            if mode == "survival":
                kwargs["target_turns"] = config.survival_target_turns
            mode = create_condition(mode, **kwargs)
        return cls(new_game_state(mode, config, rng))

    # --- Commands ---

    def attempt_move(self, dx: int, dy: int) -> MoveResult:
        return resolve_move(self.state, dx, dy)

    def pickup(self) -> Optional[Item]:
        return pickup_item(self.state)

    def use_item(self, item: Item) -> UseResult:
        """Uses `item` from the inventory and applies the outcome to player and world."""
        player = self.state.player
        if item not in player.inventory:
            raise ValueError(f"{item.label} is not in the inventory")
        player.inventory.remove(item)
        result = use_item(self.state, item)
        if result.returned_to_inventory is not None:
            player.inventory.append(result.returned_to_inventory)
        for dropped in result.dropped_on_ground:
            self.state.world.add_item(player.position.x, player.position.y, dropped)
        return result

    def run_npc_turn(self) -> List[str]:
        messages = self.npc_system.update(self.state)
        self.state.log.extend(messages)
        self.state.turn += 1
        logger.debug("Turn %d resolved", self.state.turn)
        return messages

    def check_status(self) -> GameStatus:
        status = self.state.condition.check_status(self.state)
        if status is not GameStatus.PLAYING and not self.state.game_over:
            self.state.game_over = True
            logger.info("Game over on turn %d: %s", self.state.turn, status.name)
        return status

    def move_player(self, dx: int, dy: int) -> MoveResult:
        result = self.attempt_move(dx, dy)
        if result.consumed_turn:
            self.run_npc_turn()
        return result

    def pickup_and_advance(self) -> Optional[Item]:
        # Searching an empty tile is free
        item = self.pickup()
        if item is not None:
            self.run_npc_turn()
        return item

    def use_and_advance(self, index: int) -> Optional[UseResult]:
        inventory = self.state.player.inventory
        if not 0 <= index < len(inventory):
            return None
        result = self.use_item(inventory[index])
        self.run_npc_turn()
        return result

    # --- Read-only accessors for rendering ---

    @property
    def player(self) -> Player:
        return self.state.player

    @property
    def inventory(self) -> List[Item]:
        return list(self.state.player.inventory)

    @property
    def condition(self) -> GameCondition:
        return self.state.condition

    def tile_at(self, x: int, y: int) -> Optional[TileType]:
        return self.state.world.get_tile(x, y)

    def npc_at(self, x: int, y: int) -> Optional[NPC]:
        return self.state.npc_at(x, y)

    def item_at(self, x: int, y: int) -> Optional[WorldItem]:
        return self.state.world.item_at(x, y)

    def log_tail(self, count: int = 10) -> List[str]:
        return self.state.log.tail(count)
