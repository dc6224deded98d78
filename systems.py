import logging
import math
from typing import Callable, Dict, List, Optional

from world import System
from game_state import GameState
from components import (Position, Item, ItemType, NPC, NPCType, MoveResult, InteractionResult, UseResult,
                        CARDINAL_DIRECTIONS)
from entities import create_key, create_treasure, MERCHANT_WARES

logger = logging.getLogger(__name__)

def roll_damage(state: GameState) -> int:
    return state.rng.randint(state.config.min_damage, state.config.max_damage)

# --- Player actions ---

def resolve_move(state: GameState, dx: int, dy: int) -> MoveResult:
    """Moves the player one tile, or bumps into whatever NPC stands there."""
    if (dx, dy) not in CARDINAL_DIRECTIONS:
        raise ValueError(f"Moves must be a single cardinal step, got ({dx}, {dy})")

    player = state.player
    target = player.position.offset(dx, dy)

    if not state.world.is_valid_position(target.x, target.y) or not state.world.is_walkable(target.x, target.y):
        state.log.append("Can't move there!")
        return MoveResult.BLOCKED

    npc = state.npc_at(target.x, target.y)
    if npc is not None:
        # The NPC leaves the collection while it is being dealt with
        index = state.npcs.index(npc)
        state.npcs.pop(index)
        result = interact_with_npc(state, npc)
        state.log.extend(result.messages)
        for item in result.dropped:
            state.world.add_item(target.x, target.y, item)
        if result.survivor is not None:
            state.npcs.insert(index, result.survivor)
        return MoveResult.INTERACTED

    player.move_to(target)
    state.log.append(f"Moved to ({target.x}, {target.y})")
    return MoveResult.MOVED

def pickup_item(state: GameState) -> Optional[Item]:
    player = state.player
    world_item = state.world.item_at(player.position.x, player.position.y)
    if world_item is None:
        state.log.append("There is nothing here to pick up.")
        return None

    item = state.world.remove_item(world_item)
    player.inventory.append(item)
    state.log.append(f"You picked up {item.label}.")
    return item

def use_item(state: GameState, item: Item) -> UseResult:
    """Applies `item`, which the caller has already taken out of the inventory.

    The result says what goes back into the inventory and what lands on the
    floor; the caller applies both.
    """
    effect = ITEM_EFFECTS.get(item.item_type, _use_without_effect)
    result = effect(state, item)
    state.log.extend(result.messages)
    return result

def _use_key(state: GameState, key: Item) -> UseResult:
    inventory = state.player.inventory
    chest = state.player.find_item(ItemType.TREASURE_CHEST)
    if chest is None:
        # The key is spent even when there is nothing to open
        return UseResult(messages=[f"There is nothing to unlock. The {key.label} snaps in the empty air."])

    inventory.remove(chest)
    treasure = create_treasure()
    return UseResult(
        dropped_on_ground=[treasure],
        messages=[f"You turn the {key.label} in the lock of the {chest.label}. It creaks open!",
                  f"{treasure.label} spills onto the floor."],
    )

def _use_treasure_chest(state: GameState, chest: Item) -> UseResult:
    return UseResult(returned_to_inventory=chest,
                     messages=[f"The {chest.label} is locked. You need a key."])

def _use_without_effect(state: GameState, item: Item) -> UseResult:
    return UseResult(messages=[f"You use the {item.label}, but nothing happens."])

ITEM_EFFECTS: Dict[ItemType, Callable[[GameState, Item], UseResult]] = {
    ItemType.KEY: _use_key,
    ItemType.TREASURE_CHEST: _use_treasure_chest,
}

# --- Collision interactions ---

def interact_with_npc(state: GameState, npc: NPC) -> InteractionResult:
    """Reaction of an NPC the player walked into."""
    interaction = INTERACTIONS.get(npc.npc_type, _talk)
    return interaction(state, npc)

def _skeleton_collapses(state: GameState, npc: NPC) -> InteractionResult:
    key = create_key()
    return InteractionResult(
        survivor=None,
        dropped=[key],
        messages=[f"{npc.name} collapses to a pile of bones!", f"A {key.label} clatters to the floor."],
    )

def _orc_strikes(state: GameState, npc: NPC) -> InteractionResult:
    damage = roll_damage(state)
    state.player.take_damage(damage)
    return InteractionResult(survivor=npc, messages=[f"{npc.name} attacks you for {damage} damage!"])

def _goblin_taunts(state: GameState, npc: NPC) -> InteractionResult:
    return InteractionResult(survivor=npc, messages=[f"{npc.name} cackles and dances out of reach."])

def _talk(state: GameState, npc: NPC) -> InteractionResult:
    return InteractionResult(survivor=npc, messages=[f"You interact with {npc.name}."])

INTERACTIONS: Dict[NPCType, Callable[[GameState, NPC], InteractionResult]] = {
    NPCType.SKELETON: _skeleton_collapses,
    NPCType.ORC: _orc_strikes,
    NPCType.GOBLIN: _goblin_taunts,
}

# --- Autonomous NPC turns ---

def can_step(state: GameState, npc: NPC, x: int, y: int) -> bool:
    """A tile an NPC may enter: in bounds, walkable and nobody else on it."""
    world = state.world
    return world.is_valid_position(x, y) and world.is_walkable(x, y) and not state.is_occupied(x, y, ignore=npc)

def random_walk(state: GameState, npc: NPC, attempts: int = 2) -> Optional[Position]:
    """Tries a random cardinal step up to `attempts` times. Returns the new position, if any."""
    for _ in range(attempts):
        dx, dy = state.rng.choice(CARDINAL_DIRECTIONS)
        target = npc.position.offset(dx, dy)
        if can_step(state, npc, target.x, target.y):
            npc.move_to(target)
            return target
    return None

def merchant_turn(state: GameState, npc: NPC) -> List[str]:
    config = state.config
    messages: List[str] = []
    if state.rng.random() >= config.merchant_move_chance:
        return messages

    target = random_walk(state, npc)
    if target is None:
        return messages

    crushed = state.world.item_at(target.x, target.y)
    if crushed is not None:
        state.world.remove_item(crushed)
        messages.append(f"The merchant's cart crushes the {crushed.item.label}!")

    if state.rng.random() < config.merchant_drop_chance:
        item = state.rng.choice(MERCHANT_WARES)()
        state.world.add_item(target.x, target.y, item)
        messages.append(f"{npc.name} drops a {item.label}.")
    return messages

def orc_turn(state: GameState, npc: NPC) -> List[str]:
    player_pos = state.player.position
    dx = player_pos.x - npc.position.x
    dy = player_pos.y - npc.position.y

    if math.hypot(dx, dy) > state.config.orc_aggro_radius:
        random_walk(state, npc)
        return []

    step = npc.position.offset(0 if dx == 0 else dx // abs(dx), 0 if dy == 0 else dy // abs(dy))
    if step == player_pos:
        damage = roll_damage(state)
        state.player.take_damage(damage)
        return [f"{npc.name} attacks you for {damage} damage!"]

    if can_step(state, npc, step.x, step.y):
        npc.move_to(step)
    return []

class NPCBehaviorSystem(System):
    """Gives every NPC its own action after each turn-consuming player action."""
    def __init__(self):
        # Goblins, skeletons and guards only react to collisions
        self.behaviors: Dict[NPCType, Callable[[GameState, NPC], List[str]]] = {
            NPCType.MERCHANT: merchant_turn,
            NPCType.ORC: orc_turn,
        }

    def update(self, state: GameState) -> List[str]:
        messages: List[str] = []
        for npc in list(state.npcs):
            behavior = self.behaviors.get(npc.npc_type)
            if behavior is None:
                continue
            messages.extend(behavior(state, npc))
        logger.debug("NPC pass finished with %d message(s)", len(messages))
        return messages
