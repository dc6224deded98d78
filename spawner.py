import logging
import random
from typing import Collection, List, Optional, Tuple

from components import NPC, Player, Position
from world import GameWorld

logger = logging.getLogger(__name__)

def is_free_tile(world: GameWorld, npcs: List[NPC], player: Optional[Player], x: int, y: int,
                 reserved: Collection[Tuple[int, int]] = ()) -> bool:
    """A tile is free when it is walkable and nobody stands or is about to stand on it."""
    if not world.is_walkable(x, y):
        return False
    if (x, y) in reserved:
        return False
    if player is not None and player.position == Position(x, y):
        return False
    return not any(npc.position.x == x and npc.position.y == y for npc in npcs)

def first_free_tile(world: GameWorld, npcs: List[NPC], player: Optional[Player],
                    reserved: Collection[Tuple[int, int]] = ()) -> Tuple[int, int]:
    """Row-major scan for a free tile. Raises RuntimeError when the map has none."""
    for y in range(world.height):
        for x in range(world.width):
            if is_free_tile(world, npcs, player, x, y, reserved):
                return x, y
    raise RuntimeError("No free tile left on the map.")

def find_spawn_position(world: GameWorld, npcs: List[NPC], player: Optional[Player], rng: random.Random,
                        default: Tuple[int, int], attempts: int = 100,
                        reserved: Collection[Tuple[int, int]] = ()) -> Tuple[int, int]:
    """Rejection-samples a free in-bounds tile, falling back to `default`.

    A `default` that is itself blocked or off the map is replaced by the first free tile.
    """
    for _ in range(attempts):
        x = rng.randint(0, world.width - 1)
        y = rng.randint(0, world.height - 1)
        if is_free_tile(world, npcs, player, x, y, reserved):
            return x, y
    if is_free_tile(world, npcs, player, *default, reserved=reserved):
        logger.debug("No free tile after %d attempts, using default %s", attempts, default)
        return default
    position = first_free_tile(world, npcs, player, reserved)
    logger.debug("Default %s is not free, using %s", default, position)
    return position

def place_npc(world: GameWorld, npcs: List[NPC], player: Optional[Player], npc: NPC) -> bool:
    """Adds `npc` to the collection unless its tile is already taken."""
    if not is_free_tile(world, npcs, player, npc.position.x, npc.position.y):
        logger.warning("Cannot place %s at (%d, %d), tile is taken", npc.name, npc.position.x, npc.position.y)
        return False
    npcs.append(npc)
    return True
