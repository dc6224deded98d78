from __future__ import annotations
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Iterator, List, Optional, TYPE_CHECKING

from components import Player, NPC, Position
from config import GameConfig
from world import GameWorld

if TYPE_CHECKING:
    from game_modes import GameCondition

class MessageLog:
    """Bounded game log. Once full, the oldest message is evicted first."""
    def __init__(self, capacity: int = 50, messages: Iterable[str] = ()):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._messages: Deque[str] = deque(messages, maxlen=capacity)

    def append(self, message: str):
        self._messages.append(message)

    def extend(self, messages: Iterable[str]):
        for message in messages:
            self.append(message)

    def tail(self, count: int) -> List[str]:
        if count <= 0:
            return []
        return list(self._messages)[-count:]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> str:
        return self._messages[index]

@dataclass
class GameState:
    """Everything a running game owns. Replaced wholesale when a new mode starts."""
    player: Player
    world: GameWorld
    npcs: List[NPC] = field(default_factory=list)
    config: GameConfig = field(default_factory=GameConfig)
    log: MessageLog = field(default_factory=MessageLog)
    condition: Optional[GameCondition] = None
    game_over: bool = False
    turn: int = 0
    rng: random.Random = field(default_factory=random.Random)

    def npc_at(self, x: int, y: int) -> Optional[NPC]:
        return next((npc for npc in self.npcs if npc.position.x == x and npc.position.y == y), None)

    def is_occupied(self, x: int, y: int, ignore: Optional[NPC] = None) -> bool:
        """True if the player or an NPC other than `ignore` stands on (x, y)."""
        if self.player.position == Position(x, y):
            return True
        return any(npc is not ignore and npc.position.x == x and npc.position.y == y for npc in self.npcs)
