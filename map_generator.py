import numpy as np

from components import TileType

class MapGenerator:
    """
    Builds the tile grid for a floor.

    The grid is a numpy array of shape (height, width) holding TileType
    values, indexed as grid[y, x].
    """
    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Map size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.map = np.full((height, width), TileType.EMPTY, dtype=np.uint8)

    def generate(self, generation_type: str = 'simple_room') -> np.ndarray:
        """Generates a map of the requested type."""
        if generation_type == 'simple_room':
            self._generate_simple_room()
        else:
            raise ValueError(f"Unknown map generation type: {generation_type}")
        return self.map

    def _generate_simple_room(self):
        """Walled room with a fixed diagonal floor pattern. No randomness."""
        ys, xs = np.indices((self.height, self.width))
        self.map = np.where((xs + ys) % 7 == 0, TileType.FLOOR, TileType.EMPTY).astype(np.uint8)
        self.map[0, :] = TileType.WALL
        self.map[-1, :] = TileType.WALL
        self.map[:, 0] = TileType.WALL
        self.map[:, -1] = TileType.WALL
