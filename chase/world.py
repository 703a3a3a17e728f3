from __future__ import annotations
import os
import json
import logging
from typing import List, Optional, Tuple

import numpy as np

from .config import WORLD_FILE, TILE_VOID, TILE_WALL
from .grid import MovementGrid, TileLayer

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _parse_point(value) -> Optional[Point]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return (float(value[0]), float(value[1]))
    return None


class World:
    """
    Level layout loaded from an external file (default) or a provided grid.

    map[y][x] holds one tile code per cell: TILE_FLOOR, TILE_WALL (a wall
    standing on floor) or TILE_VOID (no floor at all).
    """

    def __init__(
        self,
        map_grid: Optional[List[List[int]]] = None,
        cell_size: float = 1.0,
        offset: Point = (0.0, 0.0),
        path: Optional[str] = None,
    ) -> None:
        self.cell_size = float(cell_size)
        self.offset = (float(offset[0]), float(offset[1]))
        self.avatar_spawn: Optional[Point] = None
        self.wizard_spawn: Optional[Point] = None
        self.treasure: List[Point] = []
        self.treasure_value = 0
        self.stairs: Optional[Point] = None
        if map_grid is not None:
            self.map = map_grid
        else:
            world_path = path or os.path.join(
                os.path.dirname(__file__), WORLD_FILE
            )
            try:
                with open(world_path, "r") as f:
                    data = json.load(f)
                self._load(data)
            except Exception as e:
                raise RuntimeError(
                    f"Failed to load world map from {world_path}: {e}"
                ) from e
            logger.info("Loaded world from %s", world_path)
        try:
            self.tiles = np.array(self.map, dtype=int)
        except ValueError as e:
            raise RuntimeError(f"World map rows must be equal length: {e}") from e
        if self.tiles.ndim != 2:
            raise RuntimeError("World map must be a 2D grid of tile codes")
        self.height, self.width = self.tiles.shape

    def _load(self, data: dict) -> None:
        self.map = data["map"]
        self.cell_size = float(data.get("cell_size", self.cell_size))
        offset = _parse_point(data.get("offset"))
        if offset is not None:
            self.offset = offset
        self.avatar_spawn = _parse_point(data.get("avatar"))
        self.wizard_spawn = _parse_point(data.get("wizard"))
        self.stairs = _parse_point(data.get("stairs"))
        for item in data.get("treasure", []):
            pos = _parse_point(item)
            if pos is not None:
                self.treasure.append(pos)
        self.treasure_value = int(data.get("treasure_value", 0))

    def floor_layer(self) -> TileLayer:
        """Every cell that has floor, walls included."""
        ys, xs = np.nonzero(self.tiles != TILE_VOID)
        return TileLayer(zip(xs.tolist(), ys.tolist()), self.cell_size)

    def wall_layer(self) -> TileLayer:
        """Wall cells, placed in world space to line up with the floor."""
        ys, xs = np.nonzero(self.tiles == TILE_WALL)
        return TileLayer(
            zip(xs.tolist(), ys.tolist()), self.cell_size, origin=self.offset
        )

    def build_grid(self) -> MovementGrid:
        """Build the movement grid for this world."""
        return MovementGrid.build(
            self.floor_layer(),
            self.wall_layer(),
            offset=self.offset,
            dimensions=(self.width, self.height),
        )
