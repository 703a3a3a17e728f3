"""
Node module: one cell of the movement grid.
"""

from __future__ import annotations
from typing import Tuple


class Node:
    """
    A discrete position in the movement grid, backed by a floor tile.
    Attributes:
        walkable: False if a wall tile occupies this cell.
        world_position: (x, y, z) world coordinates of the cell.
        grid_x, grid_y: Indices of the cell in the grid array.
    Nodes carry no search state; A* keeps its costs in per-search records.
    """

    __slots__ = ("_walkable", "_world_position", "_grid_x", "_grid_y")

    def __init__(
        self,
        walkable: bool,
        world_position: Tuple[float, float, float],
        grid_x: int,
        grid_y: int,
    ) -> None:
        self._walkable = bool(walkable)
        self._world_position = (
            float(world_position[0]),
            float(world_position[1]),
            float(world_position[2]) if len(world_position) > 2 else 0.0,
        )
        self._grid_x = int(grid_x)
        self._grid_y = int(grid_y)

    @property
    def walkable(self) -> bool:
        return self._walkable

    @property
    def world_position(self) -> Tuple[float, float, float]:
        return self._world_position

    @property
    def grid_x(self) -> int:
        return self._grid_x

    @property
    def grid_y(self) -> int:
        return self._grid_y

    @property
    def key(self) -> Tuple[int, int]:
        """Grid coordinates, unique within the owning grid."""
        return (self._grid_x, self._grid_y)

    def __repr__(self) -> str:
        x, y, _ = self._world_position
        return (
            f"<Node grid=({self._grid_x},{self._grid_y}) "
            f"pos=({x:.2f},{y:.2f}) walkable={self._walkable}>"
        )
