"""
Movement grid: walkable nodes built from floor and wall tile layers, plus the
mapping between world positions and grid cells.
"""

from __future__ import annotations
import math
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .node import Node

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class GridConfigurationError(ValueError):
    """Raised when tile data and grid dimensions disagree."""


class TileLayer:
    """
    A tilemap: occupied integer cells laid out at a fixed cell size.
    Attributes:
        cells: Set of (x, y) cells holding a tile.
        cell_size: Width and height of one cell in world units.
        origin: World position of the lower-left corner of cell (0, 0).
    """

    def __init__(
        self,
        cells: Iterable[Cell],
        cell_size: float = 1.0,
        origin: Tuple[float, float] = (0.0, 0.0),
    ) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cells = {(int(x), int(y)) for x, y in cells}
        self.cell_size = float(cell_size)
        self.origin = (float(origin[0]), float(origin[1]))

    def cell_to_world(self, x: int, y: int) -> Tuple[float, float, float]:
        """Return the world position of the lower-left corner of a cell."""
        return (
            self.origin[0] + x * self.cell_size,
            self.origin[1] + y * self.cell_size,
            0.0,
        )

    def world_to_cell(self, position: Sequence[float]) -> Cell:
        """Return the cell containing a world position."""
        cx = math.floor((position[0] - self.origin[0]) / self.cell_size)
        cy = math.floor((position[1] - self.origin[1]) / self.cell_size)
        return (int(cx), int(cy))

    def has_tile(self, cell: Cell) -> bool:
        return cell in self.cells

    def has_tile_at(self, position: Sequence[float]) -> bool:
        return self.world_to_cell(position) in self.cells

    def __len__(self) -> int:
        return len(self.cells)


class MovementGrid:
    """
    2D array of nodes indexed [x][y], one per floor tile.

    Cells without a floor tile hold no node; lookups treat them the same as
    positions outside the grid. The grid is read-only once built.
    """

    def __init__(
        self,
        floor: TileLayer,
        nodes: List[List[Optional[Node]]],
        offset: Tuple[float, float],
    ) -> None:
        self.floor = floor
        self._nodes = nodes
        self._offset = (float(offset[0]), float(offset[1]))
        self._width = len(nodes)
        self._height = len(nodes[0]) if self._width > 0 else 0

    @classmethod
    def build(
        cls,
        floor: TileLayer,
        walls: TileLayer,
        offset: Tuple[float, float] = (0.0, 0.0),
        dimensions: Optional[Tuple[int, int]] = None,
    ) -> MovementGrid:
        """
        Create a node for every floor tile and mark it walkable unless a
        wall tile sits at the node's world position.
        offset: (x, y) shift applied so that cell (0, 0) lands where the
            floor's lower-left corner is in world space.
        dimensions: (width, height) of the node array; inferred from the
            floor tiles when omitted.
        Raises GridConfigurationError if the floor tiles do not fit.
        """
        if dimensions is None:
            if not floor.cells:
                raise GridConfigurationError(
                    "Cannot infer grid dimensions from an empty floor"
                )
            width = max(x for x, _ in floor.cells) + 1
            height = max(y for _, y in floor.cells) + 1
        else:
            width, height = int(dimensions[0]), int(dimensions[1])
        if width <= 0 or height <= 0:
            raise GridConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        outside = sorted(
            (x, y)
            for x, y in floor.cells
            if x < 0 or y < 0 or x >= width or y >= height
        )
        if outside:
            raise GridConfigurationError(
                f"{len(outside)} floor tile(s) fall outside the "
                f"{width}x{height} grid, first at {outside[0]}"
            )

        nodes: List[List[Optional[Node]]] = [
            [None] * height for _ in range(width)
        ]
        walkable_count = 0
        for x in range(width):
            for y in range(height):
                if not floor.has_tile((x, y)):
                    continue
                wx, wy, wz = floor.cell_to_world(x, y)
                position = (wx + offset[0], wy + offset[1], wz)
                walkable = not walls.has_tile_at(position)
                nodes[x][y] = Node(walkable, position, x, y)
                walkable_count += walkable
        logger.info(
            "Built %dx%d movement grid: %d floor nodes, %d walkable",
            width,
            height,
            len(floor),
            walkable_count,
        )
        return cls(floor, nodes, offset)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def offset(self) -> Tuple[float, float]:
        return self._offset

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def node_at(self, x: int, y: int) -> Optional[Node]:
        """Return the node at grid coordinates, or None if there is none."""
        if not self.in_bounds(x, y):
            return None
        return self._nodes[x][y]

    def nodes(self) -> Iterator[Node]:
        """Iterate over every node, column by column."""
        for column in self._nodes:
            for node in column:
                if node is not None:
                    yield node

    def world_to_node(self, position: Sequence[float]) -> Optional[Node]:
        """
        Convert a world position to the node containing it.
        Returns None when the position is outside the grid or over a cell
        with no floor tile; callers treat both as "no path through here".
        """
        local = (position[0] - self._offset[0], position[1] - self._offset[1])
        x, y = self.floor.world_to_cell(local)
        return self.node_at(x, y)

    def neighbors(self, node: Node) -> List[Node]:
        """Return the nodes north, south, east and west of a node."""
        adjacent = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                # Skip the centre and the four diagonals
                if dx == dy or dx == -dy:
                    continue
                neighbor = self.node_at(node.grid_x + dx, node.grid_y + dy)
                if neighbor is not None:
                    adjacent.append(neighbor)
        return adjacent

    def walkable_mask(self) -> np.ndarray:
        """Return a [x][y] boolean array, True where a walkable node exists."""
        mask = np.zeros((self._width, self._height), dtype=bool)
        for node in self.nodes():
            mask[node.grid_x, node.grid_y] = node.walkable
        return mask
