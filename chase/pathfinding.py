"""
Pathfinding utilities: implements A* search over a MovementGrid.
"""

from __future__ import annotations
import heapq
import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .grid import MovementGrid
    from .node import Node

logger = logging.getLogger(__name__)

# Cost of one step to a cardinal neighbour
STRAIGHT_COST = 10
# Cost of one diagonal step; only used by the heuristic
DIAGONAL_COST = 14


def get_distance(a: Node, b: Node) -> int:
    """Diagonal-aware distance between two nodes on the 10/14 cost scale."""
    dx = abs(a.grid_x - b.grid_x)
    dy = abs(a.grid_y - b.grid_y)
    return DIAGONAL_COST * min(dx, dy) + STRAIGHT_COST * abs(dx - dy)


class SearchRecord:
    """Costs and back-pointer for one node, valid for a single search."""

    __slots__ = ("g_cost", "h_cost", "parent")

    def __init__(
        self,
        g_cost: float = float("inf"),
        h_cost: int = 0,
        parent: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.g_cost = g_cost
        self.h_cost = h_cost
        # Grid key of the node this one was reached from
        self.parent = parent

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost


def retrace_path(
    grid: MovementGrid,
    records: Dict[Tuple[int, int], SearchRecord],
    start: Node,
    end: Node,
) -> List[Node]:
    """Walk parent links back from end to start; return nodes in travel order."""
    path = []
    key = end.key
    while key != start.key:
        path.append(grid.node_at(*key))
        key = records[key].parent
    path.reverse()
    return path


def find_path(
    start_position: Sequence[float],
    goal_position: Sequence[float],
    grid: MovementGrid,
) -> List[Node]:
    """
    Find the shortest walkable path between two world positions using A*.
    Returns the nodes to visit in order, excluding the start node and
    including the goal node. An empty list means there is nothing to follow:
    the goal is off the grid, walled off, or the same node as the start.
    """
    start = grid.world_to_node(start_position)
    goal = grid.world_to_node(goal_position)

    # Goal is None if the target is off the floor or out of bounds
    if goal is None or start is None:
        return []
    if start is goal:
        return []
    # A blocked goal can never be closed
    if not goal.walkable:
        return []

    origin = SearchRecord(0, get_distance(start, goal))
    records: Dict[Tuple[int, int], SearchRecord] = {start.key: origin}
    # Open set as a priority queue of (f_cost, h_cost, count, key);
    # count keeps ties in insertion order
    open_set = []
    count = 0
    heapq.heappush(open_set, (origin.f_cost, origin.h_cost, count, start.key))
    closed = set()
    expanded = 0

    while open_set:
        f_cost, _, _, key = heapq.heappop(open_set)
        if key in closed:
            continue
        record = records[key]
        # Stale entry left behind by a later cost improvement
        if f_cost != record.f_cost:
            continue
        closed.add(key)
        expanded += 1
        current = grid.node_at(*key)

        if current is goal:
            path = retrace_path(grid, records, start, goal)
            logger.debug(
                "Path %s -> %s: %d nodes, %d expanded",
                start.key,
                goal.key,
                len(path),
                expanded,
            )
            return path

        for adjacent in grid.neighbors(current):
            if not adjacent.walkable or adjacent.key in closed:
                continue
            tentative_g = record.g_cost + get_distance(current, adjacent)
            neighbor = records.get(adjacent.key)
            if neighbor is None:
                neighbor = records[adjacent.key] = SearchRecord()
            # Better route to the neighbour, or first time it is seen
            if tentative_g < neighbor.g_cost:
                neighbor.g_cost = tentative_g
                neighbor.h_cost = get_distance(adjacent, goal)
                neighbor.parent = key
                count += 1
                heapq.heappush(
                    open_set,
                    (neighbor.f_cost, neighbor.h_cost, count, adjacent.key),
                )

    logger.debug(
        "No path %s -> %s after %d expansions", start.key, goal.key, expanded
    )
    return []


def path_cost(path: Sequence[Node], start: Node) -> int:
    """Total step cost of following path from start."""
    total = 0
    previous = start
    for node in path:
        total += get_distance(previous, node)
        previous = node
    return total
