from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Tuple
from .config import AVATAR_SPEED

if TYPE_CHECKING:
    from .grid import MovementGrid

logger = logging.getLogger(__name__)


class Avatar:
    """Player state and movement; the target the wizard chases."""

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        speed: float = AVATAR_SPEED,
    ) -> None:
        """
        Initialize the avatar.
        x, y: starting position in world units.
        speed: movement speed in world units per second.
        """
        self.x = float(x)
        self.y = float(y)
        self.speed = speed
        # Set by the wizard the moment it catches the avatar
        self.dead = False
        # Set once the death sequence has played out
        self.defeated = False
        # Walk through walls and off the floor
        self.noclip = False

    def __repr__(self) -> str:
        return f"<Avatar x={self.x:.2f} y={self.y:.2f} dead={self.dead}>"

    def position(self) -> Tuple[float, float, float]:
        """Return the current world position."""
        return (self.x, self.y, 0.0)

    def move(
        self, direction: Tuple[int, int], grid: MovementGrid, dt: float
    ) -> None:
        """
        Move along direction, a (dx, dy) pair of -1, 0 or 1.
        Diagonal input is ignored, as is any input once dead. Without noclip
        the avatar cannot step onto a wall or off the floor.
        """
        dx, dy = direction
        if (dx != 0 and dy != 0) or self.dead:
            return
        new_x = self.x + dx * self.speed * dt
        new_y = self.y + dy * self.speed * dt
        if not self.noclip:
            node = grid.world_to_node((new_x, new_y))
            if node is None or not node.walkable:
                return
        self.x = new_x
        self.y = new_y

    def toggle_noclip(self) -> None:
        """Switch the walk-through-walls cheat on or off."""
        self.noclip = not self.noclip
        if self.noclip:
            logger.info("You're cheating! No clip mode activated!")

    def die(self) -> None:
        """Finish the death sequence started by the wizard's spell."""
        self.dead = True
        self.defeated = True
