"""
Pygame 2D renderer: draws the grid, treasure, stairs, avatar, wizard and
the wizard's remaining path. Presentation only.
"""

from __future__ import annotations
import logging
import pygame
from typing import TYPE_CHECKING, Sequence, Tuple

from .config import TILE_PIXELS

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)

# Colors
VOID_COLOR = (10, 10, 10)
FLOOR_COLOR = (60, 56, 50)
WALL_COLOR = (110, 100, 90)
PATH_COLOR = (90, 60, 140)
TREASURE_COLOR = (230, 190, 40)
STAIRS_COLOR = (70, 160, 200)
AVATAR_COLOR = (60, 200, 80)
WIZARD_COLOR = (170, 60, 220)
CHEATING_COLOR = (230, 40, 40)


class Renderer:
    """Draws a Simulation onto a pygame surface."""

    def __init__(
        self, screen_height: int, tile_pixels: int = TILE_PIXELS
    ) -> None:
        self.screen_height = screen_height
        self.tile_pixels = tile_pixels

    def to_screen(
        self, position: Sequence[float], sim: Simulation
    ) -> Tuple[int, int]:
        """Convert a world position to pixel coordinates (y grows downward)."""
        ox, oy = sim.grid.offset
        scale = self.tile_pixels / sim.world.cell_size
        px = (position[0] - ox) * scale
        py = self.screen_height - (position[1] - oy) * scale
        return (int(px), int(py))

    def render(self, screen: pygame.Surface, sim: Simulation) -> None:
        screen.fill(VOID_COLOR)
        size = self.tile_pixels
        for node in sim.grid.nodes():
            x, y = self.to_screen(node.world_position, sim)
            color = FLOOR_COLOR if node.walkable else WALL_COLOR
            pygame.draw.rect(screen, color, pygame.Rect(x, y - size, size, size))
        for node in sim.wizard.path[sim.wizard.cursor:]:
            x, y = self.to_screen(node.world_position, sim)
            pygame.draw.circle(screen, PATH_COLOR, (x, y), max(2, size // 8))
        for pos in sim.treasure:
            pygame.draw.circle(
                screen, TREASURE_COLOR, self.to_screen(pos, sim), size // 4
            )
        if sim.world.stairs is not None:
            x, y = self.to_screen(sim.world.stairs, sim)
            pygame.draw.rect(
                screen,
                STAIRS_COLOR,
                pygame.Rect(x - size // 3, y - size // 3, size * 2 // 3, size * 2 // 3),
            )
        if not sim.escaped:
            pygame.draw.circle(
                screen,
                AVATAR_COLOR,
                self.to_screen(sim.avatar.position(), sim),
                size // 3,
            )
        wizard_color = CHEATING_COLOR if sim.wizard.is_cheating else WIZARD_COLOR
        pygame.draw.circle(
            screen, wizard_color, self.to_screen(sim.wizard.position, sim), size // 3
        )
        pygame.display.flip()
