"""
Input handling abstraction to decouple Pygame input from game logic.
"""

from __future__ import annotations
import pygame
from typing import Sequence, Tuple


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events and
    provides the movement direction and action queries.
    """

    def __init__(self) -> None:
        self._quit = False
        # Toggle noclip cheat (backslash)
        self._toggle_noclip = False
        # Key state is initialized in process_events()
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """
        Poll Pygame events, update internal state for quit and cheat actions,
        and capture key states.
        """
        self._quit = False
        self._toggle_noclip = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_x, pygame.K_ESCAPE):
                    self._quit = True
                elif event.key == pygame.K_BACKSLASH:
                    self._toggle_noclip = True
        self._keys = pygame.key.get_pressed()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def toggle_noclip_pressed(self) -> bool:
        """Return True if backslash was pressed this frame."""
        return self._toggle_noclip

    def get_direction(self) -> Tuple[int, int]:
        """
        Return the (dx, dy) movement input from WASD or the arrow keys.
        Up is +y, matching world space.
        """
        keys = self._keys
        if not keys:
            return (0, 0)
        dx = 0
        dy = 0
        if keys[pygame.K_d] or keys[pygame.K_RIGHT]:
            dx += 1
        if keys[pygame.K_a] or keys[pygame.K_LEFT]:
            dx -= 1
        if keys[pygame.K_w] or keys[pygame.K_UP]:
            dy += 1
        if keys[pygame.K_s] or keys[pygame.K_DOWN]:
            dy -= 1
        return (dx, dy)
