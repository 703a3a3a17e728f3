from __future__ import annotations
import logging
import pygame
from typing import Optional

from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
)
from .simulation import Simulation
from .renderer import Renderer
from .input_handler import InputHandler
from .world import World

logger = logging.getLogger(__name__)


class Game:
    """Main Game class: window, input and a fixed-step loop over a Simulation."""

    def __init__(
        self,
        clock: Optional[pygame.time.Clock] = None,
        world: Optional[World] = None,
    ) -> None:
        pygame.init()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height)
        )
        pygame.display.set_caption("Wizard Chase")
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.simulation = Simulation(world)
        self.renderer = Renderer(self.screen_height)
        self.input = InputHandler()
        self.running = True

    def handle_events(self) -> None:
        """Process input events via InputHandler and handle quit/cheat actions."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        if self.input.toggle_noclip_pressed():
            self.simulation.avatar.toggle_noclip()

    def update(self, dt: float) -> None:
        """Feed elapsed frame time to the fixed-step simulation."""
        events = self.simulation.advance(dt, self.input.get_direction())
        for event in events:
            logger.debug("Wizard event %s", event.value)

    def render(self) -> None:
        self.renderer.render(self.screen, self.simulation)

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        while self.running:
            # Cap the frame rate and compute delta time in seconds
            dt = self.clock.tick(self.fps) / 1000.0
            self.handle_events()
            self.update(dt)
            self.render()
        pygame.quit()
