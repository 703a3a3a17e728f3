"""
Headless game session: steps the avatar and the wizard at a fixed rate and
resolves collisions, treasure pickup and the stairs exit.
"""

from __future__ import annotations
import math
import random
import logging
from typing import List, Optional, Tuple

from .config import (
    FIXED_DT,
    COLLISION_RADIUS,
    PICKUP_RADIUS,
    STAIRS_RADIUS,
    STAIRS_DELAY,
    VICTORY_SCREAM_DELAY,
)
from .avatar import Avatar
from .wizard import AgentEvent, Wizard
from .world import World

logger = logging.getLogger(__name__)


class Simulation:
    """One play session over a world."""

    def __init__(
        self,
        world: Optional[World] = None,
        fixed_dt: float = FIXED_DT,
        rng: Optional[random.Random] = None,
        **wizard_options,
    ) -> None:
        if fixed_dt <= 0:
            raise ValueError(f"fixed_dt must be positive, got {fixed_dt}")
        self.world = world or World()
        self.grid = self.world.build_grid()
        self.fixed_dt = fixed_dt
        ax, ay = self.world.avatar_spawn or (0.0, 0.0)
        self.avatar = Avatar(ax, ay)
        wx, wy = self.world.wizard_spawn or (0.0, 0.0)
        self.wizard = Wizard(
            self.grid, self.avatar, (wx, wy, 0.0), rng=rng, **wizard_options
        )
        self.treasure: List[Tuple[float, float]] = list(self.world.treasure)
        self.score = 0
        self.time = 0.0
        # Avatar has reached the stairs and left the level
        self.escaped = False
        self._accumulator = 0.0
        self._game_over_at: Optional[float] = None
        self._scream_at: Optional[float] = None

    @property
    def won(self) -> bool:
        return self.escaped

    @property
    def lost(self) -> bool:
        return self.avatar.defeated

    def advance(
        self, elapsed: float, direction: Tuple[int, int] = (0, 0)
    ) -> List[AgentEvent]:
        """
        Run as many fixed steps as fit into elapsed seconds plus any time
        carried over from earlier calls. Returns the wizard's events.
        """
        self._accumulator += elapsed
        events: List[AgentEvent] = []
        while self._accumulator >= self.fixed_dt:
            self._accumulator -= self.fixed_dt
            events.extend(self.step(direction))
        return events

    def step(self, direction: Tuple[int, int] = (0, 0)) -> List[AgentEvent]:
        """Advance the session by one fixed tick; return the wizard's events."""
        dt = self.fixed_dt
        self.time += dt
        if not self.escaped:
            self.avatar.move(direction, self.grid, dt)
        self.wizard.update(dt)
        self._check_collision()
        self._collect_treasure()
        self._check_stairs()
        self._run_timers()
        return self.wizard.pop_events()

    def _check_collision(self) -> None:
        avatar = self.avatar
        # Noclip disables the avatar's collider
        if self.escaped or avatar.dead or avatar.noclip:
            return
        wx, wy, _ = self.wizard.position
        if math.hypot(wx - avatar.x, wy - avatar.y) < COLLISION_RADIUS:
            self.wizard.on_collision()

    def _collect_treasure(self) -> None:
        if self.escaped or self.avatar.dead:
            return
        remaining = []
        for tx, ty in self.treasure:
            if math.hypot(tx - self.avatar.x, ty - self.avatar.y) < PICKUP_RADIUS:
                self.score += self.world.treasure_value
                logger.info("Treasure picked up, score %d", self.score)
            else:
                remaining.append((tx, ty))
        self.treasure = remaining

    def _check_stairs(self) -> None:
        if self.escaped or self.avatar.dead or self.world.stairs is None:
            return
        sx, sy = self.world.stairs
        if math.hypot(sx - self.avatar.x, sy - self.avatar.y) < STAIRS_RADIUS:
            self.escaped = True
            self._game_over_at = self.time + STAIRS_DELAY
            logger.info("Avatar escaped with %d loot", self.score)

    def _run_timers(self) -> None:
        if self._game_over_at is not None and self.time >= self._game_over_at:
            self._game_over_at = None
            self.wizard.game_over()
            self._scream_at = self.time + VICTORY_SCREAM_DELAY
        if self._scream_at is not None and self.time >= self._scream_at:
            self._scream_at = None
            self.wizard.scream()
