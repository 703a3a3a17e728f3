"""
Wizard module: the pursuit agent that chases the avatar through the grid.
"""

from __future__ import annotations
import math
import random
import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

from .config import (
    WIZARD_SPEED,
    RECALCULATE_DISTANCE,
    START_DELAY,
    CAST_DELAY,
    FIRST_TAUNT_WINDOW,
    TAUNT_WINDOW,
    TAUNTS,
    RUN_COWARD,
    SPELL,
    SCREAM,
)
from .pathfinding import find_path

if TYPE_CHECKING:
    from .grid import MovementGrid
    from .node import Node

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


class WizardState(Enum):
    IDLE = "idle"
    # Stepping along a path
    FOLLOWING = "following"
    # Target is unreachable (the player is cheating)
    BLOCKED = "blocked"
    # Spell or end-of-game pose; movement never resumes
    CASTING = "casting"


class AgentEvent(Enum):
    """Transitions reported to the presentation layer."""

    PATH_STARTED = "path_started"
    PATH_INTERRUPTED = "path_interrupted"
    PATH_EXHAUSTED = "path_exhausted"
    TARGET_UNREACHABLE = "target_unreachable"
    TARGET_REACHABLE = "target_reachable"
    COLLIDED = "collided"
    FORCED_STOP = "forced_stop"
    TARGET_DEFEATED = "target_defeated"
    TAUNT = "taunt"
    SCREAM = "scream"


class Target(Protocol):
    """What the wizard needs to know about the thing it chases."""

    dead: bool

    def position(self) -> Vector3: ...

    def die(self) -> None: ...


def move_towards(
    current: Sequence[float], target: Sequence[float], max_delta: float
) -> Vector3:
    """
    Move from current towards target by at most max_delta.
    Returns target itself once it is within reach.
    """
    target = (float(target[0]), float(target[1]), float(target[2]))
    dx = target[0] - current[0]
    dy = target[1] - current[1]
    dz = target[2] - current[2]
    dist = math.sqrt(dx * dx + dy * dy + dz * dz)
    if dist <= max_delta:
        return target
    scale = max_delta / dist
    return (
        current[0] + dx * scale,
        current[1] + dy * scale,
        current[2] + dz * scale,
    )


class Wizard:
    """
    Pursuit agent: repeatedly paths to the target and walks the path.

    update(dt) is called once per fixed simulation tick. Path following is a
    resumable routine: the wizard keeps a cursor into its path and moves at
    most speed * dt towards the current node per tick, holding at each node
    it reaches until the next tick. stop_requested is polled at the start of
    every step; when set, the rest of the path is dropped and the next
    destination update computes a fresh one.
    """

    def __init__(
        self,
        grid: MovementGrid,
        target: Target,
        position: Sequence[float],
        speed: float = WIZARD_SPEED,
        recalculate_distance: float = RECALCULATE_DISTANCE,
        start_delay: float = START_DELAY,
        cast_delay: float = CAST_DELAY,
        taunts: Sequence[str] = TAUNTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")
        self.grid = grid
        self.target = target
        self.position: Vector3 = (
            float(position[0]),
            float(position[1]),
            float(position[2]) if len(position) > 2 else 0.0,
        )
        self.speed = float(speed)
        self.recalculate_distance = float(recalculate_distance)
        self.start_delay = float(start_delay)
        self.cast_delay = float(cast_delay)
        self.taunts = list(taunts)
        self.rng = rng or random.Random()

        self.state = WizardState.IDLE
        self.path: List[Node] = []
        # Index of the node currently being approached
        self.cursor = 0
        self.is_moving = False
        self.stop_requested = False
        self.is_casting = False
        self.is_cheating = False
        # Target position recorded at the last path computation
        self.target_position: Optional[Vector3] = None

        self.elapsed_time = 0.0
        self.first_taunt = False
        self.next_taunt_time = 0.0
        # Seconds left before the target dies; None when no spell is pending
        self.cast_timer: Optional[float] = None
        # Most recent sound clip requested
        self.last_clip: Optional[str] = None
        self.events: List[AgentEvent] = []

    def __repr__(self) -> str:
        x, y, _ = self.position
        return f"<Wizard x={x:.2f} y={y:.2f} state={self.state.value}>"

    def pop_events(self) -> List[AgentEvent]:
        """Return and clear the events emitted since the last call."""
        events, self.events = self.events, []
        return events

    def _emit(self, event: AgentEvent) -> None:
        logger.debug("Wizard %s at %s", event.value, self.position)
        self.events.append(event)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """Advance timers, refresh the destination and take one step."""
        self.elapsed_time += dt
        self._update_taunts(dt)
        if self.is_casting:
            self._update_cast(dt)
            return
        if self.elapsed_time < self.start_delay:
            return
        self.update_destination(dt)
        self.advance(dt)

    def _update_taunts(self, dt: float) -> None:
        # Opening taunt once the chase is about to start
        if self.elapsed_time >= self.start_delay and not self.first_taunt:
            self.first_taunt = True
            self.last_clip = RUN_COWARD
            self._emit(AgentEvent.TAUNT)
            # Scheduled on the absolute clock, not from the opening taunt
            self.next_taunt_time = dt + self.rng.uniform(*FIRST_TAUNT_WINDOW)
        if (
            self.first_taunt
            and not self.is_casting
            and self.elapsed_time >= self.next_taunt_time
        ):
            self.taunt()
            self.next_taunt_time += dt + self.rng.uniform(*TAUNT_WINDOW)

    def _update_cast(self, dt: float) -> None:
        if self.cast_timer is None:
            return
        self.cast_timer -= dt
        if self.cast_timer <= 0:
            self.cast_timer = None
            self.target.die()
            self._emit(AgentEvent.TARGET_DEFEATED)

    # ------------------------------------------------------------------
    # Destination and path following
    # ------------------------------------------------------------------

    def update_destination(self, dt: float) -> None:
        """
        Start a new path when idle; while following, request an interrupt
        once the target has moved further than recalculate_distance from
        where it was when the current path was computed.
        """
        if not self.is_moving:
            self.target_position = self.target.position()
            here = self.grid.world_to_node(self.position)
            there = self.grid.world_to_node(self.target_position)
            if here is not None and here is there and there.walkable:
                # Same cell: head directly at the target
                self._target_reachable()
                self.state = WizardState.FOLLOWING
                self.position = move_towards(
                    self.position, self.target_position, self.speed * dt
                )
                return
            self.path = find_path(self.position, self.target_position, self.grid)
            self.start_following()
            return
        current = self.target.position()
        if math.dist(self.target_position, current) > self.recalculate_distance:
            self.stop_requested = True
            self.target_position = current

    def start_following(self) -> None:
        """Begin walking self.path from its first node."""
        self.cursor = 0
        self.stop_requested = False
        if not self.path:
            self.is_moving = False
            self.alert_unreachable()
            return
        self.is_moving = True
        self._target_reachable()
        self.state = WizardState.FOLLOWING
        self._emit(AgentEvent.PATH_STARTED)

    def _target_reachable(self) -> None:
        if self.is_cheating:
            self.is_cheating = False
            self._emit(AgentEvent.TARGET_REACHABLE)

    def advance(self, dt: float) -> None:
        """Run one step of the path-following routine."""
        if not self.is_moving:
            return
        if self.stop_requested:
            self._halt()
            self._emit(AgentEvent.PATH_INTERRUPTED)
            return
        node = self.path[self.cursor]
        self.position = move_towards(
            self.position, node.world_position, self.speed * dt
        )
        if self.position != node.world_position:
            return
        self.cursor += 1
        if self.cursor >= len(self.path):
            self._halt()
            self._emit(AgentEvent.PATH_EXHAUSTED)

    def _halt(self) -> None:
        self.path = []
        self.cursor = 0
        self.is_moving = False
        self.stop_requested = False
        self.state = WizardState.IDLE

    # ------------------------------------------------------------------
    # External commands
    # ------------------------------------------------------------------

    def alert_unreachable(self) -> None:
        """React once to a target that cannot be reached."""
        if self.is_casting or self.is_cheating:
            return
        self.is_cheating = True
        self.state = WizardState.BLOCKED
        self._emit(AgentEvent.TARGET_UNREACHABLE)
        self.scream()

    def on_collision(self) -> None:
        """The wizard touched the target: cast, then defeat it after a delay."""
        if self.is_casting:
            return
        self._enter_casting()
        self.last_clip = SPELL
        self.target.dead = True
        self.cast_timer = self.cast_delay
        logger.info("Wizard caught the target at %s", self.position)
        self._emit(AgentEvent.COLLIDED)

    def game_over(self) -> None:
        """Stop where it stands and hold the casting pose."""
        self._enter_casting()
        self._emit(AgentEvent.FORCED_STOP)

    def _enter_casting(self) -> None:
        self.stop_requested = True
        self.is_casting = True
        self.is_moving = False
        self.path = []
        self.cursor = 0
        self.state = WizardState.CASTING

    def taunt(self) -> None:
        """Request a random taunt clip, unless the target is cheating."""
        if self.is_cheating or not self.taunts:
            return
        self.last_clip = self.rng.choice(self.taunts)
        self._emit(AgentEvent.TAUNT)

    def scream(self) -> None:
        self.last_clip = SCREAM
        self._emit(AgentEvent.SCREAM)
