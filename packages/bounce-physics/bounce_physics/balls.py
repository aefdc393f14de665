"""BallPhysics - ball creation and per-tick integration."""
from __future__ import annotations

import logging
import math
import random as _random_mod
from collections import deque
from typing import TYPE_CHECKING, Callable

from bounce.components import Ball
from bounce.types import FloorPolicy, LaunchOptions

from bounce_physics import vec

if TYPE_CHECKING:
    from bounce.types import TickContext
    from bounce.world import World

logger = logging.getLogger(__name__)

BALL_COLORS = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
)

# Shots steeper than |dir.y| = 0.7 get no boost; horizontal ones get the most.
SHALLOW_ANGLE_CUTOFF = 0.7
SHALLOW_ANGLE_GAIN = 0.9

_WALL_LEFT = (1.0, 0.0)
_WALL_RIGHT = (-1.0, 0.0)
_CEILING = (0.0, 1.0)
_FLOOR = (0.0, -1.0)


def launch_speed(base_speed: float, direction_y: float) -> float:
    """Speed for an aimed shot whose unit direction has vertical part ``direction_y``."""
    boost = max(0.0, SHALLOW_ANGLE_CUTOFF - abs(direction_y)) * SHALLOW_ANGLE_GAIN
    return base_speed * (1.0 + boost)


class BallPhysics:
    def __init__(self, world: World, rng: _random_mod.Random | None = None) -> None:
        self._world = world
        self._rng = rng if rng is not None else _random_mod.Random()

    def create_ball(
        self,
        x: float,
        y: float | None = None,
        options: LaunchOptions | None = None,
    ) -> bool:
        """Add a ball if the current turn allows a drop.

        Without ``options`` the ball drops nearly straight down with a
        little horizontal jitter. With a launch direction it flies along
        that direction, faster the flatter the shot.
        """
        world = self._world
        if not world.can_drop_ball():
            return False

        cfg = world.config
        if y is None:
            y = cfg.drop_height

        vx = (self._rng.random() - 0.5) * 2.0
        vy = 0.0
        radius_range = cfg.drop_radius
        if options is not None:
            direction = vec.normalize(options.direction)
            if direction != (0.0, 0.0):
                base = options.speed if options.speed is not None else cfg.launch_speed
                speed = launch_speed(base, direction[1])
                vx, vy = vec.scale(direction, speed)
                radius_range = cfg.launch_radius

        ball = Ball(
            x=float(x),
            y=float(y),
            vx=vx,
            vy=vy,
            radius=self._rng.uniform(*radius_range),
            color=self._rng.choice(BALL_COLORS),
            trail=deque(maxlen=cfg.trail_length),
        )
        world.balls.append(ball)
        world.balls_dropped_this_turn += 1
        world.total_balls_dropped += 1
        return True

    @staticmethod
    def velocity_magnitude(ball: Ball) -> float:
        return math.hypot(ball.vx, ball.vy)

    def apply_well_forces(self, ball: Ball) -> None:
        for well in self._world.wells:
            dx = well.x - ball.x
            dy = well.y - ball.y
            dist = math.hypot(dx, dy)
            if dist >= well.radius or dist == 0.0:
                continue
            falloff = 1.0 - dist / well.radius
            toward = (dx / dist, dy / dist)
            swirl = vec.perpendicular(toward)
            pull = well.strength * falloff
            twist = well.tangential_strength * falloff * math.sin(well.rotation)
            ball.vx += toward[0] * pull + swirl[0] * twist
            ball.vy += toward[1] * pull + swirl[1] * twist

    def update_balls(self) -> bool:
        """Integrate every ball one tick. Returns True if any ball was removed."""
        world = self._world
        removed = False

        for i in range(len(world.balls) - 1, -1, -1):
            ball = world.balls[i]

            ball.vy += world.gravity
            ball.vx *= world.friction
            ball.vy *= world.friction
            self.apply_well_forces(ball)

            ball.x += ball.vx
            ball.y += ball.vy
            ball.trail.append((ball.x, ball.y))

            if ball.y < -world.config.offscreen_margin or self._resolve_bounds(ball):
                del world.balls[i]
                removed = True

        return removed

    def _bounce(self, ball: Ball, normal: tuple[float, float]) -> None:
        ball.vx, ball.vy = vec.reflect((ball.vx, ball.vy), normal, self._world.bounce)

    def _resolve_bounds(self, ball: Ball) -> bool:
        """Bounce off walls and ceiling. Returns True if the ball leaves play."""
        world = self._world
        r = ball.radius

        if ball.x - r < 0.0:
            self._bounce(ball, _WALL_LEFT)
            ball.x = r
        elif ball.x + r > world.width:
            self._bounce(ball, _WALL_RIGHT)
            ball.x = world.width - r

        if ball.y - r < 0.0:
            self._bounce(ball, _CEILING)
            ball.y = r

        if world.config.floor_policy is FloorPolicy.EXIT:
            return ball.y - r > world.height

        if ball.y + r > world.height:
            self._bounce(ball, _FLOOR)
            ball.y = world.height - r
            return abs(ball.vy) < world.config.settle_speed
        return False


def make_ball_system(
    physics: BallPhysics,
    on_removed: Callable[[World, TickContext], None] | None = None,
) -> Callable[[World, TickContext], None]:
    """Return a system that integrates all balls each tick."""

    def ball_system(world: World, ctx: TickContext) -> None:
        if physics.update_balls() and on_removed is not None:
            on_removed(world, ctx)

    return ball_system
