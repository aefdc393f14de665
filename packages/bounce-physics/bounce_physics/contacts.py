"""CollisionSystem - ball/enemy contact resolution."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

from bounce.components import Ball, Enemy

from bounce_physics import vec
from bounce_physics.balls import BallPhysics
from bounce_physics.collision import Contact, biased_normal, circle_vs_rect

if TYPE_CHECKING:
    from bounce.types import TickContext
    from bounce.world import World

logger = logging.getLogger(__name__)

SPEED_DAMAGE_FACTOR = 0.1


class DamageSink(Protocol):
    def apply_damage(self, enemy: Enemy, damage: float, index: int | None = None) -> bool:
        """Damage ``enemy``; return True if it died."""
        ...


class CollisionSystem:
    """Detects ball/enemy overlaps and resolves damage, bounce and separation.

    A ball can kill at most one enemy per tick: once a hit is lethal the
    ball stops testing the remaining enemies.
    """

    def __init__(self, world: World, physics: BallPhysics, enemies: DamageSink) -> None:
        self._world = world
        self._physics = physics
        self._enemies = enemies

    def detect(self, ball: Ball, enemy: Enemy) -> Contact | None:
        contact = circle_vs_rect(
            (ball.x, ball.y), ball.radius, enemy.x, enemy.y, enemy.width, enemy.height
        )
        if contact is None:
            return None
        normal = biased_normal(
            contact.normal, enemy.sides, enemy.rotation, self._world.config.face_bias
        )
        return Contact(normal=normal, depth=contact.depth, degenerate=contact.degenerate)

    def check_collisions(self) -> int:
        """Resolve every ball against every live enemy. Returns the number of contacts."""
        world = self._world
        contacts = 0
        for ball in reversed(list(world.balls)):
            for index in range(len(world.enemies) - 1, -1, -1):
                if index >= len(world.enemies):
                    continue
                enemy = world.enemies[index]
                if not enemy.alive:
                    continue
                contact = self.detect(ball, enemy)
                if contact is None:
                    continue
                contacts += 1
                if self.handle_collision(ball, enemy, contact, index):
                    break
        return contacts

    def handle_collision(
        self, ball: Ball, enemy: Enemy, contact: Contact, index: int | None = None
    ) -> bool:
        """Damage the enemy and bounce the ball. Returns True if the enemy died."""
        world = self._world
        speed = self._physics.velocity_magnitude(ball)
        damage = world.ball_damage * enemy.damage_multiplier * (1.0 + speed * SPEED_DAMAGE_FACTOR)
        killed = self._enemies.apply_damage(enemy, damage, index)

        # Worn-down enemies return less energy.
        coefficient = enemy.bounce_coefficient * (0.5 + enemy.health_ratio * 0.5)
        self.apply_bounce(ball, contact, coefficient)
        enemy.rotation += world.config.hit_spin
        if killed:
            logger.debug("ball killed enemy %d (%s) at %.1f speed", enemy.id, enemy.kind, speed)
        return killed

    def apply_bounce(self, ball: Ball, contact: Contact, bounce_coefficient: float) -> None:
        cfg = self._world.config
        normal = contact.normal
        approach = vec.dot((ball.vx, ball.vy), normal)
        if approach < 0.0:
            impulse = 2.0 * approach * bounce_coefficient * cfg.bounce_boost
            ball.vx -= impulse * normal[0]
            ball.vy -= impulse * normal[1]
        push = contact.depth * cfg.separation_factor
        ball.x += normal[0] * push
        ball.y += normal[1] * push


def make_collision_system(
    collisions: CollisionSystem,
) -> Callable[[World, TickContext], None]:
    """Return a system that resolves ball/enemy contacts each tick."""

    def collision_system(world: World, ctx: TickContext) -> None:
        collisions.check_collisions()

    return collision_system
