"""Tests for ball/enemy collision resolution."""
from __future__ import annotations

import math
import random

import pytest

from bounce.components import Ball, Enemy
from bounce.config import GameConfig
from bounce.world import World
from bounce_physics.balls import BallPhysics
from bounce_physics.collision import Contact
from bounce_physics.contacts import CollisionSystem, make_collision_system


class RecordingSink:
    """Damage sink that kills on demand and removes the dead like the real one."""

    def __init__(self, world: World, lethal: bool = False) -> None:
        self.world = world
        self.lethal = lethal
        self.hits: list[tuple[int, float, int | None]] = []

    def apply_damage(self, enemy: Enemy, damage: float, index: int | None = None) -> bool:
        self.hits.append((enemy.id, damage, index))
        if not self.lethal:
            return False
        enemy.health = 0.0
        self.world.enemies.remove(enemy)
        return True


def _enemy(enemy_id: int = 1, x: float = 100.0, y: float = 100.0, size: float = 40.0) -> Enemy:
    return Enemy(
        id=enemy_id,
        kind="normal",
        x=x,
        y=y,
        grid_x=0,
        grid_y=0,
        width=size,
        height=size,
        health=100.0,
        max_health=100.0,
        bounce_coefficient=0.85,
        damage_multiplier=1.0,
    )


def _ball(x: float, y: float, vx: float = 0.0, vy: float = 0.0, radius: float = 10.0) -> Ball:
    return Ball(x=x, y=y, vx=vx, vy=vy, radius=radius, color="#FF6B6B")


@pytest.fixture
def world() -> World:
    return World(GameConfig(wells=()))


def _system(world: World, lethal: bool = False) -> tuple[CollisionSystem, RecordingSink]:
    sink = RecordingSink(world, lethal)
    physics = BallPhysics(world, random.Random(0))
    return CollisionSystem(world, physics, sink), sink


class TestHandleCollision:
    def test_one_pixel_penetration(self, world: World) -> None:
        system, sink = _system(world)
        enemy = _enemy()
        # Center-to-center distance is radius + width/2 - 1.
        ball = _ball(120.0 - (10.0 + 20.0 - 1.0), 120.0, vx=10.0, vy=0.0)
        contact = system.detect(ball, enemy)
        assert contact is not None
        assert math.isclose(contact.depth, 1.0)

        system.handle_collision(ball, enemy, contact)
        assert math.isclose(ball.x, 91.0 - 1.1)
        assert math.isclose(ball.y, 120.0)
        assert math.isclose(ball.vx, 10.0 - 2.0 * 10.0 * 0.85 * 1.4)
        assert math.isclose(ball.vy, 0.0, abs_tol=1e-9)

    def test_damage_scales_with_speed(self, world: World) -> None:
        system, sink = _system(world)
        enemy = _enemy()
        enemy.damage_multiplier = 2.0
        ball = _ball(95.0, 120.0, vx=3.0, vy=4.0)
        contact = system.detect(ball, enemy)
        assert contact is not None
        system.handle_collision(ball, enemy, contact, index=0)
        assert sink.hits == [(1, pytest.approx(25.0 * 2.0 * 1.5), 0)]

    def test_hit_spins_enemy(self, world: World) -> None:
        system, _ = _system(world)
        enemy = _enemy()
        ball = _ball(95.0, 120.0, vx=1.0)
        system.handle_collision(ball, enemy, system.detect(ball, enemy))
        assert math.isclose(enemy.rotation, 0.1)

    def test_worn_enemy_bounces_less(self, world: World) -> None:
        system, _ = _system(world)
        fresh, worn = _enemy(1), _enemy(2)
        worn.health = 20.0
        a = _ball(95.0, 120.0, vx=5.0)
        b = _ball(95.0, 120.0, vx=5.0)
        system.handle_collision(a, fresh, system.detect(a, fresh))
        system.handle_collision(b, worn, system.detect(b, worn))
        assert a.vx < b.vx < 0.0


class TestApplyBounce:
    def test_separating_ball_only_pushed_out(self, world: World) -> None:
        system, _ = _system(world)
        ball = _ball(50.0, 50.0, vx=-4.0, vy=2.0)
        system.apply_bounce(ball, Contact(normal=(-1.0, 0.0), depth=2.0), 1.0)
        assert (ball.vx, ball.vy) == (-4.0, 2.0)
        assert math.isclose(ball.x, 50.0 - 2.2)

    def test_tangential_velocity_kept(self, world: World) -> None:
        system, _ = _system(world)
        ball = _ball(50.0, 50.0, vx=3.0, vy=6.0)
        system.apply_bounce(ball, Contact(normal=(0.0, -1.0), depth=0.0), 0.5)
        assert ball.vx == 3.0
        assert math.isclose(ball.vy, 6.0 - 2.0 * 6.0 * 0.5 * 1.4)


class TestCheckCollisions:
    def test_no_contacts(self, world: World) -> None:
        system, sink = _system(world)
        world.enemies.append(_enemy())
        world.balls.append(_ball(400.0, 400.0))
        assert system.check_collisions() == 0
        assert sink.hits == []

    def test_ball_hits_every_overlapping_enemy(self, world: World) -> None:
        system, sink = _system(world)
        world.enemies.extend([_enemy(1), _enemy(2, x=140.0, y=140.0)])
        world.balls.append(_ball(145.0, 135.0, vy=2.0))
        assert system.check_collisions() == 2
        assert [hit[0] for hit in sink.hits] == [2, 1]
        assert [hit[2] for hit in sink.hits] == [1, 0]

    def test_kill_stops_ball_for_this_tick(self, world: World) -> None:
        system, sink = _system(world, lethal=True)
        world.enemies.extend([_enemy(1), _enemy(2, x=140.0, y=140.0)])
        world.balls.append(_ball(145.0, 135.0, vy=2.0))
        assert system.check_collisions() == 1
        assert [e.id for e in world.enemies] == [1]

    def test_dead_enemies_skipped(self, world: World) -> None:
        system, sink = _system(world)
        enemy = _enemy()
        enemy.health = 0.0
        world.enemies.append(enemy)
        world.balls.append(_ball(95.0, 120.0))
        assert system.check_collisions() == 0

    def test_system_wrapper(self, world: World) -> None:
        system, sink = _system(world)
        world.enemies.append(_enemy())
        world.balls.append(_ball(95.0, 120.0, vx=1.0))
        make_collision_system(system)(world, None)
        assert len(sink.hits) == 1
