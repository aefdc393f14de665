"""Build a complete game and expose the calls a presentation layer makes."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from bounce import Engine, GameConfig, LaunchIntent, LaunchOptions, Turn, TurnInfo, VolleyQueue
from bounce import make_turn_system, make_volley_system
from bounce.events import Handler
from bounce.types import Vec2
from bounce.world import World
from bounce_enemies import EnemyCatalog, EnemySystem, make_enemy_system
from bounce_physics import BallPhysics, CollisionSystem, make_ball_system, make_collision_system, vec

from bounce_game.view import FrameView, frame_view

logger = logging.getLogger(__name__)

# Drags shorter than this are treated as taps, not aims.
MIN_AIM_DISTANCE = 5.0
VOLLEY_SPACING = 5


@dataclass
class Game:
    """Holds the engine and every system for one session."""

    engine: Engine
    physics: BallPhysics
    enemies: EnemySystem
    collisions: CollisionSystem
    volley: VolleyQueue

    @property
    def world(self) -> World:
        return self.engine.world

    def step(self) -> None:
        self.engine.step()

    def run(self, ticks: int) -> None:
        self.engine.run(ticks)

    # -- Presentation-to-core calls --

    def create_ball(
        self, x: float, y: float | None = None, options: LaunchOptions | None = None
    ) -> bool:
        return self.physics.create_ball(x, y, options)

    def fire_volley(self, start: Vec2, target: Vec2, speed: float | None = None) -> int:
        """Queue every remaining ball this turn along ``start -> target``.

        Replaces any volley still in flight. Returns the number of shots
        queued; zero when it is not the player's turn or the drag was
        too short to aim.
        """
        world = self.world
        if world.current_turn is not Turn.PLAYER:
            return 0
        direction = vec.sub(target, start)
        if vec.length(direction) < MIN_AIM_DISTANCE:
            return 0
        shots = max(0, world.max_balls_per_turn - world.balls_dropped_this_turn)
        self.volley.cancel()
        queued = self.volley.fire(start[0], start[1], direction, shots, speed)
        logger.debug("volley of %d queued from (%.0f, %.0f)", queued, start[0], start[1])
        return queued

    def cancel_volley(self) -> int:
        return self.volley.cancel()

    def end_turn(self) -> None:
        self.volley.cancel()
        self.world.end_turn()

    def clear_balls(self) -> None:
        self.world.clear_balls()

    def set_dimensions(self, width: float, height: float) -> None:
        self.world.set_dimensions(width, height)
        self.enemies.update_dimensions(width, height)

    # -- Core-to-presentation data --

    def get_turn_info(self) -> TurnInfo:
        return self.world.get_turn_info()

    def view(self) -> FrameView:
        return frame_view(self.world)

    def subscribe(self, event: str, handler: Handler) -> None:
        self.engine.events.subscribe(event, handler)

    def unsubscribe(self, event: str, handler: Handler) -> None:
        self.engine.events.unsubscribe(event, handler)


def build_game(
    config: GameConfig | None = None,
    seed: int | None = None,
    catalog: EnemyCatalog | None = None,
    volley_spacing: int = VOLLEY_SPACING,
) -> Game:
    """Wire up a complete game. The first wave is already on the board."""
    engine = Engine(config, seed=seed)
    world = engine.world

    physics = BallPhysics(world, engine.random)
    enemies = EnemySystem(world, engine.random, catalog)
    collisions = CollisionSystem(world, physics, enemies)
    volley = VolleyQueue(volley_spacing)

    def launch(intent: LaunchIntent) -> bool:
        return physics.create_ball(intent.x, intent.y, intent.options)

    # Systems, in order
    engine.add_system(make_volley_system(volley, launch))
    engine.add_system(make_ball_system(physics))
    engine.add_system(make_enemy_system(enemies))
    engine.add_system(make_collision_system(collisions))
    engine.add_system(make_turn_system())

    logger.debug("game built (seed=%d, %d enemies)", engine.seed, len(world.enemies))
    return Game(
        engine=engine,
        physics=physics,
        enemies=enemies,
        collisions=collisions,
        volley=volley,
    )
