"""Tests for the turn bookkeeping system."""

from bounce.engine import Engine
from bounce.systems import make_turn_system
from bounce.types import Turn


def test_completed_player_turn_requests_enemy_movement():
    engine = Engine()
    engine.add_system(make_turn_system())
    world = engine.world
    world.balls_dropped_this_turn = world.max_balls_per_turn
    engine.step()
    assert world.current_turn is Turn.ENEMY
    assert world.enemy_movement_requested


def test_turn_stays_with_player_while_balls_remain():
    engine = Engine()
    engine.add_system(make_turn_system())
    engine.step()
    assert engine.world.current_turn is Turn.PLAYER


def test_callback_receives_new_turn():
    engine = Engine()
    changes = []
    engine.add_system(make_turn_system(lambda world, ctx, turn: changes.append(turn)))
    engine.world.end_turn()
    engine.step()
    engine.step()
    assert changes == [Turn.ENEMY]
