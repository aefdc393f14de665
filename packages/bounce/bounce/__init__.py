"""bounce - turn-based ball-drop simulation core."""

from bounce.components import Armor, Ball, Enemy, GravityWell
from bounce.config import GameConfig, WellSpec
from bounce.engine import Engine
from bounce.events import EventBus
from bounce.systems import make_turn_system
from bounce.types import FloorPolicy, LaunchOptions, Modifier, TickContext, Turn, TurnInfo
from bounce.volley import LaunchIntent, VolleyQueue, make_volley_system
from bounce.world import World

__all__ = [
    "Armor",
    "Ball",
    "Enemy",
    "Engine",
    "EventBus",
    "FloorPolicy",
    "GameConfig",
    "GravityWell",
    "LaunchIntent",
    "LaunchOptions",
    "Modifier",
    "TickContext",
    "Turn",
    "TurnInfo",
    "VolleyQueue",
    "WellSpec",
    "World",
    "make_turn_system",
    "make_volley_system",
]
