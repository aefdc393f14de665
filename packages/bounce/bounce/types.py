"""Shared enums, aliases and small value types for the bounce engine."""

from __future__ import annotations

import enum
import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

Vec2 = tuple[float, float]


class Turn(str, enum.Enum):
    PLAYER = "player"
    ENEMY = "enemy"


class FloorPolicy(str, enum.Enum):
    """What happens to a ball that reaches the bottom of the world."""

    EXIT = "exit"
    SETTLE = "settle"


class Modifier(str, enum.Enum):
    ARMORED = "armored"
    SPLITTER = "splitter"
    ELITE = "elite"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


@dataclass(frozen=True)
class LaunchOptions:
    """Aimed-shot parameters. ``speed`` of None means the configured launch speed."""

    direction: Vec2
    speed: float | None = None


@dataclass(frozen=True)
class TurnInfo:
    current_turn: Turn
    balls_dropped: int
    max_balls: int
    ball_count: int
    enemy_count: int
    pending_bonus: int


if TYPE_CHECKING:
    from bounce.world import World

System = Callable[["World", TickContext], None]
