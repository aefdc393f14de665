"""Entity records shared by every system. Plain data, no behavior."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from bounce.types import Modifier, Vec2


@dataclass(eq=False)
class Ball:
    """A ball in flight. Velocity is in pixels per tick."""

    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: str
    trail: deque[Vec2] = field(default_factory=lambda: deque(maxlen=10))
    is_bonus: bool = False


@dataclass
class Armor:
    """Damage-absorbing pool carried by armored enemies."""

    current: int
    maximum: int


@dataclass(eq=False)
class Enemy:
    """A shape on the enemy grid.

    ``x``/``y`` are the top-left corner in pixels; ``grid_x``/``grid_y``
    are the cell the shape occupies. ``armor`` is None unless the enemy
    carries the armored modifier.
    """

    id: int
    kind: str
    x: float
    y: float
    grid_x: int
    grid_y: int
    width: float
    height: float
    health: float
    max_health: float
    bounce_coefficient: float
    damage_multiplier: float
    step_cells: int = 1
    sides: int = 4
    rotation: float = 0.0
    color: str = "#91a4ff"
    outline_color: str = "#60a5fa"
    flash_timer: int = 0
    drops_ball: bool = False
    is_fragment: bool = False
    fragment_spawned: bool = False
    force_fragment: bool = False
    wave_born: int = 1
    modifiers: frozenset[Modifier] = frozenset()
    armor: Armor | None = None

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def center(self) -> Vec2:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def health_ratio(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return self.health / self.max_health


@dataclass
class GravityWell:
    """Localized pull-and-swirl force field.

    Position is recomputed every environment tick from the normalized
    anchor, the world size and the oscillation parameters.
    """

    anchor: Vec2
    x: float
    y: float
    radius: float
    strength: float
    tangential_strength: float
    spin: float
    amplitude: float
    speed: float
    phase: float
    rotation: float = 0.0
