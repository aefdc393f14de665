"""Game configuration dataclasses."""
from __future__ import annotations

from dataclasses import dataclass, field

from bounce.types import FloorPolicy, Vec2


@dataclass(frozen=True)
class WellSpec:
    """Placement and force parameters for one gravity well.

    Attributes:
        anchor: Position as a fraction of world width/height.
        radius: Influence radius in pixels.
        strength: Radial pull toward the center, per tick at the center.
        tangential_strength: Swirl force perpendicular to the pull.
        spin: Radians added to the well rotation every tick.
        amplitude: Oscillation offset in pixels.
        speed: Oscillation angular speed, radians per tick.
        phase: Oscillation phase offset in radians.
    """

    anchor: Vec2
    radius: float = 90.0
    strength: float = 0.12
    tangential_strength: float = 0.08
    spin: float = 0.03
    amplitude: float = 18.0
    speed: float = 0.02
    phase: float = 0.0

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"well radius must be > 0, got {self.radius}")
        ax, ay = self.anchor
        if not (0.0 <= ax <= 1.0 and 0.0 <= ay <= 1.0):
            raise ValueError(f"well anchor must be normalized, got {self.anchor}")


DEFAULT_WELLS: tuple[WellSpec, ...] = (
    WellSpec(anchor=(0.28, 0.42)),
    WellSpec(anchor=(0.72, 0.58), strength=0.1, tangential_strength=0.1, phase=1.7),
)


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for one game session.

    All speeds and forces are per tick (one display frame); all lengths
    are pixels.
    """

    width: float = 800.0
    height: float = 600.0
    fps: int = 60

    gravity: float = 0.5
    friction: float = 0.99
    restitution: float = 0.7
    floor_policy: FloorPolicy = FloorPolicy.EXIT
    settle_speed: float = 0.5
    offscreen_margin: float = 50.0

    base_balls_per_turn: int = 5
    ball_damage: float = 25.0
    drop_height: float = 20.0
    drop_radius: tuple[float, float] = (10.0, 20.0)
    launch_radius: tuple[float, float] = (6.0, 10.0)
    launch_speed: float = 11.0
    trail_length: int = 10

    turn_timeout: int = 300
    combo_window: int = 90

    grid_size: int = 40
    wave_threat_base: int = 4
    bonus_ball_chance: float = 0.08
    fragment_threshold: float = 0.35

    bounce_boost: float = 1.4
    separation_factor: float = 1.1
    face_bias: float = 0.6
    hit_spin: float = 0.1

    wells: tuple[WellSpec, ...] = field(default=DEFAULT_WELLS)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"world dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if not 0.0 <= self.restitution <= 1.0:
            raise ValueError(f"restitution must be in [0, 1], got {self.restitution}")
        if not 0.0 < self.friction <= 1.0:
            raise ValueError(f"friction must be in (0, 1], got {self.friction}")
        if self.base_balls_per_turn < 1:
            raise ValueError("base_balls_per_turn must be >= 1")
        if self.grid_size <= 0:
            raise ValueError("grid_size must be positive")
        if self.combo_window <= 0:
            raise ValueError("combo_window must be positive")
        for name in ("drop_radius", "launch_radius"):
            lo, hi = getattr(self, name)
            if lo <= 0 or lo > hi:
                raise ValueError(f"{name} must be a positive (min, max) pair, got {(lo, hi)}")
        if not 0.0 <= self.face_bias <= 1.0:
            raise ValueError(f"face_bias must be in [0, 1], got {self.face_bias}")
