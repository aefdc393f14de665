"""Read-only per-frame snapshot handed to presentation layers."""
from __future__ import annotations

from dataclasses import dataclass

from bounce.types import TurnInfo
from bounce.world import World


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    radius: float
    color: str
    trail: tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class EnemyView:
    id: int
    kind: str
    x: float
    y: float
    width: float
    height: float
    color: str
    outline_color: str
    rotation: float
    sides: int
    health: float
    max_health: float
    armor: int | None
    max_armor: int | None
    flashing: bool


@dataclass(frozen=True)
class WellView:
    x: float
    y: float
    radius: float
    rotation: float


@dataclass(frozen=True)
class FrameView:
    width: float
    height: float
    balls: tuple[BallView, ...]
    enemies: tuple[EnemyView, ...]
    wells: tuple[WellView, ...]
    turn: TurnInfo
    score: int
    combo_multiplier: float
    wave: int


def frame_view(world: World) -> FrameView:
    """Copy everything a renderer needs out of ``world``."""
    return FrameView(
        width=world.width,
        height=world.height,
        balls=tuple(
            BallView(b.x, b.y, b.radius, b.color, tuple(b.trail)) for b in world.balls
        ),
        enemies=tuple(
            EnemyView(
                id=e.id,
                kind=e.kind,
                x=e.x,
                y=e.y,
                width=e.width,
                height=e.height,
                color=e.color,
                outline_color=e.outline_color,
                rotation=e.rotation,
                sides=e.sides,
                health=e.health,
                max_health=e.max_health,
                armor=e.armor.current if e.armor is not None else None,
                max_armor=e.armor.maximum if e.armor is not None else None,
                flashing=e.flash_timer > 0,
            )
            for e in world.enemies
        ),
        wells=tuple(WellView(w.x, w.y, w.radius, w.rotation) for w in world.wells),
        turn=world.get_turn_info(),
        score=world.score,
        combo_multiplier=world.combo_multiplier,
        wave=world.wave_number,
    )
