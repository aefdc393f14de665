"""2D vector helpers operating on ``(x, y)`` tuples."""
from __future__ import annotations

import math

from bounce.types import Vec2


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vec2, s: float) -> Vec2:
    return (v[0] * s, v[1] * s)


def dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def length(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def normalize(v: Vec2) -> Vec2:
    """Unit vector along ``v``; the zero vector is returned unchanged."""
    mag = length(v)
    if mag == 0.0:
        return v
    return (v[0] / mag, v[1] / mag)


def perpendicular(v: Vec2) -> Vec2:
    """``v`` rotated a quarter turn counter-clockwise."""
    return (-v[1], v[0])


def from_angle(theta: float) -> Vec2:
    return (math.cos(theta), math.sin(theta))


def lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def reflect(v: Vec2, normal: Vec2, restitution: float) -> Vec2:
    """Reflect the normal component of ``v`` with restitution.

    ``normal`` must be unit length. The tangential component is kept
    as is; only velocity heading into the surface (``v . n < 0``) is
    changed.
    """
    vn = dot(v, normal)
    if vn >= 0.0:
        return v
    impulse = (1.0 + restitution) * vn
    return (v[0] - impulse * normal[0], v[1] - impulse * normal[1])
