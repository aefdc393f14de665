"""Pure contact detection between balls and enemy shapes."""
from __future__ import annotations

import math
from dataclasses import dataclass

from bounce.types import Vec2

from bounce_physics import vec

_EPSILON = 1e-9


@dataclass(frozen=True)
class Contact:
    """Overlap between a circle and a rectangle.

    ``normal`` is unit length and points from the rectangle toward the
    circle center; ``depth`` is how far the circle must move along it
    to stop overlapping.
    """

    normal: Vec2
    depth: float
    degenerate: bool = False


def circle_vs_rect(
    center: Vec2,
    radius: float,
    left: float,
    top: float,
    width: float,
    height: float,
) -> Contact | None:
    """Detect a circle touching or overlapping an axis-aligned rectangle."""
    right = left + width
    bottom = top + height
    cx, cy = center
    closest = (min(max(cx, left), right), min(max(cy, top), bottom))
    offset = vec.sub(center, closest)
    dist = vec.length(offset)

    if dist > radius:
        return None

    if dist > _EPSILON:
        return Contact(normal=vec.scale(offset, 1.0 / dist), depth=radius - dist)

    # Center inside the rectangle: push out along the axis of least overlap.
    pen_left = cx - left
    pen_right = right - cx
    pen_top = cy - top
    pen_bottom = bottom - cy
    overlap_x = min(pen_left, pen_right)
    overlap_y = min(pen_top, pen_bottom)
    if overlap_x < overlap_y:
        normal = (-1.0, 0.0) if pen_left < pen_right else (1.0, 0.0)
        return Contact(normal=normal, depth=overlap_x + radius, degenerate=True)
    normal = (0.0, -1.0) if pen_top < pen_bottom else (0.0, 1.0)
    return Contact(normal=normal, depth=overlap_y + radius, degenerate=True)


def face_normals(sides: int, rotation: float) -> list[Vec2]:
    """Outward face normals of a regular polygon rotated by ``rotation``."""
    step = math.tau / sides
    return [vec.from_angle(rotation + i * step) for i in range(sides)]


def nearest_face_normal(raw: Vec2, sides: int, rotation: float) -> Vec2:
    best = raw
    best_dot = -math.inf
    for candidate in face_normals(sides, rotation):
        d = vec.dot(candidate, raw)
        if d > best_dot:
            best_dot = d
            best = candidate
    return best


def biased_normal(raw: Vec2, sides: int, rotation: float, bias: float = 0.6) -> Vec2:
    """Blend a box contact normal toward the closest polygon face normal.

    ``bias`` is the weight of the face normal. Shapes with fewer than
    three sides, or a blend that cancels out, keep the raw normal.
    """
    if sides < 3 or bias <= 0.0:
        return raw
    face = nearest_face_normal(raw, sides, rotation)
    blended = vec.lerp(raw, face, bias)
    if vec.length(blended) <= _EPSILON:
        return raw
    return vec.normalize(blended)
