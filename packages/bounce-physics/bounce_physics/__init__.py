"""bounce-physics - ball integration and ball/enemy collision resolution."""
from __future__ import annotations

from bounce_physics import vec
from bounce_physics.balls import BALL_COLORS, BallPhysics, launch_speed, make_ball_system
from bounce_physics.collision import Contact, biased_normal, circle_vs_rect, face_normals
from bounce_physics.contacts import CollisionSystem, DamageSink, make_collision_system

__all__ = [
    "BALL_COLORS",
    "BallPhysics",
    "CollisionSystem",
    "Contact",
    "DamageSink",
    "biased_normal",
    "circle_vs_rect",
    "face_normals",
    "launch_speed",
    "make_ball_system",
    "make_collision_system",
    "vec",
]
