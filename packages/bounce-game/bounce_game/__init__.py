"""bounce-game - wiring and presentation-facing API for the bounce engine."""
from __future__ import annotations

from bounce_game.game import Game, build_game
from bounce_game.view import BallView, EnemyView, FrameView, WellView, frame_view

__all__ = [
    "BallView",
    "EnemyView",
    "FrameView",
    "Game",
    "WellView",
    "build_game",
    "frame_view",
]
