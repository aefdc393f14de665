"""bounce-enemies - enemy catalog, wave policy and the enemy turn phase."""
from __future__ import annotations

from bounce_enemies.catalog import (
    DEFAULT_ARCHETYPES,
    THEME_TIERS,
    EnemyArchetype,
    EnemyCatalog,
    Theme,
    theme_for_wave,
)
from bounce_enemies.system import EnemySystem, make_enemy_system
from bounce_enemies.waves import WaveConfig, pick_for_budget, roll_modifiers, wave_config

__all__ = [
    "DEFAULT_ARCHETYPES",
    "THEME_TIERS",
    "EnemyArchetype",
    "EnemyCatalog",
    "EnemySystem",
    "Theme",
    "WaveConfig",
    "make_enemy_system",
    "pick_for_budget",
    "roll_modifiers",
    "theme_for_wave",
    "wave_config",
]
