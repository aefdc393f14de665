"""Wave policy: threat budget, archetype picks and modifier rolls."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass, replace

from bounce.types import Modifier

from bounce_enemies.catalog import EnemyArchetype, EnemyCatalog

COMBO_PRESSURE_THRESHOLD = 2.0
COMBO_PRESSURE = 2
REINFORCEMENT_BUDGET_FACTOR = 0.4


@dataclass(frozen=True)
class WaveConfig:
    budget: int
    armored_chance: float
    splitter_chance: float
    elite_chance: float
    boss_wave: bool

    def as_reinforcement(self) -> WaveConfig:
        """A reduced-budget copy used to top up thin waves. Never a boss wave."""
        return replace(
            self,
            budget=max(1, int(self.budget * REINFORCEMENT_BUDGET_FACTOR)),
            boss_wave=False,
        )


def wave_config(wave: int, threat_base: int, combo_multiplier: float = 1.0) -> WaveConfig:
    """Difficulty for ``wave``. A hot combo streak raises the budget."""
    pressure = COMBO_PRESSURE if combo_multiplier > COMBO_PRESSURE_THRESHOLD else 0
    return WaveConfig(
        budget=threat_base + int(wave * 1.5) + pressure,
        armored_chance=min(0.1 + wave * 0.02, 0.5),
        splitter_chance=0.35 if wave % 4 == 0 else 0.12,
        elite_chance=max(0, wave - 4) * 0.03,
        boss_wave=wave % 5 == 0,
    )


def pick_weighted(pool: list[EnemyArchetype], rng: _random_mod.Random) -> EnemyArchetype:
    total = sum(a.weight for a in pool)
    roll = rng.random() * total
    for archetype in pool:
        roll -= archetype.weight
        if roll <= 0:
            return archetype
    return pool[-1]


def pick_for_budget(
    catalog: EnemyCatalog, budget: float, rng: _random_mod.Random
) -> EnemyArchetype:
    """Weighted pick among archetypes the budget can afford.

    Falls back to the cheapest archetype when nothing fits.
    """
    pool = catalog.affordable(budget) or [catalog.cheapest()]
    return pick_weighted(pool, rng)


def roll_modifiers(config: WaveConfig, rng: _random_mod.Random) -> frozenset[Modifier]:
    rolled: set[Modifier] = set()
    if rng.random() < config.armored_chance:
        rolled.add(Modifier.ARMORED)
    if rng.random() < config.splitter_chance:
        rolled.add(Modifier.SPLITTER)
    if rng.random() < config.elite_chance:
        rolled.add(Modifier.ELITE)
    return frozenset(rolled)
