"""EnemySystem - roster, waves, the advance phase, damage and fragmentation."""
from __future__ import annotations

import logging
import math
import random as _random_mod
from typing import TYPE_CHECKING, Callable

from bounce import events as ev
from bounce.components import Armor, Enemy
from bounce.types import Modifier

from bounce_enemies.catalog import BOSS, EnemyArchetype, EnemyCatalog, theme_for_wave
from bounce_enemies.waves import WaveConfig, pick_for_budget, roll_modifiers, wave_config

if TYPE_CHECKING:
    from bounce.types import TickContext
    from bounce.world import World

logger = logging.getLogger(__name__)

FLASH_TICKS = 10
FRAGMENT_DRIFT = 0.8
ARMOR_ABSORB = 0.6
ARMOR_CHIP = 0.5
ARMOR_FRACTION = 0.35
ELITE_SCALE = 1.2
EXTRA_BALL_HEALTH = 0.25
WAVE_HEALTH = 0.15

ELITE_OUTLINE = "#fcd34d"
ARMORED_OUTLINE = "#a3e635"
FRAGMENT_COLOR = "#FCD34D"
AGGRESSIVE_FRAGMENT_COLOR = "#f97316"
FRAGMENT_DAMAGE_MULTIPLIER = 0.6


class EnemySystem:
    """Owns enemy spawning and the enemy half of the turn cycle.

    The first wave is seeded at construction. Each processed enemy phase
    advances every enemy, bumps the wave number by exactly one, spawns
    the next wave and hands the turn back to the player.
    """

    def __init__(
        self,
        world: World,
        rng: _random_mod.Random | None = None,
        catalog: EnemyCatalog | None = None,
        seed_wave: bool = True,
    ) -> None:
        self._world = world
        self._rng = rng if rng is not None else _random_mod.Random()
        self._catalog = catalog if catalog is not None else EnemyCatalog()
        self._next_id = 0
        self.grid_size = world.config.grid_size
        self.grid_cols = 0
        self.grid_rows = 0
        self.wave_threat_base = world.config.wave_threat_base
        self.update_dimensions(world.width, world.height)
        if seed_wave:
            self.spawn_wave()

    @property
    def wave_number(self) -> int:
        return self._world.wave_number

    @property
    def catalog(self) -> EnemyCatalog:
        return self._catalog

    def archetypes(self) -> list[EnemyArchetype]:
        return self._catalog.all()

    def update_dimensions(self, width: float, height: float) -> None:
        self.grid_cols = int(width // self.grid_size)
        self.grid_rows = int(height // self.grid_size)

    def density_floor(self) -> int:
        return max(3, int(self.grid_cols * 0.4))

    # -- Wave policy --

    def get_wave_config(self) -> WaveConfig:
        return wave_config(
            self._world.wave_number, self.wave_threat_base, self._world.combo_multiplier
        )

    def pick_type_for_budget(self, budget: float) -> EnemyArchetype:
        return pick_for_budget(self._catalog, budget, self._rng)

    def roll_modifiers(self, config: WaveConfig) -> frozenset[Modifier]:
        return roll_modifiers(config, self._rng)

    def get_health_multiplier(self, is_fragment: bool) -> float:
        """Health scale for a new enemy, in multiples of its archetype health.

        Wave one rolls between one and four hits' worth; later waves use
        two. More balls per turn and later waves both toughen enemies.
        Fragments are never scaled.
        """
        if is_fragment:
            return 1.0
        wave = self._world.wave_number
        base_hits = 1.0 + self._rng.random() * 3.0 if wave == 1 else 2.0
        extra_balls = self._world.max_balls_per_turn - self._world.config.base_balls_per_turn
        ball_factor = 1.0 + max(0, extra_balls) * EXTRA_BALL_HEALTH
        wave_factor = 1.0 + (wave - 1) * WAVE_HEALTH
        return base_hits * ball_factor * wave_factor

    # -- Spawning --

    def _shuffled_columns(self) -> list[int]:
        columns = list(range(self.grid_cols))
        self._rng.shuffle(columns)
        return columns

    def spawn_wave(self, config: WaveConfig | None = None) -> list[Enemy]:
        """Place 3-5 enemies in distinct random columns of the bottom row."""
        if self.grid_cols <= 0 or self.grid_rows <= 0:
            return []
        if config is None:
            config = self.get_wave_config()

        count = 3 + self._rng.randrange(3)
        columns = self._shuffled_columns()
        spawned: list[Enemy] = []
        for i in range(count):
            if not columns:
                columns = self._shuffled_columns()
            column = columns.pop()
            if i == 0 and config.boss_wave and self._catalog.has(BOSS):
                archetype = self._catalog.get(BOSS)
            else:
                archetype = self.pick_type_for_budget(config.budget)
            modifiers = self.roll_modifiers(config)
            spawned.append(
                self.create_enemy(archetype, column, self.grid_rows - 1, modifiers)
            )
        logger.debug(
            "wave %d: spawned %d enemies (budget %d)",
            self._world.wave_number, len(spawned), config.budget,
        )
        return spawned

    def spawn_reinforcement(self) -> list[Enemy]:
        return self.spawn_wave(self.get_wave_config().as_reinforcement())

    def advance_wave(self) -> list[Enemy]:
        self._world.wave_number += 1
        spawned = self.spawn_wave()
        self._world.events.publish(
            ev.WAVE_ADVANCED, wave=self._world.wave_number, spawned=len(spawned)
        )
        return spawned

    def create_enemy(
        self,
        archetype: EnemyArchetype,
        grid_x: int | None = None,
        grid_y: int | None = None,
        modifiers: frozenset[Modifier] = frozenset(),
        fragment_of: Enemy | None = None,
    ) -> Enemy:
        world = self._world
        wave = world.wave_number
        is_fragment = fragment_of is not None
        theme = theme_for_wave(wave)
        health = float(math.floor(archetype.max_health * self.get_health_multiplier(is_fragment)))

        if grid_x is None:
            grid_x = self._rng.randrange(max(1, self.grid_cols))
        if grid_y is None:
            grid_y = max(0, self.grid_rows - 2)

        size = float(archetype.size)
        self._next_id += 1
        enemy = Enemy(
            id=self._next_id,
            kind=archetype.name,
            x=0.0,
            y=float(grid_y * self.grid_size),
            grid_x=grid_x,
            grid_y=grid_y,
            width=size,
            height=size,
            health=health,
            max_health=health,
            bounce_coefficient=archetype.bounce_coefficient,
            damage_multiplier=archetype.damage_multiplier,
            step_cells=1 if is_fragment else archetype.step_cells,
            sides=archetype.sides,
            rotation=self._rng.random() * math.tau,
            color=archetype.color,
            outline_color=theme.border,
            drops_ball=False if is_fragment else self._rng.random() < world.config.bonus_ball_chance,
            is_fragment=is_fragment,
            wave_born=wave,
            modifiers=frozenset() if is_fragment else frozenset(modifiers),
        )

        if Modifier.ELITE in enemy.modifiers:
            enemy.width = float(math.floor(enemy.width * ELITE_SCALE))
            enemy.height = float(math.floor(enemy.height * ELITE_SCALE))
            enemy.color = theme.fill
            enemy.outline_color = ELITE_OUTLINE
        if Modifier.ARMORED in enemy.modifiers:
            max_armor = int(enemy.max_health * ARMOR_FRACTION)
            enemy.armor = Armor(current=max_armor, maximum=max_armor)
            enemy.outline_color = ARMORED_OUTLINE
        if Modifier.SPLITTER in enemy.modifiers:
            enemy.force_fragment = True

        enemy.x = grid_x * self.grid_size + (self.grid_size - enemy.width) / 2
        world.enemies.append(enemy)
        return enemy

    def spawn_fragment(self, parent: Enemy, aggressive: bool = False) -> Enemy:
        """Spawn a smaller, bouncier piece of ``parent`` one row above it."""
        size = max(16, int(parent.width * 0.6))
        health = max(30, int(parent.max_health * 0.25))
        template = EnemyArchetype(
            name=f"{parent.kind}-fragment",
            color=AGGRESSIVE_FRAGMENT_COLOR if aggressive else FRAGMENT_COLOR,
            bounce_coefficient=1.15,
            size=size,
            max_health=health,
            damage_multiplier=FRAGMENT_DAMAGE_MULTIPLIER,
            sides=parent.sides,
        )
        fragment = self.create_enemy(
            template, parent.grid_x, max(parent.grid_y - 1, 0), fragment_of=parent
        )
        logger.debug("enemy %d split off fragment %d", parent.id, fragment.id)
        return fragment

    # -- Turn phase --

    def update_enemies(self) -> bool:
        """Run the enemy half of the tick. Returns True if enemies advanced."""
        world = self._world
        for enemy in world.enemies:
            if enemy.flash_timer > 0:
                enemy.flash_timer -= 1

        if not world.enemy_movement_requested:
            if len(world.enemies) < self.density_floor():
                self.spawn_reinforcement()
            return False

        for i in range(len(world.enemies) - 1, -1, -1):
            enemy = world.enemies[i]
            if enemy.is_fragment:
                enemy.y -= FRAGMENT_DRIFT
            else:
                enemy.grid_y -= enemy.step_cells
                enemy.y = float(enemy.grid_y * self.grid_size)
            if enemy.grid_y < 0:
                del world.enemies[i]
                self._escape(enemy)

        self.advance_wave()
        world.start_new_player_turn()
        return True

    def _escape(self, enemy: Enemy) -> None:
        world = self._world
        world.escaped_count += 1
        logger.info("enemy %d (%s) reached the top in wave %d", enemy.id, enemy.kind, world.wave_number)
        world.events.publish(
            ev.ENEMY_ESCAPED, enemy_id=enemy.id, kind=enemy.kind, wave=world.wave_number
        )

    # -- Damage --

    def apply_damage(self, enemy: Enemy, damage: float, index: int | None = None) -> bool:
        """Damage ``enemy``. Returns True if it died and was removed.

        Armor soaks up to 60% of a hit and wears down by that amount.
        The hit itself is reduced by half of what was soaked, at least 1.
        """
        world = self._world
        remaining = damage
        armor = enemy.armor
        if armor is not None and armor.current > 0:
            absorbed = min(armor.current, math.floor(remaining * ARMOR_ABSORB))
            armor.current -= absorbed
            remaining -= max(1, math.floor(absorbed * ARMOR_CHIP))
        remaining = max(0.0, remaining)

        enemy.health -= remaining
        world.register_hit(enemy.id)
        enemy.flash_timer = FLASH_TICKS

        if enemy.health <= 0:
            enemy.health = 0.0
            if enemy.drops_ball:
                world.add_bonus_ball()
            world.register_kill(enemy.is_fragment)
            awarded = world.add_score(enemy.max_health)
            self._remove(enemy, index)
            logger.debug("enemy %d (%s) destroyed for %d points", enemy.id, enemy.kind, awarded)
            world.events.publish(
                ev.ENEMY_KILLED,
                enemy_id=enemy.id,
                kind=enemy.kind,
                score=awarded,
                fragment=enemy.is_fragment,
            )
            if enemy.force_fragment and not enemy.is_fragment:
                self.spawn_fragment(enemy, aggressive=True)
            return True

        if (
            not enemy.is_fragment
            and not enemy.fragment_spawned
            and (
                enemy.health_ratio <= world.config.fragment_threshold
                or enemy.force_fragment
            )
        ):
            self.spawn_fragment(enemy, aggressive=False)
            enemy.fragment_spawned = True
        return False

    def _remove(self, enemy: Enemy, index: int | None) -> None:
        enemies = self._world.enemies
        if index is not None and 0 <= index < len(enemies) and enemies[index] is enemy:
            del enemies[index]
        elif enemy in enemies:
            enemies.remove(enemy)


def make_enemy_system(
    enemies: EnemySystem,
    on_advance: Callable[[World, TickContext], None] | None = None,
) -> Callable[[World, TickContext], None]:
    """Return a system that runs the enemy phase or tops up the roster."""

    def enemy_system(world: World, ctx: TickContext) -> None:
        if enemies.update_enemies() and on_advance is not None:
            on_advance(world, ctx)

    return enemy_system
