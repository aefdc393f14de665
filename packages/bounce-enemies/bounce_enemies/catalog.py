"""Enemy archetype definitions and the catalog that holds them."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EnemyArchetype:
    """Immutable enemy template.

    Attributes:
        name: Unique archetype name, also the enemy ``kind``.
        color: Fill color for presentation.
        bounce_coefficient: Bounce strength applied to balls at full health.
        size: Edge length in pixels.
        max_health: Health before wave/ball scaling.
        damage_multiplier: Multiplier on incoming ball damage.
        step_cells: Grid rows advanced per enemy phase.
        cost: Threat budget consumed by one spawn.
        weight: Relative spawn likelihood among affordable archetypes.
        sides: Polygon side count used for bounce normals.
    """

    name: str
    color: str
    bounce_coefficient: float
    size: int
    max_health: float
    damage_multiplier: float
    step_cells: int = 1
    cost: float = 1.0
    weight: float = 1.0
    sides: int = 4

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("EnemyArchetype name must be non-empty")
        if self.size <= 0:
            raise ValueError(f"size must be > 0, got {self.size}")
        if self.max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {self.max_health}")
        if self.weight <= 0:
            raise ValueError(f"weight must be > 0, got {self.weight}")
        if self.sides < 3:
            raise ValueError(f"sides must be >= 3, got {self.sides}")


DEFAULT_ARCHETYPES: tuple[EnemyArchetype, ...] = (
    EnemyArchetype("normal", "#91a4ff", 0.85, 30, 95, 1.0, step_cells=1, cost=1, weight=5),
    EnemyArchetype("bouncy", "#8bf8a0", 1.4, 26, 80, 1.2, step_cells=2, cost=1.5, weight=3),
    EnemyArchetype("sticky", "#f472b6", 0.35, 34, 140, 0.85, step_cells=1, cost=2, weight=2),
    EnemyArchetype("heavy", "#60a5fa", 0.55, 42, 210, 0.65, step_cells=1, cost=2.5, weight=1.6),
    EnemyArchetype("boss", "#fbbf24", 0.9, 56, 420, 0.9, step_cells=1, cost=4.5, weight=0.6),
    EnemyArchetype("triangle", "#f87171", 1.1, 30, 90, 1.15, cost=1.3, weight=2.5, sides=3),
    EnemyArchetype("pentagon", "#c084fc", 0.75, 32, 130, 0.9, cost=2.2, weight=1.8, sides=5),
    EnemyArchetype("hexagon", "#60a5fa", 0.65, 36, 160, 0.75, cost=2.8, weight=1.4, sides=6),
    EnemyArchetype("heptagon", "#34d399", 0.6, 40, 190, 0.7, cost=3.4, weight=1.0, sides=7),
)

BOSS = "boss"


@dataclass(frozen=True)
class Theme:
    min_wave: int
    fill: str
    border: str


THEME_TIERS: tuple[Theme, ...] = (
    Theme(1, "#1d4ed8", "#60a5fa"),
    Theme(4, "#b45309", "#f97316"),
    Theme(7, "#831843", "#f472b6"),
    Theme(11, "#6b21a8", "#c084fc"),
)


def theme_for_wave(wave: int) -> Theme:
    for theme in reversed(THEME_TIERS):
        if wave >= theme.min_wave:
            return theme
    return THEME_TIERS[0]


class EnemyCatalog:
    """Ordered archetype registry."""

    def __init__(self, archetypes: tuple[EnemyArchetype, ...] = DEFAULT_ARCHETYPES) -> None:
        self._archetypes: dict[str, EnemyArchetype] = {}
        for archetype in archetypes:
            self.define(archetype)

    def define(self, archetype: EnemyArchetype) -> None:
        """Register an archetype. Overwrites if the name exists."""
        self._archetypes[archetype.name] = archetype

    def get(self, name: str) -> EnemyArchetype:
        """Look up an archetype. Raises KeyError if not defined."""
        if name not in self._archetypes:
            raise KeyError(name)
        return self._archetypes[name]

    def has(self, name: str) -> bool:
        return name in self._archetypes

    def names(self) -> list[str]:
        return list(self._archetypes)

    def all(self) -> list[EnemyArchetype]:
        return list(self._archetypes.values())

    def cheapest(self) -> EnemyArchetype:
        if not self._archetypes:
            raise KeyError("catalog is empty")
        return min(self._archetypes.values(), key=lambda a: a.cost)

    def affordable(self, budget: float, slack: float = 0.4) -> list[EnemyArchetype]:
        return [a for a in self._archetypes.values() if a.cost <= budget + slack]

    def __len__(self) -> int:
        return len(self._archetypes)
