"""VolleyQueue - paced multi-shot launches as queued intents."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from bounce.types import LaunchOptions, Vec2

if TYPE_CHECKING:
    from bounce.types import TickContext
    from bounce.world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchIntent:
    x: float
    y: float
    options: LaunchOptions


class VolleyQueue:
    """Holds pending launches and releases at most one every ``spacing`` ticks.

    Cancelling only drops intents that have not launched yet; balls
    already in the world and the turn counters are untouched.
    """

    def __init__(self, spacing: int = 5) -> None:
        if spacing < 1:
            raise ValueError(f"spacing must be >= 1, got {spacing}")
        self._spacing = spacing
        self._pending: deque[LaunchIntent] = deque()
        self._cooldown = 0

    @property
    def spacing(self) -> int:
        return self._spacing

    def fire(
        self,
        x: float,
        y: float,
        direction: Vec2,
        shots: int,
        speed: float | None = None,
    ) -> int:
        """Queue ``shots`` identical launches. Returns the number queued."""
        options = LaunchOptions(direction=direction, speed=speed)
        for _ in range(max(0, shots)):
            self._pending.append(LaunchIntent(x, y, options))
        return max(0, shots)

    def enqueue(self, intent: LaunchIntent) -> None:
        self._pending.append(intent)

    def pending(self) -> int:
        return len(self._pending)

    def cancel(self) -> int:
        """Drop all pending launches. Returns how many were dropped."""
        dropped = len(self._pending)
        self._pending.clear()
        self._cooldown = 0
        if dropped:
            logger.debug("volley cancelled, %d shots dropped", dropped)
        return dropped

    def next_due(self) -> LaunchIntent | None:
        """Pop the next launch if its slot has come up this tick."""
        if not self._pending:
            return None
        if self._cooldown > 0:
            self._cooldown -= 1
            return None
        self._cooldown = self._spacing - 1
        return self._pending.popleft()


def make_volley_system(
    queue: VolleyQueue,
    launch: Callable[[LaunchIntent], bool],
) -> Callable[[World, TickContext], None]:
    """Return a system that launches at most one queued shot per tick.

    ``launch(intent) -> bool`` creates the ball. A rejected launch means
    the turn no longer allows drops, so the rest of the volley is dropped.
    """

    def volley_system(world: World, ctx: TickContext) -> None:
        intent = queue.next_due()
        if intent is None:
            return
        if not launch(intent):
            queue.cancel()

    return volley_system
