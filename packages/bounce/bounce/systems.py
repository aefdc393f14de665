"""System factories for turn bookkeeping."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from bounce.types import Turn

if TYPE_CHECKING:
    from bounce.types import TickContext
    from bounce.world import World


def make_turn_system(
    on_turn_change: Callable[[World, TickContext, Turn], None] | None = None,
) -> Callable[[World, TickContext], None]:
    """Return a system that closes out player turns and ticks the turn clock.

    When the player has spent every ball and none remain in flight, enemy
    movement is requested. ``World.update_turns()`` then advances the
    environment, combo decay and turn timer.
    """

    def turn_system(world: World, ctx: TickContext) -> None:
        if world.is_player_turn_complete():
            world.request_enemy_movement()
        if world.update_turns() and on_turn_change is not None:
            on_turn_change(world, ctx, world.current_turn)

    return turn_system
