"""World - shared game state and the turn/score/combo state machine.

One ``World`` is owned by the engine and handed to every system. Systems
mutate it strictly in sequence within a tick; nothing here is
thread-safe and nothing needs to be.
"""
from __future__ import annotations

import logging
import math

from bounce import events as ev
from bounce.components import Ball, Enemy, GravityWell
from bounce.config import GameConfig
from bounce.events import EventBus
from bounce.types import Turn, TurnInfo

logger = logging.getLogger(__name__)

HIT_COMBO_STEP = 0.1
HIT_COMBO_CAP = 3.0
CHAIN_START_COMBO = 1.1
KILL_COMBO_STEP = 0.2
FRAGMENT_KILL_COMBO_STEP = 0.05
KILL_COMBO_CAP = 4.0
KILL_WINDOW_FACTOR = 1.2


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class World:
    def __init__(self, config: GameConfig | None = None, events: EventBus | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.events = events if events is not None else EventBus()
        cfg = self.config

        self.width = float(cfg.width)
        self.height = float(cfg.height)

        self.gravity = cfg.gravity
        self.friction = cfg.friction
        self.bounce = cfg.restitution

        self.balls: list[Ball] = []
        self.enemies: list[Enemy] = []
        self.wells: list[GravityWell] = [
            GravityWell(
                anchor=well_spec.anchor,
                x=0.0,
                y=0.0,
                radius=well_spec.radius,
                strength=well_spec.strength,
                tangential_strength=well_spec.tangential_strength,
                spin=well_spec.spin,
                amplitude=well_spec.amplitude,
                speed=well_spec.speed,
                phase=well_spec.phase,
            )
            for well_spec in cfg.wells
        ]
        self.environment_ticks = 0
        self._place_wells()

        self.current_turn = Turn.PLAYER
        self.turn_timer = 0
        self.turn_timeout = cfg.turn_timeout
        self.enemy_movement_requested = False
        self._turn_changed = False

        self.base_balls_per_turn = cfg.base_balls_per_turn
        self.max_balls_per_turn = cfg.base_balls_per_turn
        self.balls_dropped_this_turn = 0
        self.pending_bonus_balls = 0
        self.total_balls_dropped = 0
        self.ball_damage = cfg.ball_damage

        self.score = 0
        self.combo_multiplier = 1.0
        self.combo_timer = 0
        self.combo_window = cfg.combo_window
        self.last_hit_enemy_id: int | None = None

        self.wave_number = 1
        self.escaped_count = 0

    # -- Dimensions --

    def set_dimensions(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self._place_wells()

    # -- Turn state machine --

    def can_drop_ball(self) -> bool:
        return (
            self.current_turn is Turn.PLAYER
            and not self.enemy_movement_requested
            and self.balls_dropped_this_turn < self.max_balls_per_turn
        )

    def is_player_turn_complete(self) -> bool:
        return (
            self.current_turn is Turn.PLAYER
            and not self.enemy_movement_requested
            and self.balls_dropped_this_turn >= self.max_balls_per_turn
            and not self.balls
        )

    def request_enemy_movement(self) -> bool:
        """Hand the turn to the enemies. Returns False if it was not the player's turn."""
        if self.enemy_movement_requested or self.current_turn is not Turn.PLAYER:
            return False
        self.enemy_movement_requested = True
        self.turn_timer = 0
        self._set_turn(Turn.ENEMY)
        return True

    def start_new_player_turn(self) -> None:
        self.balls_dropped_this_turn = 0
        self.turn_timer = 0
        self.enemy_movement_requested = False
        self.max_balls_per_turn = self.base_balls_per_turn + self.pending_bonus_balls
        self.pending_bonus_balls = 0
        self._set_turn(Turn.PLAYER)

    def end_turn(self) -> None:
        """Forfeit the remaining balls this turn."""
        if self.current_turn is not Turn.PLAYER:
            return
        self.balls_dropped_this_turn = self.max_balls_per_turn
        self.turn_timer = 0
        if not self.balls:
            self.request_enemy_movement()

    def update_turns(self) -> bool:
        """Advance environment, combo decay and the turn timer by one tick.

        Returns True when the turn changed since the previous call.
        """
        self.update_environment()
        self._tick_combo()
        self.turn_timer += 1
        if self.turn_timer > self.turn_timeout:
            self.turn_timer = 0
            # Player turns end by exhausting balls, never by timeout.
            if self.current_turn is Turn.ENEMY:
                logger.debug("enemy phase timed out, returning control to player")
                self.start_new_player_turn()
        changed = self._turn_changed
        self._turn_changed = False
        return changed

    def _set_turn(self, turn: Turn) -> None:
        if turn is self.current_turn:
            return
        self.current_turn = turn
        self._turn_changed = True
        logger.debug("turn -> %s (wave %d)", turn.value, self.wave_number)
        self.events.publish(ev.TURN_CHANGED, turn=turn, wave=self.wave_number)

    # -- Balls --

    def add_bonus_ball(self, count: int = 1) -> None:
        self.pending_bonus_balls += count
        self.events.publish(ev.BONUS_BALL, pending=self.pending_bonus_balls)

    def clear_balls(self) -> None:
        self.balls.clear()

    # -- Score and combo --

    def add_score(self, base: float) -> int:
        awarded = _round_half_up(base * self.combo_multiplier)
        self.score += awarded
        return awarded

    def register_hit(self, enemy_id: int) -> None:
        """Extend the combo. A new target starts a chain at no less than 1.1."""
        if enemy_id == self.last_hit_enemy_id:
            if self.combo_multiplier < HIT_COMBO_CAP:
                self.combo_multiplier = min(HIT_COMBO_CAP, self.combo_multiplier + HIT_COMBO_STEP)
        else:
            self.combo_multiplier = max(self.combo_multiplier, CHAIN_START_COMBO)
            self.last_hit_enemy_id = enemy_id
        self.combo_timer = self.combo_window

    def register_kill(self, is_fragment: bool = False) -> None:
        step = FRAGMENT_KILL_COMBO_STEP if is_fragment else KILL_COMBO_STEP
        self.combo_multiplier = min(KILL_COMBO_CAP, self.combo_multiplier + step)
        self.combo_timer = int(self.combo_window * KILL_WINDOW_FACTOR)

    def _tick_combo(self) -> None:
        if self.combo_timer <= 0:
            return
        self.combo_timer -= 1
        if self.combo_timer == 0:
            self.combo_multiplier = 1.0
            self.last_hit_enemy_id = None

    # -- Environment --

    def update_environment(self) -> None:
        self.environment_ticks += 1
        for well in self.wells:
            well.rotation = (well.rotation + well.spin) % math.tau
        self._place_wells()

    def _place_wells(self) -> None:
        t = self.environment_ticks
        for well in self.wells:
            angle = well.phase + t * well.speed
            well.x = well.anchor[0] * self.width + well.amplitude * math.sin(angle)
            well.y = well.anchor[1] * self.height + well.amplitude * 0.5 * math.cos(angle)

    # -- Queries --

    def get_turn_info(self) -> TurnInfo:
        return TurnInfo(
            current_turn=self.current_turn,
            balls_dropped=self.balls_dropped_this_turn,
            max_balls=self.max_balls_per_turn,
            ball_count=len(self.balls),
            enemy_count=len(self.enemies),
            pending_bonus=self.pending_bonus_balls,
        )
