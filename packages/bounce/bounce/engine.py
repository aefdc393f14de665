"""Engine - fixed-order frame loop over a single shared World."""

from __future__ import annotations

import logging
import os
import random
import time
from typing import Callable

from bounce.config import GameConfig
from bounce.events import EventBus
from bounce.types import System, TickContext
from bounce.world import World

logger = logging.getLogger(__name__)


class Engine:
    """Runs registered systems once per frame, then flushes the event bus.

    Systems execute strictly in registration order and share one mutable
    ``World``; the event flush always comes last so presentation handlers
    observe the fully updated frame.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        world: World | None = None,
    ) -> None:
        if config is None:
            config = world.config if world is not None else GameConfig()
        elif world is not None and config != world.config:
            raise ValueError("config does not match the config the world was built with")
        self._config = config
        self._world = world if world is not None else World(self._config)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_requested = False
        self._tick_number = 0
        self._dt = 1.0 / self._config.fps

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> World:
        return self._world

    @property
    def events(self) -> EventBus:
        return self._world.events

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[World, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[World, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._tick_number * self._dt,
            request_stop=self._request_stop,
            random=self._rng,
        )

    def _tick(self) -> None:
        self._tick_number += 1
        ctx = self._context()
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break
        self._world.events.flush()

    def step(self) -> None:
        self._stop_requested = False
        self._tick()

    def _run_hooks(self, hooks: list[Callable[[World, TickContext], None]]) -> None:
        ctx = self._context()
        for hook in hooks:
            hook(self._world, ctx)

    def run(self, n: int) -> None:
        self._stop_requested = False
        self._run_hooks(self._start_hooks)
        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break
        self._run_hooks(self._stop_hooks)

    def run_forever(self) -> None:
        self._stop_requested = False
        self._run_hooks(self._start_hooks)
        logger.debug("running at %d fps (seed=%d)", self._config.fps, self._seed)
        while not self._stop_requested:
            start = time.monotonic()
            self._tick()
            if self._stop_requested:
                break
            sleep_time = self._dt - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)
        self._run_hooks(self._stop_hooks)
