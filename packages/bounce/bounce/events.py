"""Event bus used to surface turn changes, kills and escapes to presentation."""
from __future__ import annotations

from typing import Any, Callable

TURN_CHANGED = "turn_changed"
ENEMY_ESCAPED = "enemy_escaped"
ENEMY_KILLED = "enemy_killed"
WAVE_ADVANCED = "wave_advanced"
BONUS_BALL = "bonus_ball"

Handler = Callable[[str, dict[str, Any]], None]


class EventBus:
    """Queues events during a tick and delivers them on ``flush()``.

    Handlers for one event run in subscription order. Events published
    by a handler during a flush are delivered on the next flush.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, event: str, handler: Handler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, event: str, **payload: Any) -> None:
        self._queue.append((event, payload))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued events. Returns how many events were delivered."""
        batch, self._queue = self._queue, []
        for event, payload in batch:
            for handler in list(self._handlers.get(event, ())):
                handler(event, payload)
        return len(batch)

    def clear(self) -> None:
        self._queue.clear()
