"""Tests for the tick-flushed event bus."""

from bounce.events import EventBus


def _recorder(log):
    def handler(name, payload):
        log.append((name, payload))
    return handler


def test_publish_is_deferred_until_flush():
    bus = EventBus()
    log = []
    bus.subscribe("hit", _recorder(log))
    bus.publish("hit", damage=5)
    assert log == []
    assert bus.pending() == 1
    assert bus.flush() == 1
    assert log == [("hit", {"damage": 5})]
    assert bus.pending() == 0


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    order = []
    bus.subscribe("x", lambda name, payload: order.append(1))
    bus.subscribe("x", lambda name, payload: order.append(2))
    bus.publish("x")
    bus.flush()
    assert order == [1, 2]


def test_only_matching_handlers_called():
    bus = EventBus()
    log = []
    bus.subscribe("a", _recorder(log))
    bus.publish("b", value=1)
    assert bus.flush() == 1
    assert log == []


def test_unsubscribe():
    bus = EventBus()
    log = []
    handler = _recorder(log)
    bus.subscribe("a", handler)
    bus.unsubscribe("a", handler)
    bus.unsubscribe("a", handler)
    bus.publish("a")
    bus.flush()
    assert log == []


def test_publish_during_flush_waits_for_next_flush():
    bus = EventBus()
    log = []

    def chain(name, payload):
        bus.publish("second")

    bus.subscribe("first", chain)
    bus.subscribe("second", _recorder(log))
    bus.publish("first")
    bus.flush()
    assert log == []
    assert bus.pending() == 1
    bus.flush()
    assert log == [("second", {})]


def test_clear_drops_queue():
    bus = EventBus()
    bus.publish("a")
    bus.clear()
    assert bus.flush() == 0
