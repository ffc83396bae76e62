from launcher_sync.services.event_bus import EventBus, SessionEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []

    def handler(evt):
        received.append((evt.name, evt.payload))

    bus.subscribe(SessionEvent.SESSION_SAVED, handler)
    bus.publish(SessionEvent.SESSION_SAVED, 3)
    bus.publish(SessionEvent.SESSION_LOADED, 1)
    assert received == [(SessionEvent.SESSION_SAVED, 3)]


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe(SessionEvent.LINES_STAGED, bad)
    bus.subscribe(SessionEvent.LINES_STAGED, good)
    bus.publish(SessionEvent.LINES_STAGED, 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1
    evt, exc = bus.errors[0]
    assert evt.payload == 123
    assert isinstance(exc, RuntimeError)


def test_unsubscribe():
    bus = EventBus()
    hits = []
    sub = bus.subscribe(SessionEvent.STRUCTURE_CHANGED, lambda evt: hits.append(1))
    bus.subscribe(SessionEvent.STRUCTURE_CHANGED, lambda evt: hits.append(2))
    bus.publish(SessionEvent.STRUCTURE_CHANGED)
    bus.unsubscribe(sub)
    bus.publish(SessionEvent.STRUCTURE_CHANGED)
    assert hits == [1, 2, 2]


def test_handler_may_unsubscribe_itself():
    bus = EventBus()
    hits = []
    subs = []

    def first_only(evt):
        hits.append(evt.payload)
        bus.unsubscribe(subs[0])

    subs.append(bus.subscribe(SessionEvent.SESSION_DISCARDED, first_only))
    bus.publish(SessionEvent.SESSION_DISCARDED, "a")
    bus.publish(SessionEvent.SESSION_DISCARDED, "b")
    assert hits == ["a"]
