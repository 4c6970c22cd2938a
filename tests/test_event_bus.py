from onboard.services.event_bus import EventBus, ThemeEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []

    def handler(evt):
        received.append((evt.name, evt.payload))

    bus.subscribe(ThemeEvent.CONFIG_CHANGE, handler)
    bus.publish(ThemeEvent.CONFIG_CHANGE, {"key": "mode"})
    assert received == [(ThemeEvent.CONFIG_CHANGE.value, {"key": "mode"})]


def test_string_and_enum_names_share_a_channel():
    bus = EventBus()
    seen = []
    bus.subscribe("config_saved", lambda evt: seen.append(evt.name))
    bus.publish(ThemeEvent.CONFIG_SAVED)
    assert seen == ["config_saved"]


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    order = []
    bus.subscribe("custom", lambda _: order.append(1))
    bus.subscribe("custom", lambda _: order.append(2))
    bus.publish("custom")
    assert order == [1, 2]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(ThemeEvent.CONFIG_RESET, incr, once=True)
    bus.publish(ThemeEvent.CONFIG_RESET)
    bus.publish(ThemeEvent.CONFIG_RESET)
    assert count == 1
    assert bus.subscriber_count(ThemeEvent.CONFIG_RESET) == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", good)
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_unsubscribe_and_cancel():
    bus = EventBus()
    calls = []
    sub = bus.subscribe("custom", lambda _: calls.append("a"))
    other = bus.subscribe("custom", lambda _: calls.append("b"))
    bus.unsubscribe(sub)
    other.cancel()
    bus.publish("custom")
    assert calls == []
    assert bus.subscriber_count("custom") == 1


def test_tracing_ring_buffer():
    bus = EventBus()
    bus.enable_tracing(capacity=2)
    bus.publish("one")
    bus.publish("two", "x" * 100)
    bus.publish("three")
    traces = bus.recent_traces()
    assert [t.name for t in traces] == ["two", "three"]
    assert traces[0].summary.endswith("...")
    assert len(traces[0].summary) == 40
    assert traces[1].summary == "-"
