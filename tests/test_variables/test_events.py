"""Tests for the event hub."""

from unittest.mock import Mock
from mudscript.lib.events import EventHub, NulloEvents


def test_post_to_subscribers_in_order() -> None:
    hub = EventHub()
    calls: list[str] = []
    hub.subscribe("k", lambda key, data: calls.append(f"one:{data['x']}"))
    hub.subscribe("k", lambda key, data: calls.append(f"two:{data['x']}"))
    hub.subscribe("other", lambda key, data: calls.append("other"))
    hub.post("k", {"x": "1"})
    assert calls == ["one:1", "two:1"]


def test_unsubscribe() -> None:
    hub = EventHub()
    handler = Mock()
    hub.subscribe("k", handler)
    hub.unsubscribe("k", handler)
    hub.unsubscribe("missing", handler)
    hub.post("k", {})
    handler.assert_not_called()


def test_failing_handler_does_not_stop_delivery() -> None:
    hub = EventHub()
    after = Mock()
    hub.subscribe("k", Mock(side_effect=ValueError("bad")))
    hub.subscribe("k", after)
    hub.post("k", {"a": "b"})
    after.assert_called_once_with("k", {"a": "b"})


def test_nullo_events_discards() -> None:
    NulloEvents().post("k", {"a": "b"})
