import json
from unittest.mock import MagicMock

import pytest

from infrastructure.events import EventTypes, InMemoryEventBus, RedisEventBus
from infrastructure.events.factory import create_event_bus


@pytest.mark.unit
class TestInMemoryEventBus:
    def test_publish_delivers_envelope_to_handlers(self):
        bus = InMemoryEventBus()
        received = []
        bus.subscribe(EventTypes.POST_LIKED, received.append)

        bus.publish(EventTypes.POST_LIKED, {"post_id": "p1"})

        assert len(received) == 1
        assert received[0]["event_type"] == "post.liked"
        assert received[0]["payload"] == {"post_id": "p1"}
        assert "occurred_at" in received[0]

    def test_handler_error_does_not_reach_publisher(self):
        bus = InMemoryEventBus()
        calls = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventTypes.COMMENT_CREATED, broken)
        bus.subscribe(EventTypes.COMMENT_CREATED, calls.append)

        bus.publish(EventTypes.COMMENT_CREATED, {})

        assert len(calls) == 1

    def test_subscribe_same_handler_once(self):
        bus = InMemoryEventBus()
        calls = []
        bus.subscribe("x", calls.append)
        bus.subscribe("x", calls.append)

        bus.publish("x", {})

        assert len(calls) == 1

    def test_published_log(self):
        bus = InMemoryEventBus()
        bus.publish("a", {"n": 1})
        assert [e["event_type"] for e in bus.published] == ["a"]
        bus.clear_published()
        assert bus.published == []


@pytest.mark.unit
class TestRedisEventBus:
    def test_publish_uses_prefixed_channel(self):
        client = MagicMock()
        bus = RedisEventBus(client=client)

        bus.publish(EventTypes.SHOP_FOLLOWED, {"shop_id": "s1"})

        channel, raw = client.publish.call_args[0]
        assert channel == "forme.events.shop.followed"
        assert json.loads(raw)["payload"] == {"shop_id": "s1"}

    def test_handle_message_dispatches(self):
        bus = RedisEventBus(client=MagicMock())
        handler = MagicMock()
        bus.subscribe(EventTypes.REVIEW_CREATED, handler)

        data = json.dumps({"event_type": "review.created", "occurred_at": "now", "payload": {"id": 1}})
        bus._handle_message({"type": "message", "data": data})

        handler.assert_called_once()
        assert handler.call_args[0][0]["payload"] == {"id": 1}

    def test_handle_message_ignores_garbage(self):
        bus = RedisEventBus(client=MagicMock())
        handler = MagicMock()
        bus.subscribe("x", handler)

        bus._handle_message({"type": "message", "data": "not json"})

        handler.assert_not_called()


@pytest.mark.unit
def test_create_event_bus_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_event_bus("kafka")


@pytest.mark.unit
def test_create_event_bus_memory():
    assert isinstance(create_event_bus("memory"), InMemoryEventBus)
