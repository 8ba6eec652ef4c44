from datetime import datetime, timezone

import pytest

from classifieds.core.models.io.messages import MessageEvent, MessageRead
from classifieds.server.services.realtime import MessageBroker, get_broker

pytestmark = pytest.mark.asyncio


def _event(event_type: str = "INSERT") -> MessageEvent:
    message = MessageRead(
        id="m1",
        sender_id="alice",
        receiver_id="bob",
        message="Bonjour",
        read=event_type == "UPDATE",
        created_at=datetime.now(timezone.utc),
    )
    return MessageEvent(type=event_type, message=message)


async def test_publish_without_subscribers_is_a_no_op():
    broker = MessageBroker()
    assert broker.publish("bob", _event()) == 0


async def test_event_reaches_every_stream_of_the_user():
    broker = MessageBroker()
    async with broker.subscribe("bob") as first, broker.subscribe("bob") as second, broker.subscribe("carol") as other:
        assert broker.subscriber_count("bob") == 2
        assert broker.publish("bob", _event()) == 2
        assert first.get_nowait().type == "INSERT"
        assert second.get_nowait().message.id == "m1"
        assert other.empty()


async def test_closing_a_stream_unregisters_it():
    broker = MessageBroker()
    async with broker.subscribe("bob"):
        assert broker.subscriber_count("bob") == 1
    assert broker.subscriber_count("bob") == 0
    assert broker.publish("bob", _event()) == 0


async def test_full_queue_drops_events_for_that_stream_only():
    broker = MessageBroker(queue_size=1)
    async with broker.subscribe("bob") as slow, broker.subscribe("bob") as fast:
        assert broker.publish("bob", _event()) == 2
        fast.get_nowait()
        assert broker.publish("bob", _event("UPDATE")) == 1
        assert slow.qsize() == 1
        assert fast.get_nowait().type == "UPDATE"


async def test_get_broker_is_a_singleton():
    assert get_broker() is get_broker()
