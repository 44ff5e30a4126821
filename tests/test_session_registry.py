from __future__ import annotations

import asyncio

import pytest

from app.infrastructure.notifications import LivePushPublisher, SessionRegistry

class FakeWebSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.broken = broken
        self.messages: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("connection reset")
        self.messages.append(message)


@pytest.mark.anyio
async def test_every_session_of_a_user_receives_the_message():
    registry = SessionRegistry()
    laptop, phone, stranger = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
    await registry.connect(1, laptop)
    await registry.connect(1, phone)
    await registry.connect(2, stranger)

    delivered = await registry.send_to_user(1, {"type": "notification"})

    assert delivered == 2
    assert laptop.accepted and phone.accepted
    assert laptop.messages == phone.messages == [{"type": "notification"}]
    assert stranger.messages == []


@pytest.mark.anyio
async def test_broken_sessions_are_dropped():
    registry = SessionRegistry()
    healthy, broken = FakeWebSocket(), FakeWebSocket(broken=True)
    await registry.connect(1, healthy)
    await registry.connect(1, broken)

    assert await registry.send_to_user(1, {"type": "notification"}) == 1

    registry.disconnect(1, healthy)
    assert not registry.is_connected(1)


@pytest.mark.anyio
async def test_sending_to_an_offline_user_is_a_no_op():
    assert await SessionRegistry().send_to_user(42, {"type": "notification"}) == 0


@pytest.mark.anyio
async def test_publisher_pushes_from_the_event_loop():
    registry = SessionRegistry()
    socket = FakeWebSocket()
    await registry.connect(7, socket)

    LivePushPublisher(registry).send(7, "NEW_BLOG", "New blog submitted", {"id": 1})
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert socket.messages == [
        {
            "type": "notification",
            "event": "NEW_BLOG",
            "message": "New blog submitted",
            "data": {"id": 1},
        }
    ]


def test_publisher_outside_any_event_loop_does_not_raise():
    LivePushPublisher(SessionRegistry()).send(7, "NEW_BLOG", "ignored", {})


@pytest.mark.anyio
async def test_publisher_holds_push_tasks_until_they_finish():
    registry = SessionRegistry()
    socket = FakeWebSocket()
    await registry.connect(7, socket)
    publisher = LivePushPublisher(registry)

    publisher.send(7, "NEW_BLOG", "first", {"id": 1})
    publisher.send(7, "NEW_BLOG", "second", {"id": 2})
    assert len(publisher._pending) == 2

    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert publisher._pending == set()
    assert [message["message"] for message in socket.messages] == ["first", "second"]
