"""Tests for session outbox delivery."""
import asyncio
import json

import pytest

from schemas.messages import ChatMessage, SystemMessage
from session import Session


class RecordingWebSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_text(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(data))


@pytest.mark.asyncio
async def test_writer_delivers_in_order():
    websocket = RecordingWebSocket()
    session = Session(websocket)
    writer = asyncio.create_task(session.run_writer())

    session.send(SystemMessage(text="one"))
    session.send(ChatMessage(sender="peer", text="two"))
    while not session.outbox.empty():
        await asyncio.sleep(0)
    await asyncio.sleep(0)
    writer.cancel()

    assert websocket.sent == [
        {"type": "system", "text": "one"},
        {"type": "chat", "from": "peer", "text": "two"},
    ]


@pytest.mark.asyncio
async def test_writer_failure_stops_outbound_only():
    session = Session(RecordingWebSocket(fail=True))
    session.send(SystemMessage(text="lost"))

    await asyncio.wait_for(session.run_writer(), timeout=1)

    assert session.send_failed
    assert not session.closed
    session.send(SystemMessage(text="dropped"))
    assert session.outbox.empty()


def test_send_after_close_is_dropped():
    session = Session()
    session.close()
    session.send(SystemMessage(text="ignored"))
    assert session.outbox.empty()
