import asyncio
import uuid
from typing import Optional
from fastapi import WebSocket
from schemas.messages import WireModel, encode
from logging_config import get_logger

logger = get_logger(__name__)


class Session:
    """Server-side state for one connected client.

    Outbound messages are queued on ``outbox`` and written to the socket by
    ``run_writer``, so ``send`` never blocks the caller.
    """

    def __init__(self, websocket: Optional[WebSocket] = None, session_id: Optional[str] = None):
        self.websocket = websocket
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self.room_id: Optional[str] = None
        self.closed = False
        # Set when a socket write fails; inbound frames are still routed until disconnect
        self.send_failed = False
        self.outbox: asyncio.Queue = asyncio.Queue()

    def __repr__(self):
        return f"Session({self.session_id!r}, room_id={self.room_id!r})"

    def send(self, message: WireModel):
        """Queue a message for delivery. Dropped silently once the session cannot receive."""
        if self.closed or self.send_failed:
            logger.debug(f"Dropping {message.type} message for session {self.session_id}")
            return
        self.outbox.put_nowait(encode(message))

    def close(self):
        self.closed = True

    async def run_writer(self):
        """Drain the outbox into the websocket until cancelled or the socket fails."""
        while True:
            frame = await self.outbox.get()
            try:
                await self.websocket.send_text(frame)
            except Exception as e:
                logger.debug(f"Error sending to session {self.session_id}, dropping its outbound messages: {e}")
                self.send_failed = True
                return
