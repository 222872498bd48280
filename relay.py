from typing import Union
from registry import RoomCapacityError, RoomRegistry
from schemas.messages import (
    ChatMessage,
    ChatRequest,
    CreatedMessage,
    CreateRequest,
    JoinRequest,
    SystemMessage,
    decode_inbound,
)
from session import Session
from logging_config import get_logger

logger = get_logger(__name__)

INVALID_MESSAGE = "Invalid message."
ROOM_NOT_FOUND = "Room not found."
JOIN_FIRST = "Join or create a room first."
NO_ROOMS_AVAILABLE = "No rooms available."


class SessionRouter:
    """Interprets decoded client frames against a RoomRegistry.

    Every error is reported back to the originating session as a ``system``
    message; nothing here closes a connection.
    """

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def handle_frame(self, session: Session, frame: Union[str, bytes]):
        if session.closed:
            logger.debug(f"Ignoring frame for closed session {session.session_id}")
            return

        message = decode_inbound(frame)
        if message is None:
            logger.warning(f"Invalid message from session {session.session_id}")
            session.send(SystemMessage(text=INVALID_MESSAGE))
            return

        logger.debug(f"Session {session.session_id} sent {message.type}")
        if isinstance(message, CreateRequest):
            self.handle_create(session)
        elif isinstance(message, JoinRequest):
            self.handle_join(session, message.room_id)
        elif isinstance(message, ChatRequest):
            self.handle_chat(session, message.text)

    def handle_create(self, session: Session):
        try:
            room_id = self.registry.create_room()
        except RoomCapacityError:
            session.send(SystemMessage(text=NO_ROOMS_AVAILABLE))
            return
        # join() moves the session out of any previous room
        self.registry.join(room_id, session)
        session.send(CreatedMessage(room_id=room_id))

    def handle_join(self, session: Session, room_id: str):
        if not self.registry.join(room_id, session):
            session.send(SystemMessage(text=ROOM_NOT_FOUND))
            return
        session.send(SystemMessage(text=f"Joined room {room_id}."))

    def handle_chat(self, session: Session, text: str):
        if session.room_id is None:
            session.send(SystemMessage(text=JOIN_FIRST))
            return
        session.send(ChatMessage(sender="you", text=text))
        self.registry.broadcast(session.room_id, ChatMessage(sender="peer", text=text), exclude=session)

    def disconnect(self, session: Session):
        self.registry.leave(session)
        session.close()
        logger.debug(f"Session {session.session_id} disconnected")
