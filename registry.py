import random
from typing import Dict, Optional, Set
from constants import ROOM_ID_MIN, ROOM_ID_MAX
from schemas.messages import WireModel
from session import Session
from logging_config import get_logger

logger = get_logger(__name__)

ROOM_ID_SPACE = ROOM_ID_MAX - ROOM_ID_MIN + 1


class RoomCapacityError(RuntimeError):
    """Raised when every room id is already in use."""


class RoomRegistry:
    """In-memory mapping of 4-digit room ids to the sessions in them.

    A room exists only while it has members: ``leave`` deletes a room the
    moment its last session goes. All methods are synchronous so a caller on
    the event loop sees each operation complete atomically.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        # Format: {room_id: {session, ...}}
        self.rooms: Dict[str, Set[Session]] = {}
        self._rng = rng or random.Random()
        logger.info("Initializing RoomRegistry")

    def __contains__(self, room_id: str) -> bool:
        return room_id in self.rooms

    def __len__(self) -> int:
        return len(self.rooms)

    def generate_room_id(self) -> str:
        return str(self._rng.randint(ROOM_ID_MIN, ROOM_ID_MAX))

    def create_room(self) -> str:
        if len(self.rooms) >= ROOM_ID_SPACE:
            logger.error(f"Cannot create room: all {ROOM_ID_SPACE} room ids are in use")
            raise RoomCapacityError("No room ids available")

        room_id = self.generate_room_id()
        while room_id in self.rooms:
            logger.debug(f"Room id {room_id} already active, drawing again")
            room_id = self.generate_room_id()

        self.rooms[room_id] = set()
        logger.info(f"Created room {room_id} (active rooms: {len(self.rooms)})")
        return room_id

    def join(self, room_id: str, session: Session) -> bool:
        members = self.rooms.get(room_id)
        if members is None:
            logger.debug(f"Session {session.session_id} cannot join room {room_id}: not found")
            return False

        if session.room_id is not None and session.room_id != room_id:
            self.leave(session)

        members.add(session)
        session.room_id = room_id
        logger.info(f"Session {session.session_id} joined room {room_id} (members: {len(members)})")
        return True

    def leave(self, session: Session):
        room_id = session.room_id
        if room_id is None:
            return

        members = self.rooms.get(room_id)
        if members is not None:
            members.discard(session)
            logger.info(f"Session {session.session_id} left room {room_id} (members: {len(members)})")
            if not members:
                del self.rooms[room_id]
                logger.info(f"Room {room_id} is empty, deleted it")
        session.room_id = None

    def members(self, room_id: str) -> Set[Session]:
        return set(self.rooms.get(room_id, ()))

    def broadcast(self, room_id: str, message: WireModel, exclude: Optional[Session] = None):
        members = self.rooms.get(room_id)
        if not members:
            return
        recipients = [session for session in members if session is not exclude]
        for session in recipients:
            session.send(message)
        logger.debug(f"Broadcast {message.type} message to {len(recipients)} session(s) in room {room_id}")
