from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from routers.rooms import rooms_router
from registry import RoomRegistry
from relay import SessionRouter
from session import Session
import asyncio
from typing import AsyncIterator, Optional
from constants import LOG_LEVEL, LOG_FILE
from logging_config import get_logger, setup_logging

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


async def iter_frames(websocket: WebSocket) -> AsyncIterator[str]:
    """Yield inbound frames as text until the client disconnects.

    Binary frames are decoded as UTF-8; undecodable payloads are yielded as an
    empty string so the router answers them as invalid.
    """
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return
        text = message.get("text")
        if text is None:
            try:
                text = (message.get("bytes") or b"").decode("utf-8")
            except UnicodeDecodeError:
                text = ""
        yield text


async def relay_endpoint(websocket: WebSocket):
    """Relay endpoint: one session per connection, frames routed through the registry."""
    router: SessionRouter = websocket.app.state.router
    await websocket.accept()
    session = Session(websocket)
    writer = asyncio.create_task(session.run_writer())
    client = websocket.client.host if websocket.client else "unknown"
    logger.info(f"WebSocket connection accepted: session {session.session_id} from {client}")

    message_count = 0
    try:
        async for frame in iter_frames(websocket):
            message_count += 1
            logger.debug(f"Received message #{message_count} from session {session.session_id}")
            router.handle_frame(session, frame)
        logger.info(f"WebSocket disconnected normally for session {session.session_id}")
    except Exception as e:
        logger.error(f"WebSocket error for session {session.session_id}: {e}", exc_info=True)
    finally:
        # Cleanup on disconnect
        room_id = session.room_id
        router.disconnect(session)
        writer.cancel()
        logger.info(f"Session {session.session_id} closed (room: {room_id}, messages: {message_count})")


def create_app(registry: Optional[RoomRegistry] = None) -> FastAPI:
    app = FastAPI(title="Room Relay")

    # Configure CORS to allow all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.registry = registry if registry is not None else RoomRegistry()
    app.state.router = SessionRouter(app.state.registry)

    app.include_router(rooms_router)
    app.add_api_websocket_route("/", relay_endpoint)

    logger.info("FastAPI application initialized")
    return app


app = create_app()
