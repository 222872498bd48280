from fastapi import APIRouter, HTTPException, Request
from schemas.rooms import RoomDetailsResponse
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    """
    Get details of an active room.

    Returns:
    - room_id: 4-digit room identifier
    - online_users_count: Number of sessions currently in the room
    """
    client_host = request.client.host if request.client else 'unknown'
    logger.info(f"Room details request for {room_id} from {client_host}")

    registry = request.app.state.registry
    if room_id not in registry:
        logger.warning(f"Room details failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    online_users_count = len(registry.members(room_id))
    logger.info(f"Room details retrieved for {room_id}: {online_users_count} users online")

    return RoomDetailsResponse(
        room_id=room_id,
        online_users_count=online_users_count,
    )
