from pydantic import BaseModel


class RoomDetailsResponse(BaseModel):
    room_id: str
    online_users_count: int
