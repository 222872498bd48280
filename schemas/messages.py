from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError
from typing import Annotated, Literal, Optional, Union
from logging_config import get_logger

logger = get_logger(__name__)


class WireModel(BaseModel):
    # Wire names are camelCase ("roomId", "from"), python names are snake_case.
    # Names are accepted when building models in code; decoding takes aliases only.
    model_config = ConfigDict(populate_by_name=True)


# Client -> server

class CreateRequest(WireModel):
    type: Literal["create"] = "create"

class JoinRequest(WireModel):
    type: Literal["join"] = "join"
    room_id: StrictStr = Field(alias="roomId")

class ChatRequest(WireModel):
    type: Literal["chat"] = "chat"
    text: StrictStr


# Server -> client

class CreatedMessage(WireModel):
    type: Literal["created"] = "created"
    room_id: StrictStr = Field(alias="roomId")

class SystemMessage(WireModel):
    type: Literal["system"] = "system"
    text: StrictStr

class ChatMessage(WireModel):
    type: Literal["chat"] = "chat"
    sender: Literal["you", "peer"] = Field(alias="from")
    text: StrictStr


InboundMessage = Annotated[Union[CreateRequest, JoinRequest, ChatRequest], Field(discriminator="type")]
OutboundMessage = Annotated[Union[CreatedMessage, SystemMessage, ChatMessage], Field(discriminator="type")]

inbound_adapter = TypeAdapter(InboundMessage)
outbound_adapter = TypeAdapter(OutboundMessage)


def decode_inbound(frame: Union[str, bytes]) -> Optional[InboundMessage]:
    """Decode a client frame into one of the request models.

    Returns None for anything that is not a JSON object with a known ``type``
    and its required string fields.
    """
    try:
        return inbound_adapter.validate_json(frame, by_alias=True, by_name=False)
    except ValidationError as e:
        logger.debug(f"Rejected inbound frame: {e.error_count()} validation error(s)")
        return None


def decode_outbound(frame: Union[str, bytes]) -> Optional[OutboundMessage]:
    """Decode a server frame on the client side; None if malformed."""
    try:
        return outbound_adapter.validate_json(frame, by_alias=True, by_name=False)
    except ValidationError:
        return None


def encode(message: WireModel) -> str:
    return message.model_dump_json(by_alias=True)
