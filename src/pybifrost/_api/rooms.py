"""Room endpoints.

Endpoints:
  - POST   /bifrost/hass/rooms  (create)
  - PUT    /bifrost/hass/room   (rename)
  - DELETE /bifrost/hass/rooms  (delete; the bridge moves affected entities
                                 back to the default room)
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pybifrost._api._common import parse_optional_model
from pybifrost._constants import DEFAULT_ROOM_ID, ROOM_ENDPOINT, ROOMS_ENDPOINT
from pybifrost._transport import Transport
from pybifrost.exceptions import BifrostValidationError
from pybifrost.models._base import BifrostBaseModel
from pybifrost.models.ui_config import Room


class RoomsResponse(BifrostBaseModel):
    rooms: list[Room] = Field(default_factory=list)


def _rooms(endpoint: str, data: Any) -> list[Room] | None:
    parsed = parse_optional_model(endpoint, data, RoomsResponse)
    return parsed.rooms if parsed is not None else None


def _require_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise BifrostValidationError("room name must be non-empty")
    return name


async def create_room(transport: Transport, name: str) -> list[Room] | None:
    data = await transport.request("POST", ROOMS_ENDPOINT, {"name": _require_name(name)})
    return _rooms(ROOMS_ENDPOINT, data)


async def rename_room(transport: Transport, room_id: str, name: str) -> list[Room] | None:
    data = await transport.request("PUT", ROOM_ENDPOINT, {"room_id": room_id, "name": _require_name(name)})
    return _rooms(ROOM_ENDPOINT, data)


async def delete_room(transport: Transport, room_id: str) -> list[Room] | None:
    """Delete a room.

    Raises :class:`BifrostValidationError` without any request for the
    reserved default room.
    """
    if room_id == DEFAULT_ROOM_ID:
        raise BifrostValidationError(f"room {room_id!r} is the default room and cannot be deleted")
    data = await transport.request("DELETE", ROOMS_ENDPOINT, {"room_id": room_id})
    return _rooms(ROOMS_ENDPOINT, data)
