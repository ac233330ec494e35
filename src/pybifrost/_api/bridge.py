"""Fire-and-refresh bridge actions.

Endpoints:
  - POST /bifrost/hass/sync          (import entities/areas from Home Assistant)
  - POST /bifrost/hass/apply         (push the selection to the Hue side)
  - POST /bifrost/hass/linkbutton    (virtual pairing button)
  - POST /bifrost/hass/reset-bridge  (clear the Hue resource database)

The response bodies carry nothing the client relies on; the following
snapshot poll is the source of truth.
"""

from __future__ import annotations

from pybifrost._constants import (
    APPLY_ENDPOINT,
    LINKBUTTON_ENDPOINT,
    RESET_BRIDGE_ENDPOINT,
    SYNC_ENDPOINT,
)
from pybifrost._transport import Transport


async def post_sync(transport: Transport) -> None:
    await transport.request("POST", SYNC_ENDPOINT)


async def post_apply(transport: Transport) -> None:
    await transport.request("POST", APPLY_ENDPOINT)


async def post_linkbutton(transport: Transport) -> None:
    await transport.request("POST", LINKBUTTON_ENDPOINT)


async def post_reset_bridge(transport: Transport) -> None:
    await transport.request("POST", RESET_BRIDGE_ENDPOINT)
