"""Read endpoints that make up one dashboard snapshot.

Endpoints:
  - GET /bifrost/hass/ui-payload   (config, entities, logs, sync, usage)
  - GET /bifrost/hass/bridge-info  (diagnostics)
"""

from __future__ import annotations

from pybifrost._api._common import parse_model
from pybifrost._constants import BRIDGE_INFO_ENDPOINT, UI_PAYLOAD_ENDPOINT
from pybifrost._transport import Transport
from pybifrost.models.bridge import BridgeInfo
from pybifrost.models.payload import UiPayload


async def fetch_ui_payload(transport: Transport) -> UiPayload:
    data = await transport.request("GET", UI_PAYLOAD_ENDPOINT)
    return parse_model(UI_PAYLOAD_ENDPOINT, data, UiPayload)


async def fetch_bridge_info(transport: Transport) -> BridgeInfo:
    data = await transport.request("GET", BRIDGE_INFO_ENDPOINT)
    return parse_model(BRIDGE_INFO_ENDPOINT, data, BridgeInfo)
