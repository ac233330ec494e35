"""Runtime connection endpoints.

Endpoints:
  - GET/PUT  /bifrost/hass/runtime-config
  - POST     /bifrost/hass/connect, /bifrost/hass/disconnect
  - PUT/DELETE /bifrost/hass/token  (write-only secret)
"""

from __future__ import annotations

import logging

from pybifrost._api._common import parse_model, parse_optional_model
from pybifrost._constants import (
    CONNECT_ENDPOINT,
    DISCONNECT_ENDPOINT,
    RUNTIME_CONFIG_ENDPOINT,
    TOKEN_ENDPOINT,
)
from pybifrost._transport import Transport
from pybifrost.models.runtime import RuntimeConfig, RuntimeConfigUpdate

_logger = logging.getLogger(__name__)


async def fetch_runtime_config(transport: Transport) -> RuntimeConfig:
    data = await transport.request("GET", RUNTIME_CONFIG_ENDPOINT)
    return parse_model(RUNTIME_CONFIG_ENDPOINT, data, RuntimeConfig)


async def put_runtime_config(transport: Transport, update: RuntimeConfigUpdate) -> RuntimeConfig:
    body = update.model_dump(mode="json", exclude_none=True)
    data = await transport.request("PUT", RUNTIME_CONFIG_ENDPOINT, body)
    return parse_model(RUNTIME_CONFIG_ENDPOINT, data, RuntimeConfig)


async def connect(transport: Transport) -> None:
    await transport.request("POST", CONNECT_ENDPOINT)


async def disconnect(transport: Transport) -> None:
    await transport.request("POST", DISCONNECT_ENDPOINT)


async def put_token(transport: Transport, token: str) -> RuntimeConfig | None:
    """Store the access token; the response never echoes it back."""
    token = token.strip()
    if not token:
        raise ValueError("token must be non-empty")
    data = await transport.request("PUT", TOKEN_ENDPOINT, {"token": token})
    _logger.debug("Access token stored")
    return parse_optional_model(TOKEN_ENDPOINT, data, RuntimeConfig)


async def delete_token(transport: Transport) -> RuntimeConfig | None:
    data = await transport.request("DELETE", TOKEN_ENDPOINT)
    return parse_optional_model(TOKEN_ENDPOINT, data, RuntimeConfig)
