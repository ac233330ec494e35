"""High-level async client for the Bifrost bridge web API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pybifrost._api import bridge as _bridge_api
from pybifrost._api import rooms as _rooms_api
from pybifrost._api import runtime as _runtime_api
from pybifrost._api import snapshot as _snapshot_api
from pybifrost._api import ui_config as _ui_config_api
from pybifrost._api import usage as _usage_api
from pybifrost._transport import HttpTransport, Transport
from pybifrost.config import BifrostConfig
from pybifrost.exceptions import BifrostError
from pybifrost.models.bridge import BridgeInfo
from pybifrost.models.payload import UiPayload
from pybifrost.models.runtime import RuntimeConfig, RuntimeConfigUpdate
from pybifrost.models.ui_config import EntityPatch, Room, UiConfig

_logger = logging.getLogger(__name__)


class BifrostClient:
    """Async client for the Bifrost Home Assistant bridge.

    Usage::

        async with BifrostClient(config) as client:
            payload = await client.get_ui_payload()
            await client.patch_entity("switch.kitchen_fan", EntityPatch(hidden=False))
    """

    def __init__(
        self,
        config: BifrostConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None

    @property
    def config(self) -> BifrostConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BifrostClient:
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
            self._http_session = aiohttp.ClientSession(timeout=timeout)
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BifrostError("Client not initialized. Use 'async with BifrostClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_ui_payload(self) -> UiPayload:
        """Fetch config, entities, logs, sync status and usage record."""
        return await _snapshot_api.fetch_ui_payload(self._require_transport())

    async def get_bridge_info(self) -> BridgeInfo:
        return await _snapshot_api.fetch_bridge_info(self._require_transport())

    async def get_runtime_config(self) -> RuntimeConfig:
        return await _runtime_api.fetch_runtime_config(self._require_transport())

    # ------------------------------------------------------------------
    # Runtime connection
    # ------------------------------------------------------------------

    async def put_runtime_config(self, update: RuntimeConfigUpdate) -> RuntimeConfig:
        return await _runtime_api.put_runtime_config(self._require_transport(), update)

    async def connect(self) -> None:
        await _runtime_api.connect(self._require_transport())

    async def disconnect(self) -> None:
        await _runtime_api.disconnect(self._require_transport())

    async def set_token(self, token: str) -> RuntimeConfig | None:
        """Store the Home Assistant access token (write-only)."""
        return await _runtime_api.put_token(self._require_transport(), token)

    async def delete_token(self) -> RuntimeConfig | None:
        return await _runtime_api.delete_token(self._require_transport())

    # ------------------------------------------------------------------
    # Bridge actions
    # ------------------------------------------------------------------

    async def sync(self) -> None:
        """Re-import entities and areas from Home Assistant."""
        await _bridge_api.post_sync(self._require_transport())

    async def apply(self) -> None:
        await _bridge_api.post_apply(self._require_transport())

    async def press_link_button(self) -> None:
        await _bridge_api.post_linkbutton(self._require_transport())

    async def reset_bridge(self) -> None:
        await _bridge_api.post_reset_bridge(self._require_transport())

    # ------------------------------------------------------------------
    # Configuration writes
    # ------------------------------------------------------------------

    async def put_ui_config(self, config: UiConfig) -> UiConfig | None:
        return await _ui_config_api.put_ui_config(self._require_transport(), config)

    async def patch_entity(self, entity_id: str, patch: EntityPatch) -> UiConfig | None:
        """Apply a partial update to one entity's preferences.

        Parameters
        ----------
        entity_id : str
            Home Assistant entity id.
        patch : EntityPatch
            Fields to change; unset fields are left untouched.
        """
        return await _ui_config_api.patch_entity(self._require_transport(), entity_id, patch)

    async def create_room(self, name: str) -> list[Room] | None:
        return await _rooms_api.create_room(self._require_transport(), name)

    async def rename_room(self, room_id: str, name: str) -> list[Room] | None:
        return await _rooms_api.rename_room(self._require_transport(), room_id, name)

    async def delete_room(self, room_id: str) -> list[Room] | None:
        """Delete a room; the default room is refused before any request."""
        return await _rooms_api.delete_room(self._require_transport(), room_id)

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    async def record_usage(self, kind: str, key: str | None = None) -> bool:
        """Best-effort usage event; never raises."""
        if not self._config.usage_events_enabled or self._transport is None:
            _logger.debug("Usage event %s/%s skipped", kind, key)
            return False
        return await _usage_api.post_usage_event(self._transport, kind, key)
