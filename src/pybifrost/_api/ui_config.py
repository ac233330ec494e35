"""Configuration write endpoints.

Endpoints:
  - PUT /bifrost/hass/ui-config  (whole-config replacement)
  - PUT /bifrost/hass/entity     (partial update keyed by entity id)
"""

from __future__ import annotations

import logging

from pybifrost._api._common import parse_optional_model
from pybifrost._constants import ENTITY_ENDPOINT, UI_CONFIG_ENDPOINT
from pybifrost._transport import Transport
from pybifrost.models.ui_config import EntityPatch, UiConfig, normalize_ui_config

_logger = logging.getLogger(__name__)


async def put_ui_config(transport: Transport, config: UiConfig) -> UiConfig | None:
    """Replace the whole configuration.

    The configuration is normalised first so repeated writes of the same
    value converge on the same stored state.
    """
    normalized = normalize_ui_config(config)
    data = await transport.request("PUT", UI_CONFIG_ENDPOINT, normalized.to_wire())
    return parse_optional_model(UI_CONFIG_ENDPOINT, data, UiConfig)


async def patch_entity(transport: Transport, entity_id: str, patch: EntityPatch) -> UiConfig | None:
    entity_id = entity_id.strip()
    if not entity_id:
        raise ValueError("entity_id must be non-empty")
    body = patch.to_wire(entity_id)
    if len(body) == 1:
        raise ValueError(f"empty patch for {entity_id}")
    data = await transport.request("PUT", ENTITY_ENDPOINT, body)
    _logger.debug("Entity patched entity_id=%s fields=%s", entity_id, sorted(body))
    return parse_optional_model(ENTITY_ENDPOINT, data, UiConfig)
