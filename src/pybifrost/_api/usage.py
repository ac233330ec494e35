"""Usage-event telemetry.

Endpoint:
  - POST /bifrost/hass/patina/event  ({kind, key})

Best-effort only: every failure is swallowed so telemetry can never
affect what the user sees.
"""

from __future__ import annotations

import logging
from typing import Any

from pybifrost._constants import USAGE_EVENT_ENDPOINT
from pybifrost._transport import Transport

_logger = logging.getLogger(__name__)


async def post_usage_event(transport: Transport, kind: str, key: str | None = None) -> bool:
    """Record one interaction; returns whether the bridge accepted it."""
    body: dict[str, Any] = {"kind": kind}
    if key is not None:
        body["key"] = key
    try:
        await transport.request("POST", USAGE_EVENT_ENDPOINT, body)
    except Exception:  # noqa: BLE001
        _logger.debug("Usage event %s/%s dropped", kind, key, exc_info=True)
        return False
    return True
