"""JSON-over-HTTP transport for the Bifrost web API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pybifrost._constants import USER_AGENT
from pybifrost._redact import redact_for_log
from pybifrost.config import BifrostConfig
from pybifrost.exceptions import BifrostTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def error_message_from_body(status: int, content_type: str, text: str) -> str:
    """Derive a user-facing message from a failed response.

    JSON bodies are tried first (their ``error`` field, or the whole
    document when the server declared JSON); otherwise the raw text is
    used, and an empty body falls back to ``HTTP <status>``.
    """
    stripped = text.strip()
    if not stripped:
        return f"HTTP {status}"

    try:
        body = json.loads(stripped)
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    if body is not None and "json" in content_type.lower():
        return json.dumps(body, separators=(",", ":"))
    return stripped


class HttpTransport:
    """aiohttp transport that sends and receives JSON documents."""

    def __init__(self, config: BifrostConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform one request and return the decoded JSON body.

        ``204 No Content`` and empty bodies decode to ``None``.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        body: str | None = None
        if payload is not None:
            headers["content-type"] = "application/json"
            body = json.dumps(dict(payload), separators=(",", ":"))

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s body=%s", method, url, redact_for_log(payload))

        try:
            async with self._http.request(method, url, data=body, headers=headers) as resp:
                text = await resp.text()
                if resp.status >= 300:
                    message = error_message_from_body(resp.status, resp.headers.get("content-type", ""), text)
                    raise BifrostTransportError(
                        message,
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                status = resp.status
        except BifrostTransportError:
            raise
        except TimeoutError as exc:
            raise BifrostTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise BifrostTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if status == 204 or not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise BifrostTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
