from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pybifrost._transport import HttpTransport, error_message_from_body
from pybifrost.config import BifrostConfig
from pybifrost.exceptions import BifrostTransportError


@pytest.mark.parametrize(
    ("status", "content_type", "text", "expected"),
    [
        (400, "application/json", '{"error": "room not found"}', "room not found"),
        (409, "text/plain", '{"error": "busy"}', "busy"),
        (422, "application/json", '{"detail": "bad"}', '{"detail":"bad"}'),
        (500, "text/plain", "  internal failure \n", "internal failure"),
        (502, "text/html", '{"detail": "bad"}', '{"detail": "bad"}'),
        (503, "application/json", "", "HTTP 503"),
        (404, "application/json", '{"error": ""}', '{"error":""}'),
    ],
)
def test_error_message_from_body(status: int, content_type: str, text: str, expected: str) -> None:
    assert error_message_from_body(status, content_type, text) == expected


class _FakeResponse:
    def __init__(self, status: int, text: str, content_type: str) -> None:
        self.status = status
        self.headers = {"content-type": content_type}
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class _FakeSession:
    status: int = 200
    text: str = "{}"
    content_type: str = "application/json"
    error: Exception | None = None
    requests: list[dict[str, Any]] = field(default_factory=list)

    def request(self, method: str, url: str, *, data: str | None, headers: dict[str, str]) -> _FakeResponse:
        self.requests.append({"method": method, "url": url, "data": data, "headers": headers})
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.status, self.text, self.content_type)


def _transport(session: _FakeSession) -> HttpTransport:
    return HttpTransport(BifrostConfig(base_url="http://bridge.lan/"), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_request_sends_json_and_decodes_body() -> None:
    session = _FakeSession(text='{"enabled": true}')
    data = await _transport(session).request("PUT", "/bifrost/hass/runtime-config", {"enabled": True, "url": "x"})

    assert data == {"enabled": True}
    sent = session.requests[0]
    assert sent["url"] == "http://bridge.lan/bifrost/hass/runtime-config"
    assert sent["data"] == '{"enabled":true,"url":"x"}'
    assert sent["headers"]["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none() -> None:
    session = _FakeSession(status=204, text="")
    assert await _transport(session).request("POST", "/bifrost/hass/connect") is None
    assert session.requests[0]["data"] is None


@pytest.mark.asyncio
async def test_non_success_raises_with_extracted_message() -> None:
    session = _FakeSession(status=400, text='{"error": "cannot delete default room"}')
    with pytest.raises(BifrostTransportError) as info:
        await _transport(session).request("DELETE", "/bifrost/hass/rooms", {"room_id": "x"})

    assert str(info.value) == "cannot delete default room"
    assert info.value.status_code == 400
    assert info.value.endpoint == "/bifrost/hass/rooms"


@pytest.mark.asyncio
async def test_network_error_is_wrapped() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))
    with pytest.raises(BifrostTransportError, match="failed"):
        await _transport(session).request("GET", "/bifrost/hass/ui-payload")


@pytest.mark.asyncio
async def test_invalid_json_is_reported() -> None:
    session = _FakeSession(text="<html>")
    with pytest.raises(BifrostTransportError, match="Invalid JSON"):
        await _transport(session).request("GET", "/bifrost/hass/ui-payload")
