from __future__ import annotations

import pytest

from pybifrost.config import BifrostConfig
from pybifrost.exceptions import BifrostConfigError


def test_defaults() -> None:
    config = BifrostConfig()
    assert config.poll_interval_visible == 2.0
    assert config.poll_interval_hidden == 10.0
    assert 0.3 <= config.alias_debounce <= 0.4
    assert config.notification_limit == 4
    assert config.notification_ttl == 2.5
    assert config.require_complete_snapshot is False


def test_trailing_slash_is_stripped() -> None:
    assert BifrostConfig(base_url="http://bifrost.local:8080/").base_url == "http://bifrost.local:8080"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIFROST_URL", "http://bridge.lan")
    monkeypatch.setenv("BIFROST_POLL_INTERVAL_HIDDEN", "30")
    monkeypatch.setenv("BIFROST_REQUIRE_COMPLETE_SNAPSHOT", "yes")
    monkeypatch.setenv("BIFROST_USAGE_EVENTS", "off")
    monkeypatch.setenv("BIFROST_NOTIFICATION_LIMIT", "6")

    config = BifrostConfig.from_env(poll_interval_visible=1.0)

    assert config.base_url == "http://bridge.lan"
    assert config.poll_interval_visible == 1.0
    assert config.poll_interval_hidden == 30.0
    assert config.require_complete_snapshot is True
    assert config.usage_events_enabled is False
    assert config.notification_limit == 6


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIFROST_ALIAS_DEBOUNCE", "0.9")
    assert BifrostConfig.from_env(alias_debounce=0.1).alias_debounce == 0.1


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIFROST_REQUEST_TIMEOUT", "soon")
    with pytest.raises(BifrostConfigError, match="BIFROST_REQUEST_TIMEOUT"):
        BifrostConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"poll_interval_visible": 0},
        {"poll_interval_hidden": -1},
        {"alias_debounce": -0.1},
        {"notification_limit": 0},
        {"row_size_estimate": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, float]) -> None:
    with pytest.raises(BifrostConfigError):
        BifrostConfig(**kwargs)
