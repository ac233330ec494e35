"""Client configuration for pybifrost."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pybifrost.exceptions import BifrostConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BifrostConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the Bifrost web service (scheme, host and port).
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    poll_interval_visible : float
        Seconds between snapshot polls while the dashboard is visible.
    poll_interval_hidden : float
        Seconds between snapshot polls while the dashboard is in the
        background.
    alias_debounce : float
        Quiescence window in seconds before a coalesced alias edit is
        written to the bridge.
    notification_ttl : float
        Seconds a transient notification stays in the active list.
    notification_limit : int
        Maximum number of notifications kept at once (newest first).
    require_complete_snapshot : bool
        When ``True`` a poll cycle only publishes a new snapshot if all
        three remote views were fetched.  When ``False`` (default) the
        views that succeeded are replaced and the failed ones keep their
        previous value.
    usage_events_enabled : bool
        Send best-effort usage events after user actions.
    row_size_estimate : float
        Initial size estimate for a virtualized entity row.
    row_overscan : int
        Extra rows rendered above and below the visible window.
    """

    base_url: str = "http://127.0.0.1"
    request_timeout: float = 10.0
    poll_interval_visible: float = 2.0
    poll_interval_hidden: float = 10.0
    alias_debounce: float = 0.35
    notification_ttl: float = 2.5
    notification_limit: int = 4
    require_complete_snapshot: bool = False
    usage_events_enabled: bool = True
    row_size_estimate: float = 190.0
    row_overscan: int = 8

    def __post_init__(self) -> None:
        if self.poll_interval_visible <= 0 or self.poll_interval_hidden <= 0:
            raise BifrostConfigError("poll intervals must be positive")
        if self.alias_debounce < 0:
            raise BifrostConfigError("alias_debounce must not be negative")
        if self.notification_limit < 1:
            raise BifrostConfigError("notification_limit must be at least 1")
        if self.row_size_estimate <= 0:
            raise BifrostConfigError("row_size_estimate must be positive")
        # Normalise a trailing slash so endpoint paths can be appended verbatim.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> BifrostConfig:
        """Create configuration from environment variables.

        Reads ``BIFROST_URL`` and optional ``BIFROST_*`` tuning variables.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        BifrostConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("BIFROST_URL")
        if url is not None:
            config_kwargs["base_url"] = url

        _ENV_FLOAT_MAP = {
            "BIFROST_REQUEST_TIMEOUT": "request_timeout",
            "BIFROST_POLL_INTERVAL_VISIBLE": "poll_interval_visible",
            "BIFROST_POLL_INTERVAL_HIDDEN": "poll_interval_hidden",
            "BIFROST_ALIAS_DEBOUNCE": "alias_debounce",
            "BIFROST_NOTIFICATION_TTL": "notification_ttl",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise BifrostConfigError(f"{env_key} must be a number, got {val!r}") from exc

        limit_env = env.get("BIFROST_NOTIFICATION_LIMIT")
        if limit_env is not None and "notification_limit" not in overrides:
            try:
                config_kwargs["notification_limit"] = int(limit_env)
            except ValueError as exc:
                raise BifrostConfigError(f"BIFROST_NOTIFICATION_LIMIT must be an integer, got {limit_env!r}") from exc

        if "require_complete_snapshot" not in overrides:
            config_kwargs["require_complete_snapshot"] = _env_bool(env.get("BIFROST_REQUIRE_COMPLETE_SNAPSHOT"), False)

        if "usage_events_enabled" not in overrides:
            config_kwargs["usage_events_enabled"] = _env_bool(env.get("BIFROST_USAGE_EVENTS"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
