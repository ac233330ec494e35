"""Deterministic polling policy."""

from __future__ import annotations

from pybifrost.config import BifrostConfig


def poll_interval(visible: bool, config: BifrostConfig | None = None) -> float:
    """Seconds to wait between snapshot polls.

    Short while the dashboard is the visible, active view; long otherwise so
    background tabs do not load the bridge.
    """
    config = config or BifrostConfig()
    return config.poll_interval_visible if visible else config.poll_interval_hidden
