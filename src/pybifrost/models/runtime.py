"""Runtime connection config for the Home Assistant backend."""

from __future__ import annotations

from pybifrost.models._base import BifrostBaseModel


class RuntimeConfig(BifrostBaseModel):
    """Public view of the runtime connection config.

    The access token itself is write-only; only its presence is reported.
    """

    enabled: bool = False
    url: str = ""
    sync_mode: str = ""
    token_present: bool = False


class RuntimeConfigUpdate(BifrostBaseModel):
    """Body for ``PUT runtime-config``."""

    enabled: bool
    url: str
    sync_mode: str | None = None
