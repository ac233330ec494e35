"""pybifrost - Async Python client for the Bifrost Home Assistant Hue bridge."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybifrost")
except PackageNotFoundError:
    __version__ = "0+local"
from pybifrost.client import BifrostClient
from pybifrost.config import BifrostConfig
from pybifrost.controller import BridgeController
from pybifrost.exceptions import (
    BifrostApiError,
    BifrostConfigError,
    BifrostError,
    BifrostTransportError,
    BifrostValidationError,
)
from pybifrost.models import (
    BridgeInfo,
    Entity,
    EntityDomain,
    EntityPatch,
    EntityPreference,
    Patina,
    PatinaStage,
    Room,
    RuntimeConfig,
    RuntimeConfigUpdate,
    SensorKind,
    SyncStatus,
    UiConfig,
    UiPayload,
    normalize_ui_config,
)
from pybifrost.state import (
    ActionResult,
    ActionRunner,
    LocalEchoStore,
    MutationCoalescer,
    Notification,
    NotificationCenter,
    NotificationTone,
    PollingSynchronizer,
    Snapshot,
    poll_interval,
)
from pybifrost.view import EntityTab, VirtualItem, Virtualizer, derive_view, tab_counters

__all__ = [
    "__version__",
    "ActionResult",
    "ActionRunner",
    "BifrostApiError",
    "BifrostClient",
    "BifrostConfig",
    "BifrostConfigError",
    "BifrostError",
    "BifrostTransportError",
    "BifrostValidationError",
    "BridgeController",
    "BridgeInfo",
    "Entity",
    "EntityDomain",
    "EntityPatch",
    "EntityPreference",
    "EntityTab",
    "LocalEchoStore",
    "MutationCoalescer",
    "Notification",
    "NotificationCenter",
    "NotificationTone",
    "Patina",
    "PatinaStage",
    "PollingSynchronizer",
    "Room",
    "RuntimeConfig",
    "RuntimeConfigUpdate",
    "SensorKind",
    "Snapshot",
    "SyncStatus",
    "UiConfig",
    "UiPayload",
    "VirtualItem",
    "Virtualizer",
    "derive_view",
    "normalize_ui_config",
    "poll_interval",
    "tab_counters",
]
