"""Data models for Bifrost API payloads."""

from pybifrost.models._base import BifrostBaseModel
from pybifrost.models.bridge import BridgeInfo, SyncStatus
from pybifrost.models.entity import Entity, EntityDomain, SensorKind
from pybifrost.models.payload import Patina, PatinaStage, UiPayload, stage_from_level
from pybifrost.models.runtime import RuntimeConfig, RuntimeConfigUpdate
from pybifrost.models.ui_config import (
    EntityPatch,
    EntityPreference,
    Room,
    UiConfig,
    normalize_ui_config,
    sanitize_room_id,
)

__all__ = [
    "BifrostBaseModel",
    "BridgeInfo",
    "Entity",
    "EntityDomain",
    "EntityPatch",
    "EntityPreference",
    "Patina",
    "PatinaStage",
    "Room",
    "RuntimeConfig",
    "RuntimeConfigUpdate",
    "SensorKind",
    "SyncStatus",
    "UiConfig",
    "UiPayload",
    "normalize_ui_config",
    "sanitize_room_id",
    "stage_from_level",
]
