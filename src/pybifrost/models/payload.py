"""The main UI payload returned by ``GET ui-payload``."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator, model_validator

from pybifrost._constants import PATINA_LOVED_LEVEL, PATINA_USED_LEVEL
from pybifrost.models._base import BifrostBaseModel
from pybifrost.models.bridge import SyncStatus
from pybifrost.models.entity import Entity
from pybifrost.models.ui_config import UiConfig

_logger = logging.getLogger(__name__)


class PatinaStage(StrEnum):
    FRESH = "fresh"
    USED = "used"
    LOVED = "loved"


def stage_from_level(level: int) -> PatinaStage:
    if level >= PATINA_LOVED_LEVEL:
        return PatinaStage.LOVED
    if level >= PATINA_USED_LEVEL:
        return PatinaStage.USED
    return PatinaStage.FRESH


class Patina(BifrostBaseModel):
    """Usage record kept by the bridge (interaction counter)."""

    install_date: str = ""
    interaction_count: int = 0
    patina_level: int = 0
    stage: PatinaStage | None = None

    @field_validator("patina_level", mode="before")
    @classmethod
    def _clamp_level(cls, value: Any) -> int:
        try:
            level = int(value)
        except (TypeError, ValueError):
            return 0
        return max(0, min(100, level))

    @field_validator("stage", mode="before")
    @classmethod
    def _coerce_stage(cls, value: Any) -> PatinaStage | None:
        try:
            return PatinaStage(value)
        except ValueError:
            return None

    @model_validator(mode="after")
    def _derive_stage(self) -> Patina:
        if self.stage is None:
            object.__setattr__(self, "stage", stage_from_level(self.patina_level))
        return self


class UiPayload(BifrostBaseModel):
    """Config, entity list, logs, sync status and usage record in one document."""

    config: UiConfig = Field(default_factory=UiConfig)
    entities: list[Entity] = Field(default_factory=list)
    logs: list[str] = Field(default_factory=list)
    sync: SyncStatus = Field(default_factory=SyncStatus)
    patina: Patina = Field(default_factory=Patina)

    @model_validator(mode="after")
    def _unique_entities(self) -> UiPayload:
        seen: set[str] = set()
        unique: list[Entity] = []
        for entity in self.entities:
            if entity.entity_id in seen:
                _logger.debug("Dropping duplicate entity %s from payload", entity.entity_id)
                continue
            seen.add(entity.entity_id)
            unique.append(entity)
        if len(unique) != len(self.entities):
            object.__setattr__(self, "entities", unique)
        return self

    def entity(self, entity_id: str) -> Entity | None:
        for entity in self.entities:
            if entity.entity_id == entity_id:
                return entity
        return None
