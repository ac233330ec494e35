"""Entity summary model."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import field_validator, model_validator

from pybifrost._constants import DEFAULT_ROOM_ID
from pybifrost.models._base import BifrostBaseModel

_logger = logging.getLogger(__name__)


class SensorKind(StrEnum):
    """How a binary sensor is exposed to the Hue app."""

    MOTION = "motion"
    CONTACT = "contact"
    IGNORE = "ignore"


class EntityDomain(StrEnum):
    """Home Assistant domains the bridge knows how to expose.

    The wire field is open-ended; these are only the values the client
    gives special treatment to.
    """

    LIGHT = "light"
    SWITCH = "switch"
    BINARY_SENSOR = "binary_sensor"


def coerce_sensor_kind(value: Any) -> SensorKind | None:
    """Parse a sensor kind, mapping unknown values to ``None``."""
    if value is None or isinstance(value, SensorKind):
        return value
    try:
        return SensorKind(str(value).strip().lower())
    except ValueError:
        return None


class Entity(BifrostBaseModel):
    """One Home Assistant entity as summarised by the bridge.

    ``included`` is the effective "shown in the Hue app" flag computed by
    the bridge; ``hidden`` is the manual hide preference.  A manual hide
    always wins, so both are never true at the same time.
    """

    entity_id: str
    """Stable Home Assistant entity id (e.g. ``"light.kitchen"``)."""
    domain: str = ""
    """Domain classifier; see :class:`EntityDomain` for known values."""
    name: str = ""
    """Display name (alias when set, friendly name otherwise)."""
    state: str = ""
    """Live state string (``"on"``, ``"off"``, ...)."""
    available: bool = True
    included: bool = False
    hidden: bool = False
    area_name: str | None = None
    """Home Assistant area label (read-only, upstream)."""
    room_id: str = DEFAULT_ROOM_ID
    room_name: str = ""
    mapped_type: str = ""
    """Hue resource type the entity maps to (``"light"``, ``"switch"``...)."""
    supports_brightness: bool = False
    supports_color: bool = False
    supports_color_temp: bool = False
    sensor_kind: SensorKind | None = None
    enabled: bool = False
    """Per-sensor enabled flag (meaningful for binary sensors)."""

    @field_validator("entity_id")
    @classmethod
    def _normalize_entity_id(cls, value: str) -> str:
        entity_id = value.strip()
        if not entity_id:
            raise ValueError("entity_id must be non-empty")
        return entity_id

    @field_validator("sensor_kind", mode="before")
    @classmethod
    def _coerce_sensor_kind(cls, value: Any) -> SensorKind | None:
        return coerce_sensor_kind(value)

    @model_validator(mode="after")
    def _hidden_excludes_included(self) -> Entity:
        if self.included and self.hidden:
            _logger.debug("Entity %s reported both included and hidden; treating as hidden", self.entity_id)
            object.__setattr__(self, "included", False)
        return self

    @property
    def is_sensor(self) -> bool:
        return self.domain == EntityDomain.BINARY_SENSOR

    @property
    def capabilities(self) -> tuple[str, ...]:
        """Short capability labels shown next to the entity."""
        caps: list[str] = []
        if self.supports_brightness:
            caps.append("DIM")
        if self.supports_color:
            caps.append("COLOR")
        if self.supports_color_temp:
            caps.append("TEMP")
        return tuple(caps) if caps else ("ON/OFF",)

    @property
    def search_text(self) -> str:
        """Lower-cased text the free-text filter matches against."""
        return f"{self.name} {self.entity_id} {self.room_name} {self.area_name or ''} {self.mapped_type}".lower()
