"""Bridge UI configuration: rooms, filters and per-entity preferences.

:func:`normalize_ui_config` reproduces the normalisation the bridge
applies when a whole configuration is written.  The client runs it before
sending, so writing the same configuration twice is a no-op on the
bridge side (no duplicate rooms, no duplicate preference entries).
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pybifrost._constants import DEFAULT_ROOM_ID, DEFAULT_ROOM_NAME
from pybifrost.models._base import BifrostBaseModel
from pybifrost.models.entity import SensorKind, coerce_sensor_kind


class Room(BifrostBaseModel):
    """A Hue room entities can be assigned to."""

    id: str
    name: str = ""
    source_area: str | None = None
    """Home Assistant area this room was derived from, if any."""
    auto_created: bool = False

    @property
    def is_default(self) -> bool:
        """Whether this is the reserved fallback room (cannot be deleted)."""
        return self.id == DEFAULT_ROOM_ID


class EntityPreference(BifrostBaseModel):
    """User overrides stored by the bridge for one entity."""

    visible: bool | None = None
    room_id: str | None = None
    alias: str | None = None
    sensor_kind: SensorKind | None = None
    sensor_enabled: bool | None = None

    @field_validator("sensor_kind", mode="before")
    @classmethod
    def _coerce_sensor_kind(cls, value: Any) -> SensorKind | None:
        return coerce_sensor_kind(value)

    @property
    def is_empty(self) -> bool:
        return (
            self.visible is None
            and self.room_id is None
            and self.alias is None
            and self.sensor_kind is None
            and self.sensor_enabled is None
        )


def default_room() -> Room:
    return Room(id=DEFAULT_ROOM_ID, name=DEFAULT_ROOM_NAME)


class UiConfig(BifrostBaseModel):
    """The whole configuration written by ``PUT ui-config``."""

    hidden_entity_ids: list[str] = Field(default_factory=list)
    exclude_entity_ids: list[str] = Field(default_factory=list)
    exclude_name_patterns: list[str] = Field(default_factory=list)
    include_unavailable: bool = True
    rooms: list[Room] = Field(default_factory=lambda: [default_room()])
    entity_preferences: dict[str, EntityPreference] = Field(default_factory=dict)
    ignored_area_names: list[str] = Field(default_factory=list)
    default_add_new_devices_to_hue: bool = False
    sync_hass_areas_to_rooms: bool = True

    def room(self, room_id: str) -> Room | None:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def room_name(self, room_id: str) -> str:
        room = self.room(room_id)
        return room.name if room is not None else ""

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict in the shape the bridge expects."""
        return self.model_dump(mode="json", exclude_none=True)


class EntityPatch(BifrostBaseModel):
    """Partial update for one entity (``PUT entity``).

    Unset fields are left untouched by the bridge.  An empty ``alias``
    clears the alias; an empty ``room_id`` moves the entity back to the
    default room.
    """

    hidden: bool | None = None
    room_id: str | None = None
    alias: str | None = None
    sensor_kind: SensorKind | None = None
    enabled: bool | None = None

    def to_wire(self, entity_id: str) -> dict[str, Any]:
        body: dict[str, Any] = {"entity_id": entity_id}
        body.update(self.model_dump(mode="json", exclude_none=True))
        return body


def sanitize_room_id(text: str) -> str:
    """Derive a room id: lowercase alphanumerics, single dashes, no edges.

    >>> sanitize_room_id("  Living Room__2 ")
    'living-room-2'
    """
    out: list[str] = []
    last_dash = False
    for ch in text:
        low = ch.lower()
        if low.isascii() and low.isalnum():
            out.append(low)
            last_dash = False
        elif (low.isspace() or low in "-_") and not last_dash:
            out.append("-")
            last_dash = True
    return "".join(out).strip("-")


def _clean_list(values: list[str]) -> list[str]:
    return [text for text in (value.strip() for value in values) if text]


def normalize_ui_config(config: UiConfig) -> UiConfig:
    """Return the canonical form of *config*; idempotent."""
    hidden_ids = _clean_list(config.hidden_entity_ids)
    exclude_ids = _clean_list(config.exclude_entity_ids)

    seen: set[str] = set()
    rooms: list[Room] = []
    for room in config.rooms:
        room_id = sanitize_room_id(room.id) or sanitize_room_id(room.name)
        if not room_id or room_id in seen:
            continue
        seen.add(room_id)
        source_area = room.source_area.strip() if room.source_area else None
        rooms.append(
            Room(
                id=room_id,
                name=room.name.strip(),
                source_area=source_area or None,
                auto_created=room.auto_created,
            )
        )
    if DEFAULT_ROOM_ID not in seen:
        rooms.insert(0, default_room())
        seen.add(DEFAULT_ROOM_ID)

    preferences: dict[str, EntityPreference] = dict(config.entity_preferences)
    for entity_id in (*hidden_ids, *exclude_ids):
        current = preferences.get(entity_id, EntityPreference())
        if current.visible is None:
            preferences[entity_id] = current.model_copy(update={"visible": False})

    cleaned: dict[str, EntityPreference] = {}
    for entity_id, pref in preferences.items():
        key = entity_id.strip()
        if not key:
            continue
        alias = pref.alias.strip() if pref.alias else None
        room_id = pref.room_id if pref.room_id in seen else None
        pref = pref.model_copy(update={"alias": alias or None, "room_id": room_id})
        if not pref.is_empty:
            cleaned[entity_id] = pref

    return UiConfig(
        hidden_entity_ids=hidden_ids,
        exclude_entity_ids=exclude_ids,
        exclude_name_patterns=_clean_list(config.exclude_name_patterns),
        include_unavailable=config.include_unavailable,
        rooms=rooms,
        entity_preferences=cleaned,
        ignored_area_names=_clean_list(config.ignored_area_names),
        default_add_new_devices_to_hue=config.default_add_new_devices_to_hue,
        sync_hass_areas_to_rooms=config.sync_hass_areas_to_rooms,
    )
