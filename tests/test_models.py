from __future__ import annotations

import pytest
from pydantic import ValidationError

from pybifrost.models import (
    BridgeInfo,
    Entity,
    EntityPatch,
    EntityPreference,
    Patina,
    PatinaStage,
    Room,
    SensorKind,
    UiConfig,
    UiPayload,
    normalize_ui_config,
    sanitize_room_id,
)


def test_entity_defaults_and_capabilities() -> None:
    entity = Entity.model_validate(
        {
            "entity_id": " light.kitchen ",
            "domain": "light",
            "name": "Kitchen",
            "supports_brightness": True,
            "supports_color_temp": True,
            "area_name": None,
            "room_id": None,
        }
    )
    assert entity.entity_id == "light.kitchen"
    assert entity.room_id == "home-assistant"
    assert entity.capabilities == ("DIM", "TEMP")
    assert Entity(entity_id="switch.plug").capabilities == ("ON/OFF",)


def test_entity_hidden_wins_over_included() -> None:
    entity = Entity.model_validate({"entity_id": "switch.x", "included": True, "hidden": True})
    assert entity.hidden is True
    assert entity.included is False


def test_entity_requires_id() -> None:
    with pytest.raises(ValidationError):
        Entity.model_validate({"entity_id": "   "})


def test_unknown_sensor_kind_parses_as_absent() -> None:
    entity = Entity.model_validate({"entity_id": "binary_sensor.x", "domain": "binary_sensor", "sensor_kind": "smoke"})
    assert entity.sensor_kind is None
    assert entity.is_sensor

    entity = Entity.model_validate({"entity_id": "binary_sensor.y", "sensor_kind": "Motion"})
    assert entity.sensor_kind is SensorKind.MOTION


def test_search_text_contains_all_fields() -> None:
    entity = Entity(
        entity_id="light.desk",
        name="Desk",
        room_name="Office",
        area_name="Study",
        mapped_type="light",
    )
    assert entity.search_text == "desk light.desk office study light"


def test_payload_drops_duplicate_entities_keeping_first() -> None:
    payload = UiPayload.model_validate(
        {
            "entities": [
                {"entity_id": "light.a", "name": "first"},
                {"entity_id": "light.a", "name": "second"},
                {"entity_id": "light.b"},
            ],
            "logs": ["started"],
            "sync": {"last_sync_at": "2026-01-01T10:00:00Z", "sync_in_progress": False},
            "unknown_field": 1,
        }
    )
    assert [e.entity_id for e in payload.entities] == ["light.a", "light.b"]
    assert payload.entity("light.a") is not None and payload.entity("light.a").name == "first"
    assert payload.sync.last_sync_at is not None
    assert payload.config.rooms[0].is_default


def test_patina_level_is_clamped_and_stage_derived() -> None:
    assert Patina(patina_level=150).patina_level == 100
    assert Patina.model_validate({"patina_level": -3}).stage is PatinaStage.FRESH
    assert Patina(patina_level=30).stage is PatinaStage.USED
    assert Patina(patina_level=71).stage is PatinaStage.LOVED
    assert Patina.model_validate({"patina_level": 10, "stage": "loved"}).stage is PatinaStage.LOVED


def test_bridge_summary_rows() -> None:
    info = BridgeInfo.model_validate(
        {"bridge_name": "Bifrost", "total_entities": 5, "included_entities": 3, "hidden_entities": 2}
    )
    rows = dict(info.summary_rows())
    assert rows["Bridge"] == "Bifrost"
    assert rows["Entities"] == "5 total / 3 added / 2 hidden"
    assert rows["Last sync"] == "never"
    assert rows["Link button"] == "inactive"


def test_entity_patch_wire_format() -> None:
    assert EntityPatch(hidden=False).to_wire("switch.kitchen_fan") == {
        "entity_id": "switch.kitchen_fan",
        "hidden": False,
    }
    assert EntityPatch(sensor_kind=SensorKind.CONTACT, alias="").to_wire("binary_sensor.door") == {
        "entity_id": "binary_sensor.door",
        "alias": "",
        "sensor_kind": "contact",
    }


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Living Room", "living-room"),
        ("  --Kids__Room-- ", "kids-room"),
        ("Café 2", "caf-2"),
        ("!!!", ""),
    ],
)
def test_sanitize_room_id(text: str, expected: str) -> None:
    assert sanitize_room_id(text) == expected


def _messy_config() -> UiConfig:
    return UiConfig(
        hidden_entity_ids=[" light.a ", "", "light.b"],
        exclude_entity_ids=["switch.c"],
        exclude_name_patterns=["  test*  ", " "],
        rooms=[
            Room(id="Living Room", name=" Living Room "),
            Room(id="living-room", name="Duplicate"),
            Room(id="", name="Kids Room", source_area=" Kids "),
        ],
        entity_preferences={
            "light.d": EntityPreference(alias="  Desk  ", room_id="living-room"),
            "light.e": EntityPreference(room_id="gone"),
            "light.b": EntityPreference(visible=True),
        },
    )


def test_normalize_ui_config() -> None:
    config = normalize_ui_config(_messy_config())

    assert config.hidden_entity_ids == ["light.a", "light.b"]
    assert config.exclude_name_patterns == ["test*"]
    assert [room.id for room in config.rooms] == ["home-assistant", "living-room", "kids-room"]
    assert config.room("living-room").name == "Living Room"
    assert config.room("kids-room").source_area == "Kids"
    assert config.entity_preferences["light.d"] == EntityPreference(alias="Desk", room_id="living-room")
    assert "light.e" not in config.entity_preferences
    assert config.entity_preferences["light.a"].visible is False
    assert config.entity_preferences["switch.c"].visible is False
    # An explicit preference is not overridden.
    assert config.entity_preferences["light.b"].visible is True


def test_normalize_ui_config_is_idempotent() -> None:
    once = normalize_ui_config(_messy_config())
    twice = normalize_ui_config(once)
    assert twice == once
    assert twice.to_wire() == once.to_wire()


def test_default_config_contains_default_room() -> None:
    config = UiConfig()
    assert config.room_name("home-assistant") == "Home Assistant"
    assert config.room_name("missing") == ""
    assert normalize_ui_config(config) == config
