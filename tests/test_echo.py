from __future__ import annotations

import pytest

from pybifrost.models.entity import Entity
from pybifrost.state.echo import LocalEchoStore
from pybifrost.state.snapshot import Snapshot


def _entity(**fields: object) -> Entity:
    return Entity.model_validate({"entity_id": "switch.kitchen_fan", "domain": "switch", "name": "Fan", **fields})


def test_held_echo_overrides_entity_without_mutating_it() -> None:
    store = LocalEchoStore()
    original = _entity(included=False)

    store.hold("switch.kitchen_fan", included=True, hidden=False)
    (echoed,) = store.apply([original])

    assert echoed.included is True
    assert original.included is False
    assert "switch.kitchen_fan" in store
    assert len(store) == 2


def test_held_echo_survives_snapshots() -> None:
    store = LocalEchoStore()
    store.hold("switch.kitchen_fan", name="Kit")

    assert store.reconcile(Snapshot(version=5, cycle=9)) == 0
    assert store.overlay("switch.kitchen_fan") == {"name": "Kit"}


def test_settled_echo_dropped_by_later_cycle_only() -> None:
    store = LocalEchoStore()
    store.hold("switch.kitchen_fan", room_id="kitchen", room_name="Kitchen")
    store.settle("switch.kitchen_fan", cycle=3)

    assert store.reconcile(Snapshot(version=3, cycle=3)) == 0
    assert store.overlay("switch.kitchen_fan")["room_id"] == "kitchen"

    assert store.reconcile(Snapshot(version=4, cycle=4)) == 2
    assert store.overlay("switch.kitchen_fan") == {}
    assert len(store) == 0


def test_release_restores_bridge_value() -> None:
    store = LocalEchoStore()
    store.hold("switch.kitchen_fan", enabled=True, sensor_kind="motion")
    store.release("switch.kitchen_fan", "enabled")
    assert store.overlay("switch.kitchen_fan") == {"sensor_kind": "motion"}

    store.release("switch.kitchen_fan")
    assert "switch.kitchen_fan" not in store


def test_unknown_field_rejected() -> None:
    with pytest.raises(ValueError, match="entity_id"):
        LocalEchoStore().hold("switch.kitchen_fan", entity_id="other")
