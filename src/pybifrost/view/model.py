"""Derived entity view: a pure filter and sort over a snapshot's entities.

Ordering:
  1. entities shown in the Hue app before hidden ones,
  2. then room name, case-insensitive,
  3. then entity name, case-insensitive.

The free-text query matches, case-insensitively, anywhere in
``"<name> <entity_id> <room_name> <area_name> <mapped_type>"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum

from pybifrost.models.entity import Entity, EntityDomain

EntityPredicate = Callable[[Entity], bool]


class EntityTab(StrEnum):
    """Entity list tabs and the predicate each one filters by."""

    LIGHTS = "lights"
    SWITCHES = "switches"
    SENSORS = "sensors"
    HIDDEN = "hidden"
    ALL = "all"

    @property
    def predicate(self) -> EntityPredicate:
        return _TAB_PREDICATES[self]


_TAB_PREDICATES: dict[EntityTab, EntityPredicate] = {
    EntityTab.LIGHTS: lambda e: e.domain == EntityDomain.LIGHT,
    EntityTab.SWITCHES: lambda e: e.domain == EntityDomain.SWITCH,
    EntityTab.SENSORS: lambda e: e.domain == EntityDomain.BINARY_SENSOR,
    EntityTab.HIDDEN: lambda e: not e.included,
    EntityTab.ALL: lambda e: True,
}


def entity_sort_key(entity: Entity) -> tuple[int, str, str]:
    return (0 if entity.included else 1, entity.room_name.lower(), entity.name.lower())


def matches_query(entity: Entity, query: str) -> bool:
    needle = query.strip().lower()
    return not needle or needle in entity.search_text


def derive_view(
    entities: Iterable[Entity],
    predicate: EntityPredicate | None = None,
    query: str = "",
) -> tuple[Entity, ...]:
    """Filter *entities* by *predicate* and *query*, then sort.

    The input is never modified; the result is a new tuple whose items are
    the same objects as in the input.  The sort is stable, so entities with
    equal keys keep their snapshot order.
    """
    selected = [
        entity
        for entity in entities
        if (predicate is None or predicate(entity)) and matches_query(entity, query)
    ]
    return tuple(sorted(selected, key=entity_sort_key))


def tab_counters(entities: Iterable[Entity]) -> dict[EntityTab, int]:
    """Badge counts for the lights/switches/sensors/hidden tabs."""
    counts = dict.fromkeys((EntityTab.LIGHTS, EntityTab.SWITCHES, EntityTab.SENSORS, EntityTab.HIDDEN), 0)
    for entity in entities:
        for tab in counts:
            if tab.predicate(entity):
                counts[tab] += 1
    return counts
