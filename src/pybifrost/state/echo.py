"""Optimistic local echo of user edits.

The read path shows an edited value right away instead of waiting for the
bridge to confirm it.  An echo lives in one of two phases:

- *held*: the write has not settled yet (still debouncing or on the wire);
  snapshots never clear it.
- *settled*: the write finished at a known poll cycle; the echo is dropped
  by the first snapshot produced by a later cycle, which is the one that
  can actually reflect the write.

A failed write releases its echo at once so the next render shows the
bridge's value again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pybifrost.models.entity import Entity
from pybifrost.state.snapshot import Snapshot

_logger = logging.getLogger(__name__)

ECHO_FIELDS = frozenset(
    {"included", "hidden", "room_id", "room_name", "name", "sensor_kind", "enabled"}
)


@dataclass(slots=True)
class _Echo:
    value: Any
    settled_after: int | None = None


class LocalEchoStore:
    def __init__(self) -> None:
        self._echoes: dict[str, dict[str, _Echo]] = {}

    def __len__(self) -> int:
        return sum(len(fields) for fields in self._echoes.values())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._echoes

    def hold(self, entity_id: str, **fields: Any) -> None:
        """Show *fields* for *entity_id* until the write settles."""
        unknown = set(fields) - ECHO_FIELDS
        if unknown:
            raise ValueError(f"cannot echo field(s): {', '.join(sorted(unknown))}")
        slot = self._echoes.setdefault(entity_id, {})
        for name, value in fields.items():
            slot[name] = _Echo(value=value)

    def settle(self, entity_id: str, *fields: str, cycle: int) -> None:
        """Mark echoes as written; a snapshot from a cycle after *cycle* drops them.

        Without *fields* every echo of the entity is settled.
        """
        slot = self._echoes.get(entity_id)
        if not slot:
            return
        for name in fields or tuple(slot):
            echo = slot.get(name)
            if echo is not None and echo.settled_after is None:
                echo.settled_after = cycle

    def release(self, entity_id: str, *fields: str) -> None:
        """Forget echoes right away (all of the entity's when *fields* is empty)."""
        slot = self._echoes.get(entity_id)
        if slot is None:
            return
        for name in fields or tuple(slot):
            slot.pop(name, None)
        if not slot:
            del self._echoes[entity_id]

    def reconcile(self, snapshot: Snapshot) -> int:
        """Drop settled echoes confirmed by *snapshot*; returns how many went."""
        dropped = 0
        for entity_id in list(self._echoes):
            slot = self._echoes[entity_id]
            for name in list(slot):
                settled_after = slot[name].settled_after
                if settled_after is not None and snapshot.cycle > settled_after:
                    del slot[name]
                    dropped += 1
            if not slot:
                del self._echoes[entity_id]
        if dropped:
            _logger.debug("Snapshot v%d confirmed %d echoed field(s)", snapshot.version, dropped)
        return dropped

    def overlay(self, entity_id: str) -> dict[str, Any]:
        return {name: echo.value for name, echo in self._echoes.get(entity_id, {}).items()}

    def apply(self, entities: Iterable[Entity]) -> tuple[Entity, ...]:
        """Entities with their echoed fields substituted; inputs are not modified."""
        out: list[Entity] = []
        for entity in entities:
            overlay = self.overlay(entity.entity_id)
            out.append(entity.model_copy(update=overlay) if overlay else entity)
        return tuple(out)

    def clear(self) -> None:
        self._echoes.clear()
