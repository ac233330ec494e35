"""Immutable point-in-time view of the bridge."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pybifrost.models.bridge import BridgeInfo, SyncStatus
from pybifrost.models.entity import Entity
from pybifrost.models.payload import UiPayload
from pybifrost.models.runtime import RuntimeConfig
from pybifrost.models.ui_config import Room, UiConfig


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Everything the dashboard renders, replaced wholesale on every poll.

    ``version`` increases by one each time the synchronizer publishes a new
    snapshot; ``0`` is the empty snapshot before the first poll.  Any of the
    three views may be ``None`` until it has been fetched successfully once.
    """

    version: int = 0
    cycle: int = 0
    """Sequence number of the poll cycle that produced this snapshot."""
    fetched_at: datetime | None = None
    payload: UiPayload | None = None
    bridge: BridgeInfo | None = None
    runtime: RuntimeConfig | None = None

    @property
    def entities(self) -> tuple[Entity, ...]:
        return tuple(self.payload.entities) if self.payload is not None else ()

    @property
    def config(self) -> UiConfig | None:
        return self.payload.config if self.payload is not None else None

    @property
    def rooms(self) -> tuple[Room, ...]:
        return tuple(self.payload.config.rooms) if self.payload is not None else ()

    @property
    def logs(self) -> tuple[str, ...]:
        return tuple(self.payload.logs) if self.payload is not None else ()

    @property
    def sync(self) -> SyncStatus | None:
        return self.payload.sync if self.payload is not None else None

    def entity(self, entity_id: str) -> Entity | None:
        return self.payload.entity(entity_id) if self.payload is not None else None
