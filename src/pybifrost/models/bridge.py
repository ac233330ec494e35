"""Bridge diagnostics and sync status models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pybifrost.models._base import BifrostBaseModel


class SyncStatus(BifrostBaseModel):
    """Result of the last Home Assistant import.

    Only changed by explicit sync/apply actions on the bridge; read-only
    for the client.
    """

    last_sync_at: datetime | None = None
    last_sync_result: str | None = None
    sync_in_progress: bool = False
    last_sync_duration_ms: int | None = None


class BridgeInfo(BifrostBaseModel):
    """Diagnostics record from ``GET bridge-info``."""

    bridge_name: str = ""
    bridge_id: str = ""
    software_version: str = ""
    mac: str = ""
    ipaddress: str = ""
    netmask: str = ""
    gateway: str = ""
    timezone: str = ""
    total_entities: int = 0
    included_entities: int = 0
    hidden_entities: int = 0
    room_count: int = 0
    linkbutton_active: bool = False
    default_add_new_devices_to_hue: bool = False
    sync_hass_areas_to_rooms: bool = True
    sync_status: SyncStatus = Field(default_factory=SyncStatus)

    def summary_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for a diagnostics panel."""
        sync = self.sync_status
        return [
            ("Bridge", self.bridge_name),
            ("Bridge ID", self.bridge_id),
            ("Software", self.software_version),
            ("IP", self.ipaddress),
            ("MAC", self.mac),
            ("Timezone", self.timezone),
            (
                "Entities",
                f"{self.total_entities} total / {self.included_entities} added / {self.hidden_entities} hidden",
            ),
            ("Rooms", str(self.room_count)),
            ("Last sync", sync.last_sync_at.isoformat() if sync.last_sync_at else "never"),
            ("Sync result", sync.last_sync_result or "-"),
            ("Sync ms", str(sync.last_sync_duration_ms) if sync.last_sync_duration_ms is not None else "-"),
            ("Link button", "active" if self.linkbutton_active else "inactive"),
        ]
