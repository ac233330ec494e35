"""Dashboard controller: the bridge UI's read and write paths in one place.

Read path: :class:`PollingSynchronizer` -> :class:`LocalEchoStore` overlay
-> :func:`derive_view`.

Write path: user edit -> (alias edits only) :class:`MutationCoalescer` ->
:class:`ActionRunner` -> REST call -> usage event -> refresh.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pybifrost._constants import DEFAULT_ROOM_ID
from pybifrost.client import BifrostClient
from pybifrost.config import BifrostConfig
from pybifrost.models.entity import Entity, SensorKind
from pybifrost.models.runtime import RuntimeConfigUpdate
from pybifrost.models.ui_config import EntityPatch, UiConfig
from pybifrost.state.actions import ActionResult, ActionRunner
from pybifrost.state.coalescer import MutationCoalescer
from pybifrost.state.echo import LocalEchoStore
from pybifrost.state.notifications import NotificationCenter, NotificationTone
from pybifrost.state.snapshot import Snapshot
from pybifrost.state.synchronizer import PollingSynchronizer
from pybifrost.view.model import EntityTab, derive_view, tab_counters
from pybifrost.view.virtualizer import Virtualizer

_logger = logging.getLogger(__name__)


class BridgeController:
    """Owns every client-side component for one dashboard session.

    Usage::

        async with BifrostClient(config) as client, BridgeController(client) as ui:
            await ui.refresh()
            await ui.set_included("switch.kitchen_fan", True)
            rows = ui.view(EntityTab.SWITCHES)
    """

    def __init__(
        self,
        client: BifrostClient,
        config: BifrostConfig | None = None,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._config = config or client.config
        self._on_change = on_change

        self.notifications = NotificationCenter(
            ttl=self._config.notification_ttl,
            limit=self._config.notification_limit,
            on_change=lambda _items: self._changed(),
        )
        self.echo = LocalEchoStore()
        self.synchronizer = PollingSynchronizer(
            client,
            self._config,
            on_snapshot=self._on_snapshot,
            on_error=lambda _message: self._changed(),
        )
        self.runner = ActionRunner(
            self.synchronizer.refresh_now,
            self.notifications,
            on_busy_change=lambda _busy: self._changed(),
        )
        self.aliases = MutationCoalescer(self._config.alias_debounce)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BridgeController:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    def start(self) -> None:
        self.synchronizer.start()

    def close(self) -> None:
        """Stop polling and drop pending edits and notifications."""
        self.synchronizer.stop()
        self.aliases.close()
        self.notifications.close()

    async def refresh(self) -> None:
        await self.synchronizer.refresh_now()

    def set_visible(self, visible: bool) -> None:
        self.synchronizer.set_visible(visible)

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self.synchronizer.snapshot

    @property
    def error(self) -> str | None:
        return self.synchronizer.error

    @property
    def loading(self) -> bool:
        return self.synchronizer.loading

    @property
    def config(self) -> UiConfig:
        return self.snapshot.config or UiConfig()

    def entities(self) -> tuple[Entity, ...]:
        """Snapshot entities with unconfirmed local edits applied."""
        return self.echo.apply(self.snapshot.entities)

    def entity(self, entity_id: str) -> Entity | None:
        for entity in self.entities():
            if entity.entity_id == entity_id:
                return entity
        return None

    def view(self, tab: EntityTab | str = EntityTab.ALL, query: str = "") -> tuple[Entity, ...]:
        return derive_view(self.entities(), EntityTab(tab).predicate, query)

    def counters(self) -> dict[EntityTab, int]:
        return tab_counters(self.entities())

    def virtualizer(self, rows: tuple[Entity, ...] = (), viewport_height: float = 0.0) -> Virtualizer:
        """Row windowing for *rows*, sized from the configured row estimate."""
        virt = Virtualizer(
            estimate_size=self._config.row_size_estimate,
            overscan=self._config.row_overscan,
            viewport_height=viewport_height,
        )
        virt.set_keys([entity.entity_id for entity in rows])
        return virt

    # ------------------------------------------------------------------
    # Entity edits
    # ------------------------------------------------------------------

    async def set_included(self, entity_id: str, included: bool) -> ActionResult:
        """Show (``True``) or hide the entity in the Hue app."""
        verb = "Added to Hue" if included else "Hidden from Hue"
        return await self._patch_entity(
            entity_id,
            EntityPatch(hidden=not included),
            echo={"included": included, "hidden": not included},
            message=f"{verb}: {entity_id}",
            usage=("toggle", f"included:{entity_id}"),
        )

    async def set_room(self, entity_id: str, room_id: str) -> ActionResult:
        room_id = room_id or DEFAULT_ROOM_ID
        return await self._patch_entity(
            entity_id,
            EntityPatch(room_id=room_id),
            echo={"room_id": room_id, "room_name": self.config.room_name(room_id)},
            message=f"Room updated: {entity_id}",
            usage=("toggle", f"room:{entity_id}"),
        )

    def set_alias(self, entity_id: str, alias: str) -> None:
        """Record a keystroke-level alias edit.

        The alias is shown immediately; the bridge receives one write with
        the final value once typing pauses for ``alias_debounce`` seconds.
        """
        if alias.strip():
            self.echo.hold(entity_id, name=alias)
        else:
            self.echo.release(entity_id, "name")
        self.aliases.schedule(entity_id, alias, lambda value: self._commit_alias(entity_id, value))
        self._changed()

    async def set_sensor_kind(self, entity_id: str, kind: SensorKind | str) -> ActionResult:
        kind = SensorKind(kind)
        return await self._patch_entity(
            entity_id,
            EntityPatch(sensor_kind=kind),
            echo={"sensor_kind": kind},
            message=f"Sensor type updated: {entity_id}",
            usage=("toggle", f"sensor-kind:{entity_id}"),
        )

    async def set_sensor_enabled(self, entity_id: str, enabled: bool) -> ActionResult:
        state = "enabled" if enabled else "disabled"
        return await self._patch_entity(
            entity_id,
            EntityPatch(enabled=enabled),
            echo={"enabled": enabled},
            message=f"Sensor {state}: {entity_id}",
            usage=("toggle", f"sensor-enabled:{entity_id}"),
        )

    async def _commit_alias(self, entity_id: str, alias: str) -> ActionResult:
        async def _action() -> None:
            try:
                await self._client.patch_entity(entity_id, EntityPatch(alias=alias))
            except Exception:
                if self.aliases.pending_value(entity_id) is None:
                    self.echo.release(entity_id, "name")
                raise
            # A newer keystroke owns the echo now; leave it held.
            if self.echo.overlay(entity_id).get("name") == alias:
                self.echo.settle(entity_id, "name", cycle=self.synchronizer.cycles_started)
            await self._client.record_usage("click", f"alias:{entity_id}")

        return await self.runner.run(f"alias:{entity_id}", _action, f"Alias saved: {entity_id}")

    async def _patch_entity(
        self,
        entity_id: str,
        patch: EntityPatch,
        *,
        echo: dict[str, Any],
        message: str,
        usage: tuple[str, str],
    ) -> ActionResult:
        kind, key = usage

        async def _action() -> None:
            self.echo.hold(entity_id, **echo)
            self._changed()
            try:
                await self._client.patch_entity(entity_id, patch)
            except Exception:
                self.echo.release(entity_id, *echo)
                raise
            self.echo.settle(entity_id, *echo, cycle=self.synchronizer.cycles_started)
            await self._client.record_usage(kind, key)

        return await self.runner.run(key, _action, message)

    # ------------------------------------------------------------------
    # Configuration and rooms
    # ------------------------------------------------------------------

    async def save_config(self, config: UiConfig) -> ActionResult:
        """Replace the whole configuration (filters, rooms, defaults)."""

        async def _action() -> None:
            await self._client.put_ui_config(config)
            await self._client.record_usage("apply", "save-config")

        return await self.runner.run("save-config", _action, "Configuration saved")

    async def create_room(self, name: str) -> ActionResult:
        async def _action() -> None:
            await self._client.create_room(name)
            await self._client.record_usage("click", "room-create")

        return await self.runner.run("create", _action, f"Room created: {name.strip()}")

    async def rename_room(self, room_id: str, name: str) -> ActionResult:
        async def _action() -> None:
            await self._client.rename_room(room_id, name)
            await self._client.record_usage("toggle", f"room-rename:{room_id}")

        return await self.runner.run("rename", _action, f"Room renamed: {room_id}")

    async def delete_room(self, room_id: str) -> ActionResult:
        """Delete a room; its entities move back to the default room.

        The default room itself is refused here, with no request at all.
        """
        if room_id == DEFAULT_ROOM_ID:
            message = "The default room cannot be deleted"
            _logger.debug("Refusing to delete default room %s", room_id)
            self.notifications.push(message, NotificationTone.WARN)
            return ActionResult(label="delete", ok=False, skipped=True, error=message)

        async def _action() -> None:
            await self._client.delete_room(room_id)
            await self._client.record_usage("reset", f"room-delete:{room_id}")

        return await self.runner.run("delete", _action, f"Room deleted: {room_id}")

    # ------------------------------------------------------------------
    # Runtime connection
    # ------------------------------------------------------------------

    async def save_runtime(self, update: RuntimeConfigUpdate) -> ActionResult:
        async def _action() -> None:
            await self._client.put_runtime_config(update)
            await self._client.record_usage("click", "runtime-save")

        return await self.runner.run("save-runtime", _action, "Runtime config saved")

    async def set_token(self, token: str) -> ActionResult:
        async def _action() -> None:
            await self._client.set_token(token)
            await self._client.record_usage("click", "token-save")

        return await self.runner.run("save-token", _action, "Token saved")

    async def delete_token(self) -> ActionResult:
        async def _action() -> None:
            await self._client.delete_token()
            await self._client.record_usage("click", "token-delete")

        return await self.runner.run("delete-token", _action, "Token deleted")

    async def connect(self) -> ActionResult:
        return await self.runner.run("connect", self._client.connect, "Connecting to Home Assistant")

    async def disconnect(self) -> ActionResult:
        return await self.runner.run("disconnect", self._client.disconnect, "Disconnected from Home Assistant")

    # ------------------------------------------------------------------
    # Bridge actions
    # ------------------------------------------------------------------

    async def sync(self) -> ActionResult:
        return await self.runner.run("sync", self._client.sync, "Home Assistant sync started")

    async def apply(self) -> ActionResult:
        return await self.runner.run("apply", self._client.apply, "Hue app sync started")

    async def press_link_button(self) -> ActionResult:
        return await self.runner.run("button", self._client.press_link_button, "Link button pressed")

    async def reset_bridge(self) -> ActionResult:
        async def _action() -> None:
            await self._client.reset_bridge()
            await self._client.record_usage("reset", "bridge-reset")

        return await self.runner.run("reset", _action, "Hue bridge reset")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self.echo.reconcile(snapshot)
        self._changed()

    def _changed(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)

