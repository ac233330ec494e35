"""Polling synchronizer: owns the current snapshot and keeps it fresh.

One cycle fetches the UI payload, the bridge diagnostics and the runtime
config in parallel and publishes a new :class:`Snapshot`.  At most one
cycle is in flight at a time.  Results that arrive after :meth:`stop`, or
after a newer cycle already published, are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Protocol

from pybifrost.config import BifrostConfig
from pybifrost.models.bridge import BridgeInfo
from pybifrost.models.payload import UiPayload
from pybifrost.models.runtime import RuntimeConfig
from pybifrost.state.policy import poll_interval
from pybifrost.state.snapshot import Snapshot

_logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    """The three read endpoints a cycle needs; :class:`BifrostClient` fits."""

    async def get_ui_payload(self) -> UiPayload: ...

    async def get_bridge_info(self) -> BridgeInfo: ...

    async def get_runtime_config(self) -> RuntimeConfig: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def describe_error(exc: BaseException) -> str:
    """Single human-readable line for an exception."""
    text = str(exc).strip()
    return text or type(exc).__name__


class PollingSynchronizer:
    """Periodic, visibility-aware snapshot poller.

    Usage::

        async with PollingSynchronizer(client, config, on_snapshot=render) as sync:
            sync.set_visible(False)
            await sync.refresh_now()
    """

    def __init__(
        self,
        source: SnapshotSource,
        config: BifrostConfig | None = None,
        *,
        on_snapshot: Callable[[Snapshot], None] | None = None,
        on_error: Callable[[str | None], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._config = config or BifrostConfig()
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._clock = clock

        self._snapshot = Snapshot()
        self._error: str | None = None
        self._loading = True
        self._visible = True

        self._running = False
        self._closed = False
        self._generation = 0
        self._seq = 0
        self._applied_seq = 0
        self._wake = asyncio.Event()
        self._loop_task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._followup: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def error(self) -> str | None:
        """Message of the last failed cycle, cleared by the next clean one."""
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def running(self) -> bool:
        return self._running

    @property
    def cycles_started(self) -> int:
        """Sequence number of the most recently launched cycle."""
        return self._seq

    @property
    def interval(self) -> float:
        return poll_interval(self._visible, self._config)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PollingSynchronizer:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()

    def start(self) -> None:
        """Begin polling; the first cycle runs immediately."""
        if self._running:
            return
        self._running = True
        self._closed = False
        # A fetch left over from before a stop() is ignored, not waited on.
        self._inflight = None
        self._wake.clear()
        self._loop_task = asyncio.get_running_loop().create_task(self._poll_loop())
        _logger.debug("Synchronizer started (interval=%.1fs)", self.interval)

    def stop(self) -> None:
        """Stop polling.

        Pending timers are cancelled.  Fetches already on the wire are left to
        finish but their results are ignored.
        """
        self._running = False
        self._closed = True
        self._generation += 1
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
        if self._followup is not None:
            self._followup.cancel()
            self._followup = None
        _logger.debug("Synchronizer stopped")

    def set_visible(self, visible: bool) -> None:
        """Report dashboard visibility; a change re-evaluates the interval now."""
        if visible == self._visible:
            return
        self._visible = visible
        _logger.debug("Visibility changed to %s (interval=%.1fs)", visible, self.interval)
        if self._running:
            self._wake.set()

    async def refresh_now(self) -> None:
        """Run a cycle outside the periodic schedule and wait for it.

        If a cycle is already in flight, a single follow-up cycle is chained
        after it so the result reflects everything written before this call.
        The periodic schedule keeps its phase.
        """
        if self._closed:
            return
        inflight = self._inflight
        if inflight is None:
            task = self._launch()
        else:
            if self._followup is None:
                self._followup = asyncio.get_running_loop().create_task(self._chain_after(inflight))
            task = self._followup
        await asyncio.wait({task})

    # ------------------------------------------------------------------
    # Cycle scheduling
    # ------------------------------------------------------------------

    async def _poll_loop(self) -> None:
        while self._running:
            self._wake.clear()
            await self._tick()
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)
            except TimeoutError:
                pass

    async def _tick(self) -> None:
        # Piggy-back on a cycle that is already running.
        task = self._inflight or self._launch()
        await asyncio.wait({task})

    async def _chain_after(self, previous: asyncio.Task[None]) -> None:
        await asyncio.wait({previous})
        self._followup = None
        if self._closed:
            return
        # A cycle started after `previous` finished already sees the writes.
        task = self._inflight or self._launch()
        await asyncio.wait({task})

    def _launch(self) -> asyncio.Task[None]:
        self._seq += 1
        task = asyncio.get_running_loop().create_task(self._run_cycle(self._seq, self._generation))
        self._inflight = task
        task.add_done_callback(self._cycle_done)
        return task

    def _cycle_done(self, task: asyncio.Task[None]) -> None:
        if self._inflight is task:
            self._inflight = None

    # ------------------------------------------------------------------
    # One cycle
    # ------------------------------------------------------------------

    async def _run_cycle(self, seq: int, generation: int) -> None:
        results = await asyncio.gather(
            self._source.get_ui_payload(),
            self._source.get_bridge_info(),
            self._source.get_runtime_config(),
            return_exceptions=True,
        )
        if self._closed or generation != self._generation:
            _logger.debug("Discarding cycle %d resolved after stop", seq)
            return
        if seq <= self._applied_seq:
            _logger.debug("Discarding superseded cycle %d (applied=%d)", seq, self._applied_seq)
            return
        self._apply(seq, results)

    def _apply(self, seq: int, results: list[Any]) -> None:
        payload, bridge, runtime = results
        failures = [item for item in results if isinstance(item, BaseException)]

        message: str | None = None
        if failures:
            message = "; ".join(dict.fromkeys(describe_error(exc) for exc in failures))
            _logger.warning("Poll cycle %d failed: %s", seq, message)

        self._applied_seq = seq
        self._loading = False

        strict = self._config.require_complete_snapshot
        if failures and (strict or len(failures) == len(results)):
            self._set_error(message)
            return

        previous = self._snapshot
        snapshot = Snapshot(
            version=previous.version + 1,
            cycle=seq,
            fetched_at=self._clock(),
            payload=previous.payload if isinstance(payload, BaseException) else payload,
            bridge=previous.bridge if isinstance(bridge, BaseException) else bridge,
            runtime=previous.runtime if isinstance(runtime, BaseException) else runtime,
        )
        self._snapshot = snapshot
        _logger.debug("Published snapshot v%d (%d entities)", snapshot.version, len(snapshot.entities))
        if self._on_snapshot is not None:
            try:
                self._on_snapshot(snapshot)
            except Exception:
                _logger.debug("on_snapshot callback failed", exc_info=True)
        self._set_error(message)

    def _set_error(self, message: str | None) -> None:
        if message == self._error:
            return
        self._error = message
        if self._on_error is not None:
            try:
                self._on_error(message)
            except Exception:
                _logger.debug("on_error callback failed", exc_info=True)
