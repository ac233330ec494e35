"""Per-key debounce buffer for bursty edits.

Each key holds at most one pending edit.  Scheduling the same key again
replaces the value and restarts the quiescence window, so when the window
finally elapses the commit callback runs exactly once with the last value.
Commits for the same key run strictly in order; different keys are
independent.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any

_logger = logging.getLogger(__name__)

CommitFn = Callable[[Any], Awaitable[Any] | Any]


@dataclass(slots=True)
class PendingEdit:
    """A value waiting for its quiescence window to elapse."""

    value: Any
    commit: CommitFn
    handle: asyncio.TimerHandle


class MutationCoalescer:
    """Keyed debouncer with last-write-wins semantics.

    Must be used from within a running event loop.
    """

    def __init__(self, window: float = 0.35) -> None:
        if window < 0:
            raise ValueError("window must be >= 0")
        self._window = window
        self._pending: dict[Hashable, PendingEdit] = {}
        self._commits: dict[Hashable, asyncio.Task[None]] = {}
        self._closed = False

    @property
    def window(self) -> float:
        return self._window

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def pending_keys(self) -> list[Hashable]:
        return list(self._pending)

    def pending_value(self, key: Hashable, default: Any = None) -> Any:
        edit = self._pending.get(key)
        return edit.value if edit is not None else default

    def schedule(self, key: Hashable, value: Any, commit: CommitFn) -> None:
        """Arm (or re-arm) the timer for *key* with *value*."""
        if self._closed:
            _logger.debug("Coalescer closed; dropping edit for %r", key)
            return
        previous = self._pending.pop(key, None)
        if previous is not None:
            previous.handle.cancel()
        handle = asyncio.get_running_loop().call_later(self._window, self._fire, key)
        self._pending[key] = PendingEdit(value=value, commit=commit, handle=handle)

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending edit for *key*; returns whether one existed."""
        edit = self._pending.pop(key, None)
        if edit is None:
            return False
        edit.handle.cancel()
        return True

    def close(self) -> None:
        """Cancel every pending timer; commits already running are left alone."""
        self._closed = True
        for edit in self._pending.values():
            edit.handle.cancel()
        if self._pending:
            _logger.debug("Coalescer closed with %d pending edit(s) dropped", len(self._pending))
        self._pending.clear()

    async def join(self) -> None:
        """Wait until every commit that has started has finished."""
        while self._commits:
            await asyncio.wait(set(self._commits.values()))

    def _fire(self, key: Hashable) -> None:
        edit = self._pending.pop(key, None)
        if edit is None:
            return
        previous = self._commits.get(key)
        task = asyncio.get_running_loop().create_task(self._run_commit(key, edit, previous))
        self._commits[key] = task
        task.add_done_callback(lambda done: self._commit_done(key, done))

    def _commit_done(self, key: Hashable, task: asyncio.Task[None]) -> None:
        if self._commits.get(key) is task:
            del self._commits[key]

    async def _run_commit(self, key: Hashable, edit: PendingEdit, previous: asyncio.Task[None] | None) -> None:
        if previous is not None:
            await asyncio.wait({previous})
        try:
            result = edit.commit(edit.value)
            if inspect.isawaitable(result):
                await result
        except Exception:
            _logger.warning("Commit for %r failed", key, exc_info=True)
