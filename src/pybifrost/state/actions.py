"""Optimistic action runner: do, then resynchronise.

Every user-triggered remote call goes through :meth:`ActionRunner.run`.
The runner tracks which labels are busy, turns the outcome into a
notification, and always asks for a fresh snapshot afterwards, whether the
action succeeded or not.  Failures are reported once and never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pybifrost.state.notifications import NotificationCenter, NotificationTone
from pybifrost.state.synchronizer import describe_error

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    label: str
    ok: bool
    skipped: bool = False
    error: str | None = None


class ActionRunner:
    def __init__(
        self,
        refresh: Callable[[], Awaitable[None]] | None = None,
        notifications: NotificationCenter | None = None,
        *,
        on_busy_change: Callable[[frozenset[str]], None] | None = None,
    ) -> None:
        self._refresh = refresh
        self._notifications = notifications
        self._on_busy_change = on_busy_change
        self._busy: set[str] = set()

    @property
    def busy(self) -> frozenset[str]:
        return frozenset(self._busy)

    def is_busy(self, label: str | None = None) -> bool:
        """Whether *label* (or, without a label, any action) is in flight."""
        if label is None:
            return bool(self._busy)
        return label in self._busy

    async def run(
        self,
        label: str,
        action: Callable[[], Awaitable[Any]],
        success_message: str | None = None,
    ) -> ActionResult:
        """Run *action* under *label*.

        Parameters
        ----------
        label : str
            Busy key; a second call with a label that is still busy is
            skipped without running its action.
        action : Callable[[], Awaitable[Any]]
            Zero-argument coroutine function doing the remote call(s).
        success_message : str or None
            Notification shown on success (none when omitted).

        Returns
        -------
        ActionResult
            The outcome.  This never raises for failures of *action*.
        """
        if label in self._busy:
            _logger.debug("Action %s already running; skipped", label)
            return ActionResult(label=label, ok=False, skipped=True)

        self._set_busy(label, True)
        try:
            await action()
        except Exception as exc:
            message = describe_error(exc)
            _logger.warning("Action %s failed: %s", label, message)
            self._notify(message, NotificationTone.BAD)
            result = ActionResult(label=label, ok=False, error=message)
        else:
            _logger.debug("Action %s succeeded", label)
            if success_message:
                self._notify(success_message, NotificationTone.GOOD)
            result = ActionResult(label=label, ok=True)
        finally:
            self._set_busy(label, False)

        if self._refresh is not None:
            try:
                await self._refresh()
            except Exception:
                _logger.warning("Refresh after action %s failed", label, exc_info=True)
        return result

    def _notify(self, message: str, tone: NotificationTone) -> None:
        if self._notifications is not None:
            self._notifications.push(message, tone)

    def _set_busy(self, label: str, busy: bool) -> None:
        if busy:
            self._busy.add(label)
        else:
            self._busy.discard(label)
        if self._on_busy_change is not None:
            try:
                self._on_busy_change(self.busy)
            except Exception:
                _logger.debug("on_busy_change callback failed", exc_info=True)
