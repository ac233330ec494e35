"""Transient, auto-expiring user notifications."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

_logger = logging.getLogger(__name__)


class NotificationTone(StrEnum):
    NEUTRAL = "neutral"
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    message: str
    tone: NotificationTone = NotificationTone.NEUTRAL


class NotificationCenter:
    """Newest-first list of notifications.

    At most ``limit`` entries are kept; each one removes itself ``ttl``
    seconds after it was pushed.  ``on_change`` receives the new list after
    every push or expiry.
    """

    def __init__(
        self,
        *,
        ttl: float = 2.5,
        limit: int = 4,
        on_change: Callable[[tuple[Notification, ...]], None] | None = None,
    ) -> None:
        self._ttl = ttl
        self._limit = limit
        self._on_change = on_change
        self._ids = itertools.count(1)
        self._items: list[Notification] = []
        self._timers: dict[int, asyncio.TimerHandle] = {}

    @property
    def items(self) -> tuple[Notification, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def push(self, message: str, tone: NotificationTone = NotificationTone.NEUTRAL) -> Notification:
        notification = Notification(id=next(self._ids), message=message, tone=NotificationTone(tone))
        self._items.insert(0, notification)
        for dropped in self._items[self._limit :]:
            self._cancel_timer(dropped.id)
        del self._items[self._limit :]
        self._timers[notification.id] = asyncio.get_running_loop().call_later(
            self._ttl, self.dismiss, notification.id
        )
        self._changed()
        return notification

    def dismiss(self, notification_id: int) -> None:
        self._cancel_timer(notification_id)
        before = len(self._items)
        self._items = [item for item in self._items if item.id != notification_id]
        if len(self._items) != before:
            self._changed()

    def close(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._items.clear()

    def _cancel_timer(self, notification_id: int) -> None:
        handle = self._timers.pop(notification_id, None)
        if handle is not None:
            handle.cancel()

    def _changed(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.items)
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)
