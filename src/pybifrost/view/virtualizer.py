"""Windowed rendering for long, variable-height lists.

Only the rows intersecting the viewport (plus ``overscan`` rows on each
side) are handed to the renderer.  Row heights start as an estimate and are
replaced by the measured height once a row has been rendered.  A measured
height is never replaced by the estimate again, so the size table only ever
gains information.

Measurements are keyed by item key rather than by position, so a row keeps
its measured height when filtering or sorting moves it.  When a row above
the viewport changes height the scroll offset moves by the same amount and
the visible rows stay put.
"""

from __future__ import annotations

import bisect
import itertools
import logging
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VirtualItem:
    index: int
    key: Hashable
    start: float
    size: float
    measured: bool

    @property
    def end(self) -> float:
        return self.start + self.size


class Virtualizer:
    """Size table and visible-window computation for one scrolling list.

    Usage::

        virt = Virtualizer(estimate_size=190.0, overscan=8, viewport_height=600)
        virt.set_keys([e.entity_id for e in rows])
        for item in virt.virtual_items():
            height = render(rows[item.index], top=item.start)
            virt.measure(item.index, height)
    """

    def __init__(
        self,
        count: int = 0,
        *,
        estimate_size: float = 190.0,
        overscan: int = 8,
        viewport_height: float = 0.0,
    ) -> None:
        if estimate_size <= 0:
            raise ValueError("estimate_size must be > 0")
        if overscan < 0:
            raise ValueError("overscan must be >= 0")
        self._estimate = float(estimate_size)
        self._overscan = overscan
        self._viewport = max(0.0, float(viewport_height))
        self._keys: list[Hashable] = list(range(count))
        self._measured: dict[Hashable, float] = {}
        self._scroll_offset = 0.0
        self._ends: list[float] | None = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._keys)

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def viewport_height(self) -> float:
        return self._viewport

    def set_count(self, count: int) -> None:
        """Use positional keys ``0..count-1``."""
        if count < 0:
            raise ValueError("count must be >= 0")
        self._keys = list(range(count))
        self._invalidate()
        self._scroll_offset = self._clamp(self._scroll_offset)

    def set_keys(self, keys: Sequence[Hashable]) -> None:
        """Use the given item keys, in display order."""
        self._keys = list(keys)
        self._invalidate()
        self._scroll_offset = self._clamp(self._scroll_offset)

    def prune_measurements(self) -> int:
        """Forget measured sizes of keys no longer in the list.

        Measurements of filtered-out rows are kept by default so a row that
        comes back does not fall back to the estimate.  Returns the number
        of sizes dropped.
        """
        current = set(self._keys)
        stale = [key for key in self._measured if key not in current]
        for key in stale:
            del self._measured[key]
        return len(stale)

    def set_viewport_height(self, height: float) -> None:
        self._viewport = max(0.0, float(height))
        self._scroll_offset = self._clamp(self._scroll_offset)

    def scroll_to(self, offset: float) -> float:
        self._scroll_offset = self._clamp(offset)
        return self._scroll_offset

    def scroll_to_index(self, index: int) -> float:
        """Scroll so item *index* starts at the top of the viewport."""
        return self.scroll_to(self.start_of(index))

    def measure(self, index: int, size: float) -> float:
        """Record the rendered height of item *index*.

        Returns the scroll adjustment applied (non-zero only when the item
        lies above the viewport and its height changed).
        """
        if size < 0:
            raise ValueError("size must be >= 0")
        start = self.start_of(index)
        key = self._keys[index]
        previous = self.size_of(index)
        self._measured[key] = float(size)
        delta = float(size) - previous
        if delta == 0:
            return 0.0
        self._invalidate()
        if start >= self._scroll_offset:
            return 0.0
        if start + previous > self._scroll_offset:
            # Straddles the top edge: the offset never moves above the row start.
            delta = max(delta, start - self._scroll_offset)
        before = self._scroll_offset
        self._scroll_offset = self._clamp(before + delta)
        _logger.debug("Item %r above viewport resized by %.1f; scroll compensated", key, delta)
        return self._scroll_offset - before

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def is_measured(self, index: int) -> bool:
        return self._keys[index] in self._measured

    def size_of(self, index: int) -> float:
        return self._measured.get(self._keys[index], self._estimate)

    def start_of(self, index: int) -> float:
        if not 0 <= index < len(self._keys):
            raise IndexError(index)
        return self._ends_table()[index] - self.size_of(index)

    @property
    def total_size(self) -> float:
        ends = self._ends_table()
        return ends[-1] if ends else 0.0

    def visible_range(self) -> range:
        """Indexes of items intersecting the viewport, without overscan."""
        ends = self._ends_table()
        if not ends:
            return range(0)
        top = self._scroll_offset
        bottom = top + self._viewport
        first = min(bisect.bisect_right(ends, top), len(ends) - 1)
        last = first
        while last + 1 < len(ends) and ends[last] < bottom:
            last += 1
        return range(first, last + 1)

    def render_range(self) -> range:
        """Visible range widened by ``overscan`` on both sides."""
        visible = self.visible_range()
        if not visible:
            return visible
        return range(
            max(0, visible.start - self._overscan),
            min(self.count, visible.stop + self._overscan),
        )

    def virtual_items(self) -> list[VirtualItem]:
        return [
            VirtualItem(
                index=index,
                key=self._keys[index],
                start=self.start_of(index),
                size=self.size_of(index),
                measured=self.is_measured(index),
            )
            for index in self.render_range()
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._ends = None

    def _ends_table(self) -> list[float]:
        if self._ends is None:
            sizes = (self._measured.get(key, self._estimate) for key in self._keys)
            self._ends = list(itertools.accumulate(sizes))
        return self._ends

    def _clamp(self, offset: float) -> float:
        upper = max(0.0, self.total_size - self._viewport)
        return min(max(0.0, float(offset)), upper)
