from __future__ import annotations

import pytest

from pybifrost.view.virtualizer import Virtualizer


def test_total_size_uses_estimate_until_measured() -> None:
    virt = Virtualizer(10, estimate_size=100.0, overscan=0, viewport_height=250.0)
    assert virt.total_size == 1000.0

    virt.measure(3, 140.0)
    assert virt.total_size == 1040.0
    assert virt.size_of(3) == 140.0
    assert virt.is_measured(3)
    assert not virt.is_measured(4)


def test_visible_range_and_overscan() -> None:
    virt = Virtualizer(100, estimate_size=100.0, overscan=2, viewport_height=250.0)
    virt.scroll_to(1000.0)

    assert virt.visible_range() == range(10, 13)
    assert virt.render_range() == range(8, 15)

    items = virt.virtual_items()
    assert [item.index for item in items] == list(range(8, 15))
    assert items[0].start == 800.0
    assert items[0].end == 900.0


def test_overscan_is_clamped_at_edges() -> None:
    virt = Virtualizer(5, estimate_size=100.0, overscan=8, viewport_height=200.0)
    assert virt.render_range() == range(0, 5)


def test_rendered_count_is_bounded_by_viewport() -> None:
    virt = Virtualizer(10_000, estimate_size=50.0, overscan=8, viewport_height=500.0)
    virt.scroll_to(200_000.0)
    assert len(virt.virtual_items()) <= 500 // 50 + 1 + 2 * 8


def test_measuring_item_above_viewport_compensates_scroll() -> None:
    virt = Virtualizer(50, estimate_size=100.0, overscan=0, viewport_height=300.0)
    virt.scroll_to(1000.0)
    first_visible = virt.visible_range().start
    start_before = virt.start_of(first_visible) - virt.scroll_offset

    adjustment = virt.measure(2, 160.0)

    assert adjustment == 60.0
    assert virt.scroll_offset == 1060.0
    # The row at the top of the viewport did not move on screen.
    assert virt.start_of(first_visible) - virt.scroll_offset == start_before


def test_measuring_item_inside_viewport_does_not_scroll() -> None:
    virt = Virtualizer(50, estimate_size=100.0, overscan=0, viewport_height=300.0)
    virt.scroll_to(1000.0)

    assert virt.measure(11, 180.0) == 0.0
    assert virt.scroll_offset == 1000.0


def test_measurements_follow_keys_not_positions() -> None:
    virt = Virtualizer(estimate_size=100.0)
    virt.set_keys(["a", "b", "c"])
    virt.measure(0, 250.0)

    virt.set_keys(["c", "b", "a"])
    assert virt.size_of(2) == 250.0
    assert virt.size_of(0) == 100.0


def test_measured_size_never_reverts_to_estimate() -> None:
    virt = Virtualizer(estimate_size=100.0)
    virt.set_keys(["a", "b"])
    virt.measure(1, 40.0)
    measured_total = virt.total_size

    virt.set_keys(["a"])
    virt.set_keys(["a", "b"])
    assert virt.size_of(1) == 40.0
    assert virt.total_size == measured_total


def test_scroll_is_clamped() -> None:
    virt = Virtualizer(10, estimate_size=100.0, viewport_height=300.0)
    assert virt.scroll_to(-50.0) == 0.0
    assert virt.scroll_to(10_000.0) == 700.0
    assert virt.scroll_to_index(3) == 300.0


def test_empty_list() -> None:
    virt = Virtualizer(0, viewport_height=300.0)
    assert virt.total_size == 0.0
    assert virt.virtual_items() == []


def test_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        Virtualizer(estimate_size=0)
    with pytest.raises(ValueError):
        Virtualizer(overscan=-1)
    virt = Virtualizer(1)
    with pytest.raises(ValueError):
        virt.measure(0, -1.0)
    with pytest.raises(IndexError):
        virt.start_of(5)


def _assert_offset_in_bounds(virt: Virtualizer) -> None:
    assert 0.0 <= virt.scroll_offset <= max(0.0, virt.total_size - virt.viewport_height)


def test_shrinking_list_pulls_scroll_back_into_range() -> None:
    virt = Virtualizer(estimate_size=100.0, overscan=0, viewport_height=400.0)
    virt.set_keys([f"light.{i}" for i in range(100)])
    virt.scroll_to(5000.0)

    virt.set_keys([f"light.{i}" for i in range(10)])

    _assert_offset_in_bounds(virt)
    assert virt.scroll_offset == 600.0
    assert len(virt.visible_range()) == 4

    virt.set_count(2)
    _assert_offset_in_bounds(virt)
    assert virt.scroll_offset == 0.0


def test_shrinking_row_across_top_edge_keeps_offset_at_row_start() -> None:
    virt = Virtualizer(20, estimate_size=190.0, overscan=0, viewport_height=400.0)
    virt.scroll_to(50.0)

    adjustment = virt.measure(0, 10.0)

    assert adjustment == -50.0
    assert virt.scroll_offset == 0.0
    _assert_offset_in_bounds(virt)


def test_growing_row_across_top_edge_compensates_fully() -> None:
    virt = Virtualizer(20, estimate_size=100.0, overscan=0, viewport_height=300.0)
    virt.scroll_to(150.0)

    assert virt.measure(1, 180.0) == 80.0
    assert virt.scroll_offset == 230.0
    _assert_offset_in_bounds(virt)


def test_viewport_growth_reclamps_scroll() -> None:
    virt = Virtualizer(10, estimate_size=100.0, viewport_height=300.0)
    virt.scroll_to(700.0)

    virt.set_viewport_height(900.0)

    assert virt.scroll_offset == 100.0
    _assert_offset_in_bounds(virt)


def test_prune_measurements_drops_only_missing_keys() -> None:
    virt = Virtualizer(estimate_size=100.0)
    virt.set_keys(["a", "b", "c"])
    virt.measure(0, 40.0)
    virt.measure(2, 60.0)

    virt.set_keys(["a", "b"])
    assert virt.prune_measurements() == 1

    virt.set_keys(["a", "b", "c"])
    assert virt.size_of(0) == 40.0
    assert not virt.is_measured(2)
