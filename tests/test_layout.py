"""Tests for the layout descriptors and placement maths."""

import dataclasses
import math

import pytest

from enclosures import config
from enclosures.layout import (
    LayoutError, check_fastener, check_stack, hold_down_length, plusmin_points,
    repeat2_points, repeat4_points, screw_span, stack_layout,
)

NOMINAL = [
    (config.BATTERY_CASE, config.BATTERY_CASE_STACK, config.BATTERY_CASE_FASTENER),
    (config.PROTO_CASE, config.PROTO_CASE_STACK, config.PROTO_CASE_FASTENER),
    (config.DISPLAY_CASE, config.DISPLAY_CASE_STACK, config.DISPLAY_CASE_FASTENER),
]


@pytest.mark.parametrize("case", [c for c, _, _ in NOMINAL])
def test_outer_is_inner_plus_two_walls(case):
    for inner, outer in zip(case.inner_size, case.outer_size):
        assert outer == pytest.approx(inner + 2 * case.wall)


def test_outer_size_components(small_case):
    assert small_case.outer_size == pytest.approx((44.0, 64.0, 22.0))
    assert small_case.outer_width == pytest.approx(44.0)
    assert small_case.outer_depth == pytest.approx(64.0)
    assert small_case.outer_height == pytest.approx(22.0)


def test_fillet_radii(small_case):
    assert small_case.fillet_r == pytest.approx(3.0)
    assert small_case.inner_fillet_r == pytest.approx(1.0)
    sharp = dataclasses.replace(small_case, rounding=0.5)
    assert sharp.inner_fillet_r == 0.0


def test_mirror_x(small_case):
    assert small_case.mirror_x(0) == pytest.approx(44.0)
    assert small_case.mirror_x(small_case.outer_width / 2) == pytest.approx(22.0)


def test_repeat4_points_exact():
    assert repeat4_points(7.0, 3.0) == [(0, 0), (7.0, 0), (7.0, 3.0), (0, 3.0)]


def test_repeat2_and_plusmin_points():
    assert repeat2_points(5, 2) == [(0, 0), (5, 2)]
    assert plusmin_points(4) == [(4, 0), (-4, 0)]
    assert plusmin_points(1, -2) == [(1, -2), (-1, 2)]


def test_pcb_holes_mirror_insets(board):
    assert board.holes() == [(3.0, 2.5), (27.0, 2.5), (27.0, 17.5), (3.0, 17.5)]


def test_stack_layout_running_sum():
    stack = stack_layout([("a", 10.0), ("b", 2.5), ("c", 7.5)])
    starts = [s.start for s in stack]
    assert starts == [0.0, 10.0, 12.5]
    assert stack.total == pytest.approx(20.0)
    assert stack.segment("b").end == pytest.approx(12.5)
    assert stack.center("c") == pytest.approx(16.25)
    assert len(stack) == 3


def test_stack_unknown_segment():
    stack = stack_layout([("a", 1.0)])
    with pytest.raises(KeyError):
        stack.segment("missing")


def test_stack_rejects_duplicates_and_negative_extents():
    with pytest.raises(LayoutError, match="duplicate"):
        stack_layout([("a", 1.0), ("a", 2.0)])
    with pytest.raises(LayoutError, match="negative"):
        stack_layout([("a", -1.0)])


@pytest.mark.parametrize("case, stack, _fastener", NOMINAL)
def test_nominal_stacks_fill_inner_depth(case, stack, _fastener):
    assert check_stack(case, stack) is stack
    segments = list(stack)
    for prev, nxt in zip(segments, segments[1:]):
        assert nxt.start == pytest.approx(prev.end)
    assert segments[-1].end == pytest.approx(case.inner_depth)


def test_check_stack_reports_gap_and_overlap(small_case, small_stack):
    check_stack(small_case, small_stack)

    longer = dataclasses.replace(small_case, inner_depth=61.0)
    with pytest.raises(LayoutError, match="gap of 1.000"):
        check_stack(longer, small_stack)

    shorter = dataclasses.replace(small_case, inner_depth=59.5)
    with pytest.raises(LayoutError, match="overlap of 0.500"):
        check_stack(shorter, small_stack)


def test_fastener_derived_sizes(m3):
    assert m3.nut_corner_d == pytest.approx(5.5 / math.cos(math.radians(30)))
    assert m3.nut_recess == pytest.approx(3.4)


def test_screw_span(small_case, m3):
    assert screw_span(small_case, m3) == pytest.approx((18.0, 19.0))


@pytest.mark.parametrize("case, _stack, fastener", NOMINAL)
def test_nominal_fasteners_fit(case, _stack, fastener):
    assert check_fastener(case, fastener) is fastener


def test_check_fastener_too_short_and_too_long(small_case, m3):
    with pytest.raises(LayoutError, match="does not reach"):
        check_fastener(small_case, dataclasses.replace(m3, length=16.0))
    with pytest.raises(LayoutError, match="protrudes"):
        check_fastener(small_case, dataclasses.replace(m3, length=20.0))


def test_hold_down_length(small_case):
    assert hold_down_length(small_case, 5.0) == pytest.approx(13.0)


def test_hardware_list_matches_screw_rows():
    hardware = config.get_hardware_list()
    assert hardware["battery_case"] == ("M3x30", 6)
    assert hardware["proto_board_case"] == ("M3x25", 4)
    assert hardware["display_case"] == ("M3x16", 4)
    for screw, _ in hardware.values():
        assert screw in config.FASTENERS
