"""Build each enclosure and check its shells against the case descriptor."""

from importlib import import_module

import cadquery as cq
import pytest

from enclosures import config
from enclosures.case import screw_points, segment_center_y

PARTS = ["battery_case", "proto_board_case", "display_case"]


@pytest.fixture(scope="module")
def built():
    """Build each enclosure at most once per test module."""
    cache = {}

    def build(name):
        if name not in cache:
            module = import_module(f"enclosures.{name}")
            cache[name] = (module, module.create_bottom(), module.create_top())
        return cache[name]

    return build


@pytest.fixture(params=PARTS)
def part(request, built):
    return built(request.param)


def _bbox(shape):
    return shape.val().BoundingBox()


def _inside(shape, point):
    return shape.val().isInside(cq.Vector(*point))


def test_shells_are_valid_solids(part):
    _, bottom, top = part
    assert bottom.val().isValid()
    assert top.val().isValid()


def test_bottom_shell_extent(part):
    module, bottom, _ = part
    case = module.CASE
    bb = _bbox(bottom)
    assert (bb.xmin, bb.ymin, bb.zmin) == pytest.approx((0, 0, 0), abs=1e-2)
    assert bb.xlen == pytest.approx(case.outer_width, abs=1e-2)
    assert bb.ylen == pytest.approx(case.outer_depth, abs=1e-2)
    assert bb.zlen == pytest.approx(case.wall + case.bottom_height + config.LIP_HEIGHT, abs=1e-2)


def test_top_shell_extent(part):
    module, _, top = part
    case = module.CASE
    bb = _bbox(top)
    assert bb.xlen == pytest.approx(case.outer_width, abs=1e-2)
    assert bb.ylen == pytest.approx(case.outer_depth, abs=1e-2)
    # Hold-downs may stand past the rim
    assert bb.zlen >= case.wall + case.top_height - 1e-2


def test_shells_fit_the_printer(part):
    _, bottom, top = part
    for shell in (bottom, top):
        bb = _bbox(shell)
        assert bb.xlen <= config.MAX_X
        assert bb.ylen <= config.MAX_Y
        assert bb.zlen <= config.MAX_Z


def test_stack_matches_case(part):
    module, _, _ = part
    assert module.STACK.total == pytest.approx(module.CASE.inner_depth)


def test_screw_holes_pass_through_posts(part):
    module, bottom, top = part
    case = module.CASE
    points = screw_points(case, module.STACK, module.ROWS)
    beside = config.SCREW_POST_D / 4 + 1.0

    z = case.wall + case.bottom_height - 1
    for x, y in points:
        assert not _inside(bottom, (x, y, z))
        assert _inside(bottom, (x, y + beside, z))

    z = case.wall + case.top_height - 1
    for x, y in points:
        x = case.mirror_x(x)
        assert not _inside(top, (x, y, z))
        assert _inside(top, (x, y + beside, z))


def test_battery_charger_usb_cutout(built):
    module, bottom, _ = built("battery_case")
    case = module.CASE
    usb_w, usb_h = config.CHARGER_USB_CUT
    z = case.wall + config.CHARGER.thickness - 0.5 + usb_h / 2
    x = case.outer_width / 2
    y = case.wall / 2
    assert not _inside(bottom, (x, y, z))
    assert _inside(bottom, (x + usb_w / 2 + 2, y, z))
    assert _inside(bottom, (x - usb_w / 2 - 2, y, z))


def test_battery_switch_notches_on_opposite_walls(built):
    module, bottom, top = built("battery_case")
    case = module.CASE
    y = segment_center_y(case, module.STACK, "switch")
    left = 0.5
    right = case.outer_width - 0.5

    rim = case.wall + case.bottom_height
    assert not _inside(bottom, (left, y, rim - 2))
    assert _inside(bottom, (left, y, rim - config.SWITCH_NOTCH_BOTTOM - 2))
    assert _inside(bottom, (right, y, rim - 2))

    rim = case.wall + case.top_height
    assert not _inside(top, (right, y, rim - 1))
    assert _inside(top, (right, y, rim - config.SWITCH_NOTCH_TOP - 2))
    assert _inside(top, (left, y, rim - 1))


def test_proto_wire_slot_in_back_wall(built):
    module, bottom, _ = built("proto_board_case")
    case = module.CASE
    slot_w, slot_depth = config.PROTO_WIRE_SLOT
    rim = case.wall + case.bottom_height
    x = case.outer_width / 2
    y = case.outer_depth - 1
    assert not _inside(bottom, (x, y, rim - 3))
    assert _inside(bottom, (x - slot_w / 2 - 2, y, rim - 3))
    assert _inside(bottom, (x, y, rim - slot_depth - 2))


def test_display_window_through_ceiling(built):
    module, _, top = built("display_case")
    case = module.CASE
    _, oy = module._oled_origin()
    x = case.outer_width / 2
    y = oy + config.OLED.depth / 2 + config.OLED_WINDOW_OFFSET
    z = case.wall / 2
    assert not _inside(top, (x, y, z))
    assert _inside(top, (x, y + config.OLED_WINDOW[1] / 2 + 2, z))


def test_display_usb_cutout_in_back_wall(built):
    module, bottom, _ = built("display_case")
    case = module.CASE
    usb_w, usb_h = config.D1_MINI_USB_CUT
    x = case.outer_width / 2
    y = case.outer_depth - case.wall / 2
    z = case.wall + config.D1_MINI_USB_LIFT + usb_h / 2
    assert not _inside(bottom, (x, y, z))
    assert _inside(bottom, (x + usb_w / 2 + 2, y, z))
