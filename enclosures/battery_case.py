"""
Electronics Enclosures - Battery Case
Single 18650 cell in a tray, TP4056 charger held by corner brackets,
slide switch clamped in a rim notch, and a 3x4cm prototyping board on
pinned standoffs. Everything is stacked along the case's long axis.
Material: PETG
"""

from .case import case_bottom, case_top, component_origin, rim_notch, segment_center_y
from .config import (
    BATTERY_CASE, BATTERY_CASE_FASTENER, BATTERY_CASE_STACK, BATTERY_CASE_SCREW_ROWS,
    BATTERY_HOLDER, TRAY_WALL, TRAY_CLEARANCE, TRAY_HEIGHT,
    CHARGER, CHARGER_USB_CUT, CHARGER_USB_R,
    SWITCH_BODY, SWITCH_NOTCH_BOTTOM, SWITCH_NOTCH_TOP,
    SMALL_PROTO_PCB, SMALL_PROTO_STANDOFF, PCB_CLEARANCE,
    HOLDER_WALL, HOLDER_CLEARANCE, HOLDER_ARM, HOLDER_HEIGHT,
    HOLD_DOWN_D, PIN_HEIGHT, PIN_CLEARANCE, FIT_CLEARANCE,
)
from .layout import hold_down_length, plusmin_points
from .shapes import corner_holders, hold_downs, pcb_mount, tray, wall_cutter
from .utils import export_stl, validate_print_bounds

CASE = BATTERY_CASE
STACK = BATTERY_CASE_STACK
ROWS = BATTERY_CASE_SCREW_ROWS

BATTERY_HOLD_DOWN_SPACING = 20.0   # Hold-downs sit this far either side of the cell's centre


def _tray_size():
    return (
        BATTERY_HOLDER[1] + 2 * (TRAY_CLEARANCE + TRAY_WALL),
        BATTERY_HOLDER[0] + 2 * (TRAY_CLEARANCE + TRAY_WALL),
    )


def _charger_span():
    return CHARGER.width + 2 * (HOLDER_CLEARANCE + HOLDER_WALL)


def _pcb_origin():
    x, y = component_origin(CASE, STACK, "pcb", SMALL_PROTO_PCB.width + 2 * PCB_CLEARANCE)
    return x + PCB_CLEARANCE, y + PCB_CLEARANCE


def _switch_notch(depth, rim, side):
    length = SWITCH_BODY[0] + 2 * FIT_CLEARANCE
    y = segment_center_y(CASE, STACK, "switch") - length / 2
    return rim_notch(CASE, y, length, depth, rim, side=side)


def create_bottom():
    print("Building Battery Case Bottom...", flush=True)

    wall = CASE.wall
    rim = wall + CASE.bottom_height
    shell = case_bottom(CASE, STACK, BATTERY_CASE_FASTENER, ROWS)

    # === Step 1: Battery tray ===
    tray_w, _ = _tray_size()
    x, y = component_origin(CASE, STACK, "battery", tray_w)
    bay = tray(
        (BATTERY_HOLDER[1] + 2 * TRAY_CLEARANCE, BATTERY_HOLDER[0] + 2 * TRAY_CLEARANCE),
        TRAY_WALL, TRAY_HEIGHT,
    )
    shell = shell.union(bay.translate((x, y, wall)))
    print("  Battery tray done", flush=True)

    # === Step 2: Charger holders and USB cutout in the front wall ===
    span = _charger_span()
    x, y = component_origin(CASE, STACK, "charger", span)
    holders = corner_holders(CHARGER.size, HOLDER_CLEARANCE, HOLDER_WALL, HOLDER_ARM, HOLDER_HEIGHT)
    shell = shell.union(holders.translate((x, y, wall)))

    usb_w, usb_h = CHARGER_USB_CUT
    usb = wall_cutter(CHARGER_USB_CUT, CHARGER_USB_R, wall + 2, axis="y")
    usb_z = wall + CHARGER.thickness - 0.5
    shell = shell.cut(usb.translate((x + span / 2 - usb_w / 2, -1, usb_z)))
    print("  Charger holders done", flush=True)

    # === Step 3: Switch notch in the left wall ===
    shell = shell.cut(_switch_notch(SWITCH_NOTCH_BOTTOM, rim, "left"))

    # === Step 4: PCB standoffs ===
    x, y = _pcb_origin()
    shell = shell.union(pcb_mount(SMALL_PROTO_PCB, SMALL_PROTO_STANDOFF).translate((x, y, wall)))
    print("  PCB standoffs done", flush=True)

    return shell


def create_top():
    print("Building Battery Case Top...", flush=True)

    wall = CASE.wall
    rim = wall + CASE.top_height
    shell = case_top(CASE, STACK, BATTERY_CASE_FASTENER, ROWS)

    # === Step 1: Switch notch, on the right once flipped ===
    shell = shell.cut(_switch_notch(SWITCH_NOTCH_TOP, rim, "right"))

    # === Step 2: Hold-downs on the battery holder ===
    cx = CASE.mirror_x(CASE.outer_width / 2)
    cy = segment_center_y(CASE, STACK, "battery")
    points = [(cx + dx, cy + dy) for dx, dy in plusmin_points(0, BATTERY_HOLD_DOWN_SPACING)]
    length = hold_down_length(CASE, BATTERY_HOLDER[2])
    shell = shell.union(hold_downs(points, HOLD_DOWN_D / 2, length).translate((0, 0, wall)))

    # === Step 3: Hold-downs on the PCB, socketed over the locating pins ===
    x, y = _pcb_origin()
    x = CASE.mirror_x(x + SMALL_PROTO_PCB.width)
    points = [(x + hx, y + hy) for hx, hy in SMALL_PROTO_PCB.holes()]
    length = hold_down_length(CASE, SMALL_PROTO_STANDOFF + SMALL_PROTO_PCB.thickness)
    socket = (SMALL_PROTO_PCB.hole_d / 2 - PIN_CLEARANCE + FIT_CLEARANCE, PIN_HEIGHT + 0.5)
    shell = shell.union(hold_downs(points, HOLD_DOWN_D / 2, length, socket=socket).translate((0, 0, wall)))
    print("  Hold-downs done", flush=True)

    return shell


if __name__ == "__main__":
    bottom = create_bottom()
    validate_print_bounds(bottom)
    export_stl(bottom, "battery_case_bottom.stl")
    top = create_top()
    validate_print_bounds(top)
    export_stl(top, "battery_case_top.stl")
    print("Battery case complete!")
