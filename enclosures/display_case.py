"""
Electronics Enclosures - Display Case
0.96" SSD1306 OLED mounted face down behind a window in the top shell,
Wemos D1 mini held by corner brackets in the bottom with its USB port
reachable through the back wall.
Material: PETG Black
"""

from .case import case_bottom, case_top, component_origin
from .config import (
    DISPLAY_CASE, DISPLAY_CASE_FASTENER, DISPLAY_CASE_STACK, DISPLAY_CASE_SCREW_ROWS,
    OLED, OLED_STANDOFF, OLED_WINDOW, OLED_WINDOW_R, OLED_WINDOW_OFFSET,
    D1_MINI, D1_MINI_USB_CUT, D1_MINI_USB_R, D1_MINI_USB_LIFT,
    HOLDER_WALL, HOLDER_CLEARANCE, HOLDER_ARM, HOLDER_HEIGHT,
    HOLD_DOWN_D, PCB_CLEARANCE,
)
from .layout import hold_down_length, plusmin_points
from .shapes import corner_holders, hold_downs, pcb_mount, rounded_rect, wall_cutter
from .utils import export_stl, validate_print_bounds

CASE = DISPLAY_CASE
STACK = DISPLAY_CASE_STACK
ROWS = DISPLAY_CASE_SCREW_ROWS

MCU_HOLD_DOWN_INSET = 2.5   # From the board's side and front edges


def _mcu_span():
    return D1_MINI.width + 2 * (HOLDER_CLEARANCE + HOLDER_WALL)


def _oled_origin():
    x, y = component_origin(CASE, STACK, "display", OLED.width + 2 * PCB_CLEARANCE)
    return x + PCB_CLEARANCE, y + PCB_CLEARANCE


def create_bottom():
    print("Building Display Case Bottom...", flush=True)

    wall = CASE.wall
    shell = case_bottom(CASE, STACK, DISPLAY_CASE_FASTENER, ROWS)

    # === Step 1: Corner holders for the microcontroller ===
    span = _mcu_span()
    x, y = component_origin(CASE, STACK, "mcu", span)
    holders = corner_holders(D1_MINI.size, HOLDER_CLEARANCE, HOLDER_WALL, HOLDER_ARM, HOLDER_HEIGHT)
    shell = shell.union(holders.translate((x, y, wall)))
    print("  MCU holders done", flush=True)

    # === Step 2: USB cutout in the back wall ===
    usb_w, _ = D1_MINI_USB_CUT
    usb = wall_cutter(D1_MINI_USB_CUT, D1_MINI_USB_R, wall + 2, axis="y")
    shell = shell.cut(usb.translate((
        x + span / 2 - usb_w / 2,
        CASE.outer_depth - wall - 1,
        wall + D1_MINI_USB_LIFT,
    )))
    print("  USB cutout done", flush=True)

    return shell


def create_top():
    print("Building Display Case Top...", flush=True)

    wall = CASE.wall
    shell = case_top(CASE, STACK, DISPLAY_CASE_FASTENER, ROWS)

    # === Step 1: Display window through the ceiling ===
    x, y = _oled_origin()
    x = CASE.mirror_x(x + OLED.width)
    win_w, win_d = OLED_WINDOW
    win_x = x + OLED.width / 2 - win_w / 2
    win_y = y + OLED.depth / 2 + OLED_WINDOW_OFFSET - win_d / 2
    window = rounded_rect(OLED_WINDOW, OLED_WINDOW_R, wall + 2)
    shell = shell.cut(window.translate((win_x, win_y, -1)))
    print("  Window done", flush=True)

    # === Step 2: Pinned standoffs for the display ===
    shell = shell.union(pcb_mount(OLED, OLED_STANDOFF).translate((x, y, wall)))
    print("  Display standoffs done", flush=True)

    # === Step 3: Hold-downs on the microcontroller's front corners ===
    span = _mcu_span()
    mx, my = component_origin(CASE, STACK, "mcu", span)
    cx = CASE.mirror_x(mx + span / 2)
    py = my + HOLDER_WALL + HOLDER_CLEARANCE + MCU_HOLD_DOWN_INSET
    dx = D1_MINI.width / 2 - MCU_HOLD_DOWN_INSET
    points = [(cx + px, py) for px, _ in plusmin_points(dx)]
    length = hold_down_length(CASE, D1_MINI.thickness)
    shell = shell.union(hold_downs(points, HOLD_DOWN_D / 2, length).translate((0, 0, wall)))
    print("  Hold-downs done", flush=True)

    return shell


if __name__ == "__main__":
    bottom = create_bottom()
    validate_print_bounds(bottom)
    export_stl(bottom, "display_case_bottom.stl")
    top = create_top()
    validate_print_bounds(top)
    export_stl(top, "display_case_top.stl")
    print("Display case complete!")
