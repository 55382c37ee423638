"""
Electronics Enclosures - Prototyping Board Case
5x7cm perfboard on pinned standoffs, U-shaped wire slot in the back wall,
and socketed hold-downs in the top that clamp the board at its holes.
Material: PLA or PETG
"""

from .case import case_bottom, case_top, component_origin
from .config import (
    PROTO_CASE, PROTO_CASE_FASTENER, PROTO_CASE_STACK, PROTO_CASE_SCREW_ROWS,
    PROTO_PCB, PROTO_STANDOFF, PROTO_WIRE_SLOT, PCB_CLEARANCE,
    LIP_HEIGHT, HOLD_DOWN_D, PIN_HEIGHT, PIN_CLEARANCE, FIT_CLEARANCE,
)
from .layout import hold_down_length
from .shapes import hold_downs, pcb_mount, wall_cutter
from .utils import export_stl, validate_print_bounds

CASE = PROTO_CASE
STACK = PROTO_CASE_STACK
ROWS = PROTO_CASE_SCREW_ROWS


def _pcb_origin():
    x, y = component_origin(CASE, STACK, "pcb", PROTO_PCB.width + 2 * PCB_CLEARANCE)
    return x + PCB_CLEARANCE, y + PCB_CLEARANCE


def create_bottom():
    print("Building Proto Board Case Bottom...", flush=True)

    wall = CASE.wall
    rim = wall + CASE.bottom_height
    shell = case_bottom(CASE, STACK, PROTO_CASE_FASTENER, ROWS)

    # === Step 1: Pinned standoffs ===
    x, y = _pcb_origin()
    shell = shell.union(pcb_mount(PROTO_PCB, PROTO_STANDOFF).translate((x, y, wall)))
    print("  Standoffs done", flush=True)

    # === Step 2: Wire slot, open to the rim ===
    # Round-bottomed slot; the cutter runs past the lip so the slot is open at the top
    slot_w, slot_depth = PROTO_WIRE_SLOT
    slot = wall_cutter((slot_w, slot_depth + LIP_HEIGHT + 1), slot_w / 2, wall + 2, axis="y")
    shell = shell.cut(slot.translate((
        CASE.outer_width / 2 - slot_w / 2,
        CASE.outer_depth - wall - 1,
        rim - slot_depth,
    )))
    print("  Wire slot done", flush=True)

    return shell


def create_top():
    print("Building Proto Board Case Top...", flush=True)

    wall = CASE.wall
    shell = case_top(CASE, STACK, PROTO_CASE_FASTENER, ROWS)

    # === Step 1: Hold-downs over the mounting holes ===
    x, y = _pcb_origin()
    x = CASE.mirror_x(x + PROTO_PCB.width)
    points = [(x + hx, y + hy) for hx, hy in PROTO_PCB.holes()]
    length = hold_down_length(CASE, PROTO_STANDOFF + PROTO_PCB.thickness)
    socket = (PROTO_PCB.hole_d / 2 - PIN_CLEARANCE + FIT_CLEARANCE, PIN_HEIGHT + 0.5)
    shell = shell.union(hold_downs(points, HOLD_DOWN_D / 2, length, socket=socket).translate((0, 0, wall)))
    print("  Hold-downs done", flush=True)

    return shell


if __name__ == "__main__":
    bottom = create_bottom()
    validate_print_bounds(bottom)
    export_stl(bottom, "proto_board_case_bottom.stl")
    top = create_top()
    validate_print_bounds(top)
    export_stl(top, "proto_board_case_top.stl")
    print("Proto board case complete!")
