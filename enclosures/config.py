"""
Electronics Enclosures - Configuration
All dimensions in millimeters.
Designed for a 220x220x250mm printer bed.
Two-part cases (bottom + top shell) joined with screws and captive nuts.
"""

import math
import os

from .layout import Case, Fastener, Pcb, stack_layout

# === OUTPUT DIRECTORY ===
OUTPUT_DIR = os.environ.get("ENCLOSURES_OUTPUT_DIR", os.path.join(os.getcwd(), "STL"))

# === PRINTER CONSTRAINTS ===
MAX_X = 220
MAX_Y = 220
MAX_Z = 250

# === TESSELLATION ===
SEGMENTS = 64                    # Circle segment count for exported meshes
STL_TOLERANCE = 0.01             # Linear tolerance for mesh
STL_ANGULAR_TOLERANCE = 2 * math.pi / SEGMENTS

# === PRINT FIT ===
FIT_CLEARANCE = 0.2              # Radial gap on holes and pockets
LIP_HEIGHT = 1.5                 # Locating lip on the bottom shell rim
LIP_CLEARANCE = 0.2              # Gap between lip and top shell rebate
SCREW_POST_D = 9.6               # Screw post diameter
SCREW_ROW = 10.0                 # Stack extent reserved for a row of posts
POST_OVERLAP = 0.5               # Screw posts sink into the side walls
PLATE_SPACING = 10.0             # Gap between bodies on a 3MF plate

# === FASTENERS (ISO 4762 socket heads, ISO 4032 nuts) ===
FASTENERS = {
    "M2x10": Fastener(hole_d=2.4, head_d=3.8, head_h=2.0, nut_d=4.0, nut_h=1.6, length=10.0),
    "M2.5x12": Fastener(hole_d=2.9, head_d=4.5, head_h=2.5, nut_d=5.0, nut_h=2.0, length=12.0),
    "M3x16": Fastener(hole_d=3.4, head_d=5.5, head_h=3.0, nut_d=5.5, nut_h=2.4, length=16.0),
    "M3x25": Fastener(hole_d=3.4, head_d=5.5, head_h=3.0, nut_d=5.5, nut_h=2.4, length=25.0),
    "M3x30": Fastener(hole_d=3.4, head_d=5.5, head_h=3.0, nut_d=5.5, nut_h=2.4, length=30.0),
}

# === BOARD MOUNTING ===
PCB_CLEARANCE = 0.5              # Gap around a board on each side
STANDOFF_WALL = 1.2              # Standoff radius beyond the hole
PIN_CLEARANCE = 0.1              # Locating pin radius under the hole
PIN_HEIGHT = 1.0                 # Pin length above the board surface
HOLDER_WALL = 1.6                # Corner holder bracket thickness
HOLDER_CLEARANCE = 0.3
HOLDER_ARM = 5.0                 # Length of each holder leg
HOLDER_HEIGHT = 3.0
HOLD_DOWN_D = 4.0

# === COMPONENTS ===
# 18650 single-cell holder (L x W x H, L along the case's long axis)
BATTERY_HOLDER = (78.0, 21.0, 19.0)
TRAY_WALL = 1.6
TRAY_CLEARANCE = 0.5
TRAY_HEIGHT = 8.0

# TP4056 charger module ("blue board"), micro USB on the front short edge
CHARGER = Pcb(width=17.5, depth=26.0, thickness=1.6, hole_d=0.0, inset_x=0.0, inset_y=0.0)
CHARGER_USB_CUT = (10.0, 5.0)    # Cutout width x height
CHARGER_USB_R = 1.0

# SS12D00 slide switch clamped in a rim notch
SWITCH_BODY = (12.0, 6.5, 6.0)   # Length (y) x width x height
SWITCH_CLEARANCE = 0.5
SWITCH_NOTCH_BOTTOM = 4.0        # Notch depth cut into the bottom shell rim
SWITCH_NOTCH_TOP = 2.0           # Notch depth cut into the top shell rim

# 3x4cm prototyping board inside the battery case
SMALL_PROTO_PCB = Pcb(width=30.0, depth=40.0, thickness=1.6, hole_d=2.0, inset_x=2.0, inset_y=2.0)
SMALL_PROTO_STANDOFF = 4.0

# 5x7cm prototyping board
PROTO_PCB = Pcb(width=50.0, depth=70.0, thickness=1.6, hole_d=2.0, inset_x=2.0, inset_y=2.0)
PROTO_STANDOFF = 5.0
PROTO_WIRE_SLOT = (6.0, 8.0)     # Width x depth below the rim

# 0.96" SSD1306 OLED module, mounted face down against the top ceiling
OLED = Pcb(width=27.3, depth=27.8, thickness=1.2, hole_d=2.0, inset_x=2.0, inset_y=2.0)
OLED_STANDOFF = 1.6              # Glass thickness between board and ceiling
OLED_WINDOW = (23.0, 12.0)
OLED_WINDOW_R = 1.0
OLED_WINDOW_OFFSET = 1.5         # Active area centre above board centre (y)

# Wemos D1 mini, USB on the back short edge
D1_MINI = Pcb(width=25.6, depth=34.2, thickness=1.0, hole_d=0.0, inset_x=0.0, inset_y=0.0)
D1_MINI_USB_CUT = (12.0, 7.0)
D1_MINI_USB_R = 1.5
D1_MINI_USB_LIFT = 0.5

# === BATTERY CASE ===
BATTERY_CASE = Case(
    inner_width=34.0,
    inner_depth=198.0,
    bottom_height=21.0,
    top_height=8.0,
    wall=2.0,
    rounding=2.0,
)
BATTERY_CASE_SCREW = "M3x30"
BATTERY_CASE_FASTENER = FASTENERS[BATTERY_CASE_SCREW]
BATTERY_CASE_STACK = stack_layout([
    ("charger", CHARGER.depth + 2 * (HOLDER_CLEARANCE + HOLDER_WALL)),
    ("gap", 2.0),
    ("switch", SWITCH_BODY[0] + 2 * SWITCH_CLEARANCE),
    ("screws_front", SCREW_ROW),
    ("battery", BATTERY_HOLDER[0] + 2 * (TRAY_CLEARANCE + TRAY_WALL)),
    ("screws_mid", SCREW_ROW),
    ("pcb", SMALL_PROTO_PCB.depth + 2 * PCB_CLEARANCE),
    ("screws_back", SCREW_ROW),
])
BATTERY_CASE_SCREW_ROWS = ("screws_front", "screws_mid", "screws_back")

# === PROTO BOARD CASE ===
PROTO_CASE = Case(
    inner_width=52.0,
    inner_depth=91.0,
    bottom_height=15.0,
    top_height=10.0,
    wall=2.0,
    rounding=1.5,
)
PROTO_CASE_SCREW = "M3x25"
PROTO_CASE_FASTENER = FASTENERS[PROTO_CASE_SCREW]
PROTO_CASE_STACK = stack_layout([
    ("screws_front", SCREW_ROW),
    ("pcb", PROTO_PCB.depth + 2 * PCB_CLEARANCE),
    ("screws_back", SCREW_ROW),
])
PROTO_CASE_SCREW_ROWS = ("screws_front", "screws_back")

# === DISPLAY CASE ===
DISPLAY_CASE = Case(
    inner_width=30.0,
    inner_depth=86.8,
    bottom_height=10.0,
    top_height=6.0,
    wall=2.0,
    rounding=1.5,
)
DISPLAY_CASE_SCREW = "M3x16"
DISPLAY_CASE_FASTENER = FASTENERS[DISPLAY_CASE_SCREW]
DISPLAY_CASE_STACK = stack_layout([
    ("screws_front", SCREW_ROW),
    ("display", OLED.depth + 2 * PCB_CLEARANCE),
    ("screws_mid", SCREW_ROW),
    ("mcu", D1_MINI.depth + 2 * (HOLDER_CLEARANCE + HOLDER_WALL)),
])
DISPLAY_CASE_SCREW_ROWS = ("screws_front", "screws_mid")

# === MATERIAL NOTES ===
MATERIALS = {
    "battery_case": "PETG (any color) - 3 perimeters, 20% infill",
    "proto_board_case": "PLA (PETG also works) - 3 perimeters, 15% infill",
    "display_case": "PETG Black - 3 perimeters, 20% infill, top shell printed window-side down",
}


# === HELPER: HARDWARE LIST ===
def get_hardware_list():
    """Return screws and nuts needed per enclosure (two per screw row)."""
    return {
        "battery_case": (BATTERY_CASE_SCREW, 2 * len(BATTERY_CASE_SCREW_ROWS)),
        "proto_board_case": (PROTO_CASE_SCREW, 2 * len(PROTO_CASE_SCREW_ROWS)),
        "display_case": (DISPLAY_CASE_SCREW, 2 * len(DISPLAY_CASE_SCREW_ROWS)),
    }
