"""
Electronics Enclosures - Case Shells
Bottom and top shells derived from a Case descriptor: floor, rounded side
walls, screw posts with captive nuts, and a lip/rebate so the halves locate.
Both halves are modelled in print orientation (open side up).
"""

import cadquery as cq

from .config import LIP_CLEARANCE, LIP_HEIGHT, POST_OVERLAP, SCREW_POST_D
from .layout import check_fastener, check_stack, plusmin_points
from .shapes import fastener_recess, peg, rounded_rect, rounded_ring


def case_shell(case, inner_height):
    """Floor plus side walls up to wall + inner_height, outer corner at the origin."""
    size = (case.outer_width, case.outer_depth)
    floor = rounded_rect(size, case.fillet_r, case.wall)
    walls = rounded_ring(size, case.wall, case.fillet_r, case.wall + inner_height,
                         inner_r=case.inner_fillet_r)
    return floor.union(walls)


def component_origin(case, stack, name, width):
    """Lower-left corner of a component centred across the case at the start of its segment."""
    ox, oy, _ = case.inner_origin
    return ox + (case.inner_width - width) / 2, oy + stack.segment(name).start


def segment_center_y(case, stack, name):
    """Case y coordinate of a stack segment's centre."""
    _, oy, _ = case.inner_origin
    return oy + stack.center(name)


def screw_points(case, stack, rows):
    """Two post centres per screw row, one against each side wall."""
    post_r = SCREW_POST_D / 2
    cx = case.outer_width / 2
    dx = case.inner_width / 2 - post_r + POST_OVERLAP

    points = []
    for row in rows:
        y = segment_center_y(case, stack, row)
        points.extend((cx + px, y) for px, _ in plusmin_points(dx))
    return points


def _posts(points, height):
    return [peg(SCREW_POST_D / 2, height).translate((x, y, 0)) for x, y in points]


def _inner_half_ring(case, inset, height):
    # Band from `inset` inside the outer face to the inner face of the wall
    size = (case.outer_width - 2 * inset, case.outer_depth - 2 * inset)
    ring = rounded_ring(size, case.wall - inset, max(case.fillet_r - inset, 0.0), height)
    return ring.translate((inset, inset, 0))


def case_bottom(case, stack, fastener, rows):
    print("  Shell: bottom", flush=True)
    check_stack(case, stack)
    check_fastener(case, fastener)

    rim = case.wall + case.bottom_height

    # === Step 1: Floor and walls ===
    shell = case_shell(case, case.bottom_height)

    # === Step 2: Screw posts from the floor to the rim ===
    points = screw_points(case, stack, rows)
    for post in _posts(points, rim):
        shell = shell.union(post)

    # === Step 3: Locating lip on the inner half of the rim ===
    lip = _inner_half_ring(case, case.wall / 2 + LIP_CLEARANCE, LIP_HEIGHT)
    shell = shell.union(lip.translate((0, 0, rim)))

    # === Step 4: Nut traps in the bottom face ===
    for x, y in points:
        shell = shell.cut(fastener_recess(fastener, rim + 1, kind="nut").translate((x, y, 0)))

    return shell


def case_top(case, stack, fastener, rows):
    print("  Shell: top", flush=True)
    check_stack(case, stack)
    check_fastener(case, fastener)

    rim = case.wall + case.top_height

    # === Step 1: Ceiling and walls (ceiling on the bed) ===
    shell = case_shell(case, case.top_height)

    # === Step 2: Screw posts, mirrored to the flipped orientation ===
    points = [(case.mirror_x(x), y) for x, y in screw_points(case, stack, rows)]
    for post in _posts(points, rim):
        shell = shell.union(post)

    # === Step 3: Rebate that receives the bottom shell's lip ===
    depth = LIP_HEIGHT + LIP_CLEARANCE
    rebate = _inner_half_ring(case, case.wall / 2, depth + 1)
    shell = shell.cut(rebate.translate((0, 0, rim - depth)))

    # === Step 4: Screw head counterbores in the outer face ===
    for x, y in points:
        shell = shell.cut(fastener_recess(fastener, rim + 1, kind="head").translate((x, y, 0)))

    return shell


def rim_notch(case, y, length, depth, rim, side="left"):
    """
    Cutter for a notch through a side wall, from `depth` below the rim
    upward (past any lip). side="left" is the x=0 wall.
    """
    notch = cq.Workplane("XY").box(case.wall + 2, length, depth + LIP_HEIGHT + 1, centered=False)
    x = -1 if side == "left" else case.outer_width - case.wall - 1
    return notch.translate((x, y, rim - depth))
