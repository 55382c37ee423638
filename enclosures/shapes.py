"""
Electronics Enclosures - Shape Library
Rounded rectangles, pegs, placement patterns and the small fixtures
(trays, holders, standoffs, hold-downs, cutters) every enclosure is built from.
"""

import cadquery as cq

from .config import FIT_CLEARANCE, PIN_CLEARANCE, PIN_HEIGHT, STANDOFF_WALL
from .layout import plusmin_points, repeat2_points, repeat4_points


def _union_all(shapes):
    result = shapes[0]
    for shape in shapes[1:]:
        result = result.union(shape)
    return result


def _to_origin(shape):
    bb = shape.val().BoundingBox()
    return shape.translate((-bb.xmin, -bb.ymin, -bb.zmin))


def rounded_rect_sketch(width, depth, r, mode="a", sketch=None):
    """
    Build a rounded rectangle profile centred on the origin.
    The profile is two crossing rectangles plus a circle of radius r at
    each corner. With r == 0 it is a plain rectangle. Pass an existing
    sketch and mode="s" to subtract the profile from it.
    """
    if width <= 0 or depth <= 0:
        raise ValueError(f"rectangle size must be positive, got {width} x {depth}")
    if r < 0 or r > min(width, depth) / 2:
        raise ValueError(f"corner radius {r} does not fit a {width} x {depth} rectangle")

    s = sketch if sketch is not None else cq.Sketch()
    if r == 0:
        return s.rect(width, depth, mode=mode)

    if width > 2 * r:
        s = s.rect(width - 2 * r, depth, mode=mode)
    if depth > 2 * r:
        s = s.rect(width, depth - 2 * r, mode=mode)

    # Corner circle centres, offset so the pattern is centred
    hx = width / 2 - r
    hy = depth / 2 - r
    corners = [(x - hx, y - hy) for x, y in repeat4_points(2 * hx, 2 * hy)]
    return s.push(corners).circle(r, mode=mode).reset()


def rounded_rect(size, r, height):
    """
    Extrude a rounded rectangle.
    The lower-left corner of its bounding box sits at the origin, so the
    solid spans [0, w] x [0, d] x [0, height].
    """
    w, d = size
    sketch = rounded_rect_sketch(w, d, r).clean()
    return (
        cq.Workplane("XY")
        .placeSketch(sketch)
        .extrude(height)
        .translate((w / 2, d / 2, 0))
    )


def rounded_ring(size, thickness, r, height, inner_r=None):
    """
    Extrude the band between a rounded rectangle and the same rectangle
    inset by `thickness`. By default the inner corners keep the outer
    centres, so their radius is r - thickness (sharp once that reaches zero).
    """
    w, d = size
    if inner_r is None:
        inner_r = max(r - thickness, 0.0)
    sketch = rounded_rect_sketch(w, d, r)
    sketch = rounded_rect_sketch(
        w - 2 * thickness, d - 2 * thickness, inner_r,
        mode="s", sketch=sketch,
    ).clean()
    return (
        cq.Workplane("XY")
        .placeSketch(sketch)
        .extrude(height)
        .translate((w / 2, d / 2, 0))
    )


def peg(r, h):
    return cq.Workplane("XY").circle(r).extrude(h)


def rounded_peg(r, h):
    """
    Peg whose top r of height is a hemisphere.
    Total height is exactly h; the base is centred on the origin.
    """
    if h < r:
        raise ValueError(f"rounded peg height {h} is below its radius {r}")

    cap = cq.Workplane("XY").sphere(r, angle1=0, angle2=90).translate((0, 0, h - r))
    if h > r:
        return peg(r, h - r).union(cap)
    return cap


def repeat4(shape, dx, dy, rotate=False):
    """
    Place copies of a shape on the corners of a dx x dy rectangle:
    (0,0), (dx,0), (dx,dy), (0,dy). With rotate=True each copy is turned a
    further 90 degrees so a shape built for the (0,0) corner fits every corner.
    """
    copies = []
    for i, (x, y) in enumerate(repeat4_points(dx, dy)):
        part = shape
        if rotate and i:
            part = part.rotate((0, 0, 0), (0, 0, 1), 90 * i)
        copies.append(part.translate((x, y, 0)))
    return _union_all(copies)


def repeat2(shape, dx, dy, mirror=False):
    """Place a shape at (0,0) and at (dx,dy), mirroring the second copy across YZ if asked."""
    (x0, y0), (x1, y1) = repeat2_points(dx, dy)
    second = shape.mirror("YZ") if mirror else shape
    return shape.translate((x0, y0, 0)).union(second.translate((x1, y1, 0)))


def repeat_plusmin(shape, dx, dy=0):
    """Place a shape symmetrically at +(dx,dy) and -(dx,dy)."""
    return _union_all([shape.translate((x, y, 0)) for x, y in plusmin_points(dx, dy)])


def fastener_recess(fastener, height, kind="nut"):
    """
    Cutter for a screw through a shell: shank hole over the full height
    plus a pocket at the z=0 face. kind="nut" gives a hex nut trap,
    kind="head" a round counterbore for a socket head.
    """
    hole = peg(fastener.hole_d / 2, height)
    if kind == "nut":
        pocket = (
            cq.Workplane("XY")
            .polygon(6, fastener.nut_corner_d + 2 * FIT_CLEARANCE)
            .extrude(fastener.nut_recess)
        )
    elif kind == "head":
        pocket = peg(fastener.head_d / 2 + FIT_CLEARANCE, fastener.head_h)
    else:
        raise ValueError(f"unknown recess kind '{kind}'")
    return hole.union(pocket)


def tray(inner_size, wall, height, r=0):
    """Walls around a footprint; the outer lower-left corner sits at the origin."""
    w, d = inner_size
    return rounded_ring((w + 2 * wall, d + 2 * wall), wall, r, height)


def corner_holders(board_size, clearance, wall, arm, height):
    """
    Four L brackets retaining a board without mounting holes.
    The brackets wrap the board's corners with `clearance` all round; the
    outer corner of the first bracket sits at the origin.
    """
    w, d = board_size
    span_x = w + 2 * (clearance + wall)
    span_y = d + 2 * (clearance + wall)
    leg = (
        cq.Workplane("XY").box(arm, wall, height, centered=False)
        .union(cq.Workplane("XY").box(wall, arm, height, centered=False))
    )
    return repeat4(leg, span_x, span_y, rotate=True)


def pcb_mount(pcb, standoff_h, pin=True):
    """
    Standoffs under each mounting hole of a board, corner at the origin.
    With pin=True each standoff carries a rounded locating pin that passes
    through the hole and stands PIN_HEIGHT proud of the board.
    """
    standoff_r = pcb.hole_d / 2 + STANDOFF_WALL
    pin_r = pcb.hole_d / 2 - PIN_CLEARANCE

    posts = []
    for x, y in pcb.holes():
        post = peg(standoff_r, standoff_h)
        if pin:
            tip = rounded_peg(pin_r, pcb.thickness + PIN_HEIGHT)
            post = post.union(tip.translate((0, 0, standoff_h)))
        posts.append(post.translate((x, y, 0)))
    return _union_all(posts)


def hold_downs(points, r, length, socket=None):
    """
    Pegs hanging from a top shell's ceiling (built pointing up, in print
    orientation). `socket` is an optional (radius, depth) pocket in each
    tip that receives a locating pin.
    """
    pegs = []
    for x, y in points:
        p = peg(r, length)
        if socket is not None:
            socket_r, socket_depth = socket
            p = p.cut(peg(socket_r, socket_depth).translate((0, 0, length - socket_depth)))
        pegs.append(p.translate((x, y, 0)))
    return _union_all(pegs)


def wall_cutter(size, r, depth, axis="y"):
    """
    Rounded opening through a side wall.
    size is (width, height) in the wall's plane. axis="y" cuts through a
    front/back wall and spans [0,w] x [0,depth] x [0,h]; axis="x" cuts
    through a side wall and spans [0,depth] x [0,w] x [0,h].
    """
    slab = rounded_rect(size, r, depth)
    cutter = slab.rotate((0, 0, 0), (1, 0, 0), 90)
    if axis == "x":
        cutter = cutter.rotate((0, 0, 0), (0, 0, 1), 90)
    elif axis != "y":
        raise ValueError(f"unknown wall axis '{axis}'")
    return _to_origin(cutter)
