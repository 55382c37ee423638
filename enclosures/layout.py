"""
Electronics Enclosures - Layout Descriptors
Immutable descriptors for fasteners, boards and cases, plus the closed-form
placement maths every part derives from. No CAD here: everything returns
plain numbers and tuples.
"""

import math
from dataclasses import dataclass

STACK_TOLERANCE = 1e-6


class LayoutError(ValueError):
    """Raised when a parameter set cannot produce a consistent layout."""


@dataclass(frozen=True)
class Fastener:
    hole_d: float        # shank clearance hole
    head_d: float
    head_h: float
    nut_d: float         # across flats
    nut_h: float
    length: float        # total shank length
    recess_extra: float = 1.0   # pocket depth below the nut

    @property
    def nut_corner_d(self):
        return self.nut_d / math.cos(math.radians(30))

    @property
    def nut_recess(self):
        return self.nut_h + self.recess_extra


@dataclass(frozen=True)
class Pcb:
    width: float
    depth: float
    thickness: float
    hole_d: float
    inset_x: float
    inset_y: float

    @property
    def size(self):
        return (self.width, self.depth)

    def holes(self):
        """Mounting hole centres relative to the board's lower-left corner."""
        dx = self.width - 2 * self.inset_x
        dy = self.depth - 2 * self.inset_y
        return [(self.inset_x + x, self.inset_y + y) for x, y in repeat4_points(dx, dy)]


@dataclass(frozen=True)
class Case:
    inner_width: float
    inner_depth: float
    bottom_height: float
    top_height: float
    wall: float
    rounding: float

    @property
    def inner_size(self):
        return (self.inner_width, self.inner_depth, self.bottom_height + self.top_height)

    @property
    def outer_size(self):
        return tuple(v + 2 * self.wall for v in self.inner_size)

    @property
    def outer_width(self):
        return self.outer_size[0]

    @property
    def outer_depth(self):
        return self.outer_size[1]

    @property
    def outer_height(self):
        return self.outer_size[2]

    @property
    def fillet_r(self):
        return self.rounding * self.wall

    @property
    def inner_fillet_r(self):
        return max(self.fillet_r - self.wall, 0.0)

    @property
    def inner_origin(self):
        return (self.wall, self.wall, self.wall)

    def mirror_x(self, x):
        """Map an assembled x coordinate onto a top shell lying ceiling-down."""
        return self.outer_width - x


@dataclass(frozen=True)
class Segment:
    name: str
    start: float
    extent: float

    @property
    def end(self):
        return self.start + self.extent

    @property
    def center(self):
        return self.start + self.extent / 2


class Stack:
    """Components laid end to end along the case's long (y) axis."""

    def __init__(self, segments):
        self.segments = tuple(segments)

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    @property
    def total(self):
        return sum(s.extent for s in self.segments)

    def segment(self, name):
        for s in self.segments:
            if s.name == name:
                return s
        raise KeyError(name)

    def center(self, name):
        return self.segment(name).center


def stack_layout(parts):
    """
    Build a Stack from ordered (name, extent) pairs.
    Each segment starts where the previous one ends, beginning at 0
    (the case's inner origin).
    """
    segments = []
    start = 0.0
    names = set()
    for name, extent in parts:
        if name in names:
            raise LayoutError(f"duplicate stack segment '{name}'")
        if extent < 0:
            raise LayoutError(f"segment '{name}' has negative extent {extent}")
        names.add(name)
        segments.append(Segment(name, start, extent))
        start += extent
    return Stack(segments)


def check_stack(case, stack):
    """Stacked extents must fill the declared inner depth exactly."""
    if not math.isclose(stack.total, case.inner_depth, abs_tol=STACK_TOLERANCE):
        diff = case.inner_depth - stack.total
        kind = "gap" if diff > 0 else "overlap"
        raise LayoutError(
            f"stack totals {stack.total:.3f} mm but inner depth is "
            f"{case.inner_depth:.3f} mm ({kind} of {abs(diff):.3f} mm)"
        )
    return stack


def repeat4_points(dx, dy):
    return [(0, 0), (dx, 0), (dx, dy), (0, dy)]


def repeat2_points(dx, dy):
    return [(0, 0), (dx, dy)]


def plusmin_points(dx, dy=0):
    return [(dx, dy), (-dx, -dy)]


def screw_span(case, fastener):
    """
    Return (shortest, longest) screw length for a case.
    The head sits flush in the top face; the tip must clear the nut but
    stay inside the nut pocket of the bottom face.
    """
    longest = case.outer_height - fastener.head_h
    shortest = longest - fastener.nut_recess + fastener.nut_h
    return shortest, longest


def check_fastener(case, fastener):
    shortest, longest = screw_span(case, fastener)
    if fastener.length < shortest - STACK_TOLERANCE:
        raise LayoutError(
            f"{fastener.length} mm screw does not reach through the nut "
            f"(needs at least {shortest:.2f} mm)"
        )
    if fastener.length > longest + STACK_TOLERANCE:
        raise LayoutError(
            f"{fastener.length} mm screw protrudes from the bottom face "
            f"(at most {longest:.2f} mm)"
        )
    return fastener


def hold_down_length(case, surface_height):
    """Distance from the top shell's ceiling down to a surface above the floor."""
    return case.bottom_height + case.top_height - surface_height
