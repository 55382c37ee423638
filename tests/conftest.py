"""Shared test fixtures."""

import pytest

from enclosures.layout import Case, Fastener, Pcb, stack_layout


@pytest.fixture
def small_case():
    """40 x 60 mm case with two screw rows and one 40 mm component bay."""
    return Case(
        inner_width=40.0,
        inner_depth=60.0,
        bottom_height=12.0,
        top_height=6.0,
        wall=2.0,
        rounding=1.5,
    )


@pytest.fixture
def small_stack():
    return stack_layout([
        ("screws_front", 10.0),
        ("bay", 40.0),
        ("screws_back", 10.0),
    ])


@pytest.fixture
def m3():
    """M3 screw sized for the small case: span is [18, 19] mm."""
    return Fastener(hole_d=3.4, head_d=5.5, head_h=3.0, nut_d=5.5, nut_h=2.4, length=18.0)


@pytest.fixture
def board():
    return Pcb(width=30.0, depth=20.0, thickness=1.6, hole_d=2.0, inset_x=3.0, inset_y=2.5)
