"""
Electronics Enclosures - Shared Utilities
Export helpers and build-volume checks.
"""

import math
import os

import cadquery as cq

from .config import (
    MAX_X, MAX_Y, MAX_Z, OUTPUT_DIR,
    STL_TOLERANCE, STL_ANGULAR_TOLERANCE,
)


def angular_deflection(segments):
    """Angular tolerance that gives roughly `segments` facets per full circle."""
    if segments < 3:
        raise ValueError(f"need at least 3 segments per circle, got {segments}")
    return 2 * math.pi / segments


def _output_path(filename, out_dir):
    out_dir = out_dir or OUTPUT_DIR
    os.makedirs(out_dir, exist_ok=True)
    return os.path.join(out_dir, filename)


def export_stl(shape, filename, out_dir=None, tolerance=STL_TOLERANCE,
               angular_tolerance=STL_ANGULAR_TOLERANCE):
    """Export a CadQuery shape to STL in the output directory."""
    filepath = _output_path(filename, out_dir)
    cq.exporters.export(
        shape,
        filepath,
        exportType="STL",
        tolerance=tolerance,
        angularTolerance=angular_tolerance,
    )
    print(f"  Exported: {filepath}", flush=True)
    return filepath


def export_step(shape, filename, out_dir=None):
    """Export a CadQuery shape to STEP for inspection in CAD viewers."""
    filepath = _output_path(filename.replace(".stl", ".step"), out_dir)
    cq.exporters.export(shape, filepath, exportType="STEP")
    print(f"  Exported: {filepath}", flush=True)
    return filepath


def validate_print_bounds(shape, max_x=MAX_X, max_y=MAX_Y, max_z=MAX_Z):
    """
    Validate that a shape fits within the printer's build volume.
    Returns (fits, bounding_box_dims).
    """
    bb = shape.val().BoundingBox()
    dims = (bb.xlen, bb.ylen, bb.zlen)
    fits = dims[0] <= max_x and dims[1] <= max_y and dims[2] <= max_z
    if not fits:
        print(f"  WARNING: Part exceeds build volume! Dims: {dims[0]:.1f} x {dims[1]:.1f} x {dims[2]:.1f}mm")
    else:
        print(f"  Part dims: {dims[0]:.1f} x {dims[1]:.1f} x {dims[2]:.1f}mm - FITS")
    return fits, dims
