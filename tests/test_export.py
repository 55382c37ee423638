"""Tests for STL/STEP export helpers and the 3MF plate writer."""

import math
import os
import xml.etree.ElementTree as ET
import zipfile

import cadquery as cq
import pytest

from enclosures.export_3mf import NS_CORE, create_3mf, plate_offsets, shape_to_triangles
from enclosures.utils import angular_deflection, export_step, export_stl, validate_print_bounds


@pytest.fixture
def block():
    return cq.Workplane("XY").box(10, 20, 5, centered=False)


def test_angular_deflection():
    assert angular_deflection(64) == pytest.approx(2 * math.pi / 64)
    with pytest.raises(ValueError):
        angular_deflection(2)


def test_export_stl_and_step(block, tmp_path):
    out_dir = str(tmp_path / "out")
    stl = export_stl(block, "block.stl", out_dir=out_dir)
    step = export_step(block, "block.stl", out_dir=out_dir)
    assert stl == os.path.join(out_dir, "block.stl")
    assert step == os.path.join(out_dir, "block.step")
    assert os.path.getsize(stl) > 0
    assert os.path.getsize(step) > 0


def test_validate_print_bounds(block, capsys):
    fits, dims = validate_print_bounds(block)
    assert fits
    assert dims == pytest.approx((10, 20, 5), abs=1e-3)

    fits, _ = validate_print_bounds(block, max_x=5)
    assert not fits
    assert "WARNING" in capsys.readouterr().out


def test_shape_to_triangles_indices_in_range(block):
    vertices, triangles = shape_to_triangles(block)
    assert len(triangles) >= 12
    assert all(0 <= i < len(vertices) for tri in triangles for i in tri)


def test_plate_offsets_side_by_side(block):
    centred = cq.Workplane("XY").box(5, 5, 5)
    offsets = plate_offsets([block, centred], spacing=10.0)
    assert offsets[0] == pytest.approx((0, 0, 0), abs=1e-3)
    assert offsets[1] == pytest.approx((22.5, 2.5, 2.5), abs=1e-3)


def test_create_3mf_contents(block, tmp_path):
    lid = cq.Workplane("XY").box(10, 20, 2, centered=False)
    path = create_3mf([("bottom", block), ("top", lid)], "pair.3mf",
                      title="Pair", profile="pla", out_dir=str(tmp_path))

    with zipfile.ZipFile(path) as zf:
        names = set(zf.namelist())
        assert {
            "[Content_Types].xml", "_rels/.rels", "3D/3dmodel.model",
            "Metadata/project_settings.config", "Metadata/plate_1.config",
        } <= names
        model = ET.fromstring(zf.read("3D/3dmodel.model"))
        settings = zf.read("Metadata/project_settings.config").decode()
        plate = zf.read("Metadata/plate_1.config").decode()

    ns = {"m": NS_CORE}
    objects = model.findall("m:resources/m:object", ns)
    assert [o.get("name") for o in objects] == ["bottom", "top"]
    assert [o.get("id") for o in objects] == ["1", "2"]
    for obj in objects:
        assert obj.findall("m:mesh/m:triangles/m:triangle", ns)

    items = model.findall("m:build/m:item", ns)
    transforms = [item.get("transform").split()[-3:] for item in items]
    assert [float(v) for v in transforms[0]] == pytest.approx([0, 0, 0])
    assert [float(v) for v in transforms[1]] == pytest.approx([20.0, 0, 0])

    assert "filament_type = PLA" in settings
    assert 'value="bottom"' in plate and 'value="top"' in plate
