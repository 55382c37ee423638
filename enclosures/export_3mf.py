"""
3MF Exporter for Two-Part Enclosures with Embedded Orca Slicer Settings
Lays the bottom and top shell of an enclosure side by side on one plate.

3MF is a ZIP archive containing XML model data with embedded meshes.
Orca Slicer reads Metadata/plate_*.config and Metadata/project_settings.config.
"""

import io
import os
import xml.etree.ElementTree as ET
import zipfile

import cadquery as cq

from .config import OUTPUT_DIR, PLATE_SPACING, STL_TOLERANCE, STL_ANGULAR_TOLERANCE

NS_CORE = "http://schemas.microsoft.com/3dmanufacturing/core/2015/02"

# ============================================================
# Orca Slicer embedded settings (PETG, 0.4mm nozzle)
# ============================================================
ORCA_SETTINGS_PETG = {
    "layer_height": "0.2",
    "initial_layer_print_height": "0.24",
    "wall_loops": "3",
    "top_shell_layers": "5",
    "bottom_shell_layers": "4",
    "sparse_infill_density": "20%",
    "sparse_infill_pattern": "grid",
    "outer_wall_speed": "60",
    "inner_wall_speed": "100",
    "enable_support": "0",
    "brim_type": "auto_brim",
    "seam_position": "aligned",
    "nozzle_temperature": "240",
    "bed_temperature": "80",
    "fan_min_speed": "30",
    "fan_max_speed": "60",
    "filament_type": "PETG",
    "line_width": "0.45",
}

ORCA_SETTINGS_PLA = dict(
    ORCA_SETTINGS_PETG,
    nozzle_temperature="210",
    bed_temperature="60",
    fan_min_speed="100",
    fan_max_speed="100",
    filament_type="PLA",
)

PROFILES = {"petg": ORCA_SETTINGS_PETG, "pla": ORCA_SETTINGS_PLA}


def _as_shape(shape):
    if isinstance(shape, cq.Workplane):
        return cq.Compound.makeCompound([o for o in shape.vals() if isinstance(o, cq.Shape)])
    return shape


def shape_to_triangles(shape, tolerance=STL_TOLERANCE, angular_tolerance=STL_ANGULAR_TOLERANCE):
    """
    Tessellate a CadQuery shape into vertices and triangle indices.
    Returns (vertices_list, triangles_list) of plain tuples.
    """
    vertices, triangles = _as_shape(shape).tessellate(tolerance, angular_tolerance)
    return [(v.x, v.y, v.z) for v in vertices], [tuple(t) for t in triangles]


def plate_offsets(shapes, spacing=PLATE_SPACING):
    """
    Translations that put each shape on the bed (z=0), front edge at y=0,
    left to right with `spacing` between bounding boxes.
    """
    offsets = []
    cursor = 0.0
    for shape in shapes:
        bb = _as_shape(shape).BoundingBox()
        offsets.append((cursor - bb.xmin, -bb.ymin, -bb.zmin))
        cursor += bb.xlen + spacing
    return offsets


def create_3mf(bodies, filename, title="Enclosure", profile="petg", out_dir=None,
               tolerance=STL_TOLERANCE, angular_tolerance=STL_ANGULAR_TOLERANCE):
    """
    Create a 3MF plate with one mesh object per body and embedded
    Orca Slicer print settings.

    Args:
        bodies: list of (name, cadquery_shape) tuples, e.g. bottom and top shell
        filename: output filename (saved to out_dir)
        title: model title
        profile: "petg" or "pla", selects embedded slicer settings
    """
    out_dir = out_dir or OUTPUT_DIR
    os.makedirs(out_dir, exist_ok=True)
    filepath = os.path.join(out_dir, filename)
    orca_settings = PROFILES[profile]

    ET.register_namespace("", NS_CORE)
    model = ET.Element(f"{{{NS_CORE}}}model", attrib={"unit": "millimeter"})

    meta_title = ET.SubElement(model, f"{{{NS_CORE}}}metadata", name="Title")
    meta_title.text = title
    meta_app = ET.SubElement(model, f"{{{NS_CORE}}}metadata", name="Application")
    meta_app.text = "Enclosures-CadQuery"

    resources = ET.SubElement(model, f"{{{NS_CORE}}}resources")
    build = ET.SubElement(model, f"{{{NS_CORE}}}build")

    offsets = plate_offsets([shape for _, shape in bodies])
    object_ids = []
    for obj_idx, ((name, shape), (tx, ty, tz)) in enumerate(zip(bodies, offsets)):
        obj_id = str(obj_idx + 1)
        object_ids.append((obj_id, name))

        vertices, triangles = shape_to_triangles(shape, tolerance, angular_tolerance)
        obj_elem = ET.SubElement(resources, f"{{{NS_CORE}}}object", id=obj_id, type="model", name=name)
        mesh = ET.SubElement(obj_elem, f"{{{NS_CORE}}}mesh")

        verts_elem = ET.SubElement(mesh, f"{{{NS_CORE}}}vertices")
        for vx, vy, vz in vertices:
            ET.SubElement(verts_elem, f"{{{NS_CORE}}}vertex",
                          x=f"{vx:.6f}", y=f"{vy:.6f}", z=f"{vz:.6f}")

        tris_elem = ET.SubElement(mesh, f"{{{NS_CORE}}}triangles")
        for v1, v2, v3 in triangles:
            ET.SubElement(tris_elem, f"{{{NS_CORE}}}triangle", v1=str(v1), v2=str(v2), v3=str(v3))

        # 3x4 affine matrix, row-major: rotation identity then translation
        ET.SubElement(build, f"{{{NS_CORE}}}item", objectid=obj_id,
                      transform=f"1 0 0 0 1 0 0 0 1 {tx:.6f} {ty:.6f} {tz:.6f}")

    model_xml = io.BytesIO()
    tree = ET.ElementTree(model)
    ET.indent(tree, space="  ")
    tree.write(model_xml, xml_declaration=True, encoding="UTF-8")

    content_types = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">\n'
        '  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>\n'
        '  <Default Extension="model" ContentType="application/vnd.ms-package.3dmanufacturing-3dmodel+xml"/>\n'
        '</Types>\n'
    )
    rels = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">\n'
        '  <Relationship Target="/3D/3dmodel.model" Id="rel0" '
        'Type="http://schemas.microsoft.com/3dmanufacturing/2013/01/3dmodel"/>\n'
        '</Relationships>\n'
    )

    with zipfile.ZipFile(filepath, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", content_types)
        zf.writestr("_rels/.rels", rels)
        zf.writestr("3D/3dmodel.model", model_xml.getvalue())
        zf.writestr("Metadata/project_settings.config",
                    "\n".join(f"{key} = {val}" for key, val in orca_settings.items()))
        zf.writestr("Metadata/plate_1.config", _build_plate_config(object_ids))

    file_size_kb = os.path.getsize(filepath) / 1024
    print(f"  Exported 3MF: {filepath}", flush=True)
    print(f"    {len(bodies)} bodies: {', '.join(n for n, _ in bodies)}, "
          f"profile: {profile.upper()}, size: {file_size_kb:.1f} KB", flush=True)
    return filepath


def _build_plate_config(object_ids):
    """Build Orca Slicer plate config XML naming each object on plate 1."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<config>"]
    for obj_id, name in object_ids:
        lines.append(f'  <object id="{obj_id}">')
        lines.append(f'    <metadata key="name" value="{name}"/>')
        lines.append('    <metadata key="extruder" value="1"/>')
        lines.append("  </object>")

    lines.append("  <plate>")
    lines.append('    <metadata key="plater_id" value="1"/>')
    lines.append('    <metadata key="plater_name" value="Plate 1"/>')
    for obj_id, _ in object_ids:
        lines.append(f'    <metadata key="object_id" value="{obj_id}"/>')
    lines.append("  </plate>")
    lines.append("</config>")
    return "\n".join(lines)
