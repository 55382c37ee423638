"""
Electronics Enclosures - Master Generation Script
Generates STL files (optionally STEP and 3MF plates) for every enclosure.
Run: generate-enclosures  or  python -m enclosures.generate_all
"""

import argparse
import sys
import time
import traceback
from importlib import import_module

from .config import MATERIALS, OUTPUT_DIR, SEGMENTS, get_hardware_list
from .export_3mf import create_3mf
from .utils import angular_deflection, export_step, export_stl, validate_print_bounds

# (title, module, 3MF slicer profile)
ENCLOSURES = [
    ("Battery Case", "battery_case", "petg"),
    ("Proto Board Case", "proto_board_case", "pla"),
    ("Display Case", "display_case", "petg"),
]

SHELLS = [
    ("bottom", "create_bottom"),
    ("top", "create_top"),
]


def build_parser():
    parser = argparse.ArgumentParser(description="Generate two-part electronics enclosures")
    parser.add_argument("--only", action="append", metavar="NAME",
                        choices=[module for _, module, _ in ENCLOSURES],
                        help="Build only this enclosure (repeatable)")
    parser.add_argument("--out", metavar="DIR", default=OUTPUT_DIR,
                        help=f"Output directory (default: {OUTPUT_DIR})")
    parser.add_argument("--segments", type=int, default=SEGMENTS,
                        help=f"Circle segment count for meshes (default: {SEGMENTS})")
    parser.add_argument("--step", action="store_true",
                        help="Also export STEP files")
    parser.add_argument("--3mf", dest="plate", action="store_true",
                        help="Also export a two-body 3MF plate per enclosure")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    deflection = angular_deflection(args.segments)
    selected = [e for e in ENCLOSURES if not args.only or e[1] in args.only]

    print("=" * 60)
    print("  ELECTRONICS ENCLOSURES")
    print("  STL Generation - bottom and top shells")
    print("=" * 60)
    print()

    start = time.time()
    results = []

    for title, module_name, profile in selected:
        module = import_module(f".{module_name}", __package__)
        bodies = []

        for shell, func_name in SHELLS:
            name = f"{title} - {shell.capitalize()}"
            print(f"\n{'─' * 50}")
            print(f"  Generating: {name}")
            print(f"{'─' * 50}", flush=True)
            part_start = time.time()

            try:
                shape = getattr(module, func_name)()
                validate_print_bounds(shape)

                stl_name = f"{module_name}_{shell}.stl"
                export_stl(shape, stl_name, out_dir=args.out, angular_tolerance=deflection)
                if args.step:
                    export_step(shape, stl_name, out_dir=args.out)
                bodies.append((shell, shape))
                elapsed = time.time() - part_start
                results.append((name, "OK", f"{elapsed:.1f}s"))
            except Exception as e:
                elapsed = time.time() - part_start
                results.append((name, "FAILED", str(e)))
                print(f"  ERROR: {e}")
                traceback.print_exc()

        if args.plate and len(bodies) == len(SHELLS):
            create_3mf(bodies, f"{module_name}.3mf", title=title, profile=profile,
                       out_dir=args.out, angular_tolerance=deflection)

    # Print summary
    total = time.time() - start
    print(f"\n{'=' * 60}")
    print("  GENERATION SUMMARY")
    print(f"{'=' * 60}")
    for name, status, info in results:
        icon = "✓" if status == "OK" else "✗"
        print(f"  {icon} {name}: {status} ({info})")

    print(f"\n  Total time: {total:.1f}s")
    print(f"  Output directory: {args.out}")

    # Print hardware list
    hardware = get_hardware_list()
    print(f"\n{'=' * 60}")
    print("  HARDWARE LIST")
    print(f"{'=' * 60}")
    for _, module_name, _ in selected:
        screw, count = hardware[module_name]
        print(f"  {module_name}: {count}x {screw} socket head screw + {count}x nut")

    # Print material guide
    print(f"\n{'=' * 60}")
    print("  MATERIAL & PRINT GUIDE")
    print(f"{'=' * 60}")
    for _, module_name, _ in selected:
        print(f"  {module_name}: {MATERIALS[module_name]}")
    print("\n  Print both shells open side up; the top shell's ceiling goes on the bed.")

    failed = any(status != "OK" for _, status, _ in results)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
