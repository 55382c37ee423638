"""Parametric two-part 3D-printable enclosures for small electronics."""
