"""Polygonal approximation of brepcore geometry.

Approximations carry each point in two forms at once: in the local
coordinates of what was approximated (a curve parameter or surface
coordinates) and in model space.  Edges shared between faces are
approximated once and reused through ``ApproxCache``.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from brepcore.approx.cache import ApproxCache
from brepcore.approx.curve import CurveApprox, GlobalPathApprox, approx_curve, approx_global_curve
from brepcore.approx.edge import approx_half_edge
from brepcore.approx.face import CycleApprox, FaceApprox, approx_cycle, approx_face, approx_shell
from brepcore.approx.path import RangeOnPath, approx_path, number_of_vertices_for_circle
from brepcore.approx.point import ApproxPoint
from brepcore.approx.tolerance import Tolerance

__all__ = [
    'ApproxCache',
    'ApproxPoint',
    'CurveApprox',
    'CycleApprox',
    'FaceApprox',
    'GlobalPathApprox',
    'RangeOnPath',
    'Tolerance',
    'approx_curve',
    'approx_cycle',
    'approx_face',
    'approx_global_curve',
    'approx_half_edge',
    'approx_path',
    'approx_shell',
    'number_of_vertices_for_circle',
]
