"""Approximation of half-edges.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from brepcore.approx.curve import CurveApprox, approx_curve
from brepcore.approx.path import RangeOnPath, approx_path
from brepcore.approx.point import ApproxPoint


def approx_half_edge(objects, handle, tolerance, cache, sampler=approx_path):
    """Approximate a half-edge in its direction of travel.

    The result starts with the exact position of the start vertex,
    followed by the interior points of the curve.  The end vertex is left
    out; it is the first point of the next half-edge in the cycle.

    A self-connected half-edge starts at the point its curve has at the
    low end of its parameter range.
    """
    half_edge = objects.get(handle, 'half_edge')
    curve = objects.get(half_edge.curve, 'curve')
    start, end = objects.half_edge_range(handle)

    if half_edge.vertices is not None:
        vertex = objects.get(half_edge.vertices[0], 'vertex')
        position = objects.get(vertex.global_vertex, 'global_vertex').position
        t = vertex.position
    else:
        t = min(start, end)
        position = objects.get(curve.global_curve, 'global_curve').path.point_from_curve_coords(t)
    first = ApproxPoint(curve.path.point_from_curve_coords(t), position,
                        source=(half_edge.curve, t))

    rest = approx_curve(objects, half_edge.curve, RangeOnPath(start, end), tolerance,
                        cache, sampler)
    return CurveApprox((first,) + rest.points)


__all__ = ['approx_half_edge']
