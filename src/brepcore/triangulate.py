"""Triangulation of approximated faces.

Planar-domain faces are handed to ``mapbox-earcut`` (the ear clipping
implementation used by Mapbox GL) in surface coordinates, holes
included.  Faces on a swept circle are triangulated as a strip between
their bottom and top boundary instead.

Every triangle is wound so that its normal agrees with the surface
normal of the face.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate faces with holes"
    ) from exc

from brepcore import geom
from brepcore.approx import ApproxCache, ApproxPoint, FaceApprox, Tolerance, approx_face
from brepcore.curves import Circle
from brepcore.errors import DegenerateGeometryError
from brepcore.mesh import Mesh, Triangle
from brepcore.surfaces import SweptCurve

logger = logging.getLogger(__name__)


def triangulate_polygon(outer: Sequence[ApproxPoint],
                        holes: Iterable[Sequence[ApproxPoint]] | None = None
                        ) -> List[Tuple[ApproxPoint, ApproxPoint, ApproxPoint]]:
    """Return triangles covering ``outer`` minus any ``holes``.

    Works on the local (2D) form of the points.  Loops with fewer than
    three distinct points are ignored.  The winding of the returned
    triangles is whatever earcut produces.
    """
    if holes is None:
        holes = []

    outer_loop = _prepare_loop(outer, want_ccw=True)
    if len(outer_loop) < 3:
        return []

    point_map: List[ApproxPoint] = []
    ring_ends: List[int] = []

    def _append(loop: Sequence[ApproxPoint]) -> None:
        point_map.extend(loop)
        ring_ends.append(len(point_map))

    _append(outer_loop)
    for hole in holes:
        loop = _prepare_loop(hole, want_ccw=False)
        if len(loop) < 3:
            continue
        _append(loop)

    vertices = np.asarray([p.local_form for p in point_map], dtype=np.float64)
    ring_array = np.asarray(ring_ends, dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_array)
    return [(point_map[indices[i]], point_map[indices[i + 1]], point_map[indices[i + 2]])
            for i in range(0, len(indices), 3)]


def _prepare_loop(points: Sequence[ApproxPoint], *, want_ccw: bool) -> List[ApproxPoint]:
    loop: List[ApproxPoint] = []
    for pt in points:
        if loop and _near(loop[-1].local_form, pt.local_form):
            continue
        loop.append(pt)
    if loop and _near(loop[0].local_form, loop[-1].local_form):
        loop.pop()
    if len(loop) < 3:
        return loop
    area = geom.signed_area([p.local_form for p in loop])
    if want_ccw and area < 0:
        loop.reverse()
    elif not want_ccw and area > 0:
        loop.reverse()
    return loop


def _near(p1, p2) -> bool:
    return abs(p1[0] - p2[0]) <= geom.epsilon and abs(p1[1] - p2[1]) <= geom.epsilon


def _is_strip(approx: FaceApprox) -> bool:
    surface = approx.surface
    return isinstance(surface, SweptCurve) and isinstance(surface.curve, Circle)


def _strip_rows(approx: FaceApprox):
    """Bottom and top rows of a swept circle face, and whether they close."""
    if approx.interiors:
        rows = [sorted(cycle.points, key=lambda p: p.source[1])
                for cycle in (approx.exterior, approx.interiors[0])]
        return rows, True
    # a swept arc: bottom row at t = 0, top row at t = 1
    bottom = sorted((p for p in approx.exterior.points if p.local_form[1] < 0.5),
                    key=lambda p: p.local_form[0])
    top = sorted((p for p in approx.exterior.points if p.local_form[1] >= 0.5),
                 key=lambda p: p.local_form[0])
    return [bottom, top], False


def _triangulate_strip(approx: FaceApprox):
    """Strip of triangles between the two boundary rows of a swept circle."""
    (bottom, top), closed = _strip_rows(approx)
    if len(bottom) != len(top):
        raise DegenerateGeometryError('strip boundaries were approximated differently',
                                      details={'face': approx.face,
                                               'counts': (len(bottom), len(top))})
    n = len(bottom)
    triangles = []
    for i in range(n if closed else n - 1):
        a0, a1 = bottom[i], bottom[(i + 1) % n]
        b0, b1 = top[i], top[(i + 1) % n]
        triangles.append((a0, a1, b1))
        triangles.append((a0, b1, b0))
    return triangles


def _oriented(points, surface) -> Triangle | None:
    try:
        triangle = Triangle(*(p.global_form for p in points))
    except DegenerateGeometryError:
        logger.debug('skipping degenerate triangle %r', [p.global_form for p in points])
        return None
    expected = surface.normal_at(points[0].local_form)
    if geom.dot(triangle.normal(), expected) < 0:
        triangle = triangle.reverse()
    return triangle


def triangulate_face(objects, handle, tolerance, cache: ApproxCache | None = None) -> List[Triangle]:
    """Approximate a face and return its triangles in model space."""
    approx = approx_face(objects, handle, tolerance, cache)
    if _is_strip(approx):
        pieces = _triangulate_strip(approx)
    else:
        pieces = triangulate_polygon(approx.exterior.points,
                                     [c.points for c in approx.interiors])
    triangles = []
    for points in pieces:
        triangle = _oriented(points, approx.surface)
        if triangle is not None:
            triangles.append(triangle)
    return triangles


def triangulate_shell(objects, handle, tolerance, cache: ApproxCache | None = None,
                      mesh: Mesh | None = None) -> Mesh:
    """Triangulate every face of a shell into one mesh.

    All faces share one approximation cache, so the triangles of
    adjacent faces meet at identical vertices.
    """
    tolerance = Tolerance.of(tolerance)
    if cache is None:
        cache = ApproxCache()
    if mesh is None:
        mesh = Mesh()
    for face in objects.get(handle, 'shell').faces:
        color = objects.get(face, 'face').color
        for triangle in triangulate_face(objects, face, tolerance, cache):
            mesh.push_triangle(triangle, color)
    logger.debug('triangulated shell %r into %d triangles', handle, len(mesh))
    return mesh


__all__ = ['triangulate_polygon', 'triangulate_face', 'triangulate_shell']
