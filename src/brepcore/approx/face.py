"""Approximation of cycles, faces and shells.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging
from dataclasses import dataclass
from typing import Any, Tuple

from brepcore.approx.cache import ApproxCache
from brepcore.approx.edge import approx_half_edge
from brepcore.approx.path import approx_path
from brepcore.approx.point import ApproxPoint
from brepcore.approx.tolerance import Tolerance
from brepcore.objects import Color, Handle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleApprox:
    """Closed polygon approximating a cycle; the last point connects to the first."""

    points: Tuple[ApproxPoint, ...]

    def segments(self):
        """Consecutive point pairs, including the closing segment."""
        pts = self.points
        return [(pts[i], pts[(i + 1) % len(pts)]) for i in range(len(pts))]

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


@dataclass(frozen=True)
class FaceApprox:
    face: Handle
    surface: Any
    exterior: CycleApprox
    interiors: Tuple[CycleApprox, ...]
    color: Color

    def points(self):
        """Every point of every cycle, exterior first."""
        result = list(self.exterior.points)
        for interior in self.interiors:
            result.extend(interior.points)
        return result


def approx_cycle(objects, handle, tolerance, cache, sampler=approx_path):
    points = []
    for half_edge in objects.get(handle, 'cycle').half_edges:
        points.extend(approx_half_edge(objects, half_edge, tolerance, cache, sampler))
    return CycleApprox(tuple(points))


def approx_face(objects, handle, tolerance, cache=None, sampler=approx_path):
    """Approximate the boundary of a face.

    Pass the same ``cache`` for all faces of a shell so that shared edges
    are approximated identically.
    """
    tolerance = Tolerance.of(tolerance)
    if cache is None:
        cache = ApproxCache()
    face = objects.get(handle, 'face')
    exterior = approx_cycle(objects, face.exterior, tolerance, cache, sampler)
    interiors = tuple(approx_cycle(objects, cycle, tolerance, cache, sampler)
                      for cycle in face.interiors)
    return FaceApprox(handle, objects.get(face.surface, 'surface'), exterior, interiors,
                      face.color)


def approx_shell(objects, handle, tolerance, cache=None, sampler=approx_path):
    """Approximate every face of a shell through one shared cache."""
    tolerance = Tolerance.of(tolerance)
    if cache is None:
        cache = ApproxCache()
    faces = [approx_face(objects, face, tolerance, cache, sampler)
             for face in objects.get(handle, 'shell').faces]
    logger.debug('approximated %d faces (cache: %d hits, %d misses)',
                 len(faces), cache.hits, cache.misses)
    return faces


__all__ = ['CycleApprox', 'FaceApprox', 'approx_cycle', 'approx_face', 'approx_shell']
