"""Approximation of global and local curves.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass
from typing import Tuple

from brepcore.approx.cache import ApproxCache
from brepcore.approx.path import RangeOnPath, approx_path
from brepcore.approx.point import ApproxPoint
from brepcore.approx.tolerance import Tolerance


@dataclass(frozen=True)
class GlobalPathApprox:
    """Points of a global curve; ``local_form`` is the 1-tuple parameter."""

    points: Tuple[ApproxPoint, ...]

    def reverse(self):
        return GlobalPathApprox(tuple(reversed(self.points)))

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


@dataclass(frozen=True)
class CurveApprox:
    """Points of a local curve; ``local_form`` is in surface coordinates."""

    points: Tuple[ApproxPoint, ...]

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


def _as_range(range_):
    if isinstance(range_, RangeOnPath):
        return range_
    start, end = range_
    return RangeOnPath(start, end)


def approx_global_curve(objects, handle, range_, tolerance, cache, sampler=approx_path):
    """Approximate a global curve over ``range_``, going through ``cache``.

    The cache is keyed by the ascending form of the range.  A request for
    the reversed range gets the cached points in reverse order.
    ``sampler`` is the function producing the points on a cache miss.
    """
    tolerance = Tolerance.of(tolerance)
    ascending, reversed_ = _as_range(range_).normalize()

    def compute():
        path = objects.get(handle, 'global_curve').path
        return GlobalPathApprox(tuple(
            ApproxPoint((t,), point) for t, point in sampler(path, ascending, tolerance)))

    approx = cache.get_or_insert(ApproxCache.key(handle, ascending, tolerance), compute)
    return approx.reverse() if reversed_ else approx


def approx_curve(objects, handle, range_, tolerance, cache, sampler=approx_path):
    """Approximate a local curve over ``range_``.

    The points come from the cached global approximation; their local
    form is recomputed from the local curve at the same parameter.
    """
    curve = objects.get(handle, 'curve')
    global_approx = approx_global_curve(objects, curve.global_curve, range_, tolerance,
                                        cache, sampler)
    points = []
    for point in global_approx:
        t = point.local_form[0]
        points.append(ApproxPoint(curve.path.point_from_curve_coords(t),
                                  point.global_form, source=(handle, t)))
    return CurveApprox(tuple(points))


__all__ = ['GlobalPathApprox', 'CurveApprox', 'approx_global_curve', 'approx_curve']
