"""Sampling of curve paths.

``approx_path`` is the one place where curves are turned into points.
Everything above it (the curve, edge and face approximations) only
arranges, caches and reuses its output.

Lines are straight, so they need no points between their boundaries.
Circles are sampled on a fixed grid of parameters that depends only on
the radius and the tolerance, never on the range being approximated:
two ranges on the same circle produce the same points where they
overlap.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass
from math import acos, ceil, floor, isfinite, pi

from brepcore import geom
from brepcore.approx.tolerance import Tolerance
from brepcore.curves import Circle, Line
from brepcore.errors import DegenerateGeometryError

# fraction of a grid step below which a sample counts as on the boundary
_BOUNDARY_FRACTION = 1e-9


@dataclass(frozen=True)
class RangeOnPath:
    """Parameter range ``start -> end`` on a curve.

    A range with ``start > end`` is traversed against the curve
    parameter.  Zero-length ranges are rejected.
    """

    start: float
    end: float

    def __post_init__(self):
        start, end = float(self.start), float(self.end)
        if not (isfinite(start) and isfinite(end)):
            raise ValueError('range boundaries must be finite, got {!r}'.format((start, end)))
        if start == end:
            raise DegenerateGeometryError('range on path has zero length',
                                          details={'start': start, 'end': end})
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)

    @property
    def is_reversed(self):
        return self.start > self.end

    @property
    def length(self):
        return abs(self.end - self.start)

    def reverse(self):
        return RangeOnPath(self.end, self.start)

    def normalize(self):
        """Return ``(ascending_range, was_reversed)``."""
        if self.is_reversed:
            return self.reverse(), True
        return self, False


def number_of_vertices_for_circle(tolerance, radius):
    """Points per full turn keeping every chord within ``tolerance`` of the arc.

    The sagitta of a chord spanning angle ``theta`` is
    ``r * (1 - cos(theta / 2))``.
    """
    tolerance = float(Tolerance.of(tolerance))
    if tolerance >= radius:
        return 3
    return max(int(ceil(pi / acos(1.0 - tolerance / radius))), 3)


def _grid_parameters(increment, start, end):
    margin = increment * _BOUNDARY_FRACTION
    first = int(floor(start / increment))
    last = int(ceil(end / increment))
    params = []
    for k in range(first, last + 1):
        t = k * increment
        if t - start > margin and end - t > margin:
            params.append(t)
    return params


def approx_path(path, range_, tolerance):
    """Sample ``path`` strictly inside ``range_``.

    Returns a list of ``(t, point)`` pairs ordered in the direction of
    the range.  The boundary points themselves are never included.
    """
    tolerance = Tolerance.of(tolerance)
    if isinstance(path, Line):
        return []
    if isinstance(path, Circle):
        low, reversed_ = range_.normalize()
        n = number_of_vertices_for_circle(tolerance, path.radius)
        params = _grid_parameters(geom.pi2 / n, low.start, low.end)
        if reversed_:
            params.reverse()
        return [(t, path.point_from_curve_coords(t)) for t in params]
    raise TypeError('not a curve: {!r}'.format(path))


__all__ = ['RangeOnPath', 'number_of_vertices_for_circle', 'approx_path']
