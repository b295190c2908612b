"""Curve carriers for brepcore.

Two curve types are supported, both as immutable values:

- Line: ``p(t) = origin + t * direction``
- Circle: ``p(t) = center + a * cos(t) + b * sin(t)``

Curves can live in 2D (embedded in a surface, coordinates are surface
coordinates) or in 3D (model space).  The set of curve types is closed;
every operation handles both cases explicitly and raises ``TypeError``
for anything else.

Transforming or reversing a curve returns a new curve value.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass
from math import atan2, cos, sin
from typing import Union

from brepcore import geom
from brepcore.errors import DegenerateGeometryError


def _coerce(value, name):
    try:
        return geom.vec(value)
    except (TypeError, ValueError) as exc:
        raise ValueError('{} must be a 1 to 3 component vector, got {!r}'.format(name, value)) from exc


# -----------------------------------------------------------------------------
# Line
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Line:
    """An infinite line; parameter 0 at ``origin``, 1 at ``origin + direction``."""

    origin: geom.Vec
    direction: geom.Vec

    def __post_init__(self):
        origin = _coerce(self.origin, 'origin')
        direction = _coerce(self.direction, 'direction')
        if len(origin) != len(direction):
            raise ValueError('line origin and direction differ in dimension')
        if geom.mag(direction) <= geom.epsilon:
            raise DegenerateGeometryError('line direction must not be zero',
                                          details={'direction': direction})
        object.__setattr__(self, 'origin', origin)
        object.__setattr__(self, 'direction', direction)

    @classmethod
    def from_points(cls, a, b):
        """Line through ``a`` (parameter 0) and ``b`` (parameter 1)."""
        a = geom.vec(a)
        b = geom.vec(b)
        if geom.vclose(a, b):
            raise DegenerateGeometryError('cannot build a line from coincident points',
                                          details={'points': (a, b)})
        return cls(a, geom.sub(b, a))

    @property
    def dim(self):
        return len(self.origin)

    @property
    def is_closed(self):
        return False

    def point_from_curve_coords(self, t):
        return geom.add(self.origin, geom.scale(self.direction, t))

    def vector_from_curve_coords(self, dt):
        return geom.scale(self.direction, dt)

    def tangent_at(self, t):
        return self.direction

    def point_to_curve_coords(self, p):
        """Parameter of the orthogonal projection of ``p`` onto the line."""
        d = self.direction
        return geom.dot(geom.sub(geom.vec(p), self.origin), d) / geom.dot(d, d)

    def transform(self, xform):
        _require_3d(self)
        return Line(xform.transform_point(self.origin),
                    xform.transform_vector(self.direction))

    def translate(self, delta):
        return Line(geom.add(self.origin, delta), self.direction)

    def reverse(self):
        """Same line, parameter negated: ``reverse()(-t) == self(t)``."""
        return Line(self.origin, geom.neg(self.direction))

    def close(self, other, eps=geom.epsilon):
        return (isinstance(other, Line)
                and geom.vclose(self.origin, other.origin, eps)
                and geom.vclose(self.direction, other.direction, eps))


# -----------------------------------------------------------------------------
# Circle
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Circle:
    """A full circle; ``a`` is the radius vector at parameter 0 and ``b``
    the radius vector at parameter pi/2.  Both must be orthogonal and of
    equal length."""

    center: geom.Vec
    a: geom.Vec
    b: geom.Vec

    def __post_init__(self):
        center = _coerce(self.center, 'center')
        a = _coerce(self.a, 'a')
        b = _coerce(self.b, 'b')
        if not len(center) == len(a) == len(b) or len(center) < 2:
            raise ValueError('circle center and radius vectors must be 2D or 3D and agree in dimension')
        ra = geom.mag(a)
        rb = geom.mag(b)
        if ra <= geom.epsilon or rb <= geom.epsilon:
            raise DegenerateGeometryError('circle radius must be positive',
                                          details={'a': a, 'b': b})
        rel = geom.epsilon * max(ra, 1.0)
        if abs(ra - rb) > rel or abs(geom.dot(a, b)) > rel * ra:
            raise DegenerateGeometryError('circle radius vectors must be orthogonal and of equal length',
                                          details={'a': a, 'b': b})
        object.__setattr__(self, 'center', center)
        object.__setattr__(self, 'a', a)
        object.__setattr__(self, 'b', b)

    @classmethod
    def from_center_and_radius(cls, center, radius):
        """2D circle, counter-clockwise, starting on the +x side."""
        if radius <= 0:
            raise DegenerateGeometryError('circle radius must be positive',
                                          details={'radius': radius})
        return cls(geom.vec(center), (float(radius), 0.0), (0.0, float(radius)))

    @property
    def dim(self):
        return len(self.center)

    @property
    def radius(self):
        return geom.mag(self.a)

    @property
    def is_closed(self):
        return True

    @property
    def normal(self):
        """Unit axis of a 3D circle; counter-clockwise when viewed from its tip."""
        _require_3d(self)
        return geom.unit(geom.cross(self.a, self.b))

    def point_from_curve_coords(self, t):
        return geom.add(self.center,
                        geom.add(geom.scale(self.a, cos(t)),
                                 geom.scale(self.b, sin(t))))

    def tangent_at(self, t):
        return geom.add(geom.scale(self.a, -sin(t)), geom.scale(self.b, cos(t)))

    def point_to_curve_coords(self, p):
        """Angle of ``p`` around the center, in ``[0, 2*pi)``."""
        v = geom.sub(geom.vec(p), self.center)
        t = atan2(geom.dot(v, self.b), geom.dot(v, self.a))
        if t < 0:
            t += geom.pi2
        return t

    def transform(self, xform):
        _require_3d(self)
        return Circle(xform.transform_point(self.center),
                      xform.transform_vector(self.a),
                      xform.transform_vector(self.b))

    def translate(self, delta):
        return Circle(geom.add(self.center, delta), self.a, self.b)

    def reverse(self):
        return Circle(self.center, self.a, geom.neg(self.b))

    def close(self, other, eps=geom.epsilon):
        return (isinstance(other, Circle)
                and geom.vclose(self.center, other.center, eps)
                and geom.vclose(self.a, other.a, eps)
                and geom.vclose(self.b, other.b, eps))


Curve = Union[Line, Circle]


def is_curve(obj):
    return isinstance(obj, (Line, Circle))


def _require_3d(curve):
    if curve.dim != 3:
        raise ValueError('only 3D curves can be transformed, got a {}D {}'.format(
            curve.dim, type(curve).__name__))


__all__ = ['Line', 'Circle', 'Curve', 'is_curve']
