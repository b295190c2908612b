"""Surface carriers for brepcore.

Surface types:
- Plane: ``p(s, t) = origin + s * u + t * v``
- SweptCurve: ``p(s, t) = curve(s) + t * path``, the surface generated
  by translating a 3D curve along a vector.  This is the carrier of the
  side walls produced by sweeping a face.

Each surface converts between model coordinates (3D) and surface
coordinates (2D).  Converting a model point fails with
``IncidenceError`` when the point is not on the surface.  The inverse
direction is total.

Curves living on a surface are 2D curves in surface coordinates.
``project_curve`` derives such a local curve from a 3D curve, keeping
the curve parameter intact: the local curve at parameter ``t``, mapped
through the surface, is the 3D curve at ``t``.  Everything that shares
points between faces relies on this.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass
from typing import Union

from brepcore import geom
from brepcore.curves import Circle, Line
from brepcore.errors import (DegenerateGeometryError, IncidenceError,
                             UnsupportedOperationError)


def _solve_2x2(u, v, d):
    """Coefficients ``(s, t)`` minimising ``|s*u + t*v - d|``."""
    uu = geom.dot(u, u)
    uv = geom.dot(u, v)
    vv = geom.dot(v, v)
    du = geom.dot(d, u)
    dv = geom.dot(d, v)
    det = uu * vv - uv * uv
    return ((du * vv - dv * uv) / det, (dv * uu - du * uv) / det)


# -----------------------------------------------------------------------------
# Plane
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Plane:
    """A plane spanned by two non-parallel vectors.

    ``u`` and ``v`` need not be unit length or orthogonal, though circles
    can only be placed on planes where they are.
    """

    origin: geom.Vec3
    u: geom.Vec3
    v: geom.Vec3

    def __post_init__(self):
        origin, u, v = geom.vec(self.origin), geom.vec(self.u), geom.vec(self.v)
        if not len(origin) == len(u) == len(v) == 3:
            raise ValueError('plane origin, u and v must be 3D')
        if geom.mag(u) <= geom.epsilon or geom.mag(v) <= geom.epsilon or geom.parallel(u, v):
            raise DegenerateGeometryError('plane directions must be non-zero and not parallel',
                                          details={'u': u, 'v': v})
        object.__setattr__(self, 'origin', origin)
        object.__setattr__(self, 'u', u)
        object.__setattr__(self, 'v', v)

    @classmethod
    def x_y_plane(cls):
        return cls((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))

    @classmethod
    def from_points(cls, a, b, c):
        """Plane through three points, ``a`` at the origin.

        Raises ``DegenerateGeometryError`` if the points are collinear.
        """
        a, b, c = geom.vec(a), geom.vec(b), geom.vec(c)
        u = geom.sub(b, a)
        v = geom.sub(c, a)
        if geom.mag(u) <= geom.epsilon or geom.mag(v) <= geom.epsilon or geom.parallel(u, v):
            raise DegenerateGeometryError('plane points are coincident or collinear',
                                          details={'points': (a, b, c)})
        return cls(a, u, v)

    @property
    def normal(self):
        return geom.unit(geom.cross(self.u, self.v))

    def normal_at(self, point):
        return self.normal

    def distance(self, point):
        """Unsigned distance of a model point from the plane."""
        return abs(geom.dot(geom.sub(geom.vec(point), self.origin), self.normal))

    def point_model_to_surface(self, point):
        point = geom.vec(point)
        distance = self.distance(point)
        if distance > geom.epsilon:
            raise IncidenceError('point is not on the plane',
                                 details={'point': point, 'distance': distance})
        return _solve_2x2(self.u, self.v, geom.sub(point, self.origin))

    def point_surface_to_model(self, point):
        return geom.add(self.origin, self.vector_surface_to_model(point))

    def vector_surface_to_model(self, vector):
        s, t = vector
        return geom.add(geom.scale(self.u, s), geom.scale(self.v, t))

    def project_curve(self, curve):
        """2D local curve of a 3D curve lying in this plane."""
        if isinstance(curve, Line):
            origin = self.point_model_to_surface(curve.origin)
            tip = self.point_model_to_surface(curve.point_from_curve_coords(1.0))
            return Line(origin, geom.sub(tip, origin))
        if isinstance(curve, Circle):
            center = self.point_model_to_surface(curve.center)
            a = geom.sub(self.point_model_to_surface(geom.add(curve.center, curve.a)), center)
            b = geom.sub(self.point_model_to_surface(geom.add(curve.center, curve.b)), center)
            try:
                return Circle(center, a, b)
            except DegenerateGeometryError as exc:
                raise UnsupportedOperationError(
                    'circles can only be projected into planes with orthonormal directions',
                    details={'plane': self}) from exc
        raise TypeError('not a curve: {!r}'.format(curve))

    def transform(self, xform):
        return Plane(xform.transform_point(self.origin),
                     xform.transform_vector(self.u),
                     xform.transform_vector(self.v))

    def translate(self, delta):
        return Plane(geom.add(self.origin, delta), self.u, self.v)

    def reverse(self):
        """Same plane with the opposite normal; ``(s, t)`` becomes ``(s, -t)``."""
        return Plane(self.origin, self.u, geom.neg(self.v))

    def reverse_local_curve(self, curve):
        """Express a local curve of this plane on ``self.reverse()``."""
        return _mirror_local_curve(curve, (1.0, -1.0))

    def close(self, other, eps=geom.epsilon):
        return (isinstance(other, Plane)
                and geom.vclose(self.origin, other.origin, eps)
                and geom.vclose(self.u, other.u, eps)
                and geom.vclose(self.v, other.v, eps))


# -----------------------------------------------------------------------------
# SweptCurve
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SweptCurve:
    """Surface swept out by translating ``curve`` along ``path``.

    The first surface coordinate is the curve parameter, the second the
    multiple of ``path``.
    """

    curve: Union[Line, Circle]
    path: geom.Vec3

    def __post_init__(self):
        path = geom.vec(self.path)
        if not isinstance(self.curve, (Line, Circle)) or self.curve.dim != 3:
            raise ValueError('swept surfaces need a 3D line or circle, got {!r}'.format(self.curve))
        if len(path) != 3 or geom.mag(path) <= geom.epsilon:
            raise DegenerateGeometryError('sweep path must be a non-zero 3D vector',
                                          details={'path': path})
        if isinstance(self.curve, Line) and geom.parallel(self.curve.direction, path):
            raise DegenerateGeometryError('cannot sweep a line along itself',
                                          details={'path': path})
        object.__setattr__(self, 'path', path)

    def point_surface_to_model(self, point):
        s, t = point
        return geom.add(self.curve.point_from_curve_coords(s), geom.scale(self.path, t))

    def vector_surface_to_model(self, vector):
        if not isinstance(self.curve, Line):
            raise UnsupportedOperationError(
                'surface vectors are position dependent on a swept circle')
        s, t = vector
        return geom.add(geom.scale(self.curve.direction, s), geom.scale(self.path, t))

    def normal_at(self, point):
        return geom.unit(geom.cross(self.curve.tangent_at(point[0]), self.path))

    def point_model_to_surface(self, point):
        point = geom.vec(point)
        curve = self.curve
        if isinstance(curve, Line):
            d = geom.sub(point, curve.origin)
            s, t = _solve_2x2(curve.direction, self.path, d)
            residual = geom.dist(self.point_surface_to_model((s, t)), point)
            if residual > geom.epsilon:
                raise IncidenceError('point is not on the swept surface',
                                     details={'point': point, 'distance': residual})
            return (s, t)
        if not geom.parallel(curve.normal, self.path):
            raise UnsupportedOperationError(
                'points can only be located on circles swept along their axis',
                details={'path': self.path})
        t = geom.dot(geom.sub(point, curve.center), self.path) / geom.dot(self.path, self.path)
        q = geom.sub(point, geom.scale(self.path, t))
        s = curve.point_to_curve_coords(q)
        residual = geom.dist(curve.point_from_curve_coords(s), q)
        if residual > geom.epsilon:
            raise IncidenceError('point is not on the swept surface',
                                 details={'point': point, 'distance': residual})
        return (s, t)

    def project_curve(self, curve):
        """Local curve for a copy of the generator or a line along the path."""
        gen = self.curve
        if isinstance(curve, Line) and geom.parallel(curve.direction, self.path):
            origin = self.point_model_to_surface(curve.origin)
            ratio = geom.dot(curve.direction, self.path) / geom.dot(self.path, self.path)
            return Line(origin, (0.0, ratio))
        if isinstance(curve, Line) and isinstance(gen, Line):
            if geom.parallel(curve.direction, gen.direction):
                origin = self.point_model_to_surface(curve.origin)
                ratio = geom.dot(curve.direction, gen.direction) / geom.dot(gen.direction, gen.direction)
                return Line(origin, (ratio, 0.0))
        if isinstance(curve, Circle) and isinstance(gen, Circle):
            offset = geom.sub(curve.center, gen.center)
            along = geom.mag(offset) <= geom.epsilon or geom.parallel(offset, self.path)
            if along and geom.vclose(curve.a, gen.a):
                k = geom.dot(offset, self.path) / geom.dot(self.path, self.path)
                # a reversed copy runs against the generator's parameter
                if geom.vclose(curve.b, gen.b):
                    return Line((0.0, k), (1.0, 0.0))
                if geom.vclose(curve.b, geom.neg(gen.b)):
                    return Line((0.0, k), (-1.0, 0.0))
        raise UnsupportedOperationError(
            'cannot project a {} into a surface swept from a {}'.format(
                type(curve).__name__, type(gen).__name__),
            details={'curve': curve, 'surface': self})

    def transform(self, xform):
        return SweptCurve(self.curve.transform(xform), xform.transform_vector(self.path))

    def translate(self, delta):
        return SweptCurve(self.curve.translate(delta), self.path)

    def reverse(self):
        """Same surface with the opposite normal; ``(s, t)`` becomes ``(-s, t)``."""
        return SweptCurve(self.curve.reverse(), self.path)

    def reverse_local_curve(self, curve):
        return _mirror_local_curve(curve, (-1.0, 1.0))

    def close(self, other, eps=geom.epsilon):
        return (isinstance(other, SweptCurve)
                and self.curve.close(other.curve, eps)
                and geom.vclose(self.path, other.path, eps))


Surface = Union[Plane, SweptCurve]


def is_surface(obj):
    return isinstance(obj, (Plane, SweptCurve))


def _mirror_local_curve(curve, factors):
    fx, fy = factors

    def mirror(p):
        return (p[0] * fx, p[1] * fy)

    if isinstance(curve, Line):
        return Line(mirror(curve.origin), mirror(curve.direction))
    if isinstance(curve, Circle):
        return Circle(mirror(curve.center), mirror(curve.a), mirror(curve.b))
    raise TypeError('not a curve: {!r}'.format(curve))


__all__ = ['Plane', 'SweptCurve', 'Surface', 'is_surface']
