## foundational vector operations for brepcore
## Copyright (c) 2025 brepcore contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""foundational vector operations for **brepcore**

Points and vectors are plain tuples of floats.  Their length is the
dimension of the space they live in: 1 for curve coordinates, 2 for
surface coordinates and 3 for model coordinates.  Unlike a homogeneous
``[x, y, z, w]`` representation, the dimension is significant here,
since the same physical point is routinely expressed in all three
coordinate spaces at once.

constants
=========

``epsilon`` is the incidence epsilon used when deciding whether a point
lies on a curve or surface.  ``pi2`` is 2*pi.  Redefine these at your
peril.
"""

from math import sqrt, pi
from typing import Sequence, Tuple

from brepcore.errors import DegenerateGeometryError

## constants
epsilon = 1e-9
pi2 = 2.0 * pi

Vec = Tuple[float, ...]
Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


## operations on scalars
## -----------------------

def close(a, b, eps=epsilon):
    """ are two scalars the same within ``eps``"""
    return abs(a - b) <= eps


## constructors
## ------------

def vec(*coords) -> Vec:
    """Make a float tuple from numbers or from a single sequence.

    >>> vec(1, 2)
    (1.0, 2.0)
    >>> vec([1, 2, 3])
    (1.0, 2.0, 3.0)
    """
    if len(coords) == 1 and isinstance(coords[0], (tuple, list)):
        coords = coords[0]
    if not 1 <= len(coords) <= 3:
        raise ValueError('vectors must have one to three components, got {}'.format(len(coords)))
    return tuple(float(c) for c in coords)


def zero(dim: int) -> Vec:
    return (0.0,) * dim


## R^n -> R^n functions
## --------------------

def add(a: Sequence[float], b: Sequence[float]) -> Vec:
    """ `a + b`"""
    _same_dim(a, b)
    return tuple(x + y for x, y in zip(a, b))


def sub(a: Sequence[float], b: Sequence[float]) -> Vec:
    """ `a - b`"""
    _same_dim(a, b)
    return tuple(x - y for x, y in zip(a, b))


def scale(a: Sequence[float], c: float) -> Vec:
    """ vector ``a`` times scalar ``c``"""
    return tuple(x * c for x in a)


def lerp(a: Sequence[float], b: Sequence[float], t: float) -> Vec:
    """ linear interpolation, ``a`` at ``t=0`` and ``b`` at ``t=1``"""
    return add(a, scale(sub(b, a), t))


def neg(a: Sequence[float]) -> Vec:
    return tuple(-x for x in a)


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """ 3 vector ``a`` cross ``b``"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def perp(a: Sequence[float]) -> Vec2:
    """ 2 vector rotated by 90 degrees counter-clockwise"""
    return (-a[1], a[0])


## R^n -> R functions
## ------------------

def dot(a: Sequence[float], b: Sequence[float]) -> float:
    _same_dim(a, b)
    return sum(x * y for x, y in zip(a, b))


def mag(a: Sequence[float]) -> float:
    """ magnitude of vector ``a``"""
    return sqrt(sum(x * x for x in a))


def dist(a: Sequence[float], b: Sequence[float]) -> float:
    """ euclidean distance between points ``a`` and ``b``"""
    return mag(sub(a, b))


def cross2(a: Sequence[float], b: Sequence[float]) -> float:
    """ z component of the cross product of two 2 vectors"""
    return a[0] * b[1] - a[1] * b[0]


def unit(a: Sequence[float]) -> Vec:
    """Return ``a`` scaled to unit length.

    Raises ``DegenerateGeometryError`` for a zero-length vector.
    """
    m = mag(a)
    if m <= epsilon:
        raise DegenerateGeometryError('cannot normalize a zero-length vector',
                                      details={'vector': tuple(a)})
    return scale(a, 1.0 / m)


def signed_area(points: Sequence[Sequence[float]]) -> float:
    """ signed area of a closed 2D polygon, positive if counter-clockwise"""
    total = 0.0
    for i, p in enumerate(points):
        q = points[(i + 1) % len(points)]
        total += p[0] * q[1] - q[0] * p[1]
    return total / 2.0


## R^n -> bool functions
## ---------------------

def vclose(a: Sequence[float], b: Sequence[float], eps=epsilon) -> bool:
    """ are two vectors the same within ``eps``"""
    return len(a) == len(b) and dist(a, b) <= eps


def parallel(a: Sequence[float], b: Sequence[float], eps=epsilon) -> bool:
    """ do ``a`` and ``b`` point along the same line"""
    if len(a) == 2:
        return abs(cross2(a, b)) <= eps * mag(a) * mag(b)
    return mag(cross(a, b)) <= eps * mag(a) * mag(b)


def _same_dim(a, b):
    if len(a) != len(b):
        raise ValueError('dimension mismatch: {} vs {}'.format(len(a), len(b)))


__all__ = [
    'epsilon',
    'pi2',
    'Vec',
    'Vec2',
    'Vec3',
    'close',
    'vec',
    'zero',
    'add',
    'sub',
    'scale',
    'lerp',
    'neg',
    'cross',
    'perp',
    'dot',
    'mag',
    'dist',
    'cross2',
    'signed_area',
    'unit',
    'vclose',
    'parallel',
]
