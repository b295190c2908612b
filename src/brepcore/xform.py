## rigid transformations of model-space carriers in brepcore
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

from math import cos, sin, radians

from brepcore import geom
from brepcore.errors import DegenerateGeometryError

## A matrix is represented as a list of four rows of four numbers
## acting on homogeneous column vectors.  Points get w=1 and are
## affected by translation, vectors get w=0 and are not.  Only rigid
## transformations (rotations and translations) are built here, which
## is what carriers need: a rigid transform maps lines to lines,
## circles to circles and planes to planes.


class Matrix:
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    def __init__(self, a=None):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]

        if isinstance(a, Matrix):
            self.m = [list(row) for row in a.m]
        elif isinstance(a, (tuple, list)):
            if len(a) != 4 or any(len(row) != 4 for row in a):
                raise ValueError('matrix initialization requires four rows of four: {}'.format(a))
            for i in range(4):
                for j in range(4):
                    x = a[i][j]
                    if isinstance(x, bool) or not isinstance(x, (int, float)):
                        raise ValueError('bad element in matrix initialization: {}'.format(x))
                    self.m[i][j] = float(x)
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(*self.m)

    def __eq__(self, other):
        return isinstance(other, Matrix) and self.m == other.m

    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def getrow(self, i):
        return list(self.m[i])

    def getcol(self, j):
        return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]

    # matrix multiply.  ``self.mul(x)`` applies ``x`` first, then
    # ``self``.
    def mul(self, x):
        if not isinstance(x, Matrix):
            raise ValueError('bad thing passed to mul(): {}'.format(x))
        result = Matrix()
        for i in range(4):
            for j in range(4):
                result.m[i][j] = sum(self.m[i][k] * x.m[k][j] for k in range(4))
        return result

    def _apply(self, x, w):
        if len(x) != 3:
            raise ValueError('transforms act on 3D coordinates, got {}'.format(x))
        v = (x[0], x[1], x[2], w)
        return tuple(sum(self.m[i][k] * v[k] for k in range(4)) for i in range(3))

    def transform_point(self, p):
        return self._apply(p, 1.0)

    def transform_vector(self, v):
        return self._apply(v, 0.0)

    def inverse(self):
        """Inverse of a rigid transformation: transpose the rotation
        block and counter-rotate the translation."""
        rot = [[self.m[j][i] for j in range(3)] for i in range(3)]
        t = (self.m[0][3], self.m[1][3], self.m[2][3])
        ti = [-sum(rot[i][k] * t[k] for k in range(3)) for i in range(3)]
        return Matrix([rot[0] + [ti[0]],
                       rot[1] + [ti[1]],
                       rot[2] + [ti[2]],
                       [0, 0, 0, 1]])

    def is_identity(self, eps=geom.epsilon):
        ident = Matrix()
        return all(geom.close(self.m[i][j], ident.m[i][j], eps)
                   for i in range(4) for j in range(4))


# return the generalized 4x4 arbitrary axis rotation matrix, angle in
# degrees
def Rotation(axis, angle, inverse=False):
    m = geom.mag(axis)
    if m < geom.epsilon:
        raise DegenerateGeometryError('zero-length rotation axis not allowed',
                                      details={'axis': tuple(axis)})
    ux, uy, uz = geom.scale(axis, 1.0 / m)

    if inverse:
        angle *= -1.0
    rad = radians(angle % 360.0)

    cang = cos(rad)
    cmin = 1.0 - cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang, 0],
         [uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
         [uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin, 0],
         [0, 0, 0, 1]]

    return Matrix(R)


def Translation(delta, inverse=False):
    if inverse:
        delta = geom.neg(delta)
    dx, dy, dz = delta
    T = [[1, 0, 0, dx],
         [0, 1, 0, dy],
         [0, 0, 1, dz],
         [0, 0, 0, 1]]
    return Matrix(T)


__all__ = ['Matrix', 'Rotation', 'Translation']
