import math

import pytest

from brepcore import geom
from brepcore.errors import DegenerateGeometryError

## unit tests for brepcore geom.py


class TestVectors:
    """vector construction and arithmetic"""

    def test_vec(self):
        assert geom.vec(1, 2) == (1.0, 2.0)
        assert geom.vec([1, 2, 3]) == (1.0, 2.0, 3.0)
        assert geom.vec((4,)) == (4.0,)
        with pytest.raises(ValueError):
            geom.vec(1, 2, 3, 4)
        with pytest.raises(ValueError):
            geom.vec()

    def test_arithmetic(self):
        a = (1.0, 2.0, 3.0)
        b = (4.0, 5.0, 6.0)
        assert geom.add(a, b) == (5.0, 7.0, 9.0)
        assert geom.sub(b, a) == (3.0, 3.0, 3.0)
        assert geom.scale(a, 2) == (2.0, 4.0, 6.0)
        assert geom.neg(a) == (-1.0, -2.0, -3.0)
        assert geom.dot(a, b) == 32.0
        assert geom.lerp(a, b, 0.5) == (2.5, 3.5, 4.5)
        with pytest.raises(ValueError):
            geom.add((1.0, 2.0), a)

    def test_cross(self):
        assert geom.cross((1, 0, 0), (0, 1, 0)) == (0, 0, 1)
        assert geom.cross((0, 1, 0), (1, 0, 0)) == (0, 0, -1)
        assert geom.cross2((1, 0), (0, 1)) == 1
        assert geom.perp((1, 0)) == (0, 1)

    def test_magnitude(self):
        assert geom.mag((3, 4)) == 5.0
        assert geom.dist((1, 1, 1), (1, 1, 3)) == 2.0
        u = geom.unit((0, 3, 4))
        assert math.isclose(u[1], 0.6) and math.isclose(u[2], 0.8)

    def test_unit_of_zero_vector(self):
        with pytest.raises(DegenerateGeometryError):
            geom.unit((0.0, 0.0, 0.0))


class TestPredicates:
    """closeness and parallelism"""

    def test_close(self):
        assert geom.close(1.0, 1.0 + 1e-12)
        assert not geom.close(1.0, 1.0 + 1e-6)
        assert geom.vclose((1, 2, 3), (1, 2, 3 + 1e-12))
        assert not geom.vclose((1, 2), (1, 2, 0))

    def test_parallel(self):
        assert geom.parallel((1, 0, 0), (-3, 0, 0))
        assert not geom.parallel((1, 0, 0), (1, 1, 0))
        assert geom.parallel((1, 2), (2, 4))

    def test_signed_area(self):
        square = [(0, 0), (1, 0), (1, 1), (0, 1)]
        assert geom.signed_area(square) == 1.0
        assert geom.signed_area(list(reversed(square))) == -1.0
