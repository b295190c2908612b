"""Tests for line and circle carriers."""

import math

import pytest

from brepcore import geom
from brepcore.curves import Circle, Line, is_curve
from brepcore.errors import DegenerateGeometryError
from brepcore.xform import Rotation, Translation


class TestLine:
    """Test line parametrization and operations."""

    def test_from_points(self):
        line = Line.from_points((1, 2), (3, 6))
        assert line.origin == (1.0, 2.0)
        assert line.direction == (2.0, 4.0)
        assert line.point_from_curve_coords(0.5) == (2.0, 4.0)
        assert line.dim == 2
        assert not line.is_closed

    def test_coincident_points_rejected(self):
        with pytest.raises(DegenerateGeometryError):
            Line.from_points((1, 1, 1), (1, 1, 1))

    def test_zero_direction_rejected(self):
        with pytest.raises(DegenerateGeometryError):
            Line((0, 0), (0, 0))

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError):
            Line((0, 0), (1, 0, 0))

    def test_point_to_curve_coords(self):
        line = Line((0, 0, 0), (2, 0, 0))
        assert line.point_to_curve_coords((1, 5, 0)) == 0.5
        assert line.vector_from_curve_coords(2) == (4.0, 0.0, 0.0)

    def test_reverse(self):
        line = Line((1, 0, 0), (1, 1, 0))
        rev = line.reverse()
        for t in (-1.0, 0.0, 0.3, 2.0):
            assert geom.vclose(rev.point_from_curve_coords(-t), line.point_from_curve_coords(t))

    def test_transform(self):
        line = Line((1, 0, 0), (0, 1, 0))
        moved = line.transform(Translation((0, 0, 5)).mul(Rotation((0, 0, 1), 90)))
        assert moved.close(Line((0, 1, 5), (-1, 0, 0)))

    def test_transform_requires_3d(self):
        with pytest.raises(ValueError):
            Line((0, 0), (1, 0)).transform(Translation((1, 0, 0)))


class TestCircle:
    """Test circle parametrization and operations."""

    def test_parametrization(self):
        circle = Circle((1, 1, 0), (2, 0, 0), (0, 2, 0))
        assert geom.vclose(circle.point_from_curve_coords(0), (3, 1, 0))
        assert geom.vclose(circle.point_from_curve_coords(math.pi / 2), (1, 3, 0))
        assert geom.vclose(circle.point_from_curve_coords(math.pi), (-1, 1, 0))
        assert circle.radius == 2.0
        assert circle.is_closed
        assert geom.vclose(circle.normal, (0, 0, 1))

    def test_from_center_and_radius(self):
        circle = Circle.from_center_and_radius((0, 0), 1.5)
        assert circle.a == (1.5, 0.0)
        assert circle.b == (0.0, 1.5)
        with pytest.raises(DegenerateGeometryError):
            Circle.from_center_and_radius((0, 0), 0)

    def test_invalid_radius_vectors(self):
        with pytest.raises(DegenerateGeometryError):
            Circle((0, 0), (1, 0), (0, 2))
        with pytest.raises(DegenerateGeometryError):
            Circle((0, 0), (1, 0), (1, 1))

    def test_point_to_curve_coords_range(self):
        circle = Circle.from_center_and_radius((0, 0), 1)
        assert circle.point_to_curve_coords((1, 0)) == 0.0
        assert math.isclose(circle.point_to_curve_coords((0, 1)), math.pi / 2)
        assert math.isclose(circle.point_to_curve_coords((0, -1)), 3 * math.pi / 2)

    def test_reverse(self):
        circle = Circle((0, 0, 0), (1, 0, 0), (0, 1, 0))
        rev = circle.reverse()
        for t in (0.0, 0.5, 2.0, 4.0):
            assert geom.vclose(rev.point_from_curve_coords(-t), circle.point_from_curve_coords(t))

    def test_transform(self):
        circle = Circle((1, 0, 0), (1, 0, 0), (0, 1, 0))
        moved = circle.transform(Rotation((1, 0, 0), 90))
        assert geom.vclose(moved.center, (1, 0, 0))
        assert geom.vclose(moved.normal, (0, -1, 0))
        assert math.isclose(moved.radius, 1.0)


def test_is_curve():
    assert is_curve(Line((0, 0), (1, 0)))
    assert is_curve(Circle.from_center_and_radius((0, 0), 1))
    assert not is_curve((0, 0))
